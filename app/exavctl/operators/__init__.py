"""Exclusion operators for registering antivirus exclusions.

This module provides the abstract operator interface and the
Microsoft Defender implementation.
"""

from exavctl.operators.base import ExclusionOperator
from exavctl.operators.defender import DefenderOperator

__all__ = ["DefenderOperator", "ExclusionOperator"]
