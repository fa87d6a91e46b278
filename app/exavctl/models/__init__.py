"""Data models for exavctl.

This module exports the core data structures used throughout the application.
"""

from exavctl.models.context import RunContext, ServerRoleFlags
from exavctl.models.exclusion import ExclusionKind, ExclusionLists, ExclusionResult
from exavctl.models.records import (
    FrontendTransportRecord,
    MailboxDatabaseRecord,
    MailboxServerRecord,
    MailboxTransportRecord,
    ProtocolLogRecord,
    TransportServiceRecord,
)
from exavctl.models.report import ExclusionReport, ReportMetadata

__all__ = [
    "ExclusionKind",
    "ExclusionLists",
    "ExclusionReport",
    "ExclusionResult",
    "FrontendTransportRecord",
    "MailboxDatabaseRecord",
    "MailboxServerRecord",
    "MailboxTransportRecord",
    "ProtocolLogRecord",
    "ReportMetadata",
    "RunContext",
    "ServerRoleFlags",
    "TransportServiceRecord",
]
