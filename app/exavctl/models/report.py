"""Exclusion report model for JSON export.

This module defines the data structure for exporting a build
to JSON with proper metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from exavctl.models.context import ServerRoleFlags
from exavctl.models.exclusion import ExclusionKind, ExclusionLists


@dataclass(frozen=True, slots=True)
class ReportMetadata:
    """Metadata for an exclusion report.

    Attributes:
        timestamp: ISO format timestamp when the lists were built.
        hostname: Exchange server the lists were built for.
        exavctl_version: Version of exavctl that built the lists.
        roles: Tuple of role names present on the server (immutable).
    """

    timestamp: str
    hostname: str
    exavctl_version: str
    roles: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "exavctl_version": self.exavctl_version,
            "roles": list(self.roles),
        }


@dataclass(frozen=True, slots=True)
class ExclusionReport:
    """Complete exclusion report for export.

    Attributes:
        metadata: Report metadata including timestamp and hostname.
        lists: The built exclusion lists.
    """

    metadata: ReportMetadata
    lists: ExclusionLists

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"metadata": self.metadata.to_dict()}
        for kind in ExclusionKind:
            data[kind.value] = list(self.lists.get(kind))
        data["summary"] = self.lists.counts
        return data

    @classmethod
    def create(
        cls,
        lists: ExclusionLists,
        hostname: str,
        roles: ServerRoleFlags,
    ) -> ExclusionReport:
        """Create an ExclusionReport with auto-generated metadata.

        Args:
            lists: The built exclusion lists.
            hostname: Exchange server the lists were built for.
            roles: Role flags used for the build.

        Returns:
            ExclusionReport with populated metadata.
        """
        from exavctl import __version__

        metadata = ReportMetadata(
            timestamp=datetime.now(UTC).isoformat(),
            hostname=hostname,
            exavctl_version=__version__,
            roles=tuple(roles.names),
        )
        return cls(metadata=metadata, lists=lists)
