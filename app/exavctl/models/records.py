"""Service description records returned by the configuration provider.

Each record declares the path-like properties it harvests as explicit
dataclass fields. The ``ps`` metadata key holds the Exchange property
name; field declaration order is the order paths are emitted in.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, fields
from typing import Any


def _prop(name: str) -> Any:
    """Declare an optional path field backed by an Exchange property."""
    return field(default=None, metadata={"ps": name})


def _clean(value: object) -> str | None:
    """Normalise a raw property value, mapping null/blank to None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class PathRecord:
    """Mixin for records whose fields are all optional path strings."""

    __slots__ = ()

    @classmethod
    def property_names(cls) -> list[str]:
        """Return the Exchange property names in declaration order."""
        return [f.metadata["ps"] for f in fields(cls) if "ps" in f.metadata]  # type: ignore[arg-type]

    @classmethod
    def from_properties(cls, props: Mapping[str, object]) -> PathRecord:
        """Build a record from a property bag keyed by Exchange names.

        Unknown keys are ignored and missing keys become None.

        Args:
            props: Mapping of Exchange property name to raw value.

        Returns:
            Record instance of the calling class.
        """
        values: dict[str, str | None] = {}
        for f in fields(cls):  # type: ignore[arg-type]
            ps_name = f.metadata.get("ps")
            if ps_name is not None:
                values[f.name] = _clean(props.get(ps_name))
        return cls(**values)

    def paths(self) -> Iterator[str]:
        """Yield non-blank path values in field declaration order."""
        for f in fields(self):  # type: ignore[arg-type]
            if "ps" not in f.metadata:
                continue
            value = _clean(getattr(self, f.name))
            if value is not None:
                yield value


@dataclass(frozen=True, slots=True)
class MailboxServerRecord(PathRecord):
    """Log locations exposed by the mailbox server description."""

    data_path: str | None = _prop("DataPath")
    calendar_repair_log_path: str | None = _prop("CalendarRepairLogPath")
    log_path_for_managed_folders: str | None = _prop("LogPathForManagedFolders")
    migration_log_file_path: str | None = _prop("MigrationLogFilePath")
    transport_sync_log_file_path: str | None = _prop("TransportSyncLogFilePath")
    transport_sync_mailbox_health_log_file_path: str | None = _prop(
        "TransportSyncMailboxHealthLogFilePath"
    )


@dataclass(frozen=True, slots=True)
class TransportServiceRecord(PathRecord):
    """Log, queue, pickup and drop directories of the transport service."""

    connectivity_log_path: str | None = _prop("ConnectivityLogPath")
    message_tracking_log_path: str | None = _prop("MessageTrackingLogPath")
    irm_log_path: str | None = _prop("IrmLogPath")
    active_user_statistics_log_path: str | None = _prop("ActiveUserStatisticsLogPath")
    server_statistics_log_path: str | None = _prop("ServerStatisticsLogPath")
    receive_protocol_log_path: str | None = _prop("ReceiveProtocolLogPath")
    routing_table_log_path: str | None = _prop("RoutingTableLogPath")
    send_protocol_log_path: str | None = _prop("SendProtocolLogPath")
    queue_log_path: str | None = _prop("QueueLogPath")
    latency_log_path: str | None = _prop("LatencyLogPath")
    generated_message_log_path: str | None = _prop("GeneratedMessageLogPath")
    wlm_log_path: str | None = _prop("WlmLogPath")
    agent_log_path: str | None = _prop("AgentLogPath")
    flow_control_log_path: str | None = _prop("FlowControlLogPath")
    processing_scheduler_log_path: str | None = _prop("ProcessingSchedulerLogPath")
    resource_log_path: str | None = _prop("ResourceLogPath")
    dns_log_path: str | None = _prop("DnsLogPath")
    journal_log_path: str | None = _prop("JournalLogPath")
    transport_maintenance_log_path: str | None = _prop("TransportMaintenanceLogPath")
    pipeline_tracing_path: str | None = _prop("PipelineTracingPath")
    pickup_directory_path: str | None = _prop("PickupDirectoryPath")
    replay_directory_path: str | None = _prop("ReplayDirectoryPath")
    root_drop_directory_path: str | None = _prop("RootDropDirectoryPath")


@dataclass(frozen=True, slots=True)
class FrontendTransportRecord(PathRecord):
    """Log locations of the front-end transport service."""

    agent_log_path: str | None = _prop("AgentLogPath")
    attribution_log_path: str | None = _prop("AttributionLogPath")
    connectivity_log_path: str | None = _prop("ConnectivityLogPath")
    dns_log_path: str | None = _prop("DnsLogPath")
    receive_protocol_log_path: str | None = _prop("ReceiveProtocolLogPath")
    resource_log_path: str | None = _prop("ResourceLogPath")
    routing_table_log_path: str | None = _prop("RoutingTableLogPath")
    send_protocol_log_path: str | None = _prop("SendProtocolLogPath")


@dataclass(frozen=True, slots=True)
class MailboxTransportRecord(PathRecord):
    """Log locations of the mailbox transport (delivery/submission) service."""

    connectivity_log_path: str | None = _prop("ConnectivityLogPath")
    mailbox_delivery_agent_log_path: str | None = _prop("MailboxDeliveryAgentLogPath")
    mailbox_delivery_throttling_log_path: str | None = _prop("MailboxDeliveryThrottlingLogPath")
    mailbox_submission_agent_log_path: str | None = _prop("MailboxSubmissionAgentLogPath")
    pipeline_tracing_path: str | None = _prop("PipelineTracingPath")
    receive_protocol_log_path: str | None = _prop("ReceiveProtocolLogPath")
    routing_table_log_path: str | None = _prop("RoutingTableLogPath")
    send_protocol_log_path: str | None = _prop("SendProtocolLogPath")
    sync_delivery_log_path: str | None = _prop("SyncDeliveryLogPath")


@dataclass(frozen=True, slots=True)
class ProtocolLogRecord(PathRecord):
    """POP3 and IMAP4 protocol log locations."""

    pop_log_location: str | None = _prop("PopLogFileLocation")
    imap_log_location: str | None = _prop("ImapLogFileLocation")


@dataclass(frozen=True, slots=True)
class MailboxDatabaseRecord(PathRecord):
    """A mailbox database hosted on the server.

    Attributes:
        name: Database name, used for ordering.
        edb_file_path: Path of the database (.edb) file.
        log_folder_path: Folder holding the transaction logs.
    """

    name: str = ""
    edb_file_path: str | None = _prop("EdbFilePath")
    log_folder_path: str | None = _prop("LogFolderPath")

    def __post_init__(self) -> None:
        """Validate database data after initialization."""
        if not self.name:
            msg = "Database name cannot be empty"
            raise ValueError(msg)

    @classmethod
    def from_properties(cls, props: Mapping[str, object]) -> MailboxDatabaseRecord:
        """Build a database record, reading ``Name`` alongside the paths."""
        return cls(
            name=_clean(props.get("Name")) or "",
            edb_file_path=_clean(props.get("EdbFilePath")),
            log_folder_path=_clean(props.get("LogFolderPath")),
        )
