"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import pytest
from exavctl.models.context import RunContext, ServerRoleFlags
from exavctl.models.records import (
    FrontendTransportRecord,
    MailboxDatabaseRecord,
    MailboxServerRecord,
    MailboxTransportRecord,
    ProtocolLogRecord,
    TransportServiceRecord,
)
from exavctl.providers.base import ConfigProvider, SettingsFileNotFoundError

INSTALL = "C:\\Program Files\\Microsoft\\Exchange Server\\V15\\"


class StubProvider(ConfigProvider):
    """In-memory provider returning fixed records.

    Set ``settings`` to None to simulate a missing settings file.
    """

    def __init__(self) -> None:
        self.roles = ServerRoleFlags(is_mailbox=True, is_edge_transport=False)
        self.mailbox_server = MailboxServerRecord(
            calendar_repair_log_path=INSTALL + "Logging\\Calendar Repair Assistant",
            log_path_for_managed_folders=INSTALL + "Logging\\Managed Folder Assistant",
            migration_log_file_path=INSTALL + "Logging\\Migration",
        )
        self.databases = [
            MailboxDatabaseRecord(
                name="DB01",
                edb_file_path="D:\\DB01\\DB01.edb",
                log_folder_path="E:\\DB01\\Logs",
            ),
            MailboxDatabaseRecord(
                name="DB02",
                edb_file_path="D:\\DB02\\DB02.edb",
                log_folder_path="E:\\DB02\\Logs",
            ),
        ]
        self.transport = TransportServiceRecord(
            connectivity_log_path=INSTALL + "TransportRoles\\Logs\\Hub\\Connectivity",
            message_tracking_log_path=INSTALL + "TransportRoles\\Logs\\MessageTracking",
            pickup_directory_path=INSTALL + "TransportRoles\\Pickup",
        )
        self.frontend = FrontendTransportRecord(
            agent_log_path=INSTALL + "TransportRoles\\Logs\\FrontEnd\\AgentLog",
        )
        self.mailbox_transport = MailboxTransportRecord(
            connectivity_log_path=INSTALL + "TransportRoles\\Logs\\Mailbox\\Connectivity",
        )
        self.protocol_logs = ProtocolLogRecord(
            pop_log_location=INSTALL + "Logging\\Pop3",
            imap_log_location=INSTALL + "Logging\\Imap4",
        )
        self.settings: dict[str, str] | None = {
            "QueueDatabasePath": "F:\\Queue",
            "QueueDatabaseLoggingPath": "F:\\QueueLogs",
            "IPFilterDatabasePath": INSTALL + "TransportRoles\\Data\\IpFilter",
            "IPFilterDatabaseLoggingPath": INSTALL + "TransportRoles\\Data\\IpFilter",
        }
        self.settings_reads: list[str] = []

    def is_available(self) -> bool:
        return True

    def get_server_roles(self, host: str) -> ServerRoleFlags:
        return self.roles

    def get_mailbox_server(self, host: str) -> MailboxServerRecord:
        return self.mailbox_server

    def get_mailbox_databases(self, host: str) -> list[MailboxDatabaseRecord]:
        return list(self.databases)

    def get_transport_service(self, host: str) -> TransportServiceRecord:
        return self.transport

    def get_frontend_transport_service(self, host: str) -> FrontendTransportRecord:
        return self.frontend

    def get_mailbox_transport_service(self, host: str) -> MailboxTransportRecord:
        return self.mailbox_transport

    def get_protocol_logs(self, host: str) -> ProtocolLogRecord:
        return self.protocol_logs

    def read_settings_file(self, path: str) -> dict[str, str]:
        self.settings_reads.append(path)
        if self.settings is None:
            raise SettingsFileNotFoundError(f"Settings file not found: {path}")
        return dict(self.settings)


@pytest.fixture
def install_path() -> str:
    """Exchange install root used by the shared fixtures."""
    return INSTALL


@pytest.fixture
def run_context() -> RunContext:
    """Run context for a mailbox server named EX01."""
    return RunContext(hostname="EX01", install_path=INSTALL)


@pytest.fixture
def stub_provider() -> StubProvider:
    """Provider returning deterministic mailbox server records."""
    return StubProvider()


@pytest.fixture
def edge_transport_config() -> str:
    """Sample EdgeTransport.exe.config content."""
    return """<?xml version="1.0" encoding="utf-8"?>
<configuration>
  <runtime>
    <gcServer enabled="true" />
  </runtime>
  <appSettings>
    <add key="QueueDatabasePath" value="F:\\Queue" />
    <add key="QueueDatabaseLoggingPath" value="F:\\QueueLogs" />
    <add key="IPFilterDatabasePath" value="C:\\Exchange\\TransportRoles\\Data\\IpFilter" />
    <add key="IPFilterDatabaseLoggingPath" value="C:\\Exchange\\TransportRoles\\Data\\IpFilter" />
    <add key="DatabaseMaxCacheSize" value="384MB" />
  </appSettings>
</configuration>
"""
