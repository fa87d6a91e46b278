"""Abstract base class for Exchange configuration providers.

This module defines the ConfigProvider interface the exclusion list
builder queries, and the errors providers raise.
"""

from abc import ABC, abstractmethod

from exavctl.models.context import ServerRoleFlags
from exavctl.models.records import (
    FrontendTransportRecord,
    MailboxDatabaseRecord,
    MailboxServerRecord,
    MailboxTransportRecord,
    ProtocolLogRecord,
    TransportServiceRecord,
)


class ProviderError(RuntimeError):
    """Raised when a configuration query cannot be answered."""


class SettingsFileNotFoundError(ProviderError):
    """Raised when the transport settings file does not exist."""


class ConfigProvider(ABC):
    """Abstract base class for all configuration providers.

    Providers answer read-only questions about an Exchange server's live
    configuration. Every method except ``read_settings_file`` is expected
    to succeed; failures surface as ProviderError.

    Example:
        >>> provider = ExchangeShellProvider()
        >>> if provider.is_available():
        ...     roles = provider.get_server_roles("EX01")
        ...     print(roles.names)
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the management surface can be queried on this system.

        Returns:
            True if the provider can be used, False otherwise.
        """

    @abstractmethod
    def get_server_roles(self, host: str) -> ServerRoleFlags:
        """Return the Exchange roles installed on a server.

        Raises:
            ProviderError: If the server record cannot be read.
        """

    @abstractmethod
    def get_mailbox_server(self, host: str) -> MailboxServerRecord:
        """Return the mailbox server description of a server."""

    @abstractmethod
    def get_mailbox_databases(self, host: str) -> list[MailboxDatabaseRecord]:
        """Return the mailbox databases hosted on a server, sorted by name."""

    @abstractmethod
    def get_transport_service(self, host: str) -> TransportServiceRecord:
        """Return the transport service description of a server."""

    @abstractmethod
    def get_frontend_transport_service(self, host: str) -> FrontendTransportRecord:
        """Return the front-end transport service description of a server."""

    @abstractmethod
    def get_mailbox_transport_service(self, host: str) -> MailboxTransportRecord:
        """Return the mailbox transport service description of a server."""

    @abstractmethod
    def get_protocol_logs(self, host: str) -> ProtocolLogRecord:
        """Return the POP3 and IMAP4 log locations of a server."""

    @abstractmethod
    def read_settings_file(self, path: str) -> dict[str, str]:
        """Read key/value pairs from the transport settings file.

        Args:
            path: Location of EdgeTransport.exe.config.

        Returns:
            Mapping of appSettings key to value.

        Raises:
            SettingsFileNotFoundError: If the file does not exist.
            ProviderError: If the file exists but cannot be parsed.
        """
