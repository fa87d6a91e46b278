"""Exchange Management Shell configuration provider.

Queries a server's live configuration by running Exchange cmdlets
through Windows PowerShell and reading the results back as JSON.
Path properties are projected to plain strings before serialization
so that LocalLongFullPath values arrive as their text form.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, TypeVar

from exavctl.models.context import ServerRoleFlags
from exavctl.models.records import (
    FrontendTransportRecord,
    MailboxDatabaseRecord,
    MailboxServerRecord,
    MailboxTransportRecord,
    PathRecord,
    ProtocolLogRecord,
    TransportServiceRecord,
)
from exavctl.providers.base import ConfigProvider, ProviderError
from exavctl.providers.settings_file import read_app_settings
from exavctl.utils.shell import command_exists, quote_ps, run_powershell

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=PathRecord)

DEFAULT_SNAPIN = "Microsoft.Exchange.Management.PowerShell.SnapIn"


def _as_bool(value: object) -> bool:
    """Interpret a JSON boolean or its PowerShell string form."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _string_projection(properties: list[str]) -> str:
    """Build a Select-Object clause that stringifies each property."""
    return ", ".join(
        f"@{{Name='{prop}';Expression={{[string]$_.{prop}}}}}" for prop in properties
    )


class ExchangeShellProvider(ConfigProvider):
    """Provider backed by Exchange Management Shell cmdlets.

    Each query spawns one PowerShell process, loads the Exchange
    snap-in and pipes the cmdlet output through ConvertTo-Json.

    Attributes:
        executable: PowerShell executable name or path.
        snapin: Exchange management snap-in to load before each query.
        timeout: Per-query timeout in seconds.
    """

    def __init__(
        self,
        executable: str = "powershell.exe",
        snapin: str = DEFAULT_SNAPIN,
        timeout: float = 120.0,
    ) -> None:
        self.executable = executable
        self.snapin = snapin
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check if the PowerShell executable is on PATH."""
        return command_exists(self.executable)

    def get_server_roles(self, host: str) -> ServerRoleFlags:
        """Read role flags from Get-ExchangeServer."""
        record = self._query_one(
            f"Get-ExchangeServer -Identity {quote_ps(host)}",
            "IsMailboxServer, IsEdgeServer",
        )
        roles = ServerRoleFlags(
            is_mailbox=_as_bool(record.get("IsMailboxServer")),
            is_edge_transport=_as_bool(record.get("IsEdgeServer")),
        )
        logger.debug("Server %s roles: %s", host, roles.names or "none")
        return roles

    def get_mailbox_server(self, host: str) -> MailboxServerRecord:
        """Read log locations from Get-MailboxServer."""
        return self._query_record(
            MailboxServerRecord, f"Get-MailboxServer -Identity {quote_ps(host)}"
        )

    def get_mailbox_databases(self, host: str) -> list[MailboxDatabaseRecord]:
        """Read databases hosted on the server from Get-MailboxDatabase."""
        properties = ["Name", *MailboxDatabaseRecord.property_names()]
        rows = self._query(
            f"Get-MailboxDatabase -Server {quote_ps(host)}",
            _string_projection(properties),
        )
        databases = [MailboxDatabaseRecord.from_properties(row) for row in rows]
        return sorted(databases, key=lambda db: db.name)

    def get_transport_service(self, host: str) -> TransportServiceRecord:
        """Read directories from Get-TransportService."""
        return self._query_record(
            TransportServiceRecord, f"Get-TransportService -Identity {quote_ps(host)}"
        )

    def get_frontend_transport_service(self, host: str) -> FrontendTransportRecord:
        """Read log locations from Get-FrontendTransportService."""
        return self._query_record(
            FrontendTransportRecord,
            f"Get-FrontendTransportService -Identity {quote_ps(host)}",
        )

    def get_mailbox_transport_service(self, host: str) -> MailboxTransportRecord:
        """Read log locations from Get-MailboxTransportService."""
        return self._query_record(
            MailboxTransportRecord,
            f"Get-MailboxTransportService -Identity {quote_ps(host)}",
        )

    def get_protocol_logs(self, host: str) -> ProtocolLogRecord:
        """Read LogFileLocation from Get-PopSettings and Get-ImapSettings."""
        projection = _string_projection(["LogFileLocation"])
        pop = self._query_one(f"Get-PopSettings -Server {quote_ps(host)}", projection)
        imap = self._query_one(f"Get-ImapSettings -Server {quote_ps(host)}", projection)
        return ProtocolLogRecord.from_properties(
            {
                "PopLogFileLocation": pop.get("LogFileLocation"),
                "ImapLogFileLocation": imap.get("LogFileLocation"),
            }
        )

    def read_settings_file(self, path: str) -> dict[str, str]:
        """Read EdgeTransport.exe.config from the local filesystem."""
        return read_app_settings(Path(path))

    def _query_record(self, record_type: type[R], cmdlet: str) -> R:
        """Run a single-object cmdlet and map it onto a record type."""
        row = self._query_one(cmdlet, _string_projection(record_type.property_names()))
        return record_type.from_properties(row)  # type: ignore[return-value]

    def _query_one(self, cmdlet: str, select: str) -> dict[str, Any]:
        """Run a cmdlet that must return exactly one object.

        Raises:
            ProviderError: If the cmdlet returned no object.
        """
        rows = self._query(cmdlet, select)
        if not rows:
            msg = f"{cmdlet.split()[0]} returned no record"
            raise ProviderError(msg)
        if len(rows) > 1:
            logger.warning("%s returned %d records, using the first", cmdlet.split()[0], len(rows))
        return rows[0]

    def _query(self, cmdlet: str, select: str) -> list[dict[str, Any]]:
        """Run a cmdlet, project properties and decode the JSON output.

        Args:
            cmdlet: Cmdlet invocation including parameters.
            select: Select-Object property clause.

        Returns:
            List of property bags, empty if the cmdlet produced nothing.

        Raises:
            ProviderError: If PowerShell is missing, times out, fails,
                or prints something that is not JSON.
        """
        script = (
            "$ErrorActionPreference = 'Stop'; "
            f"Add-PSSnapin {self.snapin} -ErrorAction SilentlyContinue; "
            f"{cmdlet} | Select-Object {select} | ConvertTo-Json -Compress"
        )
        cmdlet_name = cmdlet.split()[0]
        logger.debug("Running %s", cmdlet)

        try:
            result = run_powershell(script, executable=self.executable, timeout=self.timeout)
        except FileNotFoundError as e:
            msg = f"PowerShell executable not found: {self.executable}"
            raise ProviderError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"{cmdlet_name} timed out after {self.timeout:.0f}s"
            raise ProviderError(msg) from e

        if not result.success:
            msg = f"{cmdlet_name} failed: {result.stderr.strip() or 'unknown error'}"
            raise ProviderError(msg)

        output = result.stdout.strip()
        if not output:
            return []

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            msg = f"{cmdlet_name} returned invalid JSON: {e}"
            raise ProviderError(msg) from e

        # ConvertTo-Json emits a bare object for a single result
        if isinstance(data, dict):
            return [data]
        if isinstance(data, list):
            return [row for row in data if isinstance(row, dict)]

        msg = f"{cmdlet_name} returned unexpected JSON type: {type(data).__name__}"
        raise ProviderError(msg)
