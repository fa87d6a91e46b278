"""Static exclusion catalogs keyed by server role.

Templates use the placeholders understood by ``RunContext.render``:
``{install}`` (Exchange install root, trailing backslash included),
``{system}`` (System32), ``{system_root}`` and ``{system_drive}``.
Keep the tables in sync with Microsoft's published guidance for
running antivirus software on Exchange servers.
"""

from enum import Enum

from exavctl.models.context import RunContext, ServerRoleFlags


class RoleScope(Enum):
    """Which role condition a catalog entry applies to."""

    MAILBOX = "mailbox"
    EDGE = "edge"
    TRANSPORT = "transport"  # mailbox or edge

    def applies_to(self, role: ServerRoleFlags) -> bool:
        """Check if entries in this scope apply to the given roles."""
        if self == RoleScope.MAILBOX:
            return role.is_mailbox
        if self == RoleScope.EDGE:
            return role.is_edge_transport
        return role.is_transport


# =============================================================================
# Fixed folder paths
# =============================================================================

CLUSTER_DIR = "{system_root}\\Cluster"
OAB_DIR = "{install}ClientAccess\\OAB"
ANTIMALWARE_ENGINE_DIR = "{install}FIP-FS"
GROUP_METRICS_DIR = "{install}GroupMetrics"
IIS_COMPRESSION_DIR = "{system_drive}\\inetpub\\temp\\IIS Temporary Compressed Files"

EDGE_DIRECTORY_STORE_DIR = "{install}TransportRoles\\Data\\Adam"

SENDER_REPUTATION_DIR = "{install}TransportRoles\\Data\\SenderReputation"
TRANSPORT_TEMP_DIR = "{install}TransportRoles\\Data\\Temp"
CONTENT_CONVERSION_DIR = "{install}Working\\OleConverter"

# appSettings keys in EdgeTransport.exe.config, in emission order
QUEUE_SETTINGS_KEYS: tuple[str, ...] = (
    "QueueDatabasePath",
    "QueueDatabaseLoggingPath",
    "IPFilterDatabasePath",
    "IPFilterDatabaseLoggingPath",
)


# =============================================================================
# Process executables
# =============================================================================

PROCESS_CATALOG: dict[RoleScope, tuple[str, ...]] = {
    RoleScope.MAILBOX: (
        "{install}Bin\\ComplianceAuditService.exe",
        "{install}FIP-FS\\Bin\\fms.exe",
        "{install}Bin\\Search\\Ceres\\HostController\\hostcontrollerservice.exe",
        "{system}\\inetsrv\\inetinfo.exe",
        "{install}Bin\\Microsoft.Exchange.Directory.TopologyService.exe",
        "{install}Bin\\Microsoft.Exchange.EdgeSyncSvc.exe",
        "{install}FrontEnd\\PopImap\\Microsoft.Exchange.Imap4.exe",
        "{install}ClientAccess\\PopImap\\Microsoft.Exchange.Imap4service.exe",
        "{install}Bin\\Microsoft.Exchange.Notifications.Broker.exe",
        "{install}FrontEnd\\PopImap\\Microsoft.Exchange.Pop3.exe",
        "{install}ClientAccess\\PopImap\\Microsoft.Exchange.Pop3service.exe",
        "{install}Bin\\Microsoft.Exchange.ProtectedServiceHost.exe",
        "{install}Bin\\Microsoft.Exchange.RPCClientAccess.Service.exe",
        "{install}Bin\\Microsoft.Exchange.Search.Service.exe",
        "{install}Bin\\Microsoft.Exchange.Store.Service.exe",
        "{install}Bin\\Microsoft.Exchange.Store.Worker.exe",
        "{install}FrontEnd\\CallRouter\\Microsoft.Exchange.UM.CallRouter.exe",
        "{install}Bin\\MSExchangeCompliance.exe",
        "{install}Bin\\MSExchangeDagMgmt.exe",
        "{install}Bin\\MSExchangeDelivery.exe",
        "{install}Bin\\MSExchangeFrontendTransport.exe",
        "{install}Bin\\MSExchangeMailboxAssistants.exe",
        "{install}Bin\\MSExchangeMailboxReplication.exe",
        "{install}Bin\\MSExchangeRepl.exe",
        "{install}Bin\\MSExchangeSubmission.exe",
        "{install}Bin\\MSExchangeThrottling.exe",
        "{install}Bin\\Search\\Ceres\\Runtime\\1.0\\Noderunner.exe",
        "{install}Bin\\OleConverter.exe",
        "{install}Bin\\Search\\Ceres\\ParserServer\\ParserServer.exe",
        "{system}\\WindowsPowerShell\\v1.0\\Powershell.exe",
        "{install}FIP-FS\\Bin\\ScanEngineTest.exe",
        "{install}FIP-FS\\Bin\\ScanningProcess.exe",
        "{install}ClientAccess\\Owa\\Bin\\DocumentViewing\\TranscodingService.exe",
        "{install}FIP-FS\\Bin\\UpdateService.exe",
        "{system}\\inetsrv\\W3wp.exe",
    ),
    RoleScope.EDGE: (
        "{install}Bin\\Microsoft.Exchange.EdgeCredentialSvc.exe",
        "{system_root}\\ADAM\\dsamain.exe",
    ),
    RoleScope.TRANSPORT: (
        "{install}Bin\\EdgeTransport.exe",
        "{install}Bin\\Microsoft.Exchange.AntispamUpdateSvc.exe",
        "{install}TransportRoles\\agents\\Hygiene\\Microsoft.Exchange.ContentFilter.Wrapper.exe",
        "{install}Bin\\Microsoft.Exchange.Diagnostics.Service.exe",
        "{install}Bin\\Microsoft.Exchange.ServiceHost.exe",
        "{install}Bin\\MSExchangeHMHost.exe",
        "{install}Bin\\MSExchangeHMWorker.exe",
        "{install}Bin\\MSExchangeTransport.exe",
        "{install}Bin\\MSExchangeTransportLogSearch.exe",
    ),
}


# =============================================================================
# File extensions
# =============================================================================

EXTENSION_CATALOG: dict[RoleScope, tuple[str, ...]] = {
    # Group metrics and offline address book files
    RoleScope.MAILBOX: (".dsc", ".txt", ".lzx"),
    # Databases, checkpoints, transaction logs and queues
    RoleScope.TRANSPORT: (".config", ".chk", ".edb", ".jfm", ".jrs", ".log", ".que"),
}

# Order in which scopes are evaluated when expanding a catalog
SCOPE_ORDER: tuple[RoleScope, ...] = (RoleScope.MAILBOX, RoleScope.EDGE, RoleScope.TRANSPORT)


def expand_catalog(
    catalog: dict[RoleScope, tuple[str, ...]],
    role: ServerRoleFlags,
    context: RunContext,
) -> list[str]:
    """Expand the entries of a catalog that apply to the given roles.

    Args:
        catalog: Mapping of role scope to templates.
        role: Role flags of the target server.
        context: Run context used to render templates.

    Returns:
        Rendered entries, scopes in ``SCOPE_ORDER``, templates in table order.
    """
    entries: list[str] = []
    for scope in SCOPE_ORDER:
        if not scope.applies_to(role):
            continue
        entries.extend(context.render(template) for template in catalog.get(scope, ()))
    return entries
