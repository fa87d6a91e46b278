"""Exclusion list assembly.

Combines the static role catalogs with paths discovered from the
server's live configuration into the three exclusion lists. Building
is free of file I/O; serialization lives in ``exavctl.core.writer``.
"""

import logging

from exavctl.core import catalog
from exavctl.models.context import RunContext, ServerRoleFlags
from exavctl.models.exclusion import ExclusionLists
from exavctl.providers.base import ConfigProvider, ProviderError

logger = logging.getLogger(__name__)


class ExclusionListBuilder:
    """Builds path, process and extension exclusion lists for one server.

    Output depends only on the role flags, the run context and the
    provider's answers, so two builds against the same inputs produce
    identical lists.

    Example:
        >>> builder = ExclusionListBuilder(context)
        >>> lists = builder.build(provider.get_server_roles(host), provider)
        >>> len(lists.processes)
        44
    """

    def __init__(self, context: RunContext) -> None:
        self._context = context

    @property
    def context(self) -> RunContext:
        """Return the run context used for template expansion."""
        return self._context

    def build(self, role: ServerRoleFlags, provider: ConfigProvider) -> ExclusionLists:
        """Assemble all three exclusion lists.

        Args:
            role: Roles installed on the target server.
            provider: Source of live configuration values.

        Returns:
            ExclusionLists with entries in emission order.

        Raises:
            ProviderError: If a configuration query fails. A missing or
                unreadable settings file is logged and does not raise.
        """
        paths = self.build_paths(role, provider)
        processes = catalog.expand_catalog(catalog.PROCESS_CATALOG, role, self._context)
        extensions = catalog.expand_catalog(catalog.EXTENSION_CATALOG, role, self._context)

        logger.info(
            "Built exclusions for %s: %d paths, %d processes, %d extensions",
            self._context.hostname,
            len(paths),
            len(processes),
            len(extensions),
        )
        return ExclusionLists(
            paths=tuple(paths),
            processes=tuple(processes),
            extensions=tuple(extensions),
        )

    def build_paths(self, role: ServerRoleFlags, provider: ConfigProvider) -> list[str]:
        """Assemble the folder/file path list."""
        paths: list[str] = []
        if role.is_mailbox:
            paths.extend(self._mailbox_paths(provider))
        if role.is_edge_transport:
            paths.append(self._context.render(catalog.EDGE_DIRECTORY_STORE_DIR))
        if role.is_transport:
            paths.extend(self._transport_paths(provider))
        return paths

    def _mailbox_paths(self, provider: ConfigProvider) -> list[str]:
        """Paths that only apply to the Mailbox role."""
        ctx = self._context
        host = ctx.hostname

        paths = [
            ctx.render(catalog.CLUSTER_DIR),
            ctx.render(catalog.OAB_DIR),
            ctx.render(catalog.ANTIMALWARE_ENGINE_DIR),
            ctx.render(catalog.GROUP_METRICS_DIR),
        ]
        paths.extend(provider.get_mailbox_server(host).paths())
        paths.extend(provider.get_protocol_logs(host).paths())

        for database in sorted(provider.get_mailbox_databases(host), key=lambda db: db.name):
            logger.debug("Adding database %s", database.name)
            paths.extend(database.paths())

        paths.extend(provider.get_frontend_transport_service(host).paths())
        paths.extend(provider.get_mailbox_transport_service(host).paths())
        paths.append(ctx.render(catalog.IIS_COMPRESSION_DIR))
        return paths

    def _transport_paths(self, provider: ConfigProvider) -> list[str]:
        """Paths that apply to any server running the transport service."""
        ctx = self._context

        paths = self._queue_paths(provider)
        paths.append(ctx.render(catalog.SENDER_REPUTATION_DIR))
        paths.extend(provider.get_transport_service(ctx.hostname).paths())
        paths.append(ctx.render(catalog.TRANSPORT_TEMP_DIR))
        paths.append(ctx.render(catalog.CONTENT_CONVERSION_DIR))
        return paths

    def _queue_paths(self, provider: ConfigProvider) -> list[str]:
        """Distinct queue and IP filter database locations from the settings file.

        Returns an empty list when the settings file is missing or unreadable.
        """
        settings_path = self._context.settings_file
        try:
            settings = provider.read_settings_file(settings_path)
        except ProviderError as e:
            logger.warning(
                "Cannot read settings file %s (%s); queue and IP filter paths are not included",
                settings_path,
                e,
            )
            return []

        queue_paths: list[str] = []
        for key in catalog.QUEUE_SETTINGS_KEYS:
            value = settings.get(key, "").strip()
            if not value:
                logger.debug("Settings key %s is missing or blank", key)
                continue
            if value in queue_paths:
                continue
            queue_paths.append(value)
        return queue_paths
