"""Run context and server role models.

These structures carry the values a build needs about the target host,
so that nothing downstream reads environment variables directly.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerRoleFlags:
    """Exchange roles installed on the target host.

    Attributes:
        is_mailbox: True if the Mailbox role is present.
        is_edge_transport: True if the Edge Transport role is present.
    """

    is_mailbox: bool
    is_edge_transport: bool

    @property
    def is_transport(self) -> bool:
        """Check if the host runs a transport service (mailbox or edge)."""
        return self.is_mailbox or self.is_edge_transport

    @property
    def names(self) -> list[str]:
        """Return the installed role names for display."""
        roles: list[str] = []
        if self.is_mailbox:
            roles.append("mailbox")
        if self.is_edge_transport:
            roles.append("edge")
        return roles


@dataclass(frozen=True, slots=True)
class RunContext:
    """Host-specific values threaded through a single run.

    Attributes:
        hostname: Exchange server name, also used in output file names.
        install_path: Exchange installation root, always ending with a backslash.
        system_root: Windows directory (e.g. ``C:\\Windows``).
        system_drive: System drive (e.g. ``C:``).
    """

    hostname: str
    install_path: str
    system_root: str = "C:\\Windows"
    system_drive: str = "C:"

    def __post_init__(self) -> None:
        """Validate and normalise context values."""
        if not self.hostname:
            msg = "Hostname cannot be empty"
            raise ValueError(msg)
        if not self.install_path:
            msg = "Exchange install path cannot be empty"
            raise ValueError(msg)
        # Frozen dataclass: normalise via object.__setattr__
        object.__setattr__(self, "install_path", self.install_path.rstrip("\\/") + "\\")
        object.__setattr__(self, "system_root", self.system_root.rstrip("\\/"))
        object.__setattr__(self, "system_drive", self.system_drive.rstrip("\\/"))

    @property
    def system_dir(self) -> str:
        """Return the System32 directory under the Windows directory."""
        return f"{self.system_root}\\System32"

    @property
    def settings_file(self) -> str:
        """Return the path of the transport settings file."""
        return f"{self.install_path}Bin\\EdgeTransport.exe.config"

    def render(self, template: str) -> str:
        """Expand a catalog template against this context.

        Supported placeholders are ``{install}``, ``{system}``,
        ``{system_root}`` and ``{system_drive}``.

        Args:
            template: Template string from a catalog table.

        Returns:
            The expanded path.
        """
        return template.format(
            install=self.install_path,
            system=self.system_dir,
            system_root=self.system_root,
            system_drive=self.system_drive,
        )
