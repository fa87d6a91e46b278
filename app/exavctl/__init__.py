"""exavctl - Antivirus exclusion lists for Exchange servers."""

__version__ = "0.1.0"
