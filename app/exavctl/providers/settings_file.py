"""Reader for the transport service XML settings file.

EdgeTransport.exe.config is a .NET application configuration file;
queue and IP filter database locations live under
``<configuration><appSettings><add key="..." value="..."/>``.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from exavctl.providers.base import ProviderError, SettingsFileNotFoundError

logger = logging.getLogger(__name__)


def parse_app_settings(text: str) -> dict[str, str]:
    """Parse appSettings key/value pairs from configuration XML.

    Entries without a key are skipped. When a key repeats, the last
    value wins, matching .NET configuration semantics.

    Args:
        text: XML document text.

    Returns:
        Mapping of key to value, in document order.

    Raises:
        ProviderError: If the XML is malformed.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        msg = f"Invalid settings XML: {e}"
        raise ProviderError(msg) from e

    settings: dict[str, str] = {}
    for element in root.iterfind("./appSettings/add"):
        key = element.get("key")
        if not key:
            logger.debug("Skipping appSettings entry without key")
            continue
        settings[key] = element.get("value", "")
    return settings


def read_app_settings(path: Path) -> dict[str, str]:
    """Read appSettings key/value pairs from a settings file.

    Args:
        path: Path to EdgeTransport.exe.config.

    Returns:
        Mapping of key to value.

    Raises:
        SettingsFileNotFoundError: If the file does not exist.
        ProviderError: If the file cannot be read or parsed.
    """
    if not path.is_file():
        msg = f"Settings file not found: {path}"
        raise SettingsFileNotFoundError(msg)

    try:
        # utf-8-sig tolerates the BOM Windows tools often write
        text = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        msg = f"Failed to read settings file {path}: {e}"
        raise ProviderError(msg) from e

    return parse_app_settings(text)
