"""Configuration providers for querying Exchange server settings.

This module exports the provider interface and its Exchange
Management Shell implementation.
"""

from exavctl.providers.base import ConfigProvider, ProviderError, SettingsFileNotFoundError
from exavctl.providers.exchange import ExchangeShellProvider

__all__ = [
    "ConfigProvider",
    "ExchangeShellProvider",
    "ProviderError",
    "SettingsFileNotFoundError",
]
