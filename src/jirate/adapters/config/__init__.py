"""
Configuration Adapters - Load settings from files, environment and CLI.
"""

from .environment import EnvironmentConfigProvider, normalize_url

__all__ = ["EnvironmentConfigProvider", "normalize_url"]
