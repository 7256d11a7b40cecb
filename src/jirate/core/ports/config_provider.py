"""
Configuration Provider Port - Abstract interface for configuration.

Implementations:
- EnvironmentConfigProvider: config.txt, YAML file, env vars and CLI flags
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TrackerConfig:
    """Connection settings for the Jira instance."""

    url: str
    email: str
    api_token: str
    project_key: str | None = None
    timeout: float | None = None


@dataclass
class OutputConfig:
    """Terminal and logging preferences."""

    color: bool = True
    verbose: bool = False
    log_format: str = "text"
    log_file: str | None = None


@dataclass
class AppConfig:
    """Complete application configuration."""

    tracker: TrackerConfig
    output: OutputConfig = field(default_factory=OutputConfig)


class ConfigProviderPort(ABC):
    """
    Abstract interface for configuration providers.

    Configuration can come from various sources:
    - The legacy ``config.txt`` key:value file
    - YAML config files
    - Environment variables
    - Command line arguments
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """
        Load configuration from source.

        Returns:
            Complete application configuration

        Raises:
            ConfigError: If required values are missing
        """
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a specific configuration value.

        Args:
            key: Configuration key (dot notation supported)
            default: Default value if not found
        """
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """
        Check that the merged sources provide everything ``load`` needs.

        Returns:
            List of validation errors (empty if valid)
        """
        ...
