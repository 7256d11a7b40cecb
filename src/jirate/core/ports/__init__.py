"""
Ports - Abstract interfaces for external collaborators.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .config_provider import AppConfig, ConfigProviderPort, OutputConfig, TrackerConfig
from .content_converter import ContentConverterPort
from .editor import EditorPort

__all__ = [
    "AppConfig",
    "ConfigProviderPort",
    "ContentConverterPort",
    "EditorPort",
    "OutputConfig",
    "TrackerConfig",
]
