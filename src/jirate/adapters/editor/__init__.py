"""
Editor Adapters - Interactive text entry.
"""

from .external import ExternalEditor

__all__ = ["ExternalEditor"]
