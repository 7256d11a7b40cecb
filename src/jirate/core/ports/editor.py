"""
Editor Port - Abstract interface for interactive text entry.

Implementations:
- ExternalEditor: $VISUAL / $EDITOR on a temporary file
"""

from abc import ABC, abstractmethod


class EditorPort(ABC):
    """Blocking text editor seeded with optional initial content."""

    @abstractmethod
    def edit(self, initial: str = "") -> str | None:
        """
        Let the user edit text.

        Args:
            initial: Text to pre-fill the editor with

        Returns:
            The final text, or None if the user cancelled or left it empty
        """
        ...
