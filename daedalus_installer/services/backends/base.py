"""
Backend interface.

A backend contributes the node side of the installer: its version, the files
staged into the app bundle, and the installer hook scripts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path

from ...models.build import BackendKind, DarwinConfig


class Backend(ABC):
    """Abstract node backend."""

    kind: BackendKind

    @abstractmethod
    def resolve_version(self) -> str:
        """Version string embedded in the installer file name."""
        ...

    @abstractmethod
    def assemble_components(self, dir: Path) -> None:
        """Stage backend files into the bundle's executable directory.

        Args:
            dir: The bundle's Contents/MacOS directory
        """
        ...

    @abstractmethod
    def scripts_dir(self, darwin_config: DarwinConfig) -> AbstractContextManager[Path | None]:
        """Scoped directory of installer hook scripts.

        The directory only lives for the duration of the ``with`` block.
        Yields None when the backend ships no scripts.
        """
        ...
