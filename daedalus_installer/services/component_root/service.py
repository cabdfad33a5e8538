"""
Component Root Assembler.

Turns the packaged Electron app into the installable component: backend
files are staged next to the frontend executable, which is renamed to
``Frontend``, and a launcher script takes over the app's own name.
"""

from __future__ import annotations

import shutil
import stat
from pathlib import Path

from ...core.exceptions import PackagingError
from ...core.logging import get_logger
from ...models.build import Cluster, DarwinConfig
from ..backends.base import Backend
from .launcher import render_launcher_script

logger = get_logger(__name__)

FRONTEND_EXECUTABLE = "Frontend"

_EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _make_executable(path: Path) -> None:
    path.chmod(path.stat().st_mode | _EXECUTABLE_BITS)


def executable_dir(app_root: Path) -> Path:
    return app_root / "Contents" / "MacOS"


def write_launcher_file(dir: Path, cluster: Cluster, darwin_config: DarwinConfig) -> Path:
    """Write the launcher script under the app's name and return its path."""
    path = dir / darwin_config.app_name
    path.write_text(render_launcher_script(darwin_config.app_name, cluster.network))
    _make_executable(path)
    return path


class ComponentRootAssembler:
    """Stages everything that goes inside the .app bundle."""

    def __init__(self, backend: Backend) -> None:
        self.backend = backend

    def prepare_frontend(self, dir: Path, darwin_config: DarwinConfig) -> Path:
        """Move the Electron executable aside as ``Frontend``.

        Safe to repeat: an existing ``Frontend`` is left untouched.
        """
        frontend = dir / FRONTEND_EXECUTABLE
        if not frontend.exists():
            original = dir / darwin_config.app_name
            if not original.exists():
                raise PackagingError(
                    message=f"Frontend executable '{darwin_config.app_name}' not found",
                    artifact_path=str(dir),
                )
            shutil.move(str(original), str(frontend))
        _make_executable(frontend)
        return frontend

    def assemble(self, app_root: Path, cluster: Cluster, darwin_config: DarwinConfig) -> Path:
        """Assemble the component root in place.

        Args:
            app_root: The .app bundle produced by the frontend build
            cluster: Cluster whose network the launcher exports
            darwin_config: Packaging names

        Returns:
            Path of the launcher script
        """
        dir = executable_dir(app_root)
        logger.info("Preparing files", dir=str(dir), backend=self.backend.kind.value)

        self.backend.assemble_components(dir)
        self.prepare_frontend(dir, darwin_config)
        return write_launcher_file(dir, cluster, darwin_config)
