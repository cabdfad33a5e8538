"""App bundle assembly."""

from .launcher import render_launcher_script
from .service import (
    FRONTEND_EXECUTABLE,
    ComponentRootAssembler,
    executable_dir,
    write_launcher_file,
)

__all__ = [
    "FRONTEND_EXECUTABLE",
    "ComponentRootAssembler",
    "executable_dir",
    "render_launcher_script",
    "write_launcher_file",
]
