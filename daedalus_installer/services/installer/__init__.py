"""macOS installer package build."""

from .scripts import render_postinstall
from .service import INSTALL_LOCATION, InstallerBuilder, unsigned_package_path

__all__ = [
    "INSTALL_LOCATION",
    "InstallerBuilder",
    "render_postinstall",
    "unsigned_package_path",
]
