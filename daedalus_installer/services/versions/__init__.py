"""Backend and frontend version resolution."""

from .service import (
    UNKNOWN_VERSION,
    package_file_name,
    read_cardano_version_file,
    read_frontend_version,
    read_version_file,
)

__all__ = [
    "UNKNOWN_VERSION",
    "package_file_name",
    "read_cardano_version_file",
    "read_frontend_version",
    "read_version_file",
]
