"""
Version Resolver.

Reads the backend and frontend versions and derives the installer file name
from them.
"""

from __future__ import annotations

import errno
import json
from pathlib import Path

from ...core.exceptions import ConfigError
from ...core.logging import get_logger
from ...models.build import OS, BackendKind, Cluster

logger = get_logger(__name__)

UNKNOWN_VERSION = "UNKNOWN"


def read_version_file(path: Path) -> str:
    """Read the first line of a version file.

    Some backend distributions ship without a version file; that case is
    tolerated and distinct from a file that exists but is empty.

    Args:
        path: Path to the version file

    Returns:
        The first line, "UNKNOWN" for an empty file, "" for a missing file

    Raises:
        OSError: Any I/O failure other than the file not existing
    """
    try:
        text = path.read_text()
    except OSError as e:
        if e.errno == errno.ENOENT:
            logger.warning("Version file not found", path=str(path))
            return ""
        raise

    lines = text.splitlines()
    return lines[0] if lines else UNKNOWN_VERSION


def read_cardano_version_file(bridge: Path) -> str:
    """Read the version shipped inside a Cardano backend distribution."""
    return read_version_file(bridge / "version")


def read_frontend_version(package_json: Path) -> str:
    """Read the frontend version from its package.json.

    Raises:
        ConfigError: If the file is missing, malformed or has no version
    """
    try:
        data = json.loads(package_json.read_text())
    except FileNotFoundError as e:
        raise ConfigError(message="package.json not found", path=str(package_json), cause=e) from e
    except json.JSONDecodeError as e:
        raise ConfigError(message="package.json is not valid JSON", path=str(package_json), cause=e) from e

    version = data.get("version") if isinstance(data, dict) else None
    if not isinstance(version, str) or not version:
        raise ConfigError(message="package.json has no version field", path=str(package_json))
    return version


def package_file_name(
    os: OS,
    cluster: Cluster,
    frontend_version: str,
    backend_kind: BackendKind,
    backend_version: str,
    build_job: str | None = None,
) -> str:
    """Compose the installer file name.

    Example: daedalus-0.11.0-cardano-sl-1.3.0-mainnet-macos-5302.pkg
    """
    if backend_kind is BackendKind.CARDANO:
        backend = f"cardano-sl-{backend_version}"
    else:
        backend = "mantis"

    parts = ["daedalus", frontend_version, backend, cluster.value, os.package_os_name]
    if build_job:
        parts.append(build_job)
    return "-".join(parts) + "." + os.package_extension
