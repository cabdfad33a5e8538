"""Mantis backend placeholder.

Packaging Mantis is not supported yet: every step is a no-op so the rest of
the installer can still be built around the frontend alone.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ...core.logging import get_logger
from ...models.build import BackendKind, DarwinConfig
from .base import Backend

logger = get_logger(__name__)

MANTIS_VERSION = "UNRELEASED"


class MantisBackend(Backend):
    kind = BackendKind.MANTIS

    def resolve_version(self) -> str:
        return MANTIS_VERSION

    def assemble_components(self, dir: Path) -> None:
        logger.warning("Mantis backend files are not bundled", dir=str(dir))

    @contextmanager
    def scripts_dir(self, darwin_config: DarwinConfig) -> Iterator[Path | None]:
        yield None
