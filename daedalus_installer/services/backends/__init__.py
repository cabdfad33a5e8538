"""Node backends bundled into the installer."""

from __future__ import annotations

from ...core.config import Config
from ...core.process import CommandRunner
from ...models.build import BackendSpec, CardanoBackendSpec
from .base import Backend
from .cardano import CardanoBackend
from .mantis import MantisBackend


def backend_for(
    spec: BackendSpec,
    runner: CommandRunner | None = None,
    config: Config | None = None,
) -> Backend:
    """Instantiate the backend described by a build request."""
    if isinstance(spec, CardanoBackendSpec):
        return CardanoBackend(spec.bridge, runner=runner, config=config)
    return MantisBackend()


__all__ = ["Backend", "CardanoBackend", "MantisBackend", "backend_for"]
