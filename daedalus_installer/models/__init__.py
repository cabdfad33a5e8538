"""Data models for the installer build."""

from .build import (
    OS,
    BackendKind,
    BackendSpec,
    BuildOptions,
    CardanoBackendSpec,
    Cluster,
    DarwinConfig,
    InstallerConfig,
    MantisBackendSpec,
)

__all__ = [
    "OS",
    "BackendKind",
    "BackendSpec",
    "BuildOptions",
    "CardanoBackendSpec",
    "Cluster",
    "DarwinConfig",
    "InstallerConfig",
    "MantisBackendSpec",
]
