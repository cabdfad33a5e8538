"""
Build input models.

These models describe what is being packaged: the target platform and
cluster, which backend is bundled, and the naming derived from the installer
configuration. All of them are immutable once constructed.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class OS(str, Enum):
    """Target platforms the configuration templates know about."""

    MACOS64 = "macos64"
    WIN64 = "win64"
    LINUX64 = "linux64"

    @property
    def package_os_name(self) -> str:
        """Platform name used in installer file names."""
        return {OS.MACOS64: "macos", OS.WIN64: "windows", OS.LINUX64: "linux"}[self]

    @property
    def package_extension(self) -> str:
        return {OS.MACOS64: "pkg", OS.WIN64: "exe", OS.LINUX64: "bin"}[self]


class Cluster(str, Enum):
    """Deployment target the wallet connects to."""

    MAINNET = "mainnet"
    STAGING = "staging"
    TESTNET = "testnet"

    @property
    def network(self) -> str:
        """Network name exported to the launcher.

        Staging runs against the mainnet network configuration.
        """
        if self is Cluster.TESTNET:
            return "testnet"
        return "mainnet"


class BackendKind(str, Enum):
    """Node backends that can be bundled."""

    CARDANO = "cardano"
    MANTIS = "mantis"


class CardanoBackendSpec(BaseModel):
    """Cardano node distribution ("daedalus-bridge") on disk."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["cardano"] = "cardano"
    bridge: Path = Field(description="Root of the backend distribution")


class MantisBackendSpec(BaseModel):
    """Mantis backend; packaging support is not implemented yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["mantis"] = "mantis"


BackendSpec = Annotated[
    Union[CardanoBackendSpec, MantisBackendSpec],
    Field(discriminator="kind"),
]


class BuildOptions(BaseModel):
    """Parsed build request."""

    model_config = ConfigDict(frozen=True)

    cluster: Cluster = Field(description="Cluster the installer is built for")
    app_name: str = Field(default="Daedalus", description="Application name used in config templates")
    output_dir: Path = Field(default=Path("."), description="Directory receiving the final package")
    backend: BackendSpec
    build_job: str | None = Field(default=None, description="CI build job identifier")
    test_installer: bool = Field(default=False, description="Install the package after building")


class InstallerConfig(BaseModel):
    """Installer settings resolved from the cluster configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    install_directory: str = Field(alias="installDirectory", min_length=1)
    mac_package_name: str = Field(alias="macPackageName", min_length=1)


class DarwinConfig(BaseModel):
    """macOS packaging names derived from the installer configuration."""

    model_config = ConfigDict(frozen=True)

    app_name_app: str = Field(description="Bundle directory name, e.g. Daedalus.app")
    app_name: str = Field(description="Bundle display name, e.g. Daedalus")
    pkg_name: str = Field(description="Package identifier, e.g. org.Daedalus.pkg")

    @classmethod
    def from_installer_config(cls, installer_config: InstallerConfig) -> DarwinConfig:
        return cls(
            app_name_app=f"{installer_config.install_directory}.app",
            app_name=installer_config.install_directory,
            pkg_name=f"org.{installer_config.mac_package_name}.pkg",
        )
