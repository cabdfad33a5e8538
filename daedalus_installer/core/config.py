"""
Configuration management for the Daedalus installer builder.

Provides type-safe settings for tool locations, input paths and package
signing, with environment variable overrides and defaults matching the
layout of the installers directory.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


class ToolsConfig(BaseModel):
    """External tools invoked by the build."""

    iconutil: str = Field(default="iconutil", description="Icon set converter")
    npm: str = Field(default="npm", description="Node package manager")
    du: str = Field(default="du", description="Disk usage reporter")
    otool: str = Field(default="otool", description="Mach-O load command lister")
    install_name_tool: str = Field(
        default="install_name_tool", description="Mach-O load path rewriter"
    )
    pkgbuild: str = Field(default="pkgbuild", description="Component package builder")
    productbuild: str = Field(default="productbuild", description="Product archive builder")
    productsign: str = Field(default="productsign", description="Installer package signer")
    pkgutil: str = Field(default="pkgutil", description="Package signature checker")
    installer: str = Field(default="installer", description="macOS installer CLI")
    sudo: str = Field(default="sudo", description="Privilege escalation for test installs")


class PathsConfig(BaseModel):
    """Input locations, relative to the installers directory unless absolute."""

    installers_dir: Path = Field(default=Path("."), description="Installers working directory")
    frontend_dir: Path = Field(default=Path(".."), description="Electron frontend project root")
    config_templates: Path = Field(default=Path("config"), description="Cluster config templates")
    product_plist: Path = Field(default=Path("data/plist"), description="productbuild definition")
    dockutil: Path = Field(default=Path("data/scripts/dockutil"), description="Dock helper script")
    icon_set: Path = Field(default=Path("icons/electron.iconset"), description="Icon source set")
    icon_file: Path = Field(default=Path("icons/electron.icns"), description="Converted icon")
    scripts_tmp_root: Path = Field(default=Path("/tmp"), description="Parent of temporary scripts dirs")

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the installers directory."""
        if path.is_absolute():
            return path
        return self.installers_dir / path


class SigningConfig(BaseModel):
    """Installer package signing settings."""

    identity: str | None = Field(default=None, description="Developer ID Installer identity")
    keychain: Path | None = Field(default=None, description="Keychain holding the identity")


class Config(BaseModel):
    """Root configuration for the installer builder."""

    project_name: str = Field(default="daedalus-installer", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    signing: SigningConfig = Field(default_factory=SigningConfig)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        keychain = os.environ.get("DAEDALUS_SIGNING_KEYCHAIN")
        return cls(
            log_level=os.environ.get("DAEDALUS_LOG_LEVEL", "INFO"),  # type: ignore
            paths=PathsConfig(
                installers_dir=Path(os.environ.get("DAEDALUS_INSTALLERS_DIR", ".")),
                frontend_dir=Path(os.environ.get("DAEDALUS_FRONTEND_DIR", "..")),
                config_templates=Path(os.environ.get("DAEDALUS_CONFIG_TEMPLATES", "config")),
            ),
            signing=SigningConfig(
                identity=os.environ.get("DAEDALUS_SIGNING_IDENTITY") or None,
                keychain=Path(keychain) if keychain else None,
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
