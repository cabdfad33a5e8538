"""Core infrastructure components for the installer builder."""

from .config import Config, get_config
from .exceptions import (
    CommandError,
    ConfigError,
    InstallerError,
    PackagingError,
    PipelineError,
    SigningError,
)
from .logging import bind_context, clear_context, get_logger, setup_logging
from .process import CommandRunner
from .types import ArtifactPath, StageResult, StageStatus

__all__ = [
    "Config",
    "get_config",
    "CommandError",
    "ConfigError",
    "InstallerError",
    "PackagingError",
    "PipelineError",
    "SigningError",
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
    "CommandRunner",
    "ArtifactPath",
    "StageResult",
    "StageStatus",
]
