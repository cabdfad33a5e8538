"""
Exception hierarchy for the Daedalus installer builder.

All exceptions inherit from InstallerError so the CLI can report any fatal
condition the same way. Each exception carries context for logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class InstallerError(Exception):
    """Base exception for all installer build errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ConfigError(InstallerError):
    """Raised when configuration is missing or malformed."""

    path: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        if self.path:
            return f"Configuration error in '{self.path}': {base}"
        return f"Configuration error: {base}"


@dataclass
class PackagingError(InstallerError):
    """Raised when the inputs to a package are incomplete or corrupt."""

    artifact_path: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        artifact = f" | artifact: {self.artifact_path}" if self.artifact_path else ""
        return f"Packaging error: {base}{artifact}"


@dataclass
class CommandError(InstallerError):
    """Raised when an external tool exits non-zero or cannot be started."""

    tool: str = ""
    command: list[str] = field(default_factory=list)
    returncode: int | None = None
    output: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        code = f" (exit {self.returncode})" if self.returncode is not None else ""
        tail = f"\n{self.output.strip()}" if self.output.strip() else ""
        return f"[{self.tool}]{code}: {base}{tail}"


@dataclass
class SigningError(CommandError):
    """Raised when signing or signature verification fails."""

    package_path: str = ""


@dataclass
class PipelineError(InstallerError):
    """Raised when a pipeline stage fails."""

    stage: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Build failed at stage '{self.stage}': {base}"
