"""
Core type definitions for the installer build.

Stage results record what each step of the build did, for the summary the
CLI prints and for the structured log.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

ArtifactPath = Path


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StageStatus(str, Enum):
    """Status of a build stage."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class StageResult(BaseModel):
    """Result of a single build stage."""

    stage_name: str = Field(description="Name of the build stage")
    status: StageStatus = Field(default=StageStatus.RUNNING, description="Execution status")
    started_at: datetime = Field(default_factory=_utcnow)
    completed_at: datetime | None = Field(default=None)
    duration_seconds: float = Field(default=0.0)
    artifacts: list[ArtifactPath] = Field(default_factory=list, description="Produced artifacts")
    error_message: str | None = Field(default=None)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def mark_completed(self, artifacts: list[ArtifactPath] | None = None) -> None:
        """Mark stage as successfully completed."""
        self.status = StageStatus.COMPLETED
        self.completed_at = _utcnow()
        self.artifacts = artifacts or []
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    def mark_failed(self, error: str) -> None:
        """Mark stage as failed."""
        self.status = StageStatus.FAILED
        self.completed_at = _utcnow()
        self.error_message = error
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    def mark_skipped(self, reason: str) -> None:
        """Mark stage as skipped, recording why."""
        self.status = StageStatus.SKIPPED
        self.completed_at = _utcnow()
        self.metadata["reason"] = reason
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()
