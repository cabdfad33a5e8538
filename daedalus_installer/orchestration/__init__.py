"""Orchestration module for the installer build."""

from .pipeline import InstallerPipeline, PipelineResult, run_pipeline

__all__ = [
    "InstallerPipeline",
    "PipelineResult",
    "run_pipeline",
]
