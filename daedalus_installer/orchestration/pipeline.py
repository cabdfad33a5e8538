"""
Installer build pipeline.

Runs the build stages once, in order: cluster configuration, backend version,
frontend build, component root, installer, signing, and the optional test
install. Any failing stage aborts the build; nothing is retried or rolled
back.

An overview of .pkg internals:
http://www.peachpit.com/articles/article.aspx?p=605381&seqNum=2
"""

from __future__ import annotations

import shutil
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from ..core.config import Config, get_config
from ..core.exceptions import PipelineError
from ..core.logging import bind_context, clear_context, get_logger
from ..core.process import CommandRunner
from ..core.types import StageResult
from ..models.build import OS, BuildOptions, DarwinConfig
from ..services.backends import Backend, backend_for
from ..services.cluster_config import (
    LAUNCHER_CONFIG_FILE,
    generate_cluster_configs,
    get_installer_config,
)
from ..services.component_root import ComponentRootAssembler
from ..services.frontend import FrontendBuilder
from ..services.installer import InstallerBuilder
from ..services.signing import PackageSigner
from ..services.versions import package_file_name, read_frontend_version

logger = get_logger(__name__)

TARGET_OS = OS.MACOS64


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PipelineResult(BaseModel):
    """Outcome of an installer build."""

    run_id: str
    success: bool = False
    started_at: datetime = Field(default_factory=_utcnow)
    completed_at: datetime | None = None
    stages: list[StageResult] = Field(default_factory=list)

    darwin_config: DarwinConfig | None = None
    backend_version: str | None = None
    frontend_version: str | None = None
    package_path: Path | None = None

    error: str | None = None
    failed_stage: str | None = None


class InstallerPipeline:
    """Sequential installer build for one set of build options."""

    def __init__(
        self,
        options: BuildOptions,
        config: Config | None = None,
        runner: CommandRunner | None = None,
        backend: Backend | None = None,
    ) -> None:
        self.options = options
        self.config = config or get_config()
        self.runner = runner or CommandRunner()
        self.backend = backend or backend_for(options.backend, runner=self.runner, config=self.config)
        self.result = PipelineResult(run_id=str(uuid.uuid4())[:8])

    @contextmanager
    def _stage(self, name: str) -> Iterator[StageResult]:
        stage = StageResult(stage_name=name)
        self.result.stages.append(stage)
        logger.info("Stage started", stage=name)
        try:
            yield stage
        except Exception as e:
            stage.mark_failed(str(e))
            self.result.failed_stage = name
            self.result.error = str(e)
            self.result.completed_at = _utcnow()
            logger.error("Stage failed", stage=name, error=str(e))
            raise PipelineError(message=str(e), stage=name) from e
        if stage.completed_at is None:
            stage.mark_completed()
        logger.info("Stage completed", stage=name, duration_seconds=round(stage.duration_seconds, 2))

    def resolve_config(self) -> DarwinConfig:
        paths = self.config.paths
        templates = paths.resolve(paths.config_templates)
        cluster = self.options.cluster

        launcher_config, topology = generate_cluster_configs(
            templates, TARGET_OS, cluster, self.options.app_name, paths.installers_dir
        )
        frontend_dir = paths.resolve(paths.frontend_dir)
        shutil.copy2(launcher_config, frontend_dir / LAUNCHER_CONFIG_FILE)

        installer_config = get_installer_config(templates, TARGET_OS, cluster)
        darwin_config = DarwinConfig.from_installer_config(installer_config)
        logger.info("Darwin packaging", **darwin_config.model_dump())
        return darwin_config

    def run(self) -> PipelineResult:
        """Run every stage.

        Returns:
            The successful build result

        Raises:
            PipelineError: Wrapping the error of the first failing stage
        """
        bind_context(
            run_id=self.result.run_id,
            cluster=self.options.cluster.value,
            backend=self.backend.kind.value,
        )
        try:
            return self._run_stages()
        finally:
            clear_context()

    def _run_stages(self) -> PipelineResult:
        options = self.options
        paths = self.config.paths
        result = self.result
        logger.info("Starting installer build", output_dir=str(options.output_dir))

        with self._stage("cluster_config") as stage:
            darwin_config = self.resolve_config()
            result.darwin_config = darwin_config
            stage.metadata["pkg_name"] = darwin_config.pkg_name

        with self._stage("backend_version") as stage:
            result.backend_version = self.backend.resolve_version()
            stage.metadata["version"] = result.backend_version

        with self._stage("frontend") as stage:
            app_root = FrontendBuilder(self.runner, self.config).build(darwin_config)
            stage.mark_completed([app_root])

        with self._stage("component_root") as stage:
            launcher = ComponentRootAssembler(self.backend).assemble(app_root, options.cluster, darwin_config)
            stage.mark_completed([launcher])

        with self._stage("frontend_version") as stage:
            frontend_dir = paths.resolve(paths.frontend_dir)
            result.frontend_version = read_frontend_version(frontend_dir / "package.json")
            stage.metadata["version"] = result.frontend_version

        pkg = package_file_name(
            TARGET_OS,
            options.cluster,
            result.frontend_version,
            self.backend.kind,
            result.backend_version,
            options.build_job,
        )
        final_pkg = options.output_dir / pkg

        with self._stage("installer") as stage:
            builder = InstallerBuilder(self.backend, self.runner, self.config)
            unsigned_pkg = builder.make_installer(darwin_config, app_root, options.output_dir, pkg)
            stage.mark_completed([unsigned_pkg])

        with self._stage("sign") as stage:
            signer = PackageSigner(self.runner, self.config)
            signer.sign(unsigned_pkg, final_pkg)
            signer.verify(final_pkg)
            unsigned_pkg.unlink()
            stage.mark_completed([final_pkg])

        result.package_path = final_pkg
        logger.info("Generated installer", path=str(final_pkg))

        with self._stage("test_install") as stage:
            if options.test_installer:
                logger.info("Testing the installer for installability")
                self.runner.run(
                    [
                        self.config.tools.sudo,
                        self.config.tools.installer,
                        "-dumplog",
                        "-verbose",
                        "-target",
                        "/",
                        "-pkg",
                        str(final_pkg),
                    ]
                )
            else:
                stage.mark_skipped("test install not requested")

        result.success = True
        result.completed_at = _utcnow()
        return result


def run_pipeline(options: BuildOptions, config: Config | None = None) -> PipelineResult:
    """Convenience function to build an installer.

    Args:
        options: Build request
        config: Builder configuration (environment-derived if None)

    Returns:
        PipelineResult of the successful build
    """
    return InstallerPipeline(options, config=config).run()
