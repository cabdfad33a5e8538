"""
Frontend Builder.

Builds the Electron frontend into a native .app bundle with the project's
npm packaging script.
NB: if the webpack/packager scripts change their output layout,
app_bundle_path() must follow.
"""

from __future__ import annotations

import os
from pathlib import Path

from ...core.config import Config, get_config
from ...core.exceptions import CommandError
from ...core.logging import get_logger
from ...core.process import CommandRunner
from ...models.build import DarwinConfig

logger = get_logger(__name__)


def app_bundle_path(frontend_dir: Path, darwin_config: DarwinConfig) -> Path:
    """Location where the packager writes the .app bundle."""
    return (
        frontend_dir
        / "release"
        / "darwin-x64"
        / f"{darwin_config.app_name}-darwin-x64"
        / darwin_config.app_name_app
    )


class FrontendBuilder:
    """Converts icons and runs the Electron packager."""

    def __init__(self, runner: CommandRunner | None = None, config: Config | None = None) -> None:
        self.runner = runner or CommandRunner()
        self.config = config or get_config()

    def build_icons(self) -> Path:
        paths = self.config.paths
        logger.info("Creating icons")
        self.runner.run(
            [
                self.config.tools.iconutil,
                "--convert",
                "icns",
                "--output",
                str(paths.icon_file),
                str(paths.icon_set),
            ],
            cwd=paths.installers_dir,
        )
        return paths.resolve(paths.icon_file)

    def npm_package(self, darwin_config: DarwinConfig) -> None:
        """Install node dependencies and run the packager script."""
        frontend_dir = self.config.paths.resolve(self.config.paths.frontend_dir)
        npm = self.config.tools.npm

        (frontend_dir / "release").mkdir(parents=True, exist_ok=True)

        logger.info("Installing nodejs dependencies")
        self.runner.run([npm, "install"], cwd=frontend_dir)

        logger.info("Running electron packager script")
        env = dict(os.environ, NODE_ENV="production")
        self.runner.run(
            [npm, "run", "package", "--", "--name", darwin_config.app_name],
            cwd=frontend_dir,
            env=env,
        )

        try:
            size = self.runner.run([self.config.tools.du, "-sh", "release"], cwd=frontend_dir, capture=True)
            logger.info("Size of Electron app", size=size.split("\t")[0].strip())
        except CommandError as e:
            logger.warning("Could not measure Electron app size", error=str(e))

    def build(self, darwin_config: DarwinConfig) -> Path:
        """Build the Electron app and return its component root path."""
        self.build_icons()
        self.npm_package(darwin_config)
        frontend_dir = self.config.paths.resolve(self.config.paths.frontend_dir)
        return app_bundle_path(frontend_dir, darwin_config)
