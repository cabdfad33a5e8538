"""
Cardano backend.

Stages the executables, configuration and genesis files of a Cardano node
distribution into the app bundle and relinks the executables' libraries.
"""

from __future__ import annotations

import shutil
import stat
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ...core.config import Config, get_config
from ...core.exceptions import PackagingError
from ...core.logging import get_logger
from ...core.process import CommandRunner
from ...models.build import BackendKind, DarwinConfig
from ..cluster_config import LAUNCHER_CONFIG_FILE, TOPOLOGY_FILE
from ..installer.scripts import render_postinstall
from ..libraries import LibraryRewriter
from ..versions import read_cardano_version_file
from .base import Backend

logger = get_logger(__name__)

EXECUTABLES = ("cardano-launcher", "cardano-node", "cardano-x509-certificates")
CONFIG_FILES = ("configuration.yaml", "log-config-prod.yaml")
GENESIS_PATTERN = "*genesis*.json"


def _make_tree_writable(root: Path) -> None:
    for path in [root, *root.rglob("*")]:
        if not path.is_symlink():
            path.chmod(path.stat().st_mode | stat.S_IWUSR)


class CardanoBackend(Backend):
    """Backend built from a Cardano node distribution directory."""

    kind = BackendKind.CARDANO

    def __init__(
        self,
        bridge: Path,
        runner: CommandRunner | None = None,
        config: Config | None = None,
        rewriter: LibraryRewriter | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            bridge: Root of the distribution (holds bin/, config/ and version)
            runner: Command runner shared with the rest of the build
            config: Builder configuration
            rewriter: Library rewriter used on the copied executables
        """
        self.bridge = bridge
        self.runner = runner or CommandRunner()
        self.config = config or get_config()
        self.rewriter = rewriter or LibraryRewriter(self.runner, self.config)

    def resolve_version(self) -> str:
        return read_cardano_version_file(self.bridge)

    def genesis_files(self) -> list[Path]:
        """Genesis files shipped in the distribution.

        Raises:
            PackagingError: If the distribution carries none
        """
        config_dir = self.bridge / "config"
        files = sorted(config_dir.glob(GENESIS_PATTERN))
        if not files:
            raise PackagingError(
                message="Cardano package carries no genesis files.",
                artifact_path=str(config_dir),
            )
        return files

    def assemble_components(self, dir: Path) -> None:
        genesis = self.genesis_files()
        installers_dir = self.config.paths.installers_dir
        dir.mkdir(parents=True, exist_ok=True)

        for name in EXECUTABLES:
            shutil.copy2(self.bridge / "bin" / name, dir / name)

        for name in CONFIG_FILES:
            shutil.copy2(self.bridge / "config" / name, dir / name)

        for path in genesis:
            shutil.copy2(path, dir / path.name)

        for name in (LAUNCHER_CONFIG_FILE, TOPOLOGY_FILE):
            shutil.copy2(installers_dir / name, dir / name)

        _make_tree_writable(dir)

        bundled = self.rewriter.chain(dir, [dir / name for name in EXECUTABLES])
        logger.info(
            "Staged Cardano backend",
            dir=str(dir),
            genesis=[p.name for p in genesis],
            libraries=[p.name for p in bundled],
        )

    @contextmanager
    def scripts_dir(self, darwin_config: DarwinConfig) -> Iterator[Path | None]:
        paths = self.config.paths
        tmp_root = paths.scripts_tmp_root
        tmp_root.mkdir(parents=True, exist_ok=True)

        with tempfile.TemporaryDirectory(prefix="scripts", dir=tmp_root) as tmp:
            scripts = Path(tmp)
            shutil.copy2(paths.resolve(paths.dockutil), scripts / "dockutil")

            postinstall = scripts / "postinstall"
            postinstall.write_text(render_postinstall(darwin_config.app_name_app))
            postinstall.chmod(postinstall.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

            logger.debug("Installer scripts", dir=str(scripts), files=sorted(p.name for p in scripts.iterdir()))
            yield scripts
