"""
Installer Builder.

Wraps the component root into a product archive with pkgbuild and
productbuild. The result is unsigned; signing is a separate step.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ...core.config import Config, get_config
from ...core.logging import get_logger
from ...core.process import CommandRunner
from ...models.build import DarwinConfig

if TYPE_CHECKING:
    from ..backends.base import Backend

logger = get_logger(__name__)

INSTALL_LOCATION = "/Applications"


def unsigned_package_path(output_dir: Path, pkg: str) -> Path:
    """``<out>/<name>.unsigned.pkg`` for a package named ``<name>.pkg``."""
    return output_dir / f"{Path(pkg).stem}.unsigned.pkg"


class InstallerBuilder:
    """Builds the unsigned .pkg for an assembled component root."""

    def __init__(
        self,
        backend: Backend,
        runner: CommandRunner | None = None,
        config: Config | None = None,
    ) -> None:
        self.backend = backend
        self.runner = runner or CommandRunner()
        self.config = config or get_config()

    def pkgbuild_args(self, darwin_config: DarwinConfig, scripts_dir: Path | None, component_root: Path, out: Path) -> list[str]:
        args = [self.config.tools.pkgbuild, "--identifier", darwin_config.pkg_name]
        if scripts_dir is not None:
            args += ["--scripts", str(scripts_dir)]
        args += [
            "--component",
            str(component_root),
            "--install-location",
            INSTALL_LOCATION,
            str(out),
        ]
        return args

    def make_installer(
        self,
        darwin_config: DarwinConfig,
        component_root: Path,
        output_dir: Path,
        pkg: str,
    ) -> Path:
        """Build the installer and return the unsigned package path.

        Args:
            darwin_config: Packaging names
            component_root: The assembled .app bundle
            output_dir: Directory receiving the packages
            pkg: File name of the final package

        Raises:
            CommandError: If pkgbuild or productbuild fails
        """
        component_pkg = output_dir / pkg
        unsigned_pkg = unsigned_package_path(output_dir, pkg)

        output_dir.mkdir(parents=True, exist_ok=True)

        with self.backend.scripts_dir(darwin_config) as scripts_dir:
            self.runner.run(self.pkgbuild_args(darwin_config, scripts_dir, component_root, component_pkg))

        paths = self.config.paths
        self.runner.run(
            [
                self.config.tools.productbuild,
                "--product",
                str(paths.resolve(paths.product_plist)),
                "--package",
                str(component_pkg),
                str(unsigned_pkg),
            ]
        )

        component_pkg.unlink()
        logger.info("Built unsigned installer", path=str(unsigned_pkg))
        return unsigned_pkg
