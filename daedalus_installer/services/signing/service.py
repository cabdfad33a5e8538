"""
Package signing.

Signs the installer with a Developer ID Installer identity that is already
present in a keychain, then checks the signature. Provisioning the identity
is the job of the CI environment.
"""

from __future__ import annotations

from pathlib import Path

from ...core.config import Config, get_config
from ...core.exceptions import CommandError, ConfigError, SigningError
from ...core.logging import get_logger
from ...core.process import CommandRunner

logger = get_logger(__name__)


class PackageSigner:
    """productsign/pkgutil wrapper."""

    def __init__(self, runner: CommandRunner | None = None, config: Config | None = None) -> None:
        self.runner = runner or CommandRunner()
        self.config = config or get_config()

    def _identity(self) -> str:
        identity = self.config.signing.identity
        if not identity:
            raise ConfigError(message="No signing identity configured (set DAEDALUS_SIGNING_IDENTITY)")
        return identity

    def sign(self, input_path: Path, output_path: Path) -> Path:
        """Sign ``input_path`` into ``output_path``.

        Raises:
            ConfigError: If no signing identity is configured
            SigningError: If productsign fails
        """
        cmd = [self.config.tools.productsign, "--sign", self._identity()]
        if self.config.signing.keychain:
            cmd += ["--keychain", str(self.config.signing.keychain)]
        cmd += [str(input_path), str(output_path)]

        try:
            self.runner.run(cmd)
        except CommandError as e:
            raise SigningError(
                message=f"Failed to sign {input_path}",
                tool=e.tool,
                command=e.command,
                returncode=e.returncode,
                output=e.output,
                package_path=str(input_path),
                cause=e,
            ) from e

        logger.info("Signed installer", path=str(output_path))
        return output_path

    def verify(self, path: Path) -> str:
        """Check the package signature and return pkgutil's report.

        Raises:
            SigningError: If the signature is missing or invalid
        """
        try:
            report = self.runner.run([self.config.tools.pkgutil, "--check-signature", str(path)], capture=True)
        except CommandError as e:
            raise SigningError(
                message=f"Signature check failed for {path}",
                tool=e.tool,
                command=e.command,
                returncode=e.returncode,
                output=e.output,
                package_path=str(path),
                cause=e,
            ) from e

        logger.info("Verified installer signature", path=str(path))
        logger.debug("pkgutil report", report=report)
        return report
