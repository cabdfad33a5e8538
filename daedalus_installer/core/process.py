"""
External command execution.

Every tool the build drives goes through CommandRunner: the command is
logged, runs to completion in an explicit working directory, and a non-zero
exit raises CommandError.
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from .exceptions import CommandError
from .logging import get_logger

logger = get_logger(__name__)


class CommandRunner:
    """Runs external tools synchronously."""

    def run(
        self,
        cmd: Sequence[str | Path],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> str:
        """Run a command and wait for it to exit.

        Args:
            cmd: Program and arguments
            cwd: Working directory for the child process
            env: Full environment for the child process (inherited if None)
            capture: Capture and return stdout instead of streaming it

        Returns:
            Captured stdout, or an empty string when not capturing

        Raises:
            CommandError: If the tool cannot be started or exits non-zero
        """
        args = [str(c) for c in cmd]
        tool = Path(args[0]).name
        logger.info("Running command", command=" ".join(args), cwd=str(cwd) if cwd else None)

        try:
            result = subprocess.run(
                args,
                cwd=cwd,
                env=dict(env) if env is not None else None,
                stdin=subprocess.DEVNULL,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError as e:
            raise CommandError(
                message=f"Executable not found: {args[0]}",
                tool=tool,
                command=args,
                cause=e,
            ) from e

        if result.returncode != 0:
            raise CommandError(
                message=f"Command failed: {' '.join(args)}",
                tool=tool,
                command=args,
                returncode=result.returncode,
                output=(result.stderr or "") if capture else "",
            )

        return result.stdout if capture else ""
