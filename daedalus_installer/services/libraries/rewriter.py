"""
Library Rewriter.

Makes the bundled backend executables self-contained: every non-system
dylib they load is copied next to them and the load commands are rewritten
to @executable_path so the app runs on machines without those libraries.
"""

from __future__ import annotations

import shutil
import stat
from collections.abc import Iterable
from pathlib import Path

from ...core.config import Config, get_config
from ...core.exceptions import PackagingError
from ...core.logging import get_logger
from ...core.process import CommandRunner

logger = get_logger(__name__)

SYSTEM_PREFIXES = ("/usr/lib/", "/System/")
RELATIVE_PREFIXES = ("@executable_path", "@loader_path", "@rpath")


def parse_otool_output(output: str) -> list[str]:
    """Extract library paths from ``otool -L`` output.

    Unindented lines ending in ``:`` are headers naming the inspected file,
    one per architecture for a universal binary. The indented lines under
    them read ``<path> (compatibility version ..., current version ...)``.
    A library linked by several architectures is listed once.
    """
    libraries: list[str] = []
    for line in output.splitlines():
        entry = line.strip()
        if not entry or (not line[0].isspace() and entry.endswith(":")):
            continue
        library = entry.split(" (", 1)[0].strip()
        if library not in libraries:
            libraries.append(library)
    return libraries


def needs_bundling(library: str) -> bool:
    """Whether a load path points outside the OS and outside the bundle."""
    return not library.startswith(SYSTEM_PREFIXES + RELATIVE_PREFIXES)


def make_writable(path: Path) -> None:
    path.chmod(path.stat().st_mode | stat.S_IWUSR)


class LibraryRewriter:
    """Bundles and relinks the dynamic libraries of Mach-O executables."""

    def __init__(self, runner: CommandRunner | None = None, config: Config | None = None) -> None:
        self.runner = runner or CommandRunner()
        self.config = config or get_config()

    def dependencies(self, binary: Path) -> list[str]:
        output = self.runner.run([self.config.tools.otool, "-L", str(binary)], capture=True)
        return parse_otool_output(output)

    def _bundle(self, library: str, target: Path) -> None:
        source = Path(library)
        if not source.is_file():
            raise PackagingError(
                message=f"Linked library not found: {library}",
                artifact_path=str(target.parent),
            )
        shutil.copy2(source, target)
        make_writable(target)
        self.runner.run(
            [self.config.tools.install_name_tool, "-id", f"@executable_path/{target.name}", str(target)]
        )

    def chain(self, dir: Path, binaries: Iterable[Path]) -> list[Path]:
        """Bundle the transitive non-system libraries of ``binaries`` into ``dir``.

        Returns:
            Paths of the libraries copied into ``dir``
        """
        bundled: dict[str, Path] = {}
        queue = [Path(b) for b in binaries]

        while queue:
            binary = queue.pop(0)
            for library in self.dependencies(binary):
                if not needs_bundling(library):
                    continue
                name = Path(library).name
                if name not in bundled:
                    target = dir / name
                    logger.info("Bundling library", library=library, into=str(dir))
                    self._bundle(library, target)
                    bundled[name] = target
                    queue.append(target)
                self.runner.run(
                    [
                        self.config.tools.install_name_tool,
                        "-change",
                        library,
                        f"@executable_path/{name}",
                        str(binary),
                    ]
                )

        return list(bundled.values())
