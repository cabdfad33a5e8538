"""Test configuration for daedalus-installer."""

import json
import tempfile
from pathlib import Path

import pytest

from daedalus_installer.core.config import Config, PathsConfig, SigningConfig
from daedalus_installer.core.exceptions import CommandError
from daedalus_installer.core.process import CommandRunner

MAINNET_TEMPLATE = """\
installer:
  installDirectory: Daedalus
  macPackageName: Daedalus
launcher:
  nodePath: cardano-node
  logsPrefix: "$HOME/Library/Application Support/${appName}/Logs"
  network: ${network}
  nodeArgs:
    - --configuration-key
    - ${cluster}_full
topology:
  wallet:
    relays:
      - - host: relays.cardano-mainnet.iohk.io
os:
  macos64:
    launcher:
      nodePath: ./cardano-node
      frontendPath: ./Frontend
  win64:
    installer:
      installDirectory: Daedalus Win
"""


class FakeRunner(CommandRunner):
    """Records commands and simulates the files the real tools produce."""

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.fail_on: set[str] = set()
        self.otool_outputs: dict[str, str] = {}
        self.scripts_seen: dict[str, list[str]] = {}

    @property
    def tools(self) -> list[str]:
        return [Path(call["args"][0]).name for call in self.calls]

    def commands(self, tool: str) -> list[list[str]]:
        return [call["args"] for call in self.calls if Path(call["args"][0]).name == tool]

    def run(self, cmd, cwd=None, env=None, capture=False):
        args = [str(c) for c in cmd]
        tool = Path(args[0]).name
        self.calls.append({"args": args, "cwd": cwd, "env": env, "capture": capture})

        if tool in self.fail_on:
            raise CommandError(message=f"{tool} failed", tool=tool, command=args, returncode=1)

        if tool == "npm" and args[1:3] == ["run", "package"]:
            name = args[args.index("--name") + 1]
            macos = Path(cwd) / "release" / "darwin-x64" / f"{name}-darwin-x64" / f"{name}.app" / "Contents" / "MacOS"
            macos.mkdir(parents=True, exist_ok=True)
            (macos / name).write_text("electron binary")
        elif tool == "du":
            return "187M\trelease\n"
        elif tool == "otool":
            target = args[-1]
            return self.otool_outputs.get(
                target,
                f"{target}:\n\t/usr/lib/libSystem.B.dylib (compatibility version 1.0.0, current version 1252.0.0)\n",
            )
        elif tool == "pkgbuild":
            if "--scripts" in args:
                scripts = Path(args[args.index("--scripts") + 1])
                self.scripts_seen[str(scripts)] = sorted(p.name for p in scripts.iterdir())
            Path(args[-1]).write_bytes(b"component pkg")
        elif tool in ("productbuild", "productsign"):
            Path(args[-1]).write_bytes(b"product pkg")
        elif tool == "pkgutil":
            return "Package \"x.pkg\":\n   Status: signed by a developer certificate issued by Apple\n"
        return ""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def installers_dir(temp_dir):
    """Installers directory inside a frontend project checkout.

    Layout mirrors the real repository: the frontend project (package.json)
    is the parent of the installers directory, which holds the config
    templates, the product definition and the dockutil helper.
    """
    (temp_dir / "package.json").write_text(json.dumps({"name": "daedalus", "version": "1.2.0"}))

    installers = temp_dir / "installers"
    (installers / "config").mkdir(parents=True)
    (installers / "config" / "mainnet.yaml").write_text(MAINNET_TEMPLATE)
    (installers / "data" / "scripts").mkdir(parents=True)
    (installers / "data" / "plist").write_text("<plist/>")
    (installers / "data" / "scripts" / "dockutil").write_text("#!/usr/bin/env python\n")
    (installers / "icons" / "electron.iconset").mkdir(parents=True)
    return installers


@pytest.fixture
def config(temp_dir, installers_dir):
    """Builder configuration pointing at the test installers directory."""
    return Config(
        paths=PathsConfig(
            installers_dir=installers_dir,
            scripts_tmp_root=temp_dir / "tmp",
        ),
        signing=SigningConfig(identity="Developer ID Installer: Test Org (TEST123)"),
    )


@pytest.fixture
def bridge(temp_dir):
    """Minimal Cardano node distribution."""
    root = temp_dir / "bridge"
    (root / "bin").mkdir(parents=True)
    (root / "config").mkdir()
    for name in ("cardano-launcher", "cardano-node", "cardano-x509-certificates"):
        (root / "bin" / name).write_text(f"{name} binary")
    (root / "config" / "configuration.yaml").write_text("mainnet_full: {}\n")
    (root / "config" / "log-config-prod.yaml").write_text("rotation: {}\n")
    (root / "config" / "mainnet-genesis.json").write_text("{}")
    (root / "config" / "mainnet-genesis-dryrun-with-stakeholders.json").write_text("{}")
    (root / "version").write_text("1.3.0\n")
    return root
