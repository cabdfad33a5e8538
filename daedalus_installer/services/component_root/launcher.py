"""Launcher script started by macOS when the app is opened."""

from __future__ import annotations


def render_launcher_script(app_name: str, network: str) -> str:
    data_dir = f"$HOME/Library/Application Support/{app_name}"
    lines = [
        "#!/usr/bin/env bash",
        'cd "$(dirname "$0")"',
        f'mkdir -p "{data_dir}/Secrets-1.0"',
        f'mkdir -p "{data_dir}/Logs/pub"',
        f"export NETWORK={network}",
        'export REPORT_URL="fixme"',
        "./cardano-launcher",
    ]
    return "".join(line + "\n" for line in lines)
