"""Installer hook scripts."""

from __future__ import annotations

POSTINSTALL_TEMPLATE = (
    "#!/usr/bin/env bash\n"
    "#\n"
    "# See /var/log/install.log to debug this\n"
    "\n"
    'src_pkg="$1"\n'
    'dst_root="$2"\n'
    'dst_mount="$3"\n'
    'sys_root="$4"\n'
    './dockutil --add "${{dst_root}}/{bundle}" --allhomes\n'
)


def render_postinstall(bundle_name: str) -> str:
    """Postinstall hook adding the installed bundle to every user's dock."""
    return POSTINSTALL_TEMPLATE.format(bundle=bundle_name)
