"""
Config Resolver.

Loads the per-cluster configuration templates and produces the installer
settings plus the launcher and wallet topology files bundled into the app.

A template lives at ``<input_dir>/<cluster>.yaml`` and holds three sections
(``installer``, ``launcher``, ``topology``) and an optional ``os`` mapping of
per-platform overrides that are deep-merged over them. String values may
reference ``${appName}``, ``${cluster}`` and ``${network}``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ...core.exceptions import ConfigError
from ...core.logging import get_logger
from ...models.build import OS, Cluster, InstallerConfig

logger = get_logger(__name__)

LAUNCHER_CONFIG_FILE = "launcher-config.yaml"
TOPOLOGY_FILE = "wallet-topology.yaml"

_SECTIONS = ("installer", "launcher", "topology")
_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _substitute(value: Any, variables: dict[str, str], path: Path) -> Any:
    if isinstance(value, str):
        def replacer(match: re.Match[str]) -> str:
            token = match.group(1)
            if token not in variables:
                raise ConfigError(message=f"Unknown placeholder: ${{{token}}}", path=str(path))
            return variables[token]

        return _VAR_PATTERN.sub(replacer, value)
    if isinstance(value, dict):
        return {k: _substitute(v, variables, path) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute(v, variables, path) for v in value]
    return value


def load_cluster_template(input_dir: Path, os: OS, cluster: Cluster) -> dict[str, Any]:
    """Load a cluster template with the platform overrides applied.

    Returns:
        Mapping of section name to section contents

    Raises:
        ConfigError: If the template is missing, malformed or lacks a section
    """
    path = input_dir / f"{cluster.value}.yaml"
    try:
        raw = yaml.safe_load(path.read_text())
    except FileNotFoundError as e:
        raise ConfigError(message=f"No configuration for cluster {cluster.value}", path=str(path), cause=e) from e
    except yaml.YAMLError as e:
        raise ConfigError(message="Malformed YAML", path=str(path), cause=e) from e

    if not isinstance(raw, dict):
        raise ConfigError(message="Template must be a mapping", path=str(path))

    platforms = raw.get("os") or {}
    if not isinstance(platforms, dict):
        raise ConfigError(message="'os' must map platform tags to overrides", path=str(path))
    overrides = platforms.get(os.value) or {}
    if not isinstance(overrides, dict):
        raise ConfigError(message=f"Overrides for '{os.value}' must be a mapping", path=str(path))
    sections: dict[str, Any] = {}
    for name in _SECTIONS:
        section = raw.get(name)
        if not isinstance(section, dict):
            raise ConfigError(message=f"Missing section '{name}'", path=str(path))
        override = overrides.get(name) or {}
        if not isinstance(override, dict):
            raise ConfigError(message=f"Override for '{name}' must be a mapping", path=str(path))
        sections[name] = _deep_merge(section, override)

    logger.debug("Loaded cluster template", path=str(path), os=os.value)
    return sections


def get_installer_config(input_dir: Path, os: OS, cluster: Cluster) -> InstallerConfig:
    """Resolve the installer settings for a platform and cluster.

    The installer section names the app itself, so only ``${cluster}`` and
    ``${network}`` are available to it.
    """
    template_path = input_dir / f"{cluster.value}.yaml"
    sections = load_cluster_template(input_dir, os, cluster)
    variables = {"cluster": cluster.value, "network": cluster.network}
    installer = _substitute(sections["installer"], variables, template_path)
    try:
        return InstallerConfig.model_validate(installer)
    except ValidationError as e:
        raise ConfigError(
            message="Invalid installer section",
            path=str(template_path),
            cause=e,
        ) from e


def generate_cluster_configs(
    input_dir: Path,
    os: OS,
    cluster: Cluster,
    app_name: str,
    output_dir: Path,
) -> list[Path]:
    """Render the launcher config and wallet topology for a cluster.

    Returns:
        Paths of the written launcher config and topology files
    """
    template_path = input_dir / f"{cluster.value}.yaml"
    sections = load_cluster_template(input_dir, os, cluster)
    variables = {"appName": app_name, "cluster": cluster.value, "network": cluster.network}

    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for section, file_name in (("launcher", LAUNCHER_CONFIG_FILE), ("topology", TOPOLOGY_FILE)):
        rendered = _substitute(sections[section], variables, template_path)
        target = output_dir / file_name
        target.write_text(yaml.safe_dump(rendered, default_flow_style=False, sort_keys=False))
        written.append(target)

    logger.info("Generated cluster configuration", cluster=cluster.value, files=[p.name for p in written])
    return written
