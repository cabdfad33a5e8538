"""Cluster configuration resolution."""

from .service import (
    LAUNCHER_CONFIG_FILE,
    TOPOLOGY_FILE,
    generate_cluster_configs,
    get_installer_config,
    load_cluster_template,
)

__all__ = [
    "LAUNCHER_CONFIG_FILE",
    "TOPOLOGY_FILE",
    "generate_cluster_configs",
    "get_installer_config",
    "load_cluster_template",
]
