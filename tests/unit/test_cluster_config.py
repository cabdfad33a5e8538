"""Unit tests for cluster configuration resolution."""

import pytest
import yaml

from daedalus_installer.core.exceptions import ConfigError
from daedalus_installer.models.build import OS, Cluster, DarwinConfig
from daedalus_installer.services.cluster_config import (
    generate_cluster_configs,
    get_installer_config,
    load_cluster_template,
)


class TestInstallerConfig:
    """Tests for installer settings lookup."""

    def test_macos_installer_config(self, installers_dir):
        cfg = get_installer_config(installers_dir / "config", OS.MACOS64, Cluster.MAINNET)
        assert cfg.install_directory == "Daedalus"
        assert cfg.mac_package_name == "Daedalus"

    def test_os_override_applies(self, installers_dir):
        cfg = get_installer_config(installers_dir / "config", OS.WIN64, Cluster.MAINNET)
        assert cfg.install_directory == "Daedalus Win"

    def test_darwin_config_derivation(self, installers_dir):
        cfg = get_installer_config(installers_dir / "config", OS.MACOS64, Cluster.MAINNET)
        darwin = DarwinConfig.from_installer_config(cfg)
        assert darwin.app_name_app == "Daedalus.app"
        assert darwin.app_name == "Daedalus"
        assert darwin.pkg_name == "org.Daedalus.pkg"

    def test_missing_cluster_template(self, installers_dir):
        with pytest.raises(ConfigError, match="testnet"):
            get_installer_config(installers_dir / "config", OS.MACOS64, Cluster.TESTNET)

    def test_malformed_yaml(self, installers_dir):
        (installers_dir / "config" / "staging.yaml").write_text("installer: [unclosed\n")
        with pytest.raises(ConfigError, match="Malformed"):
            get_installer_config(installers_dir / "config", OS.MACOS64, Cluster.STAGING)

    def test_missing_section(self, installers_dir):
        (installers_dir / "config" / "staging.yaml").write_text("installer:\n  installDirectory: X\n")
        with pytest.raises(ConfigError, match="launcher"):
            load_cluster_template(installers_dir / "config", OS.MACOS64, Cluster.STAGING)

    def test_missing_key(self, installers_dir):
        (installers_dir / "config" / "staging.yaml").write_text(
            "installer:\n  installDirectory: X\nlauncher: {}\ntopology: {}\n"
        )
        with pytest.raises(ConfigError, match="installer section"):
            get_installer_config(installers_dir / "config", OS.MACOS64, Cluster.STAGING)

    def test_installer_placeholders_substituted(self, installers_dir):
        (installers_dir / "config" / "staging.yaml").write_text(
            "installer: {installDirectory: 'Daedalus ${cluster}', macPackageName: 'Daedalus-${network}'}\n"
            "launcher: {}\n"
            "topology: {}\n"
        )
        cfg = get_installer_config(installers_dir / "config", OS.MACOS64, Cluster.STAGING)
        assert cfg.install_directory == "Daedalus staging"
        assert cfg.mac_package_name == "Daedalus-mainnet"

    def test_installer_unknown_placeholder(self, installers_dir):
        (installers_dir / "config" / "staging.yaml").write_text(
            "installer: {installDirectory: Daedalus, macPackageName: '${bogus}'}\n"
            "launcher: {}\n"
            "topology: {}\n"
        )
        with pytest.raises(ConfigError, match="bogus"):
            get_installer_config(installers_dir / "config", OS.MACOS64, Cluster.STAGING)

    def test_platform_override_must_be_mapping(self, installers_dir):
        (installers_dir / "config" / "staging.yaml").write_text(
            "installer: {installDirectory: X, macPackageName: X}\n"
            "launcher: {}\n"
            "topology: {}\n"
            "os: {macos64: [1, 2]}\n"
        )
        with pytest.raises(ConfigError, match="macos64"):
            load_cluster_template(installers_dir / "config", OS.MACOS64, Cluster.STAGING)


class TestGenerateClusterConfigs:
    """Tests for launcher config and topology rendering."""

    def test_writes_both_files(self, installers_dir, temp_dir):
        out = temp_dir / "out"
        launcher, topology = generate_cluster_configs(
            installers_dir / "config", OS.MACOS64, Cluster.MAINNET, "Daedalus", out
        )
        assert launcher == out / "launcher-config.yaml"
        assert topology == out / "wallet-topology.yaml"

        rendered = yaml.safe_load(launcher.read_text())
        assert rendered["nodePath"] == "./cardano-node"
        assert rendered["frontendPath"] == "./Frontend"
        assert rendered["network"] == "mainnet"
        assert rendered["logsPrefix"] == "$HOME/Library/Application Support/Daedalus/Logs"
        assert rendered["nodeArgs"] == ["--configuration-key", "mainnet_full"]

        relays = yaml.safe_load(topology.read_text())["wallet"]["relays"]
        assert relays[0][0]["host"] == "relays.cardano-mainnet.iohk.io"

    def test_unknown_placeholder(self, installers_dir, temp_dir):
        (installers_dir / "config" / "staging.yaml").write_text(
            "installer: {installDirectory: X, macPackageName: X}\n"
            "launcher: {reportServer: '${reportUrl}'}\n"
            "topology: {}\n"
        )
        with pytest.raises(ConfigError, match="reportUrl"):
            generate_cluster_configs(
                installers_dir / "config", OS.MACOS64, Cluster.STAGING, "Daedalus", temp_dir / "out"
            )
