"""Unit tests for the generated launcher and postinstall scripts."""

from daedalus_installer.models.build import Cluster
from daedalus_installer.services.component_root import render_launcher_script
from daedalus_installer.services.installer import render_postinstall


class TestLauncherScript:
    """Tests for the app launcher script."""

    def test_exact_contents(self):
        expected = (
            "#!/usr/bin/env bash\n"
            'cd "$(dirname "$0")"\n'
            'mkdir -p "$HOME/Library/Application Support/Daedalus/Secrets-1.0"\n'
            'mkdir -p "$HOME/Library/Application Support/Daedalus/Logs/pub"\n'
            "export NETWORK=mainnet\n"
            'export REPORT_URL="fixme"\n'
            "./cardano-launcher\n"
        )
        assert render_launcher_script("Daedalus", "mainnet") == expected

    def test_reproducible(self):
        assert render_launcher_script("Daedalus", "testnet") == render_launcher_script("Daedalus", "testnet")

    def test_cluster_network(self):
        script = render_launcher_script("Daedalus Staging", Cluster.STAGING.network)
        assert "export NETWORK=mainnet\n" in script
        assert 'mkdir -p "$HOME/Library/Application Support/Daedalus Staging/Secrets-1.0"' in script


class TestPostinstallScript:
    """Tests for the installer postinstall hook."""

    def test_exact_contents(self):
        expected = (
            "#!/usr/bin/env bash\n"
            "#\n"
            "# See /var/log/install.log to debug this\n"
            "\n"
            'src_pkg="$1"\n'
            'dst_root="$2"\n'
            'dst_mount="$3"\n'
            'sys_root="$4"\n'
            './dockutil --add "${dst_root}/Daedalus.app" --allhomes\n'
        )
        assert render_postinstall("Daedalus.app") == expected
