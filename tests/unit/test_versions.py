"""Unit tests for version resolution and package naming."""

import json

import pytest

from daedalus_installer.core.exceptions import ConfigError
from daedalus_installer.models.build import OS, BackendKind, Cluster
from daedalus_installer.services.versions import (
    UNKNOWN_VERSION,
    package_file_name,
    read_cardano_version_file,
    read_frontend_version,
    read_version_file,
)


class TestReadVersionFile:
    """Tests for the backend version file reader."""

    def test_missing_file_returns_empty_string(self, temp_dir):
        assert read_version_file(temp_dir / "version") == ""

    def test_empty_file_returns_unknown(self, temp_dir):
        path = temp_dir / "version"
        path.write_text("")
        assert read_version_file(path) == UNKNOWN_VERSION == "UNKNOWN"

    def test_first_line_only(self, temp_dir):
        path = temp_dir / "version"
        path.write_text("1.2.3\nfoo\n")
        assert read_version_file(path) == "1.2.3"

    def test_other_io_errors_propagate(self, temp_dir):
        """A directory in place of the file is a real I/O failure."""
        path = temp_dir / "version"
        path.mkdir()
        with pytest.raises(OSError):
            read_version_file(path)

    def test_cardano_bridge_version(self, bridge):
        assert read_cardano_version_file(bridge) == "1.3.0"


class TestReadFrontendVersion:
    """Tests for package.json version lookup."""

    def test_reads_version(self, temp_dir):
        path = temp_dir / "package.json"
        path.write_text(json.dumps({"version": "0.11.0"}))
        assert read_frontend_version(path) == "0.11.0"

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError):
            read_frontend_version(temp_dir / "package.json")

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "package.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            read_frontend_version(path)

    def test_missing_version_field(self, temp_dir):
        path = temp_dir / "package.json"
        path.write_text(json.dumps({"name": "daedalus"}))
        with pytest.raises(ConfigError, match="no version"):
            read_frontend_version(path)


class TestPackageFileName:
    """Tests for installer file naming."""

    def test_cardano_with_build_job(self):
        name = package_file_name(OS.MACOS64, Cluster.MAINNET, "0.11.0", BackendKind.CARDANO, "1.3.0", "5302")
        assert name == "daedalus-0.11.0-cardano-sl-1.3.0-mainnet-macos-5302.pkg"

    def test_without_build_job(self):
        name = package_file_name(OS.MACOS64, Cluster.TESTNET, "0.11.0", BackendKind.CARDANO, "1.3.0")
        assert name == "daedalus-0.11.0-cardano-sl-1.3.0-testnet-macos.pkg"

    def test_mantis_ignores_backend_version(self):
        name = package_file_name(OS.MACOS64, Cluster.STAGING, "0.11.0", BackendKind.MANTIS, "whatever")
        assert name == "daedalus-0.11.0-mantis-staging-macos.pkg"

    def test_extension_follows_os(self):
        name = package_file_name(OS.WIN64, Cluster.MAINNET, "1.0.0", BackendKind.CARDANO, "2.0.0")
        assert name.endswith("-windows.exe")
