"""Smoke tests for the command line interface."""

import json

import pytest
import yaml
from typer.testing import CliRunner

from cloudinv import __version__
from cloudinv.api.azure import AzureClient
from cloudinv.api.vsphere import VSphereClient
from cloudinv.cli.main import app
from cloudinv.config import AuthConfig, ConfigManager, ProfileConfig

runner = CliRunner()

VMS = [
    {"vm": "vm-100", "name": "web-01", "power_state": "POWERED_ON", "cpu_count": 2, "memory_size_MiB": 4096},
    {"vm": "vm-200", "name": "db-01", "power_state": "POWERED_OFF", "cpu_count": 4, "memory_size_MiB": 16384},
]

SKUS = [
    {"resourceType": "virtualMachines", "name": "Standard_NV6s_v2", "locations": ["westus2"]},
    {"resourceType": "virtualMachines", "name": "Standard_PB6s", "locations": ["westus2"]},
    {"resourceType": "disks", "name": "Premium_LRS", "locations": ["westus2"]},
]


@pytest.fixture()
def config_dir(tmp_path, monkeypatch):
    """Point the CLI at a temporary config directory with one profile per provider."""
    monkeypatch.setenv("CLOUDINV_CONFIG_DIR", str(tmp_path))
    manager = ConfigManager(tmp_path)
    manager.add_profile(
        "lab",
        ProfileConfig(
            provider="vsphere",
            host="vc.example.com",
            auth=AuthConfig(type="basic", user="admin", password="pw"),
        ),
    )
    manager.add_profile(
        "cloud",
        ProfileConfig(
            provider="azure",
            subscription_id="sub-1",
            auth=AuthConfig(
                type="client_secret", client_id="app", client_secret="shh", tenant_id="tenant"
            ),
        ),
    )
    return tmp_path


@pytest.fixture()
def vcenter(make_handler, monkeypatch):
    """Route the vsphere commands to a mock vCenter."""
    handler = make_handler(
        {
            ("GET", "/api/vcenter/vm"): VMS,
            ("GET", "/api/vcenter/folder"): [{"folder": "group-h4", "name": "host", "type": "HOST"}],
        }
    )

    class _MockedClient(VSphereClient):
        @classmethod
        def from_profile(cls, profile, transport=None):
            return super().from_profile(profile, transport=handler.transport)

    monkeypatch.setattr("cloudinv.cli.vsphere.VSphereClient", _MockedClient)
    return handler


@pytest.fixture()
def arm(make_handler, monkeypatch, mock_azure_credential):
    """Route the azure commands to a mock Resource Manager."""
    handler = make_handler(
        {
            ("GET", "/subscriptions/sub-1/providers/Microsoft.Compute/skus"): {"value": SKUS},
            ("GET", "/subscriptions/sub-1/locations"): {
                "value": [{"name": "westus2", "displayName": "West US 2"}]
            },
        }
    )

    class _MockedClient(AzureClient):
        @classmethod
        def from_profile(cls, profile, transport=None):
            return super().from_profile(profile, transport=handler.transport)

    monkeypatch.setattr("cloudinv.cli._shared.AzureClient", _MockedClient)
    return handler


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"cloudinv version {__version__}" in result.stdout


class TestVSphereCommands:
    """Tests for the vsphere command group."""

    def test_vms_json(self, config_dir, vcenter) -> None:
        result = runner.invoke(app, ["vsphere", "vms", "-o", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == VMS

    def test_vms_table(self, config_dir, vcenter) -> None:
        result = runner.invoke(app, ["vsphere", "vms"])
        assert result.exit_code == 0, result.output
        assert "web-01" in result.stdout
        assert "db-01" in result.stdout

    def test_filters_reach_the_query(self, config_dir, vcenter) -> None:
        result = runner.invoke(
            app,
            ["vsphere", "vms", "--clusters", "domain-c1, domain-c2", "--power-states", "powered_on"],
        )
        assert result.exit_code == 0, result.output
        (request,) = vcenter.calls("GET", "/api/vcenter/vm")
        assert request.url.query.decode() == "clusters=domain-c1,domain-c2&power_states=POWERED_ON"

    def test_escaped_comma_in_name(self, config_dir, vcenter) -> None:
        result = runner.invoke(app, ["vsphere", "vms", "--names", r"web\,01,db-01"])
        assert result.exit_code == 0, result.output
        (request,) = vcenter.calls("GET", "/api/vcenter/vm")
        assert request.url.query.decode() == "names=web%2C01,db-01"

    def test_folder_type(self, config_dir, vcenter) -> None:
        result = runner.invoke(app, ["vsphere", "folders", "--type", "host", "-o", "yaml"])
        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.stdout) == [{"folder": "group-h4", "name": "host", "type": "HOST"}]
        (request,) = vcenter.calls("GET", "/api/vcenter/folder")
        assert request.url.query.decode() == "type=HOST"

    def test_invalid_enum(self, config_dir, vcenter) -> None:
        result = runner.invoke(app, ["vsphere", "vms", "--power-states", "ON"])
        assert result.exit_code == 2
        assert vcenter.requests == []

    def test_wrong_provider_profile(self, config_dir, vcenter) -> None:
        result = runner.invoke(app, ["vsphere", "vms", "--profile", "cloud"])
        assert result.exit_code == 1
        assert "targets azure, not vsphere" in result.stdout

    def test_request_error_exits_1(self, config_dir, vcenter) -> None:
        result = runner.invoke(app, ["vsphere", "hosts"])
        assert result.exit_code == 1
        assert "Failed to get Hosts: HTTP 404" in result.stdout


class TestAzureCommands:
    """Tests for the azure command group."""

    def test_skus_filtered(self, config_dir, arm) -> None:
        result = runner.invoke(
            app,
            ["azure", "skus", "-p", "cloud", "-l", "westus2", "-t", "virtualMachines", "-o", "json"],
        )
        assert result.exit_code == 0, result.output
        assert [s["name"] for s in json.loads(result.stdout)] == ["Standard_NV6s_v2", "Standard_PB6s"]

    def test_locations_table(self, config_dir, arm) -> None:
        result = runner.invoke(app, ["azure", "locations", "-p", "cloud"])
        assert result.exit_code == 0, result.output
        assert "West US 2" in result.stdout

    def test_default_profile_is_vsphere(self, config_dir, arm) -> None:
        result = runner.invoke(app, ["azure", "locations"])
        assert result.exit_code == 1
        assert "targets vsphere, not azure" in result.stdout


class TestConfigCommands:
    """Tests for the config command group."""

    def test_add_non_interactive(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("CLOUDINV_CONFIG_DIR", str(tmp_path))
        result = runner.invoke(
            app,
            [
                "config", "add", "lab",
                "--provider", "vsphere",
                "--host", "vc.example.com",
                "--user", "admin",
                "--password", "pw",
                "--insecure",
                "--yes",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "set as default" in result.stdout

        profile = ConfigManager(tmp_path).get_profile("lab")
        assert profile.verify_ssl is False
        assert profile.auth.password == "pw"

    def test_add_duplicate(self, config_dir) -> None:
        result = runner.invoke(
            app,
            ["config", "add", "lab", "--provider", "vsphere", "--host", "h", "--user", "u", "--password", "p", "-y"],
        )
        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_list(self, config_dir) -> None:
        result = runner.invoke(app, ["config", "list"])
        assert result.exit_code == 0, result.output
        assert "lab" in result.stdout
        assert "sub-1" in result.stdout

    def test_default_and_remove(self, config_dir) -> None:
        assert runner.invoke(app, ["config", "default", "cloud"]).exit_code == 0
        assert ConfigManager(config_dir).get().default_profile == "cloud"

        result = runner.invoke(app, ["config", "remove", "cloud", "--yes"])
        assert result.exit_code == 0, result.output
        assert ConfigManager(config_dir).list_profiles() == ["lab"]

    def test_missing_config(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("CLOUDINV_CONFIG_DIR", str(tmp_path))
        result = runner.invoke(app, ["config", "list"])
        assert result.exit_code == 1
        assert "Configuration file not found" in result.stdout
