"""Unit tests for the nbdevice CLI.

NetBoxClient is replaced by the in-memory FakeNetBox.
"""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from nbdevice.cli import app

runner = CliRunner()


@pytest.fixture
def cli_netbox(fake_netbox):
    """Route the CLI's NetBoxClient to the fake and skip handler setup."""
    with (
        patch("nbdevice.cli.NetBoxClient", return_value=fake_netbox),
        patch("nbdevice.cli.setup_logging"),
    ):
        yield fake_netbox


@pytest.fixture
def device_file(tmp_path):
    path = tmp_path / "device.yaml"
    path.write_text(
        "name: sw1\ndevice_type_id: 5\nrole_id: 2\nsite_id: 1\ncomments: core\ntags: [b, a]\n",
        encoding="utf-8",
    )
    return path


class TestCreate:
    def test_create_prints_state(self, cli_netbox, device_file):
        result = runner.invoke(app, ["create", str(device_file), "--json"])

        assert result.exit_code == 0, result.output
        state = json.loads(result.output)
        assert state["id"] == "42"
        assert state["tags"] == ["a", "b"]
        assert state["comments"] == "core"

    def test_bare_tags_key(self, cli_netbox, tmp_path):
        path = tmp_path / "device.yaml"
        path.write_text("name: sw1\ndevice_type_id: 5\nrole_id: 2\nsite_id: 1\ntags:\n", encoding="utf-8")

        result = runner.invoke(app, ["create", str(path), "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["tags"] == []

    def test_invalid_config(self, cli_netbox, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: sw1\n", encoding="utf-8")

        result = runner.invoke(app, ["create", str(path)])

        assert result.exit_code == 1
        assert "device_type_id" in result.output
        assert cli_netbox.devices == {}


class TestShow:
    def test_show_existing(self, cli_netbox, device_file):
        runner.invoke(app, ["create", str(device_file)])

        result = runner.invoke(app, ["show", "42", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["name"] == "sw1"

    def test_show_missing(self, cli_netbox):
        result = runner.invoke(app, ["show", "999"])

        assert result.exit_code == 1
        assert "non-existent" in result.output


class TestUpdate:
    def test_update_clears_comments(self, cli_netbox, device_file, tmp_path):
        runner.invoke(app, ["create", str(device_file)])
        new_file = tmp_path / "new.yaml"
        new_file.write_text("name: sw1\ndevice_type_id: 5\nrole_id: 2\nsite_id: 1\n", encoding="utf-8")

        result = runner.invoke(app, ["update", "42", str(new_file), "--json"])

        assert result.exit_code == 0, result.output
        assert cli_netbox.last_payload("update_device")["comments"] == " "
        assert json.loads(result.output)["comments"] is None


class TestDelete:
    def test_delete(self, cli_netbox, device_file):
        runner.invoke(app, ["create", str(device_file)])

        result = runner.invoke(app, ["delete", "42"])

        assert result.exit_code == 0
        assert cli_netbox.devices == {}

    def test_delete_missing(self, cli_netbox):
        result = runner.invoke(app, ["delete", "999"])

        assert result.exit_code == 1
        assert "404" in result.output
