"""Unit tests for the command line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from abacpolicy import __version__
from abacpolicy.cli.main import cli
from abacpolicy.core.config import PolicySettings, Settings, configure_settings


@pytest.fixture
def runner():
    """Create a CLI runner for testing."""
    return CliRunner()


class TestInfoCommands:
    """Tests for info and config commands."""

    def test_version(self, runner):
        """Test the version option."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_info(self, runner):
        """Test the info command."""
        result = runner.invoke(cli, ["info"])
        assert result.exit_code == 0
        assert f"abacpolicy v{__version__}" in result.output
        assert "Default policies: disabled" in result.output

    def test_config_json(self, runner):
        """Test dumping settings as JSON."""
        result = runner.invoke(cli, ["config", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["policy"]["include_defaults"] is False


class TestPoliciesCommands:
    """Tests for the policies command group."""

    def test_list_defaults_json(self, runner):
        """Test listing the default policies as a document."""
        result = runner.invoke(cli, ["policies", "list", "--defaults", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [rule["role"] for rule in data] == ["*", "admin"]
        assert data[0]["readonly"] is True

    def test_list_table(self, runner, write_policy_file, policy_document):
        """Test listing policies as a table."""
        path = write_policy_file(policy_document)
        result = runner.invoke(cli, ["policies", "list", "-f", str(path), "--defaults"])
        assert result.exit_code == 0
        assert "4 policies" in result.output

    def test_list_uses_settings(self, runner, write_policy_file, policy_document):
        """Test that configured sources are used without flags."""
        path = write_policy_file(policy_document)
        configure_settings(Settings(policy=PolicySettings(files=[path])))

        result = runner.invoke(cli, ["policies", "list", "--format", "json"])
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 2

    def test_list_bad_file(self, runner, write_policy_file):
        """Test that load failures exit with status 2."""
        path = write_policy_file("{}")
        result = runner.invoke(cli, ["policies", "list", "-f", str(path)])
        assert result.exit_code == 2

    def test_list_table_shows_markup_literally(self, runner, write_policy_file):
        """Test that bracketed values are printed as text, not rich markup."""
        path = write_policy_file([{"role": "[/x]", "namespace": "[bold]ns", "readonly": True}])
        result = runner.invoke(cli, ["policies", "list", "-f", str(path)])
        assert result.exit_code == 0
        assert "[/x]" in result.output
        assert "[bold]ns" in result.output

    def test_validate(self, runner, write_policy_file, policy_document):
        """Test validating good and bad documents."""
        good = write_policy_file(policy_document, "good.json")
        bad = write_policy_file('[{"readonly": "no"}]', "bad.json")

        result = runner.invoke(cli, ["policies", "validate", str(good)])
        assert result.exit_code == 0
        assert "✓" in result.output

        result = runner.invoke(cli, ["policies", "validate", str(good), str(bad)])
        assert result.exit_code == 1
        assert "1 of 2 document(s) invalid" in result.output


class TestCheckCommand:
    """Tests for the check command."""

    def test_allow(self, runner):
        """Test an allowed read request."""
        result = runner.invoke(
            cli,
            ["check", "--defaults", "--user-id", "alice", "--resource", "pods", "--read-only"],
        )
        assert result.exit_code == 0
        assert "ALLOW" in result.output
        assert '"readonly": true' in result.output

    def test_deny(self, runner):
        """Test a denied write request."""
        result = runner.invoke(
            cli,
            ["check", "--defaults", "--user-id", "alice", "--role", "viewer", "--write"],
        )
        assert result.exit_code == 1
        assert "DENY" in result.output

    def test_admin_write(self, runner):
        """Test that admins may write under the defaults."""
        result = runner.invoke(
            cli,
            ["check", "--defaults", "-r", "viewer", "-r", "admin", "--resource", "pods", "--write"],
        )
        assert result.exit_code == 0
        assert '"role": "admin"' in result.output

    def test_group_policy_file(self, runner, write_policy_file, policy_document):
        """Test a group-scoped policy from a file."""
        path = write_policy_file(policy_document)
        args = ["check", "-f", str(path), "--resource", "reports", "-n", "finance", "--read-only"]

        assert runner.invoke(cli, [*args, "-g", "teamA"]).exit_code == 0
        assert runner.invoke(cli, [*args, "-g", "teamB"]).exit_code == 1

    def test_no_policies_denies(self, runner):
        """Test that an empty policy set denies."""
        result = runner.invoke(cli, ["check", "--no-defaults", "--read-only"])
        assert result.exit_code == 1

    def test_missing_file(self, runner, tmp_path):
        """Test that a missing policy file exits with status 2."""
        result = runner.invoke(cli, ["check", "-f", str(tmp_path / "none.json")])
        assert result.exit_code == 2
