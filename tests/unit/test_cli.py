"""Unit tests for cli/main.py — the cani command-line interface."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from cani.cli.main import cli

_POLICY_YAML = textwrap.dedent(
    """\
    version: "1.0"
    aliases:
      subjects:
        invoice: [bill]
    roles:
      admin:
        - action: manage
          subject: all
      clerk:
        - action: view
          subject: invoice
        - action: delete
          subject: invoice
    """
)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def policy_file(tmp_path: Path) -> str:
    path = tmp_path / "policy.yaml"
    path.write_text(_POLICY_YAML, encoding="utf-8")
    return str(path)


class TestVersionCommand:
    def test_version_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "cani-authz" in result.output


class TestCheckCommand:
    def test_allowed_exits_zero(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(
            cli, ["check", "-c", policy_file, "-r", "clerk", "-a", "show", "-s", "bills"]
        )
        assert result.exit_code == 0
        assert "ALLOWED" in result.output
        assert "view:invoice" in result.output

    def test_denied_exits_one(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(
            cli, ["check", "-c", policy_file, "-r", "clerk", "-a", "edit", "-s", "invoice"]
        )
        assert result.exit_code == 1
        assert "DENIED" in result.output

    def test_unknown_role_exits_one(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(
            cli, ["check", "-c", policy_file, "-r", "ghost", "-a", "view", "-s", "invoice"]
        )
        assert result.exit_code == 1
        assert "ALLOWED" not in result.output

    def test_missing_config_exits_one(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli,
            ["check", "-c", str(tmp_path / "nope.yaml"), "-r", "clerk", "-a", "view", "-s", "x"],
        )
        assert result.exit_code == 1

    def test_invalid_config_exits_one(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("roles: [unclosed", encoding="utf-8")
        result = runner.invoke(
            cli, ["check", "-c", str(path), "-r", "clerk", "-a", "view", "-s", "x"]
        )
        assert result.exit_code == 1


class TestCommandCommand:
    def test_matching_command_allowed(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(cli, ["command", "-c", policy_file, "-r", "clerk", "RemoveInvoices"])
        assert result.exit_code == 0
        assert "ALLOWED" in result.output

    def test_non_matching_command_denied(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(cli, ["command", "-c", policy_file, "-r", "clerk", "ArchiveInvoice"])
        assert result.exit_code == 1
        assert "DENIED" in result.output

    def test_admin_allowed_everything(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(cli, ["command", "-c", policy_file, "-r", "admin", "ArchiveInvoice"])
        assert result.exit_code == 0


class TestAliasesCommand:
    def test_action_aliases(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(cli, ["aliases", "-c", policy_file, "--action", "Remove"])
        assert result.exit_code == 0
        assert "delete" in result.output
        assert "destroy" in result.output

    def test_subject_aliases_from_config(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(cli, ["aliases", "-c", policy_file, "--subject", "Bills"])
        assert result.exit_code == 0
        assert "invoice" in result.output
        assert "bills" in result.output

    def test_defaults_without_config(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli, ["aliases", "-c", str(tmp_path / "none.yaml"), "--subject", "Invoices"]
        )
        assert result.exit_code == 0
        assert "invoices" in result.output

    def test_requires_exactly_one_option(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(cli, ["aliases", "-c", policy_file])
        assert result.exit_code == 2


class TestRolesCommand:
    def test_lists_roles(self, runner: CliRunner, policy_file: str) -> None:
        result = runner.invoke(cli, ["roles", "-c", policy_file])
        assert result.exit_code == 0
        assert "clerk" in result.output
        assert "admin" in result.output
        assert "Total roles: 2" in result.output

    def test_empty_policy(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("roles: {}\n", encoding="utf-8")
        result = runner.invoke(cli, ["roles", "-c", str(path)])
        assert result.exit_code == 0
        assert "No roles defined" in result.output
