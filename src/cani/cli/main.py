"""CLI entry point for cani.

Invoked as::

    cani [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m cani.cli.main

Commands
--------
- check     Check an action on a subject for a role
- command   Check a command name for a role
- aliases   Show the canonical form and aliases of an action or subject
- roles     List the roles and permissions in a policy
- version   Show version information
"""
from __future__ import annotations

import sys
from pathlib import Path

import click
import yaml
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cani.permissions.ability import AuthorizationResult, Policy
from cani.permissions.policy_loader import PolicyConfigError, PolicyLoader

console = Console()
err_console = Console(stderr=True)

_DEFAULT_CONFIG = Path("policy.yaml")


def _load_policy(config_path: str) -> Policy:
    try:
        return PolicyLoader().load(config_path)
    except (PolicyConfigError, FileNotFoundError) as exc:
        err_console.print(f"[red]Policy error:[/red] {exc}")
        sys.exit(1)


def _print_result(result: AuthorizationResult, role: str, title: str) -> None:
    status_str = "[green]ALLOWED[/green]" if result.allowed else "[red]DENIED[/red]"
    console.print(Panel(status_str, title=title, border_style="blue"))
    console.print(f"  Role:    [cyan]{role}[/cyan]")
    if result.action:
        console.print(f"  Action:  [cyan]{result.action}[/cyan]")
    console.print(f"  Subject: [cyan]{result.subject}[/cyan]")
    if result.matched_permission:
        console.print(f"  Matched: [bold green]{result.matched_permission}[/bold green]")
    console.print(f"  Reason:  {result.reason}")


_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(),
    help="Path to policy.yaml.",
)


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="cani-authz")
def cli() -> None:
    """cani CLI — check actions and commands against a role policy."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from cani import __version__

    console.print(
        Panel(
            f"[bold]cani-authz[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Rule-based action/subject authorization.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@_config_option
@click.option("--role", "-r", required=True, help="Role to check.")
@click.option("--action", "-a", required=True, help="Requested action, e.g. 'edit'.")
@click.option("--subject", "-s", required=True, help="Requested subject name, e.g. 'invoice'.")
def check_command(config_path: str, role: str, action: str, subject: str) -> None:
    """Check whether ROLE may perform ACTION on SUBJECT."""
    policy = _load_policy(config_path)
    if role not in policy:
        err_console.print(f"[red]Unknown role:[/red] {role}")
        sys.exit(1)

    result = policy.check(role, action, subject)
    _print_result(result, role, "Authorization Check")
    sys.exit(0 if result.allowed else 1)


# ---------------------------------------------------------------------------
# command
# ---------------------------------------------------------------------------


@cli.command(name="command")
@_config_option
@click.option("--role", "-r", required=True, help="Role to check.")
@click.argument("name")
def command_command(config_path: str, role: str, name: str) -> None:
    """Check whether ROLE may execute the command NAME (e.g. RemoveInvoices)."""
    policy = _load_policy(config_path)
    if role not in policy:
        err_console.print(f"[red]Unknown role:[/red] {role}")
        sys.exit(1)

    result = policy.check_command(role, name)
    _print_result(result, role, "Command Check")
    sys.exit(0 if result.allowed else 1)


# ---------------------------------------------------------------------------
# aliases
# ---------------------------------------------------------------------------


@cli.command(name="aliases")
@_config_option
@click.option("--action", "-a", "action", default=None, help="Action name to expand.")
@click.option("--subject", "-s", "subject", default=None, help="Subject name to expand.")
def aliases_command(config_path: str, action: str | None, subject: str | None) -> None:
    """Show how an action or subject is canonicalized and aliased."""
    from cani.cleaners.action_cleaner import ActionCleaner
    from cani.cleaners.subject_cleaner import SubjectCleaner
    from cani.config import ConfigLoader

    if (action is None) == (subject is None):
        err_console.print("[red]Pass exactly one of --action or --subject.[/red]")
        sys.exit(2)

    loader = ConfigLoader()
    cfg_path = Path(config_path)
    try:
        config = loader.load(cfg_path) if cfg_path.exists() else loader.defaults()
    except (ValueError, yaml.YAMLError) as exc:
        err_console.print(f"[red]Policy error:[/red] {exc}")
        sys.exit(1)

    if action is not None:
        cleaner = ActionCleaner.from_config(config.aliases)
        kind, raw = "Action", action
    else:
        cleaner = SubjectCleaner.from_config(config.aliases)
        kind, raw = "Subject", subject

    canonical = cleaner.clean(raw)
    table = Table(title=f"{kind} aliases for '{raw}'", box=box.SIMPLE)
    table.add_column("Alias", style="cyan")
    for alias in sorted(cleaner.aliases_for(canonical)):
        table.add_row(alias)

    console.print(f"  Canonical: [bold]{canonical}[/bold]")
    console.print(table)


# ---------------------------------------------------------------------------
# roles
# ---------------------------------------------------------------------------


@cli.command(name="roles")
@_config_option
def roles_command(config_path: str) -> None:
    """List the roles and permissions defined in a policy."""
    policy = _load_policy(config_path)

    if not policy.roles:
        console.print("[yellow]No roles defined.[/yellow]")
        return

    table = Table(title="Roles", box=box.SIMPLE)
    table.add_column("Role", style="cyan")
    table.add_column("Action", style="magenta")
    table.add_column("Subject")
    for role in policy.roles:
        for permission in policy.ability_for(role).permissions:
            table.add_row(role, permission.allowed_action, permission.allowed_subject)

    console.print(table)
    console.print(f"  Total roles: [cyan]{len(policy)}[/cyan]")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
