"""Command objects and the naming convention used to authorize them."""
from __future__ import annotations

from cani.commands.naming import (
    Command,
    NamedCommand,
    authorize_as,
    resolve_command_name,
)

__all__ = [
    "Command",
    "NamedCommand",
    "authorize_as",
    "resolve_command_name",
]
