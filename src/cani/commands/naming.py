"""Command name resolution for command-style authorization.

A command object is authorized by name. The name is either declared on the
command class (an ``(action, subject)`` pair, joined without a separator)
or derived from the class name itself.

Example
-------
::

    @authorize_as("delete", "invoice")
    class PurgeLedgerEntry(Command):
        ...

    assert resolve_command_name(PurgeLedgerEntry()) == "deleteinvoice"

    class RemoveInvoices(Command):
        ...

    assert resolve_command_name(RemoveInvoices()) == "RemoveInvoices"
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar, runtime_checkable

_C = TypeVar("_C", bound=type)


@runtime_checkable
class NamedCommand(Protocol):
    """Protocol for commands that can declare their action and subject."""

    @classmethod
    def declared_name(cls) -> tuple[str, str] | None:
        """Return ``(action, subject)`` or ``None`` to use the class name."""
        ...


class Command:
    """Optional base class for command objects.

    Subclasses get the default :meth:`declared_name`, which defers to the
    class name. Decorate with :func:`authorize_as` to declare a mapping.
    """

    @classmethod
    def declared_name(cls) -> tuple[str, str] | None:
        return None


def authorize_as(action: str, subject: str) -> Callable[[_C], _C]:
    """Class decorator declaring the action and subject a command stands for.

    Parameters
    ----------
    action:
        The action name, e.g. ``"delete"``.
    subject:
        The subject name, e.g. ``"invoice"``.

    Raises
    ------
    ValueError
        If either name is empty.
    """
    if not action or not subject:
        raise ValueError("authorize_as requires a non-empty action and subject.")

    def decorator(command_class: _C) -> _C:
        def declared_name(cls: type) -> tuple[str, str] | None:
            return (action, subject)

        command_class.declared_name = classmethod(declared_name)  # type: ignore[attr-defined]
        return command_class

    return decorator


def resolve_command_name(command: object) -> str:
    """Return the name a command is authorized under.

    Strings are returned verbatim. Otherwise the command's declared
    ``(action, subject)`` pair is concatenated; without a declaration the
    class name is used. ``command`` may be an instance or a class.
    """
    if isinstance(command, str):
        return command

    command_class = command if isinstance(command, type) else type(command)
    declared = None
    if isinstance(command_class, NamedCommand):
        declared = command_class.declared_name()  # type: ignore[attr-defined]

    if declared is None:
        return command_class.__name__
    action, subject = declared
    return f"{action}{subject}"
