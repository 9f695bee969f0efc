"""Context predicates attached to a permission.

A predicate is a caller-supplied condition evaluated against the requested
subject after the action and subject patterns have matched. All predicates
on a permission must pass (AND semantics).

Two variants share the :meth:`ContextPredicate.allows` contract:

- PlainPredicate — a zero-argument check that ignores the subject
  (time of day, feature flags, the current user's quota).
- TypedPredicate — a one-argument check over subjects of one type. A
  subject of any other type raises :class:`~cani.errors.PredicateTypeError`;
  it signals a predicate attached to the wrong permission, not a denial.

Factory
-------
Use :func:`build_predicate` to pick the variant from a plain callable
(used by ``Permission.when``).
"""
from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from cani.errors import PredicateTypeError


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------


class ContextPredicate(ABC):
    """Abstract base for context predicates."""

    @abstractmethod
    def allows(self, subject: object) -> bool:
        """Return True if the condition holds for ``subject``."""

    @property
    @abstractmethod
    def predicate_type(self) -> str:
        """Return the short type identifier for this predicate."""


# ---------------------------------------------------------------------------
# PlainPredicate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlainPredicate(ContextPredicate):
    """Condition that does not look at the subject.

    Examples
    --------
    ::

        p = PlainPredicate(lambda: datetime.now().hour < 18)
        p.allows(invoice)
    """

    check: Callable[[], Any]

    @property
    def predicate_type(self) -> str:
        return "plain"

    def allows(self, subject: object) -> bool:
        return bool(self.check())


# ---------------------------------------------------------------------------
# TypedPredicate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypedPredicate(ContextPredicate):
    """Condition over subjects of a declared type.

    Attributes
    ----------
    subject_type:
        The type (or tuple of types) the subject must be an instance of.
    check:
        One-argument callable receiving the subject.

    Examples
    --------
    ::

        p = TypedPredicate(Invoice, lambda invoice: invoice.owner == user)
        p.allows(Invoice(owner=user))   # True
        p.allows(Order())               # raises PredicateTypeError
    """

    subject_type: type | tuple[type, ...]
    check: Callable[[Any], Any]

    @property
    def predicate_type(self) -> str:
        return "typed"

    def allows(self, subject: object) -> bool:
        if not isinstance(subject, self.subject_type):
            raise PredicateTypeError(self.subject_type, type(subject))
        return bool(self.check(subject))


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def build_predicate(
    check: Callable[..., Any],
    subject_type: type | None = None,
) -> ContextPredicate:
    """Wrap a callable in the matching predicate variant.

    With ``subject_type`` a TypedPredicate is built. Without it, a callable
    taking no required positional arguments becomes a PlainPredicate and
    one taking exactly one becomes a TypedPredicate over ``object``.

    Raises
    ------
    TypeError
        If ``check`` is not callable, needs more than one argument, or its
        signature cannot be inspected and no ``subject_type`` was given.
    """
    if not callable(check):
        raise TypeError(f"Predicate must be callable; got {check!r}.")
    if subject_type is not None:
        return TypedPredicate(subject_type=subject_type, check=check)

    try:
        parameters = inspect.signature(check).parameters.values()
    except (TypeError, ValueError) as exc:
        raise TypeError(
            f"Cannot inspect predicate {check!r}; pass subject_type explicitly."
        ) from exc

    required = [
        p for p in parameters
        if p.kind in _POSITIONAL_KINDS and p.default is inspect.Parameter.empty
    ]
    match len(required):
        case 0:
            return PlainPredicate(check=check)
        case 1:
            return TypedPredicate(subject_type=object, check=check)
        case _:
            raise TypeError(
                f"Predicate {check!r} takes {len(required)} arguments; expected 0 or 1."
            )
