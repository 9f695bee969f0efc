"""Subject-level capability flags.

A subject can approve or veto an action on itself by exposing a boolean
member named ``can<action>`` (``can_edit``, ``canEdit`` and ``CanEdit`` are
all the same name). Subjects may instead implement
:class:`CapabilityAware` and answer directly.

The lookup distinguishes four outcomes:

- ``ABSENT``    — no such data member or property (methods are ignored);
  the capability stage passes.
- ``GRANTED``   — the member is ``True``.
- ``DENIED``    — the member is ``False``.
- ``MALFORMED`` — the member exists but is ``None`` or not a ``bool``;
  treated as a denial.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol, runtime_checkable

from cani.cleaners.base import squash
from cani.errors import InvalidSubjectError

logger = logging.getLogger(__name__)

CAPABILITY_PREFIX = "can"


class CapabilityState(str, Enum):
    """Outcome of looking up a capability flag on a subject."""

    ABSENT = "absent"
    GRANTED = "granted"
    DENIED = "denied"
    MALFORMED = "malformed"


@runtime_checkable
class CapabilityAware(Protocol):
    """Protocol for subjects that report their own capabilities."""

    def has_capability(self, action: str) -> CapabilityState:
        ...


def capability_name(action: str) -> str:
    """Return the squashed member name checked for ``action``."""
    return squash(CAPABILITY_PREFIX + action)


def lookup_capability(subject: object, action: str) -> CapabilityState:
    """Look up the ``can<action>`` capability of ``subject``.

    Parameters
    ----------
    subject:
        The concrete subject instance. Classes carry no instance
        capabilities and always report ``ABSENT``.
    action:
        The requested action, as given by the caller.

    Returns
    -------
    CapabilityState

    Raises
    ------
    InvalidSubjectError
        If ``subject`` is ``None``.
    """
    if subject is None:
        raise InvalidSubjectError()
    if isinstance(subject, type):
        return CapabilityState.ABSENT

    if isinstance(subject, CapabilityAware):
        return _coerce_state(subject.has_capability(action), subject, action)

    target = capability_name(action)
    for member in dir(subject):
        if member.startswith("_") or squash(member) != target:
            continue
        # Methods are not flags; only data members and properties count.
        if callable(getattr(type(subject), member, None)):
            continue
        return _coerce_state(getattr(subject, member), subject, action)
    return CapabilityState.ABSENT


def capability_allows(state: CapabilityState) -> bool:
    """Return True when a capability state lets the request through."""
    return state in (CapabilityState.ABSENT, CapabilityState.GRANTED)


def _coerce_state(value: object, subject: object, action: str) -> CapabilityState:
    if isinstance(value, CapabilityState):
        return value
    if isinstance(value, bool):
        return CapabilityState.GRANTED if value else CapabilityState.DENIED
    logger.warning(
        "Capability %r on %s is not a boolean (got %r); denying",
        capability_name(action),
        type(subject).__name__,
        value,
    )
    return CapabilityState.MALFORMED
