"""The Permission entity and its authorization algorithm.

A Permission pairs an allowed action pattern with an allowed subject
pattern, both canonicalized once at construction, plus an ordered list of
context predicates.

``authorizes(action, subject)`` runs three stages, stopping at the first
failure:

1. Pattern match — the cleaned requested action and subject are searched
   (case-insensitively) with the allowed patterns.
2. Context — every attached predicate must allow the subject.
3. Capability — a ``can<action>`` flag on the subject decides. A missing
   flag passes; a flag that is not a boolean denies.

``allows_execution_of(command)`` matches a single command name against
every pairing of action alias and subject alias.

Example
-------
::

    permission = Permission("edit", "invoice")
    permission.when(lambda invoice: not invoice.locked)

    permission.authorizes("update", Invoice(locked=False))   # True
    permission.allows_execution_of("ModifyInvoices")         # True
"""
from __future__ import annotations

import itertools
import logging
import re
import threading
from collections.abc import Callable
from typing import Any

from cani.cleaners.action_cleaner import ActionCleaner
from cani.cleaners.base import NameCleaner
from cani.cleaners.subject_cleaner import SubjectCleaner
from cani.commands.naming import resolve_command_name
from cani.errors import InvalidActionError, InvalidRequestError, InvalidSubjectError
from cani.permissions.predicates import ContextPredicate, build_predicate
from cani.subjects.capability import capability_allows, lookup_capability

logger = logging.getLogger(__name__)


def _search(pattern: str, candidate: str) -> bool:
    return re.search(pattern, candidate, re.IGNORECASE) is not None


def _compile(pattern: str, kind: str) -> None:
    try:
        re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise ValueError(f"Invalid {kind} pattern {pattern!r}: {exc}") from exc


class Permission:
    """A declared rule: an action over a subject, with optional conditions.

    Parameters
    ----------
    action:
        Raw action name or pattern (e.g. ``"edit"``, ``"manage"``).
    subject:
        Raw subject name or pattern (e.g. ``"invoice"``, ``"all"``).
    action_cleaner:
        Canonicalizer for actions. Defaults to :class:`ActionCleaner`.
    subject_cleaner:
        Canonicalizer for subjects. Defaults to :class:`SubjectCleaner`.

    Raises
    ------
    InvalidRequestError
        If ``action`` or ``subject`` is ``None``.
    ValueError
        If a cleaned name is not a valid regular expression.

    Notes
    -----
    Predicates are meant to be attached while the policy is being set up.
    Attaching swaps in a new tuple under a lock, so evaluations already in
    flight keep iterating the predicates they started with.
    """

    def __init__(
        self,
        action: str,
        subject: str,
        action_cleaner: NameCleaner | None = None,
        subject_cleaner: NameCleaner | None = None,
    ) -> None:
        self._action_cleaner = action_cleaner or ActionCleaner()
        self._subject_cleaner = subject_cleaner or SubjectCleaner()
        self._allowed_action = self._action_cleaner.clean(action)
        self._allowed_subject = self._subject_cleaner.clean(subject)
        _compile(self._allowed_action, "action")
        _compile(self._allowed_subject, "subject")

        self._predicates: tuple[ContextPredicate, ...] = ()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def when(
        self,
        check: Callable[..., Any],
        subject_type: type | None = None,
    ) -> Permission:
        """Attach a condition built from a plain callable.

        A zero-argument callable is evaluated on its own; a one-argument
        callable receives the requested subject. Pass ``subject_type`` to
        restrict the condition to subjects of that type.

        Returns
        -------
        Permission
            ``self``, for chaining.
        """
        return self.add_predicate(build_predicate(check, subject_type))

    def add_predicate(self, predicate: ContextPredicate) -> Permission:
        """Attach an already built :class:`ContextPredicate`."""
        if not isinstance(predicate, ContextPredicate):
            raise TypeError(
                f"Expected a ContextPredicate; got {type(predicate).__name__}."
            )
        with self._lock:
            self._predicates = (*self._predicates, predicate)
        return self

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def authorizes(self, requested_action: str, requested_subject: object) -> bool:
        """Decide whether ``requested_action`` on ``requested_subject`` is allowed.

        Parameters
        ----------
        requested_action:
            The action being attempted, in any casing or synonym.
        requested_subject:
            The subject instance (or a subject name/class).

        Returns
        -------
        bool

        Raises
        ------
        InvalidRequestError
            If the action or subject is ``None``.
        PredicateTypeError
            If a typed predicate receives a subject of the wrong type.
        """
        if requested_action is None:
            raise InvalidActionError()
        if requested_subject is None:
            raise InvalidSubjectError()

        if not self._matches(requested_action, requested_subject):
            return False
        if not self._context_allows(requested_subject):
            logger.debug("Permission %s: context predicate denied", self.key)
            return False
        if not self._subject_allows(requested_action, requested_subject):
            logger.debug(
                "Permission %s: subject capability denied action=%s",
                self.key,
                requested_action,
            )
            return False
        return True

    def allows_execution_of(self, command: object) -> bool:
        """Decide whether a command may be executed under this permission.

        Parameters
        ----------
        command:
            A command name, or a command object/class whose name is derived
            with :func:`~cani.commands.naming.resolve_command_name`.

        Returns
        -------
        bool
            True if some pairing of an action alias and a subject alias both
            match the command name.
        """
        if command is None:
            raise InvalidRequestError("Command must not be None.")

        requested_name = resolve_command_name(command)
        subject_aliases = sorted(self._subject_cleaner.aliases_for(self._allowed_subject))
        action_aliases = sorted(self._action_cleaner.aliases_for(self._allowed_action))

        for subject_alias, action_alias in itertools.product(subject_aliases, action_aliases):
            if _search(action_alias, requested_name) and _search(subject_alias, requested_name):
                logger.debug(
                    "Permission %s: command %s matched action=%s subject=%s",
                    self.key,
                    requested_name,
                    action_alias,
                    subject_alias,
                )
                return True
        return False

    @property
    def allowed_action(self) -> str:
        return self._allowed_action

    @property
    def allowed_subject(self) -> str:
        return self._allowed_subject

    @property
    def predicates(self) -> tuple[ContextPredicate, ...]:
        return self._predicates

    @property
    def key(self) -> str:
        """Return an ``action:subject`` identifier for logs and results."""
        return f"{self._allowed_action}:{self._allowed_subject}"

    def __repr__(self) -> str:
        return (
            f"Permission(action={self._allowed_action!r}, "
            f"subject={self._allowed_subject!r}, predicates={len(self._predicates)})"
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _matches(self, action: str, subject: object) -> bool:
        cleaned_subject = self._subject_cleaner.clean(subject)
        cleaned_action = self._action_cleaner.clean(action)
        matched = _search(self._allowed_subject, cleaned_subject) and _search(
            self._allowed_action, cleaned_action
        )
        if not matched:
            logger.debug(
                "Permission %s: no pattern match for action=%s subject=%s",
                self.key,
                cleaned_action,
                cleaned_subject,
            )
        return matched

    def _context_allows(self, subject: object) -> bool:
        return all(p.allows(subject) for p in self._predicates)

    def _subject_allows(self, action: str, subject: object) -> bool:
        return capability_allows(lookup_capability(subject, str(action)))
