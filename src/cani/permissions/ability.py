"""Role-level permission sets.

An Ability collects the permissions granted to one role. A request is
allowed when any permission authorizes it; when none does, the request is
denied. A Policy maps role names to abilities.

Example
-------
::

    clerk = Ability("clerk")
    clerk.allow("view", "invoice")
    clerk.allow("edit", "invoice").when(lambda invoice: not invoice.locked)

    result = clerk.check("update", Invoice(locked=False))
    assert result.allowed is True
    assert result.matched_permission == "edit:invoice"

    assert clerk.allows_execution_of("ShowInvoices")
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from cani.cleaners.action_cleaner import ActionCleaner
from cani.cleaners.base import NameCleaner
from cani.cleaners.subject_cleaner import SubjectCleaner
from cani.commands.naming import resolve_command_name
from cani.errors import (
    InvalidActionError,
    InvalidRequestError,
    InvalidSubjectError,
    UnknownRoleError,
)
from cani.permissions.permission import Permission

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# AuthorizationResult
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AuthorizationResult:
    """Immutable result of an authorization check.

    Attributes
    ----------
    allowed:
        Whether the request is permitted.
    reason:
        Human-readable explanation of the decision.
    action:
        The requested action (empty for command checks).
    subject:
        The cleaned subject name, or the resolved command name.
    matched_permission:
        ``action:subject`` key of the permission that allowed the request,
        or ``None`` when the default deny applied.
    """

    allowed: bool
    reason: str
    action: str
    subject: str
    matched_permission: str | None = None

    def __bool__(self) -> bool:
        """Return True if the request is allowed."""
        return self.allowed


# ---------------------------------------------------------------------------
# Ability
# ---------------------------------------------------------------------------


class Ability:
    """The permissions granted to one role.

    Parameters
    ----------
    name:
        Role name, used in results and logs.
    action_cleaner:
        Shared action canonicalizer for every permission declared here.
    subject_cleaner:
        Shared subject canonicalizer for every permission declared here.
    """

    def __init__(
        self,
        name: str = "default",
        action_cleaner: NameCleaner | None = None,
        subject_cleaner: NameCleaner | None = None,
    ) -> None:
        self._name = name
        self._action_cleaner = action_cleaner or ActionCleaner()
        self._subject_cleaner = subject_cleaner or SubjectCleaner()
        self._permissions: list[Permission] = []

    def allow(self, action: str, subject: str) -> Permission:
        """Declare and return a permission for ``action`` on ``subject``.

        The returned permission can be refined with ``.when(...)``.
        """
        permission = Permission(
            action,
            subject,
            action_cleaner=self._action_cleaner,
            subject_cleaner=self._subject_cleaner,
        )
        self._permissions.append(permission)
        return permission

    can = allow

    def add_permission(self, permission: Permission) -> None:
        """Add an already built permission."""
        self._permissions.append(permission)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check(self, action: str, subject: object) -> AuthorizationResult:
        """Evaluate ``action`` on ``subject`` against every permission.

        Permissions are tried in declaration order; the first that
        authorizes the request determines the result.

        Raises
        ------
        InvalidRequestError
            If the action or subject is ``None``.
        PredicateTypeError
            If a typed predicate receives a subject of the wrong type.
        """
        if action is None:
            raise InvalidActionError()
        if subject is None:
            raise InvalidSubjectError()
        cleaned_subject = self._subject_cleaner.clean(subject)

        for permission in self._permissions:
            if permission.authorizes(action, subject):
                logger.debug(
                    "Ability %s ALLOW: action=%s subject=%s permission=%s",
                    self._name,
                    action,
                    cleaned_subject,
                    permission.key,
                )
                return AuthorizationResult(
                    allowed=True,
                    reason=f"Allowed by permission '{permission.key}'.",
                    action=action,
                    subject=cleaned_subject,
                    matched_permission=permission.key,
                )

        logger.debug(
            "Ability %s DEFAULT-DENY: action=%s subject=%s",
            self._name,
            action,
            cleaned_subject,
        )
        return AuthorizationResult(
            allowed=False,
            reason=(
                f"No permission of role '{self._name}' allows "
                f"'{action}' on '{cleaned_subject}'."
            ),
            action=action,
            subject=cleaned_subject,
        )

    def authorizes(self, action: str, subject: object) -> bool:
        """Return True if any permission authorizes ``action`` on ``subject``."""
        return self.check(action, subject).allowed

    def check_command(self, command: object) -> AuthorizationResult:
        """Evaluate a command (name, object or class) against every permission."""
        if command is None:
            raise InvalidRequestError("Command must not be None.")
        command_name = resolve_command_name(command)

        for permission in self._permissions:
            if permission.allows_execution_of(command_name):
                return AuthorizationResult(
                    allowed=True,
                    reason=f"Allowed by permission '{permission.key}'.",
                    action="",
                    subject=command_name,
                    matched_permission=permission.key,
                )

        logger.debug("Ability %s DEFAULT-DENY: command=%s", self._name, command_name)
        return AuthorizationResult(
            allowed=False,
            reason=f"No permission of role '{self._name}' allows command '{command_name}'.",
            action="",
            subject=command_name,
        )

    def allows_execution_of(self, command: object) -> bool:
        """Return True if any permission allows executing ``command``."""
        return self.check_command(command).allowed

    @property
    def name(self) -> str:
        return self._name

    @property
    def permissions(self) -> tuple[Permission, ...]:
        return tuple(self._permissions)

    @property
    def permission_count(self) -> int:
        """Return the number of declared permissions."""
        return len(self._permissions)

    @property
    def action_cleaner(self) -> NameCleaner:
        return self._action_cleaner

    @property
    def subject_cleaner(self) -> NameCleaner:
        return self._subject_cleaner

    def summary(self) -> dict[str, object]:
        """Return a plain dict summarising this ability."""
        return {
            "role": self._name,
            "permission_count": self.permission_count,
            "permissions": [p.key for p in self._permissions],
        }

    def __repr__(self) -> str:
        return f"Ability(name={self._name!r}, permissions={self.permission_count})"


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------


class Policy:
    """Maps role names to abilities.

    Parameters
    ----------
    abilities:
        Abilities keyed by role name, or an iterable of abilities (keyed by
        their ``name``).
    """

    def __init__(
        self,
        abilities: Mapping[str, Ability] | Iterable[Ability] | None = None,
    ) -> None:
        if abilities is None:
            self._abilities: dict[str, Ability] = {}
        elif isinstance(abilities, Mapping):
            self._abilities = dict(abilities)
        else:
            self._abilities = {a.name: a for a in abilities}

    def add_ability(self, ability: Ability) -> None:
        """Register ``ability`` under its name, replacing any previous one."""
        self._abilities[ability.name] = ability

    def ability_for(self, role: str) -> Ability:
        """Return the ability of ``role``.

        Raises
        ------
        UnknownRoleError
            If the policy does not define ``role``.
        """
        try:
            return self._abilities[role]
        except KeyError:
            raise UnknownRoleError(role) from None

    def check(self, role: str, action: str, subject: object) -> AuthorizationResult:
        return self.ability_for(role).check(action, subject)

    def authorizes(self, role: str, action: str, subject: object) -> bool:
        return self.ability_for(role).authorizes(action, subject)

    def check_command(self, role: str, command: object) -> AuthorizationResult:
        return self.ability_for(role).check_command(command)

    def allows_execution_of(self, role: str, command: object) -> bool:
        return self.ability_for(role).allows_execution_of(command)

    @property
    def roles(self) -> list[str]:
        """Return the defined role names, sorted."""
        return sorted(self._abilities)

    def __contains__(self, role: object) -> bool:
        return role in self._abilities

    def __len__(self) -> int:
        return len(self._abilities)
