"""Canonicalization of action names.

Action names arrive in many shapes (``"Edit"``, ``"update"``,
``"mark_paid"``). ActionCleaner squashes them to lowercase, folds known
synonyms onto one canonical verb and maps the ``manage``/``all`` wildcards
to a match-everything pattern.

Example
-------
::

    cleaner = ActionCleaner()
    assert cleaner.clean("Update") == "edit"
    assert "modify" in cleaner.aliases_for("edit")
    assert cleaner.clean("manage") == ".*"
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from cani.cleaners.base import WILDCARD_PATTERN, NameCleaner, squash
from cani.config import DEFAULT_ACTION_ALIASES, AliasConfig
from cani.errors import InvalidActionError

_WILDCARDS: frozenset[str] = frozenset(["manage", "all", "*", WILDCARD_PATTERN])


class ActionCleaner(NameCleaner):
    """Canonicalizer for action names.

    Parameters
    ----------
    aliases:
        Mapping of canonical verb to its synonyms. Defaults to the built-in
        table (view/create/edit/delete).
    """

    def __init__(self, aliases: Mapping[str, Iterable[str]] | None = None) -> None:
        table = DEFAULT_ACTION_ALIASES if aliases is None else aliases
        self._aliases: dict[str, frozenset[str]] = {}
        self._canonical_by_name: dict[str, str] = {}

        # Canonical verbs always resolve to themselves, even when another
        # entry lists them as a synonym.
        for canonical in table:
            key = squash(canonical)
            self._canonical_by_name[key] = key
        for canonical, synonyms in table.items():
            key = squash(canonical)
            names = {key, *(squash(s) for s in synonyms)}
            self._aliases[key] = frozenset(self._aliases.get(key, frozenset()) | names)
            for name in names:
                self._canonical_by_name.setdefault(name, key)

    @classmethod
    def from_config(cls, config: AliasConfig) -> ActionCleaner:
        """Build an ActionCleaner from the ``aliases`` section of a policy."""
        return cls(config.action_table())

    def clean(self, raw: object) -> str:
        if raw is None:
            raise InvalidActionError()
        name = squash(str(raw))
        if name in _WILDCARDS:
            return WILDCARD_PATTERN
        return self._canonical_by_name.get(name, name)

    def aliases_for(self, canonical: str) -> frozenset[str]:
        if canonical == WILDCARD_PATTERN:
            return frozenset([WILDCARD_PATTERN])
        return self._aliases.get(canonical, frozenset([canonical]))

    @property
    def canonical_actions(self) -> list[str]:
        """Return the canonical verbs known to this cleaner, sorted."""
        return sorted(self._aliases)
