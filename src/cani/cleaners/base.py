"""Common contract for action and subject name cleaners.

A cleaner turns a free-form name into one canonical, matchable pattern and
expands a canonical pattern into the set of equivalent alias patterns used
by command-style matching.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod

WILDCARD_PATTERN = ".*"

_SEPARATORS = re.compile(r"[\s_\-]+")


def squash(raw: str) -> str:
    """Lowercase ``raw`` and drop whitespace, underscores and hyphens."""
    return _SEPARATORS.sub("", raw.strip().lower())


class NameCleaner(ABC):
    """Abstract base for name canonicalizers.

    Implementations must keep :meth:`clean` idempotent, so that
    ``clean(clean(x)) == clean(x)``, and :meth:`aliases_for` must never
    return an empty set.
    """

    @abstractmethod
    def clean(self, raw: object) -> str:
        """Return the canonical pattern for ``raw``."""

    @abstractmethod
    def aliases_for(self, canonical: str) -> frozenset[str]:
        """Return every pattern considered equivalent to ``canonical``."""
