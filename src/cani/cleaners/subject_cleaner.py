"""Canonicalization of subject names.

A subject may be given as a string, a class, or an instance (whose class
name is used). Conventional type suffixes such as ``Controller`` or
``ViewModel`` are stripped where they start a new word (``InvoiceDto``,
``invoice_dto``), never from inside a word, so ``"remodel"`` stays as it
is. The name is then squashed to lowercase and singularized. Both steps
repeat until nothing changes, so cleaning an already clean name is a no-op.

Aliases for a canonical subject are the name and its plural, plus any
configured synonyms and their plurals.

Example
-------
::

    cleaner = SubjectCleaner()
    assert cleaner.clean("InvoicesController") == "invoice"
    assert cleaner.aliases_for("invoice") == frozenset({"invoice", "invoices"})
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from cani.cleaners.base import WILDCARD_PATTERN, NameCleaner, squash
from cani.config import DEFAULT_SUBJECT_SUFFIXES, AliasConfig
from cani.errors import InvalidSubjectError

_WILDCARDS: frozenset[str] = frozenset(["all", "*", WILDCARD_PATTERN])
_VOWELS = "aeiou"
_SEPARATORS = " _-"


def singularize(word: str) -> str:
    """Return a best-effort singular form of an English noun."""
    if len(word) <= 3 or not word.endswith("s"):
        return word
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith(("sses", "xes", "ches", "shes", "zzes")):
        return word[:-2]
    if word.endswith(("ss", "us", "is")):
        return word
    return word[:-1]


def pluralize(word: str) -> str:
    """Return a best-effort plural form of an English noun."""
    if word.endswith("y") and len(word) > 1 and word[-2] not in _VOWELS:
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


class SubjectCleaner(NameCleaner):
    """Canonicalizer for subject names.

    Parameters
    ----------
    aliases:
        Mapping of canonical subject to synonyms (e.g.
        ``{"invoice": ["bill"]}``). Synonyms clean to the canonical name.
    suffixes:
        Type-name suffixes to strip. Longer suffixes are tried first. A
        suffix is only stripped at a word boundary and when something remains.
    """

    def __init__(
        self,
        aliases: Mapping[str, Iterable[str]] | None = None,
        suffixes: Iterable[str] | None = None,
    ) -> None:
        raw_suffixes = DEFAULT_SUBJECT_SUFFIXES if suffixes is None else suffixes
        self._suffixes: tuple[str, ...] = tuple(
            sorted({squash(s) for s in raw_suffixes if squash(s)}, key=len, reverse=True)
        )
        self._synonyms: dict[str, frozenset[str]] = {}
        self._canonical_by_name: dict[str, str] = {}

        table = aliases or {}
        for canonical in table:
            key = self._normalise(str(canonical))
            self._canonical_by_name[key] = key
        for canonical, synonyms in table.items():
            key = self._normalise(str(canonical))
            names = {self._normalise(str(s)) for s in synonyms} - {key}
            self._synonyms[key] = frozenset(self._synonyms.get(key, frozenset()) | names)
            for name in names:
                self._canonical_by_name.setdefault(name, key)

    @classmethod
    def from_config(cls, config: AliasConfig) -> SubjectCleaner:
        """Build a SubjectCleaner from the ``aliases`` section of a policy."""
        return cls(aliases=config.subjects, suffixes=config.subject_suffixes)

    def clean(self, raw: object) -> str:
        if raw is None:
            raise InvalidSubjectError()
        if isinstance(raw, str):
            name = raw
        elif isinstance(raw, type):
            name = raw.__name__
        else:
            name = type(raw).__name__

        name = self._normalise(name)
        if name in _WILDCARDS:
            return WILDCARD_PATTERN
        return self._canonical_by_name.get(name, name)

    def aliases_for(self, canonical: str) -> frozenset[str]:
        if canonical == WILDCARD_PATTERN:
            return frozenset([WILDCARD_PATTERN])
        names = {canonical, *self._synonyms.get(canonical, frozenset())}
        return frozenset(form for name in names for form in (name, pluralize(name)))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _normalise(self, raw: str) -> str:
        if squash(raw) in _WILDCARDS:
            return WILDCARD_PATTERN

        stripped = self._strip_suffix(raw)
        while stripped != raw:
            raw = stripped
            stripped = self._strip_suffix(raw)

        name = squash(raw)
        singular = singularize(name)
        while singular != name:
            name = singular
            singular = singularize(name)
        return WILDCARD_PATTERN if name in _WILDCARDS else name

    def _strip_suffix(self, raw: str) -> str:
        boundaries = _word_starts(raw)
        for suffix in self._suffixes:
            for start in boundaries:
                tail = squash(raw[start:])
                if suffix in (tail, singularize(tail)) and squash(raw[:start]):
                    return raw[:start].rstrip(_SEPARATORS)
        return raw


def _word_starts(raw: str) -> list[int]:
    """Return the indexes where a new word begins inside ``raw``.

    A word starts at an uppercase letter following a lowercase letter or
    digit, at the last capital of an acronym (``DTOModel``), or after a
    separator. The start of the string is never a boundary.
    """
    starts = []
    for index in range(1, len(raw)):
        char, before = raw[index], raw[index - 1]
        if before in _SEPARATORS and char not in _SEPARATORS:
            starts.append(index)
        elif char.isupper() and (before.islower() or before.isdigit()):
            starts.append(index)
        elif (
            char.isupper()
            and before.isupper()
            and index + 1 < len(raw)
            and raw[index + 1].islower()
        ):
            starts.append(index)
    return starts
