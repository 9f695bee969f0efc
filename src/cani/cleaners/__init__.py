"""Name canonicalizers for actions and subjects.

Example
-------
::

    from cani.cleaners import ActionCleaner, SubjectCleaner

    actions = ActionCleaner()
    subjects = SubjectCleaner(aliases={"invoice": ["bill"]})
    assert actions.clean("Remove") == "delete"
    assert subjects.clean("Bills") == "invoice"
"""
from __future__ import annotations

from cani.cleaners.action_cleaner import ActionCleaner
from cani.cleaners.base import WILDCARD_PATTERN, NameCleaner, squash
from cani.cleaners.subject_cleaner import SubjectCleaner, pluralize, singularize

__all__ = [
    "ActionCleaner",
    "NameCleaner",
    "SubjectCleaner",
    "WILDCARD_PATTERN",
    "pluralize",
    "singularize",
    "squash",
]
