"""cani: rule-based action/subject authorization.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import cani
>>> permission = cani.Permission("delete", "invoice")
>>> permission.allows_execution_of("RemoveInvoices")
True
>>> permission.allows_execution_of("ArchiveInvoice")
False
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Permissions
# ---------------------------------------------------------------------------
from cani.permissions.ability import Ability, AuthorizationResult, Policy
from cani.permissions.permission import Permission
from cani.permissions.policy_loader import PolicyConfigError, PolicyLoader
from cani.permissions.predicates import ContextPredicate, PlainPredicate, TypedPredicate

# ---------------------------------------------------------------------------
# Cleaners
# ---------------------------------------------------------------------------
from cani.cleaners.action_cleaner import ActionCleaner
from cani.cleaners.base import NameCleaner
from cani.cleaners.subject_cleaner import SubjectCleaner

# ---------------------------------------------------------------------------
# Commands and subjects
# ---------------------------------------------------------------------------
from cani.commands.naming import Command, NamedCommand, authorize_as, resolve_command_name
from cani.subjects.capability import CapabilityAware, CapabilityState, lookup_capability

# ---------------------------------------------------------------------------
# Configuration and errors
# ---------------------------------------------------------------------------
from cani.config import AliasConfig, ConfigLoader, PolicyConfig
from cani.errors import (
    InvalidActionError,
    InvalidRequestError,
    InvalidSubjectError,
    PredicateTypeError,
    UnknownRoleError,
)

__all__ = [
    "__version__",
    # Permissions
    "Ability",
    "AuthorizationResult",
    "ContextPredicate",
    "Permission",
    "PlainPredicate",
    "Policy",
    "PolicyConfigError",
    "PolicyLoader",
    "TypedPredicate",
    # Cleaners
    "ActionCleaner",
    "NameCleaner",
    "SubjectCleaner",
    # Commands and subjects
    "CapabilityAware",
    "CapabilityState",
    "Command",
    "NamedCommand",
    "authorize_as",
    "lookup_capability",
    "resolve_command_name",
    # Configuration and errors
    "AliasConfig",
    "ConfigLoader",
    "InvalidActionError",
    "InvalidRequestError",
    "InvalidSubjectError",
    "PolicyConfig",
    "PredicateTypeError",
    "UnknownRoleError",
]
