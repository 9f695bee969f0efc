"""Action/subject permissions with context predicates.

Example
-------
::

    from cani.permissions import Permission

    permission = Permission("delete", "invoice")
    permission.when(lambda invoice: invoice.status == "draft")

    permission.authorizes("remove", draft_invoice)        # True
    permission.allows_execution_of("RemoveInvoices")       # True
    permission.allows_execution_of("ArchiveInvoice")       # False
"""
from __future__ import annotations

from cani.permissions.ability import Ability, AuthorizationResult, Policy
from cani.permissions.permission import Permission
from cani.permissions.policy_loader import PolicyConfigError, PolicyLoader
from cani.permissions.predicates import (
    ContextPredicate,
    PlainPredicate,
    TypedPredicate,
    build_predicate,
)

__all__ = [
    # Core types
    "Permission",
    "Ability",
    "AuthorizationResult",
    "Policy",
    # Predicates
    "ContextPredicate",
    "PlainPredicate",
    "TypedPredicate",
    "build_predicate",
    # Loader
    "PolicyConfigError",
    "PolicyLoader",
]
