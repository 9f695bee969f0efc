#!/usr/bin/env python3
"""Example: Quickstart — cani

Minimal working example: grant a role a few permissions, check
action/subject requests against it, and authorize commands by name.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install cani-authz
"""
from __future__ import annotations

from dataclasses import dataclass

import cani


@dataclass
class Invoice:
    number: str
    locked: bool = False
    can_delete: bool = True


@cani.authorize_as("delete", "invoice")
class PurgeLedger(cani.Command):
    pass


def main() -> None:
    print(f"cani version: {cani.__version__}")

    # Step 1: Build a role
    clerk = cani.Ability("clerk")
    clerk.allow("view", "customer")
    clerk.allow("edit", "invoice").when(lambda invoice: not invoice.locked)
    clerk.allow("delete", "invoice")
    print(f"Role ready: {clerk!r}")

    # Step 2: Check action/subject requests
    open_invoice = Invoice("INV-001")
    locked_invoice = Invoice("INV-002", locked=True)
    frozen_invoice = Invoice("INV-003", can_delete=False)

    requests = [
        ("Show", "Customers"),
        ("Update", open_invoice),
        ("Update", locked_invoice),
        ("Delete", frozen_invoice),
        ("Archive", open_invoice),
    ]

    print("\nAction checks:")
    for action, subject in requests:
        result = clerk.check(action, subject)
        icon = "ALLOW" if result.allowed else "DENY"
        print(f"  [{icon}] {action} {subject}")
        print(f"    {result.reason}")

    # Step 3: Authorize commands by name
    commands: list[object] = ["RemoveInvoices", "ArchiveInvoice", PurgeLedger]
    print("\nCommand checks:")
    for command in commands:
        icon = "ALLOW" if clerk.allows_execution_of(command) else "DENY"
        print(f"  [{icon}] {cani.resolve_command_name(command)}")


if __name__ == "__main__":
    main()
