#!/usr/bin/env python3
"""Example: Policy files — cani

Load a role policy from YAML, including custom action and subject
aliases, and check requests for several roles.

Usage:
    python examples/02_policy_file.py

Requirements:
    pip install cani-authz
"""
from __future__ import annotations

import cani

_POLICY_YAML = """
version: "1.0"
description: Billing department roles
aliases:
  actions:
    approve: [sign, authorise]
  subjects:
    invoice: [bill]
roles:
  admin:
    - action: manage
      subject: all
  accountant:
    - action: view
      subject: invoice
    - action: approve
      subject: invoice
  auditor:
    - action: view
      subject: .*
"""


def main() -> None:
    policy = cani.PolicyLoader().load_from_yaml_string(_POLICY_YAML)
    print(f"Loaded {len(policy)} roles: {', '.join(policy.roles)}")

    requests = [
        ("accountant", "Sign", "Bills"),
        ("accountant", "Delete", "Invoice"),
        ("auditor", "List", "Payments"),
        ("admin", "Destroy", "Customer"),
    ]

    print("\nPolicy checks:")
    for role, action, subject in requests:
        result = policy.check(role, action, subject)
        icon = "ALLOW" if result.allowed else "DENY"
        print(f"  [{icon}] {role}: {action} {subject}")

    print("\nCommand checks:")
    for role, command in [("accountant", "AuthoriseBill"), ("auditor", "RemoveInvoice")]:
        icon = "ALLOW" if policy.allows_execution_of(role, command) else "DENY"
        print(f"  [{icon}] {role}: {command}")

    try:
        policy.ability_for("intern")
    except cani.UnknownRoleError as error:
        print(f"\nLookup failed: {error}")


if __name__ == "__main__":
    main()
