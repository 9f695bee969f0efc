"""YAML-based policy loader.

PolicyLoader reads a YAML policy and builds a :class:`Policy` with one
:class:`Ability` per role. All abilities share cleaners built from the
``aliases`` section.

Schema
------
::

    version: "1.0"
    description: "Back-office roles"
    aliases:
      actions:
        approve: [sign, accept]
      subjects:
        invoice: [bill]
      subject_suffixes: [command, controller, viewmodel]
    roles:
      admin:
        - action: manage
          subject: all
      clerk:
        - action: view
          subject: invoice
        - action: delete
          subject: invoice

Context predicates are code, not configuration: attach them after loading
with ``policy.ability_for("clerk").permissions[i].when(...)`` or declare
the permission in code.

Example
-------
::

    loader = PolicyLoader()
    policy = loader.load("/path/to/policy.yaml")
    assert policy.allows_execution_of("clerk", "RemoveInvoices")
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from cani.cleaners.action_cleaner import ActionCleaner
from cani.cleaners.subject_cleaner import SubjectCleaner
from cani.config import PolicyConfig
from cani.permissions.ability import Ability, Policy

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1.0", "1"])


class PolicyConfigError(ValueError):
    """Raised when a policy YAML config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class PolicyLoader:
    """Loads Policy configurations from YAML files or dicts.

    Parameters
    ----------
    strict:
        When ``True``, unknown top-level keys are an error. Default
        ``False`` (unknown keys are ignored).
    """

    _KNOWN_TOP_KEYS: frozenset[str] = frozenset(
        ["version", "description", "aliases", "roles", "metadata"]
    )

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def load(self, config_path: str | Path) -> Policy:
        """Load a Policy from a YAML file on disk.

        Raises
        ------
        PolicyConfigError
            If the file cannot be parsed or is structurally invalid.
        FileNotFoundError
            If the config file does not exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Policy config not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw: dict[str, object] = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(
                f"Failed to parse YAML: {exc}", str(config_path)
            ) from exc

        return self._build_policy(raw, config_path=str(config_path))

    def load_from_dict(
        self,
        config: dict[str, object],
        config_path: str | None = None,
    ) -> Policy:
        """Load a Policy from an already-parsed config dictionary."""
        return self._build_policy(config, config_path=config_path)

    def load_from_yaml_string(
        self,
        yaml_string: str,
        config_path: str | None = None,
    ) -> Policy:
        """Load a Policy from a YAML string."""
        try:
            raw: dict[str, object] = yaml.safe_load(yaml_string) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(
                f"Failed to parse YAML string: {exc}", config_path
            ) from exc
        return self._build_policy(raw, config_path=config_path)

    def parse_config(
        self,
        raw: dict[str, object],
        config_path: str | None = None,
    ) -> PolicyConfig:
        """Validate a raw config dict and return the typed configuration."""
        self._validate_structure(raw, config_path)
        try:
            config = PolicyConfig.model_validate(raw)
        except ValidationError as exc:
            raise PolicyConfigError(f"Invalid policy config: {exc}", config_path) from exc

        if config.version not in _SUPPORTED_VERSIONS:
            raise PolicyConfigError(
                f"Unsupported config version {config.version!r}. "
                f"Supported: {sorted(_SUPPORTED_VERSIONS)}.",
                config_path,
            )
        return config

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_policy(
        self,
        raw: dict[str, object],
        config_path: str | None = None,
    ) -> Policy:
        config = self.parse_config(raw, config_path)
        action_cleaner = ActionCleaner.from_config(config.aliases)
        subject_cleaner = SubjectCleaner.from_config(config.aliases)

        policy = Policy()
        permission_total = 0
        for role, entries in config.roles.items():
            ability = Ability(
                role,
                action_cleaner=action_cleaner,
                subject_cleaner=subject_cleaner,
            )
            for index, entry in enumerate(entries):
                try:
                    ability.allow(entry.action, entry.subject)
                except ValueError as exc:
                    raise PolicyConfigError(
                        f"Error in role {role!r} permission at index {index}: {exc}",
                        config_path,
                    ) from exc
            permission_total += ability.permission_count
            policy.add_ability(ability)

        logger.info(
            "Loaded %d roles with %d permissions from %s",
            len(policy),
            permission_total,
            config_path or "<dict>",
        )
        return policy

    def _validate_structure(
        self,
        raw: dict[str, object],
        config_path: str | None,
    ) -> None:
        if not isinstance(raw, dict):
            raise PolicyConfigError(
                "Policy config must be a YAML mapping (dict).", config_path
            )

        if "roles" not in raw:
            raise PolicyConfigError(
                "Policy config must contain a 'roles' mapping.", config_path
            )

        if not isinstance(raw["roles"], dict):
            raise PolicyConfigError(
                "Policy config 'roles' must be a mapping of role name to permissions.",
                config_path,
            )

        if self._strict:
            unknown_keys = set(raw.keys()) - self._KNOWN_TOP_KEYS
            if unknown_keys:
                raise PolicyConfigError(
                    f"Unknown top-level keys: {sorted(unknown_keys)}. "
                    f"Known keys: {sorted(self._KNOWN_TOP_KEYS)}.",
                    config_path,
                )
