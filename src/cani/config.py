"""Policy configuration schema with Pydantic v2 validation.

Loads and validates a ``policy.yaml`` file into a typed
:class:`PolicyConfig` object. Unknown keys are allowed so that later schema
additions do not break older files.

Example
-------
>>> loader = ConfigLoader()
>>> config = loader.load_string("roles: {clerk: [{action: view, subject: invoice}]}")
>>> config.roles["clerk"][0].subject
'invoice'
"""
from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_ACTION_ALIASES: dict[str, list[str]] = {
    "view": ["read", "show", "get", "list", "index", "details", "browse"],
    "create": ["add", "new", "insert"],
    "edit": ["update", "modify", "change"],
    "delete": ["remove", "destroy", "erase"],
}

DEFAULT_SUBJECT_SUFFIXES: list[str] = [
    "viewmodel",
    "controller",
    "command",
    "model",
    "dto",
]


def _normalise_names(values: list[str]) -> list[str]:
    names = [str(v).strip().lower() for v in values]
    for name in names:
        if not name:
            raise ValueError("Alias names must not be empty.")
    return names


class AliasConfig(BaseModel):
    """Synonym tables used by the action and subject cleaners.

    ``actions`` and ``subjects`` map a canonical name to its synonyms.
    Configured action synonyms are merged over the built-in table unless
    ``replace_defaults`` is set.
    """

    model_config = {"extra": "allow"}

    actions: dict[str, list[str]] = Field(default_factory=dict)
    subjects: dict[str, list[str]] = Field(default_factory=dict)
    subject_suffixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SUBJECT_SUFFIXES)
    )
    replace_defaults: bool = Field(default=False)

    @field_validator("actions", "subjects")
    @classmethod
    def validate_alias_table(cls, table: dict[str, list[str]]) -> dict[str, list[str]]:
        normalised: dict[str, list[str]] = {}
        for canonical, synonyms in table.items():
            key = str(canonical).strip().lower()
            if not key:
                raise ValueError("Alias table keys must not be empty.")
            normalised[key] = _normalise_names(list(synonyms or []))
        return normalised

    @field_validator("subject_suffixes")
    @classmethod
    def validate_suffixes(cls, values: list[str]) -> list[str]:
        return _normalise_names(values)

    def action_table(self) -> dict[str, list[str]]:
        """Return the effective action synonym table."""
        if self.replace_defaults:
            return {k: list(v) for k, v in self.actions.items()}
        merged = {k: list(v) for k, v in DEFAULT_ACTION_ALIASES.items()}
        for canonical, synonyms in self.actions.items():
            existing = merged.setdefault(canonical, [])
            existing.extend(s for s in synonyms if s not in existing)
        return merged


class PermissionEntry(BaseModel):
    """A single ``{action, subject}`` declaration under a role."""

    action: str
    subject: str

    @field_validator("action", "subject")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class PolicyConfig(BaseModel):
    """Top-level policy configuration schema.

    Loaded from ``policy.yaml``. Every section is optional.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1.0")
    description: str | None = Field(default=None)
    aliases: AliasConfig = Field(default_factory=AliasConfig)
    roles: dict[str, list[PermissionEntry]] = Field(default_factory=dict)

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, value: object) -> str:
        return str(value)

    @field_validator("roles", mode="before")
    @classmethod
    def coerce_empty_roles(cls, value: object) -> object:
        if isinstance(value, dict):
            return {name: entries or [] for name, entries in value.items()}
        return value


class ConfigLoader:
    """Loads and validates policy YAML configuration.

    Example
    -------
    >>> loader = ConfigLoader()
    >>> config = loader.load(Path("policy.yaml"))
    """

    def load(self, config_path: Path) -> PolicyConfig:
        """Load and validate a policy YAML file.

        Parameters
        ----------
        config_path:
            Path to the ``policy.yaml`` file.

        Returns
        -------
        PolicyConfig
            Validated configuration object.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        pydantic.ValidationError:
            When the YAML content fails validation.
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Policy config not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as fh:
            raw: dict[str, object] = yaml.safe_load(fh) or {}

        return PolicyConfig.model_validate(raw)

    def load_string(self, yaml_content: str) -> PolicyConfig:
        """Load and validate a YAML string directly."""
        raw: dict[str, object] = yaml.safe_load(yaml_content) or {}
        return PolicyConfig.model_validate(raw)

    def defaults(self) -> PolicyConfig:
        """Return a configuration with all defaults applied."""
        return PolicyConfig()
