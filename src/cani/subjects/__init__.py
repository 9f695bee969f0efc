"""Subject-side capability lookup."""
from __future__ import annotations

from cani.subjects.capability import (
    CAPABILITY_PREFIX,
    CapabilityAware,
    CapabilityState,
    capability_allows,
    capability_name,
    lookup_capability,
)

__all__ = [
    "CAPABILITY_PREFIX",
    "CapabilityAware",
    "CapabilityState",
    "capability_allows",
    "capability_name",
    "lookup_capability",
]
