"""
DAA SDK runtime bindings

Detects whether native extensions or portable modules back the SDK's optional
features (crypto, orchestration, training) and loads them uniformly.
"""

from daa_sdk.config import ModuleIdentity, Tier
from daa_sdk.core import (
    AvailabilityAggregator,
    AvailabilityReport,
    LoadOutcome,
    ModuleHandle,
    ModuleUnavailableError,
    UnavailableReason,
    detect,
    get_profile,
)
from daa_sdk.core.feature_access import (
    is_binding_available,
    load_crypto,
    load_orchestrator,
    load_training,
    probe_all,
    probe_one,
)

__version__ = "0.1.0"

__all__ = [
    "AvailabilityAggregator",
    "AvailabilityReport",
    "LoadOutcome",
    "ModuleHandle",
    "ModuleIdentity",
    "ModuleUnavailableError",
    "Tier",
    "UnavailableReason",
    "detect",
    "get_profile",
    "is_binding_available",
    "load_crypto",
    "load_orchestrator",
    "load_training",
    "probe_all",
    "probe_one",
]
