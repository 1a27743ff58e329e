"""
Core components for runtime binding resolution
"""

from daa_sdk.core.binding_registry import (
    BindingEntry,
    BindingRegistry,
    build_default_registry,
)
from daa_sdk.core.environment_probe import (
    EnvironmentContext,
    EnvironmentProbe,
    detect,
    get_profile,
)
from daa_sdk.core.exceptions import (
    DAAError,
    ModuleUnavailableError,
    RegistryConfigurationError,
    UnknownModuleError,
)
from daa_sdk.core.service.availability_aggregator import (
    AvailabilityAggregator,
    create_aggregator,
    get_aggregator,
)
from daa_sdk.core.service.module_loader import ModuleLoader
from daa_sdk.core.utils.availability_report import AvailabilityReport
from daa_sdk.core.utils.load_outcome import (
    AttemptFailure,
    LoadAttempt,
    LoadOutcome,
    ModuleHandle,
    UnavailableReason,
)
from daa_sdk.core.utils.tier_profile import TIER_PROFILES, TierProfile

__all__ = [
    "AttemptFailure",
    "AvailabilityAggregator",
    "AvailabilityReport",
    "BindingEntry",
    "BindingRegistry",
    "DAAError",
    "EnvironmentContext",
    "EnvironmentProbe",
    "LoadAttempt",
    "LoadOutcome",
    "ModuleHandle",
    "ModuleLoader",
    "ModuleUnavailableError",
    "RegistryConfigurationError",
    "TIER_PROFILES",
    "TierProfile",
    "UnavailableReason",
    "UnknownModuleError",
    "build_default_registry",
    "create_aggregator",
    "detect",
    "get_aggregator",
    "get_profile",
]
