"""
Environment probe for runtime tier detection
"""

import importlib.util
import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import psutil

from ..config.base_types import SANDBOX_PLATFORMS, Tier
from ..config.config_manager import Config, get_config_or_default
from .utils.tier_profile import TierProfile, profile_for

logger = logging.getLogger(__name__)

SpecResolver = Callable[[str], Any]


@dataclass(frozen=True)
class EnvironmentContext:
    """Snapshot of the execution context the probe classifies"""

    platform: str
    implementation: str
    cpu_count: Optional[int] = None
    resolve_spec: SpecResolver = field(
        default=importlib.util.find_spec, repr=False, compare=False
    )

    @classmethod
    def from_process(cls) -> "EnvironmentContext":
        """Build a context describing the running interpreter"""
        return cls(
            platform=sys.platform,
            implementation=sys.implementation.name,
            cpu_count=psutil.cpu_count(logical=True),
        )

    @property
    def supports_native_extensions(self) -> bool:
        return self.platform not in SANDBOX_PLATFORMS


class EnvironmentProbe:
    """Classifies the execution context into a runtime tier, once"""

    def __init__(
        self,
        context: EnvironmentContext,
        probe_module: str,
        forced_tier: Optional[Tier] = None,
    ):
        self.context = context
        self.probe_module = probe_module
        self.forced_tier = forced_tier
        self._tier: Optional[Tier] = None
        self._lock = threading.Lock()

    def detect(self) -> Tier:
        """Detect the runtime tier; later calls return the first answer"""
        if self._tier is not None:
            return self._tier

        with self._lock:
            if self._tier is None:
                self._tier = self._classify()
                logger.debug(f"Runtime tier detected: {self._tier.value}")
        return self._tier

    def get_profile(self, tier: Optional[Tier] = None) -> TierProfile:
        """Get performance characteristics for a tier (default: detected)"""
        return profile_for(tier if tier is not None else self.detect())

    def _classify(self) -> Tier:
        if self.forced_tier is not None:
            logger.info(f"Runtime tier forced to {self.forced_tier.value}")
            return self.forced_tier

        if not self.context.supports_native_extensions:
            return Tier.PORTABLE

        # Resolve without importing: find_spec never executes the module
        try:
            spec = self.context.resolve_spec(self.probe_module)
        except Exception as e:
            logger.warning(
                f"Native bindings could not be resolved ({e}), "
                f"falling back to portable tier"
            )
            return Tier.PORTABLE

        if spec is None:
            logger.warning(
                f"Native bindings '{self.probe_module}' not found, "
                f"falling back to portable tier"
            )
            return Tier.PORTABLE

        return Tier.ACCELERATED


def create_probe(config: Config, context: Optional[EnvironmentContext] = None):
    """Build a probe from configuration"""
    return EnvironmentProbe(
        context or EnvironmentContext.from_process(),
        probe_module=config.bindings.get_probe_module(),
        forced_tier=config.get_forced_tier(),
    )


# Process-wide probe behind detect()/get_profile()
_default_probe: Optional[EnvironmentProbe] = None
_default_probe_lock = threading.Lock()


def get_default_probe() -> EnvironmentProbe:
    """Get the process-wide probe, creating it from the global config"""
    global _default_probe
    if _default_probe is None:
        with _default_probe_lock:
            if _default_probe is None:
                _default_probe = create_probe(get_config_or_default())
    return _default_probe


def detect() -> Tier:
    """Detect the runtime tier of this process"""
    return get_default_probe().detect()


def get_profile(tier: Optional[Tier] = None) -> TierProfile:
    """Get the tier profile of this process"""
    return get_default_probe().get_profile(tier)
