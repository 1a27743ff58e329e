"""
Tier Profile

Display attributes for each runtime tier, derived from a fixed table.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from daa_sdk.config.base_types import Tier


@dataclass(frozen=True)
class TierProfile:
    """Performance characteristics of a runtime tier"""

    tier: Tier
    runtime: str
    performance: str
    relative_speed: float
    threading_support: bool
    features: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform": self.tier.value,
            "runtime": self.runtime,
            "performance": self.performance,
            "relative_speed": self.relative_speed,
            "threading_support": self.threading_support,
            "features": list(self.features),
        }


TIER_PROFILES: Dict[Tier, TierProfile] = {
    Tier.ACCELERATED: TierProfile(
        tier=Tier.ACCELERATED,
        runtime="CPython native extension",
        performance="high",
        relative_speed=1.0,
        threading_support=True,
        features=(
            "Multi-threading",
            "Direct memory access",
            "Zero-copy operations",
            "Full async/await support",
        ),
    ),
    Tier.PORTABLE: TierProfile(
        tier=Tier.PORTABLE,
        runtime="WebAssembly",
        performance="good",
        relative_speed=0.4,  # Portable builds run at roughly 40% of native
        threading_support=False,
        features=(
            "Cross-platform compatibility",
            "Browser support",
            "Sandboxed execution",
            "Memory safety",
        ),
    ),
}


def profile_for(tier: Tier) -> TierProfile:
    """Look up the profile for a tier"""
    return TIER_PROFILES[tier]
