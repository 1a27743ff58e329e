"""
Availability Report

Immutable snapshot of one aggregation run over the binding registry.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Sequence, Tuple

from daa_sdk.config.base_types import ModuleIdentity, Tier

from .load_outcome import LoadOutcome


@dataclass(frozen=True)
class AvailabilityReport:
    """Which bindings loaded on the active tier, in registry order"""

    tier: Tier
    available: Tuple[ModuleIdentity, ...]
    unavailable: Tuple[ModuleIdentity, ...]
    outcomes: Mapping[ModuleIdentity, LoadOutcome] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )

    @classmethod
    def from_outcomes(cls, tier: Tier, outcomes: Sequence[LoadOutcome]) -> "AvailabilityReport":
        """Partition outcomes (already in registry order) into the two sets"""
        return cls(
            tier=tier,
            available=tuple(o.identity for o in outcomes if o.is_loaded),
            unavailable=tuple(o.identity for o in outcomes if not o.is_loaded),
            outcomes=MappingProxyType({o.identity: o for o in outcomes}),
        )

    def is_available(self, identity: ModuleIdentity) -> bool:
        return identity in self.available

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform": self.tier.value,
            "available": [identity.value for identity in self.available],
            "unavailable": [identity.value for identity in self.unavailable],
            "outcomes": {
                identity.value: outcome.to_dict()
                for identity, outcome in self.outcomes.items()
            },
        }
