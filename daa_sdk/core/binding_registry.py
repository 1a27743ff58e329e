"""
Binding registry: the fixed catalog of optional feature modules
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from ..config.base_types import ModuleIdentity, Tier
from ..config.core_configs import BindingsConfig
from .exceptions import RegistryConfigurationError, UnknownModuleError
from .utils.resolution_strategies import (
    ResolutionStrategy,
    native_extension_strategy,
    portable_module_strategy,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindingEntry:
    """Per-tier strategies and fallback chain for one module identity"""

    identity: ModuleIdentity
    strategies: Mapping[Tier, ResolutionStrategy]
    fallbacks: Mapping[Tier, Optional[Tier]] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze caller-supplied dicts; every tier maps to a fallback or None
        object.__setattr__(self, "strategies", MappingProxyType(dict(self.strategies)))
        object.__setattr__(
            self,
            "fallbacks",
            MappingProxyType({tier: self.fallbacks.get(tier) for tier in Tier}),
        )

    def strategy_for(self, tier: Tier) -> Optional[ResolutionStrategy]:
        return self.strategies.get(tier)

    def fallback_for(self, tier: Tier) -> Optional[Tier]:
        return self.fallbacks[tier]

    def supports(self, tier: Tier) -> bool:
        return tier in self.strategies

    def validate(self) -> None:
        """Raise RegistryConfigurationError for a malformed entry"""
        name = self.identity.value

        if not self.strategies:
            raise RegistryConfigurationError(name, "no resolution strategy for any tier")

        for tier, strategy in self.strategies.items():
            if not callable(strategy):
                raise RegistryConfigurationError(
                    name, f"strategy for tier '{tier.value}' is not callable"
                )

        for tier, fallback in self.fallbacks.items():
            if fallback is None:
                continue
            if fallback is tier:
                raise RegistryConfigurationError(
                    name, f"tier '{tier.value}' falls back to itself"
                )
            if fallback not in self.strategies:
                raise RegistryConfigurationError(
                    name,
                    f"tier '{tier.value}' falls back to '{fallback.value}' "
                    f"which has no strategy",
                )


class BindingRegistry:
    """Read-only, validated catalog of binding entries"""

    def __init__(self, entries: Iterable[BindingEntry]):
        self._entries: Dict[ModuleIdentity, BindingEntry] = {}

        for entry in entries:
            if entry.identity in self._entries:
                raise RegistryConfigurationError(
                    entry.identity.value, "identity registered more than once"
                )
            entry.validate()
            self._entries[entry.identity] = entry

        logger.debug(
            f"Binding registry built with {len(self._entries)} entries: "
            f"{[identity.value for identity in self._entries]}"
        )

    def entries(self) -> Tuple[BindingEntry, ...]:
        return tuple(self._entries.values())

    def identities(self) -> Tuple[ModuleIdentity, ...]:
        return tuple(self._entries)

    def get(self, identity: Union[ModuleIdentity, str]) -> BindingEntry:
        """Look up an entry by identity or identity name"""
        known = [i.value for i in self._entries]
        try:
            key = identity if isinstance(identity, ModuleIdentity) else ModuleIdentity(identity)
        except ValueError:
            raise UnknownModuleError(str(identity), known) from None

        if key not in self._entries:
            raise UnknownModuleError(key.value, known)
        return self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries


def build_default_registry(bindings: Optional[BindingsConfig] = None) -> BindingRegistry:
    """Build the standard catalog: crypto on both tiers, the rest native only"""
    bindings = bindings or BindingsConfig()

    return BindingRegistry(
        [
            BindingEntry(
                identity=ModuleIdentity.CRYPTO,
                strategies={
                    Tier.ACCELERATED: native_extension_strategy(bindings.crypto_native),
                    Tier.PORTABLE: portable_module_strategy(
                        bindings.crypto_portable, bindings.portable_init_hook
                    ),
                },
                fallbacks={Tier.ACCELERATED: Tier.PORTABLE},
            ),
            # Portable builds of orchestration and training do not exist yet
            BindingEntry(
                identity=ModuleIdentity.ORCHESTRATION,
                strategies={
                    Tier.ACCELERATED: native_extension_strategy(
                        bindings.orchestration_native
                    ),
                },
            ),
            BindingEntry(
                identity=ModuleIdentity.TRAINING,
                strategies={
                    Tier.ACCELERATED: native_extension_strategy(bindings.training_native),
                },
            ),
        ]
    )
