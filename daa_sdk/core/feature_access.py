"""
Feature access helpers

Entry points for code that needs one specific binding. Each helper resolves
through the process-wide aggregator and raises ModuleUnavailableError with
the binding's name when it cannot be loaded.
"""

from typing import Optional

from ..config.base_types import ModuleIdentity, Tier
from .service.availability_aggregator import IdentityLike, get_aggregator
from .utils.availability_report import AvailabilityReport
from .utils.load_outcome import LoadOutcome, ModuleHandle


async def load_crypto(tier: Optional[Tier] = None) -> ModuleHandle:
    """Load the quantum-resistant crypto bindings"""
    return await get_aggregator().require(ModuleIdentity.CRYPTO, tier)


async def load_orchestrator(tier: Optional[Tier] = None) -> ModuleHandle:
    """Load the orchestrator bindings"""
    return await get_aggregator().require(ModuleIdentity.ORCHESTRATION, tier)


async def load_training(tier: Optional[Tier] = None) -> ModuleHandle:
    """Load the distributed training bindings"""
    return await get_aggregator().require(ModuleIdentity.TRAINING, tier)


async def probe_one(identity: IdentityLike, tier: Optional[Tier] = None) -> LoadOutcome:
    return await get_aggregator().probe_one(identity, tier)


async def probe_all() -> AvailabilityReport:
    return await get_aggregator().probe_all()


async def is_binding_available(identity: IdentityLike, tier: Optional[Tier] = None) -> bool:
    return await get_aggregator().is_available(identity, tier)
