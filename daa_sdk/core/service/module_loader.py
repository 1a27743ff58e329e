"""
Module Loader Service

This module resolves one binding for a tier, falling back at most once to
the alternate tier declared by its registry entry.
"""

import logging
from typing import List, Optional, Tuple

from daa_sdk.config.base_types import Tier
from daa_sdk.core.binding_registry import BindingEntry
from daa_sdk.core.utils.load_outcome import (
    AttemptFailure,
    LoadAttempt,
    LoadOutcome,
    ModuleHandle,
    UnavailableReason,
)


class ModuleLoader:
    """Loads a single binding with a bounded, non-recursive fallback chain"""

    def __init__(self, entry: BindingEntry):
        self.entry = entry
        self.identity = entry.identity
        self.logger = logging.getLogger(__name__)

    def load(self, tier: Tier) -> LoadOutcome:
        """Resolve the binding on ``tier``; never raises for unavailability"""
        attempts: List[LoadAttempt] = []
        primary_attempted = False

        strategy = self.entry.strategy_for(tier)
        if strategy is not None:
            primary_attempted = True
            module = self._attempt(tier, attempts)
            if module is not None:
                return LoadOutcome.loaded(
                    ModuleHandle(identity=self.identity, tier=tier, module=module),
                    tuple(attempts),
                )

        fallback_tier = self.entry.fallback_for(tier)
        if fallback_tier is None:
            if not primary_attempted:
                self.logger.warning(
                    f"{self.identity.value} bindings are not supported "
                    f"on the {tier.value} tier"
                )
                return LoadOutcome.unavailable(
                    self.identity, UnavailableReason.TIER_UNSUPPORTED
                )
            self.logger.warning(
                f"{self.identity.value} {tier.value} bindings not available"
            )
            return LoadOutcome.unavailable(
                self.identity, UnavailableReason.RESOLUTION_FAILED, tuple(attempts)
            )

        self.logger.warning(
            f"Failed to load {self.identity.value} {tier.value} bindings, "
            f"falling back to {fallback_tier.value}"
        )
        module = self._attempt(fallback_tier, attempts)
        if module is not None:
            return LoadOutcome.loaded(
                ModuleHandle(
                    identity=self.identity,
                    tier=fallback_tier,
                    module=module,
                    degraded=True,
                ),
                tuple(attempts),
            )

        reason = (
            UnavailableReason.FALLBACK_EXHAUSTED
            if primary_attempted
            else UnavailableReason.RESOLUTION_FAILED
        )
        self.logger.warning(
            f"{self.identity.value} bindings unavailable: {reason.value}"
        )
        return LoadOutcome.unavailable(self.identity, reason, tuple(attempts))

    def _attempt(self, tier: Tier, attempts: List[LoadAttempt]) -> Optional[object]:
        """Run one strategy, recording the failure when it raises"""
        strategy = self.entry.strategy_for(tier)
        self.logger.debug(f"Resolving {self.identity.value} on {tier.value} tier")
        try:
            module = strategy()
        except Exception as e:
            failure = self._classify_failure(
                e, getattr(strategy, "module_name", None)
            )
            attempts.append(LoadAttempt(tier=tier, failure=failure, error=str(e)))
            self.logger.debug(
                f"{self.identity.value} {tier.value} resolution failed "
                f"({failure.value}): {e}"
            )
            return None

        if module is None:
            attempts.append(
                LoadAttempt(
                    tier=tier,
                    failure=AttemptFailure.INIT_FAILED,
                    error="strategy resolved no module",
                )
            )
        return module

    @staticmethod
    def _classify_failure(
        error: Exception, module_name: Optional[str] = None
    ) -> AttemptFailure:
        if isinstance(error, ModuleNotFoundError):
            # Absent only when the binding itself (or a parent package) is missing
            missing = error.name
            if (
                module_name is None
                or missing is None
                or missing == module_name
                or module_name.startswith(f"{missing}.")
            ):
                return AttemptFailure.ABSENT
            return AttemptFailure.INCOMPATIBLE
        if isinstance(error, ImportError):
            return AttemptFailure.INCOMPATIBLE
        if isinstance(error, ImportError):
            return AttemptFailure.INCOMPATIBLE
        return AttemptFailure.INIT_FAILED


def build_loaders(entries) -> Tuple[ModuleLoader, ...]:
    """One loader per registry entry, in registry order"""
    return tuple(ModuleLoader(entry) for entry in entries)
