"""
Availability Aggregator Service

This module probes every registered binding concurrently and consolidates the
results into an AvailabilityReport. A failing or stalled binding never
prevents reporting on the others.
"""

import asyncio
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Dict, Optional, Union

from daa_sdk.config.base_types import ModuleIdentity, Tier
from daa_sdk.config.config_manager import Config, get_config, get_config_or_default
from daa_sdk.core.binding_registry import BindingRegistry, build_default_registry
from daa_sdk.core.environment_probe import (
    EnvironmentContext,
    EnvironmentProbe,
    create_probe,
    get_default_probe,
)
from daa_sdk.core.exceptions import ModuleUnavailableError
from daa_sdk.core.service.module_loader import ModuleLoader, build_loaders
from daa_sdk.core.utils.availability_report import AvailabilityReport
from daa_sdk.core.utils.load_outcome import (
    LoadOutcome,
    ModuleHandle,
    UnavailableReason,
)

if TYPE_CHECKING:
    from daa_sdk.monitoring.prometheus_exporter import BindingMetricsExporter

IdentityLike = Union[ModuleIdentity, str]


class AvailabilityAggregator:
    """Fans binding probes out over a thread pool and gathers typed outcomes"""

    def __init__(
        self,
        registry: BindingRegistry,
        probe: EnvironmentProbe,
        probe_timeout: float = 5.0,
        max_workers: int = 4,
        metrics: Optional["BindingMetricsExporter"] = None,
    ):
        self.registry = registry
        self.probe = probe
        self.probe_timeout = probe_timeout
        self.metrics = metrics
        self.logger = logging.getLogger(__name__)

        # One worker per binding so a full probe never queues behind itself
        self.max_workers = max(max_workers, len(registry))
        self._executor_lock = threading.Lock()
        self.executor = self._new_executor()
        self._loaders: Dict[ModuleIdentity, ModuleLoader] = {
            loader.identity: loader for loader in build_loaders(registry.entries())
        }

    async def probe_all(self) -> AvailabilityReport:
        """Probe every registered binding on the detected tier"""
        tier = self.probe.detect()
        if self.metrics:
            self.metrics.record_tier(tier)

        identities = self.registry.identities()
        outcomes = await asyncio.gather(
            *(self._run_probe(self._loaders[identity], tier) for identity in identities)
        )

        # gather preserves argument order, so outcomes follow registry order
        report = AvailabilityReport.from_outcomes(tier, outcomes)
        self.logger.info(
            f"Bindings on {tier.value} tier: "
            f"available={[i.value for i in report.available]}, "
            f"unavailable={[i.value for i in report.unavailable]}"
        )
        return report

    async def probe_one(
        self, identity: IdentityLike, tier: Optional[Tier] = None
    ) -> LoadOutcome:
        """Probe a single binding; raises UnknownModuleError for unregistered names"""
        entry = self.registry.get(identity)
        return await self._run_probe(
            self._loaders[entry.identity], tier or self.probe.detect()
        )

    async def require(
        self, identity: IdentityLike, tier: Optional[Tier] = None
    ) -> ModuleHandle:
        """Load a binding or raise ModuleUnavailableError naming it"""
        tier = tier or self.probe.detect()
        outcome = await self.probe_one(identity, tier)
        if not outcome.is_loaded:
            raise ModuleUnavailableError(
                outcome.identity.value,
                outcome.reason.value,
                tier=tier.value,
                attempts=outcome.attempts,
            )
        if outcome.handle.degraded:
            self.logger.warning(
                f"{outcome.identity.value} loaded on degraded "
                f"{outcome.handle.tier.value} tier"
            )
        return outcome.handle

    async def is_available(
        self, identity: IdentityLike, tier: Optional[Tier] = None
    ) -> bool:
        """Check whether a binding loads on a tier"""
        outcome = await self.probe_one(identity, tier)
        return outcome.is_loaded

    def probe_all_sync(self) -> AvailabilityReport:
        """Synchronous probe_all for callers without an event loop"""
        return asyncio.run(self.probe_all())

    def probe_one_sync(
        self, identity: IdentityLike, tier: Optional[Tier] = None
    ) -> LoadOutcome:
        """Synchronous probe_one for callers without an event loop"""
        return asyncio.run(self.probe_one(identity, tier))

    async def _run_probe(self, loader: ModuleLoader, tier: Tier) -> LoadOutcome:
        """Run one loader in the pool, bounded by the probe timeout"""
        loop = asyncio.get_running_loop()
        started = asyncio.Event()

        def load() -> LoadOutcome:
            loop.call_soon_threadsafe(started.set)
            return loader.load(tier)

        start_time = time.perf_counter()
        try:
            executor = self.executor
            future = loop.run_in_executor(executor, load)

            # Time spent queued for a worker does not count against the bound
            waiter = asyncio.ensure_future(started.wait())
            try:
                await asyncio.wait(
                    {future, waiter}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                waiter.cancel()
            start_time = time.perf_counter()
            outcome = await asyncio.wait_for(future, timeout=self.probe_timeout)
        except asyncio.TimeoutError:
            self.logger.warning(
                f"Probe for {loader.identity.value} timed out "
                f"after {self.probe_timeout}s"
            )
            self._retire_executor(executor)
            outcome = LoadOutcome.unavailable(
                loader.identity, UnavailableReason.TIMED_OUT
            )
        except Exception as e:
            self.logger.error(
                f"Unexpected error probing {loader.identity.value}: {e}",
                exc_info=True,
            )
            outcome = LoadOutcome.unavailable(
                loader.identity, UnavailableReason.RESOLUTION_FAILED
            )

        if self.metrics:
            self.metrics.record_outcome(
                tier, outcome, time.perf_counter() - start_time
            )
        return outcome

    def _new_executor(self) -> ThreadPoolExecutor:
        return ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="daa-probe"
        )

    def _retire_executor(self, executor: ThreadPoolExecutor) -> None:
        """Replace a pool holding a stalled worker; the thread cannot be interrupted"""
        with self._executor_lock:
            if self.executor is not executor:
                return
            self.executor = self._new_executor()
        executor.shutdown(wait=False)

    def shutdown(self) -> None:
        """Release the probe pool without waiting for stalled probes"""
        self.executor.shutdown(wait=False)

    def __enter__(self) -> "AvailabilityAggregator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


def create_aggregator(
    config: Optional[Config] = None,
    context: Optional[EnvironmentContext] = None,
    registry: Optional[BindingRegistry] = None,
    metrics: Optional["BindingMetricsExporter"] = None,
) -> AvailabilityAggregator:
    """Build an aggregator from configuration"""
    config = config or get_config()
    return AvailabilityAggregator(
        registry=registry or build_default_registry(config.bindings),
        probe=create_probe(config, context),
        probe_timeout=config.probe.timeout_seconds,
        max_workers=config.probe.max_workers,
        metrics=metrics,
    )


# Process-wide aggregator for feature-access code
_default_aggregator: Optional[AvailabilityAggregator] = None
_default_aggregator_lock = threading.Lock()


def get_aggregator() -> AvailabilityAggregator:
    """Get the process-wide aggregator, sharing the process-wide probe"""
    global _default_aggregator
    if _default_aggregator is None:
        with _default_aggregator_lock:
            if _default_aggregator is None:
                config = get_config_or_default()
                _default_aggregator = AvailabilityAggregator(
                    registry=build_default_registry(config.bindings),
                    probe=get_default_probe(),
                    probe_timeout=config.probe.timeout_seconds,
                    max_workers=config.probe.max_workers,
                )
    return _default_aggregator
