"""
Prometheus metrics exporter for binding resolution.
"""

from typing import Optional, Sequence

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from ..config.base_types import Tier
from ..core.utils.load_outcome import LoadOutcome


class BindingMetricsExporter:
    """Prometheus metrics exporter"""

    def __init__(
        self,
        enabled: bool = True,
        namespace: str = "daa",
        buckets: Optional[Sequence[float]] = None,
    ):
        self.enabled = enabled
        self.namespace = namespace
        self.buckets = tuple(buckets) if buckets else Histogram.DEFAULT_BUCKETS

        if self.enabled:
            self.registry = CollectorRegistry()
            self._setup_metrics()

    def _setup_metrics(self):
        """Setup Prometheus metrics"""
        self.load_counter = Counter(
            f"{self.namespace}_binding_loads_total",
            "Total number of binding load attempts",
            ["identity", "tier", "outcome"],
            registry=self.registry,
        )

        self.probe_duration_histogram = Histogram(
            f"{self.namespace}_binding_probe_seconds",
            "Binding probe duration in seconds",
            ["identity"],
            buckets=self.buckets,
            registry=self.registry,
        )

        self.available_gauge = Gauge(
            f"{self.namespace}_binding_available",
            "Whether a binding loaded in the last probe (1) or not (0)",
            ["identity"],
            registry=self.registry,
        )

        self.tier_gauge = Gauge(
            f"{self.namespace}_runtime_tier",
            "Active runtime tier (1 for the active tier)",
            ["tier"],
            registry=self.registry,
        )

    def record_tier(self, tier: Tier):
        """Record the active runtime tier"""
        if not self.enabled:
            return

        for candidate in Tier:
            self.tier_gauge.labels(tier=candidate.value).set(
                1 if candidate is tier else 0
            )

    def record_outcome(self, tier: Tier, outcome: LoadOutcome, duration: float):
        """Record a single probe outcome"""
        if not self.enabled:
            return

        identity = outcome.identity.value
        status = "loaded" if outcome.is_loaded else outcome.reason.value

        self.load_counter.labels(
            identity=identity, tier=tier.value, outcome=status
        ).inc()
        self.probe_duration_histogram.labels(identity=identity).observe(duration)
        self.available_gauge.labels(identity=identity).set(
            1 if outcome.is_loaded else 0
        )

    def get_metrics(self) -> str:
        """Get metrics in Prometheus format"""
        if not self.enabled:
            return ""

        return generate_latest(self.registry).decode("utf-8")
