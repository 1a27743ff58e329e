"""
Core configuration classes
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ProbeConfig:
    """Environment probing and availability aggregation settings"""

    timeout_seconds: float = 5.0  # Per-probe bound
    max_workers: int = 4
    forced_tier: Optional[str] = None  # Skip detection when set


@dataclass
class BindingsConfig:
    """Module names backing each tier of each binding"""

    crypto_native: str = "qudag_native"
    crypto_portable: str = "qudag_wasm"
    orchestration_native: str = "daa_orchestrator_native"
    training_native: str = "daa_prime_native"

    # Called on portable modules after import, when present
    portable_init_hook: str = "init"

    # Module used by the environment probe for the resolution check
    probe_module: Optional[str] = None

    def get_probe_module(self) -> str:
        """Module whose presence decides the accelerated tier"""
        return self.probe_module or self.crypto_native


@dataclass
class MonitoringConfig:
    """Metrics export configuration"""

    enable_prometheus_export: bool = True
    metrics_namespace: str = "daa"
    probe_duration_buckets: List[float] = field(
        default_factory=lambda: [0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
    )
