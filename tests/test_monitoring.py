"""Tests for metrics export and log setup."""

import json
import logging

from daa_sdk.config import LoggingConfig
from daa_sdk.config.base_types import ModuleIdentity, Tier
from daa_sdk.core.utils.load_outcome import LoadOutcome, ModuleHandle, UnavailableReason
from daa_sdk.monitoring import BindingMetricsExporter, setup_logging


class TestBindingMetricsExporter:

    def test_records_outcomes(self):
        exporter = BindingMetricsExporter(namespace="test")
        handle = ModuleHandle(identity=ModuleIdentity.CRYPTO, tier=Tier.ACCELERATED, module=object())

        exporter.record_tier(Tier.ACCELERATED)
        exporter.record_outcome(Tier.ACCELERATED, LoadOutcome.loaded(handle), 0.01)
        exporter.record_outcome(
            Tier.ACCELERATED,
            LoadOutcome.unavailable(ModuleIdentity.TRAINING, UnavailableReason.TIMED_OUT),
            5.0,
        )

        sample = exporter.registry.get_sample_value
        assert sample("test_runtime_tier", {"tier": "native"}) == 1.0
        assert sample("test_runtime_tier", {"tier": "portable"}) == 0.0
        assert sample("test_binding_available", {"identity": "crypto"}) == 1.0
        assert sample(
            "test_binding_loads_total",
            {"identity": "training", "tier": "native", "outcome": "timed_out"},
        ) == 1.0
        assert sample("test_binding_probe_seconds_count", {"identity": "training"}) == 1.0

        text = exporter.get_metrics()
        assert "test_binding_loads_total" in text

    def test_disabled_exporter_is_inert(self):
        exporter = BindingMetricsExporter(enabled=False)

        exporter.record_tier(Tier.PORTABLE)
        exporter.record_outcome(
            Tier.PORTABLE,
            LoadOutcome.unavailable(ModuleIdentity.CRYPTO, UnavailableReason.RESOLUTION_FAILED),
            0.1,
        )

        assert exporter.get_metrics() == ""


class TestSetupLogging:

    def test_plain_format(self, capsys):
        setup_logging(LoggingConfig(log_level="INFO", format="%(levelname)s %(message)s"))

        logging.getLogger("daa_sdk.test").info("plain message")

        assert "INFO plain message" in capsys.readouterr().err

    def test_structured_json_lines(self, capsys):
        setup_logging(LoggingConfig(log_level="WARNING", enable_structured=True))

        logging.getLogger("daa_sdk.test").warning("native bindings not found")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "native bindings not found"
        assert payload["level"] == "warning"
        assert payload["logger"] == "daa_sdk.test"

    def test_level_applied(self):
        setup_logging(LoggingConfig(log_level="error"))

        assert logging.getLogger().level == logging.ERROR
