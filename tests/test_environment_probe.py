"""Tests for runtime tier detection and tier profiles."""

import logging
from unittest.mock import Mock

import pytest

import daa_sdk
from daa_sdk.config import Config, ProbeConfig, set_config
from daa_sdk.config.base_types import Tier
from daa_sdk.core.environment_probe import (
    EnvironmentContext,
    EnvironmentProbe,
    create_probe,
)
from daa_sdk.core.utils.tier_profile import TIER_PROFILES

from conftest import make_context, probe_for


class TestDetect:
    """Tier classification from an injected context."""

    @pytest.mark.parametrize("platform", ["emscripten", "wasi"])
    def test_sandbox_is_portable_without_resolution(self, platform):
        context = make_context(platform=platform)
        probe = probe_for(context)

        assert probe.detect() is Tier.PORTABLE
        context.resolve_spec.assert_not_called()

    def test_native_capable_with_crypto_present(self, native_context):
        probe = probe_for(native_context, probe_module="qudag_native")

        assert probe.detect() is Tier.ACCELERATED
        native_context.resolve_spec.assert_called_once_with("qudag_native")

    def test_missing_native_module_falls_back_with_warning(self, caplog):
        probe = probe_for(make_context(resolves=False))

        with caplog.at_level(logging.WARNING):
            assert probe.detect() is Tier.PORTABLE
        assert "falling back to portable" in caplog.text

    def test_resolver_error_never_raises(self):
        context = EnvironmentContext(
            platform="linux",
            implementation="cpython",
            resolve_spec=Mock(side_effect=ValueError("qudag_native.__spec__ is None")),
        )

        assert probe_for(context).detect() is Tier.PORTABLE

    def test_detection_happens_once(self, native_context):
        probe = probe_for(native_context)

        tiers = {probe.detect() for _ in range(5)}

        assert tiers == {Tier.ACCELERATED}
        assert native_context.resolve_spec.call_count == 1

    def test_forced_tier_skips_detection(self, native_context):
        probe = EnvironmentProbe(
            native_context, probe_module="qudag_native", forced_tier=Tier.PORTABLE
        )

        assert probe.detect() is Tier.PORTABLE
        native_context.resolve_spec.assert_not_called()

    def test_real_resolver_does_not_import(self):
        context = EnvironmentContext(platform="linux", implementation="cpython")

        assert probe_for(context, probe_module="json").detect() is Tier.ACCELERATED
        assert probe_for(context, probe_module="no_such_native_xyz").detect() is Tier.PORTABLE

    def test_from_process_describes_interpreter(self):
        context = EnvironmentContext.from_process()

        assert context.platform
        assert context.implementation
        assert context.cpu_count is None or context.cpu_count > 0


class TestProfiles:
    """Tier profile lookup."""

    def test_accelerated_relative_speed_is_one(self):
        assert TIER_PROFILES[Tier.ACCELERATED].relative_speed == 1.0

    def test_portable_is_strictly_slower(self):
        assert TIER_PROFILES[Tier.PORTABLE].relative_speed < 1.0
        assert TIER_PROFILES[Tier.PORTABLE].relative_speed == pytest.approx(0.4)

    def test_threading_support(self):
        assert TIER_PROFILES[Tier.ACCELERATED].threading_support is True
        assert TIER_PROFILES[Tier.PORTABLE].threading_support is False

    def test_get_profile_defaults_to_detected_tier(self, sandbox_context):
        profile = probe_for(sandbox_context).get_profile()

        assert profile.tier is Tier.PORTABLE
        assert profile.runtime == "WebAssembly"
        assert "Sandboxed execution" in profile.features

    def test_get_profile_for_explicit_tier(self, sandbox_context):
        profile = probe_for(sandbox_context).get_profile(Tier.ACCELERATED)

        assert profile.performance == "high"
        sandbox_context.resolve_spec.assert_not_called()


class TestProcessProbe:
    """Module-level detect()/get_profile() backed by the global config."""

    def test_create_probe_uses_config(self, native_context):
        config = Config(probe=ProbeConfig(forced_tier="portable"))

        probe = create_probe(config, native_context)

        assert probe.forced_tier is Tier.PORTABLE
        assert probe.probe_module == "qudag_native"

    def test_module_level_detect_uses_global_config(self):
        set_config(Config(probe=ProbeConfig(forced_tier="native")))

        assert daa_sdk.detect() is Tier.ACCELERATED
        assert daa_sdk.get_profile().relative_speed == 1.0

    def test_invalid_forced_tier_env_never_raises(self, monkeypatch):
        monkeypatch.setenv("DAA_FORCE_TIER", "bogus")
        monkeypatch.setenv("DAA_PROBE_TIMEOUT", "0")

        assert daa_sdk.detect() in (Tier.ACCELERATED, Tier.PORTABLE)

    def test_malformed_config_file_falls_back_to_defaults(
        self, monkeypatch, tmp_path, caplog
    ):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "daa.yaml").write_text("probe: [unclosed\n")

        with caplog.at_level(logging.WARNING):
            tier = daa_sdk.detect()

        assert tier in (Tier.ACCELERATED, Tier.PORTABLE)
        assert daa_sdk.get_profile().tier is tier
        assert "using defaults" in caplog.text
