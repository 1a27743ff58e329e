"""Shared fixtures for binding resolution tests."""

import importlib.machinery
import logging
import sys
import types
from unittest.mock import Mock

import pytest

from daa_sdk.config import config_manager
from daa_sdk.config.base_types import ModuleIdentity, Tier
from daa_sdk.core import environment_probe
from daa_sdk.core.binding_registry import BindingEntry, BindingRegistry
from daa_sdk.core.environment_probe import EnvironmentContext, EnvironmentProbe
from daa_sdk.core.service import availability_aggregator


@pytest.fixture(autouse=True)
def isolated_process_state(monkeypatch):
    """Keep env overrides and process-wide singletons out of each test."""
    for name in ("DAA_PROBE_TIMEOUT", "DAA_MAX_WORKERS", "DAA_FORCE_TIER", "DAA_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_manager, "_global_config", None)
    monkeypatch.setattr(environment_probe, "_default_probe", None)
    monkeypatch.setattr(availability_aggregator, "_default_aggregator", None)

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def make_context(platform="linux", resolves=True):
    """Context stub whose resolver reports the probe module present or not."""
    resolver = Mock(return_value=object() if resolves else None)
    return EnvironmentContext(
        platform=platform, implementation="cpython", cpu_count=8, resolve_spec=resolver
    )


@pytest.fixture
def sandbox_context():
    return make_context(platform="emscripten")


@pytest.fixture
def native_context():
    return make_context(platform="linux", resolves=True)


def ok_strategy(name="bindings"):
    """Strategy that resolves a fresh stand-in module."""
    def resolve():
        return types.SimpleNamespace(__name__=name)
    return resolve


def failing_strategy(error=None):
    def resolve():
        raise error or ModuleNotFoundError("No module named 'missing'")
    return resolve


def catalog(crypto_native=None, crypto_portable=None, orchestration=None, training=None):
    """Registry shaped like the default catalog, with stub strategies."""
    return BindingRegistry(
        [
            BindingEntry(
                identity=ModuleIdentity.CRYPTO,
                strategies={
                    Tier.ACCELERATED: crypto_native or ok_strategy("qudag_native"),
                    Tier.PORTABLE: crypto_portable or ok_strategy("qudag_wasm"),
                },
                fallbacks={Tier.ACCELERATED: Tier.PORTABLE},
            ),
            BindingEntry(
                identity=ModuleIdentity.ORCHESTRATION,
                strategies={Tier.ACCELERATED: orchestration or ok_strategy("orchestrator")},
            ),
            BindingEntry(
                identity=ModuleIdentity.TRAINING,
                strategies={Tier.ACCELERATED: training or ok_strategy("prime")},
            ),
        ]
    )


def probe_for(context, probe_module="qudag_native"):
    return EnvironmentProbe(context, probe_module=probe_module)


@pytest.fixture
def fake_modules(monkeypatch):
    """Install importable stand-in modules; returns an installer."""
    def install(name, **attrs):
        module = types.ModuleType(name)
        module.__spec__ = importlib.machinery.ModuleSpec(name, None)
        for key, value in attrs.items():
            setattr(module, key, value)
        monkeypatch.setitem(sys.modules, name, module)
        return module
    return install
