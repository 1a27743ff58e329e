"""
Configuration package initialization
"""

from .base_types import SANDBOX_PLATFORMS, ModuleIdentity, Tier
from .core_configs import BindingsConfig, MonitoringConfig, ProbeConfig
from .system_configs import DEFAULT_LOG_FORMAT, LoggingConfig
from .config_manager import (
    Config,
    get_config,
    get_config_or_default,
    load_config,
    set_config,
)

__all__ = [
    # Base types
    "ModuleIdentity",
    "Tier",
    "SANDBOX_PLATFORMS",

    # Core configs
    "BindingsConfig",
    "MonitoringConfig",
    "ProbeConfig",

    # System configs
    "DEFAULT_LOG_FORMAT",
    "LoggingConfig",

    # Config manager
    "Config",
    "get_config",
    "get_config_or_default",
    "load_config",
    "set_config",
]
