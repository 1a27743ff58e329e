"""
Configuration management and loading utilities
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .base_types import Tier
from .core_configs import BindingsConfig, MonitoringConfig, ProbeConfig
from .system_configs import LoggingConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = ["daa.yaml", "daa.yml", "daa.json"]


@dataclass
class Config:
    """Configuration for runtime binding resolution"""

    probe: ProbeConfig = field(default_factory=ProbeConfig)
    bindings: BindingsConfig = field(default_factory=BindingsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    def __post_init__(self) -> None:
        """Post-initialization validation and setup"""
        self._load_from_environment()
        self._validate_config()

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables"""
        # Invalid overrides are ignored so the file/default value stays in force
        if os.getenv("DAA_PROBE_TIMEOUT"):
            try:
                timeout = float(os.getenv("DAA_PROBE_TIMEOUT"))
            except ValueError:
                timeout = 0.0
            if timeout > 0:
                self.probe.timeout_seconds = timeout
            else:
                logger.warning("Ignoring invalid DAA_PROBE_TIMEOUT value")

        if os.getenv("DAA_MAX_WORKERS"):
            try:
                max_workers = int(os.getenv("DAA_MAX_WORKERS"))
            except ValueError:
                max_workers = 0
            if max_workers > 0:
                self.probe.max_workers = max_workers
            else:
                logger.warning("Ignoring invalid DAA_MAX_WORKERS value")

        if os.getenv("DAA_FORCE_TIER"):
            forced_tier = os.getenv("DAA_FORCE_TIER")
            try:
                Tier.parse(forced_tier)
                self.probe.forced_tier = forced_tier
            except ValueError as e:
                logger.warning(f"Ignoring invalid DAA_FORCE_TIER value: {e}")

        if os.getenv("DAA_LOG_LEVEL"):
            log_level = os.getenv("DAA_LOG_LEVEL")
            if isinstance(logging.getLevelName(log_level.upper()), int):
                self.logging.log_level = log_level
            else:
                logger.warning(f"Ignoring invalid DAA_LOG_LEVEL value: {log_level}")

    def _validate_config(self) -> None:
        """Validate configuration settings"""
        if self.probe.timeout_seconds <= 0:
            raise ValueError("Probe timeout must be positive")

        if self.probe.max_workers <= 0:
            raise ValueError("Max workers must be positive")

        if self.probe.forced_tier is not None:
            # Raises ValueError for unknown tiers
            Tier.parse(self.probe.forced_tier)

        if not isinstance(logging.getLevelName(self.logging.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.logging.log_level}")

        # find_spec imports the parent package of a dotted name
        probe_module = self.bindings.get_probe_module()
        if "." in probe_module:
            raise ValueError(
                f"Probe module must be a top-level module name, got "
                f"'{probe_module}'; set bindings.probe_module explicitly"
            )

    def get_forced_tier(self) -> Optional[Tier]:
        """Tier pinned by configuration, if any"""
        if self.probe.forced_tier is None:
            return None
        return Tier.parse(self.probe.forced_tier)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "Config":
        """Load configuration from file"""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.suffix.lower() in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif config_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                raise ValueError(
                    f"Unsupported configuration file format: {config_path.suffix}"
                )

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create configuration from dictionary"""
        if not isinstance(data, dict):
            raise ValueError("Configuration root must be a mapping")

        config_data = {}

        config_handler = {
            "probe": cls._handle_probe_config,
            "bindings": cls._handle_bindings_config,
            "logging": cls._handle_logging_config,
            "monitoring": cls._handle_monitoring_config,
        }

        for key, value in data.items():
            if key not in config_handler:
                logger.warning(f"Ignoring unknown configuration section: {key}")
                continue
            if not isinstance(value, dict):
                raise ValueError(f"Configuration section '{key}' must be a mapping")
            config_data.update(config_handler[key](value))

        return cls(**config_data)

    @classmethod
    def _handle_probe_config(cls, value: Dict) -> Dict:
        return {"probe": ProbeConfig(**value)}

    @classmethod
    def _handle_bindings_config(cls, value: Dict) -> Dict:
        return {"bindings": BindingsConfig(**value)}

    @classmethod
    def _handle_logging_config(cls, value: Dict) -> Dict:
        return {"logging": LoggingConfig(**value)}

    @classmethod
    def _handle_monitoring_config(cls, value: Dict) -> Dict:
        return {"monitoring": MonitoringConfig(**value)}

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return asdict(self)

    def to_file(self, config_path: Union[str, Path], format: str = "yaml") -> None:
        """Save configuration to file"""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.to_dict()

        with open(config_path, "w", encoding="utf-8") as f:
            if format.lower() in ["yaml", "yml"]:
                yaml.safe_dump(data, f, default_flow_style=False, indent=2)
            elif format.lower() == "json":
                json.dump(data, f, indent=2, default=str)
            else:
                raise ValueError(f"Unsupported format: {format}")

    def __str__(self) -> str:
        return (
            f"Config(forced_tier={self.probe.forced_tier}, "
            f"timeout={self.probe.timeout_seconds}s, "
            f"workers={self.probe.max_workers})"
        )


# Global configuration instance
_global_config: Optional[Config] = None


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """Load configuration from file or create default"""
    if config_path:
        return Config.from_file(config_path)

    for path in DEFAULT_CONFIG_PATHS:
        if Path(path).exists():
            return Config.from_file(path)

    return Config()


def get_config() -> Config:
    """Get global configuration instance"""
    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config


def get_config_or_default() -> Config:
    """Get global configuration, or defaults when it cannot be loaded"""
    try:
        return get_config()
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load configuration, using defaults: {e}")
        return Config()


def set_config(config: Optional[Config]) -> None:
    """Set global configuration instance"""
    global _global_config
    _global_config = config
