"""
System configuration classes
"""

from dataclasses import dataclass

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class LoggingConfig:
    """Logging configuration"""

    log_level: str = "WARNING"
    enable_structured: bool = False  # JSON lines through structlog
    format: str = DEFAULT_LOG_FORMAT
