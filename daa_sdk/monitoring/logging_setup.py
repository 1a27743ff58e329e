"""
Logging configuration for the SDK and its command-line tools
"""

import logging

import structlog

from ..config.system_configs import LoggingConfig


def setup_logging(config: LoggingConfig) -> logging.Handler:
    """Install a single root handler, plain or structured (JSON lines)"""
    handler = logging.StreamHandler()

    if config.enable_structured:
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=[
                    structlog.stdlib.add_log_level,
                    structlog.stdlib.add_logger_name,
                    structlog.processors.TimeStamper(fmt="iso"),
                ],
            )
        )
    else:
        handler.setFormatter(logging.Formatter(config.format))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.log_level.upper())

    return handler
