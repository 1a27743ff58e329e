"""
Monitoring for binding resolution: Prometheus metrics and log setup.
"""

from .logging_setup import setup_logging
from .prometheus_exporter import BindingMetricsExporter

__all__ = [
    "BindingMetricsExporter",
    "setup_logging",
]
