"""
Command-line entry point for inspecting runtime bindings
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

import yaml

from daa_sdk import __version__
from daa_sdk.config.config_manager import Config, load_config
from daa_sdk.core.service.availability_aggregator import create_aggregator
from daa_sdk.core.utils.availability_report import AvailabilityReport
from daa_sdk.core.utils.tier_profile import TierProfile
from daa_sdk.monitoring import BindingMetricsExporter, setup_logging

logger = logging.getLogger(__name__)


def render_info(
    profile: TierProfile,
    report: AvailabilityReport,
    cpu_count: Optional[int] = None,
) -> str:
    """Render platform facts and binding availability as text"""
    lines = [
        "DAA SDK Platform Information",
        "",
        f"Platform: {profile.tier.value}",
        f"Runtime: {profile.runtime}",
        f"Performance: {profile.performance}",
        f"Relative Speed: {profile.relative_speed * 100:.0f}%",
        f"Threading: {'Supported' if profile.threading_support else 'Not supported'}",
    ]
    if cpu_count:
        lines.append(f"CPU Count: {cpu_count}")

    lines += ["", "Features:"]
    lines += [f"  * {feature}" for feature in profile.features]

    lines += ["", "Available Bindings:"]
    for identity in report.available:
        handle = report.outcomes[identity].handle
        suffix = f" (fallback: {handle.tier.value})" if handle.degraded else ""
        lines.append(f"  + {identity.value}{suffix}")

    if report.unavailable:
        lines += ["", "Unavailable Bindings:"]
        for identity in report.unavailable:
            reason = report.outcomes[identity].reason
            lines.append(f"  - {identity.value} ({reason.value})")

    return "\n".join(lines) + "\n"


def run_info(config: Config, args: argparse.Namespace, out: TextIO) -> int:
    """Probe every binding and print the result"""
    metrics = None
    if args.metrics:
        metrics = BindingMetricsExporter(
            enabled=config.monitoring.enable_prometheus_export,
            namespace=config.monitoring.metrics_namespace,
            buckets=config.monitoring.probe_duration_buckets,
        )

    with create_aggregator(config, metrics=metrics) as aggregator:
        report = aggregator.probe_all_sync()
        profile = aggregator.probe.get_profile(report.tier)
        cpu_count = aggregator.probe.context.cpu_count

    if args.json:
        payload = {"profile": profile.to_dict(), "report": report.to_dict()}
        out.write(json.dumps(payload, indent=2) + "\n")
    else:
        out.write(render_info(profile, report, cpu_count))

    if metrics is not None:
        out.write("\n" + metrics.get_metrics())

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daa-sdk",
        description="DAA SDK - Command-line tools for Distributed Agentic Architecture",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--config", default=None, help="Path to a YAML/JSON config file")

    subparsers = parser.add_subparsers(dest="command")

    info = subparsers.add_parser("info", help="Show platform and binding information")
    info.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    info.add_argument(
        "--metrics", action="store_true", help="Append Prometheus metrics"
    )
    info.set_defaults(handler=run_info)

    return parser


def main(argv: Optional[List[str]] = None, out: TextIO = None) -> int:
    """Main entry point for the daa-sdk command"""
    out = out or sys.stdout
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(out)
        return 0

    try:
        config = load_config(args.config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    setup_logging(config.logging)

    try:
        return args.handler(config, args, out)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
