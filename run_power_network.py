#!/usr/bin/env python3
"""
Power Network Reachability Simulator - Command Line Runner

Builds a network, applies activation toggles, recomputes powered state and
reports it, optionally screening every single-element outage.

Usage:
    python run_power_network.py --mode demo
    python run_power_network.py --mode random --generators 3 --relays 20 --consumers 40 --seed 7
    python run_power_network.py --mode demo --toggle RELAY_001 --outages --report outputs/state.csv
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from powernet.config import NetworkConfig, load_config
from powernet.errors import ConfigError
from powernet.layouts import build_demo_network, build_random_network
from propagation.contingency import OutageAnalyzer, screen_critical_outages

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level}</level> | {message}"


def configure_logging(level: str = "INFO", log_file: str = None):
    """Route loguru output to stderr and, optionally, a rotating log file"""
    level = level.upper()
    try:
        logger.level(level)
    except ValueError as e:
        raise ConfigError(f"Unknown log level: {level}") from e

    logger.remove()
    logger.add(sys.stderr, level=level, colorize=True, format=LOG_FORMAT)
    if log_file:
        logger.add(log_file, level=level, rotation="100 MB")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Power Network Reachability Simulator')
    parser.add_argument('--mode', choices=['demo', 'random'], default='demo',
                        help='Network to build')
    parser.add_argument('--config', type=str, help='Configuration file path (JSON)')
    parser.add_argument('--generators', type=int, default=3, help='Generators (random mode)')
    parser.add_argument('--relays', type=int, default=15, help='Grid relays (random mode)')
    parser.add_argument('--consumers', type=int, default=30, help='Consumers (random mode)')
    parser.add_argument('--width', type=float, default=800.0, help='Plane width (random mode)')
    parser.add_argument('--height', type=float, default=600.0, help='Plane height (random mode)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed (random mode)')
    parser.add_argument('--range', type=float, default=None, help='Default source range')
    parser.add_argument('--toggle', action='append', default=[], metavar='ID',
                        help='Toggle a generator or relay before reporting (repeatable)')
    parser.add_argument('--outages', action='store_true', help='Run N-1 outage screening')
    parser.add_argument('--report', type=str, help='Write entity state to this CSV file')
    parser.add_argument('--log-level', type=str, default=None, help='Logging level')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    return parser


def main(argv=None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else NetworkConfig()
        if args.range is not None:
            config = NetworkConfig(
                default_range=args.range,
                source_hit_radius=config.source_hit_radius,
                consumer_hit_radius=config.consumer_hit_radius,
                log_level=config.log_level
            )

        configure_logging(args.log_level or config.log_level, args.log_file)
        if args.config:
            logger.info(f"Loaded network configuration from {args.config}")

        if args.mode == 'demo':
            network = build_demo_network(config)
        else:
            network = build_random_network(
                args.generators, args.relays, args.consumers,
                width=args.width, height=args.height,
                seed=args.seed, config=config
            )

        for entity_id in args.toggle:
            active = network.toggle(entity_id)
            logger.info(f"{entity_id} is now {'active' if active else 'inactive'}")

        frame = network.to_frame()
        summary = network.get_summary()

        print("\n" + "=" * 60)
        print("POWER NETWORK STATE")
        print("=" * 60)
        print(frame.to_string(index=False))
        print(f"\nConsumers powered: {summary['powered_consumers']}/{summary['total_consumers']}")
        print(f"Relays powered: {summary['powered_relays']}/{summary['total_relays']}")

        if args.outages:
            analyzer = OutageAnalyzer(network)
            results = analyzer.analyze_all()
            critical = screen_critical_outages(results)

            print("\n" + "=" * 60)
            print("OUTAGE SCREENING")
            print("=" * 60)
            if critical:
                print(analyzer.export_results_to_dataframe(critical).to_string(index=False))
            else:
                print("No single outage disconnects a consumer")

        if args.report:
            report_path = Path(args.report)
            report_path.parent.mkdir(parents=True, exist_ok=True)
            frame.to_csv(report_path, index=False)
            logger.info(f"Report written to {report_path}")

    except Exception as e:
        logger.error(f"Simulation failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
