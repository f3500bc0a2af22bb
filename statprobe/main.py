"""Main entry point for the statprobe server statistics monitor."""
import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from .collectors.stats_collector import StatsCollector
from .config.config_manager import DEFAULT_CONFIG_PATH, ConfigManager
from .core.evaluator import SampleEvaluator
from .core.poller import Poller
from .display import AlertPrinter
from .log_config import setup_logger


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(description="Server statistics monitor")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--url", help="stats endpoint URL")
    parser.add_argument("--interval", type=float, help="seconds between polls")
    parser.add_argument("--timeout", type=float, help="HTTP request timeout in seconds")
    parser.add_argument("--max-errors", type=int,
                        help="consecutive failures before giving up")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--log-file", type=Path)
    return parser


def main(argv: Optional[Sequence[str]] = None, session=None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)

    logger = setup_logger("statprobe",
                          level=logging.DEBUG if args.verbose else logging.WARNING,
                          log_file=args.log_file)

    # Load configuration - let it crash if bad
    config = ConfigManager.apply_env(ConfigManager.load_config(args.config))

    # Command-line flags win over file and environment
    overrides = {
        'stats_url': args.url,
        'poll_interval': args.interval,
        'request_timeout': args.timeout,
        'max_errors': args.max_errors,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    logger.info("Polling %s every %.1fs (timeout %.1fs, give up after %d failures)",
                config.stats_url, config.poll_interval, config.request_timeout,
                config.max_errors)

    printer = AlertPrinter()
    collector = StatsCollector(config, session=session)
    poller = Poller(config, SampleEvaluator(config, collector, printer), printer)

    try:
        poller.run()
    except KeyboardInterrupt:
        pass
    finally:
        collector.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
