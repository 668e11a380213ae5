"""Command-line interface for sysprobe."""

import argparse
import contextlib
import logging
import signal
import sys
import threading
from typing import Iterator, List, Optional

from . import __version__
from .config import ConfigManager, SamplerConfig, parse_duration
from .errors import ConfigError, SnapshotError
from .provider import PsutilProvider
from .render import get_formatter
from .sampler import Sampler

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("sysprobe")

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _duration(value: str) -> float:
    try:
        return parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


@contextlib.contextmanager
def stop_on_signals(stop_event: threading.Event) -> Iterator[None]:
    """Set ``stop_event`` on SIGINT/SIGTERM while the block runs."""

    def handle(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, stopping")
        stop_event.set()

    previous = {}
    for signum in STOP_SIGNALS:
        previous[signum] = signal.signal(signum, handle)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            # None means the old handler was installed outside Python
            if handler is not None:
                signal.signal(signum, handler)


def load_config(args: argparse.Namespace) -> SamplerConfig:
    """Combine defaults, the optional config file and command-line flags."""
    config = SamplerConfig()
    if args.config:
        config = ConfigManager(args.config).load()
        logger.debug(f"Loaded configuration from {args.config}")

    return config.merge({
        "interval": args.interval,
        "count": args.count,
        "json_output": True if args.json else None,
    })


def cmd_collect(args: argparse.Namespace) -> int:
    """Collect metrics once or on an interval."""
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    try:
        config = load_config(args)

        stop_event = threading.Event()
        sampler = Sampler(
            PsutilProvider(),
            get_formatter(config.json_output, config.streaming),
            interval=config.interval,
            count=config.count,
            stop_event=stop_event,
            root_path=config.disk_path,
            cpu_interval=config.cpu_interval,
        )

        with stop_on_signals(stop_event):
            state = sampler.run()

        logger.debug(f"Finished in state {state.value}")
        return 0

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except SnapshotError as e:
        logger.error(f"Failed to collect metrics: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysprobe",
        description="sysprobe - host CPU, memory, disk, load and network sampler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"sysprobe {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    collect_parser = subparsers.add_parser("collect", help="Collect host metrics")
    collect_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON records instead of a table",
    )
    collect_parser.add_argument(
        "--interval",
        type=_duration,
        default=None,
        help="Sampling interval, e.g. 500ms, 2s, 1m (default: 0, a single sample)",
    )
    collect_parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of samples when streaming (default: 0, until interrupted)",
    )
    collect_parser.add_argument(
        "--config",
        default=None,
        help="JSON file with default settings",
    )
    collect_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Route to command handler
    if args.command == "collect":
        return cmd_collect(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
