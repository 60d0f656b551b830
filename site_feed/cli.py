"""Command-line interface for site_feed."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .runner import RunConfig, execute
from .synthesizer import MissingSummaryError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Build an Atom feed from rendered site entries."
    )
    parser.add_argument(
        "--config",
        default="config.toml",
        help="Path to the site config.toml.",
    )
    parser.add_argument(
        "--entries",
        required=True,
        metavar="PATH",
        help="JSON array of rendered entries, already selected and ordered.",
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        help="Write the feed to PATH instead of standard output.",
    )
    parser.add_argument(
        "--tag",
        default=None,
        help="Tag the feed is scoped to; 'community' adds repost attribution.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file.",
    )
    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Send log records to stderr, and to ``log_file`` when given."""
    log_level = logging.getLevelName(level_name.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
    logger.debug("Logging to %d handler(s) at %s", len(handlers), level_name.upper())


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level, args.log_file)
        config = RunConfig(
            config_file=args.config,
            entries_file=args.entries,
            output_path=args.output,
            tag=args.tag,
        )
        result = execute(config)
    except MissingSummaryError as exc:
        logger.error("Refusing to build feed: %s", exc)
        return 1
    except ValueError as exc:
        parser.error(str(exc))
    except (RuntimeError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error while building the feed.")
        return 1

    if not args.output:
        print(result.output_text, end="")
    return 0
