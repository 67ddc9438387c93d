from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from arrsync.app import sync_indexers
from arrsync.config import ConfigurationError, configure_logging
from arrsync.domain.errors import FetchError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Synchronise Jackett indexers into Sonarr, Radarr, Lidarr and Readarr"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and log the changes without creating or updating indexers",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO, force=True)

    try:
        sync_indexers(dry_run=parsed_args.dry_run)
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except FetchError as exc:
        log.error(f"Couldn't get indexers from the source catalog: {exc}")  # noqa: TRY400
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
