from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from missionclaim.app import run_missions
from missionclaim.config import ConfigurationError, PacingConfig, configure_logging
from missionclaim.config.pacing import (
    DEFAULT_ACCOUNT_INTERVAL_SECONDS,
    DEFAULT_CLAIM_INTERVAL_SECONDS,
    DEFAULT_CONCURRENCY,
)
from missionclaim.domain.errors import CatalogUnavailableError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sign in every configured wallet and claim its pending missions"
    )
    parser.add_argument(
        "--claim-interval",
        type=float,
        default=DEFAULT_CLAIM_INTERVAL_SECONDS,
        help="Seconds to wait after each claim submission (default: %(default)s)",
    )
    parser.add_argument(
        "--account-interval",
        type=float,
        default=DEFAULT_ACCOUNT_INTERVAL_SECONDS,
        help="Seconds to wait between accounts (default: %(default)s)",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY,
        help="Maximum number of accounts processed at once (default: %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log HTTP requests and skipped completion records",
    )
    return parser.parse_args(list(argv))


def _build_pacing(args: argparse.Namespace) -> PacingConfig:
    try:
        return PacingConfig(
            claim_interval_seconds=args.claim_interval,
            account_interval_seconds=args.account_interval,
            concurrency=args.concurrency,
        )
    except ConfigurationError as exc:
        raise ValueError(str(exc)) from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    try:
        pacing = _build_pacing(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        run_missions(pacing=pacing)
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)  # noqa: TRY400
        sys.exit(1)
    except CatalogUnavailableError as exc:
        log.error("Mission catalog unavailable: %s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during run")
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
