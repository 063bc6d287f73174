from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from musichub.app import enrich_artist, get_recent_tracks, register_track
from musichub.config import configure_logging
from musichub.domain.catalog import DEFAULT_RECENT_LIMIT
from musichub.domain.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Register tracks and reconcile artists")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register = subparsers.add_parser("register", help="Register a track by ISRC")
    register.add_argument("isrc", type=str, help="ISRC of the track, hyphens allowed")
    register.add_argument(
        "--correlation-id",
        type=str,
        help="Correlation id of the calling request, used to tag log lines",
    )

    recent = subparsers.add_parser("recent", help="List recently registered tracks")
    recent.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_RECENT_LIMIT,
        help="Number of tracks to list (default: %(default)s)",
    )

    enrich = subparsers.add_parser("enrich", help="Reconcile a stored artist by name")
    enrich.add_argument("name", type=str, help="Artist name as stored")

    return parser.parse_args(list(argv))


def _run(args: argparse.Namespace) -> None:
    if args.command == "register":
        result = register_track(args.isrc, correlation_id=args.correlation_id)
        if result.added:
            log.info("Registered %s under producer %s", args.isrc, result.producer.producer_code)
        else:
            log.info("%s was already registered", args.isrc)
    elif args.command == "recent":
        for track in get_recent_tracks(args.limit):
            log.info(
                "%s  %s  %s  [%s]",
                track.submitted_at.isoformat(timespec="seconds"),
                track.isrc,
                track.title,
                ", ".join(track.artist_names) or "-",
            )
    elif args.command == "enrich":
        artist = enrich_artist(args.name)
        if artist is None:
            log.warning("No stored artist named %r", args.name)
        else:
            log.info("Artist %s (%s) is %s", artist.name.value, artist.id, artist.status)
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        _run(parsed_args)
    except ValidationError:
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def cli() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    cli()
