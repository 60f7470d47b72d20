"""Command line entry point.

``place-aggregator fetch`` runs one aggregation and prints the result,
``place-aggregator serve`` starts the HTTP API with uvicorn.
"""

import argparse
import json
import sys
from collections.abc import Sequence

import pandas as pd

from place_aggregator.backend.service import PlaceAggregatorService
from place_aggregator.config import get_settings
from place_aggregator.exceptions import CallerError, ServerError
from place_aggregator.logger import configure_logging, get_logger
from place_aggregator.models import Category, Place

logger = get_logger(__name__)

EXIT_SERVER_ERROR = 1
EXIT_CALLER_ERROR = 2


def places_to_frame(places: Sequence[Place]) -> pd.DataFrame:
    """Flatten places into a DataFrame, one row per place.

    The location is split into ``lat``/``lng`` columns and highlights are
    joined with ``"; "`` so the frame exports cleanly to CSV.
    """
    rows = []
    for place in places:
        row = place.to_dict()
        location = row.pop("location") or {}
        row["lat"] = location.get("lat")
        row["lng"] = location.get("lng")
        row["highlights"] = "; ".join(row["highlights"])
        rows.append(row)
    return pd.DataFrame(rows)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="place-aggregator",
        description="Aggregate points of interest from several geodata providers.",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch = subparsers.add_parser("fetch", help="Run one aggregation and print the result")
    fetch.add_argument("--lat", required=True, help="User latitude")
    fetch.add_argument("--lng", required=True, help="User longitude")
    fetch.add_argument("--max-distance", default=None, help="Maximum distance in meters")
    fetch.add_argument(
        "--category",
        default=None,
        help=f"One of: {', '.join(c.value for c in Category)}",
    )
    fetch.add_argument("--format", choices=("json", "csv"), default="json")

    serve = subparsers.add_parser("serve", help="Start the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    return parser


def run_fetch(args: argparse.Namespace) -> int:
    service = PlaceAggregatorService(get_settings())
    try:
        places = service.fetch_places(args.lat, args.lng, args.max_distance, args.category)
    except CallerError as exception:
        print(f"error: {exception}", file=sys.stderr)
        return EXIT_CALLER_ERROR
    except ServerError as exception:
        logger.error(f"Aggregation failed: {exception}")
        print("error: aggregation failed, see logs", file=sys.stderr)
        return EXIT_SERVER_ERROR

    if args.format == "csv":
        places_to_frame(places).to_csv(sys.stdout, index=False)
    else:
        json.dump([place.to_dict() for place in places], sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    return 0


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "place_aggregator.api.app:app",
        host=args.host or settings.api.host,
        port=args.port or settings.api.port,
        log_config=None,
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``place-aggregator`` console script."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)
    if args.command == "fetch":
        return run_fetch(args)
    return run_serve(args)


if __name__ == "__main__":
    sys.exit(main())
