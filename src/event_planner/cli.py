"""Command-line interface for the event planner data layer."""

import argparse
import asyncio
import logging
import sys
import uuid

import httpx
from sqlalchemy.exc import SQLAlchemyError

from event_planner import __version__
from event_planner.concepts.event import EventStore
from event_planner.config import get_settings
from event_planner.database import (
    DocumentCollection,
    EventRecord,
    create_engine,
    create_session_factory,
    create_tables,
)
from event_planner.errors import EventPlannerError
from event_planner.geocoding.resolver import AddressResolver, GeocodingError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="event-planner",
        description="Event Planner - manage events and geocode addresses",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Init DB command
    subparsers.add_parser("init-db", help="Create database tables")

    # Events command
    events_parser = subparsers.add_parser(
        "events", help="List events, most recently updated first"
    )
    events_parser.add_argument(
        "--host",
        type=uuid.UUID,
        help="Only list events organized by this user id",
    )

    # Geocode command
    geocode_parser = subparsers.add_parser(
        "geocode", help="Resolve an address to latitude,longitude"
    )
    geocode_parser.add_argument("address", help="Free-text address")

    return parser


async def _init_db() -> int:
    engine = create_engine()
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()
    print("Database tables created.")
    return 0


async def _list_events(host: uuid.UUID | None) -> int:
    engine = create_engine()
    try:
        store = EventStore(DocumentCollection(create_session_factory(engine), EventRecord))
        events = await store.get_by_host(host) if host else await store.get_many()
    finally:
        await engine.dispose()

    for event in events:
        print(
            f"{event.id}  {event.title}  "
            f"(attending {len(event.attending)}/{event.capacity}, "
            f"interested {len(event.interested)})"
        )
    return 0


async def _geocode(address: str) -> int:
    async with AddressResolver() as resolver:
        location = await resolver.resolve(address)
    print(location)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "init-db":
            return asyncio.run(_init_db())
        if args.command == "events":
            return asyncio.run(_list_events(args.host))
        if args.command == "geocode":
            return asyncio.run(_geocode(args.address))
    except (EventPlannerError, GeocodingError, httpx.HTTPError, SQLAlchemyError) as e:
        logger.debug(f"Command {args.command!r} failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
