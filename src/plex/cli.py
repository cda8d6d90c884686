"""
Plex Catalog CLI - Command Line Interface

Lists the libraries of a Plex server and the content behind them.
Credentials come from PLEX_USERNAME / PLEX_PASSWORD.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

import httpx

from ..logger import setup_logging
from ..mediaserver.enums import InitializationStatus
from . import __version__
from .auth import select_first_server
from .config import PlexConfig
from .exceptions import PlexError
from .models import PlexDevice
from .service import PlexMediaService

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="python -m src.plex",
        description="Browse the catalog of a Plex Media Server",
        epilog="Example: python -m src.plex albums 5",
    )
    parser.add_argument(
        "--server",
        metavar="NAME",
        help="Name of the server to use (default: first discovered server)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("libraries", help="List libraries")
    commands.add_parser("movies", help="List movies of a library").add_argument("library_id")
    commands.add_parser("albums", help="List albums of a library").add_argument("library_id")
    commands.add_parser("songs", help="List songs of an album").add_argument("album_key")
    collections = commands.add_parser("collections", help="List collections of a library")
    collections.add_argument("library_id")
    collections.add_argument(
        "--simple",
        action="store_true",
        help="Use the music collection listing (key and title only)",
    )
    return parser


def server_selector_for(name: Optional[str]):
    """Return a selector picking the server called ``name``, or the first one."""
    if not name:
        return select_first_server

    def select(servers: Sequence[PlexDevice]) -> str:
        matching = [s for s in servers if s.name == name]
        if not matching:
            available = ", ".join(s.name for s in servers)
            raise ValueError(f"No server named {name!r} (available: {available})")
        return select_first_server(matching)

    return select


async def run(args: argparse.Namespace, config: PlexConfig) -> List[str]:
    """Initialize the service and return the output lines for the command."""
    async with PlexMediaService.from_config(config) as service:
        status = await service.initialize(server_selector_for(args.server))
        if status is not InitializationStatus.OK:
            raise PlexError(f"Initialization failed: {status.value}")

        if args.command == "libraries":
            libraries = await service.get_all_libraries()
            return [f"{lib.id}\t{lib.type.value}\t{lib.title}" for lib in libraries]
        if args.command == "movies":
            movies = await service.get_movies(args.library_id)
            return [f"{m.id}\t{m.year or ''}\t{m.title}" for m in movies]
        if args.command == "albums":
            albums = await service.get_albums(args.library_id)
            return [f"{a.id}\t{a.artist or ''}\t{a.title}" for a in albums]
        if args.command == "songs":
            songs = await service.get_album_songs(args.album_key)
            return [f"{s.id}\t{s.title}\t{s.streaming_url}" for s in songs]
        if args.simple:
            collections = await service.get_collections_simple(args.library_id)
        else:
            collections = await service.get_collections(args.library_id)
        return [f"{c.id}\t{c.title}" for c in collections]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 = success, 1 = error, 130 = interrupted)
    """
    args = create_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    try:
        config = PlexConfig.from_environment()
        for line in asyncio.run(run(args, config)):
            print(line)
        return 0
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    except (EnvironmentError, PlexError, ValueError, httpx.HTTPError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
