#!/usr/bin/env python3
"""
Command-line interface for URL shortener service.

Talks to the database directly, without going through the HTTP server.

Usage:
    python url_shortener_cli.py shorten <url>
    python url_shortener_cli.py resolve <key>
    python url_shortener_cli.py init-db
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add parent directories to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from shortener.database.postgres import URLStorePostgres
from shortener.errors import ShortenerError, KeyNotFoundError
from shortener.service import URLShortenerService
from shortener.common.logging_config import setup_logging
from shortener.common.redirects import normalize_redirect_target


def _emit(payload: dict, error: bool = False) -> int:
    print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)
    return 1 if error else 0


class URLShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(self, dsn: str, max_key_attempts: int = 10, verbose: bool = False):
        """Initialize CLI."""
        self.dsn = dsn
        self.max_key_attempts = max_key_attempts
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store: Optional[URLStorePostgres] = None
        self.service: Optional[URLShortenerService] = None

    async def initialize(self):
        """Connect to the database and build the service."""
        self.store = URLStorePostgres(dsn=self.dsn, logger=self.logger)
        await self.store.initialize()
        self.service = URLShortenerService(
            store=self.store,
            logger=self.logger,
            max_key_attempts=self.max_key_attempts,
        )

    async def cleanup(self):
        """Cleanup resources."""
        if self.store:
            await self.store.close()

    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        try:
            result = await self.service.shorten(url)
        except ShortenerError as e:
            return _emit({"success": False, "error": str(e)}, error=True)

        return _emit({
            "success": True,
            "key": result.key,
            "url": result.url,
            "created": result.created,
        })

    async def resolve(self, key: str) -> int:
        """Show the stored URL and redirect target for a key."""
        try:
            mapping = await self.service.lookup(key)
        except KeyNotFoundError:
            return _emit({"success": False, "error": f"Key '{key}' not found"}, error=True)
        except ShortenerError as e:
            return _emit({"success": False, "error": str(e)}, error=True)

        return _emit({
            "success": True,
            **mapping.to_dict(),
            "redirect_to": normalize_redirect_target(mapping.url),
        })


async def main():
    """Main entry point."""
    config = load_config()

    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Look up a key
  %(prog)s resolve 1a2b3c4d

  # Create the urls table
  %(prog)s init-db
        """
    )

    parser.add_argument(
        "--dsn",
        default=config.dsn,
        help="PostgreSQL connection URL (default: built from DB_* env vars)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    resolve_parser = subparsers.add_parser("resolve", help="Look up a key")
    resolve_parser.add_argument("key", help="Key to lookup")

    subparsers.add_parser("init-db", help="Create the urls table if it does not exist")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    cli = URLShortenerCLI(
        dsn=args.dsn,
        max_key_attempts=config.max_key_attempts,
        verbose=args.verbose,
    )

    try:
        try:
            await cli.initialize()
        except ShortenerError as e:
            return _emit({"success": False, "error": f"Database unavailable: {e}"}, error=True)

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "resolve":
            return await cli.resolve(args.key)
        elif args.command == "init-db":
            return _emit({"success": True, "message": "Table urls is ready"})
        else:
            parser.print_help()
            return 1

    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
