#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: each request is handled by its own task on the uvicorn event
loop (FastAPI + asyncpg connection pool). Cross-request consistency comes
from the unique constraints on urls.key and urls.url.

Usage:
    python app.py [-port 8080]

Environment variables:
    DB_HOST - PostgreSQL host (default localhost)
    DB_PORT, DB_USER, DB_PASSWORD, DB_NAME - remaining connection settings
    BASE_URL - Fallback base URL for short links
    PORT - Port to listen on (overridden by -port)
    MAX_KEY_ATTEMPTS - Bound on key allocation retries
    LOG_LEVEL - Logging level
"""

import argparse
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortener.database.postgres import URLStorePostgres
from shortener.errors import StoreError
from shortener.keygen import KeyGenerator
from shortener.service import URLShortenerService
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the store on startup and close it on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    store = URLStorePostgres(
        dsn=config.dsn,
        pool_max_size=config.db_pool_max_size,
        command_timeout_seconds=config.db_command_timeout_seconds,
        logger=logger,
    )

    try:
        await store.initialize()
    except StoreError as e:
        logger.critical(f"Failed to initialize database: {e}")
        await store.close()
        raise

    logger.info("Successfully connected to database")

    service = URLShortenerService(
        store=store,
        key_generator=KeyGenerator(),
        logger=logger,
        max_key_attempts=config.max_key_attempts,
    )
    app.state.service = service

    yield

    logger.info("Shutting down URL shortener service...")
    await service.close()
    logger.info("Service stopped")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="URL shortener service")
    parser.add_argument(
        "-port", "--port",
        type=int,
        default=None,
        help="Port to listen on (default: PORT env or 8080)",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Load configuration, letting the command line override the port."""
    overrides = {}
    if args.port is not None:
        overrides["port"] = args.port
    return load_config(**overrides)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    config = build_config(args)

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    app = create_app(service_instance=None, config=config, lifespan=lifespan)
    app.state.logger = logger

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )
    server = uvicorn.Server(uvicorn_config)

    # uvicorn handles SIGINT/SIGTERM and runs the lifespan shutdown
    logger.info(f"Starting server on {config.host}:{config.port}")
    try:
        server.run()
    except SystemExit:
        # uvicorn exits with its own status when the lifespan startup fails
        if server.started:
            raise

    if not server.started:
        logger.critical("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    main()
