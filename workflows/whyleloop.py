"""Command line access to the Whyleloop link API.

Handy for checking what a device or account would restore, and for creating
or resolving links against a staging host.

Usage:
    # Pending links for this machine (anonymous fingerprint)
    uv run python -m workflows.whyleloop restore

    # Pending links for an account
    uv run python -m workflows.whyleloop restore --email user@example.com

    # Create a link for a screen, with UTM metadata
    uv run python -m workflows.whyleloop create /product/123 --meta utm_source=share

    # Resolve a slug or a full inbound URL
    uv run python -m workflows.whyleloop resolve 1734567890-abc123
    uv run python -m workflows.whyleloop resolve https://go.example.com/1734567890-abc123

    # Show the cached device fingerprint
    uv run python -m workflows.whyleloop fingerprint

App id and host come from --app-id/--base-url or WHYLELOOP_APP_ID/WHYLELOOP_BASE_URL.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse
import asyncio
import json
from typing import Optional

from loguru import logger

from lib.whyleloop.errors import WhyleloopError
from services.whyleloop.config import load_config
from services.whyleloop.sdk import WhyleloopSDK


def parse_metadata(pairs: list[str]) -> dict:
    """["utm_source=share", "ref=abc"] -> {"utm_source": "share", "ref": "abc"}"""
    metadata = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got: {pair}")
        metadata[key] = value
    return metadata


def _print_json(value) -> None:
    print(json.dumps(value, indent=2, sort_keys=True))


async def run_restore(sdk: WhyleloopSDK, email: Optional[str] = None) -> int:
    links = await sdk.restore(email)
    if not links:
        logger.info("No pending links found")
    _print_json([link.to_wire() for link in links])
    return 0


async def run_create(sdk: WhyleloopSDK, destination: str, metadata: dict) -> int:
    link = await sdk.create_link(destination, metadata or None)
    _print_json(link.to_wire())
    return 0


async def run_resolve(sdk: WhyleloopSDK, target: str, hostname: Optional[str] = None) -> int:
    if target.startswith(("http://", "https://")):
        if hostname is not None:
            raise ValueError("--hostname applies to a bare slug; a URL carries its own host")
        details = await sdk.resolve_url(target)
    else:
        details = await sdk.resolve_slug(target, hostname)
    _print_json(details.to_wire())
    return 0


async def run(args) -> int:
    config = load_config(app_id=args.app_id, base_url=args.base_url, storage_path=args.storage)

    async with WhyleloopSDK.from_config(config) as sdk:
        if args.command == "fingerprint":
            print(sdk.device_fingerprint())
            return 0
        try:
            if args.command == "restore":
                return await run_restore(sdk, args.email)
            if args.command == "create":
                return await run_create(sdk, args.destination, parse_metadata(args.meta))
            if args.command == "resolve":
                return await run_resolve(sdk, args.target, args.hostname)
        except WhyleloopError as e:
            logger.error(f"{args.command} failed: {e.message}")
            return 1
    return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Whyleloop deferred deep linking")
    parser.add_argument("--app-id", help="App id (default: WHYLELOOP_APP_ID)")
    parser.add_argument("--base-url", help="API host (default: WHYLELOOP_BASE_URL or https://whyleloop.app)")
    parser.add_argument("--storage", help="Fingerprint store path (default: ~/.whyleloop/store.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    restore = sub.add_parser("restore", help="Restore pending links")
    restore.add_argument("--email", help="Account email (omit for anonymous restore)")

    create = sub.add_parser("create", help="Create a link for a destination")
    create.add_argument("destination", help="App path, e.g. /product/123")
    create.add_argument("--meta", action="append", default=[], help="key=value metadata (repeatable)")

    resolve = sub.add_parser("resolve", help="Resolve a slug or deep-link URL")
    resolve.add_argument("target", help="Slug or full URL")
    resolve.add_argument("--hostname", help="Custom domain the slug belongs to")

    sub.add_parser("fingerprint", help="Print the cached device fingerprint")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO", format="<level>{level: <8}</level> | {message}")

    try:
        return asyncio.run(run(args))
    except ValueError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
