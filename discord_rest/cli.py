"""
Discord REST CLI - Raw and per-endpoint requests from the shell.

This layer handles:
- Argument parsing
- Credential loading from the environment (and a .env file)
- JSON output for piping/automation
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from dotenv import load_dotenv

from discord_rest.core.config import ClientConfig, Credential
from discord_rest.core.errors import RequestError
from discord_rest.core.result import Failure, Result
from discord_rest.log import configure_logging
from discord_rest.sdk import DiscordREST

Command = Callable[[DiscordREST, argparse.Namespace], Awaitable[None]]

# =============================================================================
# Output Helpers
# =============================================================================


def is_tty() -> bool:
    """Check if stdout is a TTY (human) or pipe (machine)."""
    return sys.stdout.isatty()


def _jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return str(obj)


def json_output(data: Any, pretty: bool = False) -> None:
    """Print JSON output. Decoded API types (dataclasses) are expanded at any depth."""
    indent = 2 if pretty or is_tty() else None
    print(json.dumps(data, indent=indent, default=_jsonable))


def error_output(error: Exception | str) -> None:
    """
    Print an error as ``{"error": ..., "kind": ...}`` and exit with status 1.

    Request errors carry their own fields (status, details, reason); anything
    else is reported by exception class, and bare messages as a usage error.
    """
    if isinstance(error, RequestError):
        payload = error.to_dict()
    elif isinstance(error, Exception):
        payload = {"error": str(error), "kind": type(error).__name__}
    else:
        payload = {"error": error, "kind": "UsageError"}
    json_output(payload)
    sys.exit(1)


def result_output(result: Result[Any]) -> None:
    """Print the value of a result, or its error and exit."""
    if isinstance(result, Failure):
        error_output(result.error)
        return
    json_output(result.value)


def parse_query(items: list[str] | None) -> list[tuple[str, str]]:
    """Parse repeated key=value arguments, keeping their order."""
    query = []
    for item in items or []:
        key, sep, value = item.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Query item must be key=value, got {item!r}")
        query.append((key, value))
    return query


def parse_data(raw: str | None) -> Any:
    """Parse a JSON body argument (or - for stdin)."""
    if raw is None:
        return None
    if raw == "-":
        raw = sys.stdin.read()
    return json.loads(raw)


# =============================================================================
# CLI Commands
# =============================================================================


async def cmd_get(client: DiscordREST, args: argparse.Namespace) -> None:
    """GET an arbitrary path and print the JSON response."""
    result_output(await client.client.get(args.path, parse_query(args.query)))


async def cmd_post(client: DiscordREST, args: argparse.Namespace) -> None:
    """POST to an arbitrary path, optionally with attachments."""
    result = await client.client.post(args.path, parse_data(args.data), args.attach or [])
    result_output(result)


async def cmd_patch(client: DiscordREST, args: argparse.Namespace) -> None:
    """PATCH an arbitrary path."""
    try:
        await client.client.patch(args.path, parse_data(args.data))
        json_output({"success": True})
    except RequestError as e:
        error_output(e)


async def cmd_delete(client: DiscordREST, args: argparse.Namespace) -> None:
    """DELETE an arbitrary path."""
    try:
        await client.client.delete(args.path)
        json_output({"success": True})
    except RequestError as e:
        error_output(e)


async def cmd_sticker(client: DiscordREST, args: argparse.Namespace) -> None:
    """Get a sticker by ID."""
    result_output(await client.stickers.get(args.sticker_id))


async def cmd_me(client: DiscordREST, _args: argparse.Namespace) -> None:
    """Get the current user."""
    result_output(await client.users.me())


# =============================================================================
# Main
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="discord-rest",
        description="Make requests to the Discord REST API",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests and errors to stderr")
    subparsers = parser.add_subparsers(dest="command")

    get = subparsers.add_parser("get", help="GET a path")
    get.add_argument("path", help="Path relative to the REST base, e.g. stickers/123")
    get.add_argument("--query", "-q", action="append", help="Query item as key=value (repeatable)")
    get.set_defaults(func=cmd_get)

    post = subparsers.add_parser("post", help="POST to a path")
    post.add_argument("path", help="Path relative to the REST base")
    post.add_argument("--data", "-d", help="JSON body (or - for stdin)")
    post.add_argument("--attach", "-a", action="append", help="File to attach (repeatable)")
    post.set_defaults(func=cmd_post)

    patch = subparsers.add_parser("patch", help="PATCH a path")
    patch.add_argument("path", help="Path relative to the REST base")
    patch.add_argument("--data", "-d", required=True, help="JSON body (or - for stdin)")
    patch.set_defaults(func=cmd_patch)

    delete = subparsers.add_parser("delete", help="DELETE a path")
    delete.add_argument("path", help="Path relative to the REST base")
    delete.set_defaults(func=cmd_delete)

    sticker = subparsers.add_parser("sticker", help="Get a sticker")
    sticker.add_argument("sticker_id", help="Sticker ID")
    sticker.set_defaults(func=cmd_sticker)

    me = subparsers.add_parser("me", help="Get the current user")
    me.set_defaults(func=cmd_me)

    return parser


async def run(client: DiscordREST, func: Command, args: argparse.Namespace) -> None:
    """Run a command and close the client afterwards."""
    async with client:
        await func(client, args)


def main(argv: list[str] | None = None, client: DiscordREST | None = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if client is None:
        load_dotenv()
        credential = Credential.from_env()
        if credential is None:
            error_output("DISCORD_TOKEN environment variable not set")
        client = DiscordREST(config=ClientConfig.from_env(), credential=credential)

    try:
        asyncio.run(run(client, args.func, args))
    except (argparse.ArgumentTypeError, json.JSONDecodeError) as e:
        error_output(e)


if __name__ == "__main__":
    main()
