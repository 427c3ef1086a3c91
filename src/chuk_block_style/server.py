#!/usr/bin/env python3
"""
Entry point for the CHUK Block Style MCP Server.

Definition paths are handed to async_server through the environment:
``--library`` and ``--project`` override ``CHUK_BLOCK_STYLE_LIBRARY``
and ``CHUK_BLOCK_STYLE_PROJECT``, which are read when the server module
is first imported.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from collections.abc import MutableMapping, Sequence

from chuk_block_style.constants import LIBRARY_PATH_ENV, PROJECT_PATH_ENV

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line of the server."""
    parser = argparse.ArgumentParser(description="CHUK Block Style MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument("--port", type=int, default=8000, help="HTTP port (http transport only)")
    parser.add_argument(
        "--library",
        metavar="DIR",
        help=f"Definition library replacing the built-in one (env: {LIBRARY_PATH_ENV})",
    )
    parser.add_argument(
        "--project",
        metavar="DIR",
        help=f"Project definitions loaded after the library (env: {PROJECT_PATH_ENV}, "
        "default: ./styles)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def apply_path_overrides(
    args: argparse.Namespace, environ: MutableMapping[str, str] | None = None
) -> dict[str, str]:
    """
    Export the path flags that were given.

    Args:
        args: Parsed command line
        environ: Environment to update, os.environ by default

    Returns:
        The variables that were set
    """
    target = os.environ if environ is None else environ
    overrides = {
        name: value
        for name, value in ((LIBRARY_PATH_ENV, args.library), (PROJECT_PATH_ENV, args.project))
        if value
    }
    for name, value in overrides.items():
        logger.debug(f"{name}={value}")
        target[name] = value
    return overrides


def main(argv: Sequence[str] | None = None) -> None:
    """Parse the command line and serve over the chosen transport."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    apply_path_overrides(args)

    # Definitions load on import, so the paths must be exported first
    from chuk_block_style.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Block Style MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Block Style MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
