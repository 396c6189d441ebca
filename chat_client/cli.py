#!/usr/bin/env python3
"""Command line entry point.

Usage:
  chat-client --host 127.0.0.1 --port 12345
"""

import argparse
import sys

from chat_client.client import run
from chat_client.logging import LEVELS, setup_logging
from chat_client.settings import DEFAULT_HOST, DEFAULT_LINGER, DEFAULT_PORT, ClientSettings


def port_number(value: str) -> int:
    port = int(value)
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be between 1 and 65535, got {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chat-client", description="Simple socket client for chat")
    p.add_argument("-H", "--host", default=DEFAULT_HOST, help="server host")
    p.add_argument("-p", "--port", type=port_number, default=DEFAULT_PORT, help="server port")
    p.add_argument("--encoding", default="utf-8")
    p.add_argument(
        "--linger",
        type=float,
        default=DEFAULT_LINGER,
        help="seconds to wait for the server to hang up after bye",
    )
    p.add_argument("--log-level", default="WARNING", type=str.upper, choices=sorted(LEVELS))
    p.add_argument("--log-format", default="console", choices=["console", "json"])
    return p


def parse_settings(argv: list[str] | None = None) -> ClientSettings:
    args = build_parser().parse_args(argv)
    return ClientSettings(
        host=args.host,
        port=args.port,
        encoding=args.encoding,
        linger=args.linger,
        log_level=args.log_level,
        log_format=args.log_format,
    )


def main(argv: list[str] | None = None) -> int:
    settings = parse_settings(argv)
    setup_logging(level=settings.log_level, format=settings.log_format)
    try:
        return run(settings)
    except KeyboardInterrupt:
        print("\nClient stopped.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
