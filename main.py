#!/usr/bin/env python3
"""
Inkpost -- Multi-user blogging API with bearer-token auth.

Usage:
  python main.py
  python main.py --host 0.0.0.0 --port 8080
  python main.py --reload

Equivalent to:  uvicorn api.main:app --host 127.0.0.1 --port 8000

Environment variables (see core/config.py):
  JWT_SECRET    Signing key, at least 32 characters. Required unless DEBUG=true.
  DEBUG         true to auto-generate a throwaway JWT_SECRET for local work.
  DATABASE_URL  SQLAlchemy URL (default: sqlite:///./inkpost.db)
"""

import argparse
from typing import Optional

import uvicorn

APP_PATH = "api.main:app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inkpost",
        description="Run the Inkpost blogging API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py
  python main.py --port 8080
  DEBUG=true python main.py --reload
        """,
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Interface to bind (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to listen on (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change (development only)",
    )
    parser.add_argument(
        "--log-level",
        choices=["critical", "error", "warning", "info", "debug"],
        default="info",
        metavar="LEVEL",
        help="uvicorn log level: critical, error, warning, info, or debug (default: info)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    # The app is passed as an import string so --reload can re-import it.
    uvicorn.run(
        APP_PATH,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
