"""
Taskboard CLI — Command-Line Interface
=======================================
Entry point for running and inspecting the task service.

Usage:
    # Start the server (port 5000, or $PORT)
    taskboard serve
    taskboard serve --port 8080 --log-level debug

    # Start with an empty collection
    taskboard serve --no-seed

    # Show the route table
    taskboard routes

    # Print the startup tasks as JSON
    taskboard seed
"""

from __future__ import annotations

import argparse
import json
import sys

from taskboard.config import ServerConfig, LOG_LEVELS
from taskboard.store import TaskStore


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_serve(args) -> int:
    """Start the HTTP server."""
    try:
        config = ServerConfig.from_env(
            host=args.host,
            port=args.port,
            log_level=args.log_level,
            seed=False if args.no_seed else None,
        )
    except ValueError as e:
        print(f"✘ {e}")
        return 1

    try:
        import uvicorn  # noqa: F401
    except ImportError:
        print("✘ uvicorn is required to serve.")
        print("  Install it with:  pip install uvicorn fastapi")
        return 1

    from taskboard.server import run_server
    run_server(config)
    return 0


def cmd_routes(args) -> int:
    """Print the route table."""
    from taskboard.server import ROUTES

    print(f"\n☤ ─── Routes ───")
    for method, path, summary in ROUTES:
        print(f"  {method:7s} {path:20s} {summary}")
    print(f"  {'*':7s} {'(anything else)':20s} 404 Route not found")
    return 0


def cmd_seed(args) -> int:
    """Print the startup tasks as JSON."""
    store = TaskStore.with_seed()
    print(json.dumps([t.to_dict() for t in store.list()], indent=2))
    return 0


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Taskboard — in-memory task CRUD service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  taskboard serve\n"
            "  taskboard serve --port 8080 --no-seed\n"
            "  taskboard routes\n"
            "  taskboard seed\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # serve
    p_serve = subparsers.add_parser("serve", help="Start the HTTP server")
    p_serve.add_argument("--host", default=None, help="Bind address (default: 0.0.0.0)")
    p_serve.add_argument("--port", "-p", default=None, type=int,
                         help="Port number (default: $PORT or 5000)")
    p_serve.add_argument("--log-level", default=None, choices=LOG_LEVELS,
                         help="Log level (default: info)")
    p_serve.add_argument("--no-seed", action="store_true",
                         help="Start with an empty task collection")

    # routes
    subparsers.add_parser("routes", help="Show the route table")

    # seed
    subparsers.add_parser("seed", help="Print the startup tasks as JSON")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "serve": cmd_serve,
        "routes": cmd_routes,
        "seed": cmd_seed,
    }

    if args.command in commands:
        return commands[args.command](args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
