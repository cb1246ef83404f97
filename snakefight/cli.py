"""
Snakefight CLI - Command-line interface for the server.

Usage:
    snakefight serve [--host H] [--port P]   Run the HTTP server
    snakefight info                          Print the snake details
"""

import argparse
import json
import sys


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Snakefight - Turn-based grid game server",
        prog="snakefight",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", help="Bind address (default: SNAKEFIGHT_HOST or 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, help="Bind port (default: SNAKEFIGHT_PORT or 3030)")
    serve_parser.add_argument("--config", "-c", help="Snake details JSON file")
    serve_parser.add_argument("--policy", help="Move policy: random, cautious")
    serve_parser.add_argument("--log-level", help="Logging level (default: INFO)")

    # Info command
    info_parser = subparsers.add_parser("info", help="Print the snake details")
    info_parser.add_argument("--config", "-c", help="Snake details JSON file")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "info":
        cmd_info(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the HTTP server."""
    import dataclasses
    import uvicorn

    from .api import create_app
    from .config import ConfigError, Settings
    from .logging_config import setup_logging

    try:
        settings = Settings.from_env(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    overrides = {
        name: value
        for name, value in (
            ("host", args.host),
            ("port", args.port),
            ("policy", args.policy),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    settings = dataclasses.replace(settings, **overrides)

    logger = setup_logging(settings.log_level)
    try:
        app = create_app(settings=settings)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    logger.info("Serving on %s:%d with %s policy", settings.host, settings.port, settings.policy)
    # Access lines come from the snake-fight middleware
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None, access_log=False)


def cmd_info(args):
    """Print the snake details."""
    from .config import ConfigError, load_details

    try:
        details = load_details(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(json.dumps(details.model_dump(exclude_none=True), indent=2))


if __name__ == "__main__":
    main()
