"""CLI entry point for taskboard."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Single-board task tracker with a terminal UI and a companion HTTP service",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Path to project root containing taskboard.yml (default: current directory)",
    )
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Generate default taskboard.yml in the project root and exit",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the companion HTTP service instead of the TUI",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host for --serve (default: server.host from config)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for --serve (default: server.port from config)",
    )
    parser.add_argument(
        "--store-url",
        default=None,
        metavar="URL",
        help="Use the companion service at URL for this run (overrides store in taskboard.yml)",
    )
    parser.add_argument(
        "--validate",
        type=Path,
        default=None,
        metavar="BOARD_JSON",
        help="Check a saved board file against the board invariants and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    # Build settings from CLI args
    settings_kwargs: dict = {}
    if args.project_root:
        settings_kwargs["project_root"] = args.project_root
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    if args.store_url:
        settings_kwargs["store_url"] = args.store_url

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file)

    if args.generate:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.project_root))

    if args.validate is not None:
        from .cli.validate import run_validate

        raise SystemExit(run_validate(args.validate))

    if args.serve:
        from .cli.serve import run_serve
        from .services import ConfigService

        raise SystemExit(run_serve(ConfigService(settings.project_root), args.host, args.port))

    # Import here so the service and CLI paths do not load Textual
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
