"""CLI entry point for taskdeck."""

import argparse
from pathlib import Path

from pydantic import ValidationError

from . import __version__
from .config import Settings
from .logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="taskdeck",
        description="Terminal task manager for a REST task API",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Base URL of the task API (default: http://localhost:8080/api/v1)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Load at most this many tasks",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the task list and exit instead of starting the TUI",
    )
    status = parser.add_mutually_exclusive_group()
    status.add_argument(
        "--completed",
        dest="completed",
        action="store_const",
        const=True,
        default=None,
        help="With --list: only completed tasks",
    )
    status.add_argument(
        "--active",
        dest="completed",
        action="store_const",
        const=False,
        help="With --list: only active tasks",
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
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Build settings from CLI args; unset flags fall back to TASKDECK_* env vars."""
    settings_kwargs: dict = {}
    if args.api_url:
        settings_kwargs["api_base_url"] = args.api_url
    if args.timeout is not None:
        settings_kwargs["request_timeout"] = args.timeout
    if args.limit is not None:
        settings_kwargs["default_limit"] = args.limit
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = build_settings(args)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        parser.error(f"invalid {field}: {first['msg']}")

    setup_logging(settings.verbose, settings.log_file)

    if args.list:
        from .cli.list_tasks import run_list

        raise SystemExit(run_list(settings, completed=args.completed))

    # Import here so --list does not pay for loading Textual
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
