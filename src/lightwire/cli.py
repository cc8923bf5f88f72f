"""Command line entry point for running command components."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from lightwire.bootstrap import Bootstrap
from lightwire.configuration import ConfigurationLoader
from lightwire.errors import LightwireError

__all__ = ["main"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_COMMAND_FAILED = 1
EXIT_ERROR = 2


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the lightwire CLI."""
    parser = _build_parser()
    try:
        args = parser.parse_args(list(argv) if argv is not None else None)
    except SystemExit as exc:  # argparse exits with code 2 on errors
        return exc.code if isinstance(exc.code, int) else EXIT_ERROR

    bootstrap = Bootstrap(ConfigurationLoader(args.config_dir))
    try:
        if args.action == "plan":
            return _run_plan(bootstrap, args.name)
        return _run_command(bootstrap, args.name)
    except LightwireError as e:
        logger.debug("Bootstrap failed", exc_info=True)
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return EXIT_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lightwire",
        description="Resolve a component graph and run one of its components.",
    )
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory containing parameters.json and dependencies.json "
        "(default: $LIGHTWIRE_CONFIG_DIR or ./config).",
    )

    subcommands = parser.add_subparsers(dest="action", required=True)

    command_parser = subcommands.add_parser(
        "command", help="Build a command component and execute it."
    )
    command_parser.add_argument("name", help="Name of the command component.")

    plan_parser = subcommands.add_parser(
        "plan",
        help="Print the order in which a component and its references are built.",
    )
    plan_parser.add_argument("name", help="Name of the root component.")

    return parser


def _run_command(bootstrap: Bootstrap, name: str) -> int:
    outcome = bootstrap.run_command(name)
    sys.stdout.write(outcome)
    return EXIT_OK if outcome.startswith("Command succeeded") else EXIT_COMMAND_FAILED


def _run_plan(bootstrap: Bootstrap, name: str) -> int:
    for component_name in bootstrap.plan(name).build_order:
        print(component_name)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
