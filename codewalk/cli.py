"""Command-line interface for codewalk.

CLI argument parsing, logging configuration, and the ``main()`` entry point live here.  Loading and checking the walk
is delegated to the runner module, and error handling is centralized around the custom exceptions defined in the
exceptions module.
"""

import argparse
import logging
import sys
import traceback
from collections.abc import Callable
from typing import Optional

from codewalk.exceptions import CliError, ConfigError, ExitCode, UsageError
from codewalk.runner import WalkRunner


def setup_logging(verbosity_level: int) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbosity_level: 0=WARNING, 1=INFO, 2+=DEBUG
    """
    if verbosity_level == 0:
        level = logging.WARNING
    elif verbosity_level == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(command_line_args: Optional[list[str]] = None) -> int:
    """Main entry point for command line execution.

    Args:
        command_line_args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code for the process
    """
    argument_parser = argparse.ArgumentParser(
        prog="codewalk",
        description="Resolve and check the source references of a codewalk description",
        exit_on_error=True,
    )
    argument_parser.add_argument("walk_file", help="YAML file describing the walk")
    argument_parser.add_argument("-C", "--root", default=".", help="Directory the step sources are relative to")
    argument_parser.add_argument("-s", "--show", action="store_true", help="Print the lines referenced by each step")
    argument_parser.add_argument(
        "-c",
        "--context",
        type=int,
        default=0,
        help="Lines of leading context to print with --show (default: 0)",
    )
    argument_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    parsed_args = argument_parser.parse_args(command_line_args)

    setup_logging(parsed_args.verbose)
    if parsed_args.context < 0:
        raise UsageError("--context must not be negative")
    try:
        return WalkRunner().run(parsed_args.walk_file, parsed_args.root, parsed_args.show, parsed_args.context)
    except FileNotFoundError as e:
        raise ConfigError(str(e)) from e


def run_with_exit_codes(entry_point: Callable[[], int]) -> None:
    """Run *entry_point* and exit the process with a code derived from its result or error."""
    try:
        sys.exit(entry_point())
    except CliError as e:
        logging.error(e)
        sys.exit(e.exit_code)
    except Exception:
        logging.error("internal error (use -vv for traceback)")
        if "-vv" in sys.argv:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL)


def console_main() -> None:
    """Console script entry point for ``codewalk``."""
    run_with_exit_codes(main)


if __name__ == "__main__":
    console_main()
