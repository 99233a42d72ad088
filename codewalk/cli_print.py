"""Command-line interface for codewalk-print.

Prints one source file with a range of lines highlighted and a few lines of leading context.  The range is given
either as explicit line numbers (``--lo``/``--hi``) or as an address (``--address``), e.g.::

    codewalk-print codewalk/stepper.py --address '/def search/,/raise NoMatch/'
    codewalk-print codewalk/stepper.py --lo 40 --hi 52 --html
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

from codewalk.address import resolve
from codewalk.cli import run_with_exit_codes, setup_logging
from codewalk.exceptions import AddressError, CliError, UsageError
from codewalk.fileprint import FilePrint
from codewalk.snippet import DEFAULT_CONTEXT_LINES


def main(command_line_args: Optional[list[str]] = None) -> int:
    """Entry point for the ``codewalk-print`` command.

    Args:
        command_line_args: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code for the process.
    """
    argument_parser = argparse.ArgumentParser(
        prog="codewalk-print",
        description="Print a source file with a range of lines highlighted",
        exit_on_error=True,
    )
    argument_parser.add_argument("file", help="Source file to print")
    argument_parser.add_argument("--lo", type=int, default=0, help="First line to highlight")
    argument_parser.add_argument("--hi", type=int, default=0, help="Last line to highlight (default: --lo)")
    argument_parser.add_argument("-a", "--address", default=None, help="Address selecting the lines to highlight")
    argument_parser.add_argument(
        "-c",
        "--context",
        type=int,
        default=DEFAULT_CONTEXT_LINES,
        help=f"Line boundaries of context before the highlight (default: {DEFAULT_CONTEXT_LINES})",
    )
    argument_parser.add_argument("--html", action="store_true", help="Emit an HTML fragment instead of text")
    argument_parser.add_argument("-f", "--full", action="store_true", help="Print the whole file in text mode")
    argument_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    parsed_args = argument_parser.parse_args(command_line_args)

    setup_logging(parsed_args.verbose)
    if parsed_args.address is not None and (parsed_args.lo or parsed_args.hi):
        raise UsageError("--address cannot be combined with --lo/--hi")

    source = Path(parsed_args.file)
    if not source.is_file():
        raise UsageError(f"Source file not found: {source}")
    data = source.read_bytes()

    if parsed_args.address is not None:
        try:
            span = resolve(parsed_args.address, data)
        except AddressError as e:
            raise CliError(f"{source}:{parsed_args.address}: {e}") from e
        printer = FilePrint.from_range(data, span, parsed_args.context)
    else:
        printer = FilePrint.from_lines(data, parsed_args.lo, parsed_args.hi, parsed_args.context)
    logging.info(f"Highlighting bytes {printer.highlight.lo}-{printer.highlight.hi} of {source}")

    if parsed_args.html:
        print(printer.render_html())
    else:
        print(printer.render_text(full=parsed_args.full))
    return 0


def console_main() -> None:
    """Console script entry point for ``codewalk-print``."""
    run_with_exit_codes(main)


if __name__ == "__main__":  # pragma: no cover
    console_main()
