"""
Codewalk - sam-style address resolution for code walkthroughs

A Python package for resolving Plan 9 sam/acme addresses such as ``12,20``, ``/pattern/`` or ``+#5`` to byte ranges
within source files, and for checking and printing the code referenced by walk descriptions written in YAML.
"""

from .address import Address, resolve
from .exceptions import AddressError, ErrorKind
from .lines import byte_offset_of_line, line_count, line_of
from .snippet import context_start, expand_to_lines
from .stepper import Direction, Range

__version__ = "1.0.0"

__all__ = [
    "Address",
    "AddressError",
    "Direction",
    "ErrorKind",
    "Range",
    "byte_offset_of_line",
    "context_start",
    "expand_to_lines",
    "line_count",
    "line_of",
    "main",
    "resolve",
]


def main(command_line_args=None):
    """Main entry point for the codewalk command"""
    from .cli import main as cli_main

    return cli_main(command_line_args)
