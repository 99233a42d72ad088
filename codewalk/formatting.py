"""Terminal colors and the per-step status line printed by ``codewalk``."""

import sys

# Column where the bracketed status starts, counted from the left margin
STATUS_COLUMN = 52


class Colors:
    """ANSI escape codes, or empty strings when stdout is not a terminal."""

    def __init__(self):
        enabled = sys.stdout.isatty()
        self.BLUE = "\033[34m" if enabled else ""
        self.RED = "\033[31m" if enabled else ""
        self.GREEN = "\033[32m" if enabled else ""
        self.REVERSE = "\033[7m" if enabled else ""
        self.RESET = "\033[0m" if enabled else ""


def display_step_status(step_name: str, success: bool, extra_indent: int = 0) -> None:
    """Print one walk step title followed by ``[ OK ]`` or ``[FAIL]`` in a fixed column.

    Args:
        step_name: Title of the step
        success: Whether the step's source reference resolved
        extra_indent: Spaces added before the title; the status column does not move
    """
    colors = Colors()
    indent = 2 + extra_indent
    status = f"[{colors.GREEN} OK {colors.RESET}]" if success else f"[{colors.RED}FAIL{colors.RESET}]"
    title = step_name.ljust(STATUS_COLUMN - indent - 1)
    print(f"{' ' * indent}{title} {status}")
