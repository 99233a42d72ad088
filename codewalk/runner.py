"""Walk runner: load a walk, report the status of every step, and optionally show the referenced code."""

import logging
from pathlib import Path

from codewalk.exceptions import ExitCode
from codewalk.fileprint import FilePrint
from codewalk.formatting import Colors, display_step_status
from codewalk.walk import Step, Walk


class WalkRunner:
    """Main class for checking and displaying walk descriptions."""

    def __init__(self, colors: Colors | None = None):
        self.colors = colors or Colors()

    def show_step(self, step: Step, context: int) -> None:
        """Print the lines referenced by a resolved step, with *context* lines before them."""
        if step.data is None:
            return
        if step.span is None:
            printer = FilePrint.from_lines(step.data, 0, 0, context)
            print(printer.render_text(self.colors, full=True))
        else:
            printer = FilePrint.from_range(step.data, step.span, context)
            print(printer.render_text(self.colors))

    def run(self, walk_file_path: str, source_root: str, show: bool = False, context: int = 0) -> int:
        """Main entry point for checking a walk.

        Args:
            walk_file_path: Path to the YAML walk description
            source_root: Directory the step sources are relative to
            show: Print the referenced lines of every resolved step
            context: Lines of leading context to print before each step

        Returns:
            Exit code (0 when every step resolved, non-zero otherwise)
        """
        walk = Walk.load(Path(walk_file_path), Path(source_root))

        print(f"{self.colors.BLUE}***** {walk.title} *****{self.colors.RESET}")
        print("Steps:")
        for step in walk.steps:
            display_step_status(step.title or step.src, step.ok)
            if step.ok:
                print(f"      {step}")
                if show:
                    self.show_step(step, context)
            else:
                print(f"      {step.src}: {self.colors.RED}{step.error}{self.colors.RESET}")

        failed = len(walk.failed_steps)
        print("Walk Summary:")
        print(f"  Files         : {len(walk.files):-5}")
        print(f"  Total steps   : {len(walk.steps):-5}")
        print(f"  Failed steps  : {failed:-5}")
        logging.info(f"Checked {len(walk.steps)} steps of {walk_file_path}")

        return ExitCode.OK if failed == 0 else ExitCode.STEP_FAILURE
