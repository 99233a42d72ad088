"""Walk descriptions: load a YAML walk and resolve the source reference of every step.

A walk file looks like::

    Title: Tour of the address evaluator
    Steps:
      - Title: Tokenizing
        Src: codewalk/address.py:/def tokenize/,/return tokens/
        Body: |
          The expression is split into typed tokens first.
      - Title: The whole stepper
        Src: codewalk/stepper.py

``Src`` is a file path relative to the source root, optionally followed by ``:`` and an address.  Each step is
resolved independently: a missing file or a bad address is recorded on that step and never stops its siblings.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from codewalk.address import resolve
from codewalk.exceptions import AddressError, ConfigError
from codewalk.snippet import expand_to_lines, line_span
from codewalk.stepper import Range

yaml = YAML()


class Step:
    """A single step of a walk and the outcome of resolving its ``Src`` reference."""

    def __init__(self, title: str, src: str, body: str = ""):
        self.title = title
        self.src = src
        self.body = body

        # Derived from src; filled in by resolve()
        self.file, _, self.address = src.partition(":")
        self.error: Optional[Exception] = None
        self.data: Optional[bytes] = None
        self.span: Optional[Range] = None
        self.lo = 0
        self.hi = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        """Format the file address for display, e.g. ``main.py:12,20``."""
        text = self.file
        if self.lo != 0 or self.hi != 0:
            text += f":{self.lo}"
            if self.lo != self.hi:
                text += f",{self.hi}"
        return text

    def __repr__(self) -> str:
        return f"Step({self.title!r}, {self.src!r})"

    def resolve(self, data: bytes) -> None:
        """Resolve the address part of ``src`` against *data* and record the covered lines.

        Raises:
            AddressError: If the address does not resolve; the step is left without a range
        """
        if ":" in self.src:
            span = expand_to_lines(data, resolve(self.address, data))
            self.span = span
            self.lo, self.hi = line_span(data, span)
        self.data = data


def _source_path(root: Path, filename: str) -> Path:
    """Return *filename* under *root*, refusing paths that leave it."""
    path = (root / filename).resolve()
    if not path.is_relative_to(root.resolve()):
        raise PermissionError(f"Source file outside of root: {filename}")
    return path


def _step_from_config(index: int, entry: Any) -> Step:
    if not isinstance(entry, dict) or "Src" not in entry:
        raise ConfigError(f"Step {index} must be a mapping with a 'Src' key")
    return Step(str(entry.get("Title", "")), str(entry["Src"]), str(entry.get("Body", "")))


class Walk:
    """A walk: a title and an ordered list of steps over source files."""

    def __init__(self, title: str, steps: list[Step]):
        self.title = title
        self.steps = steps

    @property
    def files(self) -> list[str]:
        """Sorted list of the files referenced by successfully resolved steps."""
        return sorted({step.file for step in self.steps if step.ok})

    @property
    def failed_steps(self) -> list[Step]:
        return [step for step in self.steps if not step.ok]

    @classmethod
    def from_config(cls, config: Any) -> "Walk":
        """Build an unresolved walk from parsed YAML data.

        Raises:
            ConfigError: If required keys are missing or have the wrong shape
        """
        if not isinstance(config, dict):
            raise ConfigError("Walk file must contain a mapping")
        if "Title" not in config:
            raise ConfigError("Walk file requires a 'Title' key")
        entries = config.get("Steps", [])
        if not isinstance(entries, list):
            raise ConfigError("'Steps' must be a list")
        steps = [_step_from_config(index, entry) for index, entry in enumerate(entries, start=1)]
        return cls(str(config["Title"]), steps)

    @classmethod
    def load(cls, walk_file: Path, root: Path) -> "Walk":
        """Load *walk_file* and resolve every step against files under *root*.

        Args:
            walk_file: Path to the YAML walk description
            root: Directory the ``Src`` paths are relative to

        Returns:
            The walk, with per-step results and errors filled in

        Raises:
            FileNotFoundError: If *walk_file* does not exist
            ConfigError: If *walk_file* is not valid YAML or misses required keys
        """
        if not walk_file.is_file():
            raise FileNotFoundError(f"Walk file not found: {walk_file}")
        try:
            with walk_file.open() as f:
                config = yaml.load(f)
        except (YAMLError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to load walk file: {e}") from e

        walk = cls.from_config(config)
        walk.resolve(root)
        return walk

    def resolve(self, root: Path) -> None:
        """Read the source files of all steps and resolve their addresses.

        Each file is read once.  Failures are recorded on the failing step and logged.
        """
        sources: dict[str, bytes] = {}
        for index, step in enumerate(self.steps, start=1):
            try:
                if step.file not in sources:
                    sources[step.file] = _source_path(root, step.file).read_bytes()
                step.resolve(sources[step.file])
            except (OSError, AddressError) as e:
                step.error = e
                logging.warning(f"Step {index} ({step.src}): {e}")
                continue
            logging.debug(f"Step {index} resolved to {step}")
