"""Shared fixtures for codewalk tests.

Provides factory fixtures for building self-contained walk workspaces
(source files and YAML walk descriptions) and for invoking the CLI
entry points programmatically.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from codewalk.cli import main

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_source():
    """Factory fixture: write a source file into a directory."""

    def _factory(directory: Path, name: str = "three.txt", content: bytes | str = b"line1\nline2\nline3\n") -> Path:
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode()
        path.write_bytes(content)
        return path

    return _factory


@pytest.fixture
def make_walk():
    """Factory fixture: write a YAML walk description into a directory."""

    def _factory(directory: Path, yaml_text: str, name: str = "walk.yaml") -> Path:
        path = directory / name
        path.write_text(textwrap.dedent(yaml_text))
        return path

    return _factory


@pytest.fixture
def run_codewalk():
    """Factory fixture: invoke ``codewalk.cli.main()`` and return its exit code."""

    def _factory(walk_file: Path, root: Path, extra_args: list[str] | None = None) -> int:
        args = [str(walk_file), "-C", str(root)]
        if extra_args:
            args.extend(extra_args)
        return main(args)

    return _factory
