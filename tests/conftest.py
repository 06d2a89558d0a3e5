# Copyright (c) Syntropy Systems
"""Pytest fixtures for crucible_ir tests."""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from crucible_ir.models import BackendRef, Experiment, StageDef

# Store original cwd at module load time
_original_cwd = Path.cwd()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def crucible_project(temp_dir: Path) -> Generator[Path, None, None]:
    """Create a temporary project with an empty .crucible directory."""
    (temp_dir / ".crucible").mkdir()

    # Change to temp directory
    os.chdir(temp_dir)

    yield temp_dir

    # Always return to original cwd
    os.chdir(_original_cwd)


@pytest.fixture
def workdir(temp_dir: Path) -> Generator[Path, None, None]:
    """Run the test from a temporary directory without any config."""
    os.chdir(temp_dir)
    yield temp_dir
    os.chdir(_original_cwd)


@pytest.fixture
def valid_experiment() -> Experiment:
    """A minimal experiment that passes validation."""
    return Experiment(
        id="smoke",
        backend=BackendRef(id="gpt4"),
        pipeline=[StageDef(name="run")],
    )
