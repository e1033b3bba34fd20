"""Shared fixtures for architecture tests."""

import os

import pytest
from pytestarch import (
    EvaluableArchitecture,
    LayeredArchitecture,
    get_evaluable_architecture,
)

SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "src"))


@pytest.fixture(scope="session")
def evaluable() -> EvaluableArchitecture:
    """Import graph of src/stattaker."""
    return get_evaluable_architecture(SRC_DIR, os.path.join(SRC_DIR, "stattaker"))


@pytest.fixture(scope="session")
def layers() -> LayeredArchitecture:
    """Domain, application (engine, services), infrastructure (stores) and the CLI.

    PyTestArch resolves module names relative to the source root,
    so modules appear as 'src.stattaker.domain', etc. The CLI is the only
    place that wires a concrete store to the engine.
    """
    return (
        LayeredArchitecture()
        .layer("domain")
        .containing_modules(["src.stattaker.domain"])
        .layer("application")
        .containing_modules(["src.stattaker.application"])
        .layer("infrastructure")
        .containing_modules(["src.stattaker.infrastructure"])
        .layer("cli")
        .containing_modules(["src.stattaker.cli"])
    )
