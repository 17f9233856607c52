"""Gemeinsame Fixtures für die Tests."""

import pytest

from balanced_scorecard.registry import Registry
from balanced_scorecard.service import ScoreEngine


@pytest.fixture
def registry():
    reg = Registry()
    yield reg
    reg.close()


@pytest.fixture
def engine():
    return ScoreEngine()


@pytest.fixture
def standard_registry(registry):
    """Die vier Standard-Perspektiven mit der Kette Learning -> Internal -> Customer -> Financial."""
    for name in ("Financial", "Customer", "Internal", "Learning"):
        registry.add_perspective_if_absent(name)
    registry.add_dependency("Learning", "Internal")
    registry.add_dependency("Internal", "Customer")
    registry.add_dependency("Customer", "Financial")
    return registry
