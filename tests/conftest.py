"""Pytest configuration and global fixtures for componentry tests."""

from pathlib import Path

import pytest

from componentry import Component

# Import shared fixtures
from tests.fixtures.common import (  # noqa: F401
    event_log,
    key_generator,
    text_field_schema,
)


@pytest.fixture
def component(key_generator):
    return Component({"name": "first_name"}, key_generator=key_generator)


@pytest.fixture
def recorder():
    """Handler that records every call's positional arguments."""
    class Recorder:
        def __init__(self):
            self.calls = []

        def __call__(self, *args):
            self.calls.append(args)

    return Recorder()


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    for item in items:
        rel_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        elif "integration" in rel_path.parts:
            item.add_marker(pytest.mark.integration)
