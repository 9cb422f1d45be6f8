"""Shared test fixtures for all test types."""

import pytest

from componentry import KeyGenerator


@pytest.fixture
def key_generator() -> KeyGenerator:
    """A private key generator so tests can predict keys."""
    return KeyGenerator(start=100)


@pytest.fixture
def text_field_schema() -> dict:
    return {"component": "TextField"}


@pytest.fixture
def event_log() -> list:
    """Shared list that actions and handlers append to, in firing order."""
    return []
