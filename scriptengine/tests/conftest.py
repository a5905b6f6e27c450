"""
Pytest configuration and fixtures for scriptengine tests.

This module provides:
- Network blocking fixture to prevent accidental API calls in CI
- Catalog, engine and request fixtures built from the bundled catalog data
"""

import socket
import pytest
from unittest.mock import patch

from scriptengine.catalogs import load_catalogs
from scriptengine.config import EngineSettings
from scriptengine.core import ScriptEngine
from scriptengine.models import DimensionLevels, DimensionSetting, EngineRequest


class NetworkBlockedError(Exception):
    """Raised when a test attempts to make a network connection."""
    pass


def _block_socket_connect(*args, **kwargs):
    """Block all socket connections to prevent accidental API calls."""
    raise NetworkBlockedError(
        "Network access is blocked in unit tests. "
        "If you need to test network functionality, use mocks. "
        "This prevents accidental text generation calls that cost money."
    )


@pytest.fixture(autouse=True)
def block_network():
    """
    Automatically block all network connections in tests.

    Every text generator call in the test suite goes through a mocked client.
    A test that reaches a real socket fails with NetworkBlockedError.
    """
    with patch.object(socket.socket, 'connect', _block_socket_connect):
        with patch.object(socket, 'create_connection', _block_socket_connect):
            yield


@pytest.fixture(scope="session")
def catalogs():
    """Bundled catalogs, loaded once for the whole session."""
    return load_catalogs()


@pytest.fixture
def engine(catalogs):
    """ScriptEngine over the bundled catalogs with default settings."""
    return ScriptEngine(catalogs, EngineSettings())


@pytest.fixture
def anxiety_request():
    """Request for an anxious beginner with a moderate symbolic level."""
    return EngineRequest(
        presenting_issue="I feel anxious before meetings",
        desired_outcome="Feel steady and at ease",
        dimension_levels=DimensionLevels(
            somatic=DimensionSetting(level=80),
            symbolic=DimensionSetting(level=50),
        ),
    )


@pytest.fixture
def clean_script():
    """Short script text that triggers no validation rule."""
    return (
        "Your breath settles into an easy rhythm. "
        "Shoulders soften and warmth spreads through your chest. "
        "Perhaps a gentle heaviness arrives in your hands. "
        "Each exhale carries tension away, and calm begins to unfold."
    )
