"""
Test fixtures and mock data for nuget-promote tests.

This module provides common fixtures for feeds, feed settings and temporary
files used across the test suite.
"""

import json
from typing import Any

import pytest
import respx

from fakes import SOURCE_URL, FakeFeed, service_index

from nuget_promote.models.context import FeedSettings


@pytest.fixture
def httpx_mock():
    """Provide respx mock for HTTP mocking."""
    with respx.mock:
        yield respx


@pytest.fixture
def mock_feed(httpx_mock):
    """respx mock with the service index of the source feed registered."""
    httpx_mock.get(SOURCE_URL).respond(200, json=service_index())
    return httpx_mock


@pytest.fixture
def source_settings():
    """Feed settings pointing at the mocked source feed."""
    return FeedSettings(url=SOURCE_URL, api_key="source-key")


@pytest.fixture
def source_feed():
    """Empty in-memory source feed."""
    return FakeFeed()


@pytest.fixture
def destination_feed():
    """Empty in-memory destination feed."""
    return FakeFeed()


@pytest.fixture
def temp_config_file(tmp_path):
    """Feed settings TOML file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        "[source]\n"
        'url = "https://source.example.com/v3/index.json"\n'
        "\n"
        "[destination]\n"
        'url = "https://destination.example.com/v3/index.json"\n'
        'api_key = "destination-key"\n'
        'username = "promoter"\n'
        'password = "secret"\n'
    )
    return config_path


@pytest.fixture
def create_temp_file(tmp_path):
    """
    Factory fixture for creating multiple temporary files in a test.

    Usage:
        def test_something(create_temp_file):
            file1 = create_temp_file("packages.txt", "System.Runtime 4.3.1")
            file2 = create_temp_file("data.json", '{"test": true}', binary=True)

    Returns:
        Callable: Function to create temp files
    """

    def _create(filename: str, content: Any = "", binary: bool = False):
        """Create a temporary file with content."""
        file_path = tmp_path / filename
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if binary:
            file_path.write_bytes(content if isinstance(content, bytes) else content.encode())
        elif isinstance(content, (dict, list)):
            file_path.write_text(json.dumps(content))
        else:
            file_path.write_text(content)
        return file_path

    return _create
