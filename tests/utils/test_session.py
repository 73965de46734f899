"""
Tests for session utilities.

This module tests async client creation and configuration.
"""

import httpx
import pytest

from nuget_promote.utils import create_async_session
from nuget_promote.utils.constants import USER_AGENT


class TestSessionUtilities:
    """Test session utility functions."""

    @pytest.mark.asyncio
    async def test_create_async_session(self):
        """Test create_async_session defaults."""
        session = create_async_session()

        assert isinstance(session, httpx.AsyncClient)
        assert session.timeout.connect == 10.0
        assert session.follow_redirects
        assert session.headers["User-Agent"] == USER_AGENT
        assert session.auth is None
        assert not session.is_closed
        await session.aclose()

    @pytest.mark.asyncio
    async def test_create_async_session_with_auth(self):
        """Test that credentials configure basic auth."""
        session = create_async_session(auth=("user", "secret"), timeout=30)

        assert isinstance(session.auth, httpx.BasicAuth)
        assert session.timeout.read == 30
        await session.aclose()

    @pytest.mark.asyncio
    async def test_custom_transport(self):
        """Test that a transport override is used for requests."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))
        session = create_async_session(transport=transport)

        response = await session.get("https://feed.example.com/v3/index.json")

        assert response.json() == {"ok": True}
        await session.aclose()
