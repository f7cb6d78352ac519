"""Tests for the bearer-token auth dependencies."""

import pytest

from karaoke.api.dependencies import (
    get_current_user_optional,
    parse_bearer_token,
    require_current_user,
)
from karaoke.domain.entities import CurrentUser
from karaoke.domain.exceptions import AuthenticationError
from karaoke.infrastructure.persistence import Database


class TestParseBearerToken:
    """Test parse_bearer_token()."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc123", "abc123"),
            ("bearer abc123", "abc123"),
            ("BEARER   abc123  ", "abc123"),
            ("abc123", "abc123"),
            ("  abc123 ", "abc123"),
        ],
    )
    def test_strips_prefix_and_whitespace(self, header: str, expected: str):
        assert parse_bearer_token(header) == expected

    def test_bearer_without_token(self):
        assert parse_bearer_token("Bearer ") == ""


class TestCurrentUser:
    """Test get_current_user_optional() and require_current_user()."""

    @pytest.mark.asyncio
    async def test_known_token_resolves_user(self, database: Database, seed):
        await seed.token("tok-1", "user-1")

        async with database.session_scope() as session:
            user = await get_current_user_optional("Bearer tok-1", session)

        assert user == CurrentUser(user_id="user-1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", [None, "", "   ", "Bearer ", "Bearer unknown"])
    async def test_missing_blank_or_unknown_is_anonymous(
        self, database: Database, header: str | None
    ):
        async with database.session_scope() as session:
            assert await get_current_user_optional(header, session) is None

    @pytest.mark.asyncio
    async def test_require_passes_user_through(self):
        user = CurrentUser(user_id="user-1")
        assert await require_current_user(user) is user

    @pytest.mark.asyncio
    async def test_require_rejects_anonymous(self):
        with pytest.raises(AuthenticationError):
            await require_current_user(None)
