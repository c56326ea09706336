"""Tests for the auth providers.

Verifies:
- PAT: empty token rejected, key sent verbatim, always authenticated.
- TokenManager: 5 minute expiry buffer, 1 hour default lifetime.
- OAuth: authorization URL, code exchange, refresh inside the buffer,
  UnauthenticatedError without a token, tokens cleared on refresh failure.
- Concurrent callers share one refresh; a stale refresh failure keeps the
  tokens stored by the refresh that won.
- create_auth_provider picks PAT over OAuth and refuses to run without
  credentials.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs, urlparse

from linear_mcp.auth import (
    OAuthAuthProvider,
    PATAuthProvider,
    TokenManager,
    create_auth_provider,
)
from linear_mcp.auth.oauth import AUTHORIZE_URL, TOKEN_URL
from linear_mcp.config import Settings
from linear_mcp.exceptions import (
    AuthenticationError,
    ConfigurationError,
    UnauthenticatedError,
)


def _make_response(json_data, status_code=200):
    resp = MagicMock()
    resp.json.return_value = json_data
    resp.status_code = status_code
    resp.text = str(json_data)
    return resp


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def _oauth(clock=None):
    return OAuthAuthProvider(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://localhost:3000/callback",
        scopes="read write",
        token_manager=TokenManager(clock=clock or FakeClock()),
    )


# ---------------------------------------------------------------------------
# PAT
# ---------------------------------------------------------------------------


class TestPATAuthProvider:

    def test_empty_token_rejected(self):
        with pytest.raises(ConfigurationError):
            PATAuthProvider("")
        with pytest.raises(ConfigurationError):
            PATAuthProvider("   ")

    @pytest.mark.asyncio
    async def test_header_is_raw_key(self):
        provider = PATAuthProvider("lin_api_123")

        assert await provider.authorization_header() == "lin_api_123"
        assert await provider.get_access_token() == "lin_api_123"
        assert provider.is_authenticated() is True
        assert provider.auth_type == "pat"


# ---------------------------------------------------------------------------
# TokenManager
# ---------------------------------------------------------------------------


class TestTokenManager:

    def test_no_tokens(self):
        manager = TokenManager(clock=FakeClock())

        assert manager.has_valid_token() is False
        assert manager.needs_refresh() is False

    def test_default_lifetime(self):
        clock = FakeClock(1000.0)
        manager = TokenManager(clock=clock)

        tokens = manager.set_tokens("access")

        assert tokens.expires_at == 1000.0 + 3600

    def test_expiry_buffer(self):
        clock = FakeClock(0.0)
        manager = TokenManager(clock=clock)
        manager.set_tokens("access", "refresh", expires_in=3600)

        clock.now = 3600 - 301
        assert manager.has_valid_token() is True
        assert manager.needs_refresh() is False

        clock.now = 3600 - 299
        assert manager.has_valid_token() is False
        assert manager.needs_refresh() is True

    def test_no_refresh_without_refresh_token(self):
        clock = FakeClock(0.0)
        manager = TokenManager(clock=clock)
        manager.set_tokens("access", None, expires_in=60)

        assert manager.needs_refresh() is False

    def test_clear(self):
        manager = TokenManager(clock=FakeClock())
        manager.set_tokens("access")

        manager.clear()

        assert manager.tokens is None


# ---------------------------------------------------------------------------
# OAuth
# ---------------------------------------------------------------------------


class TestOAuthAuthProvider:

    def test_missing_client_configuration(self):
        with pytest.raises(ConfigurationError):
            OAuthAuthProvider(client_id="id", client_secret="", redirect_uri="http://x")

    def test_authorization_url(self):
        provider = _oauth()

        url = provider.get_authorization_url(state="xyz")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert url.startswith(AUTHORIZE_URL)
        assert params["client_id"] == ["client-id"]
        assert params["redirect_uri"] == ["http://localhost:3000/callback"]
        assert params["response_type"] == ["code"]
        assert params["scope"] == ["read,write"]
        assert params["state"] == ["xyz"]

    def test_not_authenticated_initially(self):
        assert _oauth().is_authenticated() is False

    @pytest.mark.asyncio
    async def test_get_access_token_without_tokens(self):
        with pytest.raises(UnauthenticatedError):
            await _oauth().get_access_token()

    @pytest.mark.asyncio
    @patch("linear_mcp.graphql.http_client.get_http_client")
    async def test_handle_callback_exchanges_code(self, mock_get_client):
        mock_client = AsyncMock()
        mock_client.post.return_value = _make_response({
            "access_token": "access-1",
            "refresh_token": "refresh-1",
            "expires_in": 7200,
        })
        mock_get_client.return_value = mock_client
        provider = _oauth()

        tokens = await provider.handle_callback("auth-code")

        assert tokens.access_token == "access-1"
        assert provider.is_authenticated() is True
        assert await provider.authorization_header() == "Bearer access-1"

        args, kwargs = mock_client.post.call_args
        assert args[0] == TOKEN_URL
        assert kwargs["data"]["grant_type"] == "authorization_code"
        assert kwargs["data"]["code"] == "auth-code"
        assert kwargs["data"]["client_secret"] == "client-secret"

    @pytest.mark.asyncio
    @patch("linear_mcp.graphql.http_client.get_http_client")
    async def test_handle_callback_failure(self, mock_get_client):
        mock_client = AsyncMock()
        mock_client.post.return_value = _make_response({"error": "invalid_grant"}, status_code=400)
        mock_get_client.return_value = mock_client

        with pytest.raises(AuthenticationError, match="400"):
            await _oauth().handle_callback("bad-code")

    @pytest.mark.asyncio
    @patch("linear_mcp.graphql.http_client.get_http_client")
    async def test_refresh_inside_buffer(self, mock_get_client):
        clock = FakeClock(0.0)
        provider = _oauth(clock)
        provider.token_manager.set_tokens("old-access", "refresh-1", expires_in=3600)
        mock_client = AsyncMock()
        mock_client.post.return_value = _make_response({
            "access_token": "new-access",
            "expires_in": 3600,
        })
        mock_get_client.return_value = mock_client

        clock.now = 3600 - 60
        token = await provider.get_access_token()

        assert token == "new-access"
        assert mock_client.post.call_args.kwargs["data"]["grant_type"] == "refresh_token"
        # refresh token is kept when the server does not rotate it
        assert provider.token_manager.tokens.refresh_token == "refresh-1"

    @pytest.mark.asyncio
    @patch("linear_mcp.graphql.http_client.get_http_client")
    async def test_valid_token_not_refreshed(self, mock_get_client):
        provider = _oauth()
        provider.token_manager.set_tokens("access", "refresh", expires_in=3600)

        assert await provider.get_access_token() == "access"
        mock_get_client.assert_not_called()

    @pytest.mark.asyncio
    @patch("linear_mcp.graphql.http_client.get_http_client")
    async def test_refresh_failure_clears_tokens(self, mock_get_client):
        clock = FakeClock(0.0)
        provider = _oauth(clock)
        provider.token_manager.set_tokens("old", "refresh", expires_in=10)
        mock_client = AsyncMock()
        mock_client.post.return_value = _make_response({}, status_code=401)
        mock_get_client.return_value = mock_client

        with pytest.raises(AuthenticationError):
            await provider.get_access_token()

        assert provider.token_manager.tokens is None

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_one_refresh(self):
        provider = _oauth(FakeClock(0.0))
        provider.token_manager.set_tokens("old", "r1", expires_in=10)
        sent = []
        current = {"refresh": "r1"}

        async def rotating_token_endpoint(form):
            sent.append(form["refresh_token"])
            await asyncio.sleep(0)
            if form["refresh_token"] != current["refresh"]:
                raise AuthenticationError("invalid_grant")
            current["refresh"] = "r2"
            return {"access_token": "new", "refresh_token": "r2", "expires_in": 3600}

        provider._request_token = rotating_token_endpoint

        results = await asyncio.gather(
            *(provider.get_access_token() for _ in range(5)), return_exceptions=True
        )

        assert results == ["new"] * 5
        assert sent == ["r1"]
        assert provider.is_authenticated() is True
        assert provider.token_manager.tokens.refresh_token == "r2"

    @pytest.mark.asyncio
    async def test_stale_refresh_failure_keeps_newer_tokens(self):
        provider = _oauth(FakeClock(0.0))
        provider.token_manager.set_tokens("old", "r1", expires_in=10)

        async def token_endpoint(form):
            # a competing refresh stores a rotated pair before this one fails
            provider.token_manager.set_tokens("newer", "r2", expires_in=3600)
            raise AuthenticationError("invalid_grant")

        provider._request_token = token_endpoint

        with pytest.raises(AuthenticationError):
            await provider.refresh()

        assert provider.token_manager.tokens.access_token == "newer"
        assert provider.is_authenticated() is True


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class TestCreateAuthProvider:

    def test_pat_preferred(self):
        settings = Settings(
            linear_access_token="lin_api_1",
            linear_client_id="id",
            linear_client_secret="secret",
            linear_redirect_uri="http://x",
        )

        assert isinstance(create_auth_provider(settings), PATAuthProvider)

    def test_oauth_when_no_pat(self):
        settings = Settings(
            linear_access_token=None,
            linear_client_id="id",
            linear_client_secret="secret",
            linear_redirect_uri="http://x",
        )

        assert isinstance(create_auth_provider(settings), OAuthAuthProvider)

    def test_no_credentials(self):
        settings = Settings(
            linear_access_token=None,
            linear_client_id=None,
            linear_client_secret=None,
            linear_redirect_uri=None,
        )

        with pytest.raises(ConfigurationError, match="LINEAR_ACCESS_TOKEN"):
            create_auth_provider(settings)
