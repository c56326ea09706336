"""OAuth 2.0 authentication against Linear.

The authorization step happens in the user's browser; the resulting code is
handed back through the ``linear_auth_callback`` tool and exchanged here for
an access/refresh token pair, which is kept in memory for the life of the
process.
"""

import asyncio
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

from ..exceptions import AuthenticationError, ConfigurationError, UnauthenticatedError
from .base import AuthProvider

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://linear.app/oauth/authorize"
TOKEN_URL = "https://api.linear.app/oauth/token"

# Refresh this long before the reported expiry
EXPIRY_BUFFER_SECONDS = 5 * 60
DEFAULT_EXPIRES_IN = 60 * 60


@dataclass
class TokenSet:
    access_token: str
    refresh_token: Optional[str]
    expires_at: float


class TokenManager:
    """Holds the current token pair and decides when it must be refreshed."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._tokens: Optional[TokenSet] = None

    @property
    def tokens(self) -> Optional[TokenSet]:
        return self._tokens

    def set_tokens(
        self,
        access_token: str,
        refresh_token: Optional[str] = None,
        expires_in: Optional[float] = None,
    ) -> TokenSet:
        lifetime = DEFAULT_EXPIRES_IN if expires_in is None else float(expires_in)
        self._tokens = TokenSet(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=self._clock() + lifetime,
        )
        return self._tokens

    def clear(self) -> None:
        self._tokens = None

    def has_valid_token(self) -> bool:
        if self._tokens is None:
            return False
        return self._clock() < self._tokens.expires_at - EXPIRY_BUFFER_SECONDS

    def needs_refresh(self) -> bool:
        return (
            self._tokens is not None
            and bool(self._tokens.refresh_token)
            and not self.has_valid_token()
        )


class OAuthAuthProvider(AuthProvider):
    """Authorization-code flow with refresh, for a single Linear workspace."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: str = "read write",
        token_manager: Optional[TokenManager] = None,
    ):
        if not (client_id and client_secret and redirect_uri):
            raise ConfigurationError(
                "OAuth requires LINEAR_CLIENT_ID, LINEAR_CLIENT_SECRET and LINEAR_REDIRECT_URI"
            )
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = scopes
        self.token_manager = token_manager or TokenManager()
        self._refresh_lock = asyncio.Lock()

    @property
    def auth_type(self) -> str:
        return "oauth"

    def get_authorization_url(self, state: Optional[str] = None) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": self.scopes.replace(" ", ","),
            "state": state or secrets.token_urlsafe(16),
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def is_authenticated(self) -> bool:
        return self.token_manager.has_valid_token() or self.token_manager.needs_refresh()

    async def get_access_token(self) -> str:
        if self.token_manager.needs_refresh():
            async with self._refresh_lock:
                # another caller may have refreshed while we waited
                if self.token_manager.needs_refresh():
                    await self.refresh()
        tokens = self.token_manager.tokens
        if tokens is None or not self.token_manager.has_valid_token():
            raise UnauthenticatedError(
                "Not authenticated with Linear. Call linear_auth and complete the OAuth flow."
            )
        return tokens.access_token

    async def handle_callback(self, code: str) -> TokenSet:
        """Exchange an authorization code for tokens."""
        if not code:
            raise AuthenticationError("Authorization code is required")
        token_info = await self._request_token({
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
        })
        logger.info("OAuth authorization code exchanged")
        return self._store(token_info)

    async def refresh(self) -> TokenSet:
        tokens = self.token_manager.tokens
        if tokens is None or not tokens.refresh_token:
            raise UnauthenticatedError("No refresh token available")
        try:
            token_info = await self._request_token({
                "grant_type": "refresh_token",
                "refresh_token": tokens.refresh_token,
            })
        except AuthenticationError:
            current = self.token_manager.tokens
            if current is not None and current.refresh_token == tokens.refresh_token:
                self.token_manager.clear()
            raise
        logger.info("OAuth access token refreshed")
        return self._store(token_info, fallback_refresh=tokens.refresh_token)

    def _store(
        self,
        token_info: Dict[str, Any],
        fallback_refresh: Optional[str] = None,
    ) -> TokenSet:
        access_token = token_info.get("access_token")
        if not access_token:
            raise AuthenticationError("No access token received")
        return self.token_manager.set_tokens(
            access_token,
            token_info.get("refresh_token") or fallback_refresh,
            token_info.get("expires_in"),
        )

    async def _request_token(self, form: Dict[str, str]) -> Dict[str, Any]:
        from ..graphql.http_client import get_http_client

        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            **form,
        }
        response = await get_http_client().post(
            TOKEN_URL,
            data=data,
            headers={"Accept": "application/json"},
        )
        if response.status_code != 200:
            raise AuthenticationError(
                f"Token request failed: HTTP {response.status_code} {response.text[:200]}"
            )
        return response.json()
