"""Personal access token authentication."""

from ..exceptions import ConfigurationError
from .base import AuthProvider


class PATAuthProvider(AuthProvider):
    """Static Linear API key.

    Linear expects personal API keys verbatim in the Authorization header,
    without the "Bearer" scheme used for OAuth tokens.
    """

    def __init__(self, token: str):
        if not token or not token.strip():
            raise ConfigurationError("A Linear personal access token is required")
        self._token = token.strip()

    @property
    def auth_type(self) -> str:
        return "pat"

    async def get_access_token(self) -> str:
        return self._token

    def is_authenticated(self) -> bool:
        return True

    async def authorization_header(self) -> str:
        return self._token
