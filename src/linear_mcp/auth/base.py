"""Credential provider interface consumed by the execution client."""

from abc import ABC, abstractmethod


class AuthProvider(ABC):
    """Supplies the credential for each outbound request."""

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Short name of the credential kind ("pat" or "oauth")."""
        pass

    @abstractmethod
    async def get_access_token(self) -> str:
        """Return a usable access token, refreshing it if needed."""
        pass

    @abstractmethod
    def is_authenticated(self) -> bool:
        pass

    async def authorization_header(self) -> str:
        """Value for the Authorization header."""
        return f"Bearer {await self.get_access_token()}"
