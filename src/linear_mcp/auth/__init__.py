"""Credential providers for the Linear API."""

from .base import AuthProvider
from .factory import create_auth_provider
from .oauth import OAuthAuthProvider, TokenManager, TokenSet
from .pat import PATAuthProvider

__all__ = [
    "AuthProvider",
    "OAuthAuthProvider",
    "PATAuthProvider",
    "TokenManager",
    "TokenSet",
    "create_auth_provider",
]
