"""Handlers for the OAuth tools.

These run before any credential exists, so the dispatcher skips its
authentication check for them.
"""

import logging

from ..auth.base import AuthProvider
from ..auth.oauth import OAuthAuthProvider
from ..exceptions import ValidationError
from ..tools.arguments import AuthCallbackArguments, NoArguments

logger = logging.getLogger(__name__)


class AuthHandler:
    """The linear_auth and linear_auth_callback tools."""

    def __init__(self, provider: AuthProvider):
        self.provider = provider

    async def auth(self, args: NoArguments) -> str:
        if not isinstance(self.provider, OAuthAuthProvider):
            return (
                "Already authenticated with a personal access token; "
                "no OAuth flow is needed."
            )
        url = self.provider.get_authorization_url()
        return f"Please visit the following URL to authorize the application:\n{url}"

    async def auth_callback(self, args: AuthCallbackArguments) -> str:
        if not isinstance(self.provider, OAuthAuthProvider):
            raise ValidationError(
                "OAuth callback is only available when an OAuth client is configured"
            )
        await self.provider.handle_callback(args.code)
        logger.info("OAuth flow completed")
        return "Successfully authenticated with Linear"
