"""Select the auth provider from settings."""

import logging

from ..config import Settings
from ..exceptions import ConfigurationError
from .base import AuthProvider
from .oauth import OAuthAuthProvider
from .pat import PATAuthProvider

logger = logging.getLogger(__name__)


def create_auth_provider(settings: Settings) -> AuthProvider:
    """A personal access token wins over OAuth client credentials."""
    if settings.linear_access_token:
        logger.info("Using personal access token authentication")
        return PATAuthProvider(settings.linear_access_token)

    if settings.has_oauth_client():
        logger.info("Using OAuth authentication")
        return OAuthAuthProvider(
            client_id=settings.linear_client_id,
            client_secret=settings.linear_client_secret,
            redirect_uri=settings.linear_redirect_uri,
            scopes=settings.linear_scopes,
        )

    raise ConfigurationError(
        "No Linear credentials configured. Set LINEAR_ACCESS_TOKEN, or "
        "LINEAR_CLIENT_ID, LINEAR_CLIENT_SECRET and LINEAR_REDIRECT_URI."
    )
