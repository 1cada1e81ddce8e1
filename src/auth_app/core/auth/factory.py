"""Identity provider factory.

Builds the identity provider from application settings.
"""

import logging

from auth_app.config.settings import Settings

from .provider import IdentityProvider

logger = logging.getLogger(__name__)


def create_identity_provider(settings: Settings) -> IdentityProvider:
    """Create the configured identity provider.

    Args:
        settings: Application settings with the Scalekit credentials

    Returns:
        Configured IdentityProvider instance

    Raises:
        ImportError: If scalekit-sdk-python is not installed
    """
    # Defer import so the app can be built with a fake provider without the SDK
    try:
        from .scalekit_provider import ScalekitIdentityProvider
    except ImportError as e:
        raise ImportError(
            "Scalekit provider requires scalekit-sdk-python: pip install scalekit-sdk-python"
        ) from e

    provider = ScalekitIdentityProvider(
        environment_url=settings.scalekit_env_url,
        client_id=settings.scalekit_client_id,
        client_secret=settings.scalekit_client_secret,
    )
    logger.info(f"Identity provider initialized: {provider.__class__.__name__} ({settings.scalekit_env_url})")
    return provider
