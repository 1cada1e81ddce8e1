"""Identity provider abstraction layer.

The external identity SDK is reached only through IdentityProvider:
- scalekit: Scalekit SSO (production)
"""

from .factory import create_identity_provider
from .provider import (
    AuthenticationResult,
    AuthorizationOptions,
    IdentityProvider,
    IdentityProviderError,
    IdpInitiatedLoginClaims,
)

__all__ = [
    "AuthenticationResult",
    "AuthorizationOptions",
    "IdentityProvider",
    "IdentityProviderError",
    "IdpInitiatedLoginClaims",
    "create_identity_provider",
]
