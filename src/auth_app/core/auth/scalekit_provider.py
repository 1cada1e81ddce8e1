"""Scalekit identity provider.

Adapts the synchronous scalekit-sdk-python client to the async
IdentityProvider interface. SDK calls run in the threadpool so a slow
identity provider never blocks the event loop.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from scalekit import ScalekitClient
from scalekit.common.scalekit import AuthorizationUrlOptions, CodeAuthenticationOptions
from starlette.concurrency import run_in_threadpool

from .provider import (
    AuthenticationResult,
    AuthorizationOptions,
    IdentityProvider,
    IdentityProviderError,
    IdpInitiatedLoginClaims,
)

logger = logging.getLogger(__name__)


class ScalekitIdentityProvider(IdentityProvider):
    """Identity provider backed by the Scalekit SDK.

    Example Configuration:
        SCALEKIT_ENV_URL=https://acme.scalekit.dev
        SCALEKIT_CLIENT_ID=skc_xxx
        SCALEKIT_CLIENT_SECRET=test_xxx
    """

    def __init__(
        self,
        environment_url: str,
        client_id: str,
        client_secret: str,
        client: Optional[Any] = None
    ):
        """Initialize Scalekit provider.

        Args:
            environment_url: Scalekit environment URL
            client_id: Scalekit client ID
            client_secret: Scalekit client secret
            client: Pre-built SDK client (tests)
        """
        self.environment_url = environment_url
        if client is None:
            client = ScalekitClient(environment_url, client_id, client_secret)
        self._client = client

    async def get_authorization_url(
        self,
        redirect_uri: str,
        options: AuthorizationOptions
    ) -> str:
        sdk_options = AuthorizationUrlOptions()
        if options.connection_id:
            sdk_options.connection_id = options.connection_id
        if options.organization_id:
            sdk_options.organization_id = options.organization_id
        if options.login_hint:
            sdk_options.login_hint = options.login_hint

        try:
            url = await run_in_threadpool(
                self._client.get_authorization_url,
                redirect_uri=redirect_uri,
                options=sdk_options,
            )
        except Exception as e:
            logger.error(f"Scalekit authorization URL failed: {e}")
            raise IdentityProviderError(str(e)) from e

        return str(url)

    async def authenticate_with_code(
        self,
        code: str,
        redirect_uri: str
    ) -> AuthenticationResult:
        try:
            response = await run_in_threadpool(
                self._client.authenticate_with_code,
                code,
                redirect_uri,
                CodeAuthenticationOptions(),
            )
        except Exception as e:
            logger.error(f"Scalekit code exchange failed: {e}")
            raise IdentityProviderError(str(e)) from e

        user = response.get("user") if isinstance(response, dict) else getattr(response, "user", None)
        if not isinstance(user, dict):
            raise IdentityProviderError("authentication response did not include a user profile")

        return AuthenticationResult(user=user)

    async def get_idp_initiated_login_claims(self, token: str) -> IdpInitiatedLoginClaims:
        try:
            claims = await run_in_threadpool(self._client.get_idp_initiated_login_claims, token)
        except Exception as e:
            logger.error(f"Scalekit IdP-initiated login token rejected: {e}")
            raise IdentityProviderError(str(e)) from e

        # The SDK returns the decoded JWT payload as a dict
        if not isinstance(claims, Mapping):
            raise IdentityProviderError("IdP-initiated login token did not decode to claims")

        return IdpInitiatedLoginClaims(
            connection_id=claims.get("connection_id"),
            organization_id=claims.get("organization_id"),
            login_hint=claims.get("login_hint"),
        )
