"""Abstract identity provider interface.

This module defines the contract between the auth routes and the external
identity-provider SDK. Route handlers only ever talk to an IdentityProvider,
so the SDK stays an opaque boundary and tests can plug in a fake.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class IdentityProviderError(Exception):
    """Raised when the identity provider fails to build a URL, exchange a code or parse claims.

    The message is the provider's own error text and is passed through to the client.
    """


class AuthorizationOptions(BaseModel):
    """Optional parameters that shape the authorization request.

    Attributes:
        connection_id: Force a specific SSO connection
        organization_id: Route the login to an organization's connection
        login_hint: Email used for home-realm discovery
    """
    connection_id: Optional[str] = None
    organization_id: Optional[str] = None
    login_hint: Optional[str] = None


class IdpInitiatedLoginClaims(BaseModel):
    """Claims carried by an IdP-initiated login token."""
    connection_id: Optional[str] = None
    organization_id: Optional[str] = None
    login_hint: Optional[str] = None

    def to_authorization_options(self) -> AuthorizationOptions:
        return AuthorizationOptions(
            connection_id=self.connection_id,
            organization_id=self.organization_id,
            login_hint=self.login_hint,
        )


class AuthenticationResult(BaseModel):
    """Result of a successful code exchange.

    Attributes:
        user: Provider user profile, kept exactly as the provider returned it
    """
    user: Dict[str, Any] = Field(default_factory=dict)

    @property
    def composite_user_id(self) -> str:
        """Provider user id of the form '<prefix>;<localId>'"""
        return str(self.user.get("id") or self.user.get("sub") or "")


class IdentityProvider(ABC):
    """Interface for the external identity provider.

    Implementations must raise IdentityProviderError for every failure so that
    the routes can map it to a 5xx response.
    """

    @abstractmethod
    async def get_authorization_url(
        self,
        redirect_uri: str,
        options: AuthorizationOptions
    ) -> str:
        """Build the URL the browser is sent to for authentication.

        Args:
            redirect_uri: Application callback address
            options: Connection / organization / login hint selectors

        Returns:
            Authorization URL

        Raises:
            IdentityProviderError: If the URL cannot be built
        """
        pass

    @abstractmethod
    async def authenticate_with_code(
        self,
        code: str,
        redirect_uri: str
    ) -> AuthenticationResult:
        """Exchange an authorization code for the authenticated user.

        Args:
            code: Authorization code from the callback
            redirect_uri: Same redirect_uri used to build the authorization URL

        Returns:
            AuthenticationResult with the user profile

        Raises:
            IdentityProviderError: If the exchange fails
        """
        pass

    @abstractmethod
    async def get_idp_initiated_login_claims(self, token: str) -> IdpInitiatedLoginClaims:
        """Validate an IdP-initiated login token and return its claims.

        Raises:
            IdentityProviderError: If the token is invalid
        """
        pass
