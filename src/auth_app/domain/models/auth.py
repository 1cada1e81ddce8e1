"""Authentication API Models

Purpose: Request/response models for the auth endpoints

Key Components:
- LoginRequest: Optional selectors for the authorization request
- LoginUrlResponse: Authorization URL returned to the frontend
- session_user_id: Derives the session key from a provider user id
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from auth_app.core.auth.provider import AuthorizationOptions

COMPOSITE_ID_SEPARATOR = ";"


def session_user_id(composite_id: str) -> str:
    """Return the local part of a '<prefix>;<localId>' user id.

    The local part is everything after the last separator; an id without a
    separator is returned unchanged.
    """
    return composite_id.rsplit(COMPOSITE_ID_SEPARATOR, 1)[-1]


class LoginRequest(BaseModel):
    """Request model for login initiation

    All fields are optional; unknown fields are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    connection_id: Optional[str] = Field(
        None,
        alias="connectionId",
        description="SSO connection to use",
        examples=["conn_1234567890"],
    )
    organization_id: Optional[str] = Field(
        None,
        alias="organizationId",
        description="Organization whose connection should be used",
        examples=["org_1234567890"],
    )
    email: Optional[str] = Field(
        None,
        description="Login hint for home-realm discovery",
        examples=["jane@acme.com"],
    )

    def to_authorization_options(self) -> AuthorizationOptions:
        """Map the present, non-empty fields onto provider options"""
        return AuthorizationOptions(
            connection_id=self.connection_id or None,
            organization_id=self.organization_id or None,
            login_hint=self.email or None,
        )


class LoginUrlResponse(BaseModel):
    """Authorization URL the frontend should navigate to"""
    url: str
