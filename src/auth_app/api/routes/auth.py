"""Authentication Routes

Purpose: Glue between the browser, the identity provider and the user store

Key Endpoints:
- POST /auth/login: Build an authorization URL for the frontend
- GET /auth/callback: Finish the login (code exchange or IdP-initiated login)
- GET /auth/me: Current user profile from the session cookie
- POST /auth/logout: Clear the session cookie
"""

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Query, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from pydantic import TypeAdapter, ValidationError

from auth_app.config.settings import Settings
from auth_app.core.auth import IdentityProvider, IdentityProviderError
from auth_app.domain.models import LoginRequest, LoginUrlResponse, session_user_id
from auth_app.infrastructure.auth.session_cookie import (
    SESSION_COOKIE_NAME,
    clear_session_cookie,
    set_session_cookie,
)
from auth_app.infrastructure.auth.user_store import UserRecordStore

router = APIRouter(prefix="/auth", tags=["authentication"])
logger = logging.getLogger(__name__)

USER_NOT_FOUND = "user not found"
CODE_NOT_FOUND = "code not found"

# A JSON null body decodes to no options, same as an empty body
_login_body = TypeAdapter(Optional[LoginRequest])


# Dependency injection functions
def get_app_settings(request: Request) -> Settings:
    """Get settings the app was built with"""
    return request.app.state.settings


def get_identity_provider(request: Request) -> IdentityProvider:
    """Get identity provider instance"""
    return request.app.state.identity_provider


def get_user_store(request: Request) -> UserRecordStore:
    """Get user store instance"""
    return request.app.state.user_store


# Authentication endpoints


@router.post("/login", response_model=LoginUrlResponse)
async def login(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Start a login

    Accepts an optional JSON body with connectionId, organizationId and email,
    and returns the authorization URL the browser should navigate to.
    """
    raw_body = await request.body()
    try:
        body = _login_body.validate_json(raw_body) if raw_body.strip() else None
    except ValidationError as e:
        message = e.errors()[0]["msg"]
        logger.warning(f"Rejected login request body: {message}")
        return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)
    if body is None:
        body = LoginRequest()

    options = body.to_authorization_options()
    try:
        url = await provider.get_authorization_url(settings.auth_redirect_uri, options)
    except IdentityProviderError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e)},
        )

    logger.info(
        "Login initiated",
        extra={
            "connection_id": options.connection_id,
            "organization_id": options.organization_id,
        },
    )
    return LoginUrlResponse(url=url)


@router.get("/callback")
async def callback(
    code: Optional[str] = Query(None, description="Authorization code from provider"),
    error_description: Optional[str] = Query(None, description="Error reported by provider"),
    idp_initiated_login: Optional[str] = Query(None, description="IdP-initiated login token"),
    settings: Settings = Depends(get_app_settings),
    provider: IdentityProvider = Depends(get_identity_provider),
    user_store: UserRecordStore = Depends(get_user_store),
):
    """Handle the identity provider redirect

    Checked in order: provider error, IdP-initiated login, authorization code.
    """
    if error_description:
        logger.warning(f"Login failed at identity provider: {error_description}")
        return PlainTextResponse(error_description, status_code=status.HTTP_400_BAD_REQUEST)

    if idp_initiated_login:
        try:
            claims = await provider.get_idp_initiated_login_claims(idp_initiated_login)
            url = await provider.get_authorization_url(
                settings.auth_redirect_uri, claims.to_authorization_options()
            )
        except IdentityProviderError as e:
            return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"IdP-initiated login redirected (organization: {claims.organization_id})")
        return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)

    if not code:
        return PlainTextResponse(CODE_NOT_FOUND, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        result = await provider.authenticate_with_code(code, settings.auth_redirect_uri)
        user_id = session_user_id(result.composite_user_id)
        if not user_id:
            raise IdentityProviderError("authenticated user has no id")
    except IdentityProviderError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    user_store.set(user_id, result.user)

    response = RedirectResponse(
        url=f"{settings.public_base_url}/profile",
        status_code=status.HTTP_302_FOUND,
    )
    set_session_cookie(response, user_id)

    logger.info(f"Login successful for user {user_id}")
    return response


@router.get("/me")
async def me(
    uid: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME),
    user_store: UserRecordStore = Depends(get_user_store),
):
    """Get the profile of the user owning the session cookie"""
    if not uid:
        return PlainTextResponse(USER_NOT_FOUND, status_code=status.HTTP_404_NOT_FOUND)

    profile = user_store.get(uid)
    if profile is None:
        logger.debug(f"No user record for session user {uid}")
        return PlainTextResponse(USER_NOT_FOUND, status_code=status.HTTP_404_NOT_FOUND)

    return JSONResponse(content=profile)


@router.post("/logout")
async def logout(settings: Settings = Depends(get_app_settings)):
    """Clear the session cookie and return to the app root

    The server-side user record is left in place.
    """
    response = RedirectResponse(
        url=f"{settings.public_base_url}/",
        status_code=status.HTTP_302_FOUND,
    )
    clear_session_cookie(response)

    logger.info("User logged out")
    return response
