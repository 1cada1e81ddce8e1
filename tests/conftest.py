"""
Pytest configuration and fixtures for auth app tests.

Provides fixtures for:
- Settings
- Fake identity provider (stands in for the Scalekit SDK)
- User record store
- Test client
"""

import asyncio
from typing import AsyncGenerator, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from auth_app.config.settings import Settings
from auth_app.core.auth import (
    AuthenticationResult,
    AuthorizationOptions,
    IdentityProvider,
    IdentityProviderError,
    IdpInitiatedLoginClaims,
)
from auth_app.infrastructure.auth.user_store import UserRecordStore
from auth_app.main import create_app

PUBLIC_HOST = "http://localhost:3000"
REDIRECT_URI = "http://localhost:8080/auth/callback"
AUTHORIZE_ENDPOINT = "https://acme.scalekit.test/oauth/authorize"


class FakeIdentityProvider(IdentityProvider):
    """In-memory identity provider.

    Codes and IdP-initiated tokens are registered by the tests. Setting
    fail_with makes every call raise IdentityProviderError with that message.
    """

    def __init__(self):
        self.profiles_by_code: Dict[str, dict] = {}
        self.claims_by_token: Dict[str, IdpInitiatedLoginClaims] = {}
        self.fail_with: Optional[str] = None
        self.authorization_calls: List[Tuple[str, AuthorizationOptions]] = []
        self.code_exchanges: List[Tuple[str, str]] = []

    async def get_authorization_url(self, redirect_uri: str, options: AuthorizationOptions) -> str:
        if self.fail_with:
            raise IdentityProviderError(self.fail_with)
        self.authorization_calls.append((redirect_uri, options))
        params = {"redirect_uri": redirect_uri, **options.model_dump(exclude_none=True)}
        return f"{AUTHORIZE_ENDPOINT}?{urlencode(params)}"

    async def authenticate_with_code(self, code: str, redirect_uri: str) -> AuthenticationResult:
        if self.fail_with:
            raise IdentityProviderError(self.fail_with)
        self.code_exchanges.append((code, redirect_uri))
        # Yield so concurrent callbacks interleave
        await asyncio.sleep(0)
        if code not in self.profiles_by_code:
            raise IdentityProviderError("invalid_grant: authorization code is invalid")
        return AuthenticationResult(user=self.profiles_by_code[code])

    async def get_idp_initiated_login_claims(self, token: str) -> IdpInitiatedLoginClaims:
        if self.fail_with:
            raise IdentityProviderError(self.fail_with)
        if token not in self.claims_by_token:
            raise IdentityProviderError("invalid idp initiated login token")
        return self.claims_by_token[token]


def make_profile(composite_id: str, email: str, name: str = "") -> dict:
    """Build a provider user profile"""
    return {
        "id": composite_id,
        "email": email,
        "name": name or email.split("@")[0].title(),
        "email_verified": True,
    }


@pytest.fixture
def settings() -> Settings:
    """Settings for tests (no .env lookup)"""
    return Settings(
        _env_file=None,
        scalekit_env_url="https://acme.scalekit.test",
        scalekit_client_id="skc_test",
        scalekit_client_secret="test_secret",
        auth_redirect_uri=REDIRECT_URI,
        host=PUBLIC_HOST,
        log_level="DEBUG",
    )


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    """Fake identity provider with alice and bob registered"""
    provider = FakeIdentityProvider()
    provider.profiles_by_code["code-alice"] = make_profile("org1;alice", "alice@acme.com")
    provider.profiles_by_code["code-bob"] = make_profile("org1;bob", "bob@acme.com")
    return provider


@pytest.fixture
def user_store() -> UserRecordStore:
    """Fresh user store per test"""
    return UserRecordStore()


@pytest.fixture
def app(settings, identity_provider, user_store):
    """Application wired to the fake provider"""
    return create_app(settings, identity_provider=identity_provider, user_store=user_store)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
