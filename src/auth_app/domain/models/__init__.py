"""Domain models for Auth App"""

from auth_app.domain.models.auth import (
    LoginRequest,
    LoginUrlResponse,
    session_user_id,
)

__all__ = [
    "LoginRequest",
    "LoginUrlResponse",
    "session_user_id",
]
