"""Session cookie helpers.

The browser holds only the session user id, in an HttpOnly `uid` cookie.
"""

from fastapi import Response

SESSION_COOKIE_NAME = "uid"
SESSION_COOKIE_PATH = "/"
SESSION_COOKIE_SAMESITE = "lax"


def set_session_cookie(response: Response, user_id: str) -> None:
    """Issue the session cookie carrying user_id"""
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=user_id,
        path=SESSION_COOKIE_PATH,
        httponly=True,
        samesite=SESSION_COOKIE_SAMESITE,
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie immediately (empty value, Max-Age=0)"""
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path=SESSION_COOKIE_PATH,
        httponly=True,
        samesite=SESSION_COOKIE_SAMESITE,
    )
