"""
Session token extraction.

Every protected route takes its token from this one dependency:
`Authorization: Bearer <token>` first, then the OIDC session cookie,
then the password-login cookie.
"""

from typing import Annotated

from fastapi import Cookie, Depends, Header

from pokeadmin.models.failure import UnauthorizedError

BEARER_PREFIX = "Bearer "


def extract_token(
    authorization: Annotated[str | None, Header()] = None,
    session_token: Annotated[str | None, Cookie()] = None,
    password_access_token: Annotated[str | None, Cookie()] = None,
) -> str | None:
    """Return the caller's token, or None when no credential is present."""
    if authorization and authorization.startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX) :].strip()
        if token:
            return token
    return session_token or password_access_token or None


def require_token(token: Annotated[str | None, Depends(extract_token)]) -> str:
    """
    Dependency for routes that need a session.

    Raises:
        UnauthorizedError: If no token is present (401)
    """
    if not token:
        raise UnauthorizedError()
    return token


OptionalToken = Annotated[str | None, Depends(extract_token)]
RequiredToken = Annotated[str, Depends(require_token)]
