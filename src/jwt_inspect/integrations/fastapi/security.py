from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..common.inspect_factory import strip_bearer

# Expose this so apps can plug it into dependencies if they want OpenAPI security
bearer_scheme = HTTPBearer(auto_error=False)

DEFAULT_COOKIE_NAME = "access_token"


def extract_token_from_request(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> str:
    """
    Extract a token from either:

      1. HTTP Bearer auth header (preferred)
      2. A cookie (e.g. 'access_token')

    Raises HTTPException(401) if no token is found.
    """
    if credentials is not None:
        token = (credentials.credentials or "").strip()
        if token:
            return token

    # raw header, in case the route did not use bearer_scheme
    auth_header = request.headers.get("Authorization")
    if auth_header:
        token = strip_bearer(auth_header)
        if token and token != auth_header.strip():
            return token

    cookie_token = request.cookies.get(cookie_name)
    if cookie_token:
        return strip_bearer(cookie_token)

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
    )
