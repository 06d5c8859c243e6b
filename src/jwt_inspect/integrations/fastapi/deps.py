from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from .security import DEFAULT_COOKIE_NAME, bearer_scheme, extract_token_from_request
from ..common.inspect_factory import InspectDependencies
from ...application.use_cases.inspect import TokenInspection
from ...domain.entities import DecodedToken
from ...domain.exceptions import DecodeError


@dataclass(slots=True)
class FastAPIInspection:
    """
    FastAPI integration for jwt_inspect.

    Dependencies decode the caller's token without verifying it. Use them
    for debugging or introspection endpoints, never as authentication.
    """

    inspector: InspectDependencies
    cookie_name: str = DEFAULT_COOKIE_NAME

    # ------------------------------------------------------------------ #
    # Dependencies
    # ------------------------------------------------------------------ #

    async def get_token(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> DecodedToken:
        """Dependency: require a decodable token."""
        token = extract_token_from_request(request, credentials, self.cookie_name)
        try:
            return self.inspector.decode(token)
        except DecodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            ) from exc

    async def get_optional_token(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> DecodedToken | None:
        """Dependency: decoded token, or None when missing or malformed."""
        try:
            token = extract_token_from_request(request, credentials, self.cookie_name)
        except HTTPException:
            return None

        try:
            return self.inspector.decode(token)
        except DecodeError:
            return None

    async def get_inspection(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> TokenInspection:
        """Dependency: inspection report for the caller's token."""
        decoded = await self.get_token(request, credentials)
        return self.inspector.inspect_use_case.inspect(decoded)
