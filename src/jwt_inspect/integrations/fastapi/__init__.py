from __future__ import annotations

from typing import Optional

from .deps import FastAPIInspection
from .security import DEFAULT_COOKIE_NAME, bearer_scheme, extract_token_from_request
from ..common.inspect_factory import InspectDependencies, create_inspect_dependencies
from ...domain.ports import Clock


def create_fastapi_inspection(
    *,
    clock: Optional[Clock] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> FastAPIInspection:
    """
    High-level helper for FastAPI apps:

    - Creates InspectDependencies (compact decoder + clock)
    - Wraps them in FastAPIInspection, exposing dependencies like:

        fastapi_inspection.get_token
        fastapi_inspection.get_optional_token
        fastapi_inspection.get_inspection
    """
    inspector: InspectDependencies = create_inspect_dependencies(clock=clock)
    return FastAPIInspection(inspector=inspector, cookie_name=cookie_name)


__all__ = [
    "FastAPIInspection",
    "bearer_scheme",
    "create_fastapi_inspection",
    "extract_token_from_request",
]
