from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...adapters.clock import SystemClock
from ...adapters.compact.decoder import CompactTokenDecoder
from ...application.use_cases.inspect import InspectTokenUseCase, TokenInspection
from ...domain.entities import DecodedToken
from ...domain.ports import Clock, TokenDecoder

BEARER_PREFIX = "bearer "


def strip_bearer(value: str) -> str:
    """Drop surrounding whitespace and an optional `Bearer ` prefix."""
    token = value.strip()
    if token[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        token = token[len(BEARER_PREFIX):].strip()
    return token


@dataclass(slots=True)
class InspectDependencies:
    """
    Framework-agnostic inspection facade.

    Integrations (FastAPI, CLI) adapt this to their own dependency systems.
    """

    inspect_use_case: InspectTokenUseCase

    # --- Core operations --------------------------------------------------

    def decode(self, token: str) -> DecodedToken:
        """Token -> DecodedToken (or raise DecodeError)."""
        return self.inspect_use_case.decode(token)

    def inspect(self, token: str) -> TokenInspection:
        """Token -> TokenInspection (or raise DecodeError)."""
        return self.inspect_use_case.execute(token)


def create_inspect_dependencies(
        *,
        clock: Optional[Clock] = None,
        token_decoder: Optional[TokenDecoder] = None,
) -> InspectDependencies:
    """
    High-level factory:
    - builds a CompactTokenDecoder sharing the given clock
    - wires InspectTokenUseCase
    - returns an InspectDependencies facade.
    """
    clock = clock or SystemClock()
    decoder: TokenDecoder = token_decoder or CompactTokenDecoder(clock=clock)

    return InspectDependencies(
        inspect_use_case=InspectTokenUseCase(token_decoder=decoder, clock=clock),
    )
