"""
jwt_inspect

Decode and inspect JSON Web Tokens in compact serialization. Signatures
are kept verbatim and never verified.
"""

__version__ = "0.1.0"

from .domain.entities import DecodedToken
from .domain.constants import RegisteredClaim, HeaderParameter
from .domain.exceptions import (
    DecodeError,
    InvalidBase64UrlError,
    InvalidJSONError,
    InvalidPartCountError,
)
from .domain.value_objects import Claim
from .domain.ports import Clock, TokenDecoder

from .adapters.clock import SystemClock, FixedClock
from .adapters.compact.decoder import CompactTokenDecoder, decode

from .application.use_cases.inspect import InspectTokenUseCase, TokenInspection

__all__ = [
    "__version__",
    # domain core
    "DecodedToken",
    "Claim",
    "RegisteredClaim",
    "HeaderParameter",
    "Clock",
    "TokenDecoder",
    # exceptions
    "DecodeError",
    "InvalidBase64UrlError",
    "InvalidJSONError",
    "InvalidPartCountError",
    # adapters
    "CompactTokenDecoder",
    "SystemClock",
    "FixedClock",
    "decode",
    # use cases
    "InspectTokenUseCase",
    "TokenInspection",
]
