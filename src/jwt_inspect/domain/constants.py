from enum import Enum


class RegisteredClaim(Enum):
    EXPIRES_AT = "exp"
    ISSUER = "iss"
    SUBJECT = "sub"
    AUDIENCE = "aud"
    ISSUED_AT = "iat"
    NOT_BEFORE = "nbf"
    IDENTIFIER = "jti"


class HeaderParameter(Enum):
    ALGORITHM = "alg"
    TOKEN_TYPE = "typ"
    KEY_ID = "kid"


EXPECTED_PART_COUNT = 3
UNSIGNED_ALGORITHM = "none"
