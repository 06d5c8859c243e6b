# tests/test_decoder.py
import json

import jwt
import pytest
from jwt.utils import base64url_encode

from jwt_inspect import decode
from jwt_inspect.adapters.clock import FixedClock
from jwt_inspect.adapters.compact.decoder import CompactTokenDecoder
from jwt_inspect.domain.constants import EXPECTED_PART_COUNT
from jwt_inspect.domain.exceptions import (
    DecodeError,
    InvalidBase64UrlError,
    InvalidJSONError,
    InvalidPartCountError,
)
from jwt_inspect.domain.value_objects import thaw_json

SECRET = "a-string-secret-at-least-256-bits-long"

EXAMPLE_TOKEN = "eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiIxMjM0NTY3ODkwIn0.signature"


def _segment(text: str) -> str:
    return base64url_encode(text.encode("utf-8")).decode("ascii")


HEADER = _segment('{"alg":"HS256"}')
PAYLOAD = _segment('{"sub":"1234567890"}')


def test_decode_example_token():
    token = decode(EXAMPLE_TOKEN)

    assert token.header == {"alg": "HS256"}
    assert token.payload == {"sub": "1234567890"}
    assert token.subject == "1234567890"
    assert token.signature == "signature"
    assert token.raw == EXAMPLE_TOKEN


def test_round_trip_with_pyjwt():
    payload = {
        "sub": "user-1",
        "aud": ["api", "web"],
        "exp": 2000000000,
        "nested": {"roles": ["a", "b"], "active": True, "score": 1.5},
    }
    headers = {"kid": "key-1"}
    encoded = jwt.encode(payload, SECRET, algorithm="HS256", headers=headers)

    token = decode(encoded)

    assert thaw_json(token.payload) == payload
    assert token.header == {"alg": "HS256", "typ": "JWT", "kid": "key-1"}
    assert token.signature == encoded.rsplit(".", 1)[1]
    assert token.audience == ["api", "web"]
    assert jwt.get_unverified_header(encoded) == dict(token.header)


def test_decoded_nested_values_are_read_only():
    encoded = jwt.encode(
        {"aud": ["api"], "ctx": {"roles": ["reader"]}},
        SECRET,
        algorithm="HS256",
    )
    token = decode(encoded)

    with pytest.raises(AttributeError):
        token.claim("aud").value.append("other")
    with pytest.raises(TypeError):
        token.payload["ctx"]["roles"] = ["admin"]
    with pytest.raises(AttributeError):
        token.payload["ctx"]["roles"].append("admin")

    token.audience.append("other")

    assert token.audience == ["api"]
    assert thaw_json(token.payload) == {"aud": ["api"], "ctx": {"roles": ["reader"]}}


def test_equal_tokens_hash_alike():
    first, second = decode(EXAMPLE_TOKEN), decode(EXAMPLE_TOKEN)

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_unsigned_token_has_no_signature():
    encoded = jwt.encode({"sub": "anonymous"}, None, algorithm="none")

    token = decode(encoded)

    assert encoded.endswith(".")
    assert token.signature is None
    assert token.is_unsigned
    assert token.subject == "anonymous"


def test_padded_segments_are_accepted():
    padded_header = HEADER + "=" * (-len(HEADER) % 4)
    padded_payload = PAYLOAD + "=" * (-len(PAYLOAD) % 4)
    assert padded_header != HEADER or padded_payload != PAYLOAD

    token = decode(f"{padded_header}.{padded_payload}.sig")

    assert token.header == {"alg": "HS256"}
    assert token.payload == {"sub": "1234567890"}


@pytest.mark.parametrize(
    "raw, count",
    [
        ("abc.def", 2),
        ("", 1),
        ("abc", 1),
        ("a.b.c.d", 4),
        ("a.b.c.d.e", 5),
        ("....", 5),
    ],
)
def test_invalid_part_count(raw, count):
    with pytest.raises(InvalidPartCountError) as exc_info:
        decode(raw)

    assert exc_info.value.count == count
    assert exc_info.value.token == raw
    assert f"has {count} parts" in str(exc_info.value)


def test_invalid_part_count_message():
    with pytest.raises(InvalidPartCountError) as exc_info:
        decode("abc.def")

    assert str(exc_info.value) == (
        "Malformed jwt token abc.def has 2 parts when it should have 3 parts"
    )
    assert str(exc_info.value).endswith(f"should have {EXPECTED_PART_COUNT} parts")


@pytest.mark.parametrize("bad", ["a", "ab*c", "eyJ+", "eyJ/", "e=yJ", "abcde"])
def test_invalid_base64_header(bad):
    with pytest.raises(InvalidBase64UrlError) as exc_info:
        decode(f"{bad}.{PAYLOAD}.sig")

    assert exc_info.value.segment == bad
    assert exc_info.value.part == "header"
    assert bad in str(exc_info.value)


def test_invalid_base64_payload():
    with pytest.raises(InvalidBase64UrlError) as exc_info:
        decode(f"{HEADER}.not!base64.sig")

    assert exc_info.value.segment == "not!base64"
    assert exc_info.value.part == "payload"


@pytest.mark.parametrize(
    "text",
    ["[1, 2]", '"string"', "42", "true", "null", "{not json", "", '{"a": NaN}', '{"a": Infinity}'],
)
def test_invalid_json_payload(text):
    segment = _segment(text)

    with pytest.raises(InvalidJSONError) as exc_info:
        decode(f"{HEADER}.{segment}.sig")

    assert exc_info.value.segment == segment
    assert exc_info.value.part == "payload"
    assert str(exc_info.value).endswith(segment)


def test_invalid_json_header():
    segment = _segment("[]")

    with pytest.raises(InvalidJSONError) as exc_info:
        decode(f"{segment}.{PAYLOAD}.sig")

    assert exc_info.value.part == "header"


def test_invalid_utf8_is_invalid_json():
    segment = base64url_encode(b"\xff\xfe{}").decode("ascii")

    with pytest.raises(InvalidJSONError):
        decode(f"{HEADER}.{segment}.sig")


def test_deeply_nested_json_is_invalid_json():
    segment = _segment("[" * 100000 + "]" * 100000)

    with pytest.raises(InvalidJSONError):
        decode(f"{HEADER}.{segment}.sig")


def test_header_is_checked_before_payload():
    with pytest.raises(InvalidBase64UrlError) as exc_info:
        decode("a.b.c")

    assert exc_info.value.part == "header"


def test_decode_errors_share_a_base_class():
    for raw in ("abc.def", "a.b.c", f"{HEADER}.{_segment('[]')}.sig"):
        with pytest.raises(DecodeError):
            decode(raw)


def test_decoder_passes_clock_to_token():
    clock = FixedClock.at_timestamp(1000000000)
    encoded = jwt.encode({"exp": 1000000000}, SECRET, algorithm="HS256")

    token = CompactTokenDecoder(clock=clock).decode(encoded)

    assert token.clock is clock
    assert token.expired
    assert not decode(encoded, clock=FixedClock.at_timestamp(999999999)).expired


def test_decoder_does_not_trim_input():
    with pytest.raises(InvalidBase64UrlError):
        decode(f" {EXAMPLE_TOKEN}")


def test_empty_payload_object():
    token = decode(f"{HEADER}.{_segment('{}')}.sig")

    assert token.payload == {}
    assert not token.expired
