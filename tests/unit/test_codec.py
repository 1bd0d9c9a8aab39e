from __future__ import annotations

import base64
import uuid
from datetime import UTC, date, datetime, time
from decimal import Decimal
from typing import Any

import pytest

from config.core import PaginationConfig
from keyset.app.contracts import exceptions as exc
from keyset.app.contracts.pagination import Cursor
from keyset.app.pagination import CursorCodec


@pytest.mark.parametrize(
    "value",
    [
        None,
        True,
        42,
        3.5,
        "hello, world",
        datetime(2025, 1, 15, 10, 30, tzinfo=UTC),
        date(2025, 1, 15),
        time(10, 30, 15),
        uuid.UUID("0192d4e0-5c9c-7000-8000-000000000001"),
        Decimal("19.99"),
    ],
)
def test_cursor_value_keeps_its_type(value: Any) -> None:
    codec = CursorCodec()

    cursor = codec.decode(codec.encode_cursor(Cursor(value=value, id=16)))

    assert cursor == Cursor(value=value, id=16)
    assert type(cursor.value) is type(value)


def test_uuid_and_string_identities() -> None:
    codec = CursorCodec()
    uid = uuid.UUID("0192d4e0-5c9c-7000-8000-00000000abcd")

    assert codec.decode(codec.encode_cursor(Cursor(value=None, id=uid))).id == uid
    assert codec.decode(codec.encode_cursor(Cursor(value=None, id="post-7"))).id == "post-7"


def test_token_is_url_safe_without_padding() -> None:
    token = CursorCodec().encode({"id": 12345, "title": "a" * 37}, "title")

    assert "=" not in token
    assert "+" not in token
    assert "/" not in token


def test_encode_reads_mappings_and_objects() -> None:
    class Row:
        id = 3
        score = 10

    codec = CursorCodec()

    assert codec.decode(codec.encode(Row(), "score")) == Cursor(value=10, id=3)
    assert codec.decode(codec.encode({"id": 3, "score": 10}, "score")) == Cursor(value=10, id=3)


def test_missing_sort_value_is_stored_as_null() -> None:
    codec = CursorCodec()

    assert codec.decode(codec.encode({"id": 3}, "score")) == Cursor(value=None, id=3)


def test_record_without_identity_cannot_be_encoded() -> None:
    with pytest.raises(exc.CursorEncodeError):
        CursorCodec().encode({"title": "orphan"})


def test_custom_identity_field() -> None:
    codec = CursorCodec(id_field="pk")

    assert codec.decode(codec.encode({"pk": 9})).id == 9


@pytest.mark.parametrize(
    "token",
    [
        "not-base64!!",
        base64.urlsafe_b64encode(b"not json").decode().rstrip("="),
        base64.urlsafe_b64encode(b'{"value": 1}').decode().rstrip("="),
        base64.urlsafe_b64encode(b'{"id": 1, "id_type": "alien"}').decode().rstrip("="),
        base64.urlsafe_b64encode(b'{"id": "x", "id_type": "int"}').decode().rstrip("="),
        base64.urlsafe_b64encode(b'{"id": 1, "id_type": "bool"}').decode().rstrip("="),
        base64.urlsafe_b64encode(b'{"id": "", "id_type": "str"}').decode().rstrip("="),
        base64.urlsafe_b64encode(
            b'{"id": 1, "id_type": "int", "value": "yesterday", "value_type": "datetime"}'
        ).decode().rstrip("="),
        "ünïcödé",
        "",
    ],
)
def test_malformed_tokens_are_rejected(token: str) -> None:
    with pytest.raises(exc.InvalidCursorError) as e:
        CursorCodec().decode(token)

    assert e.value.raw_code == "invalid_cursor"


def test_signed_cursor_round_trip() -> None:
    codec = CursorCodec(secret="s3cret")
    token = codec.encode({"id": 5, "score": 7}, "score")

    assert codec.is_signed
    assert "." in token
    assert codec.decode(token) == Cursor(value=7, id=5)


def test_tampered_signed_cursor_is_rejected() -> None:
    codec = CursorCodec(secret="s3cret")
    payload, _, signature = codec.encode({"id": 5}).partition(".")
    forged, _, _ = CursorCodec(secret="other").encode({"id": 500}).partition(".")

    with pytest.raises(exc.InvalidCursorError):
        codec.decode(f"{forged}.{signature}")
    with pytest.raises(exc.InvalidCursorError):
        codec.decode(payload)
    with pytest.raises(exc.InvalidCursorError):
        codec.decode(f"{payload}.{signature[::-1]}x")


def test_signature_size_bounds() -> None:
    assert len(CursorCodec(secret="k", signature_size=32).encode({"id": 1}).split(".")[1]) == 43

    with pytest.raises(ValueError):
        CursorCodec(secret="k", signature_size=33)


def test_codec_from_config() -> None:
    codec = CursorCodec.from_config(PaginationConfig(id_field="pk", cursor_secret=""))

    assert codec.id_field == "pk"
    assert not codec.is_signed
    assert CursorCodec.from_config(PaginationConfig(cursor_secret="k")).is_signed
