"""Tests for farm listing cursor tokens."""

import base64
import json
import re
from datetime import UTC, datetime, timedelta, timezone

import pytest

from csa_market.models.contracts import SortKey
from csa_market.utils.pagination import MAX_CURSOR_LENGTH, decode_cursor, encode_cursor


def _b64(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode()).decode().rstrip("=")


def _payload(token: str) -> dict:
    padded = token + "=" * (-len(token) % 4)
    return json.loads(base64.urlsafe_b64decode(padded))


class TestRoundTrip:
    @pytest.mark.parametrize(
        "farm_id",
        [
            "farm_abc123",
            "farm|with|pipes",
            'farm "quoted" \\ backslash',
            "ферма_🍅",
            "a=b&c=d",
            "x",
        ],
    )
    def test_pair_survives_round_trip(self, farm_id):
        created_at = datetime(2025, 6, 19, 10, 30, 0, 123456)

        decoded = decode_cursor(encode_cursor(created_at, farm_id))

        assert decoded is not None
        assert decoded.key == (created_at, farm_id)

    def test_whole_second_timestamp(self):
        created_at = datetime(2024, 1, 1)

        assert decode_cursor(encode_cursor(created_at, "farm_1")).key == (created_at, "farm_1")

    def test_aware_timestamp_normalized_to_naive_utc(self):
        aware = datetime(2025, 6, 19, 12, 0, 0, 5, tzinfo=timezone(timedelta(hours=2)))

        decoded = decode_cursor(encode_cursor(aware, "farm_1"))

        assert decoded.created_at == datetime(2025, 6, 19, 10, 0, 0, 5)
        assert decoded.created_at.tzinfo is None

    def test_alternate_sort_carries_value(self):
        created_at = datetime(2025, 6, 19, 10, 30)

        decoded = decode_cursor(encode_cursor(created_at, "farm_1", sort=SortKey.PRICE, value=30.5))

        assert decoded.sort is SortKey.PRICE
        assert decoded.value == 30.5
        assert decoded.key == (created_at, "farm_1")

    def test_name_sort_value_stays_a_string(self):
        token = encode_cursor(datetime(2025, 1, 1), "farm_1", sort=SortKey.NAME, value="42")

        assert decode_cursor(token).value == "42"


class TestTokenShape:
    def test_deterministic(self):
        created_at = datetime(2025, 6, 19, 10, 30)

        assert encode_cursor(created_at, "farm_1") == encode_cursor(created_at, "farm_1")

    def test_url_safe(self):
        token = encode_cursor(datetime(2025, 6, 19, 10, 30), "farm/?+&=🍅" * 5)

        assert re.fullmatch(r"[A-Za-z0-9_-]+", token)

    def test_default_order_embeds_only_the_pair(self):
        token = encode_cursor(datetime(2025, 6, 19, 10, 30), "farm_1", sort=SortKey.DISTANCE)

        assert set(_payload(token)) == {"created_at", "id"}


class TestMalformedTokens:
    @pytest.mark.parametrize(
        "token",
        [
            "",
            "not-a-cursor",
            "!!!!",
            "é",
            _b64("{}"),
            _b64("[]"),
            _b64("null"),
            _b64('"just a string"'),
            _b64("2025-06-19T10:30:00.000Z|farm_1"),
            _b64('{"created_at": "yesterday", "id": "farm_1"}'),
            _b64('{"created_at": "2025-06-19T10:30:00", "id": ""}'),
            _b64('{"created_at": "2025-06-19T10:30:00"}'),
            _b64('{"created_at": "2025-06-19T10:30:00", "id": "farm_1", "sort": "rating"}'),
            _b64('{"created_at": "2025-06-19T10:30:00", "id": "farm_1", "sort": "bogus", "value": 1}'),
            _b64('{"created_at": "2025-06-19T10:30:00", "id": "farm_1", "sort": "price", "value": "x"}'),
            _b64("[" * 3000),
            _b64('{"created_at": "2025-06-19T10:30:00", "id": "farm_\\u0000"}'),
            _b64('{"created_at": "2025-06-19T10:30:00", "id": "farm_1", "sort": "name", "value": "A\\u0000"}'),
        ],
    )
    def test_returns_none(self, token):
        assert decode_cursor(token) is None

    def test_oversized_token_returns_none(self):
        assert decode_cursor(_b64("[" * 100_000)) is None
        assert decode_cursor("A" * (MAX_CURSOR_LENGTH + 1)) is None

    def test_non_string_input_returns_none(self):
        assert decode_cursor(None) is None
        assert decode_cursor(12345) is None

    def test_utc_suffix_accepted(self):
        decoded = decode_cursor(_b64('{"created_at": "2025-06-19T10:30:00Z", "id": "farm_1"}'))

        assert decoded.key == (datetime(2025, 6, 19, 10, 30), "farm_1")
        assert decoded.created_at.tzinfo is None


def test_encode_accepts_utc_aware_now():
    now = datetime.now(UTC)

    decoded = decode_cursor(encode_cursor(now, "farm_1"))

    assert decoded.created_at == now.replace(tzinfo=None)
