"""Opaque cursor tokens for farm listing pagination.

A token is URL-safe base64 (without padding) over compact JSON. For the
default order the JSON holds only ``created_at`` and ``id``; alternate sorts
also carry ``sort`` and the row's effective sort ``value``. JSON string
escaping means ids may contain any character.
"""

import base64
import binascii
import json
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from csa_market.core.logging import get_logger
from csa_market.models.contracts import SortKey
from csa_market.models.pagination import PaginationCursorData

logger = get_logger(__name__)

# Longer tokens are rejected before decoding
MAX_CURSOR_LENGTH = 4096


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def encode_cursor(
    created_at: datetime,
    farm_id: str,
    *,
    sort: SortKey | None = None,
    value: float | str | None = None,
) -> str:
    """Encode the position of a farm into an opaque cursor token.

    Args:
        created_at: Created timestamp of the last item on the page
        farm_id: ID of the last item on the page
        sort: Alternate sort the page was served under, if any
        value: The item's effective sort value for that sort

    Returns:
        URL-safe cursor string
    """
    cursor_data: dict[str, Any] = {
        "created_at": _to_naive_utc(created_at).isoformat(timespec="microseconds"),
        "id": farm_id,
    }
    if sort is not None and sort is not SortKey.DISTANCE:
        cursor_data["sort"] = sort.value
        cursor_data["value"] = value

    json_str = json.dumps(cursor_data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return base64.urlsafe_b64encode(json_str.encode("utf-8")).decode("ascii").rstrip("=")


def decode_cursor(cursor: str) -> PaginationCursorData | None:
    """Decode a cursor token.

    Returns:
        The decoded position, or None when the token is not one this codec
        produced. Never raises.
    """
    if not isinstance(cursor, str) or not cursor:
        return None
    if len(cursor) > MAX_CURSOR_LENGTH:
        logger.debug("Ignoring oversized pagination cursor (%d chars)", len(cursor))
        return None

    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        payload = json.loads(raw.decode("utf-8"))
        if not isinstance(payload, dict):
            return None
        cursor_data = PaginationCursorData.model_validate(payload)
    except (
        ValueError,
        TypeError,
        RecursionError,
        binascii.Error,
        UnicodeError,
        ValidationError,
    ) as e:
        logger.debug("Ignoring malformed pagination cursor: %s", e)
        return None

    cursor_data.created_at = _to_naive_utc(cursor_data.created_at)
    return cursor_data
