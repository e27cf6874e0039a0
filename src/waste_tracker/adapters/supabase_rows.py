"""Helpers for parsing Supabase row payloads."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

# PostgREST caps a single response at 1000 rows by default.
PAGE_SIZE = 1000


def fetch_all_rows(
    build_query: Callable[[], Any], page_size: int = PAGE_SIZE
) -> list[dict[str, object]]:
    """Read every row of a query one range at a time.

    ``build_query`` must return a fresh, fully ordered query on each call.
    """
    rows: list[dict[str, object]] = []
    offset = 0
    while True:
        response = build_query().range(offset, offset + page_size - 1).execute()
        page = response.data or []
        rows.extend(page)
        if len(page) < page_size:
            return rows
        offset += page_size


def as_rows(data: object) -> list[dict[str, object]]:
    """Normalise an RPC payload to a list of rows."""
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return data
    return []


def parse_timestamp(raw: object) -> datetime:
    """Parse an ISO timestamp column into an aware UTC datetime."""
    if not isinstance(raw, str) or not raw:
        return datetime.min.replace(tzinfo=UTC)
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_optional_timestamp(raw: object) -> datetime | None:
    """Parse a nullable ISO timestamp column."""
    if not isinstance(raw, str) or not raw:
        return None
    return parse_timestamp(raw)
