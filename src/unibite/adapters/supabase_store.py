"""Shared helpers for Supabase table access."""

from datetime import datetime

from postgrest.exceptions import APIError

from unibite.domain.errors import StoreError


def execute(query, action: str):  # type: ignore[no-untyped-def]
    """Run a Supabase query builder, surfacing store failures as ``StoreError``."""
    try:
        return query.execute()
    except APIError as exc:
        raise StoreError(exc.message or f"Failed to {action}") from exc


def parse_timestamp(raw: object) -> datetime:
    """Parse an ISO timestamp column value."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    raise StoreError(f"Invalid timestamp value: {raw!r}")
