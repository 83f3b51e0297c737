"""Field Transforms — store-resolved sentinels and the pure merge that applies them.

Invariants:
    - resolve_fields is PURE: returns a new dict, never mutates its inputs
    - SERVER_TIMESTAMP resolves to the write time passed in by the store, never
      to a caller-side clock
    - ArrayUnion appends only values not already present (order preserved)
    - Increment adds to the current number; a missing or non-numeric field
      starts from 0

Design Decisions:
    - Transforms are resolved against the document as read inside the write,
      so array-union and increment are duplicate-safe under retries
    - Timestamps are stored as fixed-width ISO-8601 UTC strings so that
      lexical order equals chronological order in JSON queries
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


class ServerTimestamp:
    """Sentinel — replaced by the store's write time."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = ServerTimestamp()


@dataclass(frozen=True)
class ArrayUnion:
    """Append each value to a list field unless it is already there."""
    values: tuple[Any, ...]


@dataclass(frozen=True)
class Increment:
    """Add amount to a numeric field."""
    amount: int | float = 1


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as a fixed-width UTC ISO string."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


def resolve_fields(
    current: dict[str, Any], updates: dict[str, Any], now: datetime,
) -> dict[str, Any]:
    """Merge updates into current, resolving transform sentinels."""
    merged = dict(current)
    for key, value in updates.items():
        if isinstance(value, ServerTimestamp):
            merged[key] = format_timestamp(now)
        elif isinstance(value, ArrayUnion):
            existing = merged.get(key)
            items = list(existing) if isinstance(existing, list) else []
            for item in value.values:
                if item not in items:
                    items.append(item)
            merged[key] = items
        elif isinstance(value, Increment):
            existing = merged.get(key)
            base = existing if _is_number(existing) else 0
            merged[key] = base + value.amount
        elif isinstance(value, datetime):
            merged[key] = format_timestamp(value)
        else:
            merged[key] = value
    return merged


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
