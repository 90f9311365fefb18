from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional, Tuple

from notifications.exceptions import InvalidRequest

# Tokens the bundled presentation layer knows how to draw. The scheduler
# accepts any category string.
KNOWN_CATEGORIES = ("info", "success", "error", "warning", "neutral")

# 100 days. Anything past the 32-bit QTimer range is re-armed in chunks.
MAX_LIFETIME_MS = 100 * 24 * 60 * 60 * 1000

# Mapping keys accepted by ScheduleRequest.from_payload; aliases earlier in
# each tuple win. "type" and "duration" are the legacy toast payload names.
_CATEGORY_KEYS = ("category", "type")
_LIFETIME_KEYS = ("lifetime_ms", "lifetimeMs", "duration")
_PAYLOAD_KEYS = frozenset(("message",) + _CATEGORY_KEYS + _LIFETIME_KEYS)


@dataclass(frozen=True)
class NotificationItem:
    """One scheduled toast as it lives in the scheduler's live set."""

    id: str
    message: str
    category: str
    lifetime_ms: int
    created_at: datetime

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(milliseconds=self.lifetime_ms)

    def elapsed_ms(self, now: datetime) -> int:
        delta = (now - self.created_at).total_seconds() * 1000.0
        return max(0, int(delta))


@dataclass(frozen=True)
class ScheduleRequest:
    """Caller input for :meth:`NotificationScheduler.schedule`.

    ``category`` and ``lifetime_ms`` fall back to the scheduler defaults when
    left as ``None``.
    """

    message: str
    category: Optional[str] = None
    lifetime_ms: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ScheduleRequest":
        unknown = sorted(str(key) for key in payload if key not in _PAYLOAD_KEYS)
        if unknown:
            raise InvalidRequest(f"unknown request field(s): {', '.join(unknown)}")
        if "message" not in payload:
            raise InvalidRequest("message is required")
        return cls(
            message=payload["message"],
            category=_first_present(payload, _CATEGORY_KEYS),
            lifetime_ms=_first_present(payload, _LIFETIME_KEYS),
        )


def _first_present(payload: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def normalize_message(message: Any) -> str:
    if not isinstance(message, str):
        raise InvalidRequest(f"message must be text, got {type(message).__name__}")
    text = message.strip()
    if not text:
        raise InvalidRequest("message must not be empty")
    return text


def normalize_category(category: Any, default: str) -> str:
    """Pass ``category`` through untouched; only ``None`` means the default."""
    if category is None:
        return default
    if not isinstance(category, str):
        raise InvalidRequest(f"category must be text, got {type(category).__name__}")
    return category


def normalize_lifetime(lifetime_ms: Any, default: int) -> int:
    """Return ``lifetime_ms`` as a non-negative ``int``.

    Integral floats such as ``3000.0`` are accepted; booleans, fractions,
    negatives, non-finite values and anything above ``MAX_LIFETIME_MS`` are
    not.
    """
    if lifetime_ms is None:
        return default
    if isinstance(lifetime_ms, bool):
        raise InvalidRequest("lifetime_ms must be a whole number of milliseconds")
    if isinstance(lifetime_ms, float):
        if not math.isfinite(lifetime_ms) or not lifetime_ms.is_integer():
            raise InvalidRequest(f"lifetime_ms must be a whole number, got {lifetime_ms!r}")
        lifetime_ms = int(lifetime_ms)
    if not isinstance(lifetime_ms, int):
        raise InvalidRequest(
            f"lifetime_ms must be a whole number, got {type(lifetime_ms).__name__}"
        )
    if lifetime_ms < 0:
        raise InvalidRequest(f"lifetime_ms must be >= 0, got {lifetime_ms}")
    if lifetime_ms > MAX_LIFETIME_MS:
        raise InvalidRequest(f"lifetime_ms must be <= {MAX_LIFETIME_MS}, got {lifetime_ms}")
    return lifetime_ms
