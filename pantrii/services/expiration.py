from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

from pantrii.config import (
    DEFAULT_EXPIRY_DAYS,
    EXPIRING_WINDOW_DAYS,
    UNKNOWN_EXPIRY_FALLBACK_DAYS,
    WARNING_WINDOW_DAYS,
)
from pantrii.models import ExpiryStatus, ExpiryValue, PantryItem, PantrySummary


SECONDS_PER_DAY = 86400


def now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def parse_expiry(value: ExpiryValue) -> date | datetime | None:
    """Parse an expiry value into a ``date`` (date-only input) or ``datetime``.

    Empty and unparseable values give ``None``; callers treat those as
    "no known expiry" rather than an error.
    """
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    if len(raw) == 10:
        try:
            return date.fromisoformat(raw)
        except ValueError:
            return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


def _local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def to_local_date(value: ExpiryValue) -> date | None:
    parsed = parse_expiry(value)
    if parsed is None:
        return None
    if isinstance(parsed, datetime):
        return _local_naive(parsed).date()
    return parsed


def get_days_remaining(value: ExpiryValue, today: date | None = None) -> int | None:
    """Calendar days from ``today`` to the expiry date, negative once past.

    Both sides are compared at local midnight, so a time-of-day stamp on the
    expiry never shifts the result. Returns ``None`` when the date is unknown.
    """
    target = to_local_date(value)
    if target is None:
        return None
    base = today or date.today()
    return (target - base).days


def days_until(value: ExpiryValue, now: datetime | None = None) -> int | None:
    """Whole days until the expiry instant, rounded up.

    Date-only values are taken at local midnight.
    """
    parsed = parse_expiry(value)
    if parsed is None:
        return None
    if isinstance(parsed, datetime):
        target = _local_naive(parsed)
    else:
        target = datetime.combine(parsed, time.min)
    current = _local_naive(now) if now is not None else datetime.now()
    return math.ceil((target - current).total_seconds() / SECONDS_PER_DAY)


def is_expiring(value: ExpiryValue, now: datetime | None = None, window: int = EXPIRING_WINDOW_DAYS) -> bool:
    days = days_until(value, now)
    if days is None:
        return False
    return 0 <= days <= window


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def status_from_days(days: int) -> ExpiryStatus:
    if days < 0:
        return ExpiryStatus(
            status="expired",
            label=f"Expired {_plural(abs(days), 'day')} ago",
            critical=True,
            days_remaining=days,
        )
    if days == 0:
        return ExpiryStatus(status="expiring", label="Expires today", critical=True, days_remaining=days)
    if days <= WARNING_WINDOW_DAYS:
        label = "Expires tomorrow" if days == 1 else f"Expires in {days} days"
        return ExpiryStatus(status="warning", label=label, critical=False, days_remaining=days)
    return ExpiryStatus(
        status="good",
        label=f"Expires in {_plural(days, 'day')}",
        critical=False,
        days_remaining=days,
    )


def get_expiry_status(value: ExpiryValue, today: date | None = None) -> ExpiryStatus:
    days = get_days_remaining(value, today)
    if days is None:
        status = status_from_days(UNKNOWN_EXPIRY_FALLBACK_DAYS)
        return status.model_copy(update={"days_remaining": None})
    return status_from_days(days)


def get_relative_time_description(value: ExpiryValue, today: date | None = None) -> str:
    days = get_days_remaining(value, today)
    if days is None:
        return ""

    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days == -1:
        return "Yesterday"

    if 1 < days < 7:
        return f"In {days} days"
    if 7 <= days < 14:
        return "In 1 week"
    if 14 <= days < 30:
        return f"In {days // 7} weeks"
    if 30 <= days < 60:
        return "In 1 month"
    if days >= 60:
        return f"In {days // 30} months"

    past = abs(days)
    if past < 7:
        return f"{past} days ago"
    if past < 14:
        return "1 week ago"
    if past < 30:
        return f"{past // 7} weeks ago"
    if past < 60:
        return "1 month ago"
    return f"{past // 30} months ago"


def format_date_string(value: ExpiryValue) -> str:
    target = to_local_date(value)
    return target.isoformat() if target else ""


def format_display_date(value: ExpiryValue) -> str:
    target = to_local_date(value)
    if target is None:
        return ""
    return f"{target:%b} {target.day}, {target.year}"


def get_default_expiry_date(days_to_add: int = DEFAULT_EXPIRY_DAYS, today: date | None = None) -> str:
    base = today or date.today()
    return (base + timedelta(days=days_to_add)).isoformat()


def _item_expiry(item: PantryItem | Mapping[str, Any]) -> Optional[ExpiryValue]:
    if isinstance(item, PantryItem):
        return item.expiry
    return item.get("expiry")


def summarize_pantry(
    items: Iterable[PantryItem | Mapping[str, Any]],
    today: date | None = None,
) -> PantrySummary:
    counts = {"total": 0, "expired": 0, "expiring": 0, "warning": 0, "good": 0}
    for item in items:
        counts["total"] += 1
        counts[get_expiry_status(_item_expiry(item), today).status] += 1
    return PantrySummary(**counts)
