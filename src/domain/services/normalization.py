"""Domain normalization helpers."""

from datetime import date, datetime, time, timezone

from src.domain.constants import UNCATEGORIZED


def parse_record_datetime(value) -> datetime | None:
    """Normalize a record timestamp to a naive UTC datetime.

    Args:
        value: ``datetime``, ``date`` or ISO-8601 string from a repository.

    Returns:
        datetime | None: Parsed timestamp, or None when it cannot be read.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        if cleaned.endswith("Z"):
            cleaned = cleaned[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(cleaned)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def normalize_bound(value, *, end_of_day: bool) -> datetime | None:
    """Normalize an inclusive range bound.

    A bound given as a calendar date covers the whole day: the lower bound
    starts at midnight and the upper bound ends at the last microsecond.

    Args:
        value: Bound as ``date``, ``datetime``, ISO string, or None.
        end_of_day: True for the upper bound.

    Returns:
        datetime | None: Normalized bound, None when absent or unreadable.
    """
    if value is None:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.max if end_of_day else time.min)
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            day = date.fromisoformat(value.strip())
        except ValueError:
            return None
        return datetime.combine(day, time.max if end_of_day else time.min)
    return parse_record_datetime(value)


def normalize_category(category: str | None) -> str:
    """Return a trimmed category label, ``Uncategorized`` when empty."""
    if category is None:
        return UNCATEGORIZED
    cleaned = str(category).strip()
    return cleaned if cleaned else UNCATEGORIZED


__all__ = ["parse_record_datetime", "normalize_bound", "normalize_category"]
