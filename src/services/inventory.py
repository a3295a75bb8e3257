"""Pure helpers for classifying, filtering and sorting pantry items.

Nothing in here touches the database. Items are read through attribute
access (ORM rows) or mapping access (plain dicts), and every helper treats a
missing or malformed optional field as "no value" instead of raising.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from typing import Any, Literal

from src.models.enums import ExpiryStatus
from src.services import storage_areas

SortKey = Literal["name", "expiry", "purchase_date", "added", "location"]

SORT_KEYS: tuple[str, ...] = ("name", "expiry", "purchase_date", "added", "location")

# Buckets that also count towards the "expiring-week" filter
WEEK_BUCKETS = frozenset(
    {ExpiryStatus.EXPIRING_TODAY, ExpiryStatus.EXPIRING_3_DAYS, ExpiryStatus.EXPIRING_WEEK}
)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def to_date(value: Any) -> date | None:
    """Truncate a date, datetime or ISO string to a date-only value."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def days_until(expiry: Any, today: date | datetime) -> int | None:
    """Whole days between today and the expiry date, negative once past."""
    expiry_date = to_date(expiry)
    if expiry_date is None:
        return None
    return (expiry_date - to_date(today)).days


def classify_expiry(expiry: Any, today: date | datetime | None = None) -> ExpiryStatus:
    """Classify an expiry date into exactly one freshness bucket.

    Both sides are truncated to midnight first, so the answer does not depend
    on the time of day the check runs.
    """
    days = days_until(expiry, today or date.today())
    if days is None:
        return ExpiryStatus.NO_EXPIRY
    if days < 0:
        return ExpiryStatus.EXPIRED
    if days == 0:
        return ExpiryStatus.EXPIRING_TODAY
    if days <= 3:
        return ExpiryStatus.EXPIRING_3_DAYS
    if days <= 7:
        return ExpiryStatus.EXPIRING_WEEK
    return ExpiryStatus.OK


def item_expiry_status(item: Any, today: date | None = None) -> ExpiryStatus:
    return classify_expiry(_field(item, "expiry"), today)


def matches_expiry_filter(item: Any, bucket: ExpiryStatus | str, today: date | None = None) -> bool:
    """Check an item against an expiry filter.

    The week filter is inclusive of the 3-day and today buckets.
    """
    try:
        wanted = ExpiryStatus(bucket)
    except ValueError:
        return False
    status = item_expiry_status(item, today)
    if wanted == ExpiryStatus.EXPIRING_WEEK:
        return status in WEEK_BUCKETS
    return status == wanted


def matches_search(item: Any, term: str | None) -> bool:
    """Case-insensitive substring match on name, brand or category."""
    if not term or not term.strip():
        return True
    needle = term.strip().casefold()
    for name in ("name", "brand", "category"):
        value = _field(item, name)
        if isinstance(value, str) and needle in value.casefold():
            return True
    return False


def matches_location(item: Any, location: str | None) -> bool:
    if not location:
        return True
    return _field(item, "location") == location


def matches_room(item: Any, room: str | None) -> bool:
    """Check whether the item's storage area belongs to the room.

    ``location`` holds only the area name, and some names (e.g. "General
    Storage") exist in more than one room, so such items match every room
    that has an area of that name.
    """
    if not room:
        return True
    names = {area.name for area in storage_areas.areas_for_room(room)}
    return _field(item, "location") in names


def is_used_up(item: Any) -> bool:
    """Completion 0 means fully consumed; null and 100 both mean unopened."""
    return _field(item, "completion") == 0


def filter_items(
    items: Iterable[Any],
    *,
    search: str | None = None,
    room: str | None = None,
    location: str | None = None,
    expiry: ExpiryStatus | str | None = None,
    hide_used: bool = False,
    today: date | None = None,
) -> list[Any]:
    """Apply every requested filter; omitted filters match everything."""
    today = today or date.today()
    result = []
    for item in items:
        if not matches_search(item, search):
            continue
        if not matches_room(item, room):
            continue
        if not matches_location(item, location):
            continue
        if expiry and not matches_expiry_filter(item, expiry, today):
            continue
        if hide_used and is_used_up(item):
            continue
        result.append(item)
    return result


def _sort_value(item: Any, sort_by: str) -> Any:
    if sort_by == "name":
        value = _field(item, "name")
        return value.casefold() if isinstance(value, str) and value else None
    if sort_by == "location":
        value = _field(item, "location")
        return value.casefold() if isinstance(value, str) and value else None
    if sort_by in ("expiry", "purchase_date"):
        return to_date(_field(item, sort_by))
    if sort_by == "added":
        value = _field(item, "scanned_at") or _field(item, "created_at")
        if isinstance(value, datetime):
            # Compare naive and aware timestamps alike
            return value.replace(tzinfo=None)
        day = to_date(value)
        return datetime.combine(day, time.min) if day else None
    return None


def sort_items(items: Iterable[Any], sort_by: SortKey | str = "added") -> list[Any]:
    """Sort items, always putting missing values last.

    Name, expiry and location sort ascending; purchase date and added date
    sort most recent first. Unknown sort keys keep the input order.
    """
    items = list(items)
    if sort_by not in SORT_KEYS:
        return items

    present = []
    missing = []
    for item in items:
        value = _sort_value(item, sort_by)
        if value is None:
            missing.append(item)
        else:
            present.append((value, item))

    newest_first = sort_by in ("purchase_date", "added")
    present.sort(key=lambda pair: pair[0], reverse=newest_first)
    return [item for _, item in present] + missing


def expiry_summary(items: Iterable[Any], today: date | None = None) -> dict[str, int]:
    """Count items per expiry bucket, plus the inclusive week and used-up totals."""
    today = today or date.today()
    counts = {status.value: 0 for status in ExpiryStatus}
    total = 0
    used_up = 0
    for item in items:
        total += 1
        counts[item_expiry_status(item, today).value] += 1
        if is_used_up(item):
            used_up += 1
    return {
        "total": total,
        "expired": counts[ExpiryStatus.EXPIRED],
        "expiring_today": counts[ExpiryStatus.EXPIRING_TODAY],
        "expiring_3_days": counts[ExpiryStatus.EXPIRING_3_DAYS],
        "expiring_week": sum(counts[status] for status in WEEK_BUCKETS),
        "ok": counts[ExpiryStatus.OK],
        "no_expiry": counts[ExpiryStatus.NO_EXPIRY],
        "used_up": used_up,
    }
