"""Tests for expiry classification, filtering, sorting and the storage area catalog."""

from datetime import UTC, date, datetime

import pytest

from src.models.enums import ExpiryStatus
from src.services import storage_areas
from src.services.inventory import (
    classify_expiry,
    expiry_summary,
    filter_items,
    is_used_up,
    matches_expiry_filter,
    sort_items,
    to_date,
)

TODAY = date(2024, 1, 1)


@pytest.mark.parametrize(
    "expiry,expected",
    [
        (None, ExpiryStatus.NO_EXPIRY),
        ("", ExpiryStatus.NO_EXPIRY),
        ("not a date", ExpiryStatus.NO_EXPIRY),
        (date(2023, 12, 30), ExpiryStatus.EXPIRED),
        (date(2023, 12, 31), ExpiryStatus.EXPIRED),
        (date(2024, 1, 1), ExpiryStatus.EXPIRING_TODAY),
        (date(2024, 1, 2), ExpiryStatus.EXPIRING_3_DAYS),
        (date(2024, 1, 3), ExpiryStatus.EXPIRING_3_DAYS),
        (date(2024, 1, 4), ExpiryStatus.EXPIRING_3_DAYS),
        (date(2024, 1, 5), ExpiryStatus.EXPIRING_WEEK),
        (date(2024, 1, 6), ExpiryStatus.EXPIRING_WEEK),
        (date(2024, 1, 8), ExpiryStatus.EXPIRING_WEEK),
        (date(2024, 1, 9), ExpiryStatus.OK),
        ("2024-03-01", ExpiryStatus.OK),
    ],
)
def test_classify_expiry(expiry, expected):
    """Test each freshness bucket boundary."""
    assert classify_expiry(expiry, TODAY) == expected


def test_classify_expiry_ignores_time_of_day():
    """Test that late-evening checks and timestamped expiries use whole days."""
    late = datetime(2024, 1, 1, 23, 59, tzinfo=UTC)
    assert classify_expiry(datetime(2024, 1, 1, 0, 1), late) == ExpiryStatus.EXPIRING_TODAY
    assert classify_expiry("2024-01-04T23:00:00Z", late) == ExpiryStatus.EXPIRING_3_DAYS
    assert classify_expiry(datetime(2023, 12, 31, 23, 59), TODAY) == ExpiryStatus.EXPIRED


def test_to_date():
    """Test truncating the supported inputs to a date."""
    assert to_date(datetime(2024, 5, 6, 12, 30)) == date(2024, 5, 6)
    assert to_date(date(2024, 5, 6)) == date(2024, 5, 6)
    assert to_date("2024-05-06T12:30:00") == date(2024, 5, 6)
    assert to_date("  ") is None
    assert to_date(42) is None


def test_expiring_week_filter_is_inclusive():
    """Test that the week filter takes in the today and 3-day buckets."""
    items = [
        {"name": "today", "expiry": date(2024, 1, 1)},
        {"name": "soon", "expiry": date(2024, 1, 3)},
        {"name": "week", "expiry": date(2024, 1, 6)},
        {"name": "later", "expiry": date(2024, 2, 1)},
        {"name": "expired", "expiry": date(2023, 12, 1)},
    ]
    week = [item["name"] for item in items if matches_expiry_filter(item, "expiring-week", TODAY)]
    assert week == ["today", "soon", "week"]

    three_days = [
        item["name"] for item in items if matches_expiry_filter(item, "expiring-3-days", TODAY)
    ]
    assert three_days == ["soon"]


def test_unknown_expiry_filter_matches_nothing():
    assert not matches_expiry_filter({"expiry": date(2024, 1, 1)}, "someday", TODAY)


def test_filter_items_tolerates_missing_fields():
    """Test that items without optional fields are filtered, not rejected."""
    items = [
        {"name": "Milk"},
        {"name": "Cheese", "brand": None, "location": "Fridge", "completion": None},
        {"name": "Jam", "brand": "Bonne Maman", "location": "Shelf Bottom", "completion": 0},
    ]

    assert filter_items(items, today=TODAY) == items
    assert [i["name"] for i in filter_items(items, search="bonne", today=TODAY)] == ["Jam"]
    assert [i["name"] for i in filter_items(items, room="Kitchen", today=TODAY)] == [
        "Cheese",
        "Jam",
    ]
    assert [i["name"] for i in filter_items(items, room="Garage", today=TODAY)] == []
    assert [i["name"] for i in filter_items(items, hide_used=True, today=TODAY)] == [
        "Milk",
        "Cheese",
    ]
    assert [i["name"] for i in filter_items(items, expiry="no-expiry", today=TODAY)] == [
        "Milk",
        "Cheese",
        "Jam",
    ]


def test_filters_combine():
    """Test that several filters narrow the result together."""
    items = [
        {"name": "Milk", "location": "Fridge", "expiry": date(2024, 1, 2)},
        {"name": "Oat Milk", "location": "Shelf Bottom", "expiry": date(2024, 1, 2)},
        {"name": "Butter", "location": "Fridge", "expiry": date(2024, 1, 2)},
    ]
    result = filter_items(
        items, search="milk", location="Fridge", expiry="expiring-week", today=TODAY
    )
    assert [i["name"] for i in result] == ["Milk"]


def test_is_used_up():
    assert is_used_up({"completion": 0})
    assert not is_used_up({"completion": 100})
    assert not is_used_up({"completion": None})
    assert not is_used_up({})


def test_sort_by_name_case_insensitive():
    items = [{"name": "banana"}, {"name": "Apple"}, {"name": "cherry"}]
    assert [i["name"] for i in sort_items(items, "name")] == ["Apple", "banana", "cherry"]


def test_sort_missing_values_last():
    """Test that items without the sort field always go to the end."""
    items = [
        {"name": "a", "expiry": None, "purchase_date": None},
        {"name": "b", "expiry": "2024-02-01", "purchase_date": "2023-12-01"},
        {"name": "c", "expiry": "2024-01-05", "purchase_date": "2023-12-20"},
    ]
    assert [i["name"] for i in sort_items(items, "expiry")] == ["c", "b", "a"]
    assert [i["name"] for i in sort_items(items, "purchase_date")] == ["c", "b", "a"]


def test_sort_added_mixes_naive_and_aware():
    """Test sorting by added time with mixed timestamp styles and a created_at fallback."""
    items = [
        {"name": "oldest", "scanned_at": datetime(2024, 1, 1, 9, 0)},
        {"name": "newest", "scanned_at": datetime(2024, 1, 3, 9, 0, tzinfo=UTC)},
        {"name": "fallback", "scanned_at": None, "created_at": datetime(2024, 1, 2, 9, 0)},
        {"name": "unknown"},
    ]
    assert [i["name"] for i in sort_items(items, "added")] == [
        "newest",
        "fallback",
        "oldest",
        "unknown",
    ]


def test_sort_unknown_key_keeps_order():
    items = [{"name": "b"}, {"name": "a"}]
    assert sort_items(items, "colour") == items


def test_expiry_summary():
    """Test the per-bucket counts, with the week count including sooner items."""
    items = [
        {"expiry": date(2023, 12, 30)},
        {"expiry": date(2024, 1, 1)},
        {"expiry": date(2024, 1, 3), "completion": 0},
        {"expiry": date(2024, 1, 7)},
        {"expiry": date(2024, 6, 1)},
        {},
    ]
    assert expiry_summary(items, TODAY) == {
        "total": 6,
        "expired": 1,
        "expiring_today": 1,
        "expiring_3_days": 1,
        "expiring_week": 3,
        "ok": 1,
        "no_expiry": 1,
        "used_up": 1,
    }


def test_rooms_start_with_kitchen():
    rooms = storage_areas.rooms()
    assert rooms[0] == "Kitchen"
    assert rooms[1:] == sorted(rooms[1:])
    assert "Garden Shed" in rooms


def test_storage_area_lookups():
    """Test finding storage areas by id and by name."""
    fridge = storage_areas.find_by_id("kitchen-fridge")
    assert fridge.name == "Fridge"
    assert fridge.room == "Kitchen"
    assert storage_areas.find_by_name("Fridge") == fridge
    assert storage_areas.find_by_id("nowhere") is None
    assert "Freezer" in storage_areas.area_names()
    assert all(area.room == "Bathroom" for area in storage_areas.areas_for_room("Bathroom"))


def test_room_filter_matches_shared_area_names():
    """Test that an area name used by several rooms matches each of them."""
    item = {"name": "Hose", "location": "General Storage"}
    assert filter_items([item], room="Garden Shed", today=TODAY) == [item]
    assert filter_items([item], room="Conservatory", today=TODAY) == [item]
    assert filter_items([item], room="Kitchen", today=TODAY) == []
