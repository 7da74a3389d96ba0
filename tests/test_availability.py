from datetime import date
from types import SimpleNamespace

from leave_portal.models.base.enums import LeaveTime
from leave_portal.services.leave.availability import (
    LeaveEntry,
    aggregate_availability,
    next_week_window,
    resolve_employee_name,
    to_entry,
    working_days,
)

MONDAY = date(2025, 3, 3)
ROSTER = ["Alice", "Bob"]


def leave(day, name, leave_time="Full Day"):
    return {"leave_date": day, "leave_time": leave_time, "users": {"full_name": name}}


def by_date(days):
    return {day.date.isoformat(): day for day in days}


def test_window_is_monday_to_friday_in_order():
    days = aggregate_availability(ROSTER, [], date(2025, 3, 9))  # a Sunday

    assert [d.date for d in days] == [date(2025, 3, n) for n in range(3, 8)]
    assert all(d.date.weekday() < 5 for d in days)
    assert [d.label for d in days] == ["March 3", "March 4", "March 5", "March 6", "March 7"]


def test_empty_inputs_mean_everyone_available():
    days = aggregate_availability(ROSTER, [], MONDAY)

    for day in days:
        assert day.available_employees == ROSTER
        assert day.available_count == 2
        assert day.on_leave_count == 0
        assert day.full_day_employees == []
        assert day.half_day_employees == []

    assert all(d.available_count == 0 for d in aggregate_availability([], [], MONDAY))


def test_example_week():
    rows = [
        leave("2025-03-03", "Alice", "Full Day"),
        {"leave_date": "2025-03-04", "leave_time": "Half Day", "users": [{"full_name": "Bob"}]},
    ]

    days = by_date(aggregate_availability(ROSTER, rows, MONDAY))

    monday, tuesday = days["2025-03-03"], days["2025-03-04"]
    assert monday.available_employees == ["Bob"]
    assert monday.full_day_employees == ["Alice"]
    assert monday.half_day_employees == []
    assert tuesday.available_employees == ["Alice"]
    assert tuesday.half_day_employees == ["Bob"]
    assert tuesday.full_day_employees == []
    for iso in ("2025-03-05", "2025-03-06", "2025-03-07"):
        assert days[iso].available_employees == ROSTER
        assert days[iso].on_leave_count == 0


def test_two_half_days_count_as_full_day():
    rows = [leave("2025-03-05", "Alice", "Half Day"), leave("2025-03-05", "Alice", "Half Day")]

    wednesday = by_date(aggregate_availability(ROSTER, rows, MONDAY))["2025-03-05"]

    assert wednesday.full_day_employees == ["Alice"]
    assert wednesday.half_day_employees == []
    assert wednesday.available_employees == ["Bob"]


def test_full_day_wins_over_half_day():
    rows = [leave("2025-03-05", "Bob", "Half Day"), leave("2025-03-05", "Bob", "Full Day")]

    wednesday = by_date(aggregate_availability(ROSTER, rows, MONDAY))["2025-03-05"]

    assert wednesday.full_day_employees == ["Bob"]
    assert wednesday.half_day_employees == []


def test_unknown_duration_is_ignored():
    rows = [leave("2025-03-05", "Bob", "Quarter Day")]

    wednesday = by_date(aggregate_availability(ROSTER, rows, MONDAY))["2025-03-05"]

    assert wednesday.available_employees == ROSTER
    assert wednesday.on_leave_count == 0


def test_rows_without_employee_are_dropped():
    rows = [
        {"leave_date": "2025-03-06", "leave_time": "Full Day", "users": None},
        {"leave_date": "2025-03-06", "leave_time": "Full Day", "users": []},
        {"leave_date": "2025-03-06", "leave_time": "Full Day"},
    ]

    thursday = by_date(aggregate_availability(ROSTER, rows, MONDAY))["2025-03-06"]

    assert thursday.available_employees == ROSTER
    assert thursday.full_day_employees == []


def test_weekend_rows_are_never_emitted():
    rows = [leave("2025-03-08", "Alice"), leave("2025-03-09", "Bob")]

    days = aggregate_availability(ROSTER, rows, MONDAY)

    assert len(days) == 5
    assert all(d.on_leave_count == 0 for d in days)


def test_counts_add_up_to_roster_size():
    roster = ["Alice", "Bob", "Carol", "Dan"]
    rows = [
        leave("2025-03-03", "Alice"),
        leave("2025-03-03", "Bob", "Half Day"),
        leave("2025-03-04", "Carol", "Half Day"),
        leave("2025-03-04", "Carol", "Half Day"),
        leave("2025-03-07", "Dan", "Half Day"),
        leave("2025-03-07", "Alice"),
    ]

    for day in aggregate_availability(roster, rows, MONDAY):
        assert day.on_leave_count == len(day.full_day_employees) + len(day.half_day_employees)
        assert day.available_count + day.on_leave_count == len(roster)
        assert not set(day.full_day_employees) & set(day.half_day_employees)


def test_rows_outside_the_roster_are_dropped():
    rows = [
        leave("2025-03-03", "Zed"),
        leave("2025-03-03", "Alice", "Half Day"),
        leave("2025-03-04", "Zed", "Half Day"),
    ]

    days = by_date(aggregate_availability(ROSTER, rows, MONDAY))

    monday, tuesday = days["2025-03-03"], days["2025-03-04"]
    assert monday.full_day_employees == []
    assert monday.half_day_employees == ["Alice"]
    assert monday.available_count + monday.on_leave_count == len(ROSTER)
    assert tuesday.available_employees == ROSTER
    assert tuesday.on_leave_count == 0


def test_aggregation_is_deterministic():
    rows = [leave("2025-03-03", "Alice"), leave("2025-03-04", "Bob", "Half Day")]

    first = aggregate_availability(ROSTER, rows, MONDAY)
    second = aggregate_availability(ROSTER, rows, MONDAY)

    assert first == second


def test_orm_like_rows_are_accepted():
    rows = [
        SimpleNamespace(
            leave_date=date(2025, 3, 3),
            leave_time=LeaveTime.FULL_DAY,
            user=SimpleNamespace(full_name="Bob"),
        )
    ]

    monday = aggregate_availability(ROSTER, rows, MONDAY)[0]

    assert monday.full_day_employees == ["Bob"]
    assert monday.available_employees == ["Alice"]


def test_resolve_employee_name_shapes():
    assert resolve_employee_name({"full_name": "Alice"}) == "Alice"
    assert resolve_employee_name([{"full_name": "Bob"}]) == "Bob"
    assert resolve_employee_name(SimpleNamespace(full_name="Carol")) == "Carol"
    assert resolve_employee_name(None) is None
    assert resolve_employee_name([]) is None
    assert resolve_employee_name({"email": "x@example.com"}) is None


def test_to_entry_normalizes_dates_and_enums():
    entry = to_entry({"leave_date": date(2025, 3, 3), "leave_time": LeaveTime.HALF_DAY, "user": {"full_name": "Alice"}})

    assert entry == LeaveEntry(leave_date="2025-03-03", employee_name="Alice", leave_time="Half Day")


def test_working_days_and_next_week_window():
    assert working_days(date(2025, 3, 5)) == [date(2025, 3, n) for n in range(3, 8)]
    assert next_week_window(date(2025, 3, 5)) == [date(2025, 3, n) for n in range(10, 15)]
    assert next_week_window(date(2025, 3, 9))[0] == date(2025, 3, 10)


def test_json_keys_are_camel_case():
    day = aggregate_availability(ROSTER, [], MONDAY)[0]

    payload = day.model_dump(by_alias=True, mode="json")

    assert payload["date"] == "2025-03-03"
    assert set(payload) == {
        "date",
        "label",
        "availableCount",
        "onLeaveCount",
        "availableEmployees",
        "fullDayEmployees",
        "halfDayEmployees",
    }
