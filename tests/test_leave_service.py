from datetime import date

import pytest

from leave_portal.core.constants import DEFAULT_LEAVE_COLOR, LEAVE_COLORS
from leave_portal.core.events import ChangeType, EventBus
from leave_portal.models import Leave
from leave_portal.models.base.enums import LeaveStatus, LeaveTime, LeaveType
from leave_portal.schemas.leave import LeaveCreate, LeaveQuery, LeaveUpdate
from leave_portal.services.base import ErrorCode
from leave_portal.services.leave import AvailabilityService, LeaveService
from leave_portal.services.leave.leave_service import leave_color


def form(day, leave_type=LeaveType.ANNUAL, leave_time=LeaveTime.FULL_DAY, purpose="Family trip"):
    return LeaveCreate(leave_type=leave_type, leave_purpose=purpose, leave_time=leave_time, leave_date=day)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def service(db, bus):
    return LeaveService(db, bus=bus)


@pytest.fixture
def march_leaves(service, users):
    """Leaves around the first working week of March 2025."""
    alice, bob = users["alice"].id, users["bob"].id
    plan = [
        (alice, date(2025, 3, 3)),
        (bob, date(2025, 3, 5)),
        (alice, date(2025, 3, 7)),
        (bob, date(2025, 2, 28)),
        (alice, date(2025, 3, 10)),
    ]
    return [service.create(user_id, form(day)).unwrap() for user_id, day in plan]


def test_create_starts_pending(service, users):
    result = service.create(users["alice"].id, form(date(2025, 3, 4), LeaveType.MEDICAL, LeaveTime.HALF_DAY))

    assert result.is_success
    created = result.data
    assert created.status == LeaveStatus.PENDING
    assert created.leave_type == LeaveType.MEDICAL
    assert created.leave_time == LeaveTime.HALF_DAY
    assert created.employee_name == "Alice Smith"


@pytest.mark.parametrize(
    "payload",
    [
        LeaveCreate(leave_type=LeaveType.ANNUAL, leave_time=LeaveTime.FULL_DAY, leave_date=date(2025, 3, 4)),
        LeaveCreate(leave_purpose="x", leave_time=LeaveTime.FULL_DAY, leave_date=date(2025, 3, 4)),
        LeaveCreate(leave_type=LeaveType.ANNUAL, leave_purpose="x", leave_date=date(2025, 3, 4)),
        LeaveCreate(leave_type=LeaveType.ANNUAL, leave_purpose="x", leave_time=LeaveTime.FULL_DAY),
        LeaveCreate(leave_type=LeaveType.ANNUAL, leave_purpose="   ", leave_time=LeaveTime.FULL_DAY, leave_date=date(2025, 3, 4)),
        LeaveCreate(leave_type=LeaveType.ANNUAL, leave_purpose="x", leave_time=LeaveTime.FULL_DAY, leave_date=date(2025, 3, 8)),
    ],
)
def test_incomplete_create_is_a_silent_no_op(service, users, db, payload):
    result = service.create(users["alice"].id, payload)

    assert result.is_success
    assert result.data is None
    assert db.query(Leave).count() == 0


def test_update_rewrites_all_fields_whatever_the_status(service, users, march_leaves):
    leave_id = march_leaves[0].id
    service.set_status(leave_id, LeaveStatus.APPROVED)

    patch = LeaveUpdate(
        leave_type=LeaveType.STUDY,
        leave_purpose="Course",
        leave_time=LeaveTime.HALF_DAY,
        leave_date=date(2025, 3, 12),
    )
    updated = service.update(leave_id, patch, actor=None).unwrap()

    assert updated.leave_type == LeaveType.STUDY
    assert updated.leave_purpose == "Course"
    assert updated.leave_time == LeaveTime.HALF_DAY
    assert updated.leave_date == date(2025, 3, 12)
    assert updated.status == LeaveStatus.APPROVED


def test_incomplete_update_changes_nothing(service, march_leaves):
    leave_id = march_leaves[0].id

    result = service.update(leave_id, LeaveUpdate(leave_purpose="Only this"))

    assert result.is_success and result.data is None
    assert service.get(leave_id).unwrap().leave_purpose == "Family trip"


def test_employee_cannot_touch_someone_elses_leave(service, users, db, march_leaves):
    class Actor:
        id = users["bob"].id
        is_admin = False

    alice_leave = march_leaves[0].id

    updated = service.update(alice_leave, form(date(2025, 3, 6)), actor=Actor())
    deleted = service.delete(alice_leave, actor=Actor())

    assert updated.error.code == ErrorCode.INSUFFICIENT_PERMISSIONS
    assert deleted.error.code == ErrorCode.INSUFFICIENT_PERMISSIONS
    assert db.get(Leave, alice_leave) is not None


def test_delete(service, db, march_leaves):
    leave_id = march_leaves[1].id

    assert service.delete(leave_id).unwrap() is True
    assert service.delete(leave_id).error.code == ErrorCode.NOT_FOUND
    assert db.query(Leave).count() == len(march_leaves) - 1


def test_set_status_is_unconditional_and_idempotent(service, march_leaves):
    leave_id = march_leaves[0].id

    assert service.set_status(leave_id, LeaveStatus.APPROVED).unwrap().status == LeaveStatus.APPROVED
    assert service.set_status(leave_id, LeaveStatus.APPROVED).unwrap().status == LeaveStatus.APPROVED
    assert service.set_status(leave_id, LeaveStatus.REJECTED).unwrap().status == LeaveStatus.REJECTED


def test_set_status_rejects_pending_and_unknown_ids(service, march_leaves):
    assert service.set_status(march_leaves[0].id, LeaveStatus.PENDING).error.code == ErrorCode.VALIDATION_ERROR
    assert service.set_status("missing", LeaveStatus.APPROVED).error.code == ErrorCode.NOT_FOUND


def test_list_by_user_orders_by_leave_date(service, users, march_leaves):
    leaves = service.list_by_user(users["alice"].id).unwrap()

    assert [l.leave_date for l in leaves] == [date(2025, 3, 3), date(2025, 3, 7), date(2025, 3, 10)]
    assert {l.user_id for l in leaves} == {users["alice"].id}


def test_filter_by_inclusive_date_range(service, march_leaves):
    query = LeaveQuery(date_from=date(2025, 3, 3), date_to=date(2025, 3, 7))

    page = service.list_by_filter(query).unwrap()

    assert [l.leave_date for l in page.items] == [date(2025, 3, 3), date(2025, 3, 5), date(2025, 3, 7)]
    assert page.meta.total_items == 3


def test_search_term_further_restricts_case_insensitively(service, march_leaves):
    query = LeaveQuery(search="ALI", date_from=date(2025, 3, 3), date_to=date(2025, 3, 7))

    page = service.list_by_filter(query).unwrap()

    assert [l.leave_date for l in page.items] == [date(2025, 3, 3), date(2025, 3, 7)]
    assert {l.employee_name for l in page.items} == {"Alice Smith"}


def test_filter_paginates(service, march_leaves):
    first = service.list_by_filter(LeaveQuery(page=1, page_size=2)).unwrap()
    last = service.list_by_filter(LeaveQuery(page=3, page_size=2)).unwrap()

    assert [l.leave_date for l in first.items] == [date(2025, 2, 28), date(2025, 3, 3)]
    assert first.meta.total_items == 5
    assert first.meta.total_pages == 3
    assert first.meta.has_next and not first.meta.has_previous
    assert [l.leave_date for l in last.items] == [date(2025, 3, 10)]
    assert not last.meta.has_next


def test_leave_query_is_immutable():
    query = LeaveQuery(search="bob")

    with pytest.raises(Exception):
        query.page = 2

    assert query.model_copy(update={"page": 2}).page == 2
    assert LeaveQuery(search="  ").search is None


def test_dashboard_stats(service, march_leaves):
    stats = service.dashboard_stats(today=date(2025, 3, 5)).unwrap()

    assert stats.total_employees == 3
    assert stats.today_leaves == 1
    assert stats.upcoming_leaves == 2


def test_calendar_marks_carry_leave_colours(service, users):
    service.create(users["bob"].id, form(date(2025, 3, 4), LeaveType.EXAM))
    service.create(users["bob"].id, form(date(2025, 3, 6), LeaveType.PARENTAL))

    marks = service.calendar_marks(users["bob"].id).unwrap()

    assert [(m.leave_date, m.color) for m in marks] == [
        (date(2025, 3, 4), LEAVE_COLORS["Exam Leave"]),
        (date(2025, 3, 6), LEAVE_COLORS["Parental Leave"]),
    ]
    assert leave_color("Sabbatical") == DEFAULT_LEAVE_COLOR


def test_mutations_publish_change_events(service, bus, users):
    seen = []
    subscriptions = [
        bus.subscribe("leaves", change, lambda event: seen.append((event.change, event.record["id"])))
        for change in ChangeType
    ]

    created = service.create(users["alice"].id, form(date(2025, 3, 4))).unwrap()
    service.set_status(created.id, LeaveStatus.APPROVED)
    service.delete(created.id)
    service.create(users["alice"].id, LeaveCreate())

    assert seen == [
        (ChangeType.INSERT, created.id),
        (ChangeType.UPDATE, created.id),
        (ChangeType.DELETE, created.id),
    ]
    for subscription in subscriptions:
        subscription.unsubscribe()
    assert bus.subscriber_count() == 0


def test_admin_leaves_stay_out_of_availability(service, db, users):
    service.create(users["admin"].id, form(date(2025, 3, 3))).unwrap()
    service.create(users["bob"].id, form(date(2025, 3, 3), leave_time=LeaveTime.HALF_DAY)).unwrap()

    week = AvailabilityService(db).weekly_availability(date(2025, 3, 3)).unwrap()

    monday = week.days[0]
    assert monday.full_day_employees == []
    assert monday.half_day_employees == ["Bob Jones"]
    assert monday.available_employees == ["Alice Smith"]
    assert monday.available_count + monday.on_leave_count == 2
    assert [leave.user_id for leave in service.repository.find_in_window(date(2025, 3, 3), date(2025, 3, 7))] == [
        users["bob"].id
    ]
