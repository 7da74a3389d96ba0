from datetime import date, datetime, timedelta, timezone

from leave_portal.core.events import ChangeEvent, ChangeType, EventBus
from leave_portal.models import Leave
from leave_portal.models.base.enums import LeaveTime, LeaveType
from leave_portal.schemas.leave import LeaveCreate
from leave_portal.services.leave import LeaveNotificationListener, LeaveNotificationService, LeaveService


def submit(db, user_id, day, bus=None):
    return LeaveService(db, bus=bus).create(
        user_id,
        LeaveCreate(
            leave_type=LeaveType.ANNUAL,
            leave_purpose="Trip",
            leave_time=LeaveTime.FULL_DAY,
            leave_date=day,
        ),
    ).unwrap()


def backdate(db, leave_id, created_at):
    db.get(Leave, leave_id).created_at = created_at
    db.commit()


def test_feed_lists_requests_after_since_newest_first(db, users):
    now = datetime.now(timezone.utc)
    old = submit(db, users["alice"].id, date(2025, 3, 3))
    mid = submit(db, users["bob"].id, date(2025, 3, 4))
    new = submit(db, users["alice"].id, date(2025, 3, 5))
    backdate(db, old.id, now - timedelta(days=3))
    backdate(db, mid.id, now - timedelta(hours=5))
    backdate(db, new.id, now - timedelta(minutes=5))

    feed = LeaveNotificationService(db).new_requests(now - timedelta(days=1)).unwrap()

    assert feed.count == 2
    assert [item.id for item in feed.items] == [new.id, mid.id]
    assert [item.employee_name for item in feed.items] == ["Alice Smith", "Bob Jones"]


def test_feed_without_since_returns_everything(db, users):
    submit(db, users["alice"].id, date(2025, 3, 3))
    submit(db, users["bob"].id, date(2025, 3, 4))

    feed = LeaveNotificationService(db).new_requests().unwrap()

    assert feed.count == 2
    assert feed.since is None


def test_feed_is_empty_after_latest_view(db, users):
    submit(db, users["alice"].id, date(2025, 3, 3))

    feed = LeaveNotificationService(db).new_requests(datetime.now(timezone.utc) + timedelta(minutes=1)).unwrap()

    assert feed.count == 0
    assert feed.items == []


def test_listener_counts_inserts_until_closed(db, users):
    bus = EventBus()
    listener = LeaveNotificationListener(bus=bus)

    first = submit(db, users["alice"].id, date(2025, 3, 3), bus=bus)
    submit(db, users["bob"].id, date(2025, 3, 4), bus=bus)
    LeaveService(db, bus=bus).delete(first.id)

    assert listener.count == 2
    assert listener.recent[0].record["user_id"] == users["bob"].id

    listener.mark_seen()
    assert listener.count == 0

    listener.close()
    submit(db, users["alice"].id, date(2025, 3, 5), bus=bus)
    assert listener.closed
    assert listener.count == 0
    assert bus.subscriber_count("leaves") == 0


def test_listener_as_context_manager():
    bus = EventBus()

    with LeaveNotificationListener(bus=bus) as listener:
        bus.publish(ChangeEvent("leaves", ChangeType.INSERT, {"id": "l1"}))
        assert listener.count == 1

    assert bus.subscriber_count() == 0


def test_listener_keeps_only_the_newest_events():
    bus = EventBus()

    with LeaveNotificationListener(bus=bus, recent_limit=3) as listener:
        for n in range(5):
            bus.publish(ChangeEvent("leaves", ChangeType.INSERT, {"id": f"l{n}"}))

        assert listener.count == 5
        assert [event.record["id"] for event in listener.recent] == ["l4", "l3", "l2"]


def test_bus_routes_by_table_and_change():
    bus = EventBus()
    received = []
    bus.subscribe("leaves", ChangeType.UPDATE, received.append)

    assert bus.publish(ChangeEvent("leaves", ChangeType.INSERT, {"id": "a"})) == 0
    assert bus.publish(ChangeEvent("users", ChangeType.UPDATE, {"id": "b"})) == 0
    assert bus.publish(ChangeEvent("leaves", ChangeType.UPDATE, {"id": "c"})) == 1
    assert [event.record["id"] for event in received] == ["c"]


def test_failing_handler_does_not_block_others():
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe("leaves", ChangeType.INSERT, broken)
    bus.subscribe("leaves", ChangeType.INSERT, received.append)

    assert bus.publish(ChangeEvent("leaves", ChangeType.INSERT)) == 1
    assert len(received) == 1


def test_subscription_context_manager_releases():
    bus = EventBus()

    with bus.subscribe("leaves", ChangeType.DELETE, lambda event: None) as subscription:
        assert bus.subscriber_count("leaves") == 1

    assert not subscription.active
    assert bus.subscriber_count("leaves") == 0
    subscription.unsubscribe()
