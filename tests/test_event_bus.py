"""Tests for the per-collection event bus."""

import logging

import pytest

from booking_sync.storage import Collection
from booking_sync.sync import EventBus
from tests.conftest import Recorder


class TestSubscribePublish:
    def setup_method(self):
        self.bus = EventBus()

    def test_publish_reaches_subscriber_with_full_payload(self):
        rec = Recorder()
        self.bus.subscribe(Collection.CASES, rec)
        payload = [{"name": "A"}, {"name": "B"}]
        self.bus.publish(Collection.CASES, payload)
        assert rec.calls == [payload]

    def test_delivery_in_registration_order(self):
        order = []
        self.bus.subscribe(Collection.APPOINTMENTS, lambda p: order.append("first"))
        self.bus.subscribe(Collection.APPOINTMENTS, lambda p: order.append("second"))
        self.bus.publish(Collection.APPOINTMENTS, [])
        assert order == ["first", "second"]

    def test_other_collections_not_notified(self):
        rec = Recorder()
        self.bus.subscribe(Collection.CASES, rec)
        self.bus.publish(Collection.BOOKED_SLOTS, {})
        assert rec.calls == []

    def test_raw_storage_key_accepted(self):
        rec = Recorder()
        self.bus.subscribe("bookedSlots", rec)
        self.bus.publish(Collection.BOOKED_SLOTS, {"2025-09-18": []})
        assert len(rec.calls) == 1

    def test_unknown_collection_rejected(self):
        with pytest.raises(ValueError):
            self.bus.subscribe("bookings", Recorder())

    def test_publish_without_subscribers_is_noop(self):
        self.bus.publish(Collection.CASES, [])


class TestFailingCallback:
    def test_failure_does_not_stop_others(self, caplog):
        bus = EventBus()
        rec = Recorder()

        def broken(payload):
            raise RuntimeError("render failed")

        bus.subscribe(Collection.CASES, broken)
        bus.subscribe(Collection.CASES, rec)
        with caplog.at_level(logging.ERROR):
            bus.publish(Collection.CASES, ["x"])
        assert rec.calls == [["x"]]
        assert "Error in caseDatabase change callback" in caplog.text


class TestUnsubscribe:
    def test_removes_only_first_registration(self):
        bus = EventBus()
        rec = Recorder()
        bus.subscribe(Collection.CASES, rec)
        bus.subscribe(Collection.CASES, rec)
        bus.unsubscribe(Collection.CASES, rec)
        bus.publish(Collection.CASES, [])
        assert len(rec.calls) == 1
        assert bus.subscriber_count(Collection.CASES) == 1

    def test_absent_callback_is_noop(self):
        bus = EventBus()
        bus.unsubscribe(Collection.CASES, Recorder())
        assert bus.subscriber_count(Collection.CASES) == 0

    def test_callback_may_unsubscribe_itself(self):
        bus = EventBus()
        rec = Recorder()

        def once(payload):
            bus.unsubscribe(Collection.CASES, once)

        bus.subscribe(Collection.CASES, once)
        bus.subscribe(Collection.CASES, rec)
        bus.publish(Collection.CASES, [1])
        bus.publish(Collection.CASES, [2])
        assert rec.calls == [[1], [2]]
        assert bus.subscriber_count(Collection.CASES) == 1
