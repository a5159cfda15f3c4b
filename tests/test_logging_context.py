"""Tests for operation id propagation through registry calls."""

import logging

from booking_sync.errors import operation
from booking_sync.logging_context import (
    NO_OP_ID,
    OpIdFilter,
    get_op_id,
    get_op_logger,
    reset_op_id,
    set_op_id,
)
from booking_sync.storage import Collection
from tests.conftest import make_appointment, make_case


class TestOpIdContext:
    def test_default(self):
        assert get_op_id() == NO_OP_ID

    def test_set_and_reset(self):
        token = set_op_id("OP-test")
        assert get_op_id() == "OP-test"
        reset_op_id(token)
        assert get_op_id() == NO_OP_ID

    def test_filter_attached_once(self):
        logger = get_op_logger("booking_sync.test_logger")
        get_op_logger("booking_sync.test_logger")
        assert sum(isinstance(f, OpIdFilter) for f in logger.filters) == 1

    def test_filter_stamps_record(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        token = set_op_id("OP-stamp")
        try:
            OpIdFilter().filter(record)
        finally:
            reset_op_id(token)
        assert record.op_id == "OP-stamp"


class TestOperationBoundary:
    def test_operation_assigns_and_clears_id(self):
        seen = []

        @operation()
        def emit():
            seen.append(get_op_id())

        emit()
        assert seen[0].startswith("OP-")
        assert get_op_id() == NO_OP_ID

    def test_cascade_shares_one_op_id(self, sync):
        case = sync.cases.add(make_case(name="A", phone="111"))
        sync.appointments.add(make_appointment(name="A", phone="111"))
        ids = []
        for collection in Collection:
            sync.subscribe(collection, lambda payload: ids.append(get_op_id()))
        sync.cases.delete(case.id)
        assert len(ids) == 3
        assert len(set(ids)) == 1

    def test_sentinel_factory_returns_fresh_value(self):
        from booking_sync.errors import NotFoundError

        @operation(default=list)
        def failing():
            raise NotFoundError("missing")

        first = failing()
        first.append("x")
        assert failing() == []
