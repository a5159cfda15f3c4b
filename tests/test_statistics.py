"""Tests for dashboard counters."""

from tests.conftest import make_appointment, make_case


class TestDataStatistics:
    def test_counts_on_seeded_store(self, sync):
        sync.initialize()
        stats = sync.statistics
        assert stats.total_appointments() == 1
        assert stats.active_appointment_count() == 1
        assert stats.approved_case_count() == 1
        assert stats.pending_case_count() == 1
        assert stats.rejected_case_count() == 1

    def test_cancelled_appointments_still_counted_in_total(self, sync):
        booked = sync.appointments.add(make_appointment())
        sync.appointments.cancel(booked.id)
        assert sync.statistics.total_appointments() == 1
        assert sync.statistics.active_appointment_count() == 0

    def test_counts_follow_status_changes(self, sync):
        case = sync.cases.add(make_case())
        assert sync.statistics.pending_case_count() == 1
        sync.cases.update_status(case.id, "approved")
        assert sync.statistics.pending_case_count() == 0
        assert sync.statistics.approved_case_count() == 1

    def test_empty_store(self, sync):
        assert sync.statistics.total_appointments() == 0
        assert sync.statistics.approved_case_count() == 0
