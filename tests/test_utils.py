"""Tests for shared utility functions."""

from booking_sync.utils import generate_id, is_valid_date, is_valid_time_range


class TestGenerateId:
    def test_prefix_and_length(self):
        value = generate_id("CASE")
        assert value.startswith("CASE-")
        assert len(value) == len("CASE-") + 6

    def test_ids_differ(self):
        assert len({generate_id("APT") for _ in range(50)}) == 50


class TestIsValidDate:
    def test_iso_date(self):
        assert is_valid_date("2025-09-18")

    def test_rejects_other_formats(self):
        assert not is_valid_date("18/09/2025")
        assert not is_valid_date("2025-02-30")


class TestIsValidTimeRange:
    def test_valid_range(self):
        assert is_valid_time_range("09:00-10:00")

    def test_surrounding_whitespace_ok(self):
        assert is_valid_time_range("  15:00-16:00 ")

    def test_end_before_start(self):
        assert not is_valid_time_range("10:00-09:00")

    def test_zero_length(self):
        assert not is_valid_time_range("10:00-10:00")

    def test_out_of_range_hour(self):
        assert not is_valid_time_range("25:00-26:00")

    def test_free_text(self):
        assert not is_valid_time_range("morning")
