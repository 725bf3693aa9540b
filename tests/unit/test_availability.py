"""Tests for slot generation and availability."""
from datetime import date, datetime

import pytest

from barbershop.domain.appointments.availability import (
    available_slots,
    booking_horizon,
    calculate_end_time,
    generate_time_slots,
    is_bookable_label,
    is_slot_past,
    parse_slot_date,
    parse_slot_time,
)

DAY = date(2025, 6, 10)


class TestGenerateTimeSlots:
    def test_default_business_day_has_17_slots(self):
        slots = list(generate_time_slots())

        assert len(slots) == 17
        assert slots[0] == "09:00"
        assert slots[-1] == "17:00"
        assert "12:30" in slots

    def test_closing_hour_is_included(self):
        assert list(generate_time_slots(9, 10, 30)) == ["09:00", "09:30", "10:00"]

    def test_interval_that_does_not_divide_the_hour(self):
        assert list(generate_time_slots(9, 10, 45)) == ["09:00", "09:45"]

    def test_single_hour_day(self):
        assert list(generate_time_slots(12, 12, 30)) == ["12:00"]

    @pytest.mark.parametrize(
        "start, end, interval",
        [(9, 17, 0), (9, 17, -15), (18, 9, 30), (-1, 9, 30), (9, 24, 30)],
    )
    def test_invalid_configuration_raises(self, start, end, interval):
        with pytest.raises(ValueError):
            list(generate_time_slots(start, end, interval))


class TestParsing:
    def test_parse_time_and_date(self):
        assert parse_slot_time(" 09:30 ").strftime("%H:%M") == "09:30"
        assert parse_slot_date("2025-06-10") == DAY

    @pytest.mark.parametrize("value", ["9.30", "25:00", "noon", ""])
    def test_bad_time_raises(self, value):
        with pytest.raises(ValueError):
            parse_slot_time(value)

    @pytest.mark.parametrize("value", ["10/06/2025", "2025-13-01", "tomorrow"])
    def test_bad_date_raises(self, value):
        with pytest.raises(ValueError):
            parse_slot_date(value)

    def test_bookable_labels(self):
        assert is_bookable_label("09:00")
        assert is_bookable_label("17:00")
        assert not is_bookable_label("17:30")
        assert not is_bookable_label("09:15")


class TestPastSlots:
    def test_slot_at_now_is_past(self):
        assert is_slot_past(DAY, "10:00", datetime(2025, 6, 10, 10, 0))

    def test_slot_one_minute_ahead_is_not_past(self):
        assert not is_slot_past(DAY, "10:00", datetime(2025, 6, 10, 9, 59))

    def test_earlier_day_is_past(self):
        assert is_slot_past(date(2025, 6, 9), "17:00", datetime(2025, 6, 10, 8, 0))


class TestAvailableSlots:
    def test_future_day_without_bookings_returns_everything(self):
        now = datetime(2025, 6, 1, 12, 0)
        assert available_slots(DAY, [], now) == list(generate_time_slots())

    def test_booked_slots_are_removed(self):
        now = datetime(2025, 6, 1, 12, 0)
        free = available_slots(DAY, ["10:00", "13:30"], now)

        assert "10:00" not in free
        assert "13:30" not in free
        assert len(free) == 15

    def test_today_drops_past_slots(self):
        now = datetime(2025, 6, 10, 12, 10)
        free = available_slots(DAY, ["14:00"], now)

        assert free[0] == "12:30"
        assert "14:00" not in free
        assert all(not is_slot_past(DAY, label, now) for label in free)

    def test_past_day_has_nothing(self):
        assert available_slots(DAY, [], datetime(2025, 6, 11, 8, 0)) == []

    def test_result_is_candidates_minus_past_minus_booked(self):
        now = datetime(2025, 6, 10, 10, 0)
        booked = {"11:00", "15:30"}
        candidates = list(generate_time_slots())

        expected = [
            s for s in candidates if s not in booked and not is_slot_past(DAY, s, now)
        ]
        assert available_slots(DAY, booked, now) == expected

    def test_custom_candidates(self):
        now = datetime(2025, 6, 1, 8, 0)
        assert available_slots(DAY, ["10:00"], now, slots=["10:00", "11:00"]) == ["11:00"]


class TestEndTime:
    def test_simple_duration(self):
        assert calculate_end_time("10:00", 45) == "10:45"

    def test_crosses_the_hour(self):
        assert calculate_end_time("16:30", 90) == "18:00"

    def test_zero_duration(self):
        assert calculate_end_time("09:00", 0) == "09:00"

    def test_no_wrap_past_midnight(self):
        assert calculate_end_time("23:30", 60) == "24:30"

    def test_negative_duration_raises(self):
        with pytest.raises(ValueError):
            calculate_end_time("10:00", -5)


def test_booking_horizon():
    assert booking_horizon(date(2025, 6, 1), 365) == date(2026, 6, 1)
