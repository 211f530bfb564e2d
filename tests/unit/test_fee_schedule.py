"""Tests for FeeSchedule validation and construction."""

from decimal import Decimal

import pytest

from src.lm_fees.domain.schedule import FeeSchedule, get_fee_schedule


class TestFeeSchedule:
    def test_from_percent(self) -> None:
        schedule = FeeSchedule.from_percent(15, Decimal("2.9"), 30)
        assert schedule.processor_fee_bps == 290
        assert schedule.processor_percent_fee == Decimal("2.9")
        assert schedule.counterparty_fee_percent == 85

    def test_from_percent_accepts_strings_and_ints(self) -> None:
        assert FeeSchedule.from_percent(10, "3.25", 0).processor_fee_bps == 325
        assert FeeSchedule.from_percent(10, 3, 0).processor_fee_bps == 300

    def test_sub_basis_point_rejected(self) -> None:
        with pytest.raises(ValueError, match="basis points"):
            FeeSchedule.from_percent(15, "2.905", 30)

    def test_platform_percent_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            FeeSchedule(101, 290, 30)
        with pytest.raises(ValueError):
            FeeSchedule(-1, 290, 30)

    def test_processor_percent_must_be_below_100(self) -> None:
        with pytest.raises(ValueError):
            FeeSchedule(15, 10_000, 30)

    def test_negative_fixed_fee(self) -> None:
        with pytest.raises(ValueError):
            FeeSchedule(15, 290, -1)

    def test_frozen(self) -> None:
        schedule = FeeSchedule(15, 290, 30)
        with pytest.raises(AttributeError):
            schedule.platform_fee_percent = 20  # type: ignore[misc]


def test_process_schedule_from_settings() -> None:
    schedule = get_fee_schedule()
    assert schedule == FeeSchedule(15, 290, 30)
    assert get_fee_schedule() is schedule
