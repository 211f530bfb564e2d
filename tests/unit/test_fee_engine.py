"""Tests for the fee engine — charge computation and the platform/instructor split."""

from decimal import ROUND_HALF_UP, Decimal

import pytest

from src.lm_common.errors import InvalidAmountError
from src.lm_fees.domain.engine import (
    FeeSplit,
    compute_charge_amount,
    implied_base_price,
    processor_fee_for,
    split_fees,
)
from src.lm_fees.domain.schedule import FeeSchedule


class TestComputeChargeAmount:
    def test_ten_dollar_lesson(self, schedule: FeeSchedule) -> None:
        # (1000 + 30) / 0.971 = 1060.76 → 1061
        assert compute_charge_amount(1000, schedule) == 1061

    def test_five_dollar_lesson(self, schedule: FeeSchedule) -> None:
        assert compute_charge_amount(500, schedule) == 546

    def test_hundred_dollar_lesson(self, schedule: FeeSchedule) -> None:
        assert compute_charge_amount(10000, schedule) == 10330

    def test_zero_base_covers_fixed_fee(self, schedule: FeeSchedule) -> None:
        # 30 / 0.971 = 30.9 → 31
        assert compute_charge_amount(0, schedule) == 31

    def test_charge_covers_processor_fee(self, schedule: FeeSchedule) -> None:
        for base in [1, 99, 1000, 1499, 123456]:
            charge = compute_charge_amount(base, schedule)
            # Seller keeps the base price to within a cent of rounding
            assert charge - processor_fee_for(charge, schedule) >= base - 1

    def test_negative_raises(self, schedule: FeeSchedule) -> None:
        with pytest.raises(InvalidAmountError):
            compute_charge_amount(-1, schedule)

    def test_non_integer_raises(self, schedule: FeeSchedule) -> None:
        with pytest.raises(InvalidAmountError):
            compute_charge_amount(10.5, schedule)  # type: ignore[arg-type]

    def test_default_schedule_from_settings(self) -> None:
        assert compute_charge_amount(1000) == 1061

    def test_no_processor_fees(self) -> None:
        free_processing = FeeSchedule(15, 0, 0)
        assert compute_charge_amount(1000, free_processing) == 1000


class TestHelpers:
    def test_processor_fee(self, schedule: FeeSchedule) -> None:
        # 1061 * 0.029 = 30.77 → 31, + 30
        assert processor_fee_for(1061, schedule) == 61

    def test_implied_base(self, schedule: FeeSchedule) -> None:
        # 1061 / 1.029 = 1031.1 → 1031, - 30
        assert implied_base_price(1061, schedule) == 1001

    def test_implied_base_can_be_negative(self, schedule: FeeSchedule) -> None:
        assert implied_base_price(10, schedule) < 0


class TestSplitFees:
    def test_ten_dollar_charge(self, schedule: FeeSchedule) -> None:
        split = split_fees(1061, schedule)
        assert split == FeeSplit(platform_share=159, counterparty_share=902)

    def test_odd_charge(self, schedule: FeeSchedule) -> None:
        split = split_fees(1499, schedule)
        assert split == FeeSplit(platform_share=225, counterparty_share=1274)

    def test_five_dollar_charge(self, schedule: FeeSchedule) -> None:
        assert split_fees(546, schedule) == FeeSplit(82, 464)

    def test_hundred_dollar_charge(self, schedule: FeeSchedule) -> None:
        assert split_fees(10330, schedule) == FeeSplit(1550, 8780)

    def test_zero_charge(self, schedule: FeeSchedule) -> None:
        assert split_fees(0, schedule) == FeeSplit(0, 0)

    def test_charge_below_fixed_fee_goes_to_instructor(self, schedule: FeeSchedule) -> None:
        split = split_fees(30, schedule)
        assert split.platform_share == 0
        assert split.counterparty_share == 30

    def test_one_cent(self, schedule: FeeSchedule) -> None:
        assert split_fees(1, schedule) == FeeSplit(0, 1)

    def test_total_property(self, schedule: FeeSchedule) -> None:
        assert split_fees(1499, schedule).total == 1499

    def test_negative_raises(self, schedule: FeeSchedule) -> None:
        with pytest.raises(InvalidAmountError):
            split_fees(-100, schedule)

    def test_string_raises(self, schedule: FeeSchedule) -> None:
        with pytest.raises(InvalidAmountError):
            split_fees("1061", schedule)  # type: ignore[arg-type]

    def test_zero_platform_percent(self) -> None:
        no_cut = FeeSchedule.from_percent(0, "2.9", 30)
        assert split_fees(1061, no_cut) == FeeSplit(0, 1061)

    def test_full_platform_percent_is_clamped(self) -> None:
        # base fee 1001 + full processor fee 61 would exceed the charge
        all_platform = FeeSchedule.from_percent(100, "2.9", 30)
        assert split_fees(1061, all_platform) == FeeSplit(1061, 0)

    def test_no_processor_fees(self) -> None:
        plain = FeeSchedule(20, 0, 0)
        assert split_fees(1000, plain) == FeeSplit(200, 800)

    def test_instructor_share_near_configured_percent(self, schedule: FeeSchedule) -> None:
        for base in range(500, 10001, 250):
            charge = compute_charge_amount(base, schedule)
            split = split_fees(charge, schedule)
            ratio = split.counterparty_share / charge
            assert abs(ratio - 0.85) / 0.85 < 0.02, (base, charge, split)


def _reference_split(charge: int) -> tuple[int, int]:
    """Straightforward Decimal rendition of the split, rounded at each step."""
    def r(x: Decimal) -> int:
        return int(x.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    fee = r(Decimal(charge) * Decimal("0.029")) + 30
    base = r(Decimal(charge) / Decimal("1.029")) - 30
    if base <= 0:
        return 0, charge
    base_fee = r(Decimal(base) * Decimal("0.15"))
    share = r(Decimal(fee) * (Decimal(base_fee) / Decimal(base)))
    platform = min(base_fee + share, charge)
    return platform, charge - platform


class TestAgainstReference:
    @pytest.mark.parametrize("charge", [31, 100, 546, 999, 1061, 1499, 5000, 10330, 99999])
    def test_within_one_cent(self, schedule: FeeSchedule, charge: int) -> None:
        platform, counterparty = _reference_split(charge)
        split = split_fees(charge, schedule)
        assert abs(split.platform_share - platform) <= 1
        assert abs(split.counterparty_share - counterparty) <= 1
