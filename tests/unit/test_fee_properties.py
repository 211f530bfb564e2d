"""Property-based tests for the fee engine."""

from hypothesis import given
from hypothesis import strategies as st

from src.lm_fees.domain.engine import compute_charge_amount, split_fees
from src.lm_fees.domain.schedule import FeeSchedule

DEFAULT = FeeSchedule.from_percent(15, "2.9", 30)

cents = st.integers(min_value=0, max_value=10**9)

schedules = st.builds(
    FeeSchedule,
    platform_fee_percent=st.integers(min_value=0, max_value=100),
    processor_fee_bps=st.integers(min_value=0, max_value=2_000),
    processor_fixed_fee_cents=st.integers(min_value=0, max_value=500),
)


@given(cents)
def test_split_conserves_charge(charge: int) -> None:
    split = split_fees(charge, DEFAULT)
    assert split.platform_share + split.counterparty_share == charge


@given(cents)
def test_split_is_non_negative(charge: int) -> None:
    split = split_fees(charge, DEFAULT)
    assert split.platform_share >= 0
    assert split.counterparty_share >= 0


@given(cents, schedules)
def test_split_invariants_hold_for_any_schedule(charge: int, schedule: FeeSchedule) -> None:
    split = split_fees(charge, schedule)
    assert split.total == charge
    assert 0 <= split.platform_share <= charge


@given(cents, cents)
def test_charge_is_monotonic(a: int, b: int) -> None:
    low, high = sorted((a, b))
    assert compute_charge_amount(low, DEFAULT) <= compute_charge_amount(high, DEFAULT)


@given(cents)
def test_charge_never_below_base(base: int) -> None:
    assert compute_charge_amount(base, DEFAULT) >= base


@given(cents)
def test_split_is_deterministic(charge: int) -> None:
    assert split_fees(charge, DEFAULT) == split_fees(charge, DEFAULT)
