"""Fee engine — customer charge and platform/instructor split.

Both functions are pure: they read only the (immutable) FeeSchedule and are
safe to call from any number of concurrent requests. Every caller that needs
a charge or a split (checkout, verification, webhook, quotes) goes through
here; nothing re-derives the arithmetic locally.

Rounding is half-up on exact rationals (see cents.div_round_half_up).
"""

from dataclasses import dataclass

from src.lm_common.cents import div_round_half_up, validate_amount
from src.lm_fees.domain.schedule import BPS_DENOMINATOR, FeeSchedule, get_fee_schedule


@dataclass(frozen=True)
class FeeSplit:
    platform_share: int       # cents, sent as the application fee
    counterparty_share: int   # cents, ends up with the instructor

    @property
    def total(self) -> int:
        return self.platform_share + self.counterparty_share


def compute_charge_amount(
    base_price_cents: int, schedule: FeeSchedule | None = None
) -> int:
    """Customer charge that leaves base_price_cents after processor fees.

    charge = round((base + fixed) / (1 - pct/100))
           = round((base + fixed) * 10000 / (10000 - bps))
    """
    base = validate_amount(base_price_cents)
    sched = schedule or get_fee_schedule()
    return div_round_half_up(
        (base + sched.processor_fixed_fee_cents) * BPS_DENOMINATOR,
        BPS_DENOMINATOR - sched.processor_fee_bps,
    )


def processor_fee_for(charge_cents: int, schedule: FeeSchedule | None = None) -> int:
    """Processor fee on a charge: round(charge * pct/100) + fixed."""
    charge = validate_amount(charge_cents)
    sched = schedule or get_fee_schedule()
    return (
        div_round_half_up(charge * sched.processor_fee_bps, BPS_DENOMINATOR)
        + sched.processor_fixed_fee_cents
    )


def implied_base_price(charge_cents: int, schedule: FeeSchedule | None = None) -> int:
    """Pre-fee base price implied by a charge: round(charge / (1 + pct/100) - fixed).

    May be zero or negative for charges that do not cover the fixed fee.
    """
    charge = validate_amount(charge_cents)
    sched = schedule or get_fee_schedule()
    return (
        div_round_half_up(
            charge * BPS_DENOMINATOR, BPS_DENOMINATOR + sched.processor_fee_bps
        )
        - sched.processor_fixed_fee_cents
    )


def split_fees(charge_cents: int, schedule: FeeSchedule | None = None) -> FeeSplit:
    """Split a fee-inclusive charge between platform and instructor.

    The platform takes its percentage of the implied base price plus the same
    proportion of the processor fee. The instructor gets the remainder, so
    the two shares always sum to charge_cents exactly.
    """
    charge = validate_amount(charge_cents)
    sched = schedule or get_fee_schedule()

    base = implied_base_price(charge, sched)
    if base <= 0:
        return FeeSplit(platform_share=0, counterparty_share=charge)

    processor_fee = processor_fee_for(charge, sched)
    platform_base_fee = div_round_half_up(base * sched.platform_fee_percent, 100)
    # processor_fee * (platform_base_fee / base), rounded once
    platform_fee_share = div_round_half_up(processor_fee * platform_base_fee, base)

    platform_share = min(platform_base_fee + platform_fee_share, charge)
    return FeeSplit(platform_share=platform_share, counterparty_share=charge - platform_share)
