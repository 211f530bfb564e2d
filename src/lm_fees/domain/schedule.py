"""FeeSchedule — the immutable fee configuration the engine reads.

The processor percentage is held as integer basis points (2.9% -> 290 bps)
so every engine step stays in exact integer arithmetic.
"""

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

from config.settings import settings

BPS_DENOMINATOR = 10_000


@dataclass(frozen=True)
class FeeSchedule:
    platform_fee_percent: int        # 0-100, share of the seller base price
    processor_fee_bps: int           # processor percentage fee in basis points
    processor_fixed_fee_cents: int   # processor fixed per-transaction fee

    def __post_init__(self) -> None:
        if not (0 <= self.platform_fee_percent <= 100):
            raise ValueError(
                f"platform_fee_percent must be 0-100, got {self.platform_fee_percent}"
            )
        if not (0 <= self.processor_fee_bps < BPS_DENOMINATOR):
            raise ValueError(
                f"processor_fee_bps must be 0-{BPS_DENOMINATOR - 1}, got {self.processor_fee_bps}"
            )
        if self.processor_fixed_fee_cents < 0:
            raise ValueError(
                f"processor_fixed_fee_cents must be >= 0, got {self.processor_fixed_fee_cents}"
            )

    @classmethod
    def from_percent(
        cls,
        platform_fee_percent: int,
        processor_percent_fee: Decimal | str | int,
        processor_fixed_fee_cents: int,
    ) -> "FeeSchedule":
        """Build from a decimal percentage such as Decimal('2.9').

        Rejects percentages finer than one basis point.
        """
        bps = Decimal(processor_percent_fee) * 100
        if bps != bps.to_integral_value():
            raise ValueError(
                f"processor_percent_fee must be a whole number of basis points, "
                f"got {processor_percent_fee}"
            )
        return cls(
            platform_fee_percent=platform_fee_percent,
            processor_fee_bps=int(bps),
            processor_fixed_fee_cents=processor_fixed_fee_cents,
        )

    @property
    def processor_percent_fee(self) -> Decimal:
        return Decimal(self.processor_fee_bps) / 100

    @property
    def counterparty_fee_percent(self) -> int:
        return 100 - self.platform_fee_percent


@lru_cache(maxsize=1)
def get_fee_schedule() -> FeeSchedule:
    """Process-wide schedule, built from settings on first use."""
    return FeeSchedule.from_percent(
        platform_fee_percent=settings.PLATFORM_FEE_PERCENT,
        processor_percent_fee=settings.PROCESSOR_PERCENT_FEE,
        processor_fixed_fee_cents=settings.PROCESSOR_FIXED_FEE_CENTS,
    )
