"""Pydantic schemas for lm_fees quote API."""

from pydantic import BaseModel

from src.lm_common.cents import cents_to_display
from src.lm_fees.domain.engine import FeeSplit
from src.lm_fees.domain.schedule import FeeSchedule


class FeeScheduleResponse(BaseModel):
    platform_fee_percent: int
    instructor_percent: int
    processor_percent_fee: str   # decimal string, e.g. "2.9"
    processor_fixed_fee_cents: int
    processor_fixed_fee_display: str

    @classmethod
    def from_domain(cls, schedule: FeeSchedule) -> "FeeScheduleResponse":
        return cls(
            platform_fee_percent=schedule.platform_fee_percent,
            instructor_percent=schedule.counterparty_fee_percent,
            processor_percent_fee=str(schedule.processor_percent_fee.normalize()),
            processor_fixed_fee_cents=schedule.processor_fixed_fee_cents,
            processor_fixed_fee_display=cents_to_display(schedule.processor_fixed_fee_cents),
        )


class FeeQuoteResponse(BaseModel):
    base_price_cents: int
    base_price_display: str
    charge_amount_cents: int
    charge_amount_display: str
    processor_fee_cents: int
    processor_fee_display: str
    platform_share_cents: int
    platform_share_display: str
    instructor_share_cents: int
    instructor_share_display: str

    @classmethod
    def from_split(
        cls, base_price: int, charge: int, processor_fee: int, split: FeeSplit
    ) -> "FeeQuoteResponse":
        return cls(
            base_price_cents=base_price,
            base_price_display=cents_to_display(base_price),
            charge_amount_cents=charge,
            charge_amount_display=cents_to_display(charge),
            processor_fee_cents=processor_fee,
            processor_fee_display=cents_to_display(processor_fee),
            platform_share_cents=split.platform_share,
            platform_share_display=cents_to_display(split.platform_share),
            instructor_share_cents=split.counterparty_share,
            instructor_share_display=cents_to_display(split.counterparty_share),
        )
