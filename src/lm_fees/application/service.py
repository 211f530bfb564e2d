"""FeeQuoteService — exposes the fee engine to the API layer. No I/O."""

from src.lm_fees.application.schemas import FeeQuoteResponse, FeeScheduleResponse
from src.lm_fees.domain.engine import compute_charge_amount, processor_fee_for, split_fees
from src.lm_fees.domain.schedule import FeeSchedule, get_fee_schedule


class FeeQuoteService:
    def __init__(self, schedule: FeeSchedule | None = None) -> None:
        self._schedule = schedule

    @property
    def schedule(self) -> FeeSchedule:
        return self._schedule or get_fee_schedule()

    def get_schedule(self) -> FeeScheduleResponse:
        return FeeScheduleResponse.from_domain(self.schedule)

    def quote(self, base_price_cents: int) -> FeeQuoteResponse:
        sched = self.schedule
        charge = compute_charge_amount(base_price_cents, sched)
        return FeeQuoteResponse.from_split(
            base_price=base_price_cents,
            charge=charge,
            processor_fee=processor_fee_for(charge, sched),
            split=split_fees(charge, sched),
        )
