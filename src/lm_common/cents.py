"""Integer arithmetic utilities for cents-based money.

All prices, charges, fees and payouts are int (cents). Fractions only appear
as exact rationals (numerator, denominator) and are rounded here; no float.
"""

from src.lm_common.errors import InvalidAmountError


def validate_amount(amount: object) -> int:
    """Return amount unchanged if it is a non-negative int, else raise.

    bool is rejected even though it subclasses int.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidAmountError(amount)
    return amount


def div_round_half_up(numerator: int, denominator: int) -> int:
    """Round numerator / denominator to the nearest int, ties toward +inf.

    floor(n/d + 1/2) == (2n + d) // 2d for any int n and positive d.
    For non-negative operands this is also half-away-from-zero.
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    return (2 * numerator + denominator) // (2 * denominator)


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 6500 -> '$65.00', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"
