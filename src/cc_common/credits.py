"""Integer arithmetic utilities for Carbon Credit (CC) amounts.

All prices, amounts, and balances use int (cents of CC).
All percentages use int basis points (1% = 100 bps). No float, no Decimal.
Rounding is half-up (away from zero on ties).
"""

BPS_PER_UNIT = 10_000


def div_round_half_up(numerator: int, denominator: int) -> int:
    """Integer division rounding half away from zero. denominator must be > 0."""
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    if numerator >= 0:
        return (2 * numerator + denominator) // (2 * denominator)
    return -((-2 * numerator + denominator) // (2 * denominator))


def apply_bps(price_cents: int, change_bps: int) -> int:
    """round2(price × (1 + change/100%)) in cents. May return <= 0 for change <= -100%."""
    return div_round_half_up(price_cents * (BPS_PER_UNIT + change_bps), BPS_PER_UNIT)


def change_bps(base_cents: int, current_cents: int) -> int:
    """Percent change from base to current, in bps: round((current/base - 1) × 10000)."""
    return div_round_half_up((current_cents - base_cents) * BPS_PER_UNIT, base_cents)


def ratio_bps(part: int, whole: int) -> int:
    """part / whole in bps; 0 when whole is 0."""
    if whole == 0:
        return 0
    return div_round_half_up(part * BPS_PER_UNIT, whole)


def bps_to_percent(bps: int) -> float:
    """Presentation only: -1500 -> -15.0."""
    return bps / 100


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 8500 -> '85.00 CC', -1200 -> '-12.00 CC'."""
    if cents < 0:
        abs_cents = -cents
        return f"-{abs_cents // 100:,}.{abs_cents % 100:02d} CC"
    return f"{cents // 100:,}.{cents % 100:02d} CC"
