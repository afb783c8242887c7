"""Pure functions for splitting a gift price into quotas.

This module contains the functional core for quota previews:
- No I/O operations
- No side effects
- Exact integer arithmetic on centavos after one initial rounding

A quota split is a display value only; the backend never receives it.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, DecimalException

from giftlist.domain.models import Money

MIN_QUOTAS = 1
MAX_QUOTAS = 100

# The gift form itself refuses more than this many quotas
MAX_FORM_QUOTAS = 30


@dataclass(frozen=True)
class QuotaSplit:
    """Immutable result of splitting an amount into quotas.

    When has_remainder is True the split reads as (count - 1) quotas of
    base plus one final quota of last, which absorbs the whole remainder.
    Otherwise all quotas equal base.
    """

    count: int
    base_cents: Money
    last_cents: Money
    has_remainder: bool

    @property
    def base(self) -> Decimal:
        """Base quota in reais."""
        return Decimal(self.base_cents) / 100

    @property
    def last(self) -> Decimal:
        """Final quota in reais."""
        return Decimal(self.last_cents) / 100


def clamp_quota_count(count: int) -> int:
    """Clamp a user-typed quota count to 1-100."""
    return max(MIN_QUOTAS, min(count, MAX_QUOTAS))


def to_cents(amount: int | float | Decimal | str) -> Money:
    """Round an amount in reais to the nearest centavo.

    Floats are rounded on their binary value of amount * 100 with halves
    going up, so 0.285 (stored as 0.28499...) gives 28 centavos. Decimal,
    int and str amounts are exact and their halves round away from zero.

    Args:
        amount: Amount in reais. Strings must be plain decimals ("150.50").

    Returns:
        Amount in centavos. Unparseable or non-finite input gives 0.
    """
    if isinstance(amount, float):
        scaled = amount * 100
        if not math.isfinite(scaled):
            return Money(0)
        return Money(math.floor(scaled + 0.5))

    try:
        value = Decimal(amount)
        if not value.is_finite():
            return Money(0)
        cents = (value * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    except (DecimalException, ValueError, TypeError):
        return Money(0)

    return Money(int(cents))


def split_quotas(amount: int | float | Decimal | str, count: int) -> QuotaSplit:
    """Split an amount into count quotas.

    Args:
        amount: Gift price in reais.
        count: Desired number of quotas, clamped to 1-100.

    Returns:
        QuotaSplit. An amount of zero or less gives the all-zero split.
    """
    count = clamp_quota_count(count)
    total_cents = to_cents(amount)

    if total_cents <= 0:
        return QuotaSplit(count=count, base_cents=Money(0), last_cents=Money(0), has_remainder=False)

    base_cents = total_cents // count
    remainder_cents = total_cents - base_cents * count

    return QuotaSplit(
        count=count,
        base_cents=Money(base_cents),
        last_cents=Money(base_cents + remainder_cents),
        has_remainder=remainder_cents != 0,
    )


def quota_lines(split: QuotaSplit) -> list[tuple[int, Money]]:
    """Rows to display for a split.

    Args:
        split: Result of split_quotas.

    Returns:
        List of (times, centavos). One row for an even split, two rows
        (count - 1 of base, then 1 of last) when there is a remainder.
    """
    if not split.has_remainder:
        return [(split.count, split.base_cents)]

    # has_remainder implies count >= 2, so the first row is never empty
    return [(split.count - 1, split.base_cents), (1, split.last_cents)]


def validate_quota_count(count: int) -> tuple[bool, str | None]:
    """Validate the quota count the gift form accepts.

    Args:
        count: Quota count as typed.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if count < MIN_QUOTAS:
        return False, "A quantidade mínima de cotas é 1"

    if count > MAX_FORM_QUOTAS:
        return False, f"O máximo de cotas é {MAX_FORM_QUOTAS}"

    return True, None


def suggest_quota_count(price: Money) -> int:
    """Guess a quota count for an existing gift.

    The count is not stored with the gift, so editing starts from one
    quota per R$ 100 of price (rounded, at least 1).

    Args:
        price: Gift price in centavos.

    Returns:
        Suggested quota count, 1-100.
    """
    if price <= 0:
        return MIN_QUOTAS

    # round(price / R$ 100) with halves rounding up
    return clamp_quota_count((price + 5000) // 10000)
