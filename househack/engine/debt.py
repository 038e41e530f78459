"""Amortizing loan payment.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, Overflow, localcontext

from househack.engine.validation import InvalidScenarioError

# Below 1E-60 a month the interest share of the payment is smaller than the
# context precision can show, so the loan amortizes flat.
NEGLIGIBLE_RATE_EXPONENT = -60

# Guard digits on top of the ones needed to hold every digit of 1 + r
_EXTRA_PRECISION = 10


def monthly_payment(principal: Decimal, monthly_rate: Decimal, number_of_payments: int) -> Decimal:
    """Fixed monthly principal + interest payment, unrounded.

    A zero (or negligible) rate amortizes flat (principal / n) instead of
    dividing by zero. Rates or terms whose growth factor exceeds the Decimal
    exponent range raise InvalidScenarioError.
    """
    if number_of_payments <= 0:
        raise InvalidScenarioError(f"number_of_payments must be > 0, got {number_of_payments}")
    if principal == 0:
        return Decimal("0")
    if monthly_rate == 0 or monthly_rate.adjusted() < NEGLIGIBLE_RATE_EXPONENT:
        return principal / number_of_payments

    r = monthly_rate
    n = number_of_payments
    with localcontext() as ctx:
        # 1 + r must keep every digit of a small r, or (1+r)^n - 1 loses them
        ctx.prec += max(0, -r.adjusted()) + _EXTRA_PRECISION
        try:
            # M = P * [r(1+r)^n] / [(1+r)^n - 1]
            factor = (1 + r) ** n
            growth = factor - 1
            if growth == 0:
                payment = principal / n
            else:
                payment = principal * (r * factor) / growth
        except Overflow:
            raise InvalidScenarioError(
                f"Payment overflows for monthly rate {r} over {n} payments"
            ) from None
    # Back to the caller's precision
    return +payment
