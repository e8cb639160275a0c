"""Exact decimal handling for monetary amounts."""

from decimal import Decimal, InvalidOperation, localcontext

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


# accepted amounts never need more than 26 significant digits
MAX_INTEGER_DIGITS = 16
MAX_DECIMAL_PLACES = 10
# room for the sum of any realistic number of bounded amounts
SUM_PRECISION = 60


def parse_amount(value) -> Decimal:
    """Parse a JSON amount (string or number) into a finite Decimal.

    A decimal comma is accepted, so ``"12,5"`` equals ``"12.5"``.

    Raises:
        ValueError: If the value is empty, not numeric, or not finite. Also if it
            has more than MAX_INTEGER_DIGITS integer digits or more than
            MAX_DECIMAL_PLACES decimal places.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError("amount must be numeric")
    if isinstance(value, float):
        # go through repr so 0.1 stays 0.1
        value = repr(value)
    text = str(value).strip().replace(",", ".")
    if not text:
        raise ValueError("amount must be numeric")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError("amount must be numeric") from None
    if not amount.is_finite():
        raise ValueError("amount must be numeric")
    if amount.adjusted() > MAX_INTEGER_DIGITS - 1:
        raise ValueError("amount is out of range")
    if amount.as_tuple().exponent < -MAX_DECIMAL_PLACES:
        raise ValueError("amount has too many decimal places")
    return amount


def format_amount(amount) -> str:
    if amount is None:
        return "0"
    return format(amount, "f")


def total(amounts) -> Decimal:
    """Exact sum; the default 28-digit context would round large totals."""
    with localcontext() as ctx:
        ctx.prec = SUM_PRECISION
        return sum(amounts, Decimal("0"))


class DecimalString(TypeDecorator):
    """Store a Decimal as its exact text so no float rounding reaches the database."""

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)

