"""
Money helpers.

Every amount inside the ledger is an integer number of cents. Decimal is
used only at the edges: parsing user input and rendering for display.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List

from src.domain.exceptions import InvalidInputException

from .settings import LedgerSettings, ledger_settings

CENT = Decimal("0.01")


def to_cents(amount: Decimal | int | float | str) -> int:
    """
    Convert a decimal amount to integer cents, rounding half up.

    Floats go through `str` first so 0.1 + 0.2 style artifacts never
    reach the ledger.

    Examples:
        >>> to_cents("1234.565")
        123457
        >>> to_cents(10)
        1000
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise InvalidInputException(f"Not a monetary amount: {amount!r}") from None
    if not value.is_finite():
        raise InvalidInputException(f"Not a monetary amount: {amount!r}")
    return int(value.quantize(CENT, rounding=ROUND_HALF_UP) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def split_rounded(total_cents: int, parts: int) -> List[int]:
    """
    Split an amount into `parts` integers that sum exactly to it.

    Largest-remainder split: every part gets the floor of the division and
    the first `total % parts` parts get one extra cent, so the remainder
    is always front-loaded starting at index 1.

    Examples:
        >>> split_rounded(100, 3)
        [34, 33, 33]
        >>> split_rounded(1, 3)
        [1, 0, 0]

    Raises:
        InvalidInputException: If parts < 1 or the total is negative
    """
    if parts < 1:
        raise InvalidInputException("Cannot split into fewer than one part")
    if total_cents < 0:
        raise InvalidInputException("Cannot split a negative amount")

    base, remainder = divmod(total_cents, parts)
    return [base + 1 if i < remainder else base for i in range(parts)]


def format_money(cents: int, settings: LedgerSettings | None = None) -> str:
    """
    Render cents for display, e.g. 123456 -> "R$ 1.234,56".

    Never feed the result back into arithmetic.
    """
    settings = settings or ledger_settings

    sign = "-" if cents < 0 else ""
    units, rest = divmod(abs(cents), 100)
    grouped = f"{units:,}".replace(",", settings.thousands_separator)
    return f"{sign}{settings.currency_symbol} {grouped}{settings.decimal_separator}{rest:02d}"
