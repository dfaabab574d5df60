"""Immutable value objects shared across the domain layer."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel
from pydantic.config import ConfigDict

_CURRENCY_QUANTIZE = Decimal("0.01")
# prices are stored as NUMERIC(18, 2)
PRICE_INTEGER_DIGITS = 16


class Actor(BaseModel):
    """Identity stamped into ``created_by`` / ``modified_by`` audit columns."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str

    def as_audit(self) -> dict[str, int | str]:
        """Return the JSON blob stored in audit columns."""
        return self.model_dump(mode="json")


def parse_price(raw: str) -> Decimal:
    """Parse a decimal price string rounded to two places.

    Raises :class:`ValueError` for malformed, non-positive or out of range
    input.
    """
    try:
        value = Decimal(raw.strip())
    except InvalidOperation as exc:
        msg = f"'{raw}' is not a decimal number"
        raise ValueError(msg) from exc
    if not value.is_finite() or value <= 0:
        msg = "price must be greater than 0"
        raise ValueError(msg)
    try:
        price = value.quantize(_CURRENCY_QUANTIZE, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        msg = f"price must have at most {PRICE_INTEGER_DIGITS} integer digits"
        raise ValueError(msg) from exc
    if price.adjusted() >= PRICE_INTEGER_DIGITS:
        msg = f"price must have at most {PRICE_INTEGER_DIGITS} integer digits"
        raise ValueError(msg)
    return price


__all__ = ["PRICE_INTEGER_DIGITS", "Actor", "parse_price"]
