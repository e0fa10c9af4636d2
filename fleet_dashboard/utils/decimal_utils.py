"""Helpers for Decimal normalization."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from fleet_dashboard.infrastructure.logging.logger import get_app_logger

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _zero_fallback(value, logger) -> Decimal:
    (logger or get_app_logger()).warning(
        f"Unparseable amount {value!r}; using 0"
    )
    return Decimal("0")


def parse_amount(value, logger=None) -> Decimal:
    """Parse a currency amount without ever raising.

    Strings may carry currency symbols, thousands separators or spaces;
    everything except digits, the decimal point and the minus sign is
    stripped before conversion. Unparseable input yields zero and a
    warning; missing or blank input yields zero silently.

    Args:
        value: Raw amount (number, numeric string, or currency string).
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        Decimal: Parsed amount, or ``Decimal("0")`` on failure.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        return _zero_fallback(value, logger)
    if isinstance(value, (int, float, Decimal)):
        try:
            parsed = coerce_decimal(value)
        except InvalidOperation:
            return _zero_fallback(value, logger)
        return parsed if parsed.is_finite() else _zero_fallback(value, logger)
    text = str(value).strip()
    if not text:
        return Decimal("0")
    cleaned = _NON_NUMERIC.sub("", text)
    if cleaned in ("", "-", ".", "-."):
        return _zero_fallback(value, logger)
    try:
        parsed = Decimal(cleaned)
    except InvalidOperation:
        return _zero_fallback(value, logger)
    return parsed if parsed.is_finite() else _zero_fallback(value, logger)


def quantize_currency(value: Decimal) -> Decimal:
    """Round a Decimal to cents using half-up rounding."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


__all__ = ["coerce_decimal", "parse_amount", "quantize_currency"]
