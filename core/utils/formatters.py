# core/utils/formatters.py
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENTS = Decimal("0.01")

def fmt_money(x: Any) -> str:
    """
    Format a monetary value as currency, e.g. '$1,234.50'.
    Returns '$0.00' for values that are not numbers.
    """
    try:
        d = Decimal(str(x)).quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return "$0.00"
    sign = "-" if d < 0 else ""
    return f"{sign}${abs(d):,.2f}"

def fmt_date(x: Any) -> str:
    """
    Format datetime-like values to YYYY-MM-DD.
    """
    if not x:
        return ""
    if isinstance(x, (datetime, date)):
        return x.strftime("%Y-%m-%d")
    return str(x)[:10]
