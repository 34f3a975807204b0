# core/semantics/temporal.py
from __future__ import annotations
from datetime import datetime, timezone, tzinfo
from typing import Optional
import re

from domains.payments.models import YearMonth

_YEAR_MONTH_RE = re.compile(r"\b(\d{4})-(0[1-9]|1[0-2])\b")


class SystemClock:
    """Wall clock in a fixed zone."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz or timezone.utc

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def year_month_now(self) -> YearMonth:
        return YearMonth.of(self.now())


class FixedClock:
    """Always reports the same instant."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            raise ValueError("FixedClock needs a timezone-aware datetime")
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def year_month_now(self) -> YearMonth:
        return YearMonth.of(self.instant)


def this_month(today: datetime) -> YearMonth:
    return YearMonth.of(today)

def last_month(today: datetime) -> YearMonth:
    m = today.month - 1 or 12
    y = today.year if today.month > 1 else today.year - 1
    return YearMonth(y, m)

def resolve_period(text: Optional[str], today: datetime) -> Optional[YearMonth]:
    """
    Returns the YearMonth named by `text`, or None if nothing matches:
      "2024-03" / "payments for 2024-03" -> YearMonth(2024, 3)
      "this month" / "current month"     -> month of `today`
      "last month" / "previous month"    -> month before `today`
    """
    if not text:
        return None
    t = str(text).strip().lower()

    m = _YEAR_MONTH_RE.search(t)
    if m:
        return YearMonth(int(m.group(1)), int(m.group(2)))

    if "this month" in t or "current month" in t:
        return this_month(today)
    if "last month" in t or "previous month" in t:
        return last_month(today)
    return None
