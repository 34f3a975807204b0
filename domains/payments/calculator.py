# domains/payments/calculator.py
from __future__ import annotations
import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Set

from core.domains.base import Clock, PaymentSource
from domains.payments.models import Payment, PaymentItem, YearMonth, zoned_sort_key

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _days_between(earlier: datetime, later: datetime) -> int:
    # calendar days between the two local dates, each taken in its own zone
    return (later.date() - earlier.date()).days

def _items(payments: Iterable[Payment]) -> Iterable[PaymentItem]:
    for pay in payments:
        yield from pay.payment_items


class PaymentQueryService:
    """
    Read-only reporting queries over the payments returned by `source`.

    Every query fetches a fresh snapshot from the source; nothing is cached
    between calls and the payments are never modified. Errors raised by the
    source or the clock reach the caller as they are.
    """

    def __init__(self, source: PaymentSource, clock: Clock):
        self.source = source
        self.clock = clock

    def _all(self) -> List[Payment]:
        payments = list(self.source.get_all())
        logger.debug("[payments] fetched %d payments", len(payments))
        return payments

    def find_payments_sorted_by_date_desc(self) -> List[Payment]:
        # sorted() is stable, so identical zoned timestamps keep their input order
        return sorted(self._all(), key=lambda pay: zoned_sort_key(pay.payment_date), reverse=True)

    def find_payments_for_current_month(self) -> List[Payment]:
        return self.find_payments_for_given_month(self.clock.year_month_now())

    def find_payments_for_given_month(self, year_month: YearMonth) -> List[Payment]:
        out = [pay for pay in self._all() if year_month.contains(pay.payment_date)]
        logger.debug("[payments] %d payments in %s", len(out), year_month)
        return out

    def find_payments_for_given_last_days(self, days: int) -> List[Payment]:
        """
        Payments at most `days` calendar days before today.

        The difference is signed: a payment dated after today gives a negative
        count and is always included.
        """
        now = self.clock.now()
        return [pay for pay in self._all() if _days_between(pay.payment_date, now) <= days]

    def find_payments_with_one_payment_item(self) -> Set[Payment]:
        return {pay for pay in self._all() if len(pay.payment_items) == 1}

    def find_products_sold_in_current_month(self) -> Set[str]:
        payments = self.find_payments_for_given_month(self.clock.year_month_now())
        return {pi.name for pi in _items(payments)}

    def sum_total_for_given_month(self, year_month: YearMonth) -> Decimal:
        return sum((pi.final_price for pi in _items(self.find_payments_for_given_month(year_month))), ZERO)

    def sum_discount_for_given_month(self, year_month: YearMonth) -> Decimal:
        return sum((pi.discount for pi in _items(self.find_payments_for_given_month(year_month))), ZERO)

    def get_payment_items_for_user_with_email(self, user_email: str) -> List[PaymentItem]:
        return list(_items(pay for pay in self._all() if pay.user.email == user_email))

    def find_payments_with_value_over(self, value: int) -> Set[Payment]:
        threshold = Decimal(value)
        return {pay for pay in self._all() if pay.total > threshold}
