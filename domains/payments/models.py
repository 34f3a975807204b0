# domains/payments/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True, order=True)
class YearMonth:
    """Calendar month with no day component, e.g. YearMonth(2024, 3) -> "2024-03"."""
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")

    @classmethod
    def of(cls, dt: datetime) -> "YearMonth":
        return cls(dt.year, dt.month)

    @classmethod
    def parse(cls, text: str) -> "YearMonth":
        y, _, m = (text or "").strip().partition("-")
        try:
            return cls(int(y), int(m))
        except ValueError:
            raise ValueError(f"expected YYYY-MM, got {text!r}") from None

    def contains(self, dt: datetime) -> bool:
        return dt.year == self.year and dt.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class User:
    email: str
    name: Optional[str] = None


@dataclass(frozen=True)
class PaymentItem:
    name: str
    regular_price: Decimal
    final_price: Decimal

    @property
    def discount(self) -> Decimal:
        # not clamped: a final price above the regular one gives a negative discount
        return self.regular_price - self.final_price

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "regularPrice": str(self.regular_price),
            "finalPrice": str(self.final_price),
        }


def zoned_key(dt: datetime) -> Tuple[Any, ...]:
    """
    Identity of a zoned timestamp: local wall time, offset and zone.
    Aware datetimes compare by instant only, so 23:30 UTC and 01:30+02:00
    the next day would otherwise be the same value.
    """
    return (dt.replace(tzinfo=None), dt.utcoffset(), dt.tzinfo)

def zoned_sort_key(dt: datetime) -> Tuple[Any, ...]:
    # instant first; equal instants ordered by local wall time, then zone name
    return (dt, dt.replace(tzinfo=None), str(dt.tzinfo))


@dataclass(frozen=True, eq=False)
class Payment:
    """
    A single payment. Equality and hashing cover every field, the payment
    date's offset and zone and the nested items included; identical payments
    collapse inside a set.
    """
    payment_date: datetime
    user: User
    payment_items: Tuple[PaymentItem, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # accept any iterable of items but store a tuple so the payment stays hashable
        if not isinstance(self.payment_items, tuple):
            object.__setattr__(self, "payment_items", tuple(self.payment_items))

    def _key(self) -> Tuple[Any, ...]:
        return (zoned_key(self.payment_date), self.user, self.payment_items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Payment):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    @property
    def total(self) -> Decimal:
        return sum((pi.final_price for pi in self.payment_items), Decimal("0"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "paymentDate": self.payment_date.isoformat(),
            "user": {"email": self.user.email, "name": self.user.name},
            "paymentItems": [pi.to_dict() for pi in self.payment_items],
            "total": str(self.total),
        }
