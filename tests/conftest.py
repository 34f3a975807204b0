"""
Shared fixtures for the payment reports tests.

The clock is frozen at 2024-03-25 12:00 UTC, so "current month" is 2024-03.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.semantics.temporal import FixedClock
from domains.payments.calculator import PaymentQueryService
from domains.payments.loader import InMemoryPaymentSource
from domains.payments.models import User

from factories import PaymentFactory, PaymentItemFactory

NOW = datetime(2024, 3, 25, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("PAYMENTS_CONFIG_FILE", "PAYMENTS_DATA_FILE", "PAYMENTS_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def make_service(clock):
    """Build a service over the given payments; the clock defaults to NOW."""

    def _make(payments=(), clock_=None):
        return PaymentQueryService(InMemoryPaymentSource(payments), clock_ or clock)

    return _make


@pytest.fixture
def payment_a():
    """2024-03-05, item X 10.00 -> 8.00."""
    return PaymentFactory(
        payment_date=datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc),
        user=User(email="ann@example.com", name="Ann"),
        payment_items=(PaymentItemFactory(name="X", regular_price=Decimal("10.00"), final_price=Decimal("8.00")),),
    )


@pytest.fixture
def payment_b():
    """2024-03-20, item Y 5.00 -> 5.00."""
    return PaymentFactory(
        payment_date=datetime(2024, 3, 20, 16, 0, tzinfo=timezone.utc),
        user=User(email="bob@example.com", name="Bob"),
        payment_items=(PaymentItemFactory(name="Y", regular_price=Decimal("5.00"), final_price=Decimal("5.00")),),
    )


@pytest.fixture
def march_service(make_service, payment_a, payment_b):
    return make_service([payment_a, payment_b])
