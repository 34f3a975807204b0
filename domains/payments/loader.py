# domains/payments/loader.py
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone, tzinfo
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from domains.payments.models import Payment, PaymentItem, User

logger = logging.getLogger(__name__)


class PaymentDataError(ValueError):
    """A payments file could not be turned into Payment records."""


def _pick(row: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in row:
            return row[k]
    return None

def _parse_date(raw: Any, tz: tzinfo) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"paymentDate must be an ISO-8601 string, got {raw!r}")
    dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    # naive timestamps are read in the configured zone
    return dt if dt.tzinfo else dt.replace(tzinfo=tz)

def _parse_money(raw: Any, field_name: str) -> Decimal:
    if isinstance(raw, bool) or raw is None:
        raise ValueError(f"{field_name} is missing")
    try:
        # str() first so JSON floats keep the digits they were written with
        return Decimal(str(raw))
    except InvalidOperation:
        raise ValueError(f"{field_name} is not a number: {raw!r}") from None

def _parse_item(row: Dict[str, Any]) -> PaymentItem:
    return PaymentItem(
        name=str(_pick(row, "name", "productName") or ""),
        regular_price=_parse_money(_pick(row, "regularPrice", "regular_price"), "regularPrice"),
        final_price=_parse_money(_pick(row, "finalPrice", "final_price"), "finalPrice"),
    )

def parse_payment(row: Dict[str, Any], tz: tzinfo = timezone.utc) -> Payment:
    """
    Build a Payment from one JSON record:
        {"paymentDate": "2024-03-05T10:00:00+01:00",
         "user": {"email": "ann@example.com", "name": "Ann"},
         "paymentItems": [{"name": "X", "regularPrice": "10.00", "finalPrice": "8.00"}]}
    snake_case keys (payment_date, payment_items, ...) are accepted too.
    """
    user = _pick(row, "user") or {}
    if isinstance(user, str):
        user = {"email": user}
    email = _pick(user, "email") if isinstance(user, dict) else None
    if not email:
        raise ValueError("user.email is missing")
    items = _pick(row, "paymentItems", "payment_items") or []
    if not isinstance(items, list):
        raise ValueError("paymentItems must be a list")
    for i, it in enumerate(items):
        if not isinstance(it, dict):
            raise ValueError(f"paymentItems[{i}] is not an object")
    return Payment(
        payment_date=_parse_date(_pick(row, "paymentDate", "payment_date"), tz),
        user=User(email=str(email), name=user.get("name")),
        payment_items=tuple(_parse_item(it) for it in items),
    )

def _read_json_list(path: Path) -> List[Any]:
    """
    Reads a JSON file that may be:
      - a list of payment records
      - a dict with key 'payments' -> list
    Returns [] if the file is missing.
    """
    if not path.exists():
        logger.warning("[loader] payments file %s not found; no payments loaded", path)
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PaymentDataError(f"{path}: invalid JSON ({e})") from e

    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("payments"), list):
        return data["payments"]
    raise PaymentDataError(f"{path}: expected a list or a 'payments' list")


def load_payments(path: Union[str, Path], tz: tzinfo = timezone.utc) -> List[Payment]:
    p = Path(path)
    out: List[Payment] = []
    for i, row in enumerate(_read_json_list(p)):
        if not isinstance(row, dict):
            raise PaymentDataError(f"{p}: record {i} is not an object")
        try:
            out.append(parse_payment(row, tz))
        except ValueError as e:
            raise PaymentDataError(f"{p}: record {i}: {e}") from e
    logger.debug("[loader] loaded %d payments from %s", len(out), p)
    return out


class JsonPaymentSource:
    """Re-reads the JSON file on every get_all()."""

    def __init__(self, path: Union[str, Path], tz: Optional[tzinfo] = None):
        self.path = Path(path)
        self.tz = tz or timezone.utc

    def get_all(self) -> List[Payment]:
        return load_payments(self.path, self.tz)


class InMemoryPaymentSource:
    def __init__(self, payments: Sequence[Payment] = ()):
        self.payments = list(payments)

    def get_all(self) -> List[Payment]:
        return list(self.payments)
