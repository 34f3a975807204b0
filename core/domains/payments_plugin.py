# core/domains/payments_plugin.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List

from .base import Domain
from core.semantics.temporal import resolve_period
from core.utils.formatters import fmt_date, fmt_money
from domains.payments.calculator import PaymentQueryService
from domains.payments.models import Payment, YearMonth, zoned_sort_key

ALIASES = {
    "period": ["period", "month", "year_month"],
    "days": ["days", "n", "last_days"],
    "email": ["email", "user_email"],
    "value": ["value", "threshold", "amount"],
}


class ArgumentError(ValueError):
    """A capability was called with a missing or unusable argument."""


def _arg(args: Dict[str, Any], name: str) -> Any:
    for k in ALIASES.get(name, [name]):
        if args.get(k) not in (None, ""):
            return args[k]
    raise ArgumentError(f"missing argument '{name}'")

def _int_arg(args: Dict[str, Any], name: str) -> int:
    raw = _arg(args, name)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ArgumentError(f"argument '{name}' must be an integer, got {raw!r}") from None

def _period_arg(service: PaymentQueryService, args: Dict[str, Any]) -> YearMonth:
    raw = _arg(args, "period")
    if isinstance(raw, YearMonth):
        return raw
    ym = resolve_period(str(raw), service.clock.now())
    if ym is None:
        raise ArgumentError(f"cannot read a month from {raw!r}; use YYYY-MM, 'this month' or 'last month'")
    return ym

def _rows(payments: Iterable[Payment]) -> List[Dict[str, Any]]:
    return [p.to_dict() for p in payments]

def _set_rows(payments: Iterable[Payment]) -> List[Dict[str, Any]]:
    # sets have no order; newest first keeps responses stable
    return _rows(sorted(payments, key=lambda p: zoned_sort_key(p.payment_date), reverse=True))

def _money(total) -> Dict[str, str]:
    # value keeps full Decimal precision; only the display form is rounded to cents
    return {"value": str(total), "display": fmt_money(total)}

# ---------------- ops ----------------
def op_sorted_by_date(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    items = service.find_payments_sorted_by_date_desc()
    return {"items": _rows(items), "trace": {"count": len(items), "order": "date desc"}}

def op_current_month(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    items = service.find_payments_for_current_month()
    period = service.clock.year_month_now()
    return {"items": _rows(items), "trace": {"count": len(items), "period": str(period)}}

def op_given_month(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    period = _period_arg(service, args)
    items = service.find_payments_for_given_month(period)
    return {"items": _rows(items), "trace": {"count": len(items), "period": str(period)}}

def op_last_days(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    days = _int_arg(args, "days")
    items = service.find_payments_for_given_last_days(days)
    return {"items": _rows(items), "trace": {"count": len(items), "days": days, "today": fmt_date(service.clock.now())}}

def op_single_item(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    items = service.find_payments_with_one_payment_item()
    return {"items": _set_rows(items), "trace": {"count": len(items)}}

def op_products_current_month(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    products = service.find_products_sold_in_current_month()
    period = service.clock.year_month_now()
    return {"products": sorted(products), "trace": {"count": len(products), "period": str(period)}}

def op_sum_total(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    period = _period_arg(service, args)
    total = service.sum_total_for_given_month(period)
    return {"total": _money(total), "trace": {"period": str(period)}}

def op_sum_discount(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    period = _period_arg(service, args)
    discount = service.sum_discount_for_given_month(period)
    return {"discount": _money(discount), "trace": {"period": str(period)}}

def op_items_for_user(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    email = str(_arg(args, "email"))
    items = service.get_payment_items_for_user_with_email(email)
    return {"items": [pi.to_dict() for pi in items], "trace": {"count": len(items), "email": email}}

def op_value_over(service: PaymentQueryService, args: Dict[str, Any]) -> Dict[str, Any]:
    value = _int_arg(args, "value")
    items = service.find_payments_with_value_over(value)
    return {"items": _set_rows(items), "trace": {"count": len(items), "value_over": value}}

OPS = {
    "sorted_by_date": op_sorted_by_date,
    "current_month": op_current_month,
    "given_month": op_given_month,
    "last_days": op_last_days,
    "single_item": op_single_item,
    "products_current_month": op_products_current_month,
    "sum_total": op_sum_total,
    "sum_discount": op_sum_discount,
    "items_for_user": op_items_for_user,
    "value_over": op_value_over,
}

DOMAIN = Domain(id="payments", ops=OPS, aliases=ALIASES)
