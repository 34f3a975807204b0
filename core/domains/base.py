# core/domains/base.py
"""
Collaborator contracts and the capability plugin shape.

PaymentSource and Clock are what the query service is built on; anything with
the right methods satisfies them (a JSON file reader, a fixed list, a frozen
clock in tests). Domain/OpFn describe how a domain exposes its queries as named
capabilities to the executor.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from domains.payments.models import Payment, YearMonth


@runtime_checkable
class PaymentSource(Protocol):
    def get_all(self) -> Sequence["Payment"]:
        """Return every known payment, fully materialised."""
        ...


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime: ...

    def year_month_now(self) -> "YearMonth": ...


class OpFn(Protocol):
    def __call__(self, service: Any, args: Dict[str, Any]) -> Dict[str, Any]: ...


@dataclass
class Domain:
    id: str
    ops: Dict[str, OpFn]
    aliases: Dict[str, List[str]] = field(default_factory=dict)

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "capabilities": sorted(self.ops.keys()),
            "args": {k: list(v) for k, v in sorted(self.aliases.items())},
        }
