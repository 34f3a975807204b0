# core/domains/registry.py
from __future__ import annotations
import importlib
from typing import Dict, List, Sequence
from .base import Domain

_DOMAIN_MODULES = (
    "core.domains.payments_plugin",
)

_NORMALIZE: Dict[str, str] = {
    "payment": "payments",
    "pay": "payments",
}

def normalize_domain(d: str) -> str:
    if not d: return d
    d = d.strip().lower().replace("-", "_")
    return _NORMALIZE.get(d, d)

def normalize_cap(name: str) -> str:
    return (name or "").strip().lower().replace("-", "_")

class DomainRegistry:
    def __init__(self, modules: Sequence[str] = _DOMAIN_MODULES):
        self._by_id: Dict[str, Domain] = {}
        for modname in modules:
            mod = importlib.import_module(modname)
            dom: Domain = getattr(mod, "DOMAIN")
            self._by_id[dom.id] = dom

    def get(self, dom_id: str) -> Domain | None:
        return self._by_id.get(normalize_domain(dom_id))

    @property
    def domains(self) -> List[Domain]:
        return list(self._by_id.values())

    def describe(self) -> List[dict]:
        return [d.describe() for d in self.domains]

    def contract(self) -> str:
        parts = []
        for d in self.domains:
            caps = ",".join(sorted(d.ops.keys()))
            parts.append(f"{d.id}:{{{caps}}}")
        return " ; ".join(parts)

REGISTRY = DomainRegistry()
