# core/orchestrator/execute.py
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from core.domains.payments_plugin import ArgumentError
from core.domains.registry import REGISTRY, DomainRegistry, normalize_cap, normalize_domain
from domains.payments.calculator import PaymentQueryService

logger = logging.getLogger(__name__)


def is_error(res: Optional[Dict[str, Any]]) -> bool:
    return not isinstance(res, dict) or "error" in res

def run_call(call: Dict[str, Any], service: PaymentQueryService, registry: DomainRegistry = REGISTRY) -> Dict[str, Any]:
    """Run one {"domain_id", "capability", "args"} call; failures come back as {"error": ...}."""
    dom = normalize_domain(call.get("domain_id") or "payments")
    cap = normalize_cap(call.get("capability", ""))
    args = dict(call.get("args") or {})

    domain = registry.get(dom)
    if not domain:
        return {"error": f"unknown domain '{dom}'"}
    op = domain.ops.get(cap)
    if not op:
        return {"error": f"unknown capability '{cap}'"}

    try:
        return op(service, args)
    except ArgumentError as e:
        return {"error": f"bad_args: {e}"}
    except Exception as e:
        logger.exception("[execute] %s.%s failed", dom, cap)
        return {"error": f"op_error: {type(e).__name__}: {e}"}

# --------------------------- main executor ---------------------------
def execute_calls(calls: List[Dict[str, Any]], service: PaymentQueryService,
                  registry: DomainRegistry = REGISTRY) -> Dict[str, Any]:
    """
    Runs each call against the service and keys the result as
    "{domain}.{capability}[{i}]". A failing call does not stop the others.
    """
    results: Dict[str, Any] = {}
    for i, call in enumerate(calls or []):
        dom = normalize_domain(call.get("domain_id") or "payments")
        cap = normalize_cap(call.get("capability", ""))
        res = run_call(call, service, registry)
        if is_error(res):
            logger.info("[execute] %s.%s[%d] -> %s", dom, cap, i, res["error"])
        results[f"{dom}.{cap}[{i}]"] = res
    return results
