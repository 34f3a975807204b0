from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from core.domains.registry import REGISTRY, normalize_cap
from core.orchestrator.execute import execute_calls, is_error, run_call
from runtime import AppRuntime, get_runtime, RUNTIME
from settings import load_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not RUNTIME.started:
        RUNTIME.startup(load_config())
    yield
    RUNTIME.shutdown()

app = FastAPI(title="Payment Reports", lifespan=lifespan)

class Call(BaseModel):
  domain_id: str = "payments"
  capability: str
  args: Dict[str, Any] = Field(default_factory=dict)

class QueryReq(BaseModel):
  calls: List[Call]

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/api/capabilities")
def capabilities():
    return {"domains": REGISTRY.describe(), "contract": REGISTRY.contract()}

@app.post("/api/query")
def query(req: QueryReq, rt: AppRuntime = Depends(get_runtime)):
    calls = [c.model_dump() for c in req.calls]
    return {"results": execute_calls(calls, rt.service())}

@app.get("/api/payments/{capability}")
def payments_capability(capability: str, request: Request, rt: AppRuntime = Depends(get_runtime)):
    """
    Single capability with query parameters as args, e.g.
      GET /api/payments/sum_total?period=2024-03
      GET /api/payments/last_days?days=7
    """
    cap = normalize_cap(capability)
    if cap not in REGISTRY.get("payments").ops:
        raise HTTPException(status_code=404, detail=f"unknown capability '{cap}'")
    res = run_call({"domain_id": "payments", "capability": cap, "args": dict(request.query_params)}, rt.service())
    if is_error(res):
        status = 500 if res["error"].startswith("op_error") else 400
        raise HTTPException(status_code=status, detail=res["error"])
    return res


def main() -> None:
    cfg = load_config()
    logging.basicConfig(level=cfg.server.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s %(message)s")
    RUNTIME.startup(cfg)
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port)


if __name__ == "__main__":
    main()
