# runtime.py
from __future__ import annotations
import logging
from typing import Optional

from core.semantics.temporal import SystemClock
from domains.payments.calculator import PaymentQueryService
from domains.payments.loader import JsonPaymentSource
from settings import AppConfig

logger = logging.getLogger(__name__)


class AppRuntime:
    def __init__(self) -> None:
        self.cfg: Optional[AppConfig] = None
        self._service: Optional[PaymentQueryService] = None

    def startup(self, cfg: AppConfig, service: Optional[PaymentQueryService] = None) -> None:
        self.cfg = cfg
        # one shared service; the JSON source re-reads the file on every query
        self._service = service or PaymentQueryService(
            source=JsonPaymentSource(cfg.payments_path(), cfg.clock.tzinfo()),
            clock=SystemClock(cfg.clock.tzinfo()),
        )
        logger.info("[runtime] started with payments file %s (%s)", cfg.payments_path(), cfg.clock.timezone)

    def shutdown(self) -> None:
        self._service = None

    @property
    def started(self) -> bool:
        return self._service is not None

    # --- getters used across the app ---
    def service(self) -> PaymentQueryService:
        assert self._service is not None, "Runtime not started"
        return self._service

# module-level singleton and DI helper
RUNTIME = AppRuntime()

def get_runtime() -> AppRuntime:
    return RUNTIME
