# settings.py (repo root)
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent

DEFAULT_CONFIG_FILE = PROJECT_ROOT / "config" / "app.yaml"


class DataConfig(BaseModel):
    payments_file: str = "data/payments.json"


class ClockConfig(BaseModel):
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone {v!r}") from None
        return v

    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8001
    log_level: str = "INFO"


class AppConfig(BaseModel):
    data: DataConfig = Field(default_factory=DataConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    def payments_path(self) -> Path:
        return resolve_path(self.data.payments_file)


def resolve_path(raw: Union[str, Path]) -> Path:
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = PROJECT_ROOT / p
    return p.resolve()

def config_file() -> Path:
    raw = os.getenv("PAYMENTS_CONFIG_FILE")
    if raw:
        p = resolve_path(raw)
        if p.exists():
            return p
        logger.warning("[settings] PAYMENTS_CONFIG_FILE='%s' missing; falling back to %s", raw, DEFAULT_CONFIG_FILE)
    return DEFAULT_CONFIG_FILE

def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("[settings] config file %s not found; using defaults", path)
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}

def _env_overrides(raw: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(raw)
    for env_name, section, key in (
        ("PAYMENTS_DATA_FILE", "data", "payments_file"),
        ("PAYMENTS_TIMEZONE", "clock", "timezone"),
    ):
        if os.getenv(env_name):
            out[section] = {**(out.get(section) or {}), key: os.environ[env_name]}
    return out

def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Build the AppConfig from, in order of precedence:
      1) PAYMENTS_DATA_FILE / PAYMENTS_TIMEZONE env vars (.env is honoured)
      2) the YAML file: `path`, else PAYMENTS_CONFIG_FILE, else config/app.yaml
      3) model defaults
    """
    load_dotenv()
    cfg_path = resolve_path(path) if path else config_file()
    cfg = AppConfig.model_validate(_env_overrides(_read_yaml(cfg_path)))
    logger.debug("[settings] config=%s payments_file=%s timezone=%s",
                 cfg_path, cfg.payments_path(), cfg.clock.timezone)
    return cfg
