# src/socialnet/config.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

Json = Dict[str, Any]


def _as_str(v: Any, default: str) -> str:
    if v is None:
        return str(default)
    s = str(v)
    return s if s.strip() else str(default)


def _as_bool(v: Any, default: bool) -> bool:
    if v is None:
        return bool(default)
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in {"1", "true", "yes", "y", "on"}:
        return True
    if s in {"0", "false", "no", "n", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class LedgerConfig:
    ledger_id: str
    mode: str  # "dev" | "test" | "prod"

    log_level: str
    # Emit one JSONL log line per applied/rejected tx.
    log_events: bool

    metrics_enabled: bool


_ALLOWED_MODES = {"dev", "test", "prod"}
_ALLOWED_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def validate_ledger_config(cfg: LedgerConfig) -> None:
    """Fail-fast validation for operator config."""

    if not isinstance(cfg.ledger_id, str) or not cfg.ledger_id.strip():
        raise ValueError("ledger_id must be a non-empty string")

    mode = str(cfg.mode or "").strip().lower()
    if mode not in _ALLOWED_MODES:
        raise ValueError(f"mode must be one of {sorted(_ALLOWED_MODES)}; got: {cfg.mode!r}")

    if str(cfg.log_level or "").strip().upper() not in _ALLOWED_LEVELS:
        raise ValueError(f"log_level must be one of {sorted(_ALLOWED_LEVELS)}; got: {cfg.log_level!r}")


def default_ledger_config() -> LedgerConfig:
    return LedgerConfig(
        ledger_id="socialnet-dev",
        mode="dev",
        log_level="INFO",
        log_events=True,
        metrics_enabled=False,
    )


def _read_raw(p: Path) -> Any:
    # Unreadable or unparseable files surface as ValueError like any other bad config.
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"cannot read ledger config {p}: {e}") from e
    if p.suffix.lower() in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML in ledger config {p}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON in ledger config {p}: {e}") from e


def read_ledger_config_file(path: str) -> LedgerConfig:
    raw = _read_raw(Path(path))
    if not isinstance(raw, dict):
        raise ValueError("ledger config must be a mapping")

    d = default_ledger_config()

    cfg = LedgerConfig(
        ledger_id=_as_str(raw.get("ledger_id"), d.ledger_id),
        mode=_as_str(raw.get("mode"), d.mode).strip().lower(),
        log_level=_as_str(raw.get("log_level"), d.log_level).strip().upper(),
        log_events=_as_bool(raw.get("log_events"), d.log_events),
        metrics_enabled=_as_bool(raw.get("metrics_enabled"), d.metrics_enabled),
    )

    validate_ledger_config(cfg)
    return cfg


def config_from_env(base: LedgerConfig) -> LedgerConfig:
    """Overlay SOCIALNET_* environment variables on top of `base`."""
    cfg = LedgerConfig(
        ledger_id=_as_str(os.environ.get("SOCIALNET_LEDGER_ID"), base.ledger_id),
        mode=_as_str(os.environ.get("SOCIALNET_MODE"), base.mode).strip().lower(),
        log_level=_as_str(os.environ.get("SOCIALNET_LOG_LEVEL"), base.log_level).strip().upper(),
        log_events=_as_bool(os.environ.get("SOCIALNET_LOG_EVENTS"), base.log_events),
        metrics_enabled=_as_bool(os.environ.get("SOCIALNET_METRICS_ENABLED"), base.metrics_enabled),
    )
    validate_ledger_config(cfg)
    return cfg


def load_ledger_config(*, config_path: Optional[str] = None) -> LedgerConfig:
    p = config_path or os.environ.get("SOCIALNET_CONFIG_PATH")
    base = read_ledger_config_file(p) if p else default_ledger_config()
    return config_from_env(base)
