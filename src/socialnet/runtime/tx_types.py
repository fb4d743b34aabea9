from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

Json = Dict[str, Any]


@dataclass(frozen=True)
class TxEnvelope:
    tx_type: str
    signer: str
    payload: Dict[str, Any] = field(default_factory=dict)
    # Caller-supplied time hint; 0 means "use the ledger clock".
    ts_ms: int = 0

    @staticmethod
    def from_json(j: Any) -> "TxEnvelope":
        if isinstance(j, TxEnvelope):
            return j
        if not isinstance(j, dict):
            j = dict(j)  # type: ignore[arg-type]
        return TxEnvelope(
            tx_type=str(j.get("tx_type", "") or "").strip().upper(),
            signer=str(j.get("signer", "") or ""),
            payload=dict(j.get("payload", {}) or {}),
            ts_ms=int(j.get("ts_ms", 0) or 0),
        )

    def to_json(self) -> Json:
        return {
            "tx_type": self.tx_type,
            "signer": self.signer,
            "payload": self.payload,
            "ts_ms": self.ts_ms,
        }


@dataclass(frozen=True)
class Receipt:
    """Outcome of SocialLedger.submit(): success with a result, or the error."""

    ok: bool
    tx_type: str
    result: Optional[Json] = None
    error: Optional[Json] = None
    events: Tuple[Json, ...] = ()

    @property
    def code(self) -> str:
        if self.ok:
            return "ok"
        return str((self.error or {}).get("code", "") or "")

    def to_json(self) -> Json:
        return {
            "ok": self.ok,
            "tx_type": self.tx_type,
            "result": self.result,
            "error": self.error,
            "events": list(self.events),
        }
