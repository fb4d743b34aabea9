from __future__ import annotations

"""Pydantic schemas for tooling input (tx logs fed to `socialnet replay`).

These only validate the envelope shape. Payload rules (length limits,
registration, ownership) stay in the ledger guards so that a replayed log
and a direct call are judged by the same code.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from socialnet.runtime.tx_types import TxEnvelope


class TxLine(BaseModel):
    tx_type: str = Field(..., description="USER_REGISTER | POST_CREATE | LIKE_TOGGLE")
    signer: str = Field(..., min_length=1, description="Caller principal")
    payload: Dict[str, Any] = Field(default_factory=dict)
    ts_ms: int = Field(default=0, ge=0, description="Optional time hint (ms)")

    model_config = {"extra": "forbid"}

    @field_validator("tx_type")
    @classmethod
    def _upper(cls, v: str) -> str:
        s = v.strip().upper()
        if not s:
            raise ValueError("tx_type must be non-empty")
        return s

    def to_envelope(self) -> TxEnvelope:
        return TxEnvelope(
            tx_type=self.tx_type,
            signer=self.signer,
            payload=dict(self.payload),
            ts_ms=int(self.ts_ms),
        )
