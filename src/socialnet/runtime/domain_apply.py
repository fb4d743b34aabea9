# src/socialnet/runtime/domain_apply.py
# ---------------------------------------------------------------------------
# Public, stable import path for applying tx envelopes.
# ---------------------------------------------------------------------------

from __future__ import annotations

import copy
from typing import Any, Dict

from socialnet.runtime.apply.social import ApplyResult, apply_social
from socialnet.runtime.errors import ApplyError
from socialnet.ledger.state import ensure_state
from socialnet.runtime.tx_types import TxEnvelope

Json = Dict[str, Any]


def _normalize(env: Any) -> TxEnvelope:
    if isinstance(env, TxEnvelope):
        return env
    if isinstance(env, dict):
        try:
            return TxEnvelope.from_json(env)
        except (TypeError, ValueError) as e:
            raise ApplyError("invalid_tx", "malformed_envelope", {"error": str(e)}) from e
    raise ApplyError("invalid_tx", "envelope_not_dict", {"type": type(env).__name__})


def apply_tx(state: Json, env: Any) -> ApplyResult:
    """Route one envelope to its applier.

    Fails closed: a tx type no applier claims raises ApplyError
    (code="tx_unimplemented") instead of being silently ignored.
    """
    env_norm = _normalize(env)
    if not isinstance(env_norm.signer, str) or not env_norm.signer:
        raise ApplyError(
            "invalid_tx",
            "missing_signer",
            {"tx_type": env_norm.tx_type, "signer_type": type(env_norm.signer).__name__},
        )

    ensure_state(state)

    res = apply_social(state, env_norm)
    if res is None:
        raise ApplyError("tx_unimplemented", "tx_type_not_implemented", {"tx_type": env_norm.tx_type})
    return res


def apply_tx_atomic(state: Json, env: Any) -> ApplyResult:
    """Apply a tx with fail-atomic semantics.

    On success:
      - state is updated as if apply_tx() ran directly.

    On LedgerError:
      - state remains unchanged.
    """
    snapshot = copy.deepcopy(state)
    res = apply_tx(snapshot, env)

    # Commit by replacing contents in-place so callers holding references
    # to `state` see the updated view.
    state.clear()
    state.update(snapshot)
    return res


__all__ = ["ApplyError", "ApplyResult", "apply_tx", "apply_tx_atomic", "Json"]
