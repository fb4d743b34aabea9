from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from socialnet.ledger.constants import TX_LIKE_TOGGLE, TX_POST_CREATE, TX_USER_REGISTER
from socialnet.ledger.state import LedgerView, initial_state
from socialnet.ledger.types import Post, Principal, User
from socialnet.runtime import metrics, queries
from socialnet.runtime.apply.social import ApplyResult
from socialnet.runtime.domain_apply import apply_tx
from socialnet.runtime.errors import ApplyError, LedgerError
from socialnet.runtime.events import EventLog, Subscriber
from socialnet.runtime.ledger_logging import log_event
from socialnet.runtime.tx_types import Receipt, TxEnvelope

Json = Dict[str, Any]
Clock = Callable[[], int]

_log = logging.getLogger("socialnet.ledger")


def _now_ms() -> int:
    return int(time.time() * 1000)


class SocialLedger:
    """Owns all social state: users, posts, like relations and counters.

    Mutations are serialized by one writer lock and are all-or-nothing: every
    guard runs before the first write. Reads take the same lock while they
    copy out a snapshot, so they always see committed state.
    """

    def __init__(
        self,
        *,
        ledger_id: str = "",
        clock: Optional[Clock] = None,
        log_txs: bool = True,
        metrics_on: Optional[bool] = None,
    ) -> None:
        self._state: Json = initial_state(ledger_id)
        self._clock: Clock = clock or _now_ms
        self._lock = threading.RLock()
        self._log_txs = bool(log_txs)
        self._metrics_on = metrics.metrics_enabled() if metrics_on is None else bool(metrics_on)
        self.events = EventLog()

    @classmethod
    def from_config(cls, cfg: Any, *, clock: Optional[Clock] = None) -> "SocialLedger":
        return cls(
            ledger_id=cfg.ledger_id,
            clock=clock,
            log_txs=cfg.log_events,
            metrics_on=cfg.metrics_enabled,
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def ledger_id(self) -> str:
        return str(self._state.get("ledger_id", ""))

    @property
    def total_users(self) -> int:
        with self._lock:
            return int(self._state["total_users"])

    @property
    def total_posts(self) -> int:
        with self._lock:
            return int(self._state["total_posts"])

    def view(self) -> LedgerView:
        with self._lock:
            return LedgerView.from_ledger(self._state)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        return self.events.subscribe(callback)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def register_user(self, caller: Principal, username: str, bio: str = "") -> None:
        self._commit(TxEnvelope(TX_USER_REGISTER, caller, {"username": username, "bio": bio}))

    def create_post(self, caller: Principal, content: str) -> int:
        res = self._commit(TxEnvelope(TX_POST_CREATE, caller, {"content": content}))
        return int(res.meta["post_id"])

    def toggle_like(self, caller: Principal, post_id: int) -> None:
        self._commit(TxEnvelope(TX_LIKE_TOGGLE, caller, {"post_id": post_id}))

    def submit(self, tx: Any) -> Receipt:
        """Apply one envelope and report the outcome instead of raising."""
        try:
            env = tx if isinstance(tx, TxEnvelope) else TxEnvelope.from_json(tx)
        except (TypeError, ValueError) as e:
            err = ApplyError("invalid_tx", "malformed_envelope", {"error": str(e)})
            return Receipt(ok=False, tx_type="", error=err.to_json())

        try:
            res = self._commit(env)
        except LedgerError as e:
            return Receipt(ok=False, tx_type=env.tx_type, error=e.to_json())

        return Receipt(
            ok=True,
            tx_type=env.tx_type,
            result=dict(res.meta),
            events=tuple(ev.to_json() for ev in res.events),
        )

    def _commit(self, env: TxEnvelope) -> ApplyResult:
        with self._lock:
            if not env.ts_ms:
                env = TxEnvelope(env.tx_type, env.signer, env.payload, self._clock())
            try:
                res = apply_tx(self._state, env)
            except LedgerError as e:
                self._on_rejected(env, e)
                raise
            self.events.record(res.events)
            self._on_applied(env, res)

        # Subscribers run outside the writer lock, in EventLog order.
        self.events.flush()
        return res

    def _on_applied(self, env: TxEnvelope, res: ApplyResult) -> None:
        if self._metrics_on:
            metrics.inc_counter("tx_applied_total")
            metrics.inc_counter(f"tx_{env.tx_type.lower()}_total")
            metrics.set_gauge("total_users", int(self._state["total_users"]))
            metrics.set_gauge("total_posts", int(self._state["total_posts"]))
        if self._log_txs:
            log_event(
                _log,
                "tx_applied",
                level=logging.DEBUG,
                tx_type=env.tx_type,
                signer=env.signer,
                meta=res.meta,
                events=[ev.name for ev in res.events],
            )

    def _on_rejected(self, env: TxEnvelope, err: LedgerError) -> None:
        if self._metrics_on:
            metrics.inc_counter("tx_rejected_total")
            metrics.inc_counter(f"tx_rejected_{err.code}_total")
        if self._log_txs:
            log_event(
                _log,
                "tx_rejected",
                tx_type=env.tx_type,
                signer=env.signer,
                code=err.code,
                reason=err.reason,
            )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_user(self, principal: Principal) -> User:
        with self._lock:
            return queries.get_user(self._state, principal)

    def get_post(self, post_id: int) -> Post:
        with self._lock:
            return queries.get_post(self._state, post_id)

    def has_liked(self, post_id: int, principal: Principal) -> bool:
        with self._lock:
            return queries.has_liked(self._state, post_id, principal)

    def get_latest_posts(self, count: int) -> List[Post]:
        with self._lock:
            return queries.get_latest_posts(self._state, count)

    def get_user_posts(self, principal: Principal) -> List[int]:
        with self._lock:
            return queries.get_user_posts(self._state, principal)


__all__ = ["SocialLedger"]
