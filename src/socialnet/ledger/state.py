from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Dict

Json = Dict[str, Any]


_DICT_ROOTS = ("users", "posts", "likes", "user_posts")
_INT_ROOTS = ("total_users", "total_posts", "last_ts_ms")


def initial_state(ledger_id: str = "") -> Json:
    """Fresh ledger: empty registries, all counters at zero."""
    return {
        "ledger_id": str(ledger_id or ""),
        "users": {},
        "posts": {},
        "likes": {},
        "user_posts": {},
        "total_users": 0,
        "total_posts": 0,
        "last_ts_ms": 0,
    }


def ensure_state(st: Any) -> Json:
    """Ensure `st` is a dict carrying every root container the appliers rely on.

    Missing roots are created. Roots of the wrong type fail closed.

    Raises:
        TypeError: if st (or one of its roots) has the wrong type
    """
    if not isinstance(st, MutableMapping):
        raise TypeError(f"state must be MutableMapping, got {type(st)}")

    for key in _DICT_ROOTS:
        cur = st.get(key)
        if cur is None:
            st[key] = {}
        elif not isinstance(cur, dict):
            raise TypeError(f"state[{key!r}] must be dict, got {type(cur)}")

    for key in _INT_ROOTS:
        cur = st.get(key)
        if cur is None:
            st[key] = 0
        elif isinstance(cur, bool) or not isinstance(cur, int):
            raise TypeError(f"state[{key!r}] must be int, got {type(cur)}")

    st.setdefault("ledger_id", "")
    return st  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class LedgerView:
    """Immutable counter snapshot for quick introspection."""

    ledger_id: str = ""
    total_users: int = 0
    total_posts: int = 0
    last_ts_ms: int = 0

    @classmethod
    def from_ledger(cls, state: Json) -> "LedgerView":
        return cls(
            ledger_id=str(state.get("ledger_id", "") or ""),
            total_users=int(state.get("total_users", 0) or 0),
            total_posts=int(state.get("total_posts", 0) or 0),
            last_ts_ms=int(state.get("last_ts_ms", 0) or 0),
        )

    def to_json(self) -> Json:
        return {
            "ledger_id": self.ledger_id,
            "total_users": self.total_users,
            "total_posts": self.total_posts,
            "last_ts_ms": self.last_ts_ms,
        }


__all__ = ["Json", "LedgerView", "ensure_state", "initial_state"]
