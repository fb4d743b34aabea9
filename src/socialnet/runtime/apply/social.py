# src/socialnet/runtime/apply/social.py
from __future__ import annotations

"""
Social domain apply semantics.

Covers the whole mutable surface of the ledger:
- USER_REGISTER
- POST_CREATE
- LIKE_TOGGLE

Every applier follows the same shape:
  1) run the guard for its tx type (no mutation)
  2) mutate state
  3) return an ApplyResult carrying meta + the events to announce

Nothing between (2) and (3) can fail, so a rejected tx never leaves a
partial effect behind.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Set, Tuple

from socialnet.ledger.constants import TX_LIKE_TOGGLE, TX_POST_CREATE, TX_USER_REGISTER
from socialnet.runtime.events import LedgerEvent, PostCreated, PostLiked, UserRegistered
from socialnet.runtime.guards import check_create_post, check_register, check_toggle_like
from socialnet.runtime.tx_types import TxEnvelope

Json = Dict[str, Any]


@dataclass(frozen=True)
class ApplyResult:
    meta: Json
    events: Tuple[LedgerEvent, ...] = ()


def _as_dict(x: Any) -> Json:
    return x if isinstance(x, dict) else {}


def _post_ts(state: Json, env: TxEnvelope) -> int:
    # Post timestamps never go backwards, whatever the clock says.
    last = int(state.get("last_ts_ms", 0))
    return max(int(env.ts_ms or 0), last)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def _apply_user_register(state: Json, env: TxEnvelope) -> ApplyResult:
    payload = _as_dict(env.payload)
    username = payload.get("username")
    bio = payload.get("bio", "")

    check_register(state, env.signer, username, bio).raise_if_rejected()

    state["users"][env.signer] = {
        "principal": env.signer,
        "username": username,
        "bio": bio,
        "post_count": 0,
        "created_ts_ms": int(env.ts_ms or 0),
    }
    state["total_users"] = int(state["total_users"]) + 1

    return ApplyResult(
        meta={"applied": TX_USER_REGISTER, "principal": env.signer},
        events=(UserRegistered(principal=env.signer, username=username),),
    )


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


def _apply_post_create(state: Json, env: TxEnvelope) -> ApplyResult:
    payload = _as_dict(env.payload)
    content = payload.get("content")

    check_create_post(state, env.signer, content).raise_if_rejected()

    # Dense ids: the next id is always previous total + 1.
    post_id = int(state["total_posts"]) + 1
    ts = _post_ts(state, env)

    state["posts"][str(post_id)] = {
        "id": post_id,
        "author": env.signer,
        "content": content,
        "like_count": 0,
        "timestamp": ts,
    }
    state["likes"][str(post_id)] = {}
    state["user_posts"].setdefault(env.signer, []).append(post_id)
    state["total_posts"] = post_id
    state["last_ts_ms"] = ts

    user = state["users"][env.signer]
    user["post_count"] = int(user.get("post_count", 0)) + 1

    return ApplyResult(
        meta={"applied": TX_POST_CREATE, "post_id": post_id, "author": env.signer},
        events=(PostCreated(post_id=post_id, author=env.signer, content=content),),
    )


# ---------------------------------------------------------------------------
# Likes
# ---------------------------------------------------------------------------


def _apply_like_toggle(state: Json, env: TxEnvelope) -> ApplyResult:
    payload = _as_dict(env.payload)
    post_id = payload.get("post_id")

    check_toggle_like(state, env.signer, post_id).raise_if_rejected()

    key = str(post_id)
    likers = state["likes"].setdefault(key, {})
    post = state["posts"][key]

    if env.signer in likers:
        del likers[env.signer]
        liked = False
        events: Tuple[LedgerEvent, ...] = ()
    else:
        likers[env.signer] = True
        liked = True
        events = (PostLiked(post_id=post_id, liker=env.signer),)

    post["like_count"] = len(likers)

    return ApplyResult(
        meta={
            "applied": TX_LIKE_TOGGLE,
            "post_id": post_id,
            "liked": liked,
            "like_count": post["like_count"],
        },
        events=events,
    )


SOCIAL_TX_TYPES: Set[str] = {
    TX_USER_REGISTER,
    TX_POST_CREATE,
    TX_LIKE_TOGGLE,
}


def apply_social(state: Json, env: TxEnvelope) -> Optional[ApplyResult]:
    t = str(env.tx_type or "").strip()
    if t not in SOCIAL_TX_TYPES:
        return None

    if t == TX_USER_REGISTER:
        return _apply_user_register(state, env)
    if t == TX_POST_CREATE:
        return _apply_post_create(state, env)
    if t == TX_LIKE_TOGGLE:
        return _apply_like_toggle(state, env)

    return None
