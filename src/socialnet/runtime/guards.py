# src/socialnet/runtime/guards.py
from __future__ import annotations

"""
Guard clauses for ledger transitions.

Each check_* function inspects state and arguments without mutating anything
and returns a Verdict. Callers decide what to do with a rejection: the public
SocialLedger operations raise the carried error, Receipt-based callers record
it. The first failing guard wins; the order below is part of the contract.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from socialnet.ledger.constants import (
    MAX_BIO_LEN,
    MAX_CONTENT_LEN,
    MAX_LATEST_POSTS,
    MAX_USERNAME_LEN,
    MIN_LATEST_POSTS,
)
from socialnet.runtime.errors import (
    AlreadyRegistered,
    InvalidBio,
    InvalidContent,
    InvalidRange,
    InvalidUsername,
    LedgerError,
    NotRegistered,
    PostNotFound,
    SelfLikeForbidden,
)

Json = Dict[str, Any]


@dataclass(frozen=True)
class Verdict:
    ok: bool
    error: Optional[LedgerError] = None

    @staticmethod
    def admit() -> "Verdict":
        return Verdict(True, None)

    @staticmethod
    def reject(error: LedgerError) -> "Verdict":
        return Verdict(False, error)

    def raise_if_rejected(self) -> None:
        if not self.ok and self.error is not None:
            raise self.error


_ADMIT = Verdict.admit()


def _is_int(x: Any) -> bool:
    # bool is an int subclass; ids and counts must be real ints
    return isinstance(x, int) and not isinstance(x, bool)


def user_record(state: Json, principal: Any) -> Optional[Json]:
    if not isinstance(principal, str):
        return None
    rec = state.get("users", {}).get(principal)
    return rec if isinstance(rec, dict) else None


def post_record(state: Json, post_id: Any) -> Optional[Json]:
    """Return the stored post for a valid dense id, else None."""
    if not _is_int(post_id):
        return None
    if post_id < 1 or post_id > int(state.get("total_posts", 0)):
        return None
    rec = state.get("posts", {}).get(str(post_id))
    return rec if isinstance(rec, dict) else None


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def check_register(state: Json, caller: Any, username: Any, bio: Any) -> Verdict:
    if user_record(state, caller) is not None:
        return Verdict.reject(AlreadyRegistered("user_already_registered", {"principal": caller}))

    if not isinstance(username, str) or not username:
        return Verdict.reject(InvalidUsername("username_empty", {"principal": caller}))
    if len(username) > MAX_USERNAME_LEN:
        return Verdict.reject(
            InvalidUsername("username_too_long", {"length": len(username), "max": MAX_USERNAME_LEN})
        )

    if not isinstance(bio, str):
        return Verdict.reject(InvalidBio("bio_not_text", {"principal": caller}))
    if len(bio) > MAX_BIO_LEN:
        return Verdict.reject(InvalidBio("bio_too_long", {"length": len(bio), "max": MAX_BIO_LEN}))

    return _ADMIT


def check_create_post(state: Json, caller: Any, content: Any) -> Verdict:
    if user_record(state, caller) is None:
        return Verdict.reject(NotRegistered("user_not_registered", {"principal": caller}))

    if not isinstance(content, str) or not content:
        return Verdict.reject(InvalidContent("content_empty", {"principal": caller}))
    if len(content) > MAX_CONTENT_LEN:
        return Verdict.reject(
            InvalidContent("content_too_long", {"length": len(content), "max": MAX_CONTENT_LEN})
        )

    return _ADMIT


def check_toggle_like(state: Json, caller: Any, post_id: Any) -> Verdict:
    if user_record(state, caller) is None:
        return Verdict.reject(NotRegistered("user_not_registered", {"principal": caller}))

    post = post_record(state, post_id)
    if post is None:
        return Verdict.reject(PostNotFound("post_does_not_exist", {"post_id": post_id}))

    if post.get("author") == caller:
        return Verdict.reject(SelfLikeForbidden("cannot_like_own_post", {"post_id": post_id}))

    return _ADMIT


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def check_latest_count(count: Any) -> Verdict:
    if not _is_int(count) or count < MIN_LATEST_POSTS or count > MAX_LATEST_POSTS:
        return Verdict.reject(
            InvalidRange("invalid_count_range", {"count": count, "min": MIN_LATEST_POSTS, "max": MAX_LATEST_POSTS})
        )
    return _ADMIT


__all__ = [
    "Verdict",
    "check_create_post",
    "check_latest_count",
    "check_register",
    "check_toggle_like",
    "post_record",
    "user_record",
]
