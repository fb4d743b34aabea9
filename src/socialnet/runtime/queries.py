from __future__ import annotations

"""Read operations over a ledger state dict.

All functions are side-effect free and return snapshots, never references
into state. has_liked and get_user_posts are total: they answer for any input.
"""

from typing import Any, Dict, List

from socialnet.ledger.types import Post, User
from socialnet.runtime.errors import PostNotFound, UserNotFound
from socialnet.runtime.guards import check_latest_count, post_record, user_record

Json = Dict[str, Any]


def get_user(state: Json, principal: Any) -> User:
    rec = user_record(state, principal)
    if rec is None:
        raise UserNotFound("user_does_not_exist", {"principal": principal})
    return User.from_record(rec)


def get_post(state: Json, post_id: Any) -> Post:
    rec = post_record(state, post_id)
    if rec is None:
        raise PostNotFound("post_does_not_exist", {"post_id": post_id})
    return Post.from_record(rec)


def has_liked(state: Json, post_id: Any, principal: Any) -> bool:
    if post_record(state, post_id) is None or not isinstance(principal, str):
        return False
    likers = state.get("likes", {}).get(str(post_id))
    return isinstance(likers, dict) and principal in likers


def get_latest_posts(state: Json, count: Any) -> List[Post]:
    """Up to `count` posts, newest first. Under-supply returns what exists."""
    check_latest_count(count).raise_if_rejected()

    total = int(state.get("total_posts", 0))
    n = min(int(count), total)
    posts = state.get("posts", {})
    return [Post.from_record(posts[str(pid)]) for pid in range(total, total - n, -1)]


def get_user_posts(state: Json, principal: Any) -> List[int]:
    """Ids authored by principal, oldest first; empty for unknown principals."""
    if not isinstance(principal, str):
        return []
    ids = state.get("user_posts", {}).get(principal)
    if not isinstance(ids, list):
        return []
    return [int(x) for x in ids]


__all__ = ["get_latest_posts", "get_post", "get_user", "get_user_posts", "has_liked"]
