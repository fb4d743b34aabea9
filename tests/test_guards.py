# tests/test_guards.py
from __future__ import annotations

import pytest

from socialnet.ledger.state import initial_state
from socialnet.runtime.errors import InvalidRange, NotRegistered
from socialnet.runtime.guards import (
    Verdict,
    check_create_post,
    check_latest_count,
    check_register,
    check_toggle_like,
)


def _state_with_post() -> dict:
    st = initial_state()
    st["users"]["alice"] = {"principal": "alice", "username": "alice", "bio": "", "post_count": 1}
    st["posts"]["1"] = {"id": 1, "author": "alice", "content": "x", "like_count": 0, "timestamp": 0}
    st["total_users"] = 1
    st["total_posts"] = 1
    return st


def test_guards_do_not_mutate() -> None:
    st = _state_with_post()
    snap = repr(st)

    check_register(st, "bob", "bob", "")
    check_create_post(st, "bob", "hi")
    check_toggle_like(st, "alice", 1)
    check_latest_count(99)

    assert repr(st) == snap


def test_admit_verdicts() -> None:
    st = _state_with_post()
    assert check_register(st, "bob", "bob", "").ok
    assert check_create_post(st, "alice", "hello").ok
    assert check_latest_count(50).ok


def test_reject_verdict_carries_typed_error() -> None:
    st = _state_with_post()
    v = check_create_post(st, "mallory", "hi")
    assert v.ok is False
    assert isinstance(v.error, NotRegistered)
    with pytest.raises(NotRegistered):
        v.raise_if_rejected()


def test_self_like_checked_against_stored_author() -> None:
    st = _state_with_post()
    st["users"]["bob"] = {"principal": "bob", "username": "bob", "bio": "", "post_count": 0}
    assert check_toggle_like(st, "bob", 1).ok
    assert check_toggle_like(st, "alice", 1).error.code == "self_like_forbidden"


def test_post_beyond_total_is_missing_even_if_stored() -> None:
    st = _state_with_post()
    st["posts"]["2"] = {"id": 2, "author": "alice", "content": "ghost"}
    st["users"]["bob"] = {"principal": "bob", "username": "bob", "bio": "", "post_count": 0}
    assert check_toggle_like(st, "bob", 2).error.code == "post_not_found"


def test_latest_count_reject_details() -> None:
    v = check_latest_count(0)
    assert isinstance(v.error, InvalidRange)
    assert v.error.details == {"count": 0, "min": 1, "max": 50}


def test_admit_raise_is_noop() -> None:
    Verdict.admit().raise_if_rejected()
