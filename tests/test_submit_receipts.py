# tests/test_submit_receipts.py
from __future__ import annotations

from socialnet.runtime.tx_types import TxEnvelope


def test_submit_success_receipt(ledger) -> None:
    r = ledger.submit({"tx_type": "user_register", "signer": "0xA", "payload": {"username": "alice", "bio": ""}})
    assert r.ok is True
    assert r.code == "ok"
    assert r.tx_type == "USER_REGISTER"
    assert r.result == {"applied": "USER_REGISTER", "principal": "0xA"}
    assert r.events == ({"event": "UserRegistered", "principal": "0xA", "username": "alice"},)


def test_submit_failure_receipt_does_not_raise(ledger) -> None:
    r = ledger.submit(TxEnvelope("POST_CREATE", "0xC", {"content": "x"}))
    assert r.ok is False
    assert r.code == "not_registered"
    assert r.error["reason"] == "user_not_registered"
    assert r.events == ()
    assert ledger.total_posts == 0


def test_submit_like_toggle_reports_branch(ledger) -> None:
    ledger.register_user("0xA", "alice", "")
    ledger.register_user("0xB", "bob", "")
    ledger.create_post("0xA", "hi")

    first = ledger.submit(TxEnvelope("LIKE_TOGGLE", "0xB", {"post_id": 1}))
    second = ledger.submit(TxEnvelope("LIKE_TOGGLE", "0xB", {"post_id": 1}))

    assert first.result["liked"] is True and first.result["like_count"] == 1
    assert len(first.events) == 1
    assert second.result["liked"] is False and second.result["like_count"] == 0
    assert second.events == ()


def test_submit_unknown_tx_type(ledger) -> None:
    r = ledger.submit({"tx_type": "POST_DELETE", "signer": "0xA", "payload": {"post_id": 1}})
    assert r.ok is False
    assert r.code == "tx_unimplemented"


def test_submit_malformed_envelope(ledger) -> None:
    r = ledger.submit({"tx_type": "POST_CREATE", "signer": "0xA", "ts_ms": "soon"})
    assert r.ok is False
    assert r.code == "invalid_tx"
    assert r.tx_type == ""


def test_submit_respects_ts_hint(ledger) -> None:
    ledger.register_user("0xA", "alice", "")
    r = ledger.submit(TxEnvelope("POST_CREATE", "0xA", {"content": "hi"}, ts_ms=42))
    assert r.ok
    assert ledger.get_post(1).timestamp == 42


def test_receipt_to_json_roundtrips_fields(ledger) -> None:
    r = ledger.submit(TxEnvelope("USER_REGISTER", "0xA", {"username": ""}))
    j = r.to_json()
    assert j["ok"] is False
    assert j["error"]["code"] == "invalid_username"
    assert j["events"] == []
