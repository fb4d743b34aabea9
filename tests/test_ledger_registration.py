# tests/test_ledger_registration.py
from __future__ import annotations

import pytest

from socialnet.runtime.errors import AlreadyRegistered, ApplyError, InvalidBio, InvalidUsername, UserNotFound
from socialnet.runtime.events import UserRegistered


def test_fresh_ledger_starts_empty(ledger) -> None:
    assert ledger.total_users == 0
    assert ledger.total_posts == 0
    assert len(ledger.events) == 0
    assert ledger.view().ledger_id == "test-ledger"


def test_register_user_creates_record_and_event(ledger) -> None:
    ledger.register_user("0xA", "alice", "Blockchain enthusiast")

    user = ledger.get_user("0xA")
    assert user.principal == "0xA"
    assert user.username == "alice"
    assert user.bio == "Blockchain enthusiast"
    assert user.post_count == 0
    assert user.exists is True
    assert ledger.total_users == 1

    assert ledger.events.snapshot() == (UserRegistered(principal="0xA", username="alice"),)


def test_second_registration_fails_and_leaves_state_alone(ledger) -> None:
    ledger.register_user("0xA", "alice", "Bio 1")

    with pytest.raises(AlreadyRegistered) as e:
        ledger.register_user("0xA", "alice2", "Bio 2")

    assert e.value.code == "already_registered"
    assert ledger.get_user("0xA").username == "alice"
    assert ledger.get_user("0xA").bio == "Bio 1"
    assert ledger.total_users == 1
    assert len(ledger.events) == 1


def test_already_registered_is_checked_before_field_validation(ledger) -> None:
    ledger.register_user("0xA", "alice", "")
    with pytest.raises(AlreadyRegistered):
        ledger.register_user("0xA", "", "b" * 500)


@pytest.mark.parametrize("username, reason", [("", "username_empty"), ("a" * 51, "username_too_long")])
def test_invalid_username_rejected(ledger, username: str, reason: str) -> None:
    with pytest.raises(InvalidUsername) as e:
        ledger.register_user("0xA", username, "Valid bio")
    assert e.value.reason == reason
    assert ledger.total_users == 0
    with pytest.raises(UserNotFound):
        ledger.get_user("0xA")


def test_non_text_username_rejected(ledger) -> None:
    with pytest.raises(InvalidUsername):
        ledger.register_user("0xA", None, "bio")  # type: ignore[arg-type]


def test_bio_too_long_rejected(ledger) -> None:
    with pytest.raises(InvalidBio) as e:
        ledger.register_user("0xA", "validuser", "a" * 201)
    assert e.value.details == {"length": 201, "max": 200}
    assert ledger.total_users == 0
    assert len(ledger.events) == 0


def test_username_is_checked_before_bio(ledger) -> None:
    with pytest.raises(InvalidUsername):
        ledger.register_user("0xA", "", "a" * 201)


def test_maximum_length_username_and_bio_accepted(ledger) -> None:
    ledger.register_user("0xA", "a" * 50, "b" * 200)
    user = ledger.get_user("0xA")
    assert user.username == "a" * 50
    assert user.bio == "b" * 200


def test_empty_bio_is_allowed(ledger) -> None:
    ledger.register_user("0xA", "alice", "")
    assert ledger.get_user("0xA").bio == ""


def test_many_principals_register_independently(ledger) -> None:
    for i, name in enumerate(["alice", "bob", "charlie"], start=1):
        ledger.register_user(f"0x{i}", name, f"Bio {i}")
    assert ledger.total_users == 3
    assert [e.username for e in ledger.events] == ["alice", "bob", "charlie"]


def test_get_user_unknown_principal(ledger) -> None:
    with pytest.raises(UserNotFound) as e:
        ledger.get_user("0xnobody")
    assert str(e.value).startswith("user_not_found:user_does_not_exist")


@pytest.mark.parametrize("caller", [b"\x01addr", 7, None])
def test_non_text_principal_cannot_register(ledger, caller) -> None:
    for username in ("alice", "alice2"):
        with pytest.raises(ApplyError) as e:
            ledger.register_user(caller, username, "")
        assert e.value.code == "invalid_tx"
        assert e.value.reason == "missing_signer"

    assert ledger.total_users == 0
    assert len(ledger.events) == 0
