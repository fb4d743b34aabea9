from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict


@dataclass
class LedgerError(Exception):
    """Canonical error type for ledger operations.

    Every kind is raised before any state mutation, so a failed call leaves
    the ledger unchanged and usable.
    """

    reason: str
    details: Dict[str, Any] = field(default_factory=dict)

    code: ClassVar[str] = "ledger_error"

    def __str__(self) -> str:
        if not self.details:
            return f"{self.code}:{self.reason}"
        return f"{self.code}:{self.reason}:{self.details}"

    def to_json(self) -> Dict[str, Any]:
        return {"code": self.code, "reason": self.reason, "details": dict(self.details)}


class AlreadyRegistered(LedgerError):
    code = "already_registered"


class InvalidUsername(LedgerError):
    code = "invalid_username"


class InvalidBio(LedgerError):
    code = "invalid_bio"


class NotRegistered(LedgerError):
    code = "not_registered"


class InvalidContent(LedgerError):
    code = "invalid_content"


class PostNotFound(LedgerError):
    code = "post_not_found"


class SelfLikeForbidden(LedgerError):
    code = "self_like_forbidden"


class UserNotFound(LedgerError):
    code = "user_not_found"


class InvalidRange(LedgerError):
    code = "invalid_range"


class ApplyError(LedgerError):
    """Router-level failure: unknown tx type or malformed envelope."""

    code = "apply_error"

    def __init__(self, code: str, reason: str, details: Dict[str, Any] | None = None) -> None:
        super().__init__(reason, details or {})
        self.code = code  # type: ignore[misc]


__all__ = [
    "AlreadyRegistered",
    "ApplyError",
    "InvalidBio",
    "InvalidContent",
    "InvalidRange",
    "InvalidUsername",
    "LedgerError",
    "NotRegistered",
    "PostNotFound",
    "SelfLikeForbidden",
    "UserNotFound",
]
