"""socialnet: a ledger-backed social-network state engine."""

from __future__ import annotations

from socialnet.ledger.types import Post, Principal, User
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
    UserNotFound,
)
from socialnet.runtime.events import PostCreated, PostLiked, UserRegistered
from socialnet.runtime.ledger import SocialLedger

__version__ = "0.1.0"

__all__ = [
    "AlreadyRegistered",
    "InvalidBio",
    "InvalidContent",
    "InvalidRange",
    "InvalidUsername",
    "LedgerError",
    "NotRegistered",
    "Post",
    "PostCreated",
    "PostLiked",
    "PostNotFound",
    "Principal",
    "SelfLikeForbidden",
    "SocialLedger",
    "User",
    "UserNotFound",
    "UserRegistered",
]
