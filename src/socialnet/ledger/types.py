"""socialnet.ledger.types

Read-only record snapshots handed out by the ledger.

The ledger keeps its state as a JSON-like dict (see ledger.state). Callers
never receive references into that dict; they receive these frozen
dataclasses, built from a record at read time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

Json = Dict[str, Any]

# Opaque caller identity (an address, an account id...). Compared by equality only.
Principal = str


@dataclass(frozen=True, slots=True)
class User:
    principal: Principal
    username: str
    bio: str
    post_count: int = 0
    exists: bool = True

    @classmethod
    def from_record(cls, rec: Json) -> "User":
        return cls(
            principal=str(rec.get("principal", "")),
            username=str(rec.get("username", "")),
            bio=str(rec.get("bio", "")),
            post_count=int(rec.get("post_count", 0)),
            exists=True,
        )

    def to_json(self) -> Json:
        return {
            "principal": self.principal,
            "username": self.username,
            "bio": self.bio,
            "post_count": self.post_count,
            "exists": self.exists,
        }


@dataclass(frozen=True, slots=True)
class Post:
    id: int
    author: Principal
    content: str
    like_count: int = 0
    timestamp: int = 0  # ms since epoch
    exists: bool = True

    @classmethod
    def from_record(cls, rec: Json) -> "Post":
        return cls(
            id=int(rec.get("id", 0)),
            author=str(rec.get("author", "")),
            content=str(rec.get("content", "")),
            like_count=int(rec.get("like_count", 0)),
            timestamp=int(rec.get("timestamp", 0)),
            exists=True,
        )

    def to_json(self) -> Json:
        return {
            "id": self.id,
            "author": self.author,
            "content": self.content,
            "like_count": self.like_count,
            "timestamp": self.timestamp,
            "exists": self.exists,
        }
