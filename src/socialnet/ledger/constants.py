# src/socialnet/ledger/constants.py
from __future__ import annotations

"""Protocol limits for the social ledger.

These are part of the ledger contract, not operator configuration.
"""

# Profile fields
MAX_USERNAME_LEN: int = 50
MAX_BIO_LEN: int = 200

# Posts
MAX_CONTENT_LEN: int = 500

# Fixed read window for get_latest_posts
MIN_LATEST_POSTS: int = 1
MAX_LATEST_POSTS: int = 50

# Tx types routed by runtime.domain_apply
TX_USER_REGISTER: str = "USER_REGISTER"
TX_POST_CREATE: str = "POST_CREATE"
TX_LIKE_TOGGLE: str = "LIKE_TOGGLE"
