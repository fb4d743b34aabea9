# src/socialnet/runtime/apply/__init__.py
"""Domain-specific apply modules.

These modules implement deterministic ledger state transitions for subsets
of tx types. runtime.domain_apply routes envelopes to them.
"""

from __future__ import annotations

__all__ = [
    "social",
]
