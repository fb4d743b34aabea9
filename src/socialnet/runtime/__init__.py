"""Ledger runtime: guards, appliers, router, queries and the SocialLedger aggregate."""
