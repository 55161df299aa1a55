"""
Data access layer.

Design rules:
- Views call ONLY functions in this package.
- Reads go through service.py and come back as DataResult (records or an error message).
- Mock mode swaps the Supabase store for an in-memory one with the same semantics.
- No env var reads here (config-only).
"""
