"""Core Layer: pure domain rules and records, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from repositories/, infrastructure/, models/ or db/
    - All functions are pure and deterministic (the clock is passed in)
"""
