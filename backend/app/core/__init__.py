"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (today is always passed in)

Design Decisions:
    - Progress math and member-list conversion live here so they are testable
      without a database
"""
