"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; errors use the shared envelope

Design Decisions:
    - Thin routes delegate to ProjectService
"""
