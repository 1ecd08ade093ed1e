"""Pydantic Schemas — request/response contracts for the project and task endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, responses)
    - Legacy comma-joined member strings and structured member lists both accepted

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
