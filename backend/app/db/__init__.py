"""Database Metadata — declarative Base shared by models and migrations.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here

Design Decisions:
    - Base kept apart from the engine so alembic can import metadata without connecting
"""
