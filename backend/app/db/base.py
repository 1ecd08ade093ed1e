"""SQLAlchemy Declarative Base — shared metadata for the Planboard tables.

Invariants:
    - users, projects, project_members and tasks all hang off Base.metadata
    - Unnamed indexes and foreign keys get deterministic names from NAMING_CONVENTION

Design Decisions:
    - Separate file for Base: models import it without importing each other
    - Naming convention matches alembic/versions/001_initial_schema.py so
      autogenerate diffs stay empty
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for Planboard ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
