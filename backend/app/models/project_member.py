"""ProjectMember ORM — one ordered entry of a project's team.

Invariants:
    - Always belongs to a Project (project_id FK, cascade delete)
    - (project_id, position) is unique; position 0 is the project owner

Design Decisions:
    - Free-form name rather than a users FK: team members need not have accounts
"""

from sqlalchemy import Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class ProjectMember(Base):
    """Member row — name and profile reference at a fixed position."""
    __tablename__ = "project_members"
    __table_args__ = (
        UniqueConstraint("project_id", "position", name="uq_project_member_position"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    profile_image: Mapped[str | None] = mapped_column(
        String(500), nullable=True,
    )

    project: Mapped["Project"] = relationship(
        "Project", back_populates="members",
    )
