"""Project ORM — the owner-scoped aggregate root.

Invariants:
    - Exactly one owner (user_id non-nullable)
    - members ordered by position; position 0 is the owner
    - Deleting a project deletes its members and tasks (ORM cascade + ON DELETE CASCADE)

Design Decisions:
    - start_date / end_date are calendar dates: "in progress" is decided per day
    - team_members / member_profile are derived properties, not columns
      (ADR: ordered member rows replace the comma-joined strings)
    - selectin loading for members: every project response renders them
"""

from datetime import date, datetime, timezone

from sqlalchemy import Integer, String, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.domain_types import Member
from app.core.members import join_team_members, join_member_profiles
from app.db.base import Base


class Project(Base):
    """Project aggregate root — owns members and tasks."""
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_shared: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=lambda: datetime.now(timezone.utc),
    )

    owner: Mapped["User"] = relationship("User", back_populates="projects")
    members: Mapped[list["ProjectMember"]] = relationship(
        "ProjectMember", back_populates="project",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="ProjectMember.position",
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="project",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    @property
    def member_list(self) -> list[Member]:
        return [
            Member(name=m.name, profile_image=m.profile_image)
            for m in self.members
        ]

    @property
    def team_members(self) -> str:
        """Comma-joined member names, owner first."""
        return join_team_members(self.member_list)

    @property
    def member_profile(self) -> str:
        """Comma-joined profile references, parallel to team_members."""
        return join_member_profiles(self.member_list)
