"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ProjectId, TaskId wrap ints — never use a bare int id in service signatures
    - ProgressRate is bounded 0–100 (whole percent)
    - CallerLike is the only shape the service layer needs from an authenticated user

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Protocol for the caller: service does not import the ORM User model for typing
"""

from dataclasses import dataclass
from typing import NewType, Protocol


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
ProjectId = NewType("ProjectId", int)
TaskId = NewType("TaskId", int)


# ─── Value Types ─────────────────────────────────────────────────

ProgressRate = NewType("ProgressRate", int)   # 0–100


class CallerLike(Protocol):
    """Structural contract for the authenticated caller.

    Satisfied by the ORM User model and by plain test doubles.
    """
    id: int
    name: str
    profile_image: str | None


@dataclass(frozen=True)
class Member:
    """One entry of a project's ordered member list."""
    name: str
    profile_image: str | None = None
