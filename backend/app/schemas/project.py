"""Project Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ProjectCreate.title: 1-200 chars, stripped, non-empty
    - end_date never precedes start_date when both are in the same payload
    - Members come either as a structured list or as legacy comma-joined strings, never both
    - Legacy string segments obey the same length limits as MemberIn
    - ProjectUpdate: absent fields are untouched; explicit null on a required column is rejected

Design Decisions:
    - Legacy team_members/member_profile accepted on input and rendered on output so
      clients of the string format keep working while storage is row-based
    - from_attributes on responses: routes return ORM objects, FastAPI serializes
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.domain_types import Member
from app.core.members import SEPARATOR, merge_legacy_members


MEMBER_NAME_MAX = 100
MEMBER_PROFILE_MAX = 500


class MemberIn(BaseModel):
    """One requested team member."""
    name: str = Field(min_length=1, max_length=MEMBER_NAME_MAX)
    profile_image: str | None = Field(None, max_length=MEMBER_PROFILE_MAX)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        if "," in v:
            raise ValueError("name cannot contain a comma")
        return v

    @field_validator("profile_image")
    @classmethod
    def no_comma_in_profile(cls, v: str | None) -> str | None:
        if v is not None and "," in v:
            raise ValueError("profile_image cannot contain a comma")
        return v


class _MemberInput(BaseModel):
    """Shared member-list input: structured list or legacy strings."""
    members: list[MemberIn] | None = None
    team_members: str | None = None
    member_profile: str | None = None

    @model_validator(mode="after")
    def one_member_format(self):
        legacy = self.team_members is not None or self.member_profile is not None
        if self.members is not None and legacy:
            raise ValueError(
                "send either members or team_members/member_profile, not both",
            )
        return self

    @model_validator(mode="after")
    def legacy_segments_fit(self):
        """Each comma-separated segment obeys the MemberIn column limits."""
        for name in (self.team_members or "").split(SEPARATOR):
            if len(name.strip()) > MEMBER_NAME_MAX:
                raise ValueError(
                    f"team_members entries must be at most {MEMBER_NAME_MAX} characters",
                )
        for profile in (self.member_profile or "").split(SEPARATOR):
            if len(profile.strip()) > MEMBER_PROFILE_MAX:
                raise ValueError(
                    f"member_profile entries must be at most {MEMBER_PROFILE_MAX} characters",
                )
        return self

    def requested_members(
        self, current: list[Member] | None = None,
    ) -> list[Member] | None:
        """Members after the owner, or None when the payload names none.

        `current` is the stored list after the owner; a legacy string left out
        of the payload keeps its half of those members.
        """
        if self.members is not None:
            return [
                Member(name=m.name, profile_image=m.profile_image)
                for m in self.members
            ]
        if self.team_members is not None or self.member_profile is not None:
            return merge_legacy_members(
                current or [], self.team_members, self.member_profile,
            )
        return None


class ProjectCreate(_MemberInput):
    """Project creation — owner comes from the auth context, never the body."""
    title: str = Field(min_length=1, max_length=200)
    start_date: date
    end_date: date
    is_shared: bool = False

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def check_date_order(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot precede start_date")
        return self


class ProjectUpdate(_MemberInput):
    """Partial project update — only fields present in the payload are applied."""
    title: str | None = Field(None, min_length=1, max_length=200)
    start_date: date | None = None
    end_date: date | None = None
    is_shared: bool | None = None

    @field_validator("title", "start_date", "end_date", "is_shared", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot precede start_date")
        return self

    def column_changes(self) -> dict:
        """Scalar columns explicitly set in the payload."""
        return self.model_dump(
            include={"title", "start_date", "end_date", "is_shared"},
            exclude_unset=True,
        )


# --- Responses ----------------------------------------------------------------

class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    profile_image: str | None = None


class ProjectResponse(BaseModel):
    """Full project — structured members plus the legacy joined strings."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    start_date: date
    end_date: date
    is_shared: bool
    team_members: str
    member_profile: str
    members: list[MemberResponse]
    created_at: datetime
    updated_at: datetime | None = None


class ProgressRateResponse(BaseModel):
    project_id: int
    progress_rate: int = Field(ge=0, le=100)


class TimelineEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    start_date: date
    end_date: date


class ProjectCounts(BaseModel):
    in_progress: int
    completed: int


class ProjectTitle(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
