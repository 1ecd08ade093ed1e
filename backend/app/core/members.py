"""Member Lists — conversion between ordered member records and legacy joined strings.

Invariants:
    - Position 0 of every stored member list is the project owner
    - team_members and member_profile are parallel: entry i of each describes member i
    - Legacy strings are comma-joined; empty segments are dropped from team_members
    - A missing profile is rendered as an empty segment to keep positions aligned
    - On update, a legacy string that is absent leaves its half of every stored member as is

Design Decisions:
    - Members stored as rows, strings derived on read: the joined form is an API
      compatibility view, never the source of truth
"""

from app.core.domain_types import CallerLike, Member

SEPARATOR = ","


def split_legacy_members(
    team_members: str | None, member_profile: str | None,
) -> list[Member]:
    """Parse parallel comma-joined name/profile strings into members."""
    names = [n.strip() for n in (team_members or "").split(SEPARATOR)]
    profiles = [p.strip() for p in (member_profile or "").split(SEPARATOR)]
    members = []
    for index, name in enumerate(names):
        if not name:
            continue
        profile = profiles[index] if index < len(profiles) else ""
        members.append(Member(name=name, profile_image=profile or None))
    return members


def merge_legacy_members(
    current: list[Member],
    team_members: str | None,
    member_profile: str | None,
) -> list[Member]:
    """Apply legacy strings over `current`; an absent string keeps stored values.

    Names-only input keeps the stored profile at each position. Profiles-only
    input keeps the stored names and replaces their profiles by position.
    """
    if team_members is not None and member_profile is not None:
        return split_legacy_members(team_members, member_profile)
    if team_members is not None:
        names = [n.strip() for n in team_members.split(SEPARATOR) if n.strip()]
        return [
            Member(
                name=name,
                profile_image=(
                    current[i].profile_image if i < len(current) else None
                ),
            )
            for i, name in enumerate(names)
        ]
    profiles = [p.strip() for p in (member_profile or "").split(SEPARATOR)]
    return [
        Member(
            name=m.name,
            profile_image=(profiles[i] if i < len(profiles) else "") or None,
        )
        for i, m in enumerate(current)
    ]


def with_owner_first(owner: CallerLike, members: list[Member]) -> list[Member]:
    """Prefix the owner to a requested member list."""
    return [Member(name=owner.name, profile_image=owner.profile_image), *members]


def join_team_members(members: list[Member]) -> str:
    return SEPARATOR.join(m.name for m in members)


def join_member_profiles(members: list[Member]) -> str:
    return SEPARATOR.join(m.profile_image or "" for m in members)
