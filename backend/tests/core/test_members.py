"""Member lists — legacy string parsing, owner prefixing, joined rendering."""

from dataclasses import dataclass

from app.core.domain_types import Member
from app.core.members import (
    join_member_profiles,
    join_team_members,
    merge_legacy_members,
    split_legacy_members,
    with_owner_first,
)


@dataclass
class _Caller:
    id: int
    name: str
    profile_image: str | None


def test_owner_is_prefixed():
    caller = _Caller(1, "Alice", "pic.png")
    members = with_owner_first(caller, [Member("Bob")])
    assert members[0] == Member("Alice", "pic.png")
    assert members[1] == Member("Bob")


def test_owner_prefixed_to_empty_list():
    caller = _Caller(1, "Alice", None)
    assert with_owner_first(caller, []) == [Member("Alice", None)]


def test_split_parallel_strings():
    members = split_legacy_members("Bob,Carol", "bob.png,carol.png")
    assert members == [Member("Bob", "bob.png"), Member("Carol", "carol.png")]


def test_split_strips_whitespace_and_drops_empty_names():
    members = split_legacy_members(" Bob , ,Carol", "b.png,,c.png")
    assert [m.name for m in members] == ["Bob", "Carol"]
    assert members[1].profile_image == "c.png"


def test_split_missing_profiles_become_none():
    members = split_legacy_members("Bob,Carol", "bob.png")
    assert members[1].profile_image is None


def test_split_none_inputs_yield_no_members():
    assert split_legacy_members(None, None) == []


def test_join_keeps_positions_aligned():
    members = [Member("Alice", "pic.png"), Member("Bob"), Member("Carol", "c.png")]
    assert join_team_members(members) == "Alice,Bob,Carol"
    assert join_member_profiles(members) == "pic.png,,c.png"


def test_alice_then_bob_joins_to_legacy_string():
    caller = _Caller(1, "Alice", "pic.png")
    members = with_owner_first(caller, split_legacy_members("Bob", None))
    assert join_team_members(members) == "Alice,Bob"


STORED = [Member("Bob", "bob.png"), Member("Carol", "carol.png")]


def test_merge_names_only_keeps_stored_profiles():
    merged = merge_legacy_members(STORED, "Dave,Carol", None)
    assert merged == [Member("Dave", "bob.png"), Member("Carol", "carol.png")]


def test_merge_names_only_new_positions_have_no_profile():
    merged = merge_legacy_members(STORED, "Bob,Carol,Erin", None)
    assert merged[2] == Member("Erin", None)


def test_merge_names_only_can_shrink():
    assert merge_legacy_members(STORED, "Bob", None) == [Member("Bob", "bob.png")]


def test_merge_profiles_only_keeps_stored_names():
    merged = merge_legacy_members(STORED, None, "new.png")
    assert merged == [Member("Bob", "new.png"), Member("Carol", None)]


def test_merge_both_strings_replace_everything():
    merged = merge_legacy_members(STORED, "Zed", "z.png")
    assert merged == [Member("Zed", "z.png")]
