"""Action Executor: block output for every Action, against a real SQLite store.

Invariants:
    - Storage failures become message blocks, never exceptions
    - ShowTeam on an empty team is header + divider only
    - "has not set a status" is distinct from "not found"
    - ShowUser never falls back to a team lookup
"""

import pytest

from statusbot.core.command_parser import (
    AddMember, CreateTeam, DeleteTeam, ListTeams, ParsingFailed,
    RemoveMember, ShowTeam, ShowUser, parse,
)
from statusbot.core.domain_types import TeamName, TeamRecord, UserId
from statusbot.core.errors import DatabaseError
from statusbot.services.execute_action import ActionExecutor


def _texts(blocks: list[dict]) -> list[str]:
    return [b.get("text", {}).get("text", "---") for b in blocks]


def _types(blocks: list[dict]) -> list[str]:
    return [b["type"] for b in blocks]


@pytest.fixture
def executor(teams, users):
    return ActionExecutor(teams, users)


class BrokenTeams:
    """TeamRepository whose every call fails like an unreachable database."""

    def __init__(self, team: TeamRecord | None = None):
        self._team = team

    async def fetch(self, name):
        if self._team is not None:
            return self._team
        raise DatabaseError("down", "fetch_team")

    async def _fail(self, *args, **kwargs):
        raise DatabaseError("down", "execute")

    create = fetch_all = delete = members = add_member = remove_member = _fail


class BrokenUsers:
    async def _fail(self, *args, **kwargs):
        raise DatabaseError("down", "execute")

    fetch = fetch_or_create = save_status = _fail


# ─── ShowUser ────────────────────────────────────────────────────

async def test_show_user_with_status(executor, users):
    await users.save_status(UserId("U1"), "telework")
    result = await executor.execute(ShowUser("<@U1|bob>"))
    assert _texts(result) == ["<@U1>: telework"]
    assert _types(result) == ["section"]


async def test_show_user_without_status(executor, users):
    await users.fetch_or_create(UserId("U1"))
    result = await executor.execute(ShowUser("<@U1>"))
    assert _texts(result) == ["<@U1> has not set a status"]


async def test_show_unknown_user(executor):
    result = await executor.execute(ShowUser("<@U404>"))
    assert _texts(result) == ["<@U404> not found"]


async def test_show_user_does_not_fall_back_to_team(executor, teams):
    await teams.create(TeamName("Eng"))
    result = await executor.execute(ShowUser("@Eng"))
    assert _texts(result) == ["<@Eng> not found"]


async def test_show_user_store_failure():
    executor = ActionExecutor(BrokenTeams(), BrokenUsers())
    result = await executor.execute(ShowUser("<@U1>"))
    assert _texts(result) == ["Failed to load <@U1>, try again later"]


# ─── ShowTeam / ListTeams ────────────────────────────────────────

async def test_show_empty_team(executor, teams):
    await teams.create(TeamName("Eng"))
    result = await executor.execute(ShowTeam(TeamName("Eng")))
    assert _types(result) == ["header", "divider"]
    assert result[0]["text"]["text"] == "Eng Status"


async def test_show_team_lists_each_member(executor, teams, users):
    team = await teams.create(TeamName("Eng"))
    await users.save_status(UserId("U1"), "office")
    for uid in ("U1", "U2"):
        await teams.add_member(team, await users.fetch_or_create(UserId(uid)))

    result = await executor.execute(ShowTeam(TeamName("Eng")))

    assert _types(result) == ["header", "divider", "section", "section"]
    assert _texts(result)[2:] == ["<@U1>: office", "<@U2> has not set a status"]


async def test_show_missing_team(executor):
    result = await executor.execute(ShowTeam(TeamName("Nope")))
    assert _texts(result) == ["Team `Nope` not found"]


async def test_show_team_store_failure():
    executor = ActionExecutor(BrokenTeams(), BrokenUsers())
    result = await executor.execute(ShowTeam(TeamName("Eng")))
    assert _texts(result) == ["Failed to load team `Eng`, try again later"]


async def test_list_teams(executor, teams):
    await teams.create(TeamName("Ops"))
    await teams.create(TeamName("Eng"))
    result = await executor.execute(ListTeams())
    assert _types(result) == ["header", "divider", "section", "section"]
    assert _texts(result) == ["Teams", "---", "• Eng", "• Ops"]


async def test_list_teams_failure():
    executor = ActionExecutor(BrokenTeams(), BrokenUsers())
    result = await executor.execute(ListTeams())
    assert _texts(result) == ["Failed to fetch teams, try again later"]


# ─── Create / Delete ─────────────────────────────────────────────

async def test_create_team(executor, teams):
    result = await executor.execute(CreateTeam(TeamName("Eng")))
    assert _texts(result) == ["Created team `Eng`"]
    assert await teams.fetch(TeamName("Eng")) is not None


async def test_create_duplicate_team_reports_failure(executor, teams, users):
    team = await teams.create(TeamName("Senate"))
    await teams.add_member(team, await users.fetch_or_create(UserId("U1")))

    result = await executor.execute(CreateTeam(TeamName("Senate")))

    assert _texts(result) == [
        "Failed to create team `Senate`, perhaps it already exists",
    ]
    assert len(await teams.fetch_all()) == 1
    assert len(await teams.members(TeamName("Senate"))) == 1


async def test_delete_team(executor, teams):
    await teams.create(TeamName("Eng"))
    result = await executor.execute(DeleteTeam(TeamName("Eng")))
    assert _texts(result) == ["Deleted team `Eng`"]
    assert await teams.fetch(TeamName("Eng")) is None


async def test_delete_missing_team(executor):
    result = await executor.execute(DeleteTeam(TeamName("Nope")))
    assert _texts(result) == ["Team `Nope` not found"]


async def test_delete_failure():
    broken = BrokenTeams(team=TeamRecord(id=1, name=TeamName("Eng")))
    executor = ActionExecutor(broken, BrokenUsers())
    result = await executor.execute(DeleteTeam(TeamName("Eng")))
    assert _texts(result) == ["Failed to delete team `Eng`, try again later"]


# ─── Membership ──────────────────────────────────────────────────

async def test_add_member_creates_user(executor, teams, users):
    await teams.create(TeamName("Eng"))

    result = await executor.execute(AddMember(TeamName("Eng"), "<@U7|sam>"))

    assert _texts(result) == ["Added <@U7> to team `Eng`"]
    assert await users.fetch(UserId("U7")) is not None
    assert [m.id for m in await teams.members(TeamName("Eng"))] == ["U7"]


async def test_add_member_twice_is_idempotent(executor, teams):
    await teams.create(TeamName("Eng"))
    await executor.execute(AddMember(TeamName("Eng"), "<@U7>"))
    result = await executor.execute(AddMember(TeamName("Eng"), "<@U7>"))
    assert _texts(result) == ["Added <@U7> to team `Eng`"]
    assert len(await teams.members(TeamName("Eng"))) == 1


async def test_add_member_to_missing_team(executor, users):
    result = await executor.execute(AddMember(TeamName("Nope"), "<@U7>"))
    assert _texts(result) == ["Team `Nope` not found"]
    assert await users.fetch(UserId("U7")) is None


async def test_add_member_user_load_failure():
    broken = BrokenTeams(team=TeamRecord(id=1, name=TeamName("Eng")))
    executor = ActionExecutor(broken, BrokenUsers())
    result = await executor.execute(AddMember(TeamName("Eng"), "<@U7>"))
    assert _texts(result) == ["Failed to load user <@U7>"]


async def test_add_member_insert_failure(users):
    broken = BrokenTeams(team=TeamRecord(id=1, name=TeamName("Eng")))
    executor = ActionExecutor(broken, users)
    result = await executor.execute(AddMember(TeamName("Eng"), "<@U7>"))
    assert _texts(result) == ["Failed to add <@U7> to team `Eng`"]


async def test_remove_member(executor, teams):
    await teams.create(TeamName("Eng"))
    await executor.execute(AddMember(TeamName("Eng"), "<@U7>"))

    result = await executor.execute(RemoveMember(TeamName("Eng"), "<@U7>"))

    assert _texts(result) == ["Removed <@U7> from team `Eng`"]
    assert await teams.members(TeamName("Eng")) == []


async def test_remove_non_member_succeeds(executor, teams, users):
    await teams.create(TeamName("Eng"))
    await users.fetch_or_create(UserId("U7"))
    result = await executor.execute(RemoveMember(TeamName("Eng"), "<@U7>"))
    assert _texts(result) == ["Removed <@U7> from team `Eng`"]


async def test_remove_unknown_user_does_not_create_it(executor, teams, users):
    await teams.create(TeamName("Eng"))
    result = await executor.execute(RemoveMember(TeamName("Eng"), "<@U404>"))
    assert _texts(result) == ["User <@U404> not found"]
    assert await users.fetch(UserId("U404")) is None


async def test_remove_member_from_missing_team(executor):
    result = await executor.execute(RemoveMember(TeamName("Nope"), "<@U7>"))
    assert _texts(result) == ["Team `Nope` not found"]


async def test_remove_member_failure(users):
    await users.fetch_or_create(UserId("U7"))
    broken = BrokenTeams(team=TeamRecord(id=1, name=TeamName("Eng")))
    executor = ActionExecutor(broken, users)
    result = await executor.execute(RemoveMember(TeamName("Eng"), "<@U7>"))
    assert _texts(result) == ["Failed to delete <@U7> from team `Eng`"]


# ─── Parse failures ──────────────────────────────────────────────

async def test_parsing_failed_blocks(executor):
    result = await executor.execute(ParsingFailed("need user to add"))
    assert _types(result) == ["header", "divider", "section"]
    assert _texts(result) == ["Invalid command", "---", "need user to add"]


async def test_every_parse_result_is_executable(executor):
    for text in ("", "team", "team list", "Eng", "<@U1>", "team Eng add <@U1>"):
        assert await executor.execute(parse(text))
