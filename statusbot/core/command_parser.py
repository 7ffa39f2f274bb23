"""Command Parser: turns `/location` slash-command text into exactly one Action.

Invariants:
    - parse() is total: every input yields one Action, nothing is raised
    - Tokens split on whitespace, case-sensitive; the first token drives dispatch
    - Unparseable input maps to ParsingFailed carrying a human-readable reason
    - Tokens beyond the ones a rule consumes are ignored

Design Decisions:
    - A bare first token is a user only when it starts with "<" or "@", otherwise
      it is a team name. Decided here, never re-dispatched during execution.
    - Actions are frozen dataclasses forming a closed union; the executor maps
      each type to a handler explicitly
"""

from dataclasses import dataclass
from typing import Union

from statusbot.core.domain_types import TeamName

TEAM_KEYWORD = "team"
USER_SIGILS = ("<", "@")

NEED_TARGET = "need username/team/`team`"
NEED_TEAM_OR_COMMAND = "need team name or command"
NEED_NAME_TO_CREATE = "need team name to create"
NEED_NAME_TO_DELETE = "need team name to delete"
NEED_USER_TO_ADD = "need user to add"
NEED_USER_TO_DELETE = "need user to delete"
NEED_MEMBER_COMMAND = "need `add` or `del`"


# ─── Actions ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ShowUser:
    """Show one user's status. `user` is the raw mention token."""
    user: str


@dataclass(frozen=True)
class ShowTeam:
    team: TeamName


@dataclass(frozen=True)
class ListTeams:
    pass


@dataclass(frozen=True)
class CreateTeam:
    name: TeamName


@dataclass(frozen=True)
class DeleteTeam:
    name: TeamName


@dataclass(frozen=True)
class AddMember:
    team: TeamName
    user: str


@dataclass(frozen=True)
class RemoveMember:
    team: TeamName
    user: str


@dataclass(frozen=True)
class ParsingFailed:
    reason: str


Action = Union[
    ShowUser, ShowTeam, ListTeams, CreateTeam, DeleteTeam,
    AddMember, RemoveMember, ParsingFailed,
]


# ─── Parsing ─────────────────────────────────────────────────────

def parse(text: str) -> Action:
    """Parse slash-command text into an Action."""
    tokens = text.split()
    if not tokens:
        return ParsingFailed(NEED_TARGET)

    first, rest = tokens[0], tokens[1:]
    if first == TEAM_KEYWORD:
        return _parse_team_command(rest)
    if first.startswith(USER_SIGILS):
        return ShowUser(first)
    return ShowTeam(TeamName(first))


def _parse_team_command(tokens: list[str]) -> Action:
    """Parse everything after the leading `team` keyword."""
    if not tokens:
        return ParsingFailed(NEED_TEAM_OR_COMMAND)

    head, rest = tokens[0], tokens[1:]
    if head == "create":
        return CreateTeam(TeamName(rest[0])) if rest else ParsingFailed(NEED_NAME_TO_CREATE)
    if head == "delete":
        return DeleteTeam(TeamName(rest[0])) if rest else ParsingFailed(NEED_NAME_TO_DELETE)
    if head == "list":
        return ListTeams()
    return _parse_member_command(TeamName(head), rest)


def _parse_member_command(team: TeamName, tokens: list[str]) -> Action:
    """Parse `team <name> add|del <user>`."""
    subcommand = tokens[0] if tokens else None
    user = tokens[1] if len(tokens) > 1 else None

    if subcommand == "add":
        return AddMember(team, user) if user else ParsingFailed(NEED_USER_TO_ADD)
    if subcommand == "del":
        return RemoveMember(team, user) if user else ParsingFailed(NEED_USER_TO_DELETE)
    return ParsingFailed(NEED_MEMBER_COMMAND)
