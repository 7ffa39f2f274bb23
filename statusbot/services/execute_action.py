"""Action Executor: performs a parsed Action against storage and builds the reply blocks.

Invariants:
    - Every action->handler mapping is visible in one dict, no getattr magic
    - execute() never raises for storage failures: each StatusBotError is turned
      into an action-specific message block
    - Mention tokens are normalized (core/mention.py) before any user lookup
    - ShowTeam formats members from the rows returned with the team, no per-member lookup
    - Stateless: nothing is kept between calls

Design Decisions:
    - Team/user ambiguity resolved at parse time only. ShowUser never falls back
      to a team lookup and ShowTeam never falls back to a user lookup.
"""

import logging
from collections.abc import Awaitable, Callable

from statusbot.core import blocks
from statusbot.core.blocks import Block
from statusbot.core.command_parser import (
    Action, AddMember, CreateTeam, DeleteTeam, ListTeams, ParsingFailed,
    RemoveMember, ShowTeam, ShowUser,
)
from statusbot.core.errors import StatusBotError
from statusbot.core.mention import format_mention, normalize_mention
from statusbot.core.repository_protocols import TeamRepository, UserRepository

logger = logging.getLogger(__name__)


class ActionExecutor:
    """Routes Action type -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, teams: TeamRepository, users: UserRepository):
        self._teams = teams
        self._users = users
        self._handlers: dict[type, Callable[..., Awaitable[list[Block]]]] = {
            ShowUser: self.show_user,
            ShowTeam: self.show_team,
            ListTeams: self.list_teams,
            CreateTeam: self.create_team,
            DeleteTeam: self.delete_team,
            AddMember: self.add_member,
            RemoveMember: self.remove_member,
            ParsingFailed: self.parsing_failed,
        }

    async def execute(self, action: Action) -> list[Block]:
        handler = self._handlers[type(action)]
        logger.debug(
            f"Executing {action!r}", extra={"action": type(action).__name__},
        )
        return await handler(action)

    # ─── Queries ─────────────────────────────────────────────────

    async def show_user(self, action: ShowUser) -> list[Block]:
        user_id = normalize_mention(action.user)
        try:
            user = await self._users.fetch(user_id)
        except StatusBotError as e:
            _log_failure(e, user_id=user_id)
            return blocks.message(
                f"Failed to load {format_mention(user_id)}, try again later",
            )
        if user is None:
            return blocks.message(blocks.user_not_found_line(user_id))
        return blocks.message(blocks.status_line(user))

    async def show_team(self, action: ShowTeam) -> list[Block]:
        try:
            team = await self._teams.fetch(action.team)
            if team is None:
                return blocks.message(f"Team `{action.team}` not found")
            members = await self._teams.members(team.name)
        except StatusBotError as e:
            _log_failure(e, team=action.team)
            return blocks.message(
                f"Failed to load team `{action.team}`, try again later",
            )
        return blocks.titled(
            blocks.team_status_header(team.name),
            [blocks.status_line(member) for member in members],
        )

    async def list_teams(self, action: ListTeams) -> list[Block]:
        try:
            teams = await self._teams.fetch_all()
        except StatusBotError as e:
            _log_failure(e)
            return blocks.message("Failed to fetch teams, try again later")
        return blocks.titled(
            blocks.TEAMS_HEADER, [blocks.bullet(team.name) for team in teams],
        )

    # ─── Team Commands ───────────────────────────────────────────

    async def create_team(self, action: CreateTeam) -> list[Block]:
        try:
            await self._teams.create(action.name)
        except StatusBotError as e:
            _log_failure(e, team=action.name)
            return blocks.message(
                f"Failed to create team `{action.name}`, perhaps it already exists",
            )
        return blocks.message(f"Created team `{action.name}`")

    async def delete_team(self, action: DeleteTeam) -> list[Block]:
        try:
            team = await self._teams.fetch(action.name)
        except StatusBotError as e:
            _log_failure(e, team=action.name)
            team = None
        if team is None:
            return blocks.message(f"Team `{action.name}` not found")

        try:
            await self._teams.delete(team)
        except StatusBotError as e:
            _log_failure(e, team=action.name)
            return blocks.message(
                f"Failed to delete team `{action.name}`, try again later",
            )
        return blocks.message(f"Deleted team `{action.name}`")

    async def add_member(self, action: AddMember) -> list[Block]:
        user_id = normalize_mention(action.user)
        mention = format_mention(user_id)

        try:
            team = await self._teams.fetch(action.team)
        except StatusBotError as e:
            _log_failure(e, team=action.team)
            team = None
        if team is None:
            return blocks.message(f"Team `{action.team}` not found")

        try:
            user = await self._users.fetch_or_create(user_id)
        except StatusBotError as e:
            _log_failure(e, user_id=user_id, team=action.team)
            return blocks.message(f"Failed to load user {mention}")

        try:
            await self._teams.add_member(team, user)
        except StatusBotError as e:
            _log_failure(e, user_id=user_id, team=action.team)
            return blocks.message(f"Failed to add {mention} to team `{action.team}`")
        return blocks.message(f"Added {mention} to team `{action.team}`")

    async def remove_member(self, action: RemoveMember) -> list[Block]:
        user_id = normalize_mention(action.user)
        mention = format_mention(user_id)

        try:
            team = await self._teams.fetch(action.team)
        except StatusBotError as e:
            _log_failure(e, team=action.team)
            team = None
        if team is None:
            return blocks.message(f"Team `{action.team}` not found")

        try:
            user = await self._users.fetch(user_id)
        except StatusBotError as e:
            _log_failure(e, user_id=user_id, team=action.team)
            user = None
        if user is None:
            return blocks.message(f"User {mention} not found")

        try:
            await self._teams.remove_member(team, user)
        except StatusBotError as e:
            _log_failure(e, user_id=user_id, team=action.team)
            return blocks.message(
                f"Failed to delete {mention} from team `{action.team}`",
            )
        return blocks.message(f"Removed {mention} from team `{action.team}`")

    # ─── Errors ──────────────────────────────────────────────────

    async def parsing_failed(self, action: ParsingFailed) -> list[Block]:
        return blocks.titled(blocks.INVALID_COMMAND_HEADER, [action.reason])


def _log_failure(error: StatusBotError, **extra: str) -> None:
    logger.warning(
        f"{error.code}: {error.message}",
        extra={"error_code": error.code, **extra},
    )
