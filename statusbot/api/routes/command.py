"""Slash Command Route: POST /location -> Command Parser -> Action Executor.

Invariants:
    - Always answers 200: errors are rendered as blocks, never as HTTP error codes
    - A body that does not decode as a slash-command form gets a bare 200 with no body
    - Successful replies are {"blocks": [...]} with Content-Type application/json
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from statusbot.core.blocks import to_payload
from statusbot.core.command_parser import parse
from statusbot.infrastructure.database import get_db
from statusbot.infrastructure.team_repository import SqlTeamRepository
from statusbot.infrastructure.user_repository import SqlUserRepository
from statusbot.schemas.slack import SlashCommand
from statusbot.services.execute_action import ActionExecutor

logger = logging.getLogger(__name__)
router = APIRouter(tags=["slack"])


async def _read_command(request: Request) -> SlashCommand | None:
    try:
        form = await request.form()
        return SlashCommand.model_validate(dict(form))
    except (ValueError, MultiPartException, StarletteHTTPException) as e:
        # pydantic.ValidationError is a ValueError
        logger.error(
            f"Failed to parse location request: {e}",
            extra={"path": request.url.path},
        )
        return None


@router.post("/location")
async def location(request: Request, db: AsyncSession = Depends(get_db)):
    """Handle the `/location` slash command."""
    command = await _read_command(request)
    if command is None:
        return Response(status_code=status.HTTP_200_OK)

    action = parse(command.text)
    executor = ActionExecutor(SqlTeamRepository(db), SqlUserRepository(db))
    result = await executor.execute(action)
    logger.info(
        f"Handled /location {type(action).__name__}",
        extra={"action": type(action).__name__, "user_id": command.user_id},
    )
    return JSONResponse(status_code=status.HTTP_200_OK, content=to_payload(result))
