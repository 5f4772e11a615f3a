"""FastAPI application exposing the command, question and user services."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from chat_commands.config import get_settings
from chat_commands.logging_config import configure_logging
from chat_commands.models import ChatMessage, CommandQuery, CommandRecord, UserProfile
from chat_commands.services import Services, get_services
from chat_commands.store import StoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, load config and build services on startup."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    app.state.services = get_services()
    yield


app = FastAPI(
    title="Chat Commands",
    lifespan=lifespan,
)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Storage failures abort the request; the caller owns retry policy."""
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"detail": "Storage unavailable"}, status_code=503)


def services() -> Services:
    return get_services()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "chat-commands",
        "version": "0.1.0",
    }


@app.post("/twitch/commands", response_model=CommandRecord | None)
async def create_command(message: ChatMessage, svc: Services = Depends(services)):
    """Dispatch a chat message and return the stored record (null if rejected)."""
    return await svc.commands.create(message)


@app.get("/twitch/commands", response_model=list[CommandRecord])
async def find_commands(
    commands: bool | None = None,
    user_id: str | None = None,
    created_after: datetime | None = None,
    created_before: datetime | None = None,
    svc: Services = Depends(services),
):
    """List recent commands, newest first."""
    query = CommandQuery(
        commands=commands,
        user_id=user_id,
        created_after=created_after,
        created_before=created_before,
    )
    return await svc.commands.find(query)


@app.patch("/twitch/commands/{storage_id}", response_model=CommandRecord)
async def patch_command(
    storage_id: str,
    updates: dict[str, Any] = Body(...),
    svc: Services = Depends(services),
):
    try:
        record = await svc.commands.patch(storage_id, updates)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if record is None:
        raise HTTPException(status_code=404, detail="Command not found")
    return record


@app.delete("/twitch/commands/{message_id}")
async def remove_command(message_id: str, svc: Services = Depends(services)):
    return {"id": await svc.commands.remove(message_id)}


@app.get("/vox/populi", response_model=list[CommandRecord])
async def list_questions(svc: Services = Depends(services)):
    """List open questions in submission order."""
    return await svc.questions.find()


@app.delete("/vox/populi/{storage_id}")
async def remove_question(storage_id: str, svc: Services = Depends(services)):
    return {"_id": await svc.questions.remove(storage_id)}


@app.post("/vox/populi/{storage_id}/archive", response_model=CommandRecord)
async def archive_question(storage_id: str, svc: Services = Depends(services)):
    record = await svc.questions.archive(storage_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return record


@app.get("/twitch/users/{username}", response_model=UserProfile, response_model_exclude_none=True)
async def get_user(username: str, svc: Services = Depends(services)):
    profile = await svc.users.get(username)
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    return profile


@app.patch("/twitch/users/{username}", response_model=UserProfile, response_model_exclude_none=True)
async def patch_user(
    username: str,
    fields: dict[str, Any] = Body(...),
    svc: Services = Depends(services),
):
    try:
        return await svc.users.patch(username, fields)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
