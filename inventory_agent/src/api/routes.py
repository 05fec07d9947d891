"""
Inventory Agent - API Routes
=============================
  - GET  /      → liveness string
  - POST /chat  → start a conversation with the agent

Route handlers are thin controllers: they validate the request, delegate
to the agent boundary in ``src/core/agent.py`` and format the response.

Thread ids are the current epoch time in milliseconds.  Two requests in
the same millisecond get the same id.
"""

from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from inventory_agent.src.core.agent import call_agent
from inventory_agent.src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

LIVENESS_MESSAGE = "Langgraph Agent Server is running. You better catch it!"


class ChatRequest(BaseModel):
    message: str


class ChatResponse(BaseModel):
    threadId: str
    response: Any


def new_thread_id() -> str:
    return str(int(time.time() * 1000))


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return LIVENESS_MESSAGE


@router.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest, request: Request):
    thread_id = new_thread_id()
    logger.info("[CHAT] %s (thread=%s)", body.message, thread_id)

    try:
        response = await call_agent(request.app.state.agent, request.app.state.mongo_client, body.message, thread_id)
    except Exception:
        logger.exception("Error starting conversation (thread=%s).", thread_id)
        return JSONResponse(status_code=500, content={"error": "Failed to start conversation"})

    return ChatResponse(threadId=thread_id, response=response)
