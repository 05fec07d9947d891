"""
Inventory Agent - Application Entry Point
==========================================
FastAPI application factory for the chat server.

On startup the lifespan hook:
    1. Connects to MongoDB (``ping``); the server refuses to start without it.
    2. Resolves the conversational agent from ``settings.AGENT_ENTRYPOINT``.
    3. Stores both on ``app.state`` for the route handlers.

Dependencies passed to ``create_app`` are used as-is and are not closed
on shutdown; the ones the lifespan creates are.

Run:
    python -m inventory_agent.src.main
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_agent.config.settings import settings
from inventory_agent.src.api.routes import router
from inventory_agent.src.core.agent import AgentCallable, load_agent
from inventory_agent.src.utils.logger import get_logger

logger = get_logger(__name__)


def create_mongo_client() -> Any:
    """Create the async MongoDB client from ``settings.MONGO_URI``."""
    import motor.motor_asyncio

    return motor.motor_asyncio.AsyncIOMotorClient(settings.MONGO_URI.get_secret_value())


def create_app(agent: AgentCallable | None = None, client: Any | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Parameters
    ----------
    agent
        The conversational agent.  Loaded from ``settings.AGENT_ENTRYPOINT`` when omitted.
    client
        An async MongoDB client.  Created from ``settings.MONGO_URI`` when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned_client = None
        if app.state.mongo_client is None:
            owned_client = app.state.mongo_client = create_mongo_client()

        try:
            await app.state.mongo_client.admin.command("ping")
            logger.info("Connected to MongoDB")

            if app.state.agent is None:
                if not settings.AGENT_ENTRYPOINT:
                    raise RuntimeError("AGENT_ENTRYPOINT is not set; cannot serve /chat without an agent.")
                app.state.agent = load_agent(settings.AGENT_ENTRYPOINT)

            yield

        finally:
            # closed on failed startup too
            if owned_client is not None:
                owned_client.close()
                logger.info("MongoDB connection closed")

    app = FastAPI(title="Inventory Agent", lifespan=lifespan)
    app.state.agent = agent
    app.state.mongo_client = client

    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.include_router(router)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host=settings.HOST, port=settings.PORT, log_level="info")
