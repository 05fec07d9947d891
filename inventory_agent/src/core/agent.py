"""
Inventory Agent - Conversational Agent Boundary
================================================
The chat endpoint forwards every message to an agent implemented
outside this package.  The agent is treated as an opaque callable::

    agent(client, message, thread_id) -> result            # sync
    async agent(client, message, thread_id) -> result      # or async

``client`` is the shared MongoDB client, so the agent can read the
seeded inventory and keep whatever conversation state it needs.

The agent is resolved from ``settings.AGENT_ENTRYPOINT``
(``"package.module:attribute"``) at server startup.
"""

from __future__ import annotations

import importlib
import inspect
from typing import Any, Protocol

from inventory_agent.src.utils.logger import get_logger

logger = get_logger(__name__)


class AgentCallable(Protocol):
    def __call__(self, client: Any, message: str, thread_id: str) -> Any: ...


def load_agent(entrypoint: str) -> AgentCallable:
    """
    Import the agent named by *entrypoint* (``"package.module:attribute"``).

    Raises
    ------
    ValueError
        Malformed entrypoint, or the attribute is not callable.
    ImportError
        The module or the attribute does not exist.
    """
    module_name, sep, attribute = entrypoint.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"AGENT_ENTRYPOINT must look like 'package.module:attribute', got '{entrypoint}'")

    module = importlib.import_module(module_name)
    try:
        agent = getattr(module, attribute)
    except AttributeError as exc:
        raise ImportError(f"Module '{module_name}' has no attribute '{attribute}'") from exc

    if not callable(agent):
        raise ValueError(f"'{entrypoint}' is not callable")

    logger.info("Agent loaded: %s", entrypoint)
    return agent


async def call_agent(agent: AgentCallable, client: Any, message: str, thread_id: str) -> Any:
    """Invoke *agent*, awaiting the result when the agent is asynchronous."""
    result = agent(client, message, thread_id)
    if inspect.isawaitable(result):
        result = await result
    return result
