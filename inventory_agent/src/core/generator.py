"""
Inventory Agent - SyntheticDataGenerator
=========================================
Asks a chat model for a batch of synthetic inventory records and turns
its raw text reply into validated ``Item`` objects.

Flow:
    1. Build prompt → domain instructions + schema-derived format directive
    2. Call the model once (no retry)
    3. Decode JSON strictly (a ```json fence is tolerated, a truncated reply is not)
    4. Validate every record; one bad record fails the whole batch

Design decisions:
    • **Dependency Injection** – the chat model is injected; anything with
      an async ``ainvoke(prompt)`` works, which keeps tests offline.
    • **Fail closed** – the generator never returns a valid subset.

Usage:
    from inventory_agent.src.core.generator import SyntheticDataGenerator, create_chat_model
    generator = SyntheticDataGenerator(create_chat_model())
    items = await generator.generate(10)
"""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

from langchain_core.utils.json import parse_json_markdown

from inventory_agent.config.prompt_templates import FORMAT_INSTRUCTIONS_TEMPLATE, GENERATION_PROMPT_TEMPLATE, ITEM_FIELDS
from inventory_agent.config.settings import settings
from inventory_agent.src.core.exceptions import GenerationError, ParseError, SchemaViolation
from inventory_agent.src.core.schema import Item, item_schema_json, validate_items
from inventory_agent.src.utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ChatModel(Protocol):
    """Structural type for any LangChain chat model."""

    async def ainvoke(self, input: Any, *args: Any, **kwargs: Any) -> Any: ...


def create_chat_model() -> ChatModel:
    """Initialise the Gemini chat model via LangChain."""
    from langchain_google_genai import ChatGoogleGenerativeAI

    llm = ChatGoogleGenerativeAI(model=settings.LLM_MODEL, temperature=settings.LLM_TEMPERATURE, google_api_key=settings.GOOGLE_API_KEY.get_secret_value())
    logger.info("LLM initialised: %s (temperature=%.1f)", settings.LLM_MODEL, settings.LLM_TEMPERATURE)
    return llm


def format_instructions() -> str:
    """Machine-readable formatting directive derived from the ``Item`` schema."""
    schema = item_schema_json()
    return FORMAT_INSTRUCTIONS_TEMPLATE.format(schema=json.dumps(schema))


class SyntheticDataGenerator:
    """
    Generates synthetic inventory items through a chat model.

    Parameters
    ----------
    llm
        A chat model exposing ``ainvoke`` (e.g. ``ChatGoogleGenerativeAI``).
    domain
        What kind of store the items belong to.  Defaults to ``settings.SEED_DOMAIN``.
    """

    __slots__ = ("_llm", "_domain")

    def __init__(self, llm: ChatModel, domain: str | None = None) -> None:
        self._llm = llm
        self._domain = domain or settings.SEED_DOMAIN


    def build_prompt(self, count: int) -> str:
        return GENERATION_PROMPT_TEMPLATE.format(domain=self._domain, count=count, fields=", ".join(ITEM_FIELDS), format_instructions=format_instructions())


    async def generate(self, count: int) -> list[Item]:
        """
        Request exactly *count* records and return them validated.

        Raises
        ------
        GenerationError
            The model call itself failed.
        ParseError
            The reply was not JSON, not an array, or one record broke the schema.
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"count must be a positive integer, got {count!r}")

        prompt = self.build_prompt(count)
        logger.info("Generating synthetic data (%d %s items)...", count, self._domain)

        try:
            response = await self._llm.ainvoke(prompt)
        except Exception as exc:
            raise GenerationError(f"Text generation failed: {exc}") from exc

        items = self.parse(self._response_text(response))
        if len(items) != count:
            logger.warning("Requested %d items but the model returned %d.", count, len(items))
        logger.info("Generated %d valid item(s).", len(items))
        return items


    def parse(self, text: str) -> list[Item]:
        """Decode raw model text into validated items, failing the whole batch on any error."""
        try:
            # json.loads, not the default partial parser: a truncated reply must not decode
            data = parse_json_markdown(text, parser=json.loads)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Model output is not valid JSON: {exc}") from exc

        try:
            return validate_items(data)
        except SchemaViolation as exc:
            raise ParseError(f"Model output does not match the item schema: {exc}") from exc


    @staticmethod
    def _response_text(response: Any) -> str:
        """Extract the text of a chat response; multi-part contents are joined."""
        content = response.content if hasattr(response, "content") else response
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts: list[str] = []
            for part in content:
                if isinstance(part, str):
                    parts.append(part)
                elif isinstance(part, dict) and part.get("type") == "text":
                    parts.append(str(part.get("text", "")))
            return "".join(parts)
        return str(content)
