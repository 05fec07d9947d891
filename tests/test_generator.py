"""Tests for the synthetic data generator."""

import json

import pytest

from inventory_agent.src.core.exceptions import GenerationError, ParseError, SchemaViolation
from inventory_agent.src.core.generator import SyntheticDataGenerator, format_instructions


def test_prompt_requests_count_and_fields(chat_model):
    generator = SyntheticDataGenerator(chat_model("[]"), domain="furniture store")
    prompt = generator.build_prompt(7)

    assert "Generate 7 furniture store items" in prompt
    for field in ("item_id", "item_name", "item_description", "brand", "manufacturer_address", "prices", "categories", "user_reviews", "notes"):
        assert field in prompt
    assert prompt.endswith(format_instructions())


def test_format_instructions_embed_item_schema():
    instructions = format_instructions()
    assert "JSON Schema" in instructions
    assert '"manufacturer_address"' in instructions
    assert '"type": "array"' in instructions


@pytest.mark.asyncio
async def test_generate_returns_validated_items(chat_model, item_data, items_json):
    model = chat_model(items_json([item_data(1), item_data(2), item_data(3)]))
    generator = SyntheticDataGenerator(model)

    items = await generator.generate(3)

    assert [item.item_id for item in items] == ["FURN-001", "FURN-002", "FURN-003"]
    assert len(model.prompts) == 1
    assert "Generate 3 " in model.prompts[0]


@pytest.mark.asyncio
async def test_generate_accepts_unfenced_json(chat_model, item_data):
    generator = SyntheticDataGenerator(chat_model(json.dumps([item_data()])))
    items = await generator.generate(1)
    assert items[0].brand == "Nordhaus"


@pytest.mark.asyncio
async def test_generate_flattens_multipart_content(chat_model, item_data, items_json):
    text = items_json([item_data()])
    half = len(text) // 2
    model = chat_model([{"type": "text", "text": text[:half]}, {"type": "text", "text": text[half:]}])

    items = await SyntheticDataGenerator(model).generate(1)
    assert items[0].item_id == "FURN-001"


@pytest.mark.asyncio
async def test_one_invalid_record_fails_the_whole_batch(chat_model, item_data, items_json):
    bad = item_data(2, prices={"full_price": "cheap", "sale_price": 10})
    generator = SyntheticDataGenerator(chat_model(items_json([item_data(1), bad, item_data(3)])))

    with pytest.raises(ParseError) as exc_info:
        await generator.generate(3)
    assert isinstance(exc_info.value.__cause__, SchemaViolation)
    assert exc_info.value.__cause__.field == "[1].prices.full_price"


@pytest.mark.asyncio
async def test_malformed_text_raises_parse_error(chat_model):
    generator = SyntheticDataGenerator(chat_model("Sorry, I can't help with that."))
    with pytest.raises(ParseError):
        await generator.generate(3)


@pytest.mark.asyncio
async def test_non_array_payload_raises_parse_error(chat_model, item_data):
    generator = SyntheticDataGenerator(chat_model(json.dumps({"items": [item_data()]})))
    with pytest.raises(ParseError, match="array"):
        await generator.generate(1)


@pytest.mark.asyncio
async def test_upstream_failure_raises_generation_error(chat_model):
    model = chat_model(error=TimeoutError("deadline exceeded"))
    with pytest.raises(GenerationError, match="deadline exceeded"):
        await SyntheticDataGenerator(model).generate(3)


@pytest.mark.asyncio
async def test_count_mismatch_is_not_an_error(chat_model, item_data, items_json):
    generator = SyntheticDataGenerator(chat_model(items_json([item_data(1), item_data(2)])))
    items = await generator.generate(5)
    assert len(items) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [0, -1, True, 2.5])
async def test_invalid_count_is_rejected(chat_model, count):
    model = chat_model("[]")
    with pytest.raises(ValueError):
        await SyntheticDataGenerator(model).generate(count)
    assert model.prompts == []


@pytest.mark.asyncio
async def test_truncated_reply_fails_instead_of_returning_a_prefix(chat_model, item_data):
    full = json.dumps([item_data(1), item_data(2)])
    cut = full[: full.index('{"item_id": "FURN-002"')]
    generator = SyntheticDataGenerator(chat_model(cut))

    with pytest.raises(ParseError, match="not valid JSON"):
        await generator.generate(2)


@pytest.mark.asyncio
async def test_truncated_fenced_reply_fails(chat_model, item_data, items_json):
    reply = items_json([item_data(1), item_data(2)])
    generator = SyntheticDataGenerator(chat_model(reply[: len(reply) // 2]))

    with pytest.raises(ParseError):
        await generator.generate(2)


def test_nan_literal_in_reply_is_rejected(chat_model, item_data):
    text = json.dumps([item_data(prices={"full_price": float("nan"), "sale_price": 10.0})])
    assert "NaN" in text

    with pytest.raises(ParseError) as exc_info:
        SyntheticDataGenerator(chat_model(text)).parse(text)
    assert exc_info.value.__cause__.field == "[0].prices.full_price"


def test_null_notes_in_reply_is_rejected(chat_model, item_data):
    text = json.dumps([item_data(notes=None)])

    with pytest.raises(ParseError) as exc_info:
        SyntheticDataGenerator(chat_model(text)).parse(text)
    assert exc_info.value.__cause__.field == "[0].notes"
