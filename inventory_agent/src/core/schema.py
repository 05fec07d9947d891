"""
Inventory Agent - Item Schema
==============================
Pydantic models describing one synthetic inventory record, plus the
validation helpers the generator runs over untrusted model output.

Validation is **strict** per field: a value of the wrong JSON type is
rejected, never coerced (``"899"`` is not a price, ``42`` is not a brand).
NaN and Infinity are not numbers, and ``notes`` may be absent but
not ``null``.  Unknown keys are dropped.  An item either fully conforms or the whole
batch fails.

Usage:
    from inventory_agent.src.core.schema import validate_items
    items = validate_items(json.loads(raw_text))
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictStr, TypeAdapter, ValidationError

from inventory_agent.src.core.exceptions import SchemaViolation

# ── Human-readable shapes for pydantic error types ─────────────────────
_EXPECTED_SHAPES: dict[str, str] = {
    "missing": "a value (field is required)",
    "string_type": "a string",
    "float_type": "a number",
    "finite_number": "a finite number",
    "list_type": "an array",
    "model_type": "an object",
    "model_attributes_type": "an object",
    "dict_type": "an object",
}


class _ItemModel(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class ManufacturerAddress(_ItemModel):
    street: StrictStr
    city: StrictStr
    state: StrictStr
    postal_code: StrictStr
    country: StrictStr


class Prices(_ItemModel):
    full_price: StrictFloat
    sale_price: StrictFloat


class UserReview(_ItemModel):
    review_date: StrictStr
    review_comment: StrictStr
    rating: StrictFloat


class Item(_ItemModel):
    """One catalog entry as generated for the inventory collection."""

    item_id: StrictStr
    item_name: StrictStr
    item_description: StrictStr
    brand: StrictStr
    manufacturer_address: ManufacturerAddress
    prices: Prices
    categories: list[StrictStr]
    user_reviews: list[UserReview]
    # absent defaults to None; an explicit null is rejected
    notes: StrictStr = None  # type: ignore[assignment]

    def to_document(self) -> dict[str, Any]:
        """Verbatim dict copy of the item.  Fields never supplied (e.g. ``notes``) stay absent."""
        return self.model_dump(exclude_unset=True)


_ITEM_LIST_ADAPTER: TypeAdapter[list[Item]] = TypeAdapter(list[Item])


def item_schema_json() -> dict[str, Any]:
    """JSON Schema of an array of items, used to build format instructions."""
    return _ITEM_LIST_ADAPTER.json_schema()


def validate_item(data: Any) -> Item:
    """
    Validate one parsed structure against the ``Item`` schema.

    Raises
    ------
    SchemaViolation
        Naming the first failing field path and the expected shape.
    """
    try:
        return Item.model_validate(data)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "<root>"
        expected = _EXPECTED_SHAPES.get(error["type"], error["msg"])
        raise SchemaViolation(field, expected, f"Field '{field}': expected {expected} ({error['msg']})") from exc


def validate_items(data: Any) -> list[Item]:
    """
    Validate a parsed array of items.  The first non-conforming element
    fails the whole batch; no partial results are ever returned.
    """
    if not isinstance(data, list):
        raise SchemaViolation("<root>", "an array of items", f"Expected an array of items, got {type(data).__name__}")

    items: list[Item] = []
    for index, element in enumerate(data):
        try:
            items.append(validate_item(element))
        except SchemaViolation as exc:
            raise SchemaViolation(f"[{index}].{exc.field}", exc.expected, f"Item {index}: {exc}") from exc
    return items
