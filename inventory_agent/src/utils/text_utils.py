"""
Inventory Agent - Text Utilities
=================================
Renders an ``Item`` into the single natural-language paragraph that is
embedded for vector search.

These helpers are stateless and side-effect-free: the same item always
renders to the byte-identical summary.
"""

from __future__ import annotations

from inventory_agent.src.core.schema import Item


def format_number(value: float) -> str:
    """Render a number the way it reads in a sentence: ``899.0`` → ``"899"``, ``449.99`` → ``"449.99"``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_item_summary(item: Item) -> str:
    """
    Build the embedding text for one item.

    Template (order matters)::

        {name} {description} from the brand {brand}. Manufacturer: Made in {country}.
        Categories: {a, b}. Reviews: {reviews}. Price: {price}. Notes: {notes}

    Only the manufacturer's country is rendered; the rest of the address
    is validated but left out.  An absent ``notes`` renders as ``None``.
    """
    basic_info = f"{item.item_name} {item.item_description} from the brand {item.brand}"
    manufacturer_details = f"Made in {item.manufacturer_address.country}"
    categories = ", ".join(item.categories)
    user_reviews = " ".join(
        f"Rated {format_number(review.rating)} on {review.review_date}: {review.review_comment} "
        for review in item.user_reviews
    )
    price = f"At full price it costs: {format_number(item.prices.full_price)} USD, On sale it costs: {format_number(item.prices.sale_price)} USD"

    return f"{basic_info}. Manufacturer: {manufacturer_details}. Categories: {categories}. Reviews: {user_reviews}. Price: {price}. Notes: {item.notes}"
