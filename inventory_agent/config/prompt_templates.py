"""
Inventory Agent - Prompt Templates
===================================
Centralised prompt management for synthetic data generation.  Prompts
live here so they can be reviewed and versioned independently of the
generator logic.

Exports
-------
ITEM_FIELDS, GENERATION_PROMPT_TEMPLATE, FORMAT_INSTRUCTIONS_TEMPLATE.
"""

# ══════════════════════════════════════════════════════════════════════
#  SYNTHETIC INVENTORY GENERATION
# ══════════════════════════════════════════════════════════════════════

ITEM_FIELDS: tuple[str, ...] = ("item_id", "item_name", "item_description", "brand", "manufacturer_address", "prices", "categories", "user_reviews", "notes")

GENERATION_PROMPT_TEMPLATE: str = """You are a helpful assistant that generates {domain} item data. Generate {count} {domain} items. Each record should include the following fields: {fields}. Ensure variety in the data and realistic values.

{format_instructions}"""


# ══════════════════════════════════════════════════════════════════════
#  FORMAT INSTRUCTIONS
# ══════════════════════════════════════════════════════════════════════
# Rendered with the JSON Schema of ``list[Item]``.  The reply is parsed
# as JSON (a surrounding ```json fence is tolerated) and validated
# record by record.

FORMAT_INSTRUCTIONS_TEMPLATE: str = """You must format your output as a JSON value that adheres to a given "JSON Schema" instance.

"JSON Schema" is a declarative language that allows you to annotate and validate JSON documents.

For example, the example "JSON Schema" instance {{"properties": {{"foo": {{"description": "a list of test words", "type": "array", "items": {{"type": "string"}}}}}}, "required": ["foo"]}}
would match an object with one required property, "foo". The "type" property specifies "foo" must be an "array", and the "description" property semantically describes it as "a list of test words". The items within "foo" must be strings.
Thus, the object {{"foo": ["bar", "baz"]}} is a well-formatted instance of this example "JSON Schema". The object {{"properties": {{"foo": ["bar", "baz"]}}}} is not well-formatted.

Your output will be parsed and type-checked according to the provided schema instance, so make sure all fields in your output match the schema exactly and there are no trailing commas!

Here is the JSON Schema instance your output must adhere to. Include the enclosing markdown codeblock:
```json
{schema}
```"""
