"""JSON-Schema to Gemini response-schema translation.

Gemini expects upper-case type tokens and rejects ``additionalProperties``
and ``$schema``. Everything else passes through unchanged.

Example:
    >>> translate_schema({"type": "object", "properties": {"x": {"type": "string"}}})
    {'type': 'OBJECT', 'properties': {'x': {'type': 'STRING'}}}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"

UNSUPPORTED_KEYWORDS = frozenset({"additionalProperties", "$schema"})


class SchemaNode(BaseModel):
    """One node of a JSON-Schema-like tree.

    ``type``, ``properties`` and ``items`` are modelled explicitly; any
    other keyword is kept in the extra bag and passed through as-is.
    """

    model_config = ConfigDict(extra="allow")

    type: Any = None
    properties: dict[str, SchemaNode] | None = None
    items: SchemaNode | list[SchemaNode] | None = None

    def translate(self) -> dict[str, Any]:
        """Return this node in Gemini's dialect as a plain dict."""
        translated: dict[str, Any] = {
            key: value
            for key, value in (self.model_extra or {}).items()
            if key not in UNSUPPORTED_KEYWORDS
        }

        if "type" in self.model_fields_set:
            # Non-string types (e.g. lists) are left for the caller to get right
            translated["type"] = self.type.upper() if isinstance(self.type, str) else self.type

        if "properties" in self.model_fields_set:
            translated["properties"] = (
                {name: node.translate() for name, node in self.properties.items()}
                if self.properties is not None
                else None
            )

        if "items" in self.model_fields_set:
            if isinstance(self.items, list):
                translated["items"] = [node.translate() for node in self.items]
            elif self.items is not None:
                translated["items"] = self.items.translate()
            else:
                translated["items"] = None

        return translated


def translate_schema(schema: Mapping[str, Any] | SchemaNode | None) -> dict[str, Any] | None:
    """Translate a JSON-Schema tree into Gemini's response-schema dialect.

    Args:
        schema: Schema as a mapping or SchemaNode, or None.

    Returns:
        Translated schema dict, or None when ``schema`` is None.
    """
    if schema is None:
        return None
    node = schema if isinstance(schema, SchemaNode) else SchemaNode.model_validate(dict(schema))
    return node.translate()


def build_generation_constraints(response_format: Mapping[str, Any] | None) -> dict[str, Any]:
    """Derive Gemini generation-config fields from a response-format hint.

    Only ``{"type": "json_schema", "json_schema": {"schema": ...}}`` produces
    constraints; any other hint yields an empty dict.

    Args:
        response_format: Response-format descriptor from the request.

    Returns:
        Dict with ``response_mime_type`` and ``response_schema``, or empty.
    """
    if not response_format or response_format.get("type") != "json_schema":
        return {}

    json_schema = response_format.get("json_schema") or {}
    response_schema = translate_schema(json_schema.get("schema"))
    logger.debug("Translated response schema: %s", response_schema)

    return {
        "response_mime_type": JSON_MIME_TYPE,
        "response_schema": response_schema,
    }
