"""
Utility functions for the OpenAPI to Zod generator.
"""

import json
import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

# Bare property keys accepted inside a TypeScript object literal
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots) to spaces."""
    return text.replace("_", " ").replace("-", " ").replace(".", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word.capitalize() for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case or camelCase text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "x-request-id" -> "XRequestId"
        "userConfig" -> "UserConfig"
        "first 3 rows" -> "First3Rows"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def to_camel_case(text: str) -> str:
    """Convert text to camelCase ("x-request-id" -> "xRequestId")."""
    pascal = snake_to_pascal_case(text)
    return pascal[:1].lower() + pascal[1:]


def is_identifier(name: str) -> bool:
    """Whether a property name can be written as a bare object key."""
    return bool(_IDENTIFIER_PATTERN.match(name))


def safe_property_name(name: str, style: str = "quote") -> str:
    """Render a property name as an object-literal key.

    Valid identifiers are returned unchanged. Other names are quoted as a
    JSON string ("quote") or re-cased to camelCase and quoted ("camel").
    """
    if is_identifier(name):
        return name
    if style == "camel":
        return f"'{to_camel_case(name)}'"
    return json.dumps(name, ensure_ascii=False)


def to_literal(value) -> str:
    """Render a JSON value as a TypeScript literal (other YAML scalars as strings)."""
    return json.dumps(value, ensure_ascii=False, default=str)
