"""
Text escaping for HTML serialization.

Two character classes are escaped: text content (``& < >``) and attribute
values (``& < > " '``). Characters with a named entity use it, the rest are
written as decimal character references.
"""

import re
from typing import Any, Dict, Pattern

# Named entities for the special characters that have one
NAMED_ENTITIES: Dict[str, str] = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
}

TEXT_SPECIAL_CHARS = '&<>'
ATTRIBUTE_SPECIAL_CHARS = '&<>"\''

_TEXT_RE: Pattern = re.compile('[' + re.escape(TEXT_SPECIAL_CHARS) + ']')
_ATTRIBUTE_RE: Pattern = re.compile('[' + re.escape(ATTRIBUTE_SPECIAL_CHARS) + ']')


def entity_for(char: str) -> str:
    """
    Get the replacement for a single special character.

    Args:
        char: The character to replace

    Returns:
        str: The named entity, or a decimal reference such as ``&#39;``
    """
    entity = NAMED_ENTITIES.get(char)
    if entity is None:
        entity = f"&#{ord(char)};"
    return entity


def _replace(match) -> str:
    return entity_for(match.group(0))


def escape_text(text: Any) -> str:
    """
    Escape text content.

    Only ``&``, ``<`` and ``>`` are replaced; quotes are left alone.

    Args:
        text: The text to escape (non-strings are converted with ``str()``)

    Returns:
        str: The escaped text
    """
    if not isinstance(text, str):
        text = str(text)
    return _TEXT_RE.sub(_replace, text)


def escape_attribute(value: Any) -> str:
    """
    Escape an attribute value for use inside double quotes.

    Args:
        value: The attribute value (non-strings are converted with ``str()``)

    Returns:
        str: The escaped value
    """
    if not isinstance(value, str):
        value = str(value)
    return _ATTRIBUTE_RE.sub(_replace, value)
