"""
HTML serialization for the tree.

Output rules:
- attributes are written in stored order, always double-quoted;
- an element without children self-closes as ``<tag/>``;
- in pretty mode a single newline separates the children of an element
  that has two or more of them, with no indentation;
- documents start with ``<!DOCTYPE html>``.
"""

import logging
from typing import Any, List, Optional

from ..dom.document import Document
from ..dom.node import Node
from ..dom.text import EscapedText, RawText, TextLeaf
from ..utils.config import get_config
from .escape import escape_attribute, escape_text

logger = logging.getLogger(__name__)

DOCTYPE = "<!DOCTYPE html>"


def render(node: Any, pretty: Optional[bool] = None) -> str:
    """
    Serialize a node, document or text leaf to HTML.

    Rendering has no side effects, so rendering an unchanged tree twice
    gives identical output.

    Args:
        node: The node to serialize
        pretty: Whether to separate children with newlines (None uses the
            ``render.pretty`` configuration value)

    Returns:
        str: The HTML text
    """
    if pretty is None:
        pretty = bool(get_config().get("render.pretty", False))

    parts: List[str] = []
    if isinstance(node, Document):
        parts.append(DOCTYPE)
        if pretty:
            parts.append("\n")
    _write(node, parts, pretty)
    return "".join(parts)


def serialize_start_tag(node: Node) -> str:
    """
    Serialize the start of a tag, without the closing ``>`` or ``/>``.

    Args:
        node: The element to serialize

    Returns:
        str: ``<tag`` followed by the attributes
    """
    parts = ["<", node.tag]
    for key, value in node.attributes.items():
        parts.extend([" ", key, '="', escape_attribute(value), '"'])
    if node.id is not None and "id" not in node.attributes:
        parts.extend([' id="', escape_attribute(node.id), '"'])
    return "".join(parts)


def serialize_end_tag(tag: str) -> str:
    return f"</{tag}>"


def _write(node: Any, parts: List[str], pretty: bool) -> None:
    if isinstance(node, Node):
        _write_element(node, parts, pretty)
    elif isinstance(node, RawText):
        parts.append(node.data)
    elif isinstance(node, EscapedText):
        parts.append(escape_text(node.data))
    elif isinstance(node, TextLeaf):
        parts.append(escape_text(node.data) if node.escaped else node.data)
    else:
        logger.error(f"Cannot serialize object of type {type(node).__name__}")
        raise TypeError(f"Cannot serialize {type(node).__name__}: expected a Node or text leaf")


def _write_element(node: Node, parts: List[str], pretty: bool) -> None:
    parts.append(serialize_start_tag(node))

    children = node.children
    if not children:
        parts.append("/>")
        return

    parts.append(">")
    separate = pretty and len(children) > 1
    for index, child in enumerate(children):
        if separate and index:
            parts.append("\n")
        _write(child, parts, pretty)
    parts.append(serialize_end_tag(node.tag))
