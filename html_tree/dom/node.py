"""
Node implementation for the HTML tree.

This module implements the element node and the structural mutation
primitives: appending children, setting attributes, clearing children and
appending text. Each primitive records its own inverse with the active
transaction (if any) before applying its change; the node itself knows
nothing about transactions.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Type, Union

from ..errors import MissingTagError
from .text import TextLeaf, make_text
from .transaction import (
    AMBIENT,
    PopChild,
    RemoveNode,
    RestoreAttribute,
    RestoreChildren,
    resolve_transaction,
)

logger = logging.getLogger(__name__)

Child = Union['Node', TextLeaf]


class Node:
    """
    Element node of the HTML tree.

    A node has a tag, an ordered mapping of attributes, an ordered list of
    children (nodes and text leaves) and a reference to the document that
    owns it. In a dynamic document it also carries a unique id.
    """

    def __init__(self, tag: str, owner_document: Optional['Document'] = None,
                 id: Optional[str] = None):
        """
        Initialize a new Node.

        Args:
            tag: Name of the element tag (e.g., "div", "a")
            owner_document: The document that owns this node
            id: Optional id of the node

        Raises:
            MissingTagError: If the tag is missing or empty
        """
        if not tag:
            raise MissingTagError(f"Node requires a non-empty tag, got {tag!r}")

        self.tag = tag
        self.attributes: Dict[str, Any] = {}
        self.children: List[Child] = []
        self.owner_document = owner_document
        self.id = id

    @property
    def child_elements(self) -> List['Node']:
        """Get the child nodes that are elements."""
        return [child for child in self.children if isinstance(child, Node)]

    @property
    def text_content(self) -> str:
        """Get the concatenated text of this node and its descendants."""
        parts = []
        for child in self.children:
            if isinstance(child, Node):
                parts.append(child.text_content)
            else:
                parts.append(child.data)
        return "".join(parts)

    @property
    def outer_html(self) -> str:
        """Get the HTML of this node, including the node itself."""
        from ..rendering.serializer import render
        return render(self, pretty=False)

    def has_child_nodes(self) -> bool:
        """Check if this node has any children."""
        return len(self.children) > 0

    def iter_elements(self) -> Iterator['Node']:
        """Traverse element nodes depth-first, yielding self then descendants."""
        yield self
        for child in self.children:
            if isinstance(child, Node):
                yield from child.iter_elements()

    def get_elements_by_tag_name(self, tag: str) -> List['Node']:
        """
        Get all descendant elements with a tag name.

        Args:
            tag: The tag name to match

        Returns:
            List of matching nodes in document order
        """
        return [node for node in self.iter_elements() if node is not self and node.tag == tag]

    # Mutation primitives, mirrored as methods
    def create_child(self, tag: str, id: Optional[str] = None,
                     transaction: Any = AMBIENT, node_class: Optional[Type['Node']] = None) -> 'Node':
        return create_child(self, tag, id=id, transaction=transaction, node_class=node_class)

    def set_attribute(self, key: str, value: Any, transaction: Any = AMBIENT) -> None:
        set_attribute(self, key, value, transaction=transaction)

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return get_attribute(self, key, default)

    def clear_children(self, transaction: Any = AMBIENT) -> None:
        clear_children(self, transaction=transaction)

    def append_text(self, text: str, escape: bool = True, replace: bool = False,
                    transaction: Any = AMBIENT) -> TextLeaf:
        return append_text(self, text, escape=escape, replace=replace, transaction=transaction)

    def __repr__(self) -> str:
        id_part = f" id={self.id!r}" if self.id is not None else ""
        return f"<Node {self.tag}{id_part} attrs={len(self.attributes)} children={len(self.children)}>"


def create_child(parent: Node, tag: str, id: Optional[str] = None,
                 transaction: Any = AMBIENT, node_class: Optional[Type[Node]] = None) -> Node:
    """
    Create a new empty node and append it to a parent.

    In a dynamic document the child is registered under ``id``, or under a
    freshly generated id when ``id`` is None.

    Args:
        parent: The node to append to
        tag: Tag name of the new node
        id: Optional explicit id
        transaction: Transaction to record into (defaults to the ambient one,
            None disables recording)
        node_class: Node subclass to instantiate (defaults to Node)

    Returns:
        Node: The new child

    Raises:
        MissingTagError: If the tag is empty
        DuplicateIdError: If the explicit id is already taken in the document
    """
    document = parent.owner_document
    child = (node_class or Node)(tag, owner_document=document)

    if document is not None and document.dynamic:
        if id is None:
            document.generate_id(child)
        else:
            document.register_id(child, id)
    else:
        child.id = id

    tx = resolve_transaction(transaction)
    if tx is not None:
        tx.record(RemoveNode(parent, child))
    parent.children.append(child)
    return child


def set_attribute(node: Node, key: str, value: Any, transaction: Any = AMBIENT) -> None:
    """
    Set an attribute, keeping the position of an existing key.

    Args:
        node: The node to modify
        key: Attribute name
        value: Attribute value (converted to a string at render time)
        transaction: Transaction to record into
    """
    tx = resolve_transaction(transaction)
    if tx is not None:
        existed = key in node.attributes
        tx.record(RestoreAttribute(node, key, node.attributes.get(key), existed))
    node.attributes[key] = value


def get_attribute(node: Node, key: str, default: Any = None) -> Any:
    """
    Get an attribute value.

    Args:
        node: The node to read
        key: Attribute name
        default: Value returned when the attribute is absent

    Returns:
        The attribute value, or ``default``
    """
    return node.attributes.get(key, default)


def clear_children(node: Node, transaction: Any = AMBIENT) -> None:
    """
    Remove every child of a node.

    Args:
        node: The node to empty
        transaction: Transaction to record into
    """
    tx = resolve_transaction(transaction)
    if tx is not None:
        tx.record(RestoreChildren(node, node.children))

    document = node.owner_document
    if document is not None and document.dynamic:
        for child in node.children:
            if isinstance(child, Node):
                document.unregister_subtree(child)
    logger.debug(f"Clearing {len(node.children)} children of <{node.tag}>")
    node.children.clear()


def append_text(node: Node, text: str, escape: bool = True, replace: bool = False,
                transaction: Any = AMBIENT) -> TextLeaf:
    """
    Append a text leaf to a node.

    Args:
        node: The node to append to
        text: The text content
        escape: True to escape the text at render time, False to emit it raw
        replace: True to clear the existing children first
        transaction: Transaction to record into

    Returns:
        TextLeaf: The appended leaf
    """
    tx = resolve_transaction(transaction)
    if replace:
        clear_children(node, transaction=tx)

    if not isinstance(text, str):
        text = str(text)
    leaf = make_text(text, escape)

    if tx is not None:
        tx.record(PopChild(node, leaf))
    node.children.append(leaf)
    return leaf
