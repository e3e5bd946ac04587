"""
Document implementation for the HTML tree.

A ``Document`` is the ``html`` root node with shortcuts to its head and body.
A dynamic document also keeps an id registry so any node can later be found
by a generated identifier.
"""

import itertools
import logging
from typing import Dict, Optional

from ..errors import DuplicateIdError, InvalidDocumentModeError
from ..utils.config import get_config
from .node import Node, append_text, create_child

logger = logging.getLogger(__name__)

# Process-wide, so generated ids are unique across documents
_id_counter = itertools.count(1)


class HeadSection(Node):
    """The document head, caching the lazily created title node."""

    def __init__(self, tag: str = "head", owner_document: Optional['Document'] = None,
                 id: Optional[str] = None):
        super().__init__(tag, owner_document=owner_document, id=id)
        self.title_node: Optional[Node] = None


class Document(Node):
    """
    Document node of the HTML tree.

    The document is itself the ``html`` element. Its head and body are
    created with it and are never recorded by a transaction.
    """

    def __init__(self, title: Optional[str] = None, dynamic: bool = False):
        """
        Initialize a new Document.

        Args:
            title: Optional document title
            dynamic: Whether nodes get ids registered in the document
        """
        super().__init__("html")
        self.owner_document = self
        self.dynamic = dynamic
        self._ids: Optional[Dict[str, Node]] = {} if dynamic else None

        # Scaffolding is built without recording, even inside a transaction
        self.head: HeadSection = create_child(self, "head", transaction=None, node_class=HeadSection)
        self.body: Node = create_child(self, "body", transaction=None)

        if title is not None:
            append_text(self.get_title(), title, escape=True, transaction=None)

        logger.debug(f"Document created (dynamic: {dynamic}, title: {title!r})")

    @property
    def ids(self) -> Dict[str, Node]:
        """
        Get a copy of the id registry.

        Raises:
            InvalidDocumentModeError: If the document is not dynamic
        """
        self._require_dynamic("read the id registry")
        return dict(self._ids)

    @property
    def title(self) -> str:
        """Get the title text, or an empty string when there is no title."""
        if not self._title_attached():
            return ""
        return self.head.title_node.text_content

    def get_title(self) -> Node:
        """
        Get the title node, creating it under the head on first access.

        Returns:
            Node: The title node
        """
        if not self._title_attached():
            self.head.title_node = create_child(self.head, "title", transaction=None)
            logger.debug("Title node materialized")
        return self.head.title_node

    def generate_id(self, node: Node) -> str:
        """
        Generate a fresh id for a node and register it.

        Args:
            node: The node to register

        Returns:
            str: The new id

        Raises:
            InvalidDocumentModeError: If the document is not dynamic
        """
        self._require_dynamic("generate an id")

        prefix = get_config().get("ids.prefix", "n")
        new_id = f"{prefix}{next(_id_counter)}"
        while new_id in self._ids:
            new_id = f"{prefix}{next(_id_counter)}"

        self._assign(node, new_id)
        return new_id

    def register_id(self, node: Node, node_id: str) -> str:
        """
        Register a node under an explicit id.

        Args:
            node: The node to register
            node_id: The id to use

        Returns:
            str: The registered id

        Raises:
            InvalidDocumentModeError: If the document is not dynamic
            DuplicateIdError: If the id belongs to another node
        """
        self._require_dynamic("register an id")

        current = self._ids.get(node_id)
        if current is not None and current is not node:
            logger.error(f"Id {node_id!r} is already registered to {current!r}")
            raise DuplicateIdError(f"Id {node_id!r} is already registered in this document")

        self._assign(node, node_id)
        return node_id

    def get_element_by_id(self, element_id: str) -> Optional[Node]:
        """
        Find a node by id.

        Dynamic documents use the registry; other documents search the tree
        for a node carrying the id or an ``id`` attribute.

        Args:
            element_id: The id to look up

        Returns:
            The node, or None if no node has that id
        """
        if self.dynamic:
            return self._ids.get(element_id)

        for node in self.iter_elements():
            if node.id == element_id or node.attributes.get("id") == element_id:
                return node
        return None

    def register_subtree(self, node: Node) -> None:
        """
        Register every id carried by ``node`` and its descendants.

        A node whose id was taken by another live node while it was detached
        gets a freshly generated id instead.
        """
        for element in node.iter_elements():
            if element.id is None:
                continue
            owner = self._ids.get(element.id)
            if owner is not None and owner is not element:
                old_id = element.id
                element.id = None
                new_id = self.generate_id(element)
                logger.warning(f"Id {old_id!r} was taken while detached, renamed to {new_id!r}")
            else:
                self._ids[element.id] = element

    def unregister_subtree(self, node: Node) -> None:
        """Drop the registry entries of ``node`` and its descendants."""
        for element in node.iter_elements():
            if element.id is not None and self._ids.get(element.id) is element:
                del self._ids[element.id]

    def _assign(self, node: Node, node_id: str) -> None:
        if node.id is not None and node.id != node_id and self._ids.get(node.id) is node:
            del self._ids[node.id]
        self._ids[node_id] = node
        node.id = node_id

    def _title_attached(self) -> bool:
        # The cached title goes stale once the head is cleared
        title_node = self.head.title_node
        if title_node is None:
            return False
        if any(child is title_node for child in self.head.children):
            return True
        self.head.title_node = None
        return False

    def _require_dynamic(self, action: str) -> None:
        if not self.dynamic:
            logger.error(f"Cannot {action}: document is not dynamic")
            raise InvalidDocumentModeError(f"Cannot {action} on a non-dynamic document")

    def __repr__(self) -> str:
        return f"<Document dynamic={self.dynamic} children={len(self.children)}>"


def create_document(title: Optional[str] = None, dynamic: bool = False) -> Document:
    """
    Create a document with head and body.

    Args:
        title: Optional document title
        dynamic: Whether nodes get registered ids

    Returns:
        Document: The new document
    """
    return Document(title=title, dynamic=dynamic)


def get_title(document: Document) -> Node:
    """Get the title node of a document, creating it if needed."""
    return document.get_title()


def generate_id(document: Document, node: Node) -> str:
    """Generate and register a fresh id for a node of a dynamic document."""
    return document.generate_id(node)


def get_element_by_id(document: Document, element_id: str) -> Optional[Node]:
    """Find a node of a document by id."""
    return document.get_element_by_id(element_id)
