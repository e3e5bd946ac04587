"""
HTML import.

Existing markup is parsed with BeautifulSoup on top of html5lib and rebuilt
through the node model primitives, so an imported tree behaves exactly like
one built by hand.
"""

import logging
from typing import Any, List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from ..dom.document import Document
from ..dom.node import Child, Node, append_text, create_child, set_attribute
from ..dom.transaction import AMBIENT
from ..errors import ParseError
from ..utils.config import get_config
from ..utils.logging import PerformanceLogger, log_exception

logger = logging.getLogger(__name__)

# Text inside these elements is kept raw so scripts and styles survive a round trip
RAW_TEXT_ELEMENTS = {'script', 'style'}

# Whitespace-only text inside these elements is significant
PRESERVE_WHITESPACE_ELEMENTS = {'pre', 'textarea'}


class HTMLParser:
    """Builds tree content from HTML markup."""

    def __init__(self, keep_whitespace: Optional[bool] = None):
        """
        Initialize the HTML parser.

        Args:
            keep_whitespace: Keep whitespace-only text everywhere (None uses
                the ``parser.keep_whitespace`` configuration value)
        """
        if keep_whitespace is None:
            keep_whitespace = bool(get_config().get("parser.keep_whitespace", False))
        self.keep_whitespace = keep_whitespace
        self.perf = PerformanceLogger(logger, "parser")

    def parse_document(self, markup: str, dynamic: bool = False) -> Document:
        """
        Parse a complete HTML document.

        The import is never recorded by a transaction.

        Args:
            markup: The HTML text
            dynamic: Whether the new document registers node ids

        Returns:
            Document: The imported document

        Raises:
            ParseError: If the markup cannot be parsed
        """
        with self.perf.measure("parse_document"):
            soup = self._parse(markup)
            return self._build_document(soup, dynamic)

    def _build_document(self, soup: BeautifulSoup, dynamic: bool) -> Document:
        document = Document(dynamic=dynamic)

        if soup.html is not None:
            self._copy_attributes(soup.html, document, None)

        head = soup.head
        if head is not None:
            self._copy_attributes(head, document.head, None)
            for child in head.children:
                if isinstance(child, Tag) and child.name == "title" and document.head.title_node is None:
                    title = document.get_title()
                    self._copy_attributes(child, title, None)
                    self._import_children(child, title, None)
                else:
                    self._import_child(child, document.head, None)

        body = soup.body
        if body is not None:
            self._copy_attributes(body, document.body, None)
            self._import_children(body, document.body, None)

        return document

    def parse_fragment(self, parent: Node, markup: str, transaction: Any = AMBIENT) -> List[Child]:
        """
        Parse an HTML fragment and append it under ``parent``.

        Unlike a document import, the appended content is recorded with the
        transaction like any other mutation.

        Args:
            parent: The node to append to
            markup: The HTML fragment
            transaction: Transaction to record into

        Returns:
            The top-level nodes and text leaves appended to ``parent``

        Raises:
            ParseError: If the markup cannot be parsed
        """
        imported: List[Child] = []
        with self.perf.measure("parse_fragment"):
            soup = self._parse(markup)
            for section in (soup.head, soup.body):
                if section is not None:
                    imported.extend(self._import_children(section, parent, transaction))
        return imported

    def _parse(self, markup: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(markup, 'html5lib')
        except Exception as e:
            log_exception(logger, e, "Error parsing HTML")
            raise ParseError(f"Cannot parse HTML: {e}") from e

    def _import_children(self, source: Tag, target: Node, transaction: Any) -> List[Child]:
        imported = []
        for child in source.children:
            result = self._import_child(child, target, transaction)
            if result is not None:
                imported.append(result)
        return imported

    def _import_child(self, child: Any, target: Node, transaction: Any) -> Optional[Child]:
        if isinstance(child, Tag):
            node = create_child(target, child.name, id=self._explicit_id(child, target),
                                transaction=transaction)
            self._copy_attributes(child, node, transaction)
            self._import_children(child, node, transaction)
            return node

        # Comments, doctypes, CDATA and processing instructions are dropped
        if isinstance(child, PreformattedString):
            return None

        if isinstance(child, NavigableString):
            text = str(child)
            if not text.strip() and not self.keep_whitespace \
                    and target.tag not in PRESERVE_WHITESPACE_ELEMENTS:
                return None
            return append_text(target, text, escape=target.tag not in RAW_TEXT_ELEMENTS,
                               transaction=transaction)

        logger.warning(f"Skipping unsupported markup object: {type(child).__name__}")
        return None

    def _explicit_id(self, tag: Tag, target: Node) -> Optional[str]:
        """Reuse the markup ``id`` as the registered id when it is still free."""
        document = target.owner_document
        value = tag.attrs.get("id")
        if document is None or not document.dynamic or not isinstance(value, str):
            return None
        if document.get_element_by_id(value) is not None:
            logger.warning(f"Duplicate id {value!r} in markup, generating a new one")
            return None
        return value

    @staticmethod
    def _copy_attributes(source: Tag, target: Node, transaction: Any) -> None:
        for key, value in source.attrs.items():
            # Multi-valued attributes such as class come back as lists
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            set_attribute(target, key, value, transaction=transaction)


def parse_document(markup: str, dynamic: bool = False) -> Document:
    """
    Parse a complete HTML document into a new Document.

    Args:
        markup: The HTML text
        dynamic: Whether the new document registers node ids

    Returns:
        Document: The imported document
    """
    return HTMLParser().parse_document(markup, dynamic=dynamic)


def parse_fragment(parent: Node, markup: str, transaction: Any = AMBIENT) -> List[Child]:
    """
    Parse an HTML fragment and append it under ``parent``.

    Args:
        parent: The node to append to
        markup: The HTML fragment
        transaction: Transaction to record into

    Returns:
        The top-level nodes and text leaves appended to ``parent``
    """
    return HTMLParser().parse_fragment(parent, markup, transaction=transaction)
