"""
Exception types raised by the HTML tree.
"""


class HTMLTreeError(Exception):
    """Base class for all errors raised by html_tree."""


class MissingTagError(HTMLTreeError, ValueError):
    """Raised when a node is constructed without a tag name."""


class InvalidDocumentModeError(HTMLTreeError):
    """Raised when an id operation is attempted on a non-dynamic document."""


class DuplicateIdError(HTMLTreeError, ValueError):
    """Raised when an explicit id is already registered in the document."""


class TransactionStateError(HTMLTreeError):
    """Raised when a finished transaction is rolled back or re-entered."""


class ParseError(HTMLTreeError):
    """Raised when markup cannot be imported into a document."""
