"""
html_tree - build, edit and serialize HTML documents in memory.

Mutations can be made inside a ``Transaction`` scope and rolled back;
``render`` turns a node or document into HTML text.
"""

import logging
from typing import Optional

from html_tree.utils.config import Config, get_config, set_config
from html_tree.utils.logging import setup_logging

from html_tree.errors import (
    HTMLTreeError,
    MissingTagError,
    InvalidDocumentModeError,
    DuplicateIdError,
    TransactionStateError,
    ParseError,
)
from html_tree.dom import (
    TextLeaf,
    RawText,
    EscapedText,
    Transaction,
    TransactionState,
    current_transaction,
    Node,
    create_child,
    set_attribute,
    get_attribute,
    clear_children,
    append_text,
    Document,
    HeadSection,
    create_document,
    get_title,
    generate_id,
    get_element_by_id,
)
from html_tree.rendering import escape_text, escape_attribute, render
from html_tree.parser import parse_document, parse_fragment

# Package information
__version__ = "0.1.0"
__description__ = "Build, edit with rollback, and serialize HTML documents"

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def configure_logging(config: Optional[Config] = None) -> logging.Logger:
    """
    Set up console and file logging from the ``logging.*`` configuration values.

    Args:
        config: Configuration to read (defaults to the global one)

    Returns:
        logging.Logger: The package logger
    """
    config = config or get_config()
    configured = setup_logging(
        log_file=config.get("logging.file"),
        console_level=config.get("logging.console_level", "WARNING"),
        file_level=config.get("logging.file_level", "DEBUG"),
    )
    configured.debug(f"html_tree v{__version__} logging configured")
    return configured


__all__ = [
    'HTMLTreeError', 'MissingTagError', 'InvalidDocumentModeError', 'DuplicateIdError',
    'TransactionStateError', 'ParseError',
    'TextLeaf', 'RawText', 'EscapedText',
    'Transaction', 'TransactionState', 'current_transaction',
    'Node', 'create_child', 'set_attribute', 'get_attribute', 'clear_children', 'append_text',
    'Document', 'HeadSection', 'create_document', 'get_title', 'generate_id', 'get_element_by_id',
    'escape_text', 'escape_attribute', 'render',
    'parse_document', 'parse_fragment',
    'Config', 'get_config', 'set_config', 'setup_logging', 'configure_logging',
]
