"""
Tree model for the HTML tree.
This package provides the nodes, text leaves, document and transaction log.
"""

from .text import TextLeaf, RawText, EscapedText
from .transaction import Transaction, TransactionState, current_transaction
from .node import Node, create_child, set_attribute, get_attribute, clear_children, append_text
from .document import Document, HeadSection, create_document, get_title, generate_id, get_element_by_id

__all__ = [
    'TextLeaf', 'RawText', 'EscapedText',
    'Transaction', 'TransactionState', 'current_transaction',
    'Node', 'create_child', 'set_attribute', 'get_attribute', 'clear_children', 'append_text',
    'Document', 'HeadSection', 'create_document', 'get_title', 'generate_id', 'get_element_by_id',
]
