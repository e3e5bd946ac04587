"""
Transaction log for undoable tree mutations.

A ``Transaction`` is a scoped undo log. While a transaction scope is active,
every mutation primitive of the node model records an inverse action with
the innermost active transaction before applying its change. Rolling back
applies the recorded inverses last-registered-first.

The stack of active transactions lives in a ``ContextVar``, so each thread
and each asyncio task sees its own stack.
"""

import logging
from contextvars import ContextVar
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from ..errors import TransactionStateError

logger = logging.getLogger(__name__)

_active_transactions: ContextVar[Tuple['Transaction', ...]] = ContextVar(
    'html_tree_active_transactions', default=()
)


class _Ambient:
    """Marker for "use the innermost active transaction"."""

    def __repr__(self) -> str:
        return 'AMBIENT'


AMBIENT = _Ambient()


class TransactionState(Enum):
    """Lifecycle states of a transaction."""
    NEW = 'new'
    ACTIVE = 'active'
    COMMITTED = 'committed'
    ROLLED_BACK = 'rolled back'


def current_transaction() -> Optional['Transaction']:
    """
    Get the innermost active transaction of the current context.

    Returns:
        The active transaction, or None if no transaction scope is open
    """
    stack = _active_transactions.get()
    if stack:
        return stack[-1]
    return None


def resolve_transaction(transaction: Any = AMBIENT) -> Optional['Transaction']:
    """
    Resolve the ``transaction`` argument of a mutation primitive.

    Args:
        transaction: ``AMBIENT`` for the current transaction, an explicit
            ``Transaction``, or None to disable recording

    Returns:
        The transaction the mutation should record into, or None
    """
    if transaction is AMBIENT:
        return current_transaction()
    return transaction


def _unregister(node: Any) -> None:
    document = getattr(node, 'owner_document', None)
    if document is not None and document.dynamic:
        document.unregister_subtree(node)


def _register(node: Any) -> None:
    document = getattr(node, 'owner_document', None)
    if document is not None and document.dynamic:
        document.register_subtree(node)


class UndoAction:
    """An inverse of one structural mutation."""

    __slots__ = ()

    def apply(self) -> None:
        raise NotImplementedError


class RemoveNode(UndoAction):
    """Detach a node that was appended to ``parent``."""

    __slots__ = ('parent', 'node')

    def __init__(self, parent: Any, node: Any):
        self.parent = parent
        self.node = node

    def apply(self) -> None:
        children = self.parent.children
        # The node is usually the last child, so search from the end
        for index in range(len(children) - 1, -1, -1):
            if children[index] is self.node:
                del children[index]
                break
        _unregister(self.node)

    def __repr__(self) -> str:
        return f"RemoveNode({self.parent.tag!r}, {self.node.tag!r})"


class RestoreAttribute(UndoAction):
    """Put an attribute back to its previous value, or remove it."""

    __slots__ = ('node', 'key', 'old_value', 'existed')

    def __init__(self, node: Any, key: str, old_value: Any, existed: bool):
        self.node = node
        self.key = key
        self.old_value = old_value
        self.existed = existed

    def apply(self) -> None:
        if self.existed:
            self.node.attributes[self.key] = self.old_value
        else:
            self.node.attributes.pop(self.key, None)

    def __repr__(self) -> str:
        if self.existed:
            return f"RestoreAttribute({self.key!r}, {self.old_value!r})"
        return f"RestoreAttribute({self.key!r}, <absent>)"


class RestoreChildren(UndoAction):
    """Put back a whole child sequence that was cleared."""

    __slots__ = ('node', 'children')

    def __init__(self, node: Any, children: Sequence[Any]):
        self.node = node
        self.children = list(children)

    def apply(self) -> None:
        for child in self.node.children:
            _unregister(child)
        self.node.children[:] = self.children
        for child in self.children:
            _register(child)

    def __repr__(self) -> str:
        return f"RestoreChildren({self.node.tag!r}, {len(self.children)} children)"


class PopChild(UndoAction):
    """Remove a text leaf that was appended to ``node``."""

    __slots__ = ('node', 'leaf')

    def __init__(self, node: Any, leaf: Any):
        self.node = node
        self.leaf = leaf

    def apply(self) -> None:
        children = self.node.children
        for index in range(len(children) - 1, -1, -1):
            if children[index] is self.leaf:
                del children[index]
                break

    def __repr__(self) -> str:
        return f"PopChild({self.node.tag!r}, {self.leaf!r})"


class Transaction:
    """
    Scoped undo log.

    Used as a context manager, the transaction becomes the ambient current
    transaction for the dynamic extent of the ``with`` block. Leaving the
    block commits it unless ``rollback()`` was called. Exceptions raised in
    the block propagate and do not roll the transaction back.

    A transaction can also be used without a ``with`` block by passing it
    explicitly to the mutation primitives and calling ``commit()`` or
    ``rollback()``.
    """

    def __init__(self, name: Optional[str] = None):
        """
        Initialize a new transaction.

        Args:
            name: Optional label used in log messages
        """
        self.name = name
        self.state = TransactionState.NEW
        self._actions: List[UndoAction] = []
        self._token: Any = None

    @property
    def actions(self) -> List[UndoAction]:
        """Get a copy of the recorded inverse actions, oldest first."""
        return list(self._actions)

    @property
    def is_finished(self) -> bool:
        """Check whether the transaction was committed or rolled back."""
        return self.state in (TransactionState.COMMITTED, TransactionState.ROLLED_BACK)

    def record(self, action: UndoAction) -> bool:
        """
        Record an inverse action.

        Args:
            action: The action undoing the mutation about to be applied

        Returns:
            bool: True if the action was recorded, False if the transaction
            is already finished
        """
        if self.is_finished:
            logger.debug(f"{self} is {self.state.value}, not recording {action!r}")
            return False
        self._actions.append(action)
        return True

    def rollback(self) -> None:
        """
        Undo every recorded mutation, most recent first, then clear the log.

        Raises:
            TransactionStateError: If the transaction is already finished
        """
        if self.is_finished:
            raise TransactionStateError(f"Cannot roll back {self}: already {self.state.value}")

        count = len(self._actions)
        while self._actions:
            self._actions.pop().apply()
        self.state = TransactionState.ROLLED_BACK
        logger.debug(f"{self} rolled back {count} actions")

    def commit(self) -> None:
        """
        Discard the undo log, keeping every applied mutation.

        Raises:
            TransactionStateError: If the transaction is already finished
        """
        if self.is_finished:
            raise TransactionStateError(f"Cannot commit {self}: already {self.state.value}")

        count = len(self._actions)
        self._actions.clear()
        self.state = TransactionState.COMMITTED
        logger.debug(f"{self} committed, discarded {count} actions")

    def __enter__(self) -> 'Transaction':
        if self.state is not TransactionState.NEW:
            raise TransactionStateError(f"Cannot enter {self}: already {self.state.value}")

        self.state = TransactionState.ACTIVE
        self._token = _active_transactions.set(_active_transactions.get() + (self,))
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        _active_transactions.reset(self._token)
        self._token = None
        if not self.is_finished:
            self.commit()
        return False

    def __len__(self) -> int:
        return len(self._actions)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<Transaction{label} {self.state.value}>"
