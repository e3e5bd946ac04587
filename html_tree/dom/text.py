"""
Text leaves for the DOM tree.

Whether text is escaped is decided when it is inserted: ``EscapedText`` is
run through content escaping at render time, ``RawText`` is written as-is.
"""

from typing import Optional


class TextLeaf:
    """
    Base class for the text leaves of the tree.

    A leaf holds a string and nothing else; it has no tag, attributes or
    children.
    """

    __slots__ = ('data',)

    escaped = True

    def __init__(self, data: Optional[str]):
        """
        Initialize a text leaf.

        Args:
            data: The text content
        """
        if data is None:
            data = ""
        self.data = data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"


class RawText(TextLeaf):
    """Text emitted verbatim by the serializer."""

    __slots__ = ()

    escaped = False


class EscapedText(TextLeaf):
    """Text escaped by the serializer at render time."""

    __slots__ = ()

    escaped = True


def make_text(data: str, escape: bool = True) -> TextLeaf:
    """
    Create the text leaf matching an escape mode.

    Args:
        data: The text content
        escape: Whether the text should be escaped at render time

    Returns:
        TextLeaf: An ``EscapedText`` or a ``RawText``
    """
    if escape:
        return EscapedText(data)
    return RawText(data)
