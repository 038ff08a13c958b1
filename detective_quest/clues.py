"""
Clue index: a binary search tree of unique clue texts.

Clues are ordered by plain string comparison, so an in-order walk yields them
alphabetically. Inserting a text that is already present leaves the tree
untouched.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from detective_quest.config import bound_text


class Clue:
    """BST node holding one clue text."""

    __slots__ = ("text", "left", "right")

    def __init__(self, text: str) -> None:
        self.text = text
        self.left: Optional[Clue] = None
        self.right: Optional[Clue] = None

    def __repr__(self) -> str:
        return f"Clue({self.text!r})"


def insert_clue(root: Optional[Clue], text: str) -> Clue:
    """Insert ``text`` below ``root`` and return the root to keep.

    An empty tree becomes a single node, so callers always rebind:
    ``root = insert_clue(root, text)``.
    """
    if root is None:
        return Clue(text)
    node = root
    while True:
        if text < node.text:
            if node.left is None:
                node.left = Clue(text)
                break
            node = node.left
        elif text > node.text:
            if node.right is None:
                node.right = Clue(text)
                break
            node = node.right
        else:
            # Equal text: already indexed.
            break
    return root


def in_order(root: Optional[Clue]) -> Iterator[str]:
    """Yield clue texts in ascending order (left subtree, node, right subtree)."""
    stack: List[Clue] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node.text
        node = node.right


def release(root: Optional[Clue]) -> int:
    """Detach every node of the tree in post-order. Returns the number of nodes released."""
    if root is None:
        return 0
    released = 0
    stack = [(root, False)]
    while stack:
        node, children_done = stack.pop()
        if children_done:
            node.left = None
            node.right = None
            released += 1
            continue
        stack.append((node, True))
        if node.right is not None:
            stack.append((node.right, False))
        if node.left is not None:
            stack.append((node.left, False))
    return released


class ClueIndex:
    """Owns the root of the clue tree."""

    def __init__(self, max_text_length: Optional[int] = None) -> None:
        self.root: Optional[Clue] = None
        self.max_text_length = max_text_length
        self._size = 0

    def insert(self, text: str) -> bool:
        """Add ``text``; returns False when it was already indexed."""
        text = bound_text(text, self.max_text_length)
        if text in self:
            return False
        self.root = insert_clue(self.root, text)
        self._size += 1
        return True

    def __contains__(self, text: object) -> bool:
        node = self.root
        while node is not None:
            if text == node.text:
                return True
            node = node.left if text < node.text else node.right
        return False

    def __iter__(self) -> Iterator[str]:
        return in_order(self.root)

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self.root is None

    def clear(self) -> int:
        released = release(self.root)
        self.root = None
        self._size = 0
        return released

    def __repr__(self) -> str:
        return f"ClueIndex(size={self._size})"
