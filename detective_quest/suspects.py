"""
Suspect registry: a fixed-size hash table with separate chaining.

Each bucket holds a singly linked chain of suspects. A suspect keeps a
citation counter and its own singly linked list of clue texts.

How it works:
- The bucket index is the first byte of the name modulo the capacity, so
  names sharing a first letter always collide
- New suspects are pushed onto the head of their bucket's chain
- Every association bumps the counter and pushes the clue onto the head of
  the suspect's clue list (newest first, duplicates kept)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from detective_quest.config import DEFAULT_HASH_CAPACITY, bound_text


class SuspectClue:
    """Clue list node owned by a suspect."""

    __slots__ = ("text", "next")

    def __init__(self, text: str, next: Optional["SuspectClue"] = None) -> None:
        self.text = text
        self.next = next


class Suspect:
    """Bucket chain node."""

    __slots__ = ("name", "citation_count", "clues", "next")

    def __init__(self, name: str) -> None:
        self.name = name
        self.citation_count = 0
        self.clues: Optional[SuspectClue] = None
        self.next: Optional[Suspect] = None

    def add_clue(self, text: str) -> None:
        self.citation_count += 1
        self.clues = SuspectClue(text, self.clues)

    def clue_texts(self) -> List[str]:
        result = []
        node = self.clues
        while node is not None:
            result.append(node.text)
            node = node.next
        return result

    def __repr__(self) -> str:
        return f"Suspect({self.name!r}, citations={self.citation_count})"


@dataclass(frozen=True)
class SuspectSummary:
    name: str
    citation_count: int
    clues: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "citation_count": self.citation_count, "clues": list(self.clues)}


class SuspectRegistry:
    """Hash table of suspects keyed by exact name."""

    def __init__(self, capacity: int = DEFAULT_HASH_CAPACITY, max_text_length: Optional[int] = None) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.max_text_length = max_text_length
        self._buckets: List[Optional[Suspect]] = [None] * capacity
        self._size = 0

    def bucket_index(self, name: str) -> int:
        """First byte of the UTF-8 name modulo capacity; an empty name maps to bucket 0."""
        encoded = name.encode("utf-8")
        if not encoded:
            return 0
        return encoded[0] % self.capacity

    def lookup(self, name: str) -> Optional[Suspect]:
        name = bound_text(name, self.max_text_length)
        node = self._buckets[self.bucket_index(name)]
        while node is not None:
            if node.name == name:
                return node
            node = node.next
        return None

    def associate(self, name: str, clue_text: str) -> Suspect:
        """Cite ``name`` with ``clue_text``, registering the suspect on first mention."""
        name = bound_text(name, self.max_text_length)
        suspect = self.lookup(name)
        if suspect is None:
            index = self.bucket_index(name)
            suspect = Suspect(name)
            suspect.next = self._buckets[index]
            self._buckets[index] = suspect
            self._size += 1
        suspect.add_clue(bound_text(clue_text, self.max_text_length))
        return suspect

    def __iter__(self) -> Iterator[Suspect]:
        for head in self._buckets:
            node = head
            while node is not None:
                yield node
                node = node.next

    def enumerate(self) -> List[SuspectSummary]:
        """Every suspect in bucket order, chain order within a bucket. Empty when nobody is registered."""
        return [SuspectSummary(s.name, s.citation_count, s.clue_texts()) for s in self]

    def most_likely(self) -> Optional[Suspect]:
        """Suspect with the most citations, earliest in scan order on ties.

        Returns None when the registry is empty or nobody has been cited.
        """
        leader: Optional[Suspect] = None
        best = -1
        for suspect in self:
            if suspect.citation_count > best:
                best = suspect.citation_count
                leader = suspect
        if leader is None or best <= 0:
            return None
        return leader

    def chain(self, index: int) -> List[str]:
        """Names stored in one bucket, head first."""
        names = []
        node = self._buckets[index]
        while node is not None:
            names.append(node.name)
            node = node.next
        return names

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __len__(self) -> int:
        return self._size

    def clear(self) -> int:
        """Unlink every chain and clue list. Returns the number of suspects released."""
        released = 0
        for index in range(self.capacity):
            node = self._buckets[index]
            while node is not None:
                following = node.next
                clue = node.clues
                while clue is not None:
                    clue_next = clue.next
                    clue.next = None
                    clue = clue_next
                node.clues = None
                node.next = None
                released += 1
                node = following
            self._buckets[index] = None
        self._size = 0
        return released

    def __repr__(self) -> str:
        return f"SuspectRegistry(capacity={self.capacity}, suspects={self._size})"
