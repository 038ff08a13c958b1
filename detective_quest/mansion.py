from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional

from detective_quest.clues import ClueIndex
from detective_quest.config import bound_text
from detective_quest.data import (
    CMD_LEFT,
    CMD_QUIT,
    CMD_RIGHT,
    CMD_VIEW,
    ENTRANCE,
    MANSION_LAYOUT,
    ROOM_CLUES,
    SUSPECT_ASSOCIATIONS,
)
from detective_quest.suspects import Suspect, SuspectRegistry

# Outcomes of a single player command.
MOVED = "moved"
BLOCKED = "blocked"
QUIT = "quit"
VIEW_REQUESTED = "view_requested"
INVALID = "invalid"


class Room:
    """Map tree node. ``clue`` is emitted once, the first time the room is entered."""

    __slots__ = ("name", "left", "right", "has_clue", "clue")

    def __init__(self, name: str, clue: Optional[str] = None) -> None:
        self.name = name
        self.left: Optional[Room] = None
        self.right: Optional[Room] = None
        self.clue = clue
        self.has_clue = clue is not None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def collect(self) -> Optional[str]:
        if not self.has_clue:
            return None
        self.has_clue = False
        return self.clue

    def __repr__(self) -> str:
        return f"Room({self.name!r}, has_clue={self.has_clue})"


class MansionMap:
    def __init__(self, root: Room) -> None:
        self.root: Optional[Room] = root

    def __iter__(self) -> Iterator[Room]:
        """Rooms in pre-order (room, left wing, right wing)."""
        stack = [self.root] if self.root is not None else []
        while stack:
            room = stack.pop()
            yield room
            if room.right is not None:
                stack.append(room.right)
            if room.left is not None:
                stack.append(room.left)

    def outline(self) -> List[str]:
        """Indented text rendering of the layout, clue-bearing rooms marked with ``*``."""
        lines: List[str] = []
        if self.root is None:
            return lines
        stack = [(self.root, 0, "")]
        while stack:
            room, depth, side = stack.pop()
            marker = "*" if room.has_clue else ""
            prefix = f"{side}: " if side else ""
            lines.append(f"{'  ' * depth}{prefix}{room.name}{marker}")
            if room.right is not None:
                stack.append((room.right, depth + 1, "d"))
            if room.left is not None:
                stack.append((room.left, depth + 1, "e"))
        return lines

    def teardown(self) -> int:
        """Unlink every room in post-order. Returns the number of rooms released."""
        if self.root is None:
            return 0
        released = 0
        stack = [(self.root, False)]
        while stack:
            room, children_done = stack.pop()
            if children_done:
                room.left = None
                room.right = None
                released += 1
                continue
            stack.append((room, True))
            if room.right is not None:
                stack.append((room.right, False))
            if room.left is not None:
                stack.append((room.left, False))
        self.root = None
        return released


def build_mansion(
    registry: SuspectRegistry,
    max_text_length: Optional[int] = None,
    on_associate: Optional[Callable[[Suspect, str], None]] = None,
) -> MansionMap:
    """Build the fixed mansion layout and seed ``registry`` with the initial suspicions.

    ``on_associate`` is called after every seeded association with the suspect and the clue text.
    """
    rooms: Dict[str, Room] = {}
    for name, _, _ in MANSION_LAYOUT:
        clue = ROOM_CLUES.get(name)
        rooms[name] = Room(
            bound_text(name, max_text_length),
            bound_text(clue, max_text_length) if clue is not None else None,
        )
    for name, left, right in MANSION_LAYOUT:
        if left is not None:
            rooms[name].left = rooms[left]
        if right is not None:
            rooms[name].right = rooms[right]

    for suspect, clue_text in SUSPECT_ASSOCIATIONS:
        cited = registry.associate(suspect, clue_text)
        if on_associate is not None:
            on_associate(cited, cited.clues.text)

    return MansionMap(rooms[ENTRANCE])


def normalize_command(raw: str) -> str:
    command = (raw or "").strip()
    if len(command) != 1:
        return ""
    return command.lower()


class Explorer:
    """Player cursor walking the map from the entrance.

    The traversal ends when the cursor reaches a room without exits or the
    player quits. ``last_clue`` holds the clue picked up on the latest arrival.
    """

    def __init__(self, mansion: MansionMap, clues: ClueIndex) -> None:
        if mansion.root is None:
            raise ValueError("Cannot explore a mansion that has been torn down")
        self.mansion = mansion
        self.clues = clues
        self.current: Room = mansion.root
        self.finished = False
        self.quit = False
        self.last_clue: Optional[str] = None
        self.path: List[str] = []
        self.arrive()

    def current_room_name(self) -> str:
        return self.current.name

    def has_left(self) -> bool:
        return self.current.left is not None

    def has_right(self) -> bool:
        return self.current.right is not None

    def arrive(self) -> Optional[str]:
        self.path.append(self.current.name)
        self.last_clue = self.current.collect()
        if self.last_clue is not None:
            self.clues.insert(self.last_clue)
        if self.current.is_leaf():
            self.finished = True
        return self.last_clue

    def apply_command(self, raw: str) -> str:
        if self.finished:
            raise ValueError("Exploration already finished")
        command = normalize_command(raw)
        self.last_clue = None
        if command == CMD_LEFT:
            if self.current.left is None:
                return BLOCKED
            self.current = self.current.left
            self.arrive()
            return MOVED
        if command == CMD_RIGHT:
            if self.current.right is None:
                return BLOCKED
            self.current = self.current.right
            self.arrive()
            return MOVED
        if command == CMD_QUIT:
            self.quit = True
            self.finished = True
            return QUIT
        if command == CMD_VIEW:
            return VIEW_REQUESTED
        return INVALID
