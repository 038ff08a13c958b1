from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from detective_quest.clues import ClueIndex
from detective_quest.config import GameConfig
from detective_quest.journal import Journal
from detective_quest.mansion import (
    BLOCKED,
    INVALID,
    MOVED,
    QUIT,
    VIEW_REQUESTED,
    Explorer,
    MansionMap,
    build_mansion,
)
from detective_quest.suspects import Suspect, SuspectRegistry, SuspectSummary

STARTED = "started"


@dataclass(frozen=True)
class StepResult:
    outcome: str
    room: str
    collected: Optional[str] = None
    finished: bool = False
    has_left: bool = False
    has_right: bool = False
    clues: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome,
            "room": self.room,
            "collected": self.collected,
            "finished": self.finished,
            "has_left": self.has_left,
            "has_right": self.has_right,
            "clues": list(self.clues),
        }


@dataclass(frozen=True)
class Report:
    suspects: List[SuspectSummary]
    verdict: Optional[str]
    citations: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suspects": [s.to_dict() for s in self.suspects],
            "verdict": self.verdict,
            "citations": self.citations,
        }


@dataclass
class Game:
    config: GameConfig = field(default_factory=GameConfig)

    def __post_init__(self) -> None:
        self.journal = Journal(self.config.journal)
        self.registry = SuspectRegistry(
            capacity=self.config.hash_capacity,
            max_text_length=self.config.max_text_length,
        )
        self.clue_index = ClueIndex(max_text_length=self.config.max_text_length)
        self.mansion: Optional[MansionMap] = None
        self.explorer: Optional[Explorer] = None
        self.torn_down = False

    def start(self) -> StepResult:
        if self.mansion is not None:
            raise ValueError("Game already started")
        if self.torn_down:
            raise ValueError("Game has been torn down")
        self.mansion = build_mansion(
            self.registry,
            max_text_length=self.config.max_text_length,
            on_associate=self._record_association,
        )
        self.explorer = Explorer(self.mansion, self.clue_index)
        self.journal.emit("game.started", {"config": self.config.name, "room": self.explorer.current_room_name()})
        return self._arrival(STARTED)

    def _record_association(self, suspect: Suspect, clue_text: str) -> None:
        self.journal.emit(
            "suspect.associated",
            {"suspect": suspect.name, "clue": clue_text, "citations": suspect.citation_count},
        )

    def _require_explorer(self) -> Explorer:
        if self.explorer is None:
            raise ValueError("Game not started")
        return self.explorer

    def _arrival(self, outcome: str) -> StepResult:
        explorer = self._require_explorer()
        room = explorer.current_room_name()
        self.journal.emit("room.entered", {"room": room})
        if explorer.last_clue is not None:
            self.journal.emit("clue.collected", {"room": room, "clue": explorer.last_clue})
        if explorer.finished:
            self.journal.emit("game.finished", {"room": room, "clues": len(self.clue_index)})
        return self._result(outcome)

    def _result(self, outcome: str) -> StepResult:
        explorer = self._require_explorer()
        return StepResult(
            outcome=outcome,
            room=explorer.current_room_name(),
            collected=explorer.last_clue,
            finished=explorer.finished,
            has_left=explorer.has_left(),
            has_right=explorer.has_right(),
            clues=self.clues() if outcome == VIEW_REQUESTED else [],
        )

    @property
    def finished(self) -> bool:
        return self.explorer is not None and self.explorer.finished

    def step(self, command: str) -> StepResult:
        explorer = self._require_explorer()
        room = explorer.current_room_name()
        outcome = explorer.apply_command(command)
        if outcome == MOVED:
            return self._arrival(outcome)
        if outcome == BLOCKED:
            self.journal.emit("command.blocked", {"room": room, "command": command})
        elif outcome == INVALID:
            self.journal.emit("command.invalid", {"room": room, "command": command})
        elif outcome == VIEW_REQUESTED:
            self.journal.emit("clues.viewed", {"room": room, "count": len(self.clue_index)})
        elif outcome == QUIT:
            self.journal.emit("game.quit", {"room": room, "clues": len(self.clue_index)})
        return self._result(outcome)

    def clues(self) -> List[str]:
        return list(self.clue_index)

    def report(self) -> Report:
        suspects = self.registry.enumerate()
        leader = self.registry.most_likely()
        report = Report(
            suspects=suspects,
            verdict=leader.name if leader is not None else None,
            citations=leader.citation_count if leader is not None else 0,
        )
        self.journal.emit("verdict.reported", {"verdict": report.verdict, "citations": report.citations})
        return report

    def state(self) -> Dict[str, Any]:
        explorer = self.explorer
        return {
            "started": explorer is not None,
            "finished": self.finished,
            "quit": explorer is not None and explorer.quit,
            "room": explorer.current_room_name() if explorer is not None else None,
            "has_left": explorer.has_left() if explorer is not None else False,
            "has_right": explorer.has_right() if explorer is not None else False,
            "left": explorer.current.left.name if explorer is not None and explorer.has_left() else None,
            "right": explorer.current.right.name if explorer is not None and explorer.has_right() else None,
            "path": list(explorer.path) if explorer is not None else [],
            "clues_collected_count": len(self.clue_index),
            "suspects_count": len(self.registry),
        }

    def teardown(self) -> Dict[str, int]:
        if self.torn_down:
            return {"rooms": 0, "clues": 0, "suspects": 0}
        released = {
            "rooms": self.mansion.teardown() if self.mansion is not None else 0,
            "clues": self.clue_index.clear(),
            "suspects": self.registry.clear(),
        }
        self.explorer = None
        self.mansion = None
        self.torn_down = True
        self.journal.emit("game.teardown", released)
        return released
