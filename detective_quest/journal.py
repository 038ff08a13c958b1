from __future__ import annotations

import json
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional


class Journal:
    """Append-only event journal for one game session.

    Events always stay in memory; when ``path`` is given they are also written
    as JSON lines so a finished run can be inspected afterwards.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path
        self._events: List[Dict[str, Any]] = []
        if self.path is not None:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                print(
                    f"WARNING: journal directory unavailable ({exc}); events kept in memory only.",
                    file=sys.stderr,
                    flush=True,
                )
                self.path = None

    def emit(self, event_type: str, payload: Dict[str, Any], source: str = "game") -> Dict[str, Any]:
        event = {
            "event_id": f"EVT-{uuid.uuid4().hex[:10]}",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "type": event_type,
            "source": source,
            "payload": payload,
        }
        self._events.append(event)
        if self.path is not None:
            self._write(event)
        return event

    def _write(self, event: Dict[str, Any]) -> None:
        try:
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(event) + "\n")
                fh.flush()
        except OSError as exc:
            print(
                f"WARNING: journal write to {self.path} failed ({exc}); further events kept in memory only.",
                file=sys.stderr,
                flush=True,
            )
            self.path = None

    def iter_events(self, event_type: Optional[str] = None) -> Iterable[Dict[str, Any]]:
        if event_type is None:
            return list(self._events)
        return [event for event in self._events if event["type"] == event_type]

    def clear(self) -> None:
        self._events = []

    def __len__(self) -> int:
        return len(self._events)

    @staticmethod
    def read(path: Path) -> List[Dict[str, Any]]:
        """Load a journal file written by a previous run, skipping malformed lines."""
        if not path.exists():
            return []
        events = []
        with path.open("r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(json.loads(line))
                except json.JSONDecodeError:
                    # Skip malformed lines instead of failing the whole read.
                    continue
        return events
