from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_HASH_CAPACITY = 7
DEFAULT_MAX_TEXT_LENGTH = 50


def bound_text(text: str, max_length: Optional[int]) -> str:
    """Clip ``text`` to ``max_length - 1`` UTF-8 bytes (one byte is reserved, as for a terminator).

    The cut never splits a character: a partially kept multi-byte character is dropped.
    """
    if max_length is None:
        return text
    encoded = text.encode("utf-8")
    if len(encoded) < max_length:
        return text
    return encoded[: max_length - 1].decode("utf-8", errors="ignore")


@dataclass(frozen=True)
class GameConfig:
    name: str = "default"
    hash_capacity: int = DEFAULT_HASH_CAPACITY
    max_text_length: int = DEFAULT_MAX_TEXT_LENGTH
    journal: Optional[Path] = None

    def __post_init__(self) -> None:
        if not isinstance(self.hash_capacity, int) or self.hash_capacity < 1:
            raise ValueError(f"hash_capacity must be a positive integer, got {self.hash_capacity!r}")
        if not isinstance(self.max_text_length, int) or self.max_text_length < 2:
            raise ValueError(f"max_text_length must be an integer >= 2, got {self.max_text_length!r}")

    @staticmethod
    def load(path: Path) -> "GameConfig":
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        return GameConfig.from_dict(raw, default_name=path.stem)

    @staticmethod
    def from_dict(raw: Dict[str, Any], default_name: str = "default") -> "GameConfig":
        if not isinstance(raw, dict):
            raise ValueError("Expected JSON object for game config")
        journal = raw.get("journal")
        return GameConfig(
            name=raw.get("name", default_name),
            hash_capacity=raw.get("hash_capacity", DEFAULT_HASH_CAPACITY),
            max_text_length=raw.get("max_text_length", DEFAULT_MAX_TEXT_LENGTH),
            journal=Path(journal) if journal else None,
        )

    def with_journal(self, journal: Optional[Path]) -> "GameConfig":
        if journal is None:
            return self
        return GameConfig(
            name=self.name,
            hash_capacity=self.hash_capacity,
            max_text_length=self.max_text_length,
            journal=journal,
        )
