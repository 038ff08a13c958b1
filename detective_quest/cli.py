from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from detective_quest.config import GameConfig
from detective_quest.engine import Game, Report, StepResult
from detective_quest.mansion import BLOCKED, INVALID, QUIT, VIEW_REQUESTED

DEFAULT_CONFIG = "config/detective.default.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detective Quest: explore the mansion and name the culprit")
    parser.add_argument("--config", default=None, help=f"Path to game config JSON (default: {DEFAULT_CONFIG} if present)")
    parser.add_argument("--journal", default=None, help="Append session events to this JSONL file")

    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Explore the mansion interactively")
    play.add_argument("--moves", default=None, help="Scripted commands instead of prompts, e.g. 'eev'")

    sub.add_parser("map", help="Print the mansion layout")

    report = sub.add_parser("report", help="Run a scripted exploration and print the suspect report")
    report.add_argument("--moves", default="", help="Scripted commands, e.g. 'dd'")
    report.add_argument("--json", action="store_true", dest="as_json", help="Print the report as JSON")

    return parser


def _load_config(config_path: Optional[str], journal: Optional[str]) -> GameConfig:
    if config_path is not None:
        config = GameConfig.load(Path(config_path))
    elif Path(DEFAULT_CONFIG).exists():
        config = GameConfig.load(Path(DEFAULT_CONFIG))
    else:
        config = GameConfig()
    return config.with_journal(Path(journal) if journal else None)


def render_prompt(left: Optional[str], right: Optional[str]) -> str:
    options = []
    if left is not None:
        options.append(f"(e) to {left}")
    if right is not None:
        options.append(f"(d) to {right}")
    options.append("(s) to leave the mansion")
    options.append("(v) to view clues")
    return "Choose your next path: " + " | ".join(options) + ": "


def render_clues(clues: List[str]) -> List[str]:
    lines = ["", "--- COLLECTED CLUES (alphabetical) ---"]
    if not clues:
        lines.append("No clues collected so far.")
    else:
        lines.extend(f"- {text}" for text in clues)
    return lines


def render_step(result: StepResult) -> List[str]:
    if result.outcome == BLOCKED:
        return ["[WARNING] There is no path that way. Try another direction."]
    if result.outcome == INVALID:
        return ["[WARNING] Invalid choice. Use 'e', 'd', 's' or 'v'."]
    if result.outcome == VIEW_REQUESTED:
        return render_clues(result.clues)
    if result.outcome == QUIT:
        return ["", "Leaving the mansion..."]
    lines = ["", f"You arrived at: {result.room}"]
    if result.collected is not None:
        lines.append("[CLUE] You found evidence in this room!")
        lines.append(f"[CLUE COLLECTED] '{result.collected}'")
    if result.finished:
        lines.append("")
        lines.append("[END OF THE LINE] This room has no more paths. Exploration is over.")
    return lines


def render_report(report: Report) -> List[str]:
    lines = ["", "--- SUSPECTS AND ASSOCIATED CLUES ---"]
    if not report.suspects:
        lines.append("No suspects registered.")
    for suspect in report.suspects:
        lines.append("")
        lines.append(f"Suspect: {suspect.name} (Citations: {suspect.citation_count})")
        lines.append("  Clues:")
        if not suspect.clues:
            lines.append("    - No associated clues.")
        lines.extend(f"    - {text}" for text in suspect.clues)
    lines.append("")
    lines.append("--- VERDICT ---")
    if report.verdict is None:
        lines.append("Not enough evidence, or the crime was perfect.")
    else:
        lines.append(f"The most likely suspect is: {report.verdict}")
        lines.append(f"Based on {report.citations} clue citations.")
    return lines


def _emit(lines: Iterable[str], out: Callable[[str], None]) -> None:
    for line in lines:
        out(line)


def _console_commands(read: Callable[[str], str], game: Game, out: Callable[[str], None]) -> Iterable[str]:
    """Yield one command character at a time from prompted lines, like a character-wise reader."""
    while not game.finished:
        state = game.state()
        try:
            line = read("\n" + render_prompt(state["left"], state["right"]))
        except EOFError:
            yield "s"
            return
        chars = [ch for ch in line if not ch.isspace()]
        if not chars:
            out("[WARNING] Invalid input. Try again.")
            continue
        for ch in chars:
            yield ch
            if game.finished:
                return


def play(
    game: Game,
    commands: Optional[Iterable[str]] = None,
    read: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> Report:
    """Run one full session: explore, then list associations and the verdict."""
    out("--- Detective Quest: The Mansion Mystery ---")
    out("Welcome! Your mission is to explore the mansion starting from the entrance hall.")
    out("")
    out("--- EXPLORING THE MANSION ---")
    _emit(render_step(game.start()), out)

    source = commands if commands is not None else _console_commands(read, game, out)
    for command in source:
        if game.finished:
            break
        _emit(render_step(game.step(command)), out)

    report = game.report()
    _emit(render_report(report), out)
    game.teardown()
    return report


def run_scripted(game: Game, moves: str) -> Report:
    game.start()
    for command in moves:
        if game.finished:
            break
        if command.isspace():
            continue
        game.step(command)
    report = game.report()
    game.teardown()
    return report


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _load_config(args.config, args.journal)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Invalid config: {exc}")

    game = Game(config=config)

    if args.command == "play":
        commands = [ch for ch in args.moves if not ch.isspace()] if args.moves is not None else None
        play(game, commands=commands)
        return

    if args.command == "map":
        game.start()
        _emit(game.mansion.outline(), print)
        game.teardown()
        return

    if args.command == "report":
        report = run_scripted(game, args.moves)
        if args.as_json:
            print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        else:
            _emit(render_report(report), print)
        return

    raise SystemExit(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main()
