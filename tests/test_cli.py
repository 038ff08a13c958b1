import json

import pytest

from detective_quest.cli import build_parser, main, play, render_report
from detective_quest.engine import Game


def test_scripted_play_output():
    lines = []
    report = play(Game(), commands=list("eee"), out=lines.append)
    assert "You arrived at: Sala de Estar" in lines
    assert "[CLUE COLLECTED] 'Um copo quebrado.'" in lines
    assert "You arrived at: Sotao" in lines
    assert report.verdict == "Mordomo"
    assert "The most likely suspect is: Mordomo" in lines


def test_console_play_reads_characters():
    prompts = []
    answers = iter(["x", "", "v", "e e", "d", "s"])

    def read(prompt):
        prompts.append(prompt)
        return next(answers)

    lines = []
    play(Game(), read=read, out=lines.append)
    assert "(e) to Sala de Estar" in prompts[0]
    assert "(d) to Biblioteca" in prompts[0]
    assert "[WARNING] Invalid choice. Use 'e', 'd', 's' or 'v'." in lines
    assert "[WARNING] Invalid input. Try again." in lines
    assert "No clues collected so far." in lines
    assert "[WARNING] There is no path that way. Try another direction." in lines
    assert "Leaving the mansion..." in lines


def test_console_play_stops_at_leaf():
    answers = iter(["d", "e", "this is never read"])
    lines = []
    play(Game(), read=lambda prompt: next(answers), out=lines.append)
    assert "[CLUE COLLECTED] 'Documento rasgado.'" in lines
    assert "[END OF THE LINE] This room has no more paths. Exploration is over." in lines


def test_console_eof_quits():
    def read(prompt):
        raise EOFError

    lines = []
    play(Game(), read=read, out=lines.append)
    assert "Leaving the mansion..." in lines


def test_render_report_without_suspects():
    game = Game()
    lines = render_report(game.report())
    assert "No suspects registered." in lines
    assert "Not enough evidence, or the crime was perfect." in lines


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_main_report_json(capsys):
    main(["report", "--moves", "ed", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["verdict"] == "Mordomo"
    assert data["citations"] == 2
    assert len(data["suspects"]) == 3


def test_main_map(capsys):
    main(["map"])
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Hall de Entrada"
    assert "Escritorio do Sr. Black*" in out


def test_main_play_with_moves_and_journal(tmp_path, capsys):
    journal = tmp_path / "session.jsonl"
    main(["--journal", str(journal), "play", "--moves", "dde"])
    out = capsys.readouterr().out
    assert "You arrived at: Adega" in out
    assert journal.exists()


def test_main_invalid_config(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"hash_capacity": 0}), encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["--config", str(bad), "map"])
