"""HTTP API for the Detective Quest mansion game."""
import os
from pathlib import Path

from flask import Flask, jsonify, request
from flask_cors import CORS

from detective_quest import __version__
from detective_quest.config import GameConfig
from detective_quest.data import COMMANDS
from detective_quest.engine import Game

app = Flask(__name__)
CORS(app)


def load_config():
    """Config from DETECTIVE_QUEST_CONFIG, or the built-in defaults."""
    raw_path = os.getenv("DETECTIVE_QUEST_CONFIG", "").strip()
    if not raw_path:
        return GameConfig()
    return GameConfig.load(Path(raw_path))


# In-memory session (one player, reset on server restart)
game = None


class ConfigError(ValueError):
    """DETECTIVE_QUEST_CONFIG could not be loaded."""


def reset_game():
    """Tear down the current session and start a fresh one.

    The current session is kept when the config cannot be loaded.
    """
    global game
    try:
        config = load_config()
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc
    fresh = Game(config=config)
    if game is not None:
        game.teardown()
    game = fresh
    return game.start()


def current_game():
    if game is None:
        reset_game()
    return game


@app.errorhandler(ConfigError)
def config_error(exc):
    return jsonify({"status": "error", "message": str(exc)}), 400


@app.route('/api/game/new', methods=['POST'])
def new_game():
    """Start a new game."""
    arrival = reset_game()
    return jsonify({
        "status": "success",
        "message": "New game started",
        "arrival": arrival.to_dict(),
        "state": game.state()
    })


@app.route('/api/game/state', methods=['GET'])
def get_state():
    """Get current game state."""
    return jsonify(current_game().state())


@app.route('/api/game/command', methods=['POST'])
def command():
    """Apply one player command: e (left), d (right), v (view clues) or s (quit)."""
    data = request.get_json(silent=True) or {}
    raw = data.get("command")

    if not isinstance(raw, str) or not raw.strip():
        return jsonify({"status": "error", "message": "command required"}), 400

    session = current_game()
    if session.finished:
        return jsonify({"status": "error", "message": "Exploration already finished"}), 400

    result = session.step(raw)
    return jsonify({
        "status": "success",
        "result": result.to_dict(),
        "commands": list(COMMANDS)
    })


@app.route('/api/game/clues', methods=['GET'])
def get_clues():
    """Get collected clues in alphabetical order."""
    clues = current_game().clues()
    return jsonify({
        "clues": clues,
        "collected_count": len(clues)
    })


@app.route('/api/game/suspects', methods=['GET'])
def get_suspects():
    """Get every suspect with citation count and associated clues."""
    suspects = [s.to_dict() for s in current_game().registry.enumerate()]
    return jsonify({
        "suspects": suspects,
        "message": None if suspects else "No suspects registered"
    })


@app.route('/api/game/verdict', methods=['GET'])
def get_verdict():
    """Most likely suspect by citation count."""
    leader = current_game().registry.most_likely()
    if leader is None:
        return jsonify({
            "verdict": None,
            "citations": 0,
            "message": "Not enough evidence, or the crime was perfect."
        })
    return jsonify({
        "verdict": leader.name,
        "citations": leader.citation_count,
        "message": f"The most likely suspect is {leader.name}"
    })


@app.route('/api/game/events', methods=['GET'])
def get_events():
    """Session journal, optionally filtered by ?type=."""
    event_type = request.args.get("type") or None
    events = current_game().journal.iter_events(event_type)
    return jsonify({"events": list(events)})


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok", "service": "detective-quest", "version": __version__})


def main():
    app.run(debug=True, port=5001)


if __name__ == '__main__':
    main()
