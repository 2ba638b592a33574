from flask import Flask, jsonify, request
from functools import lru_cache
import logging

from queens_daily import config
from queens_daily.helpers import store
from queens_daily.helpers.Game import Game
from queens_daily.helpers.seeded_random import (
    current_millis,
    seconds_until_next_window,
    time_seed,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)


class InvalidRequest(Exception):
    """Raised for malformed client input; answered with HTTP 400."""


@app.errorhandler(InvalidRequest)
def handle_bad_request(error):
    return jsonify({"error": str(error)}), 400


# ---------------- Request Helpers ---------------- #

def board_size():
    """Read and check the ?size= query parameter."""
    raw = request.args.get("size", str(config.GRID_SIZE))
    try:
        size = int(raw)
    except ValueError:
        raise InvalidRequest(f"size must be an integer, got {raw!r}")
    if not config.MIN_GRID_SIZE <= size <= config.MAX_GRID_SIZE:
        raise InvalidRequest(f"size must be between {config.MIN_GRID_SIZE} and {config.MAX_GRID_SIZE}")
    return size


def parse_queens(data, size):
    """
    Turn the "queens" field of a request body into (row, col) tuples.

    Args:
        data (dict): Decoded JSON body.
        size (int): Board size used for bounds checks.

    Returns:
        list[tuple[int, int]]: Queen coordinates.
    """
    raw = data.get("queens", [])
    if not isinstance(raw, list):
        raise InvalidRequest("queens must be a list of [row, col] pairs")

    queens = []
    for item in raw:
        if (
            not isinstance(item, (list, tuple)) or len(item) != 2 or
            not all(isinstance(v, int) and not isinstance(v, bool) for v in item)
        ):
            raise InvalidRequest(f"bad queen entry: {item!r}")
        r, c = item
        if not (0 <= r < size and 0 <= c < size):
            raise InvalidRequest(f"queen ({r}, {c}) is off the board")
        queens.append((r, c))
    return queens


def request_body():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidRequest("request body must be a JSON object")
    return data


@lru_cache(maxsize=256)
def generate(seed, size, max_attempts):
    """Build the puzzle for a seed once; later requests reuse the same Game."""
    game = Game(size, max_attempts)
    if game.generate_puzzle(seed) is None:
        return None
    return game


def load_game(seed, size):
    """Puzzle for a seed and size; None if generation failed."""
    return generate(seed, size, config.MAX_ATTEMPTS)


def puzzle_key(seed, size):
    """Storage key for one board: the same seed at another size is another board."""
    return f"{seed}-{size}"


def generation_failed(seed):
    logger.warning("No solvable puzzle for seed %d", seed)
    return jsonify({
        "error": "No solvable puzzle found for this seed. Please try again.",
        "seed": seed,
        "retry": True,
    }), 503


def public_puzzle(game):
    """Puzzle fields safe to hand to a player (no solution)."""
    data = game.puzzle_data()
    data.pop("solution")
    return data


# ---------------- Routes ---------------- #

@app.route("/api/puzzle")
def current_puzzle():
    size = board_size()
    now_ms = current_millis()
    seed = time_seed(now_ms, window_ms=config.SEED_WINDOW_MS)

    game = load_game(seed, size)
    if game is None:
        return generation_failed(seed)

    data = public_puzzle(game)
    data["expires_in"] = seconds_until_next_window(now_ms, window_ms=config.SEED_WINDOW_MS)
    return jsonify(data)


@app.route("/api/puzzle/<int:seed>")
def puzzle_for_seed(seed):
    size = board_size()
    game = load_game(seed, size)
    if game is None:
        return generation_failed(seed)
    return jsonify(public_puzzle(game))


@app.route("/api/puzzle/<int:seed>/check", methods=["POST"])
def check_board(seed):
    size = board_size()
    data = request_body()
    queens = parse_queens(data, size)

    game = load_game(seed, size)
    if game is None:
        return generation_failed(seed)

    result = game.validate_board(queens)
    response = {
        "invalid": [list(cell) for cell in result["invalid"]],
        "solved": result["solved"],
    }

    if result["solved"] and data.get("solve_time") is not None:
        try:
            solve_time = float(data["solve_time"])
        except (TypeError, ValueError):
            raise InvalidRequest("solve_time must be a number")
        store.record_solve_time(puzzle_key(seed, size), solve_time)
        response["solve_time"] = solve_time
        response["average_time"] = store.get_global_average_time(puzzle_key(seed, size))

    return jsonify(response)


@app.route("/api/puzzle/<int:seed>/hint", methods=["POST"])
def give_hint(seed):
    size = board_size()
    queens = parse_queens(request_body(), size)

    game = load_game(seed, size)
    if game is None:
        return generation_failed(seed)

    hint = game.get_hint(queens)
    if hint:
        return jsonify({"row": hint[0], "col": hint[1]})

    return jsonify({"message": "All queens are already in the correct positions!"})


@app.route("/api/puzzle/<int:seed>/solution")
def show_solution(seed):
    size = board_size()
    game = load_game(seed, size)
    if game is None:
        return generation_failed(seed)
    return jsonify({"seed": seed, "solution": [list(cell) for cell in game.get_solution()]})


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if config.DEBUG else logging.INFO)
    app.run(debug=config.DEBUG, port=config.PORT)
