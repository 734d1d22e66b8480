from flask import Blueprint, current_app, request, jsonify

from services.errors import IllegalMoveError, InvalidConfigurationError, ValidationError
from services.game_service import GameService
from services.utils import is_integer

router = Blueprint('game_controller', __name__)

GAME_MESSAGES = {
    "X": "Player X wins!",
    "O": "Player O wins!",
    "draw": "The game is a draw!",
}


def get_game_service() -> GameService:
    return current_app.extensions["game_service"]


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _game_state(data):
    game_state = data.get("gameState")
    if not isinstance(game_state, dict):
        raise ValidationError("Invalid game state: gameState must be an object")
    return game_state.get("board"), game_state.get("currentPlayer"), game_state.get("gridSize")


@router.route("/evaluate", methods=["POST"])
def evaluate_game():
    board, current_player, grid_size = _game_state(_json_body())
    outcome = get_game_service().evaluate_game(board, current_player, grid_size)
    return jsonify({
        "isGameOver": outcome.is_over,
        "winner": outcome.result,
        "winningLine": outcome.line_as_dicts(),
        "message": GAME_MESSAGES.get(outcome.result, "Game is still in progress"),
    })


@router.route("/completed", methods=["GET"])
def completed_games():
    games = get_game_service().get_completed_games()
    return jsonify({"games": games})


@router.route("/ai-move", methods=["POST"])
def ai_move():
    board, current_player, grid_size = _game_state(_json_body())
    move = get_game_service().get_ai_move(board, current_player, grid_size)
    return jsonify({"move": move.to_dict()})


@router.route("/start", methods=["POST"])
def start_game():
    data = _json_body()
    if "gridSize" not in data:
        raise InvalidConfigurationError("Invalid input: gridSize is required")
    game = get_game_service().start_game(
        data["gridSize"],
        player_symbol=data.get("playerSymbol"),
        mode=data.get("mode"),
    )
    return jsonify(game), 201


@router.route("/<game_id>/move", methods=["POST"])
def player_move(game_id):
    data = _json_body()
    row, col = data.get("row"), data.get("col")
    if not (is_integer(row) and is_integer(col)):
        raise IllegalMoveError("Invalid input: row and col must be integers")
    result = get_game_service().player_move(game_id, row, col)
    return jsonify(result), 200


@router.route("/<game_id>", methods=["GET"])
def get_game(game_id):
    return jsonify(get_game_service().get_game(game_id))
