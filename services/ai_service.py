import json
import logging
import random
import re
from typing import Optional

from openai import OpenAI

from config import Config
from models.board import Position
from .errors import NoValidMovesError
from .utils import empty_positions, is_integer, is_valid_move

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a Tic Tac Toe AI player. Analyze the game board and suggest the best move. "
    "Respond ONLY with a JSON object containing 'row' and 'col' properties (0-indexed). "
    "No additional text."
)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def build_prompt(board, active_mark):
    size = len(board)
    board_str = "\n".join(
        " | ".join(cell or f"({i},{j})" for j, cell in enumerate(row))
        for i, row in enumerate(board)
    )
    return (
        f"Current Tic Tac Toe board ({size}x{size}):\n"
        f"{board_str}\n\n"
        f"You are playing as {active_mark}. Empty cells are shown as (row,col).\n"
        'What is your next move? Respond with JSON only: {"row": number, "col": number}'
    )


def parse_suggestion(text) -> Optional[Position]:
    """Turn the oracle's raw reply into a Position, or None if it is not one.

    Only a JSON object with integer "row" and "col" keys is accepted. Bounds
    and occupancy are checked separately against the board.
    """
    if not isinstance(text, str) or not text.strip():
        return None

    cleaned = text.strip()
    fenced = _CODE_FENCE.match(cleaned)
    if fenced:
        cleaned = fenced.group(1)

    try:
        payload = json.loads(cleaned)
    except (ValueError, RecursionError):
        return None

    if not isinstance(payload, dict):
        return None
    row, col = payload.get("row"), payload.get("col")
    if not (is_integer(row) and is_integer(col)):
        return None
    return Position(row, col)


class MoveOracle:
    """External source of move suggestions. May be slow, wrong or unavailable."""

    def request_move(self, board, active_mark) -> Optional[str]:
        raise NotImplementedError


class OpenAIMoveOracle(MoveOracle):
    """Asks an OpenAI chat model for a move; returns the raw reply text."""

    def __init__(self, api_key=None, model=None, timeout=None, client=None):
        self.model = model or Config.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else Config.AI_TIMEOUT_SECONDS
        if client is None and api_key:
            client = OpenAI(api_key=api_key, timeout=self.timeout, max_retries=0)
        self.client = client

    def request_move(self, board, active_mark):
        if self.client is None:
            # no credentials: every move comes from the random fallback
            return None

        completion = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(board, active_mark)},
            ],
            temperature=0.7,
            max_tokens=50,
            timeout=self.timeout,
        )
        if not completion.choices:
            return None
        return completion.choices[0].message.content


class AIService:
    """Picks the opponent's move.

    The oracle's suggestion is used only when it names an empty cell inside the
    board; anything else (errors, timeouts, garbage, occupied cells) is replaced
    by a uniformly random empty cell drawn from ``rng``.
    """

    def __init__(self, oracle: MoveOracle, rng: Optional[random.Random] = None):
        self.oracle = oracle
        self.rng = rng or random.Random()

    def suggest_move(self, board, active_mark) -> Position:
        snapshot = [list(row) for row in board]
        try:
            reply = self.oracle.request_move(snapshot, active_mark)
        except Exception as e:
            logger.warning("Move oracle failed, using random move: %s", e)
            return self.random_move(board)

        try:
            move = parse_suggestion(reply)
        except Exception as e:
            logger.warning("Move oracle reply could not be read, using random move: %s", e)
            return self.random_move(board)

        if move is None:
            logger.warning("Move oracle gave no usable move (%.80r), using random move", reply)
            return self.random_move(board)

        if not is_valid_move(board, move.row, move.col):
            logger.warning("Move oracle suggested illegal cell %s, using random move", tuple(move))
            return self.random_move(board)

        return move

    def random_move(self, board) -> Position:
        candidates = empty_positions(board)
        if not candidates:
            raise NoValidMovesError("No valid moves available")
        return self.rng.choice(candidates)
