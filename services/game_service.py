import logging
import uuid

from config import Config
from models.board import Outcome, Position, new_board
from models.enums import GameStatus, Mark, OutcomeKind
from models.session import GameSession
from .ai_service import AIService
from .board_logic import evaluate, validate_game_state
from .errors import (
    GameNotFoundError,
    GameOverError,
    IllegalMoveError,
    InvalidConfigurationError,
    TurnViolationError,
)
from .game_repository import GameRepository
from .session_store import InMemorySessionStore
from .utils import is_integer, is_valid_move

logger = logging.getLogger(__name__)

GAME_OVER_MESSAGE = "Game is already over."


class GameService:
    def __init__(self, ai_service: AIService, repository: GameRepository, store=None):
        self.ai_service = ai_service
        self.repository = repository
        self.store = store if store is not None else InMemorySessionStore()

    # --- stateless entry points -------------------------------------------

    def evaluate_game(self, board, current_player, grid_size) -> Outcome:
        validate_game_state(board, grid_size, current_player)
        outcome = evaluate(board)
        if outcome.is_over:
            self._record_completed_game(board, grid_size, outcome)
        return outcome

    def get_ai_move(self, board, current_player, grid_size) -> Position:
        validate_game_state(board, grid_size, current_player)
        outcome = evaluate(board)
        if outcome.is_over:
            raise GameOverError(f"Cannot get AI move: game is already over. Winner: {outcome.result}")
        return self.ai_service.suggest_move(board, current_player)

    def get_completed_games(self) -> list[dict]:
        return self.repository.latest(Config.COMPLETED_GAMES_LIMIT)

    # --- sessions against the AI ------------------------------------------

    def start_game(self, grid_size, player_symbol=None, mode="ai") -> dict:
        if mode != "ai":
            raise InvalidConfigurationError('mode must be "ai"')
        if not is_integer(grid_size) or not Config.MIN_GRID_SIZE <= grid_size <= Config.MAX_GRID_SIZE:
            raise InvalidConfigurationError(
                f"Invalid grid size: must be between {Config.MIN_GRID_SIZE} and {Config.MAX_GRID_SIZE}"
            )
        if player_symbol is not None and player_symbol not in (Mark.X.value, Mark.O.value):
            raise InvalidConfigurationError('playerSymbol must be either "X" or "O"')

        human = Mark(player_symbol or Config.DEFAULT_HUMAN_SYMBOL)
        session = GameSession(
            game_id=str(uuid.uuid4()),
            grid_size=grid_size,
            human_mark=human,
            opponent_mark=human.opponent,
            board=new_board(grid_size),
        )
        self.store.put(session)
        logger.info("Started game %s (%dx%d, human plays %s)",
                    session.game_id, grid_size, grid_size, human.value)
        return session.to_dict()

    def get_game(self, game_id) -> dict:
        return self._get_session(game_id).to_dict()

    def player_move(self, game_id, row, col) -> dict:
        self._get_session(game_id)
        with self.store.lock(game_id):
            session = self._get_session(game_id)

            if session.is_over:
                return session.to_dict(message=GAME_OVER_MESSAGE)

            if session.active_mark != session.human_mark:
                raise TurnViolationError("Not player's turn.")

            if not is_valid_move(session.board, row, col):
                raise IllegalMoveError("Invalid move.")

            session.place(Position(row, col), session.human_mark)
            outcome = evaluate(session.board)
            if outcome.is_over:
                self._finish(session, outcome)
                return session.to_dict()

            session.active_mark = session.opponent_mark
            try:
                reply = self.ai_service.suggest_move(session.board, session.opponent_mark.value)
            except Exception:
                # put the session back as it was before this request
                session.board[row][col] = None
                session.active_mark = session.human_mark
                raise
            session.place(reply, session.opponent_mark)
            outcome = evaluate(session.board)
            session.active_mark = session.human_mark
            if outcome.is_over:
                self._finish(session, outcome)

            return session.to_dict()

    # --- helpers ----------------------------------------------------------

    def _get_session(self, game_id) -> GameSession:
        session = self.store.get(game_id)
        if session is None:
            raise GameNotFoundError("Game not found")
        return session

    def _finish(self, session: GameSession, outcome: Outcome):
        if outcome.kind is OutcomeKind.DRAW:
            session.status = GameStatus.DRAW
        elif outcome.winner == session.human_mark:
            session.status = GameStatus.WIN
        else:
            session.status = GameStatus.LOSS
        session.winner = outcome.result
        session.winning_line = outcome.winning_line
        logger.info("Game %s finished: %s (winner %s)", session.game_id, session.status.value, session.winner)
        self._record_completed_game(session.board, session.grid_size, outcome)

    def _record_completed_game(self, board, grid_size, outcome: Outcome):
        # The in-memory result stands even when the store is unavailable
        try:
            self.repository.save(
                winner=outcome.result,
                grid_size=grid_size,
                final_board=board,
                winning_line=outcome.line_as_dicts(),
            )
        except Exception:
            logger.exception("Failed to record completed game (winner %s)", outcome.result)
