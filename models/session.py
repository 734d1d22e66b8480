from dataclasses import dataclass, field
from typing import Optional

from .board import Position
from .enums import Mark, GameStatus


@dataclass
class GameSession:
    """One match between a human and the automated opponent, kept in memory."""

    game_id: str
    grid_size: int
    human_mark: Mark
    opponent_mark: Mark
    board: list = field(default_factory=list)
    active_mark: Optional[Mark] = None
    status: GameStatus = GameStatus.ONGOING
    winner: Optional[str] = None
    winning_line: tuple[Position, ...] = ()

    def __post_init__(self):
        if self.active_mark is None:
            self.active_mark = self.human_mark

    @property
    def is_over(self) -> bool:
        return self.status is not GameStatus.ONGOING

    def place(self, position: Position, mark: Mark):
        self.board[position.row][position.col] = mark.value

    def to_dict(self, message=None):
        view = {
            "gameId": self.game_id,
            "board": [list(row) for row in self.board],
            "currentPlayer": self.active_mark.value,
            "status": self.status.value,
            "winner": self.winner,
            "winningLine": [p.to_dict() for p in self.winning_line] or None,
            "humanSymbol": self.human_mark.value,
            "aiSymbol": self.opponent_mark.value,
            "gridSize": self.grid_size,
        }
        if message:
            view["message"] = message
        return view
