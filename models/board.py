# models/board.py
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

from .enums import Mark, OutcomeKind


class Position(NamedTuple):
    row: int
    col: int

    def to_dict(self):
        return {"row": self.row, "col": self.col}


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a board: ongoing, a win with its line, or a draw."""

    kind: OutcomeKind
    winner: Optional[Mark] = None
    winning_line: Tuple[Position, ...] = ()

    @classmethod
    def ongoing(cls):
        return cls(OutcomeKind.ONGOING)

    @classmethod
    def draw(cls):
        return cls(OutcomeKind.DRAW)

    @classmethod
    def win(cls, mark, line):
        return cls(OutcomeKind.WIN, Mark(mark), tuple(line))

    @property
    def is_over(self) -> bool:
        return self.kind is not OutcomeKind.ONGOING

    @property
    def result(self) -> Optional[str]:
        """Wire label of the outcome: "X", "O", "draw" or None while ongoing."""
        if self.kind is OutcomeKind.WIN:
            return self.winner.value
        if self.kind is OutcomeKind.DRAW:
            return "draw"
        return None

    def line_as_dicts(self):
        if not self.winning_line:
            return None
        return [p.to_dict() for p in self.winning_line]


def new_board(size: int) -> list[list[Optional[str]]]:
    return [[None for _ in range(size)] for _ in range(size)]
