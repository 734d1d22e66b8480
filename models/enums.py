from enum import Enum


class Mark(str, Enum):
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


class GameStatus(str, Enum):
    ONGOING = "ongoing"
    WIN = "win"  # human won
    LOSS = "loss"  # opponent won
    DRAW = "draw"


class OutcomeKind(str, Enum):
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"
