from typing import Iterator, Optional

from config import Config
from models.board import Outcome, Position
from models.enums import Mark
from .errors import ValidationError
from .utils import is_integer

VALID_CELLS = (None, Mark.X.value, Mark.O.value)


def winning_lines(size: int) -> Iterator[list[Position]]:
    """Yield every candidate line in evaluation order.

    Rows top to bottom (each left to right), then columns left to right (each
    top to bottom), then the main diagonal and finally the anti-diagonal, both
    by increasing row.
    """
    for row in range(size):
        yield [Position(row, col) for col in range(size)]
    for col in range(size):
        yield [Position(row, col) for row in range(size)]
    yield [Position(i, i) for i in range(size)]
    yield [Position(i, size - 1 - i) for i in range(size)]


def _line_owner(board, line) -> Optional[str]:
    first = board[line[0].row][line[0].col]
    if first is None:
        return None
    for pos in line[1:]:
        if board[pos.row][pos.col] != first:
            return None
    return first


def evaluate(board) -> Outcome:
    # The first completed line wins; a legal game never has two.
    size = len(board)
    for line in winning_lines(size):
        owner = _line_owner(board, line)
        if owner is not None:
            return Outcome.win(owner, line)

    if all(cell is not None for row in board for cell in row):
        return Outcome.draw()
    return Outcome.ongoing()


def validate_game_state(board, grid_size, active_mark):
    """Check a caller supplied snapshot before anything else trusts it.

    Raises ValidationError with the reason of the first failed check.
    """
    if not isinstance(board, list):
        raise ValidationError("board must be a 2D array")

    if len(board) != grid_size:
        raise ValidationError(f"board must have exactly {grid_size} rows (found {len(board)})")

    for i, row in enumerate(board):
        if not isinstance(row, list):
            raise ValidationError(f"row at index {i} must be an array")
        if len(row) != grid_size:
            raise ValidationError(
                f"row at index {i} must have exactly {grid_size} cells (found {len(row)})"
            )

    if active_mark not in (Mark.X.value, Mark.O.value):
        raise ValidationError('currentPlayer must be either "X" or "O"')

    if not is_integer(grid_size) or not Config.MIN_GRID_SIZE <= grid_size <= Config.MAX_GRID_SIZE:
        raise ValidationError(
            f"gridSize must be between {Config.MIN_GRID_SIZE} and {Config.MAX_GRID_SIZE}"
        )

    for i, row in enumerate(board):
        for j, cell in enumerate(row):
            if cell not in VALID_CELLS:
                raise ValidationError(
                    f'invalid cell value at position [{i},{j}]: {cell} (must be null, "X", or "O")'
                )
