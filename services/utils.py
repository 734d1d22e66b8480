from models.board import Position


def is_integer(value) -> bool:
    # bool is an int subclass but never a valid coordinate or size
    return isinstance(value, int) and not isinstance(value, bool)


def is_within_bounds(row, col, size: int) -> bool:
    return is_integer(row) and is_integer(col) and 0 <= row < size and 0 <= col < size


def is_valid_move(board, row, col) -> bool:
    """A move is valid when it lands inside the board on an empty cell."""
    return is_within_bounds(row, col, len(board)) and board[row][col] is None


def empty_positions(board) -> list[Position]:
    return [
        Position(row, col)
        for row, cells in enumerate(board)
        for col, cell in enumerate(cells)
        if cell is None
    ]
