"""
Move validator for the TicTacToe engine.
Validates that moves follow the rules.
"""

from typing import Optional, List
from dataclasses import dataclass

from .board_state import BoardState
from .config import GameConfig
from .errors import InvalidMoveError
from .win_checker import WinChecker


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Index must be 0-8
    2. Can only place on empty cells
    3. Game must not be over
    """

    def __init__(self, win_checker: Optional[WinChecker] = None):
        self.win_checker = win_checker or WinChecker()

    def validate_move(self, board: BoardState, index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            index: Cell to place a mark on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if not isinstance(index, int) or isinstance(index, bool):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be an integer."
            )

        if not 0 <= index < GameConfig.CELL_COUNT:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index}. Must be 0-{GameConfig.CELL_COUNT - 1}."
            )

        if self.win_checker.evaluate(board).is_terminal:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        if not board.is_empty(index):
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board.cells[index].value}"
            )

        return ValidationResult(is_valid=True)

    def ensure_valid(self, board: BoardState, index: int):
        """
        Validate a move, raising on failure.

        Raises:
            InvalidMoveError: If the move breaks a rule.
        """
        result = self.validate_move(board, index)
        if not result.is_valid:
            raise InvalidMoveError(result.error_message, index=index)

    def get_valid_moves(self, board: BoardState) -> List[int]:
        """
        Get all valid moves for the mark to play.

        Returns:
            Ascending cell indices, empty once the game is over.
        """
        if self.win_checker.evaluate(board).is_terminal:
            return []

        return board.legal_moves()


# Quick test (python -m engine.move_validator)
if __name__ == "__main__":
    print("Testing MoveValidator...")

    board = BoardState()
    validator = MoveValidator()

    result = validator.validate_move(board, 4)
    print(f"Move 4: valid={result.is_valid}, error={result.error_message}")

    board.apply(4)

    # Same cell again
    result = validator.validate_move(board, 4)
    print(f"Move 4 again: valid={result.is_valid}, error={result.error_message}")
    assert not result.is_valid

    # Out of range
    result = validator.validate_move(board, 12)
    print(f"Move 12: valid={result.is_valid}, error={result.error_message}")
    assert not result.is_valid

    print(f"Valid moves: {validator.get_valid_moves(board)}")

    print("\nMoveValidator test done!")
