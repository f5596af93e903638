"""
Win checker for the TicTacToe engine.
Checks if a mark has won or if the game is a draw.
"""

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass

from .board_state import BoardState, Mark


# All possible winning lines (as cell index triples)
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class OutcomeKind(Enum):
    """Where the game stands."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating a board.

    Only a WIN carries a winner and the line that made it.
    """
    kind: OutcomeKind
    winner: Optional[Mark] = None
    line: Optional[Tuple[int, int, int]] = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(OutcomeKind.IN_PROGRESS)

    @classmethod
    def win(cls, mark: Mark, line: Optional[Tuple[int, int, int]] = None) -> "Outcome":
        return cls(OutcomeKind.WIN, winner=mark, line=line)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self.kind == OutcomeKind.DRAW

    def describe(self) -> str:
        """Short human-readable result."""
        if self.kind == OutcomeKind.WIN:
            return f"{self.winner.value} WINS!"
        if self.kind == OutcomeKind.DRAW:
            return "DRAW!"
        return "In progress"


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 cells with the same mark in a row
    (horizontally, vertically, or diagonally)
    """

    WINNING_LINES = WINNING_LINES

    def evaluate(self, board: BoardState) -> Outcome:
        """
        Work out the outcome of a board.

        Args:
            board: The board to evaluate.

        Returns:
            Win for the first matching line, Draw if the board is full,
            otherwise InProgress.
        """
        cells = board.cells
        for line in self.WINNING_LINES:
            a, b, c = line
            mark = cells[a]
            if mark is not None and mark == cells[b] == cells[c]:
                return Outcome.win(mark, line)

        if all(cell is not None for cell in cells):
            return Outcome.draw()

        return Outcome.in_progress()

    def check_winner(self, board: BoardState) -> Optional[Mark]:
        """
        Check if there's a winner.

        Returns:
            The winning Mark, or None if no winner yet.
        """
        return self.evaluate(board).winner

    def check_draw(self, board: BoardState) -> bool:
        """True if the board is full and nobody has three in a row."""
        return self.evaluate(board).is_draw

    def get_winning_line(self, board: BoardState) -> Optional[Tuple[int, int, int]]:
        """
        Get the winning line if there is one.

        Returns:
            The winning line as a triple of cell indices, or None.
        """
        return self.evaluate(board).line


# Quick test (python -m engine.win_checker)
if __name__ == "__main__":
    print("Testing WinChecker...")

    checker = WinChecker()
    X, O = Mark.X, Mark.O

    # Test 1: Horizontal win
    board = BoardState.from_cells([X, X, X, None, O, None, O, None, None])
    outcome = checker.evaluate(board)
    print(f"Test 1 (horizontal): {outcome.describe()} line={outcome.line}")
    assert outcome.winner == X and outcome.line == (0, 1, 2)

    # Test 2: Full board, no line
    board = BoardState.from_cells([X, O, X, X, O, O, O, X, X])
    outcome = checker.evaluate(board)
    print(f"Test 2 (draw): {outcome.describe()}")
    assert outcome.is_draw

    # Test 3: Still playing
    board = BoardState.from_cells([X, None, None, None, O, None, None, None, None])
    outcome = checker.evaluate(board)
    print(f"Test 3 (in progress): {outcome.describe()}")
    assert not outcome.is_terminal

    print("\nWinChecker test done!")
