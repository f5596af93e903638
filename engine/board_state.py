"""
Board state management for the TicTacToe engine.
Tracks the 9 cells, whose turn it is, and the move history.
"""

from enum import Enum
from typing import Optional, List, Sequence, Tuple
from dataclasses import dataclass, field

from .config import GameConfig


class Mark(Enum):
    """The two marks in the game."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the opposite mark."""
        return Mark.O if self == Mark.X else Mark.X


# A cell is a Mark, or None when empty
Cell = Optional[Mark]


@dataclass
class Move:
    """
    A move in the game.
    """
    mark: Mark              # Who made the move
    index: int              # Cell index (0-8)
    move_number: int        # Which ply this was (0-8)


def cell_to_index(row: int, col: int) -> int:
    """Convert (row, col) to a cell index, row-major."""
    return row * GameConfig.BOARD_SIZE + col


def index_to_cell(index: int) -> Tuple[int, int]:
    """Convert a cell index to (row, col)."""
    return divmod(index, GameConfig.BOARD_SIZE)


@dataclass
class BoardState:
    """
    The 3x3 board and whose turn it is.

    Tracks:
    - The 9 cells, indexed 0-8 row-major
    - The mark to move
    - Move history (one entry per non-empty cell)

    The outcome is not stored here. WinChecker derives it from the cells.
    """

    cells: List[Cell] = field(
        default_factory=lambda: [None] * GameConfig.CELL_COUNT
    )

    # X always opens
    current_mark: Mark = Mark.X

    moves: List[Move] = field(default_factory=list)

    @classmethod
    def from_cells(
        cls,
        cells: Sequence[Cell],
        current_mark: Optional[Mark] = None
    ) -> "BoardState":
        """
        Build a board from a list of 9 cells.

        Args:
            cells: Nine entries, each a Mark or None.
            current_mark: Mark to move. If omitted, X moves when both marks
                have played the same number of times, otherwise O.

        Returns:
            A new BoardState. History lists the marks in index order.
        """
        if len(cells) != GameConfig.CELL_COUNT:
            raise ValueError(
                f"Board needs {GameConfig.CELL_COUNT} cells, got {len(cells)}"
            )

        if current_mark is None:
            x_count = sum(1 for c in cells if c == Mark.X)
            o_count = sum(1 for c in cells if c == Mark.O)
            current_mark = Mark.X if x_count <= o_count else Mark.O

        moves = []
        for index, cell in enumerate(cells):
            if cell is not None:
                moves.append(Move(mark=cell, index=index, move_number=len(moves)))
        return cls(cells=list(cells), current_mark=current_mark, moves=moves)

    def apply(self, index: int, mark: Optional[Mark] = None) -> bool:
        """
        Place a mark at the given index.

        Args:
            index: Cell index (0-8).
            mark: Mark to place (default: the mark to move).

        Returns:
            True if the move was applied, False if it was rejected. A
            rejected move leaves the board untouched.
        """
        if not 0 <= index < GameConfig.CELL_COUNT:
            return False

        if self.cells[index] is not None:
            return False

        if mark is None:
            mark = self.current_mark

        self.cells[index] = mark
        self.moves.append(Move(mark=mark, index=index, move_number=len(self.moves)))
        self.current_mark = mark.opposite()

        return True

    def is_empty(self, index: int) -> bool:
        """Check whether a cell is empty. Indices outside 0-8 are never empty."""
        if not 0 <= index < GameConfig.CELL_COUNT:
            return False
        return self.cells[index] is None

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    def legal_moves(self) -> List[int]:
        """
        Get all empty cells on the board.

        Returns:
            Cell indices in ascending order.
        """
        return [i for i, cell in enumerate(self.cells) if cell is None]

    def clone(self) -> "BoardState":
        """Create an independent copy of the board."""
        return BoardState(
            cells=list(self.cells),
            current_mark=self.current_mark,
            moves=list(self.moves)
        )

    def snapshot(self) -> Tuple[Cell, ...]:
        """Read-only view of the cells, handed to callbacks."""
        return tuple(self.cells)

    def render(self) -> str:
        """Text drawing of the board. Empty cells show their number (1-9)."""
        size = GameConfig.BOARD_SIZE
        lines = []
        for row in range(size):
            row_cells = []
            for col in range(size):
                index = cell_to_index(row, col)
                cell = self.cells[index]
                row_cells.append(cell.value if cell is not None else str(index + 1))
            lines.append(" " + " | ".join(row_cells))
            if row < size - 1:
                lines.append("---+---+---")
        return "\n".join(lines)

    def print_board(self):
        """Print the board to console."""
        print()
        print(self.render())
        print(f"\nCurrent turn: {self.current_mark.value}")
