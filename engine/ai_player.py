"""
AI players for the TicTacToe engine.

Three strategies, one per difficulty:
- EASY:   RandomStrategy, a uniformly random legal move
- MEDIUM: HeuristicStrategy, win if possible, else block, else random
- HARD:   MinimaxStrategy, full game-tree search, never loses
"""

import random
from typing import Optional, List, Dict, Tuple

from .board_state import BoardState, Mark
from .config import GameConfig, Difficulty
from .win_checker import WinChecker, OutcomeKind


def _resolve_marks(
    board: BoardState,
    self_mark: Optional[Mark],
    opponent_mark: Optional[Mark]
):
    if self_mark is None:
        self_mark = board.current_mark
    if opponent_mark is None:
        opponent_mark = self_mark.opposite()
    return self_mark, opponent_mark


def _require_moves(board: BoardState) -> List[int]:
    legal = board.legal_moves()
    if not legal:
        raise ValueError("No legal moves left on the board")
    return legal


class RandomStrategy:
    """Picks any legal move with equal probability."""

    difficulty = Difficulty.EASY

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Random source. Defaults to one seeded from
                GameConfig.RANDOM_SEED.
        """
        self.rng = rng or random.Random(GameConfig.RANDOM_SEED)

    def select_move(
        self,
        board: BoardState,
        self_mark: Optional[Mark] = None,
        opponent_mark: Optional[Mark] = None
    ) -> int:
        return self.rng.choice(_require_moves(board))


class HeuristicStrategy:
    """
    One-ply lookahead.

    Takes an immediate win, otherwise blocks the opponent's immediate win,
    otherwise plays a random move. Forks are not seen.
    """

    difficulty = Difficulty.MEDIUM

    def __init__(
        self,
        random_strategy: Optional[RandomStrategy] = None,
        win_checker: Optional[WinChecker] = None
    ):
        self.random_strategy = random_strategy or RandomStrategy()
        self.win_checker = win_checker or WinChecker()

    def select_move(
        self,
        board: BoardState,
        self_mark: Optional[Mark] = None,
        opponent_mark: Optional[Mark] = None
    ) -> int:
        """
        Get a move for the current position.

        Args:
            board: Current board. Restored before returning.
            self_mark: Mark this strategy plays (default: mark to move).
            opponent_mark: The other mark.

        Returns:
            Cell index. Lowest index wins ties.
        """
        self_mark, opponent_mark = _resolve_marks(board, self_mark, opponent_mark)
        legal = _require_moves(board)

        # First priority: win immediately if possible
        for index in legal:
            if self._wins_with(board, index, self_mark):
                return index

        # Second priority: block the opponent's immediate win
        for index in legal:
            if self._wins_with(board, index, opponent_mark):
                return index

        return self.random_strategy.select_move(board, self_mark, opponent_mark)

    def _wins_with(self, board: BoardState, index: int, mark: Mark) -> bool:
        board.cells[index] = mark
        try:
            outcome = self.win_checker.evaluate(board)
        finally:
            board.cells[index] = None
        return outcome.winner == mark


class MinimaxStrategy:
    """
    An AI that plays TicTacToe using the Minimax algorithm.

    The AI will always play optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).
    """

    difficulty = Difficulty.HARD

    def __init__(
        self,
        use_pruning: Optional[bool] = None,
        win_checker: Optional[WinChecker] = None
    ):
        """
        Initialize the minimax player.

        Args:
            use_pruning: Enable alpha-beta pruning (default:
                GameConfig.USE_PRUNING). Same move either way.
            win_checker: Outcome evaluator to score leaves with.
        """
        self.use_pruning = GameConfig.USE_PRUNING if use_pruning is None else use_pruning
        self.win_checker = win_checker or WinChecker()

        # Keep track of how many positions we've evaluated (for debugging)
        self.positions_evaluated = 0

        # Search is deterministic, so a chosen move can be reused
        self._move_cache: Dict[Tuple, int] = {}

    def select_move(
        self,
        board: BoardState,
        self_mark: Optional[Mark] = None,
        opponent_mark: Optional[Mark] = None
    ) -> int:
        """
        Get the best move for the current position.

        Args:
            board: Current board. Never modified; the search runs on a clone.
            self_mark: Mark this strategy plays and maximizes for.
            opponent_mark: The minimizing mark.

        Returns:
            Cell index of the best move, lowest index on ties.
        """
        self.positions_evaluated = 0
        self_mark, opponent_mark = _resolve_marks(board, self_mark, opponent_mark)
        legal = _require_moves(board)

        # Special case: if only one move, just take it
        if len(legal) == 1:
            return legal[0]

        key = (tuple(board.cells), self_mark, opponent_mark)
        if key in self._move_cache:
            return self._move_cache[key]

        work = board.clone()
        cells = work.cells

        best_score = float('-inf')
        best_move = legal[0]

        for index in legal:
            cells[index] = self_mark
            score = self._minimax(
                work, self_mark, opponent_mark,
                is_maximizing=False,
                alpha=best_score,
                beta=float('inf')
            )
            cells[index] = None

            # Strictly greater keeps the lowest index on ties
            if score > best_score:
                best_score = score
                best_move = index

            if best_score >= GameConfig.WIN_SCORE:
                break

        if GameConfig.DEBUG_MODE:
            print(f"AI evaluated {self.positions_evaluated} positions. "
                  f"Best move: {best_move} (score: {best_score})")

        self._move_cache[key] = best_move
        return best_move

    def _minimax(
        self,
        board: BoardState,
        max_mark: Mark,
        min_mark: Mark,
        is_maximizing: bool,
        alpha: float,
        beta: float
    ) -> float:
        """
        Minimax algorithm with optional alpha-beta pruning.

        Args:
            board: Working board, restored before returning.
            max_mark: Mark whose wins score +WIN_SCORE.
            min_mark: Mark whose wins score LOSS_SCORE.
            is_maximizing: True if max_mark is to move.
            alpha: Best score the maximizer is assured of.
            beta: Best score the minimizer is assured of.

        Returns:
            The score of the position.
        """
        self.positions_evaluated += 1

        outcome = self.win_checker.evaluate(board)

        if outcome.kind == OutcomeKind.WIN:
            return GameConfig.WIN_SCORE if outcome.winner == max_mark else GameConfig.LOSS_SCORE
        if outcome.kind == OutcomeKind.DRAW:
            return GameConfig.DRAW_SCORE

        cells = board.cells
        mover = max_mark if is_maximizing else min_mark

        if is_maximizing:
            best = float('-inf')
            for index in board.legal_moves():
                cells[index] = mover
                score = self._minimax(board, max_mark, min_mark, False, alpha, beta)
                cells[index] = None
                best = max(best, score)
                if self.use_pruning:
                    alpha = max(alpha, best)
                    if beta <= alpha:
                        break  # Prune
            return best
        else:
            best = float('inf')
            for index in board.legal_moves():
                cells[index] = mover
                score = self._minimax(board, max_mark, min_mark, True, alpha, beta)
                cells[index] = None
                best = min(best, score)
                if self.use_pruning:
                    beta = min(beta, best)
                    if beta <= alpha:
                        break  # Prune
            return best


def strategy_for(difficulty, rng: Optional[random.Random] = None):
    """
    Build the strategy for a difficulty level.

    Args:
        difficulty: Difficulty member.
        rng: Random source shared by the random parts of the strategy.

    Returns:
        RandomStrategy, HeuristicStrategy or MinimaxStrategy.
    """
    if difficulty == Difficulty.EASY:
        return RandomStrategy(rng)
    if difficulty == Difficulty.MEDIUM:
        return HeuristicStrategy(RandomStrategy(rng))
    if difficulty == Difficulty.HARD:
        return MinimaxStrategy()

    raise ValueError(f"No strategy for difficulty {difficulty!r}")


# Quick test (python -m engine.ai_player)
if __name__ == "__main__":
    print("Testing AI players...")

    X, O = Mark.X, Mark.O

    # Test 1: every level takes a winning move when one is offered
    board = BoardState.from_cells([X, X, None, O, O, None, None, None, None])
    board.print_board()
    print("\nX can win with 2!")

    for ai in (HeuristicStrategy(), MinimaxStrategy()):
        move = ai.select_move(board, X, O)
        print(f"{ai.difficulty.name} plays: {move}")
        assert move == 2, f"Expected 2, got {move}"
    print("✓ AI correctly takes the win!")

    # Test 2: MEDIUM and HARD block
    board = BoardState.from_cells([X, None, None, O, O, None, None, None, None])
    board.print_board()
    print("\nO is about to win with 5!")

    for ai in (HeuristicStrategy(), MinimaxStrategy()):
        move = ai.select_move(board, X, O)
        print(f"{ai.difficulty.name} plays: {move}")
        assert move == 5, f"Expected 5, got {move}"
    print("✓ AI correctly blocks the win!")

    print("\nAI player test done!")
