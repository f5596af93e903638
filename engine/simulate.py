"""
Headless strategy-vs-strategy games.
Used to measure how the difficulty levels compare.
"""

from typing import Optional
from dataclasses import dataclass

import numpy as np

from .board_state import BoardState, Mark
from .win_checker import WinChecker, OutcomeKind


@dataclass
class MatchStats:
    """Results of a batch of games between two strategies."""
    trials: int
    first_wins: int
    second_wins: int
    draws: int
    mean_length: float

    @property
    def first_win_rate(self) -> float:
        return self.first_wins / self.trials if self.trials else 0.0

    @property
    def second_win_rate(self) -> float:
        return self.second_wins / self.trials if self.trials else 0.0

    @property
    def draw_rate(self) -> float:
        return self.draws / self.trials if self.trials else 0.0

    def summary(self) -> str:
        return (f"{self.trials} games: first {self.first_wins} "
                f"({self.first_win_rate:.0%}), second {self.second_wins} "
                f"({self.second_win_rate:.0%}), draws {self.draws} "
                f"({self.draw_rate:.0%}), avg {self.mean_length:.1f} moves")


def play_game(first, second, win_checker: Optional[WinChecker] = None) -> BoardState:
    """
    Play one game between two strategies.

    Args:
        first: Strategy playing X (moves first).
        second: Strategy playing O.

    Returns:
        The final board.
    """
    win_checker = win_checker or WinChecker()
    players = {Mark.X: first, Mark.O: second}
    board = BoardState()

    while not win_checker.evaluate(board).is_terminal:
        mark = board.current_mark
        move = players[mark].select_move(board.clone(), mark, mark.opposite())
        if not board.apply(move, mark):
            raise RuntimeError(f"Strategy {players[mark]!r} chose illegal move {move}")

    return board


def run_trials(first, second, trials: int = 100) -> MatchStats:
    """
    Play many games and tally the results.

    Args:
        first: Strategy moving first in every game.
        second: Strategy moving second.
        trials: Number of games.

    Returns:
        MatchStats for the batch.
    """
    win_checker = WinChecker()

    # Columns: first wins, second wins, draws
    tally = np.zeros(3, dtype=np.int64)
    lengths = np.zeros(trials, dtype=np.int64)

    for i in range(trials):
        board = play_game(first, second, win_checker)
        outcome = win_checker.evaluate(board)
        lengths[i] = len(board.moves)

        if outcome.kind == OutcomeKind.DRAW:
            tally[2] += 1
        elif outcome.winner == Mark.X:
            tally[0] += 1
        else:
            tally[1] += 1

    return MatchStats(
        trials=trials,
        first_wins=int(tally[0]),
        second_wins=int(tally[1]),
        draws=int(tally[2]),
        mean_length=float(lengths.mean()) if trials else 0.0
    )
