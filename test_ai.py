"""
Tests for the computer opponents and the headless match runner.

Run with pytest, or directly: python test_ai.py
"""

import random
import sys

import pytest

from engine.ai_player import (
    RandomStrategy, HeuristicStrategy, MinimaxStrategy, strategy_for
)
from engine.board_state import BoardState, Mark
from engine.config import Difficulty
from engine.simulate import play_game, run_trials
from engine.win_checker import WinChecker, OutcomeKind

from test_modules import reachable_boards


X, O, _ = Mark.X, Mark.O, None


class FixedStrategy:
    """Always answers with the same move."""

    def __init__(self, index):
        self.index = index
        self.calls = 0

    def select_move(self, board, self_mark=None, opponent_mark=None):
        self.calls += 1
        return self.index


# ==================== RANDOM (EASY) ====================

def test_random_only_returns_legal_moves():
    strategy = RandomStrategy(random.Random(1))
    board = BoardState.from_cells([X, _, O, _, X, _, O, _, _])
    legal = board.legal_moves()

    picks = {strategy.select_move(board) for _ in range(300)}
    assert picks <= set(legal)
    # Uniform sampling reaches every legal cell
    assert picks == set(legal)


def test_random_is_reproducible_with_seed():
    board = BoardState()
    first = [RandomStrategy(random.Random(42)).select_move(board) for _ in range(5)]
    second = [RandomStrategy(random.Random(42)).select_move(board) for _ in range(5)]
    assert first == second


def test_strategies_fail_on_full_board():
    board = BoardState.from_cells([X, O, X, X, O, O, O, X, X])
    for strategy in (RandomStrategy(), HeuristicStrategy(), MinimaxStrategy()):
        with pytest.raises(ValueError):
            strategy.select_move(board, X, O)


# ==================== HEURISTIC (MEDIUM) ====================

def test_heuristic_takes_winning_move():
    board = BoardState.from_cells([X, X, _, O, O, _, _, _, _])
    assert HeuristicStrategy().select_move(board, X, O) == 2


def test_heuristic_blocks_opponent():
    board = BoardState.from_cells([X, _, _, O, O, _, _, _, _])
    assert HeuristicStrategy().select_move(board, X, O) == 5


def test_heuristic_prefers_win_over_block():
    # O can block at 2 or win at 5; winning comes first
    board = BoardState.from_cells([X, X, _, O, O, _, X, _, _])
    assert HeuristicStrategy().select_move(board, O, X) == 5


def test_heuristic_lowest_index_on_ties():
    # X wins at 2 (row) or 6 (column)
    board = BoardState.from_cells([X, X, _, X, O, O, _, O, _])
    assert HeuristicStrategy().select_move(board, X, O) == 2


def test_heuristic_falls_back_to_random():
    fallback = FixedStrategy(8)
    strategy = HeuristicStrategy(random_strategy=fallback)
    board = BoardState.from_cells([X, _, _, _, O, _, _, _, _])

    assert strategy.select_move(board, X, O) == 8
    assert fallback.calls == 1


def test_heuristic_leaves_board_unchanged():
    board = BoardState.from_cells([X, _, _, O, O, _, _, _, _])
    before = list(board.cells)
    HeuristicStrategy().select_move(board, X, O)
    assert board.cells == before


def test_heuristic_misses_forks():
    # O to move. X threatens a fork at 2 (lines 0-1-2 and 2-5-8); HARD
    # stops it, MEDIUM only looks one move ahead and can let it through.
    board = BoardState.from_cells([X, _, _, _, O, _, _, _, X], O)
    hard_move = MinimaxStrategy().select_move(board, O, X)
    assert hard_move in (1, 3, 5, 7)

    medium = HeuristicStrategy(random_strategy=FixedStrategy(2))
    assert medium.select_move(board, O, X) == 2


# ==================== MINIMAX (HARD) ====================

def test_minimax_takes_winning_move():
    board = BoardState.from_cells([X, X, _, O, O, _, _, _, _])
    assert MinimaxStrategy().select_move(board, X, O) == 2


def test_minimax_blocks_opponent():
    board = BoardState.from_cells([X, _, _, O, O, _, _, _, X], X)
    # O threatens 5; X has no immediate win
    assert MinimaxStrategy().select_move(board, X, O) == 5


def test_minimax_empty_board_tie_break():
    # Every opening is a draw with best play, so the lowest index is chosen
    assert MinimaxStrategy().select_move(BoardState(), X, O) == 0
    assert MinimaxStrategy(use_pruning=False).select_move(BoardState(), X, O) == 0


def test_minimax_single_move():
    board = BoardState.from_cells([X, O, X, X, O, O, O, X, _])
    assert MinimaxStrategy().select_move(board) == 8


def test_minimax_leaves_board_unchanged():
    board = BoardState.from_cells([X, _, _, _, O, _, _, _, _])
    before = (list(board.cells), board.current_mark, list(board.moves))
    MinimaxStrategy().select_move(board, X, O)
    assert (board.cells, board.current_mark, board.moves) == before


def test_pruning_does_not_change_move():
    checker = WinChecker()
    rng = random.Random(3)
    positions = [
        board for board in reachable_boards()
        if len(board.moves) >= 3 and not checker.evaluate(board).is_terminal
    ]

    for board in rng.sample(positions, 150):
        mark = board.current_mark
        pruned = MinimaxStrategy(use_pruning=True).select_move(board, mark, mark.opposite())
        full = MinimaxStrategy(use_pruning=False).select_move(board, mark, mark.opposite())
        assert pruned == full, board.cells


def test_pruning_visits_fewer_positions():
    board = BoardState.from_cells([X, _, _, _, _, _, _, _, _])
    pruned = MinimaxStrategy(use_pruning=True)
    full = MinimaxStrategy(use_pruning=False)
    pruned.select_move(board, O, X)
    full.select_move(board, O, X)
    assert 0 < pruned.positions_evaluated < full.positions_evaluated


def test_minimax_vs_minimax_is_draw():
    board = play_game(MinimaxStrategy(), MinimaxStrategy())
    outcome = WinChecker().evaluate(board)
    assert outcome.kind == OutcomeKind.DRAW
    assert len(board.moves) == 9


def _never_loses(hard_mark):
    """Try every opponent move sequence against HARD; HARD must never lose."""
    checker = WinChecker()
    hard = MinimaxStrategy()
    stack = [BoardState()]
    games = 0

    while stack:
        board = stack.pop()
        outcome = checker.evaluate(board)
        if outcome.is_terminal:
            assert outcome.winner != hard_mark.opposite(), board.cells
            games += 1
            continue

        if board.current_mark == hard_mark:
            child = board.clone()
            child.apply(hard.select_move(board, hard_mark, hard_mark.opposite()))
            stack.append(child)
        else:
            for index in board.legal_moves():
                child = board.clone()
                child.apply(index)
                stack.append(child)

    return games


def test_minimax_never_loses_as_second():
    assert _never_loses(O) > 0


def test_minimax_never_loses_as_first():
    assert _never_loses(X) > 0


def test_strategy_for_difficulty():
    assert isinstance(strategy_for(Difficulty.EASY), RandomStrategy)
    assert isinstance(strategy_for(Difficulty.MEDIUM), HeuristicStrategy)
    assert isinstance(strategy_for(Difficulty.HARD), MinimaxStrategy)

    with pytest.raises(ValueError):
        strategy_for("nightmare")


def test_strategy_for_shares_rng():
    rng = random.Random(9)
    medium = strategy_for(Difficulty.MEDIUM, rng)
    assert medium.random_strategy.rng is rng


# ==================== SIMULATION ====================

def test_minimax_beats_random_when_first():
    stats = run_trials(MinimaxStrategy(), RandomStrategy(random.Random(7)), trials=60)
    assert stats.trials == 60
    assert stats.first_wins + stats.second_wins + stats.draws == 60
    assert stats.first_wins > 30
    assert stats.second_wins == 0
    assert stats.first_win_rate > 0.5


def test_heuristic_never_beats_minimax():
    stats = run_trials(
        HeuristicStrategy(RandomStrategy(random.Random(11))),
        MinimaxStrategy(),
        trials=30
    )
    assert stats.first_wins == 0


def test_match_stats_summary():
    stats = run_trials(MinimaxStrategy(), MinimaxStrategy(), trials=3)
    assert stats.draws == 3
    assert stats.draw_rate == 1.0
    assert stats.mean_length == 9.0
    assert "3 games" in stats.summary()


def test_play_game_rejects_illegal_strategy():
    with pytest.raises(RuntimeError):
        play_game(FixedStrategy(0), FixedStrategy(0))


if __name__ == "__main__":
    failed = 0
    for name, test in sorted(globals().items()):
        if name.startswith("test_") and callable(test):
            try:
                test()
                print(f"  {name}: ✓ PASS")
            except Exception as e:
                print(f"  {name}: ✗ FAIL ({e!r})")
                failed += 1
    sys.exit(1 if failed else 0)
