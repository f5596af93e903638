"""
Session scores for the TicTacToe engine.

The controller never touches the scores. A GameSession listens on the
controller's on_game_over callback and updates its ScoreBoard from there.
"""

from typing import Callable, Dict, Optional
from dataclasses import dataclass, field

from .board_state import Mark
from .game_controller import GameController
from .win_checker import Outcome, OutcomeKind


@dataclass
class ScoreBoard:
    """
    Running totals for one session.

    The streak counts consecutive wins by the same mark. A draw, or a win
    by the other mark, ends it.
    """
    wins: Dict[Mark, int] = field(default_factory=lambda: {Mark.X: 0, Mark.O: 0})
    draws: int = 0
    streak: int = 0
    streak_mark: Optional[Mark] = None

    @property
    def games_played(self) -> int:
        return sum(self.wins.values()) + self.draws

    def record(self, outcome: Outcome):
        """
        Add a finished game.

        Args:
            outcome: Terminal outcome. In-progress outcomes are ignored.
        """
        if outcome.kind == OutcomeKind.WIN:
            self.wins[outcome.winner] += 1
            if self.streak_mark == outcome.winner:
                self.streak += 1
            else:
                self.streak_mark = outcome.winner
                self.streak = 1
        elif outcome.kind == OutcomeKind.DRAW:
            self.draws += 1
            self.streak = 0
            self.streak_mark = None

    def reset(self):
        self.wins = {Mark.X: 0, Mark.O: 0}
        self.draws = 0
        self.streak = 0
        self.streak_mark = None

    def summary(self) -> str:
        text = (f"X: {self.wins[Mark.X]}  O: {self.wins[Mark.O]}  "
                f"Draws: {self.draws}")
        if self.streak_mark is not None:
            text += f"  Streak: {self.streak_mark.value} x{self.streak}"
        return text


class GameSession:
    """
    A controller plus the scores kept across its games.
    """

    def __init__(
        self,
        mode=None,
        difficulty=None,
        on_board_changed: Optional[Callable] = None,
        on_game_over: Optional[Callable[[Outcome], None]] = None,
        rng=None
    ):
        """
        Args:
            mode: GameMode or name, passed to the controller.
            difficulty: Difficulty or name, passed to the controller.
            on_board_changed: Forwarded to the controller.
            on_game_over: Called after the scores have been updated.
        """
        self.scores = ScoreBoard()
        self._host_game_over = on_game_over
        self.controller = GameController(
            on_board_changed=on_board_changed,
            on_game_over=self._handle_game_over,
            mode=mode,
            difficulty=difficulty,
            rng=rng
        )

    def _handle_game_over(self, outcome: Outcome):
        self.scores.record(outcome)
        if self._host_game_over is not None:
            self._host_game_over(outcome)

    def new_round(self):
        """Start the next game, keeping scores."""
        self.controller.reset_game()
