"""
Game controller for the TicTacToe engine.

Owns the live board and runs the turn cycle:
1. Human submits a move
2. Move is validated and applied
3. Outcome is checked
4. In vs-computer mode the selected strategy replies
5. Repeat until someone wins or it's a draw

Hosts talk to it through start_game / submit_move / reset_game and
listen on the on_board_changed / on_game_over callbacks.
"""

import random
from enum import Enum
from typing import Callable, Optional, Tuple
from dataclasses import dataclass

from .ai_player import RandomStrategy, strategy_for
from .board_state import BoardState, Cell, Mark
from .config import GameConfig, GameMode, parse_difficulty, parse_mode
from .errors import InvalidMoveError, InvalidConfigurationError
from .move_validator import MoveValidator
from .win_checker import WinChecker, Outcome


class ControllerState(Enum):
    """Where the turn cycle is."""
    AWAITING_HUMAN_MOVE = "awaiting_human_move"
    COMPUTER_THINKING = "computer_thinking"
    GAME_OVER = "game_over"


@dataclass
class MoveResult:
    """What happened to a submitted move."""
    accepted: bool
    index: Optional[int] = None
    mark: Optional[Mark] = None
    error_message: Optional[str] = None
    outcome: Optional[Outcome] = None


BoardCallback = Callable[[Tuple[Cell, ...]], None]
GameOverCallback = Callable[[Outcome], None]


class GameController:
    """
    Main controller for one game session.

    The board belongs to the controller. Strategies only ever see a copy.
    """

    def __init__(
        self,
        on_board_changed: Optional[BoardCallback] = None,
        on_game_over: Optional[GameOverCallback] = None,
        mode=None,
        difficulty=None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the controller and start a game.

        Args:
            on_board_changed: Called with a board snapshot after every
                applied move.
            on_game_over: Called once with the final Outcome of each game.
            mode: GameMode or name (default: GameConfig.DEFAULT_MODE).
            difficulty: Difficulty or name (default:
                GameConfig.DEFAULT_DIFFICULTY).
            rng: Random source for the random parts of the AI.
        """
        self.on_board_changed = on_board_changed
        self.on_game_over = on_game_over
        self.rng = rng or random.Random(GameConfig.RANDOM_SEED)

        self.win_checker = WinChecker()
        self.validator = MoveValidator(self.win_checker)
        self.timeout_strategy = RandomStrategy(self.rng)

        try:
            self.human_mark = Mark(GameConfig.HUMAN_MARK)
        except ValueError:
            raise InvalidConfigurationError(
                f"Unknown human mark: {GameConfig.HUMAN_MARK!r}"
            ) from None
        self.computer_mark = self.human_mark.opposite()

        self.mode = None
        self.difficulty = None
        self.strategy = None
        self.last_computer_move: Optional[int] = None

        self._board = BoardState()
        self.state = ControllerState.AWAITING_HUMAN_MOVE

        self.start_game(
            GameConfig.DEFAULT_MODE if mode is None else mode,
            GameConfig.DEFAULT_DIFFICULTY if difficulty is None else difficulty
        )

    # ==================== INPUT ====================

    def start_game(self, mode, difficulty):
        """
        Start a new game with the given mode and difficulty.

        The difficulty stays fixed until the next start_game call.

        Raises:
            InvalidConfigurationError: Unknown mode or difficulty. The
                current game is left as it was.
        """
        mode = parse_mode(mode)
        difficulty = parse_difficulty(difficulty)

        self.mode = mode
        self.difficulty = difficulty
        if mode == GameMode.VS_COMPUTER:
            self.strategy = strategy_for(difficulty, self.rng)
        else:
            self.strategy = None

        if GameConfig.DEBUG_MODE:
            print(f"Starting game: mode={mode.value}, difficulty={difficulty.name}")

        self._new_game()

    def submit_move(self, index) -> MoveResult:
        """
        Play a human move.

        Args:
            index: Cell index (0-8).

        Returns:
            MoveResult. A rejected move changes nothing.
        """
        try:
            if self.state != ControllerState.AWAITING_HUMAN_MOVE:
                raise InvalidMoveError(
                    f"Not accepting moves while {self.state.value}", index=index
                )
            self.validator.ensure_valid(self._board, index)
        except InvalidMoveError as e:
            print(f"Move rejected: {e}")
            return MoveResult(accepted=False, index=index, error_message=str(e))

        self.last_computer_move = None
        mark = self._board.current_mark
        self._play(index, mark)

        if self.state == ControllerState.COMPUTER_THINKING:
            self._computer_move()

        return MoveResult(accepted=True, index=index, mark=mark, outcome=self.outcome)

    def submit_forced_move(self) -> MoveResult:
        """
        Play a random legal move for the human.

        Called by the host when the turn countdown runs out.
        """
        index = None
        if self.state == ControllerState.AWAITING_HUMAN_MOVE:
            index = self.timeout_strategy.select_move(self._board)
        return self.submit_move(index)

    def reset_game(self):
        """Throw away the current board and start over with the same settings."""
        self._new_game()

    # ==================== OUTPUT ====================

    @property
    def board(self) -> Tuple[Cell, ...]:
        """Snapshot of the live board."""
        return self._board.snapshot()

    @property
    def board_state(self) -> BoardState:
        """Copy of the live board."""
        return self._board.clone()

    @property
    def current_mark(self) -> Mark:
        return self._board.current_mark

    @property
    def outcome(self) -> Outcome:
        """Outcome of the live board, recomputed on every call."""
        return self.win_checker.evaluate(self._board)

    @property
    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        return self.outcome.line

    @property
    def is_game_over(self) -> bool:
        return self.state == ControllerState.GAME_OVER

    # ==================== TURN CYCLE ====================

    def _new_game(self):
        self._board = BoardState()
        self.last_computer_move = None
        self.state = self._next_state()

        # Computer opens when the human plays the second mark
        if self.state == ControllerState.COMPUTER_THINKING:
            self._computer_move()

    def _next_state(self) -> ControllerState:
        if self.mode == GameMode.VS_COMPUTER and self._board.current_mark == self.computer_mark:
            return ControllerState.COMPUTER_THINKING
        return ControllerState.AWAITING_HUMAN_MOVE

    def _computer_move(self) -> Outcome:
        move = self.strategy.select_move(
            self._board.clone(), self.computer_mark, self.human_mark
        )
        self.last_computer_move = move

        if GameConfig.DEBUG_MODE:
            print(f">>> Computer ({self.difficulty.name}) plays {move}")

        return self._play(move, self.computer_mark)

    def _play(self, index: int, mark: Mark) -> Outcome:
        self._board.apply(index, mark)

        # Next state is set before the callbacks run
        outcome = self.win_checker.evaluate(self._board)
        if outcome.is_terminal:
            self.state = ControllerState.GAME_OVER
        else:
            self.state = self._next_state()

        if self.on_board_changed is not None:
            self.on_board_changed(self._board.snapshot())

        if outcome.is_terminal:
            self._finish(outcome)
        return outcome

    def _finish(self, outcome: Outcome):
        if GameConfig.DEBUG_MODE:
            print(f"Game over: {outcome.describe()}")

        if self.on_game_over is not None:
            self.on_game_over(outcome)
