"""
TicTacToe engine.
Board state, win/draw detection, and a computer opponent at three
difficulty levels.
"""

__version__ = "1.0.0"

from .config import GameConfig, Difficulty, GameMode
from .errors import EngineError, InvalidMoveError, InvalidConfigurationError
from .board_state import BoardState, Mark, Move
from .win_checker import WinChecker, Outcome, OutcomeKind, WINNING_LINES
from .move_validator import MoveValidator, ValidationResult
from .ai_player import RandomStrategy, HeuristicStrategy, MinimaxStrategy, strategy_for
from .game_controller import GameController, ControllerState, MoveResult
from .session import GameSession, ScoreBoard
