"""
Game configuration for the TicTacToe engine.
All the settings for the board, scoring, and the computer opponent.
"""

from enum import Enum

from .errors import InvalidConfigurationError


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = 1      # Random moves
    MEDIUM = 2    # Win, else block, else random
    HARD = 3      # Full minimax


class GameMode(Enum):
    """Who sits on the other side of the board."""
    VS_COMPUTER = "vs-computer"
    TWO_PLAYER = "two-player"


class GameConfig:
    """
    Configuration class for engine settings.
    Change these values to tune the game!
    """

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid
    BOARD_SIZE = 3
    CELL_COUNT = BOARD_SIZE * BOARD_SIZE  # 9 cells, index = row*3 + col

    # ==================== SCORING ====================
    # Leaf scores for the minimax search (no depth discount)
    WIN_SCORE = 10
    LOSS_SCORE = -10
    DRAW_SCORE = 0

    # ==================== GAME SETTINGS ====================
    DEFAULT_MODE = GameMode.VS_COMPUTER
    DEFAULT_DIFFICULTY = Difficulty.HARD

    # Mark the human plays against the computer ("X" moves first)
    HUMAN_MARK = "X"

    # Per-turn countdown used by the host UI (seconds). On expiry the host
    # calls GameController.submit_forced_move().
    TURN_TIME_LIMIT_SECONDS = 10

    # ==================== AI SETTINGS ====================
    # Alpha-beta pruning never changes the chosen move, only the node count
    USE_PRUNING = True

    # Seed for the random strategies (None = fresh randomness each run)
    RANDOM_SEED = None

    # ==================== DEBUG SETTINGS ====================
    DEBUG_MODE = False


def parse_difficulty(value) -> Difficulty:
    """
    Turn a Difficulty or a difficulty name into a Difficulty.

    Args:
        value: Difficulty member or name such as "easy" / "HARD".

    Returns:
        The matching Difficulty.

    Raises:
        InvalidConfigurationError: If the value names no difficulty.
    """
    if isinstance(value, Difficulty):
        return value

    if isinstance(value, str):
        try:
            return Difficulty[value.strip().upper()]
        except KeyError:
            pass

    raise InvalidConfigurationError(f"Unknown difficulty: {value!r}")


def parse_mode(value) -> GameMode:
    """
    Turn a GameMode or a mode name into a GameMode.

    Accepts the enum value ("vs-computer") or the member name ("VS_COMPUTER"),
    case-insensitive.
    """
    if isinstance(value, GameMode):
        return value

    if isinstance(value, str):
        name = value.strip().lower()
        for mode in GameMode:
            if name in (mode.value, mode.name.lower()):
                return mode

    raise InvalidConfigurationError(f"Unknown game mode: {value!r}")
