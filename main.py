"""
Console front end for the TicTacToe engine.

Play against the computer (or a friend) in the terminal:
- Type 1-9 to place your mark (cells are numbered left to right, top to bottom)
- Type 'r' to restart, 'q' to quit

Run with --simulate N to pit the HARD AI against a random player instead.
"""

import random

from engine.ai_player import MinimaxStrategy, RandomStrategy
from engine.config import GameConfig, Difficulty, GameMode
from engine.errors import InvalidConfigurationError
from engine.session import GameSession
from engine.simulate import run_trials


class ConsoleGame:
    """
    Terminal host for a GameSession.

    Game flow:
    1. Human types a cell number
    2. Engine applies it (and the computer replies in vs-computer mode)
    3. Board is printed
    4. On game over the result and scores are shown
    """

    def __init__(self, mode, difficulty, rng=None):
        self.session = GameSession(
            mode=mode,
            difficulty=difficulty,
            on_game_over=self._on_game_over,
            rng=rng
        )
        self.is_running = False

    @property
    def controller(self):
        return self.session.controller

    def start(self):
        """Start the game loop."""
        print("\n" + "="*60)
        print("   TicTacToe")
        print(f"   Mode: {self.controller.mode.value}")
        if self.controller.mode == GameMode.VS_COMPUTER:
            print(f"   Difficulty: {self.controller.difficulty.name}")
            print(f"   You play: {self.controller.human_mark.value}")
        print("="*60)
        print("Type 1-9 to play, 'r' to restart, 'q' to quit\n")

        self.is_running = True
        self._game_loop()

    def _game_loop(self):
        """Main game loop."""
        self._report_computer_move()
        self.controller.board_state.print_board()

        while self.is_running:
            try:
                text = input(f"{self.controller.current_mark.value} > ").strip().lower()
            except EOFError:
                break

            if text == "q":
                print("\nGame quit by user.")
                self.is_running = False
            elif text == "r":
                self._reset_game()
            elif self.controller.is_game_over:
                print("Game is over. Type 'r' to play again or 'q' to quit.")
            elif text.isdigit():
                self._process_human_move(int(text) - 1)
            else:
                print("Please type a number 1-9.")

    def _process_human_move(self, index: int):
        result = self.controller.submit_move(index)
        if not result.accepted:
            return

        if self.controller.is_game_over:
            return

        self._report_computer_move()
        self.controller.board_state.print_board()

    def _report_computer_move(self):
        if self.controller.last_computer_move is not None:
            print(f">>> Computer plays {self.controller.last_computer_move + 1}")

    def _on_game_over(self, outcome):
        """Show the final game result."""
        self._report_computer_move()
        print()
        print(self.controller.board_state.render())
        print("\n" + "="*60)
        print("   GAME OVER!")
        print("="*60)

        if outcome.winner is None:
            print("\nIt's a draw! Good game!")
        elif self.controller.mode == GameMode.TWO_PLAYER:
            print(f"\n{outcome.winner.value} wins!")
        elif outcome.winner == self.controller.human_mark:
            print("\nCongratulations! You won!")
        else:
            print("\nComputer wins! Better luck next time!")

        print(f"\nScores: {self.session.scores.summary()}")
        print("="*60 + "\n")

    def _reset_game(self):
        """Reset the game for a new round."""
        print("\nResetting game...")
        self.session.new_round()
        self._report_computer_move()
        self.controller.board_state.print_board()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in GameMode],
        default=GameConfig.DEFAULT_MODE.value,
        help="Play the computer or a second human"
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        default=GameConfig.DEFAULT_DIFFICULTY.name.lower(),
        help="Computer strength"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=GameConfig.RANDOM_SEED,
        help="Seed for the random parts of the AI"
    )
    parser.add_argument(
        "--simulate",
        type=int,
        metavar="N",
        help="Play N games of HARD AI vs random moves and print the results"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print AI diagnostics"
    )

    args = parser.parse_args()

    if args.debug:
        GameConfig.DEBUG_MODE = True

    rng = random.Random(args.seed)

    if args.simulate:
        stats = run_trials(MinimaxStrategy(), RandomStrategy(rng), args.simulate)
        print(f"HARD (X) vs EASY (O): {stats.summary()}")
        return

    try:
        game = ConsoleGame(args.mode, args.difficulty, rng=rng)
    except InvalidConfigurationError as e:
        print(f"ERROR: {e}")
        return

    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
