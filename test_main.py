"""
Tests for the console front end.

Run with pytest: python -m pytest test_main.py
"""

import random

from engine.board_state import Mark
from main import ConsoleGame


def test_computer_move_reported_before_game_over_banner(capsys):
    game = ConsoleGame("vs-computer", "hard", rng=random.Random(0))
    controller = game.controller

    # Corner, then opposite corner; HARD answers on an edge
    game._process_human_move(0)
    game._process_human_move(8)
    reply = controller.last_computer_move

    # Ignore the threat through the centre so the computer wins on its move
    wasted = next(i for i in controller.board_state.legal_moves() if i != 8 - reply)
    game._process_human_move(wasted)
    while not controller.is_game_over:
        game._process_human_move(controller.board_state.legal_moves()[0])

    assert controller.outcome.winner == Mark.O

    lines = capsys.readouterr().out.splitlines()
    banner = next(i for i, line in enumerate(lines) if "GAME OVER" in line)
    reports = [i for i, line in enumerate(lines) if line.startswith(">>> Computer plays")]

    assert reports
    assert reports[-1] < banner
    assert lines[reports[-1]] == f">>> Computer plays {controller.last_computer_move + 1}"
    assert "Computer wins!" in "\n".join(lines[banner:])
