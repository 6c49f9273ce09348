"""
Tests for the command-line interface.
"""

import sys

import pytest
from loguru import logger

from ..cli import main


@pytest.fixture(autouse=True)
def restore_logger():
    """main() swaps the loguru sink for one bound to the captured stderr."""
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestCLI:
    """Tests for the footchess command."""

    def test_selfplay(self, capsys):
        tally = main([
            "selfplay", "--home", "medium", "--away", "easy",
            "--games", "2", "--seed", "3", "--max-moves", "12",
        ])
        assert sum(tally.values()) == 2

        out = capsys.readouterr().out
        assert "Home medium (moderate) vs Away easy (moderate)" in out
        assert "Game 1:" in out
        assert "Home wins:" in out

    def test_unknown_difficulty(self, capsys):
        with pytest.raises(SystemExit):
            main(["selfplay", "--home", "legendary"])
        assert "Unknown difficulty" in capsys.readouterr().out

    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_max_moves_must_be_positive(self, capsys, value):
        with pytest.raises(SystemExit):
            main(["selfplay", "--games", "1", "--max-moves", value])
        assert "--max-moves must be at least 1" in capsys.readouterr().out

    def test_games_must_be_positive(self, capsys):
        with pytest.raises(SystemExit):
            main(["selfplay", "--games", "0"])
        assert "--games must be at least 1" in capsys.readouterr().out

    def test_board(self, capsys):
        main(["board"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == " 0 f d d . . d d f"
        assert lines[11] == "11 F D D . . D D F"
        assert len(lines) == 13

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
