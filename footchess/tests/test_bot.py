"""
Tests for bot move selection and legality.

Tests:
- Bot selects legal moves on every tier
- No move when the side is stuck
- Difficulty ladder ordering
- Personality affects scoring
"""

import random

import pytest

from ..bots import FirstLegalPolicy, FootballBot, RandomPolicy, pick_bot_move
from ..bots.difficulty import PROFILES, Difficulty, get_profile
from ..bots.evaluator import HeuristicEvaluator, defensive_threat, forward_progress
from ..bots.personality import DEFENSIVE, MODERATE, OFFENSIVE, STYLES, choose_style, get_style
from ..engine_core.action import Move
from ..engine_core.action_generator import legal_moves
from ..engine_core.reducer import apply_move
from ..engine_core.state import PieceType, Position, Side
from ..engine_core.validator import validate_move
from ..session import GameLoop
from .conftest import place


class TestBotMoveLegality:
    """Tests that bots only select legal moves."""

    @pytest.mark.parametrize("difficulty", ["easy", "medium", "hard", "pro"])
    def test_bot_move_validates(self, initial_state, difficulty):
        """Every tier returns a move that validates for its side."""
        move = pick_bot_move(initial_state, Side.HOME, difficulty, rng=random.Random(1))
        assert move is not None
        assert move.side == Side.HOME
        assert validate_move(initial_state, move).valid

    def test_bot_move_for_side_not_on_move(self, initial_state):
        """The bot can be asked for the side not currently on move."""
        move = pick_bot_move(initial_state, Side.AWAY, "medium", rng=random.Random(2))
        assert validate_move(initial_state, move, skip_turn_check=True).valid

    def test_random_policy_selects_legal(self, initial_state):
        legal = legal_moves(initial_state, Side.HOME)
        policy = RandomPolicy(seed=42)
        for _ in range(10):
            assert policy.select_move(initial_state, legal).move in legal

    def test_first_legal_policy(self, initial_state):
        legal = legal_moves(initial_state, Side.HOME)
        assert FirstLegalPolicy().select_move(initial_state, legal).move == legal[0]

    def test_bot_through_several_turns(self, initial_state):
        """Bot moves keep validating as the position changes."""
        rng = random.Random(5)
        state = initial_state
        for _ in range(12):
            move = pick_bot_move(state, state.turn, "easy", rng=rng)
            assert validate_move(state, move).valid
            state = apply_move(state, move).next_state


class TestNoLegalMove:
    """Stuck sides get no move."""

    def test_no_pieces(self, empty_state):
        assert pick_bot_move(empty_state, Side.HOME, "hard") is None

    def test_only_opponent_has_pieces(self, empty_state):
        state = place(empty_state, 5, 5, PieceType.FORWARD, Side.AWAY)
        assert pick_bot_move(state, Side.HOME, "easy", rng=random.Random(0)) is None
        assert pick_bot_move(state, Side.AWAY, "easy", rng=random.Random(0)) is not None

    def test_policy_rejects_empty_list(self, initial_state):
        with pytest.raises(ValueError):
            FootballBot(side=Side.HOME, difficulty="hard").select_move(initial_state, [])


class TestBotStrength:
    """Stronger tiers take obvious chances."""

    @pytest.fixture
    def goal_chance(self, empty_state):
        state = place(empty_state, 2, 3, PieceType.FLANKER, Side.HOME)
        state = place(state, 6, 6, PieceType.DEFENDER, Side.HOME)
        return place(state, 8, 0, PieceType.DEFENDER, Side.AWAY)

    @pytest.mark.parametrize("difficulty", ["medium", "hard", "pro"])
    def test_takes_the_goal(self, goal_chance, difficulty):
        move = pick_bot_move(goal_chance, Side.HOME, difficulty, rng=random.Random(3))
        assert move == Move.of(Side.HOME, (2, 3), (0, 3))

    def test_hard_is_deterministic(self, initial_state):
        first = pick_bot_move(initial_state, Side.HOME, "hard", rng=random.Random(1))
        second = pick_bot_move(initial_state, Side.HOME, "hard", rng=random.Random(99))
        assert first == second

    def test_decision_details(self, goal_chance):
        bot = FootballBot(side=Side.HOME, difficulty="hard")
        decision = bot.select_move(goal_chance, legal_moves(goal_chance, Side.HOME))
        assert "goal" in decision.evaluation_details
        assert decision.explanation.startswith("Scores a goal")
        assert decision.confidence == 1.0
        assert decision.evaluated_moves == len(legal_moves(goal_chance, Side.HOME))

    def test_pro_records_followup(self, initial_state):
        bot = FootballBot(side=Side.HOME, difficulty="pro")
        decision = bot.select_move(initial_state, legal_moves(initial_state, Side.HOME))
        assert "followup" in decision.evaluation_details


class TestDifficultyLadder:
    """Tiers are ordered."""

    def test_labels(self):
        assert [d.value for d in Difficulty] == ["easy", "medium", "hard", "pro"]
        assert Difficulty.parse("HARD") == Difficulty.HARD
        assert Difficulty.PRO.rank > Difficulty.EASY.rank

    def test_unknown_label(self):
        with pytest.raises(ValueError):
            Difficulty.parse("impossible")
        with pytest.raises(ValueError):
            FootballBot(side=Side.HOME, difficulty="impossible")

    def test_noise_never_increases(self):
        tiers = [PROFILES[d] for d in Difficulty]
        for lower, higher in zip(tiers, tiers[1:]):
            assert higher.noise <= lower.noise
            assert higher.top_k <= lower.top_k
            assert higher.lookahead_weight >= lower.lookahead_weight
            assert higher.threat_weight >= lower.threat_weight

    def test_only_easy_skips_lookahead(self):
        assert not get_profile("easy").uses_lookahead
        assert get_profile("medium").uses_lookahead
        assert get_profile("hard").deterministic
        assert get_profile("pro").beam_width > 0


class TestLadderInPlay:
    """Stronger tiers beat weaker ones over several seeded matches."""

    GAMES = 6

    def play(self, home: str, away: str, seed: int) -> dict:
        rng = random.Random(seed)
        tally = {Side.HOME: 0, Side.AWAY: 0, None: 0}
        for _ in range(self.GAMES):
            loop = GameLoop(
                FootballBot(side=Side.HOME, difficulty=home, rng=rng),
                FootballBot(side=Side.AWAY, difficulty=away, rng=rng),
            )
            tally[loop.run().winner] += 1
        return tally

    @pytest.mark.parametrize("stronger, weaker", [("hard", "easy"), ("medium", "easy")])
    def test_stronger_wins_as_home(self, stronger, weaker):
        tally = self.play(stronger, weaker, seed=21)
        assert tally[Side.HOME] > self.GAMES // 2
        assert tally[Side.HOME] > tally[Side.AWAY]

    @pytest.mark.parametrize("stronger, weaker", [("hard", "easy"), ("medium", "easy")])
    def test_stronger_wins_as_away(self, stronger, weaker):
        tally = self.play(weaker, stronger, seed=22)
        assert tally[Side.AWAY] > self.GAMES // 2
        assert tally[Side.AWAY] > tally[Side.HOME]


class TestPersonality:
    """Styles scale the evaluator."""

    def test_known_styles(self):
        assert set(STYLES) == {"moderate", "defensive", "offensive", "tactical", "counterattack", "control"}
        assert get_style(None) is MODERATE
        assert get_style("Defensive") is DEFENSIVE

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            get_style("reckless")

    def test_choose_style(self):
        assert choose_style(random.Random(4)) in STYLES.values()

    def test_offensive_values_progress_more(self, initial_state):
        move = Move.of(Side.HOME, (9, 2), (5, 2))
        profile = get_profile("easy")
        offensive = HeuristicEvaluator(personality=OFFENSIVE).evaluate_move(initial_state, move, profile)
        defensive = HeuristicEvaluator(personality=DEFENSIVE).evaluate_move(initial_state, move, profile)
        assert offensive.feature_breakdown["progress"] > defensive.feature_breakdown["progress"]


class TestEvaluatorFeatures:
    """Standalone evaluation helpers."""

    def test_forward_progress(self):
        assert forward_progress(Position(9, 2), Position(5, 2), Side.HOME) == 4
        assert forward_progress(Position(2, 2), Position(5, 2), Side.AWAY) == 3
        assert forward_progress(Position(5, 2), Position(7, 2), Side.HOME) == -2

    def test_defensive_threat_uses_own_goal(self, empty_state):
        """Enemies near a side's own goal raise that side's threat."""
        state = place(empty_state, 10, 3, PieceType.FORWARD, Side.AWAY)
        assert defensive_threat(state, Side.HOME) > 0
        assert defensive_threat(state, Side.AWAY) == 0

    def test_evaluation_does_not_mutate(self, initial_state):
        evaluator = HeuristicEvaluator()
        evaluator.evaluate_move(initial_state, Move.of(Side.HOME, (9, 2), (5, 2)), get_profile("pro"))
        assert initial_state.history == []
        assert initial_state.board.get(Position(9, 2)) is not None
