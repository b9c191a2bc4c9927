"""Compatibility engine unit tests (pure, no database)."""

import itertools
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.services.compatibility import (
    DEFAULT_WEIGHTS,
    ScoreWeights,
    score,
    weights_from_settings,
)


def profile(goal=None, workout=None, availability=None, location=None):
    return SimpleNamespace(
        fitness_goal=goal,
        workout_type=workout,
        availability=availability,
        location=location,
    )


GOALS = [None, "lose-weight", "build-muscle", "lose-weight, maintain"]
WORKOUTS = [None, "cardio", "strength", "cardio, hiit"]
AVAILABILITY = [None, "morning", "night"]
LOCATIONS = [None, "Austin", "denver"]

SAMPLE = [
    profile(g, w, a, l)
    for g, w, a, l in itertools.product(GOALS, WORKOUTS, AVAILABILITY, LOCATIONS)
]


class TestScoreProperties:
    """Symmetry, bounds and identity over a spread of sparse and full profiles."""

    def test_symmetric(self):
        for a, b in itertools.combinations(SAMPLE[::3], 2):
            assert score(a, b) == score(b, a)

    def test_bounded(self):
        for a, b in itertools.combinations(SAMPLE[::3], 2):
            assert 0 <= score(a, b) <= 100

    def test_identity_is_100(self):
        for a in SAMPLE:
            assert score(a, a) == 100

    def test_identical_but_distinct_objects_score_100(self):
        assert score(profile("maintain", "yoga"), profile("maintain", "yoga")) == 100

    def test_returns_int(self):
        assert isinstance(score(profile("lose-weight"), profile("maintain")), int)


class TestScoreWeighting:

    def test_shared_attributes_beat_disjoint(self):
        """X and Y share goal/workout/availability; Z shares nothing with X."""
        x = profile("lose-weight", "cardio", "morning")
        y = profile("lose-weight", "cardio", "morning")
        z = profile("build-muscle", "strength", "night")

        assert score(x, y) > score(x, z)

    def test_fully_specified_disjoint_scores_lowest(self):
        a = profile("lose-weight", "cardio", "morning", "Austin")
        b = profile("build-muscle", "strength", "night", "Denver")

        assert score(a, b) == 0
        assert score(a, b) < score(a, a)

    def test_missing_attribute_is_neutral(self):
        """goal agrees (40), the other three are blank on one side (half weight each)."""
        a = profile("lose-weight")
        b = profile("lose-weight", "cardio", "morning", "Austin")

        assert score(a, b) == 70

    def test_missing_attribute_beats_disagreement(self):
        base = profile("lose-weight", "cardio", "morning")
        blank_workout = profile("lose-weight", None, "morning")
        other_workout = profile("lose-weight", "yoga", "morning")

        assert score(base, blank_workout) > score(base, other_workout)

    def test_goal_outweighs_workout(self):
        base = profile("lose-weight", "cardio", "morning", "Austin")
        same_goal = profile("lose-weight", "yoga", "night", "Denver")
        same_workout = profile("maintain", "cardio", "night", "Denver")

        assert score(base, same_goal) > score(base, same_workout)

    def test_multi_value_overlap_is_partial(self):
        """workout overlap is 1/2 (cardio of cardio+hiit): 40 + 15 + 20 + 10."""
        a = profile("lose-weight", "cardio, hiit", "morning", "Austin")
        b = profile("lose-weight", "cardio", "morning", "austin ")

        assert score(a, b) == 85

    def test_values_compare_case_insensitively(self):
        a = profile("Lose-Weight", "CARDIO", "Morning", "New  York")
        b = profile("lose-weight", "cardio", "morning", "new york")

        assert score(a, b) == 100


class TestScoreWeights:

    def test_defaults_order_goal_workout_availability_location(self):
        w = DEFAULT_WEIGHTS
        assert w.goal > w.workout > w.availability > w.location

    def test_injected_weights_change_the_result(self):
        a = profile("lose-weight", "cardio", "morning", "Austin")
        b = profile("build-muscle", "strength", "night", "Austin")
        location_only = ScoreWeights(goal=0, workout=0, availability=0, location=1)

        assert score(a, b) == 10
        assert score(a, b, location_only) == 100

    def test_zero_neutral_fraction(self):
        strict = ScoreWeights(neutral_fraction=0)
        a = profile("lose-weight")
        b = profile("lose-weight", "cardio")

        assert score(a, b, strict) == 40

    def test_all_zero_weights_rejected(self):
        with pytest.raises(ValidationError):
            ScoreWeights(goal=0, workout=0, availability=0, location=0)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            ScoreWeights(goal=-1)

    def test_neutral_fraction_bounded(self):
        with pytest.raises(ValidationError):
            ScoreWeights(neutral_fraction=1.5)

    def test_weights_from_settings(self):
        settings = Settings(
            match_weight_goal=1,
            match_weight_workout=2,
            match_weight_availability=3,
            match_weight_location=4,
            match_neutral_fraction=0.25,
        )
        w = weights_from_settings(settings)

        assert (w.goal, w.workout, w.availability, w.location) == (1, 2, 3, 4)
        assert w.neutral_fraction == 0.25
