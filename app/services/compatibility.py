"""Compatibility scoring between two profiles.

Weighted attribute agreement, in order of weight: fitness goal, workout type,
availability window, location. Each attribute earns its full weight on
agreement and nothing on disagreement. Goal / workout / availability may list
several comma-separated values; agreement is then the Jaccard overlap of the
two sets. When either side left an attribute blank it earns
``neutral_fraction`` of its weight, so sparse profiles are neither punished
nor rewarded.

``score`` is pure and symmetric. Weights are passed in (see ``ScoreWeights``);
``weights_from_settings`` builds them from configuration.
"""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.config import Settings
from app.core.constants import MULTI_VALUE_SEPARATOR


class ScoreWeights(BaseModel):
    """Relative attribute weights; only their proportions matter."""

    model_config = ConfigDict(frozen=True)

    goal: float = Field(40.0, ge=0)
    workout: float = Field(30.0, ge=0)
    availability: float = Field(20.0, ge=0)
    location: float = Field(10.0, ge=0)
    neutral_fraction: float = Field(0.5, ge=0, le=1)

    @model_validator(mode="after")
    def _require_positive_total(self) -> "ScoreWeights":
        if self.total <= 0:
            raise ValueError("At least one attribute weight must be positive.")
        return self

    @property
    def total(self) -> float:
        return self.goal + self.workout + self.availability + self.location


DEFAULT_WEIGHTS = ScoreWeights()


def weights_from_settings(settings: Settings) -> ScoreWeights:
    return ScoreWeights(
        goal=settings.match_weight_goal,
        workout=settings.match_weight_workout,
        availability=settings.match_weight_availability,
        location=settings.match_weight_location,
        neutral_fraction=settings.match_neutral_fraction,
    )


class MatchableProfile(Protocol):
    fitness_goal: str | None
    workout_type: str | None
    availability: str | None
    location: str | None


def _value_set(raw: str | None) -> frozenset[str]:
    """'Cardio, HIIT ' -> {'cardio', 'hiit'}; None or blank -> empty."""
    if not raw:
        return frozenset()
    return frozenset(
        part.strip().lower() for part in raw.split(MULTI_VALUE_SEPARATOR) if part.strip()
    )


def _location(raw: str | None) -> frozenset[str]:
    # Free text: compare whole, case- and whitespace-insensitive
    if not raw or not raw.strip():
        return frozenset()
    return frozenset({" ".join(raw.lower().split())})


def _signature(profile: MatchableProfile) -> tuple[frozenset[str], ...]:
    return (
        _value_set(profile.fitness_goal),
        _value_set(profile.workout_type),
        _value_set(profile.availability),
        _location(profile.location),
    )


def _agreement(a: frozenset[str], b: frozenset[str], neutral: float) -> float:
    if not a or not b:
        return neutral
    return len(a & b) / len(a | b)


def score(
    a: MatchableProfile,
    b: MatchableProfile,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    """Compatibility of two profiles as an integer in [0, 100]."""
    sig_a = _signature(a)
    sig_b = _signature(b)
    # Identical declarations (blanks included) are a perfect match
    if sig_a == sig_b:
        return 100

    attribute_weights = (weights.goal, weights.workout, weights.availability, weights.location)
    earned = sum(
        weight * _agreement(x, y, weights.neutral_fraction)
        for weight, x, y in zip(attribute_weights, sig_a, sig_b)
    )
    return max(0, min(100, round(100 * earned / weights.total)))
