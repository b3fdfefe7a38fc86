"""rating values and match outcomes shared by the rating systems"""
from dataclasses import dataclass
from enum import Enum
from skillcore.utils.constants import GLICKO2_CENTER, TRUESKILL_MU, TRUESKILL_SIGMA


class Outcome(Enum):
    """Result of a match, from the perspective of the first player."""

    WIN = 1.0
    DRAW = 0.5
    LOSS = 0.0

    @property
    def score(self) -> float:
        """actual score used by the expected score comparison"""
        return self.value

    def opposite(self) -> 'Outcome':
        """the same result seen from the other side"""
        return Outcome(1.0 - self.value)


@dataclass(frozen=True)
class Glicko2Rating:
    """
    A Glicko 2 rating on the familiar 1500 scale.

    Attributes:
        mean (float): skill estimate.
        deviation (float): rating deviation, shrinks with games played and grows with inactivity.
        volatility (float): expected fluctuation of the true skill over a rating period.
    """

    mean: float = GLICKO2_CENTER
    deviation: float = 350.0
    volatility: float = 0.06


@dataclass(frozen=True)
class TrueSkillRating:
    """
    A TrueSkill rating.

    Attributes:
        mean (float): skill estimate, mu.
        uncertainty (float): standard deviation of the belief about the skill, sigma.
    """

    mean: float = TRUESKILL_MU
    uncertainty: float = TRUESKILL_SIGMA
