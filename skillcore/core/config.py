"""tunable constants for each rating system, validated once at construction"""
import numbers
from dataclasses import dataclass
from skillcore.core.errors import InvalidInputError
from skillcore.utils.constants import TRUESKILL_BETA, TRUESKILL_TAU


def _require_positive(config, *names):
    for name in names:
        value = getattr(config, name)
        if not value > 0:
            raise InvalidInputError(
                f'{type(config).__name__}.{name} must be positive, got {value}',
                details={'field': name, 'value': value},
            )


@dataclass(frozen=True)
class Glicko2Config:
    """
    Constants for the Glicko 2 rating system.

    Parameters:
        tau (float): system constant constraining the change in volatility over time.
                     Reasonable values are between 0.3 and 1.2. Defaults to 0.5.
        convergence_tolerance (float): width of the bracket at which the volatility search stops.
                                       Defaults to 1e-6.
        max_iterations (int): cap on the regula falsi iterations. Reaching it is treated as
                              convergence. Defaults to 10000.
        min_volatility (float): lower edge of the allowed volatility band. Defaults to 1e-4.
        max_volatility (float): upper edge of the allowed volatility band. Defaults to 1.0.
    """

    tau: float = 0.5
    convergence_tolerance: float = 1e-6
    max_iterations: int = 10_000
    min_volatility: float = 1e-4
    max_volatility: float = 1.0

    def __post_init__(self):
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, numbers.Integral):
            raise InvalidInputError(
                f'Glicko2Config.max_iterations must be an integer, got {self.max_iterations!r}',
                details={'field': 'max_iterations', 'value': self.max_iterations},
            )
        _require_positive(self, 'tau', 'convergence_tolerance', 'max_iterations', 'min_volatility')
        if self.max_volatility < self.min_volatility:
            raise InvalidInputError(
                f'max_volatility ({self.max_volatility}) is below min_volatility ({self.min_volatility})',
                details={'min_volatility': self.min_volatility, 'max_volatility': self.max_volatility},
            )


@dataclass(frozen=True)
class TrueSkillConfig:
    """
    Constants for the TrueSkill rating system.

    Parameters:
        beta (float): performance standard deviation of a single player in a single match.
                      Defaults to 25/6.
        tau (float): dynamics factor, added as variance to every prior so that skill may drift.
                     Defaults to 25/300.
        draw_probability (float): probability of a draw between evenly matched sides, sets the
                                  draw margin. Defaults to 0.1.
        min_uncertainty (float): floor applied to every posterior uncertainty. Defaults to 1e-4.
    """

    beta: float = TRUESKILL_BETA
    tau: float = TRUESKILL_TAU
    draw_probability: float = 0.1
    min_uncertainty: float = 1e-4

    def __post_init__(self):
        _require_positive(self, 'beta', 'tau', 'min_uncertainty')
        if not 0.0 <= self.draw_probability < 1.0:
            raise InvalidInputError(
                f'draw_probability must be in [0, 1), got {self.draw_probability}',
                details={'field': 'draw_probability', 'value': self.draw_probability},
            )
