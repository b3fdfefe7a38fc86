"""base class for rating systems"""
from abc import ABC
from skillcore.core.errors import InvalidInputError
from skillcore.core.types import Outcome


class RatingSystem(ABC):
    """
    Base class for rating systems. Each system is a set of pure functions of
    (prior ratings, outcome, configuration) bound to one immutable configuration.
    No state is carried between calls, so a single instance may be shared freely.

    Attributes:
        rating_dim (int): Number of values describing one competitor, 2 for (mean, deviation)
                          and 3 when a volatility is tracked as well.
        rating_cls (type): The rating value type produced and consumed by the system.
        config_cls (type): The configuration type the system accepts.
        config: The configuration in use.
    """

    rating_dim: int
    rating_cls: type
    config_cls: type

    def __init__(self, config=None):
        """
        Parameters:
            config (optional): An instance of config_cls. Defaults to config_cls() when omitted.
        """
        if config is None:
            config = self.config_cls()
        if not isinstance(config, self.config_cls):
            raise InvalidInputError(
                f'{type(self).__name__} expects a {self.config_cls.__name__}, got {type(config).__name__}'
            )
        self.config = config

    def new_rating(self, **overrides):
        """a fresh rating with the system defaults, any field may be overridden"""
        return self.rating_cls(**overrides)

    def rate(self, *args, **kwargs):
        """
        Computes posterior ratings from prior ratings and an observed result.
        The exact signature is specific to each rating system.
        """
        raise NotImplementedError

    def rate_pair(self, player_one, player_two, outcome: Outcome):
        """
        Rates a single game between two players.

        Parameters:
            player_one: rating of the first player.
            player_two: rating of the second player.
            outcome (Outcome): the result from the perspective of player_one.

        Returns:
            tuple: posterior ratings of (player_one, player_two).
        """
        raise NotImplementedError

    def expected_score(self, *args, **kwargs):
        """
        Predicts match results without changing anything.
        The exact signature is specific to each rating system.
        """
        raise NotImplementedError

    @staticmethod
    def check_outcome(outcome):
        if not isinstance(outcome, Outcome):
            raise InvalidInputError(f'expected an Outcome, got {outcome!r}')
        return outcome
