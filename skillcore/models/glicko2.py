"""
Glicko 2
paper: http://www.glicko.net/research/dpcmsv.pdf
example: http://www.glicko.net/glicko/glicko2.pdf

"""
import logging
import math
from skillcore.core.base import RatingSystem
from skillcore.core.config import Glicko2Config
from skillcore.core.errors import InvalidInputError, NumericDegenerateError
from skillcore.core.types import Glicko2Rating, Outcome
from skillcore.utils.math_utils import sigmoid_scalar
from skillcore.utils.constants import THREE_OVER_PI_SQUARED, GLICKO2_SCALE, GLICKO2_CENTER

logger = logging.getLogger(__name__)


class Glicko2(RatingSystem):
    """
    Implements the Glicko 2 rating system, designed by Mark Glickman.
    """

    rating_dim = 3
    rating_cls = Glicko2Rating
    config_cls = Glicko2Config

    def __init__(self, config: Glicko2Config = None):
        """Initializes the Glicko 2 rating system, the default config matches the paper."""
        super().__init__(config)
        self.tau = self.config.tau
        self.tau2 = self.config.tau**2.0
        self.epsilon = self.config.convergence_tolerance

    @staticmethod
    def g_scalar(phi):
        """this is DIFFERENT from g in regular Glicko"""
        return 1.0 / math.sqrt(1.0 + (THREE_OVER_PI_SQUARED * (phi**2.0)))

    @staticmethod
    def to_internal(rating: Glicko2Rating):
        """convert to the (mu, phi) scale the algorithm works on"""
        return (rating.mean - GLICKO2_CENTER) / GLICKO2_SCALE, rating.deviation / GLICKO2_SCALE

    @staticmethod
    def check_rating(rating):
        if not isinstance(rating, Glicko2Rating):
            raise InvalidInputError(f'expected a Glicko2Rating, got {rating!r}')
        values = (rating.mean, rating.deviation, rating.volatility)
        if not all(math.isfinite(value) for value in values) or rating.deviation <= 0 or rating.volatility <= 0:
            raise InvalidInputError(
                'Glicko2Rating needs finite values and a positive deviation and volatility',
                details={'rating': rating},
            )
        return rating

    def expected_score(self, player_one: Glicko2Rating, player_two: Glicko2Rating):
        """
        Expected score of each player, 1.0 being a certain win and 0.0 a certain loss.
        The uncertainty of both players flattens the prediction.

        Returns:
            tuple[float, float]: expected scores for (player_one, player_two), summing to 1.
        """
        self.check_rating(player_one)
        self.check_rating(player_two)
        mu_1, phi_1 = self.to_internal(player_one)
        mu_2, phi_2 = self.to_internal(player_two)
        combined_g = self.g_scalar(math.sqrt(phi_1**2.0 + phi_2**2.0))
        prob = sigmoid_scalar(combined_g * (mu_1 - mu_2))
        return prob, 1.0 - prob

    def decay_deviation(self, player: Glicko2Rating) -> Glicko2Rating:
        """called for a rating period without games to model the increase in variance over time"""
        self.check_rating(player)
        phi = player.deviation / GLICKO2_SCALE
        phi_star = math.sqrt(phi**2.0 + player.volatility**2.0)
        return Glicko2Rating(mean=player.mean, deviation=phi_star * GLICKO2_SCALE, volatility=player.volatility)

    def confidence_interval(self, player: Glicko2Rating, z: float = 1.96):
        """interval expected to hold the true skill, 95% with the default z"""
        self.check_rating(player)
        return player.mean - z * player.deviation, player.mean + z * player.deviation

    def f(self, x, delta2, phi2, v, a):
        ex = math.exp(x)
        phi2_v_ex = phi2 + v + ex
        num_1 = ex * (delta2 - phi2_v_ex)
        denom_1 = 2 * ((phi2_v_ex) ** 2.0)
        term_2 = (x - a) / self.tau2
        return (num_1 / denom_1) - term_2

    def get_sigma_prime(self, phi, delta, v, sigma):
        """
        Solves f(x) = 0 for the new volatility with the Illinois variant of regula falsi.

        The bracket starts at a = ln(sigma^2) and is widened in steps of tau until f changes sign.
        Hitting config.max_iterations ends the search with the current bracket.
        """
        delta2 = delta**2.0
        phi2 = phi**2.0
        A = a = math.log(sigma**2.0)
        if delta2 > (phi2 + v):
            B = math.log(delta2 - phi2 - v)
        else:
            k = 1
            while self.f(a - k * self.tau, delta2=delta2, phi2=phi2, v=v, a=a) < 0:
                k += 1
            B = a - k * self.tau

        f_A = self.f(A, delta2, phi2, v, a)
        f_B = self.f(B, delta2, phi2, v, a)
        iterations = 0
        while math.fabs(A - B) > self.epsilon:
            if iterations >= self.config.max_iterations:
                logger.warning(
                    'volatility search stopped after %d iterations with bracket width %g',
                    iterations,
                    math.fabs(A - B),
                )
                break
            C = A + ((A - B) * f_A) / (f_B - f_A)
            f_C = self.f(C, delta2, phi2, v, a)
            if not math.isfinite(f_C):
                raise NumericDegenerateError(
                    'volatility function is not finite inside the bracket', details={'A': A, 'B': B, 'C': C}
                )
            if (f_C * f_B) <= 0:
                A = B
                f_A = f_B
            else:
                f_A = f_A / 2.0
            B = C
            f_B = f_C
            iterations += 1
        logger.debug('volatility search finished after %d iterations', iterations)
        sigma_prime = math.exp(A / 2.0)
        return min(max(sigma_prime, self.config.min_volatility), self.config.max_volatility)

    def check_results(self, results):
        """validates every (opponent, outcome) pair of a rating period and returns them as a list"""
        try:
            games = list(results)
        except TypeError as e:
            raise InvalidInputError(f'results must be a sequence of games, got {results!r}') from e
        checked = []
        for game_idx, game in enumerate(games):
            if not isinstance(game, (tuple, list)) or len(game) != 2:
                raise InvalidInputError(
                    f'game {game_idx} must be an (opponent, outcome) pair, got {game!r}', details={'game': game_idx}
                )
            opponent, outcome = game
            self.check_rating(opponent)
            self.check_outcome(outcome)
            checked.append((opponent, outcome))
        return checked

    def rate(self, player: Glicko2Rating, results) -> Glicko2Rating:
        """
        Applies one rating period to a player.

        Parameters:
            player (Glicko2Rating): the player's rating before the period.
            results (list[tuple[Glicko2Rating, Outcome]]): every game of the period as
                (opponent rating before the period, outcome from the player's perspective).

        Returns:
            Glicko2Rating: the rating after the period. A period without games only increases the deviation.
        """
        self.check_rating(player)
        results = self.check_results(results)
        if not results:
            return self.decay_deviation(player)

        mu, phi = self.to_internal(player)
        info = 0.0
        improvement = 0.0
        for opponent, outcome in results:
            opp_mu, opp_phi = self.to_internal(opponent)
            g = self.g_scalar(opp_phi)
            prob = sigmoid_scalar(g * (mu - opp_mu))
            info += (g**2.0) * prob * (1.0 - prob)
            improvement += g * (outcome.score - prob)

        if info == 0.0:
            # every expected score saturated, the games carry no information
            logger.debug('rating period of %d games carries no information', len(results))
            return self.decay_deviation(player)

        v = 1.0 / info
        delta = v * improvement
        sigma_prime = self.get_sigma_prime(phi=phi, delta=delta, v=v, sigma=player.volatility)

        phi_star_squared = phi**2.0 + sigma_prime**2.0
        phi_prime = 1.0 / math.sqrt((1.0 / phi_star_squared) + (1.0 / v))
        mu_prime = mu + (phi_prime**2.0) * improvement

        return Glicko2Rating(
            mean=mu_prime * GLICKO2_SCALE + GLICKO2_CENTER,
            deviation=phi_prime * GLICKO2_SCALE,
            volatility=sigma_prime,
        )

    def rate_pair(self, player_one: Glicko2Rating, player_two: Glicko2Rating, outcome: Outcome):
        """treats a single game as a rating period of one game for each player"""
        self.check_outcome(outcome)
        new_one = self.rate(player_one, [(player_two, outcome)])
        new_two = self.rate(player_two, [(player_one, outcome.opposite())])
        return new_one, new_two
