"""TrueSkill"""
import logging
import math
import numbers
import numpy as np
from scipy.stats import norm
from skillcore.core.base import RatingSystem
from skillcore.core.config import TrueSkillConfig
from skillcore.core.errors import InvalidInputError, NumericDegenerateError
from skillcore.core.types import Outcome, TrueSkillRating
from skillcore.utils.math_utils import draw_margin, v_and_w_win_vector, v_and_w_draw_vector

logger = logging.getLogger(__name__)


class TrueSkill(RatingSystem):
    """
    the og TrueSkill rating system shoutout to Microsoft

    Matches are between two or more teams of one or more players. The factor graph of the
    ranking likelihood is not built explicitly: it reduces to per team sums of means and
    variances, and a truncated gaussian correction on every rank adjacent pair of teams.
    """

    rating_dim = 2
    rating_cls = TrueSkillRating
    config_cls = TrueSkillConfig

    def __init__(self, config: TrueSkillConfig = None):
        super().__init__(config)
        self.beta = self.config.beta
        self.beta_squared = self.config.beta**2.0
        self.tau_squared = self.config.tau**2.0

    @staticmethod
    def expose(rating: TrueSkillRating, k: float = 3.0) -> float:
        """conservative skill estimate used for leaderboards, mu - (k * sd)"""
        return rating.mean - k * rating.uncertainty

    def check_teams(self, teams, ranks=None, weights=None, min_teams=1):
        """raises InvalidInputError for anything the engine cannot rate"""
        if len(teams) < min_teams:
            raise InvalidInputError(f'at least {min_teams} team(s) required, got {len(teams)}')
        for team_idx, team in enumerate(teams):
            if len(team) == 0:
                raise InvalidInputError(f'team {team_idx} has no players', details={'team': team_idx})
            for rating in team:
                if not isinstance(rating, TrueSkillRating):
                    raise InvalidInputError(f'expected a TrueSkillRating, got {rating!r}', details={'team': team_idx})
                if not (math.isfinite(rating.mean) and math.isfinite(rating.uncertainty) and rating.uncertainty > 0):
                    raise InvalidInputError(
                        'TrueSkillRating needs a finite mean and a positive uncertainty',
                        details={'team': team_idx, 'rating': rating},
                    )
        if ranks is not None:
            if len(ranks) != len(teams):
                raise InvalidInputError(
                    f'got {len(ranks)} ranks for {len(teams)} teams', details={'ranks': len(ranks), 'teams': len(teams)}
                )
            for rank in ranks:
                if isinstance(rank, bool) or not isinstance(rank, numbers.Integral):
                    raise InvalidInputError(f'ranks must be integers, got {rank!r}')
        if weights is not None:
            if len(weights) != len(teams):
                raise InvalidInputError(f'got {len(weights)} weight groups for {len(teams)} teams')
            for team_idx, (team, team_weights) in enumerate(zip(teams, weights)):
                if len(team_weights) != len(team):
                    raise InvalidInputError(
                        f'team {team_idx} has {len(team)} players but {len(team_weights)} weights',
                        details={'team': team_idx},
                    )
                for weight in team_weights:
                    if not 0.0 <= weight <= 1.0:
                        raise InvalidInputError(
                            f'partial play weights must be in [0, 1], got {weight}', details={'team': team_idx}
                        )

    def get_team_stats(self, teams, weights, dynamics=True):
        """
        Aggregates each team into one performance distribution.

        Returns:
            tuple: (player mean arrays, player variance arrays, team means, team variances)
        """
        mus = [np.array([rating.mean for rating in team], dtype=np.float64) for team in teams]
        sigma2s = [np.square([rating.uncertainty for rating in team], dtype=np.float64) for team in teams]
        if dynamics:
            sigma2s = [team_sigma2s + self.tau_squared for team_sigma2s in sigma2s]
        team_mus = np.array([(w * m).sum() for w, m in zip(weights, mus)])
        team_sigma2s = np.array(
            [(np.square(w) * s).sum() + len(w) * self.beta_squared for w, s in zip(weights, sigma2s)]
        )
        return mus, sigma2s, team_mus, team_sigma2s

    def rate(self, teams, ranks, weights=None):
        """
        Rates a match between teams.

        Parameters:
            teams (list[list[TrueSkillRating]]): prior ratings, one list per team.
            ranks (list[int]): placement of each team, lower is better and equal ranks are ties.
            weights (list[list[float]], optional): share of the match each player took part in,
                                                   in [0, 1]. Defaults to full participation.

        Returns:
            list[list[TrueSkillRating]]: posterior ratings in the same shape as teams.
        """
        self.check_teams(teams, ranks, weights)
        if len(teams) == 1:
            return [list(team) for team in teams]
        if weights is None:
            weights = [[1.0] * len(team) for team in teams]
        weights = [np.asarray(team_weights, dtype=np.float64) for team_weights in weights]

        mus, sigma2s, team_mus, team_sigma2s = self.get_team_stats(teams, weights)
        team_sizes = np.array([len(team) for team in teams])
        ranks = np.asarray(ranks)

        order = np.argsort(ranks, kind='stable')
        upper, lower = order[:-1], order[1:]
        ties = ranks[upper] == ranks[lower]

        combined_sigma2s = team_sigma2s[upper] + team_sigma2s[lower]
        combined_devs = np.sqrt(combined_sigma2s)
        norm_diffs = (team_mus[upper] - team_mus[lower]) / combined_devs
        margins = draw_margin(self.config.draw_probability, self.beta, team_sizes[upper] + team_sizes[lower])
        eps = margins / combined_devs

        vs = np.empty_like(norm_diffs)
        ws = np.empty_like(norm_diffs)
        wins = ~ties
        vs[wins], ws[wins] = v_and_w_win_vector(norm_diffs[wins], eps[wins])
        vs[ties], ws[ties] = v_and_w_draw_vector(norm_diffs[ties], eps[ties])
        if not (np.all(np.isfinite(vs)) and np.all(np.isfinite(ws))):
            raise NumericDegenerateError('rank correction is not finite', details={'norm_diffs': norm_diffs.tolist()})
        logger.debug('draw margins %s, corrections v=%s w=%s', margins, vs, ws)

        mu_updates = [np.zeros_like(m) for m in mus]
        sigma2_multipliers = [np.ones_like(s) for s in sigma2s]
        for pair_idx, (team_1, team_2) in enumerate(zip(upper, lower)):
            for team_idx, sign in ((team_1, 1.0), (team_2, -1.0)):
                w, s2 = weights[team_idx], sigma2s[team_idx]
                mu_updates[team_idx] += sign * w * (s2 / combined_devs[pair_idx]) * vs[pair_idx]
                sigma2_multipliers[team_idx] *= 1.0 - np.square(w) * (s2 / combined_sigma2s[pair_idx]) * ws[pair_idx]

        new_teams = []
        for team_idx, team in enumerate(teams):
            new_mus = mus[team_idx] + mu_updates[team_idx]
            new_sigmas = np.maximum(np.sqrt(sigma2s[team_idx] * sigma2_multipliers[team_idx]), self.config.min_uncertainty)
            new_teams.append(
                [
                    rating if w == 0.0 else TrueSkillRating(mean=float(mu), uncertainty=float(sigma))
                    for rating, w, mu, sigma in zip(team, weights[team_idx], new_mus, new_sigmas)
                ]
            )
        return new_teams

    def rate_pair(self, player_one: TrueSkillRating, player_two: TrueSkillRating, outcome: Outcome):
        """1v1 convenience around rate, outcome is from the perspective of player_one"""
        self.check_outcome(outcome)
        ranks = {Outcome.WIN: [0, 1], Outcome.DRAW: [0, 0], Outcome.LOSS: [1, 0]}[outcome]
        (new_one,), (new_two,) = self.rate([[player_one], [player_two]], ranks)
        return new_one, new_two

    def expected_score(self, teams):
        """
        Probability of each team beating the others, averaged over all pairings.

        Returns:
            list[float]: one value per team in [0, 1], the values sum to 1. With two teams these
                         are the probabilities of each team winning the match.
        """
        self.check_teams(teams)
        num_teams = len(teams)
        if num_teams == 1:
            return [1.0]
        weights = [np.ones(len(team)) for team in teams]
        _, _, team_mus, team_sigma2s = self.get_team_stats(teams, weights, dynamics=False)
        mu_diffs = team_mus[:, None] - team_mus[None, :]
        combined_devs = np.sqrt(team_sigma2s[:, None] + team_sigma2s[None, :])
        probs = norm.cdf(mu_diffs / combined_devs)
        np.fill_diagonal(probs, 0.0)
        num_pairings = num_teams * (num_teams - 1) / 2.0
        return (probs.sum(axis=1) / num_pairings).tolist()

    def match_quality(self, teams, weights=None) -> float:
        """
        Draw probability of the match relative to the most balanced possible match,
        values near 1 mean an even matchup.

        Uses the matrix form from the TrueSkill paper so any number of teams is supported.
        """
        self.check_teams(teams, weights=weights, min_teams=2)
        if weights is None:
            weights = [[1.0] * len(team) for team in teams]
        flat_ratings = [rating for team in teams for rating in team]
        mean_matrix = np.array([rating.mean for rating in flat_ratings])
        variance_matrix = np.diag(np.square([rating.uncertainty for rating in flat_ratings]))

        # each column compares one team with the next, weighted by participation
        a_matrix = np.zeros((len(flat_ratings), len(teams) - 1))
        offsets = np.cumsum([0] + [len(team) for team in teams])
        for team_idx in range(len(teams) - 1):
            a_matrix[offsets[team_idx] : offsets[team_idx + 1], team_idx] = weights[team_idx]
            a_matrix[offsets[team_idx + 1] : offsets[team_idx + 2], team_idx] = -np.asarray(weights[team_idx + 1])

        ata = self.beta_squared * a_matrix.T @ a_matrix
        atsa = a_matrix.T @ variance_matrix @ a_matrix
        middle = ata + atsa
        start = mean_matrix @ a_matrix
        try:
            e_arg = -0.5 * start @ np.linalg.solve(middle, start)
        except np.linalg.LinAlgError as e:
            raise NumericDegenerateError('team comparison matrix is singular') from e
        s_arg = np.linalg.det(ata) / np.linalg.det(middle)
        return float(math.exp(e_arg) * math.sqrt(s_arg))
