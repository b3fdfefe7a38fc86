"""
example from: http://www.glicko.net/glicko/glicko2.pdf
"""
import logging
import pytest
from skillcore.core.config import Glicko2Config
from skillcore.core.errors import InvalidInputError
from skillcore.core.types import Glicko2Rating, Outcome
from skillcore.models.glicko2 import Glicko2


PLAYER = Glicko2Rating(mean=1500.0, deviation=200.0, volatility=0.06)
OPPONENTS = [
    Glicko2Rating(mean=1400.0, deviation=30.0),
    Glicko2Rating(mean=1550.0, deviation=100.0),
    Glicko2Rating(mean=1700.0, deviation=300.0),
]


def test_glicko2():
    model = Glicko2(Glicko2Config(tau=0.5))
    results = [(OPPONENTS[0], Outcome.WIN), (OPPONENTS[1], Outcome.LOSS), (OPPONENTS[2], Outcome.LOSS)]
    new_player = model.rate(PLAYER, results)
    # Mr. Glickman rounded at each step of the example so the paper's digits are only approximate
    assert new_player.mean == pytest.approx(1464.06, abs=0.02)
    assert new_player.deviation == pytest.approx(151.52, abs=0.01)
    assert new_player.volatility == pytest.approx(0.05999, abs=1e-5)


def test_single_opponent_win():
    model = Glicko2()
    new_player = model.rate(PLAYER, [(OPPONENTS[0], Outcome.WIN)])
    assert 0.0599 <= new_player.volatility <= 0.0601
    assert 62.0 < new_player.mean - PLAYER.mean < 65.0
    assert 0.0 < new_player.deviation < PLAYER.deviation


def test_empty_period_only_inflates_deviation():
    model = Glicko2()
    new_player = model.rate(PLAYER, [])
    assert new_player.mean == PLAYER.mean
    assert new_player.volatility == PLAYER.volatility
    assert new_player.deviation > PLAYER.deviation
    assert new_player == model.decay_deviation(PLAYER)


def test_rate_pair_symmetric():
    model = Glicko2()
    player_one, player_two = model.new_rating(), model.new_rating()
    new_one, new_two = model.rate_pair(player_one, player_two, Outcome.WIN)
    assert new_one.mean - 1500.0 == pytest.approx(1500.0 - new_two.mean)
    assert new_one.mean > 1500.0
    assert new_one.deviation == pytest.approx(new_two.deviation)

    drawn_one, drawn_two = model.rate_pair(player_one, player_two, Outcome.DRAW)
    assert drawn_one.mean == pytest.approx(1500.0)
    assert drawn_two.mean == pytest.approx(1500.0)


def test_rate_pair_uses_pre_match_ratings():
    model = Glicko2()
    new_one, new_two = model.rate_pair(PLAYER, OPPONENTS[0], Outcome.LOSS)
    assert new_one == model.rate(PLAYER, [(OPPONENTS[0], Outcome.LOSS)])
    assert new_two == model.rate(OPPONENTS[0], [(PLAYER, Outcome.WIN)])


def test_expected_score():
    model = Glicko2()
    even = model.expected_score(model.new_rating(), model.new_rating())
    assert even == pytest.approx((0.5, 0.5))

    favourite, underdog = model.expected_score(OPPONENTS[2], OPPONENTS[0])
    assert favourite > 0.5 > underdog
    assert favourite + underdog == pytest.approx(1.0)
    assert model.expected_score(OPPONENTS[2], OPPONENTS[0]) == (favourite, underdog)


@pytest.mark.parametrize('outcome', [Outcome.WIN, Outcome.DRAW, Outcome.LOSS])
def test_volatility_stays_in_band(outcome):
    config = Glicko2Config(min_volatility=0.05, max_volatility=0.07)
    model = Glicko2(config)
    underdog = Glicko2Rating(mean=1000.0, deviation=50.0, volatility=0.06)
    favourite = Glicko2Rating(mean=2400.0, deviation=50.0, volatility=0.06)
    for _ in range(20):
        underdog, favourite = model.rate_pair(underdog, favourite, outcome)
        assert config.min_volatility <= underdog.volatility <= config.max_volatility
        assert config.min_volatility <= favourite.volatility <= config.max_volatility
        assert underdog.deviation > 0.0
        assert favourite.deviation > 0.0


def test_iteration_cap_counts_as_convergence(caplog):
    model = Glicko2(Glicko2Config(max_iterations=1))
    results = [(OPPONENTS[0], Outcome.WIN), (OPPONENTS[1], Outcome.LOSS), (OPPONENTS[2], Outcome.LOSS)]
    with caplog.at_level(logging.WARNING, logger='skillcore.models.glicko2'):
        new_player = model.rate(PLAYER, results)
    assert 'volatility search stopped' in caplog.text
    assert model.config.min_volatility <= new_player.volatility <= model.config.max_volatility
    assert new_player.mean < PLAYER.mean


def test_confidence_interval():
    low, high = Glicko2().confidence_interval(PLAYER)
    assert low == pytest.approx(1500.0 - 392.0)
    assert high == pytest.approx(1500.0 + 392.0)


def test_invalid_input():
    model = Glicko2()
    with pytest.raises(InvalidInputError):
        model.rate(PLAYER, [(OPPONENTS[0], 1.0)])
    with pytest.raises(InvalidInputError):
        model.rate(Glicko2Rating(deviation=0.0), [(OPPONENTS[0], Outcome.WIN)])
    with pytest.raises(InvalidInputError):
        Glicko2Config(tau=0.0)
    with pytest.raises(InvalidInputError):
        Glicko2Config(min_volatility=0.1, max_volatility=0.05)
    with pytest.raises(ValueError):
        Glicko2(config='default')


@pytest.mark.parametrize(
    'results',
    [
        [OPPONENTS[0]],
        [(OPPONENTS[0],)],
        [(OPPONENTS[0], Outcome.WIN, 1.0)],
        [None],
        [('1400', Outcome.WIN)],
        None,
    ],
)
def test_malformed_results(results):
    with pytest.raises(InvalidInputError):
        Glicko2().rate(PLAYER, results)


def test_results_may_be_any_iterable():
    expected = Glicko2().rate(PLAYER, [(OPPONENTS[0], Outcome.WIN)])
    assert Glicko2().rate(PLAYER, iter([(OPPONENTS[0], Outcome.WIN)])) == expected


@pytest.mark.parametrize('max_iterations', [2.5, 100.0, True, '100', 0])
def test_max_iterations_must_be_a_positive_integer(max_iterations):
    with pytest.raises(InvalidInputError):
        Glicko2Config(max_iterations=max_iterations)
