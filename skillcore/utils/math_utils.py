"""math utility functions for rating systems"""
import math
import statistics
import numpy as np
from scipy.stats import norm
from skillcore.utils.constants import CDF_UNDERFLOW


def sigmoid_scalar(x):
    """no need to use numpy on scalars"""
    return 1.0 / (1.0 + math.exp(-x))


INV_SQRT_2 = 1.0 / math.sqrt(2.0)


def norm_cdf(x):
    """cdf of standard normal, erfc keeps precision far into the lower tail"""
    return 0.5 * math.erfc(-x * INV_SQRT_2)


STANDARD_NORMAL = statistics.NormalDist()


def norm_pdf(x):
    """pdf of standard normal"""
    return STANDARD_NORMAL.pdf(x)


def norm_ppf(p):
    """inverse cdf of standard normal"""
    return float(norm.ppf(p))


def draw_margin(draw_probability, beta, total_players):
    """
    Width of the draw zone in the performance difference distribution.

    Parameters:
        draw_probability (float): expected probability of a draw between two evenly matched sides.
        beta (float): per player performance standard deviation.
        total_players (int or np.ndarray): number of players across both sides of the comparison.
    """
    return norm_ppf((draw_probability + 1.0) / 2.0) * np.sqrt(total_players) * beta


def v_win(t, eps):
    """mean correction for a difference truncated to values above eps"""
    diff = t - eps
    cdf = norm_cdf(diff)
    if cdf > CDF_UNDERFLOW:
        return norm_pdf(diff) / cdf
    return -diff


def w_win(t, eps):
    """variance correction for a difference truncated to values above eps"""
    diff = t - eps
    if norm_cdf(diff) > CDF_UNDERFLOW:
        v = v_win(t, eps)
        return v * (v + diff)
    # an extreme upset, the truncation removes all of the variance
    return 1.0 if diff < 0.0 else 0.0


def v_draw(t, eps):
    """mean correction for a difference truncated to [-eps, eps]"""
    abs_t = math.fabs(t)  # the papers do NOT do this but ALL open source implementations DO...
    diff_a = eps - abs_t
    diff_b = -eps - abs_t
    shared_denom = norm_cdf(diff_a) - norm_cdf(diff_b)
    sign = math.copysign(1.0, t)
    if shared_denom < CDF_UNDERFLOW:
        return sign * diff_a
    return sign * (norm_pdf(diff_b) - norm_pdf(diff_a)) / shared_denom


def w_draw(t, eps):
    """variance correction for a difference truncated to [-eps, eps]"""
    abs_t = math.fabs(t)
    diff_a = eps - abs_t
    diff_b = -eps - abs_t
    shared_denom = norm_cdf(diff_a) - norm_cdf(diff_b)
    if shared_denom < CDF_UNDERFLOW:
        return 1.0
    v = v_draw(t, eps)
    w_num = (diff_a * norm_pdf(diff_a)) - (diff_b * norm_pdf(diff_b))
    return (w_num / shared_denom) + (v**2.0)


def v_and_w_win_vector(t, eps):
    """calculate v and w for a win in a vectorized fashion"""
    diff = t - eps
    v = np.empty_like(diff)
    w = np.empty_like(diff)
    denom = norm.cdf(diff)
    bad_mask = denom < CDF_UNDERFLOW
    good_mask = ~bad_mask
    v[bad_mask] = -1.0 * diff[bad_mask]
    w[bad_mask] = np.where(diff[bad_mask] < 0.0, 1.0, 0.0)
    v[good_mask] = norm.pdf(diff[good_mask]) / denom[good_mask]
    w[good_mask] = v[good_mask] * (v[good_mask] + diff[good_mask])
    return v, w


def v_and_w_draw_vector(t, eps):
    """calculate v and w for a draw in a vectorized fashion"""
    abs_t = np.abs(t)
    signs = np.where(t < 0.0, -1.0, 1.0)
    diff_a = eps - abs_t
    diff_b = -eps - abs_t

    pdf_a = norm.pdf(diff_a)
    pdf_b = norm.pdf(diff_b)
    shared_denom = norm.cdf(diff_a) - norm.cdf(diff_b)

    v = np.empty_like(abs_t)
    w = np.empty_like(abs_t)
    bad_mask = shared_denom < CDF_UNDERFLOW
    good_mask = ~bad_mask
    v[bad_mask] = diff_a[bad_mask]
    w[bad_mask] = 1.0
    v[good_mask] = (pdf_b[good_mask] - pdf_a[good_mask]) / shared_denom[good_mask]
    w_num = (diff_a[good_mask] * pdf_a[good_mask]) - (diff_b[good_mask] * pdf_b[good_mask])
    w[good_mask] = (w_num / shared_denom[good_mask]) + np.square(v[good_mask])
    return signs * v, w
