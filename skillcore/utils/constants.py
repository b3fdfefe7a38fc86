"""mathematical constants computed once here to avoid recomputation"""
import math

# general math constants
PI2 = math.pi**2.0
THREE_OVER_PI_SQUARED = 3.0 / PI2

# glicko 2 constants
GLICKO2_SCALE = 173.7178
GLICKO2_CENTER = 1500.0

# trueskill constants
TRUESKILL_MU = 25.0
TRUESKILL_SIGMA = TRUESKILL_MU / 3.0
TRUESKILL_BETA = TRUESKILL_SIGMA / 2.0
TRUESKILL_TAU = TRUESKILL_SIGMA / 100.0

# below this denominator the truncated gaussian corrections switch to their asymptotes
CDF_UNDERFLOW = 2.222758749e-162
