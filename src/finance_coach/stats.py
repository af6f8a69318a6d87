"""
Statistics primitives shared by the analytics components.

Every function returns builtin floats and has a defined result for empty or
degenerate input, so callers never see NaN or infinity.
"""
import math

import numpy as np

EPSILON = 1e-9


def mean(xs):
    """Arithmetic mean; 0 for an empty sequence."""
    values = np.asarray(list(xs), dtype=float)
    if values.size == 0:
        return 0.0
    return float(np.mean(values))


def variance(xs):
    """Sample variance (N-1 denominator); 0 when there are fewer than 2 values."""
    values = np.asarray(list(xs), dtype=float)
    if values.size <= 1:
        return 0.0
    return float(np.var(values, ddof=1))


def stddev(xs):
    return math.sqrt(variance(xs))


def coefficient_of_variation(xs):
    values = list(xs)
    return stddev(values) / max(mean(values), EPSILON)


def linear_regression(points):
    """
    Least-squares fit of y = slope * x + intercept.

    Args:
        points: iterable of (x, y) pairs

    Returns:
        (slope, intercept), or None when every x is the same (or there are no
        points) and the slope is not computable.
    """
    data = np.asarray(list(points), dtype=float)
    n = len(data)
    if n == 0:
        return None

    x, y = data[:, 0], data[:, 1]
    sum_x, sum_y = x.sum(), y.sum()
    sum_xy = (x * y).sum()
    sum_xx = (x * x).sum()

    denominator = n * sum_xx - sum_x * sum_x
    if abs(denominator) < EPSILON:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


def r_squared(points, slope, intercept):
    """Coefficient of determination, clamped to [0, 1]."""
    data = np.asarray(list(points), dtype=float)
    if len(data) == 0:
        return 0.0

    x, y = data[:, 0], data[:, 1]
    ss_tot = float(((y - y.mean()) ** 2).sum())
    ss_res = float(((y - (slope * x + intercept)) ** 2).sum())

    # SStot is floored at 1 so a flat series cannot divide by zero
    score = 1 - ss_res / max(ss_tot, 1.0)
    return max(0.0, min(1.0, score))
