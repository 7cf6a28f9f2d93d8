"""Closed-form success probabilities evaluated with NumPy.

These mirror the PyMC graphs in :mod:`golf_putting.models` and are used for
plotting guessed parameters, simulation and checking the models.
"""

import numpy as np
from scipy import special, stats

from golf_putting.config import DEFAULT_GEOMETRY, PuttingGeometry


def invlogit(x):
    return special.expit(x)


def p_logit(distance, a, b):
    return invlogit(a + b * np.asarray(distance, dtype=float))


def threshold_angle(distance, geometry: PuttingGeometry = DEFAULT_GEOMETRY):
    """Largest launch angle (radians) that still sends the ball into the cup.

    Putts from inside ``R - r`` cannot miss on angle, so the arcsine argument
    is clipped at one there.
    """
    distance = np.asarray(distance, dtype=float)
    ratio = geometry.threshold_angle_distance / distance
    return np.arcsin(np.clip(ratio, 0.0, 1.0))


def p_angle(distance, sigma_angle, geometry: PuttingGeometry = DEFAULT_GEOMETRY):
    distance = np.asarray(distance, dtype=float)
    p = 2 * stats.norm.cdf(threshold_angle(distance, geometry) / sigma_angle) - 1
    return np.where(distance <= geometry.threshold_angle_distance, 1.0, p)


def p_distance(
    distance,
    sigma_distance,
    overshot=None,
    distance_tolerance=None,
    geometry: PuttingGeometry = DEFAULT_GEOMETRY,
):
    """Probability the ball finishes between the hole and the tolerance."""
    overshot = geometry.overshot if overshot is None else overshot
    if distance_tolerance is None:
        distance_tolerance = geometry.distance_tolerance
    scale = (np.asarray(distance, dtype=float) + overshot) * sigma_distance
    return stats.norm.cdf((distance_tolerance - overshot) / scale) - stats.norm.cdf(
        -overshot / scale
    )


def p_angle_distance(
    distance,
    sigma_angle,
    sigma_distance,
    overshot=None,
    distance_tolerance=None,
    geometry: PuttingGeometry = DEFAULT_GEOMETRY,
):
    return p_angle(distance, sigma_angle, geometry) * p_distance(
        distance,
        sigma_distance,
        overshot=overshot,
        distance_tolerance=distance_tolerance,
        geometry=geometry,
    )


def radians_to_degrees(sigma_angle):
    return sigma_angle * 180 / np.pi


def degrees_to_radians(sigma_degrees):
    return sigma_degrees * np.pi / 180
