"""Forward simulation of putts from fitted parameters.

Because the angle and distance models are generative, we can roll putts
from any distance using the inferred spreads, including the follow-up putts
when the first one misses.
"""

import arviz as az
import numpy as np
import xarray as xr

from golf_putting.config import DEFAULT_GEOMETRY, PuttingGeometry


def _posterior(parameters) -> xr.Dataset:
    return parameters if isinstance(parameters, xr.Dataset) else parameters.posterior


def simulate_from_distance(
    parameters,
    distance_to_hole,
    trials=100,
    geometry: PuttingGeometry = DEFAULT_GEOMETRY,
    rng=None,
):
    """Final positions of ``trials`` single putts using posterior-mean spreads.

    Returns ``(x, y, made_it)`` with the hole at the origin and the golfer
    standing at ``(distance_to_hole, 0)`` aiming through the origin, so
    ``x`` is measured along the line of the putt from the golfer.
    """
    rng = np.random.default_rng(rng)
    parameters = _posterior(parameters)
    if "sigma_angle" not in parameters:
        raise ValueError("Simulation needs a model with a sigma_angle parameter.")

    sigma_angle = parameters["sigma_angle"].mean().item()
    theta = rng.normal(0, sigma_angle, size=trials)
    if "sigma_distance" in parameters:
        sigma_distance = parameters["sigma_distance"].mean().item()
        distance = rng.normal(
            distance_to_hole + geometry.overshot,
            (distance_to_hole + geometry.overshot) * sigma_distance,
            size=trials,
        )
    else:
        distance = np.full(trials, distance_to_hole + geometry.overshot)

    x = distance * np.cos(theta)
    y = distance * np.sin(theta)
    max_angle = np.arcsin(
        min(geometry.threshold_angle_distance / distance_to_hole, 1.0)
    )
    made_it = (
        (np.abs(theta) < max_angle)
        & (x > distance_to_hole)
        & (x < distance_to_hole + geometry.distance_tolerance)
    )
    return x, y, made_it


def expected_num_putts(
    trace,
    distance_to_hole,
    trials=100_000,
    geometry: PuttingGeometry = DEFAULT_GEOMETRY,
    rng=None,
):
    """Fraction of holes finished in 1, 2, 3, ... putts.

    Each trial draws one set of parameters from the posterior and keeps
    putting from wherever the ball stopped until it drops.
    """
    rng = np.random.default_rng(rng)
    distance_to_hole = distance_to_hole * np.ones(trials)

    combined_trace = az.extract(trace)
    if "sigma_angle" not in combined_trace:
        raise ValueError("Simulation needs a model with a sigma_angle parameter.")
    n_samples = combined_trace.sizes["sample"]

    idxs = rng.integers(0, n_samples, trials)
    sigma_angle = combined_trace["sigma_angle"].values[idxs]
    if "sigma_distance" in combined_trace:
        sigma_distance = combined_trace["sigma_distance"].values[idxs]
    else:
        sigma_distance = np.zeros(trials)

    n_shots = []
    while distance_to_hole.size > 0:
        theta = rng.normal(0, sigma_angle)
        distance = rng.normal(
            distance_to_hole + geometry.overshot,
            (distance_to_hole + geometry.overshot) * sigma_distance,
        )

        final_position = np.array([distance * np.cos(theta), distance * np.sin(theta)])

        made_it = np.abs(theta) < np.arcsin(
            geometry.threshold_angle_distance
            / distance_to_hole.clip(min=geometry.threshold_angle_distance)
        )
        made_it = (
            made_it
            & (final_position[0] > distance_to_hole)
            & (final_position[0] < distance_to_hole + geometry.distance_tolerance)
        )

        distance_to_hole = np.sqrt(
            (final_position[0] - distance_to_hole) ** 2 + final_position[1] ** 2
        )[~made_it].copy()
        sigma_angle = sigma_angle[~made_it]
        sigma_distance = sigma_distance[~made_it]
        n_shots.append(made_it.sum())
    return np.array(n_shots) / trials
