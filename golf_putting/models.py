"""PyMC definitions of the putting models.

Every builder takes a putting table (see :mod:`golf_putting.data`) and
returns a :class:`pymc.Model` holding the data as ``pm.Data`` containers on a
``dist`` dimension and the success probability as the deterministic
``p_make``. Swapping the data with ``pm.set_data`` gives predictions at new
distances.
"""

from typing import Callable

import numpy as np
import pandas as pd
import pymc as pm
import pytensor
import pytensor.tensor as pt
from pytensor import function
from pytensor.compile import Function
from pytensor.tensor.variable import TensorVariable

from golf_putting.config import DEFAULT_GEOMETRY, PuttingGeometry

BERNOULLI_DATA = np.array([0, 1, 0, 0, 0, 0, 0, 0, 0, 1])


# Utility for standard normal CDF
def phi(x):
    return 0.5 + 0.5 * pt.erf(x / pt.sqrt(2.0))


def p_good_angle(distance, sigma_angle, geometry: PuttingGeometry):
    threshold = geometry.threshold_angle_distance
    angle = pt.arcsin(pt.clip(threshold / distance, 0.0, 1.0))
    # Inside R - r every putt on line drops.
    return pt.switch(pt.le(distance, threshold), 1.0, 2 * phi(angle / sigma_angle) - 1)


def p_good_distance(distance, sigma_distance, overshot, distance_tolerance):
    scale = (distance + overshot) * sigma_distance
    return phi((distance_tolerance - overshot) / scale) - phi(-overshot / scale)


def initialize_model(golf_data: pd.DataFrame) -> pm.Model:
    coords = {"dist": golf_data["distance"].values}
    with pm.Model(coords=coords) as model:
        pm.Data("distance", golf_data["distance"], dims="dist")
        pm.Data("tries", golf_data["tries"], dims="dist")
        pm.Data("successes", golf_data["successes"], dims="dist")
    return model


def _binomial_likelihood(model: pm.Model, p) -> None:
    pm.Binomial(
        "success",
        n=model["tries"],
        p=p,
        observed=model["successes"],
        dims="dist",
    )


def _dispersed_likelihood(model: pm.Model, p, sigma_y) -> None:
    observed_rate = model["successes"] / model["tries"]
    pm.Deterministic("residual", observed_rate - p, dims="dist")
    pm.Normal(
        "p_success",
        mu=p,
        sigma=pt.sqrt(((p * (1 - p)) / model["tries"]) + sigma_y**2),
        observed=observed_rate,
        dims="dist",
    )


def _sigma_angle() -> TensorVariable:
    sigma_angle = pm.HalfNormal("sigma_angle")
    pm.Deterministic("sigma_degrees", sigma_angle * 180 / np.pi)
    return sigma_angle


def define_logit_model(
    golf_data: pd.DataFrame, geometry: PuttingGeometry = DEFAULT_GEOMETRY
) -> pm.Model:
    """Logistic regression on distance with flat priors on both coefficients."""
    with initialize_model(golf_data) as model:
        a = pm.Flat("a")
        b = pm.Flat("b")
        p = pm.Deterministic(
            "p_make",
            pm.math.invlogit(a + b * model["distance"]),
            dims="dist",
        )
        _binomial_likelihood(model, p)
    return model


def define_angle_model(
    golf_data: pd.DataFrame, geometry: PuttingGeometry = DEFAULT_GEOMETRY
) -> pm.Model:
    with initialize_model(golf_data) as model:
        sigma_angle = _sigma_angle()
        p = pm.Deterministic(
            "p_make",
            p_good_angle(model["distance"], sigma_angle, geometry),
            dims="dist",
        )
        _binomial_likelihood(model, p)
    return model


def define_distance_angle_model(
    golf_data: pd.DataFrame, geometry: PuttingGeometry = DEFAULT_GEOMETRY
) -> pm.Model:
    """Angle model times the chance of hitting the putt the right length.

    The half-normal priors matter here: with flat priors on the two scales the
    sampler struggles to converge.
    """
    with initialize_model(golf_data) as model:
        sigma_angle = _sigma_angle()
        sigma_distance = pm.HalfNormal("sigma_distance")
        p = pm.Deterministic(
            "p_make",
            p_good_angle(model["distance"], sigma_angle, geometry)
            * p_good_distance(
                model["distance"],
                sigma_distance,
                geometry.overshot,
                geometry.distance_tolerance,
            ),
            dims="dist",
        )
        _binomial_likelihood(model, p)
    return model


def define_disp_distance_angle_model(
    golf_data: pd.DataFrame, geometry: PuttingGeometry = DEFAULT_GEOMETRY
) -> pm.Model:
    """Distance & angle model with a normal approximation and extra noise.

    The binomial likelihood lets the buckets with many attempts dominate the
    fit. ``sigma_y`` adds variance that does not shrink with the number of
    tries so the curve can miss those points a little.
    """
    with initialize_model(golf_data) as model:
        sigma_angle = _sigma_angle()
        sigma_distance = pm.HalfNormal("sigma_distance")
        sigma_y = pm.HalfNormal("sigma_y")
        p = pm.Deterministic(
            "p_make",
            p_good_angle(model["distance"], sigma_angle, geometry)
            * p_good_distance(
                model["distance"],
                sigma_distance,
                geometry.overshot,
                geometry.distance_tolerance,
            ),
            dims="dist",
        )
        _dispersed_likelihood(model, p, sigma_y)
    return model


def define_free_distance_angle_model(
    golf_data: pd.DataFrame, geometry: PuttingGeometry = DEFAULT_GEOMETRY
) -> pm.Model:
    """Dispersion model with ``overshot`` and ``distance_tolerance`` learned.

    Exploratory: the two new parameters are weakly identified, the chains
    mix badly and the fit is no better than with the constants fixed.
    """
    with initialize_model(golf_data) as model:
        sigma_angle = _sigma_angle()
        sigma_distance = pm.HalfNormal("sigma_distance")
        sigma_y = pm.HalfNormal("sigma_y")
        overshot = pm.TruncatedNormal("overshot", mu=1, sigma=5, lower=0)
        distance_tolerance = pm.TruncatedNormal(
            "distance_tolerance", mu=3, sigma=5, lower=0
        )
        p = pm.Deterministic(
            "p_make",
            p_good_angle(model["distance"], sigma_angle, geometry)
            * p_good_distance(
                model["distance"], sigma_distance, overshot, distance_tolerance
            ),
            dims="dist",
        )
        _dispersed_likelihood(model, p, sigma_y)
    return model


def define_bernoulli_model(y=BERNOULLI_DATA) -> pm.Model:
    """Coin-flip model used to check that the sampling toolchain works."""
    y = np.asarray(y)
    with pm.Model(coords={"obs": np.arange(len(y))}) as model:
        theta = pm.Beta("theta", alpha=1, beta=1)
        pm.Bernoulli("y", p=theta, observed=y, dims="obs")
    return model


MODELS: dict[str, Callable[..., pm.Model]] = {
    "logit": define_logit_model,
    "angle": define_angle_model,
    "distance_angle": define_distance_angle_model,
    "disp_distance_angle": define_disp_distance_angle_model,
    "free_distance_angle": define_free_distance_angle_model,
}

MODEL_LABELS = {
    "logit": "Logistic Regression",
    "angle": "Angle Model",
    "distance_angle": "Distance & Angle",
    "disp_distance_angle": "Distance, Angle & Dispersion",
    "free_distance_angle": "Free Distance Parameters",
}


def build_model(
    name: str, golf_data: pd.DataFrame, geometry: PuttingGeometry = DEFAULT_GEOMETRY
) -> pm.Model:
    try:
        define = MODELS[name]
    except KeyError:
        raise ValueError(f"Unknown model {name!r}; choose from {list(MODELS)}") from None
    return define(golf_data, geometry)


def free_RVs_into_p_make(model: pm.Model):
    return [
        v for v in pytensor.graph.ancestors([model["p_make"]]) if v in model.free_RVs
    ]


def compile_p_make_function(model: pm.Model) -> Function:
    """Compile ``p_make`` as a function of the free parameters it depends on.

    The function takes the parameters as keyword arguments named after the
    random variables, e.g. ``fn(sigma_angle=0.02)``.
    """
    inputs = free_RVs_into_p_make(model)
    return function(inputs, model["p_make"], mode="FAST_COMPILE")


def get_distribution_name(var: TensorVariable) -> str:
    return var.owner.op.__class__.__name__


def summary_var_names(model: pm.Model) -> list[str]:
    """Free parameters plus scalar derived quantities, e.g. ``sigma_degrees``."""
    scalars = [v.name for v in model.deterministics if v.ndim == 0]
    return [rv.name for rv in model.free_RVs] + scalars
