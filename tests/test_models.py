import numpy as np
import pandas as pd
import pytest
from pytensor import function
from scipy import stats

from golf_putting.config import PuttingGeometry
from golf_putting.data import load_dataset
from golf_putting.models import (
    MODELS,
    build_model,
    compile_p_make_function,
    define_bernoulli_model,
    free_RVs_into_p_make,
    get_distribution_name,
    summary_var_names,
)
from golf_putting.probability import p_angle, p_angle_distance, p_logit


@pytest.fixture(scope="module")
def berry():
    return load_dataset("berry")


EXPECTED_FREE_RVS = {
    "logit": {"a", "b"},
    "angle": {"sigma_angle"},
    "distance_angle": {"sigma_angle", "sigma_distance"},
    "disp_distance_angle": {"sigma_angle", "sigma_distance", "sigma_y"},
    "free_distance_angle": {
        "sigma_angle",
        "sigma_distance",
        "sigma_y",
        "overshot",
        "distance_tolerance",
    },
}


@pytest.mark.parametrize("name", list(MODELS))
def test_models_build_with_finite_logp(name, berry):
    model = build_model(name, berry)
    assert {rv.name for rv in model.free_RVs} == EXPECTED_FREE_RVS[name]
    assert model.named_vars_to_dims["p_make"] == ("dist",)
    logp = model.compile_logp()(model.initial_point())
    assert np.isfinite(logp)


def test_unknown_model_raises(berry):
    with pytest.raises(ValueError, match="Unknown model"):
        build_model("spline", berry)


def test_summary_names_include_degrees(berry):
    names = summary_var_names(build_model("angle", berry))
    assert names == ["sigma_angle", "sigma_degrees"]
    assert "p_make" not in summary_var_names(build_model("logit", berry))


def test_dispersion_models_expose_residuals(berry):
    for name in ("disp_distance_angle", "free_distance_angle"):
        model = build_model(name, berry)
        assert "residual" in model.named_vars
        assert model.named_vars_to_dims["residual"] == ("dist",)


def test_logit_p_make_matches_numpy(berry):
    fn = compile_p_make_function(build_model("logit", berry))
    assert np.allclose(fn(a=2.2, b=-0.26), p_logit(berry["distance"], 2.2, -0.26))


def test_angle_p_make_matches_numpy(berry):
    fn = compile_p_make_function(build_model("angle", berry))
    assert np.allclose(fn(sigma_angle=0.0267), p_angle(berry["distance"], 0.0267))


def test_distance_angle_p_make_matches_numpy(berry):
    model = build_model("distance_angle", berry)
    fn = compile_p_make_function(model)
    assert np.allclose(
        fn(sigma_angle=0.0134, sigma_distance=0.08),
        p_angle_distance(berry["distance"], 0.0134, 0.08),
    )


def test_geometry_reaches_the_graph(berry):
    geometry = PuttingGeometry(overshot=0.5, distance_tolerance=2.0)
    fn = compile_p_make_function(build_model("distance_angle", berry, geometry))
    expected = p_angle_distance(berry["distance"], 0.0134, 0.08, geometry=geometry)
    assert np.allclose(fn(sigma_angle=0.0134, sigma_distance=0.08), expected)


def test_putts_inside_cup_threshold_are_certain():
    data = pd.DataFrame(
        {"distance": [0.05, 0.1, 3.0], "tries": [10, 10, 10], "successes": [10, 10, 5]}
    )
    model = build_model("angle", data)
    p = compile_p_make_function(model)(sigma_angle=0.5)
    assert p[0] == 1.0
    assert p[1] == 1.0
    assert 0 < p[2] < 1
    assert np.isfinite(model.compile_logp()(model.initial_point()))


def test_parameter_distributions(berry):
    model = build_model("free_distance_angle", berry)
    names = {var.name: get_distribution_name(var) for var in free_RVs_into_p_make(model)}
    assert names["sigma_angle"] == "HalfNormalRV"
    assert set(names) == EXPECTED_FREE_RVS["free_distance_angle"] - {"sigma_y"}


def test_bernoulli_model():
    model = define_bernoulli_model()
    assert [rv.name for rv in model.free_RVs] == ["theta"]
    assert model.rvs_to_values[model["y"]].eval().sum() == 2


def _value_point(model, **params):
    """Point on the log scale used by the sampler for positive parameters."""
    return {
        model.rvs_to_values[model[name]].name: np.log(value)
        for name, value in params.items()
    }


@pytest.mark.parametrize("sigma_y", [0.001, 0.02])
def test_dispersion_likelihood_matches_scipy(berry, sigma_y):
    model = build_model("disp_distance_angle", berry)
    point = _value_point(
        model, sigma_angle=0.0134, sigma_distance=0.08, sigma_y=sigma_y
    )
    logp = model.compile_logp(vars=[model["p_success"]], jacobian=False)(point)

    p = p_angle_distance(berry["distance"], 0.0134, 0.08)
    tries = berry["tries"].to_numpy()
    rate = berry["successes"].to_numpy() / tries
    expected = stats.norm.logpdf(
        rate, loc=p, scale=np.sqrt(p * (1 - p) / tries + sigma_y**2)
    ).sum()
    assert logp == pytest.approx(expected, rel=1e-6)


def test_residual_is_observed_minus_fitted(berry):
    model = build_model("disp_distance_angle", berry)
    residual = function(
        [model["sigma_angle"], model["sigma_distance"]],
        model["residual"],
        mode="FAST_COMPILE",
    )
    rate = berry["successes"] / berry["tries"]
    expected = rate - p_angle_distance(berry["distance"], 0.0134, 0.08)
    assert np.allclose(residual(0.0134, 0.08), expected)


def test_free_distance_p_make_uses_learned_constants(berry):
    fn = compile_p_make_function(build_model("free_distance_angle", berry))
    expected = p_angle_distance(
        berry["distance"], 0.0134, 0.08, overshot=1.5, distance_tolerance=2.5
    )
    p = fn(
        sigma_angle=0.0134, sigma_distance=0.08, overshot=1.5, distance_tolerance=2.5
    )
    assert np.allclose(p, expected)
    assert not np.allclose(p, p_angle_distance(berry["distance"], 0.0134, 0.08))
