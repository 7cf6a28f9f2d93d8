import arviz as az
import numpy as np
import xarray as xr
from matplotlib.axes import Axes

from golf_putting.data import load_dataset
from golf_putting.plotting import (
    plot_curve,
    plot_golf_data,
    plot_model_fit,
    plot_num_putts,
    plot_residuals,
    plot_simulated_putts,
)
from golf_putting.probability import p_angle


def fake_predictions(distances):
    rng = np.random.default_rng(0)
    sigma = rng.normal(0.0267, 0.0005, size=(2, 50, 1))
    return xr.DataArray(
        p_angle(distances[None, None, :], sigma),
        dims=("chain", "draw", "dist"),
        coords={"dist": distances},
        name="p_make",
    )


def test_plot_golf_data():
    ax = plot_golf_data(load_dataset("berry"))
    assert isinstance(ax, Axes)
    assert ax.get_ylim() == (0, 1)
    assert ax.get_xlabel() == "Distance from hole (ft)"


def test_plot_model_fit(tmp_path):
    data = load_dataset("berry")
    predictions = fake_predictions(np.linspace(1, 20, 30))
    ax = plot_model_fit(data, predictions, title="Angle fit")
    assert ax.get_title() == "Angle fit"
    labels = [text.get_text() for text in ax.get_legend().get_texts()]
    assert labels == ["94% HDI", "68% HDI"]
    out = tmp_path / "fit.png"
    ax.figure.savefig(out)
    assert out.exists()


def test_plot_residuals():
    distances = np.array([2.0, 3.0, 4.0])
    idata = az.from_dict(
        posterior={"residual": np.random.default_rng(1).normal(0, 0.01, (2, 50, 3))},
        dims={"residual": ["dist"]},
        coords={"dist": distances},
    )
    ax = plot_residuals(idata)
    assert ax.get_ylabel() == "Observed minus fitted make rate"


def test_plot_simulated_putts_and_num_putts():
    x = np.array([10.5, 11.0, 9.0])
    y = np.array([0.0, 0.3, -0.1])
    made = np.array([True, False, False])
    ax = plot_simulated_putts(x, y, made, 10)
    assert "33.3% made" in ax.get_title()

    ax = plot_num_putts(np.array([0.4, 0.55, 0.05]), 10)
    assert ax.get_title() == "Total strokes needed from 10 ft."


def test_plot_curve_over_data():
    data = load_dataset("berry")
    ax = plot_golf_data(data)
    plot_curve(ax, data["distance"], p_angle(data["distance"], 0.0267), label="Guess")
    line = ax.get_lines()[-1]
    assert line.get_label() == "Guess"
    assert line.get_linestyle() == "--"
    assert np.allclose(line.get_xdata(), data["distance"])
