# /// script
# [tool.marimo.runtime]
# auto_instantiate = false
# ///

import marimo

__generated_with = "0.18.4"
app = marimo.App(width="medium")


@app.cell
def _():
    import marimo as mo
    return (mo,)


@app.cell(hide_code=True)
def _(mo):
    mo.md(r"""
    # Golf Putting Models with PyMC

    A sequence of probabilistic models for golf putting data, each fixing a weakness of the one before.

    - **Logistic Regression**: Simple probability model
    - **Angle Model**: Considers the angle to the hole
    - **Distance & Angle**: Adds distance tolerance
    - **Distance, Angle & Dispersion**: Adds extra dispersion
    - **Free Distance Parameters**: Learns the aim point and tolerance too

    The models themselves live in the `golf_putting` package next to this notebook.
    """)
    return


@app.cell
def _():
    import numpy as np
    import matplotlib.pyplot as plt
    import arviz as az

    from golf_putting.config import SamplerConfig
    from golf_putting.data import DATASET_LABELS, describe, load_dataset
    from golf_putting.models import (
        MODEL_LABELS,
        build_model,
        compile_p_make_function,
        free_RVs_into_p_make,
        get_distribution_name,
    )
    from golf_putting.plotting import (
        plot_curve,
        plot_golf_data,
        plot_model_fit,
        plot_num_putts,
        plot_residuals,
        plot_simulated_putts,
    )
    from golf_putting.sampling import (
        check_convergence,
        get_predictions,
        sample_model,
        summarize,
    )
    from golf_putting.simulation import expected_num_putts, simulate_from_distance

    az.style.use("arviz-darkgrid")
    return (
        DATASET_LABELS,
        MODEL_LABELS,
        SamplerConfig,
        az,
        build_model,
        check_convergence,
        compile_p_make_function,
        describe,
        expected_num_putts,
        free_RVs_into_p_make,
        get_distribution_name,
        get_predictions,
        load_dataset,
        np,
        plot_curve,
        plot_golf_data,
        plot_model_fit,
        plot_num_putts,
        plot_residuals,
        plot_simulated_putts,
        plt,
        sample_model,
        simulate_from_distance,
        summarize,
    )


@app.cell(hide_code=True)
def _(mo):
    mo.md(r"""
    ## The Data
    """)
    return


@app.cell
def _(DATASET_LABELS, mo):
    dataset_selector = mo.ui.dropdown(
        options={label: name for name, label in DATASET_LABELS.items()},
        value="Berry (1996)",
        label="Select Dataset",
    )

    dataset_selector
    return (dataset_selector,)


@app.cell
def _(dataset_selector, load_dataset):
    data = load_dataset(dataset_selector.value)
    data
    return (data,)


@app.cell
def _(data, dataset_selector, describe, mo):
    _stats = describe(data)
    mo.md(f"""
    The {dataset_selector.selected_key} dataset has {_stats["shots"]:,} shots across {_stats["distances"]} different distances ranging from {_stats["min_distance"]} ft to {_stats["max_distance"]} ft.

    The marginal success rate is {_stats["success_rate"]:.2%}
    """)
    return


@app.cell
def _(data, plot_golf_data):
    plot_golf_data(data)
    return


@app.cell
def _(MODEL_LABELS, mo):
    model_selector = mo.ui.dropdown(
        options={label: name for name, label in MODEL_LABELS.items()},
        value="Logistic Regression",
        label="Select Model",
    )
    return (model_selector,)


@app.cell(hide_code=True)
def _(mo):
    mo.md(r"""
    ## The Models

    The angle model asks how precisely a golfer must hit the ball to hole it: a putt from
    distance $x$ drops if its angle is within $\arcsin((R - r) / x)$ of straight, so with
    angular error $\sigma$ the make probability is $2\Phi(\arcsin((R - r)/x) / \sigma) - 1$.
    Putts from inside $R - r$ always drop.

    The distance models also require the ball to finish between the hole and 3 ft past it,
    aiming 1 ft long with an error proportional to the distance. On the large dataset the
    binomial likelihood is dominated by the short putts, so the dispersion model swaps it
    for a normal approximation with an extra noise term $\sigma_y$.
    """)
    return


@app.cell
def _(model_selector):
    model_selector
    return


@app.cell
def _(build_model, data, model_selector):
    model = build_model(model_selector.value, data)

    model
    return (model,)


@app.cell
def _(
    compile_p_make_function,
    free_RVs_into_p_make,
    get_distribution_name,
    mo,
    model,
):
    def get_parameter_ui(name: str):
        kwargs = {"show_value": True}

        if name == "HalfNormalRV":
            return mo.ui.slider(start=0.01, value=0.1, step=0.01, stop=0.25, **kwargs)
        if name == "TruncatedNormalRV":
            return mo.ui.slider(start=0.1, value=1.0, step=0.1, stop=5, **kwargs)

        return mo.ui.slider(start=-10, value=0.0, stop=10, step=0.01, **kwargs)

    parameter_ui = mo.ui.dictionary(
        {
            var.name: get_parameter_ui(get_distribution_name(var))
            for var in free_RVs_into_p_make(model)
        }
    )
    fn = compile_p_make_function(model)
    return fn, parameter_ui


@app.cell
def _(data, fn, mo, parameter_ui, plot_curve, plot_golf_data):
    _ax = plot_golf_data(data)
    plot_curve(
        _ax, data["distance"], fn(**parameter_ui.value), label="Guessed Parameters"
    )
    _ax.legend()

    mo.hstack([_ax, parameter_ui])
    return


@app.cell
def _(mo):
    mo.md(r"""
    ## Sampling Model

    ```python
    idata = sample_model(model, SamplerConfig(nuts_sampler="nutpie"))
    ```
    """)
    return


@app.cell
def _(mo):
    run_button = mo.ui.run_button(label="click to sample")

    run_button
    return (run_button,)


@app.cell
def _(az):
    idatas: dict[tuple[str, str], az.InferenceData] = {}
    return (idatas,)


@app.cell
def _(
    SamplerConfig,
    dataset_selector,
    idatas,
    mo,
    model,
    model_selector,
    run_button,
    sample_model,
):
    _key = (dataset_selector.value, model_selector.value)
    callout = None
    if _key in idatas:
        idata = idatas[_key]
    elif run_button.value:
        idata = sample_model(model, SamplerConfig(nuts_sampler="nutpie"))
        idatas[_key] = idata
    else:
        idata = None
        callout = mo.callout(
            f"The {model_selector.selected_key} has not been sampled yet on {dataset_selector.selected_key} dataset. Click the button above to sample."
        )

    callout
    return (idata,)


@app.cell(hide_code=True)
def _(mo):
    mo.md(r"""
    ## Parameter Estimates

    `summarize` wraps `az.summary` and adds posterior quantiles. Large `r_hat` values or divergences
    are shown below the table: the distance models are known to mix badly, and that is a result,
    not something to hide.
    """)
    return


@app.cell
def _(check_convergence, idata, mo, model, summarize):
    mo.stop(idata is None)
    summary = summarize(idata, model)
    report = check_convergence(idata, summary)
    mo.vstack(
        [
            summary,
            mo.callout(mo.md("<br>".join(report.messages())), kind="warn")
            if not report.converged
            else mo.md("All parameters converged."),
        ]
    )
    return


@app.cell
def _(mo):
    mo.md(r"""
    ## Model Fit
    """)
    return


@app.cell
def _(
    data,
    dataset_selector,
    get_predictions,
    idata,
    mo,
    model,
    model_selector,
    np,
    plot_model_fit,
    plt,
):
    mo.stop(idata is None)
    _predictions = get_predictions(
        model, idata, np.linspace(1, data["distance"].max(), 100)
    )
    plt.subplots(figsize=(8, 5))
    plot_model_fit(
        data,
        _predictions,
        title=f"Model fit: {model_selector.selected_key} on {dataset_selector.selected_key} data",
        ax=plt.gca(),
    )
    return


@app.cell
def _(idata, mo, plot_residuals):
    mo.stop(idata is None or "residual" not in idata.posterior)
    plot_residuals(idata)
    return


@app.cell
def _(mo):
    mo.md(r"""
    ## More than just predictions
    """)
    return


@app.cell
def _(data, mo, model_selector):
    if model_selector.value != "logit":
        sim_distance_slider = mo.ui.slider(
            3,
            int(data["distance"].max() * 1.2),
            value=10,
            label="Distance to hole (ft)",
        )
        display = sim_distance_slider
    else:
        sim_distance_slider = None
        display = mo.Html(
            "No putting simulation available for Logistic Regression model. Select another model."
        )

    display
    return (sim_distance_slider,)


@app.cell
def _(
    expected_num_putts,
    idata,
    mo,
    plot_num_putts,
    plot_simulated_putts,
    sim_distance_slider,
    simulate_from_distance,
):
    mo.stop(idata is None or sim_distance_slider is None)
    _distance = sim_distance_slider.value
    _x, _y, _made = simulate_from_distance(idata, _distance, trials=5000)
    mo.hstack(
        [
            plot_simulated_putts(_x, _y, _made, _distance),
            plot_num_putts(expected_num_putts(idata, _distance), _distance),
        ]
    )
    return


@app.cell
def _(mo):
    mo.md("""
    ---
    ## Resources

    Read the case study by Andrew Gelman [here](https://mc-stan.org/learn-stan/case-studies/golf.html).
    """)
    return


if __name__ == "__main__":
    app.run()
