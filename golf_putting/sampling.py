"""Posterior sampling, predictions and summaries."""

import logging
from dataclasses import dataclass, field

import arviz as az
import numpy as np
import pandas as pd
import pymc as pm
from pymc.model.fgraph import clone_model

from golf_putting.config import RHAT_THRESHOLD, SamplerConfig
from golf_putting.models import summary_var_names

logger = logging.getLogger(__name__)

QUANTILES = (0.025, 0.25, 0.5, 0.75, 0.975)


@dataclass
class ConvergenceReport:
    """Sampler health for one fit.

    Bad R-hat values and divergences are reported, not fixed: the
    distance models are known to mix badly on some data and that is a
    finding in its own right.
    """

    r_hat: dict[str, float]
    threshold: float = RHAT_THRESHOLD
    divergences: int = 0
    unconverged: list[str] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return not self.unconverged and self.divergences == 0

    def messages(self) -> list[str]:
        messages = [
            f"r_hat for {name} is {self.r_hat[name]:.3f} (> {self.threshold})"
            for name in self.unconverged
        ]
        if self.divergences:
            messages.append(f"{self.divergences} divergent transitions")
        return messages


def sample_model(
    model: pm.Model, config: SamplerConfig | None = None
) -> az.InferenceData:
    config = config or SamplerConfig()
    logger.info(
        "Sampling %d chains x %d draws with the %s sampler",
        config.chains,
        config.draws,
        config.nuts_sampler,
    )
    return pm.sample(model=model, **config.sample_kwargs())


def _quantile_funcs() -> dict:
    return {
        f"q{100 * q:g}%": (lambda x, q=q: np.quantile(x, q)) for q in QUANTILES
    }


def summarize(idata: az.InferenceData, model: pm.Model) -> pd.DataFrame:
    """Mean, sd, HDI, quantiles, ESS and R-hat for every reported parameter."""
    var_names = summary_var_names(model)
    return az.summary(
        idata.posterior[var_names],
        stat_funcs=_quantile_funcs(),
        extend=True,
        round_to="none",
    ).sort_index()


def check_convergence(
    idata: az.InferenceData,
    summary: pd.DataFrame,
    threshold: float = RHAT_THRESHOLD,
) -> ConvergenceReport:
    r_hat = summary["r_hat"].astype(float).to_dict()
    unconverged = [
        name for name, value in r_hat.items() if not np.isfinite(value) or value > threshold
    ]
    divergences = 0
    if "sample_stats" in idata.groups() and "diverging" in idata.sample_stats:
        divergences = int(idata.sample_stats["diverging"].sum())

    report = ConvergenceReport(
        r_hat=r_hat,
        threshold=threshold,
        divergences=divergences,
        unconverged=unconverged,
    )
    for message in report.messages():
        logger.warning("Sampler did not converge: %s", message)
    return report


def get_predictions(model: pm.Model, idata: az.InferenceData, new_distances):
    """Posterior draws of ``p_make`` at ``new_distances``."""
    new_distances = np.asarray(new_distances, dtype=float)
    with clone_model(model):
        pm.set_data(
            {
                "distance": new_distances,
                "tries": np.ones_like(new_distances, dtype=int),
                "successes": np.ones_like(new_distances, dtype=int),
            },
            coords={"dist": new_distances},
        )
        predictions = pm.sample_posterior_predictive(
            idata,
            var_names=["p_make"],
            predictions=True,
            progressbar=False,
        )
    return predictions.predictions["p_make"]
