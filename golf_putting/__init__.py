"""
Bayesian models of golf putting success against distance.

Modules:
    - data: Loads the aggregated (distance, tries, successes) tables.
    - probability: Closed-form success probabilities in NumPy.
    - models: PyMC definitions of the logistic, angle and distance models.
    - sampling: Posterior sampling, predictions and convergence reports.
    - simulation: Forward simulation of putts from posterior draws.
    - plotting: Data, fit, residual and simulation plots.
"""

__version__ = "0.1.0"

from .config import (
    BALL_RADIUS,
    CUP_RADIUS,
    DEFAULT_GEOMETRY,
    DISTANCE_TOLERANCE,
    OVERSHOT,
    PuttingGeometry,
    SamplerConfig,
)
from .data import load_dataset, read_golf_data
from .models import MODELS, build_model
from .sampling import (
    ConvergenceReport,
    check_convergence,
    get_predictions,
    sample_model,
    summarize,
)

__all__ = [
    # Configuration
    "BALL_RADIUS",
    "CUP_RADIUS",
    "DEFAULT_GEOMETRY",
    "DISTANCE_TOLERANCE",
    "OVERSHOT",
    "PuttingGeometry",
    "SamplerConfig",
    # Data
    "load_dataset",
    "read_golf_data",
    # Models
    "MODELS",
    "build_model",
    # Sampling
    "ConvergenceReport",
    "check_convergence",
    "get_predictions",
    "sample_model",
    "summarize",
]
