"""Constants and settings shared by the models, sampler and simulations."""

from dataclasses import dataclass

# Constants for golf putting geometry
BALL_RADIUS = (1.68 / 2) / 12  # feet
CUP_RADIUS = (4.25 / 2) / 12  # feet
OVERSHOT = 1.0  # feet
DISTANCE_TOLERANCE = 3.0  # feet

RHAT_THRESHOLD = 1.01


@dataclass(frozen=True)
class PuttingGeometry:
    """Fixed quantities of the putting geometry, in feet.

    ``overshot`` is where the golfer aims past the hole and
    ``distance_tolerance`` how far past the hole the ball may finish and
    still drop. The default aim point is 1 ft rather than half the
    tolerance: a putt left short never goes in.
    """

    ball_radius: float = BALL_RADIUS
    cup_radius: float = CUP_RADIUS
    overshot: float = OVERSHOT
    distance_tolerance: float = DISTANCE_TOLERANCE

    def __post_init__(self):
        if self.ball_radius <= 0 or self.cup_radius <= 0:
            raise ValueError("Ball and cup radius must be positive.")
        if self.cup_radius <= self.ball_radius:
            raise ValueError("Cup radius must exceed ball radius.")
        if self.overshot < 0:
            raise ValueError("Overshot must not be negative.")
        if self.distance_tolerance <= 0:
            raise ValueError("Distance tolerance must be positive.")

    @property
    def threshold_angle_distance(self) -> float:
        """Distance ``R - r`` below which any putt on line drops."""
        return self.cup_radius - self.ball_radius


DEFAULT_GEOMETRY = PuttingGeometry()


@dataclass
class SamplerConfig:
    draws: int = 1000
    tune: int = 1000
    chains: int = 4
    cores: int | None = None
    nuts_sampler: str = "nutpie"
    target_accept: float = 0.8
    random_seed: int | None = None
    progressbar: bool = True

    def sample_kwargs(self) -> dict:
        kwargs = {
            "draws": self.draws,
            "tune": self.tune,
            "chains": self.chains,
            "nuts_sampler": self.nuts_sampler,
            "target_accept": self.target_accept,
            "random_seed": self.random_seed,
            "progressbar": self.progressbar,
        }
        if self.cores is not None:
            kwargs["cores"] = self.cores
        return kwargs
