"""Loading of aggregated putting data.

Each table holds one row per distance bucket with the distance from the hole
in feet (``x``), the number of attempts (``n``) and the number of made putts
(``y``). On disk the tables are whitespace-delimited with a description line
and a column-name line before the numbers.
"""

import io
from importlib import resources
from pathlib import Path

import pandas as pd

COLUMNS = {"x": "distance", "n": "tries", "y": "successes"}
HEADER_LINES = 2

DATASETS = {
    "berry": "golf_data.txt",
    "broadie": "golf_data_new.txt",
}

DATASET_LABELS = {
    "berry": "Berry (1996)",
    "broadie": "Broadie (2018)",
}


def read_golf_data(source) -> pd.DataFrame:
    """Read a putting table from a path, an open file or a string of text.

    Returns a frame with float ``distance`` and integer ``tries`` and
    ``successes`` columns.

    Raises:
        ValueError: If the table is empty or fails :func:`validate_golf_data`.
    """
    if isinstance(source, str) and "\n" in source:
        source = io.StringIO(source)
    try:
        golf_data = pd.read_csv(
            source,
            sep=r"\s+",
            skiprows=HEADER_LINES,
            header=None,
            names=list(COLUMNS),
            dtype={"x": "float", "n": "int", "y": "int"},
        ).rename(columns=COLUMNS)
    except pd.errors.EmptyDataError:
        raise ValueError("Putting data has no rows.") from None
    validate_golf_data(golf_data)
    return golf_data


def validate_golf_data(golf_data: pd.DataFrame) -> None:
    missing = [col for col in COLUMNS.values() if col not in golf_data.columns]
    if missing:
        raise ValueError(f"Putting data is missing columns: {missing}")
    if golf_data.empty:
        raise ValueError("Putting data has no rows.")
    if (golf_data["distance"] <= 0).any():
        raise ValueError("Distances must be positive.")
    if (golf_data["tries"] <= 0).any():
        raise ValueError("Every distance needs at least one attempt.")
    if (golf_data["successes"] < 0).any() or (
        golf_data["successes"] > golf_data["tries"]
    ).any():
        raise ValueError("Successes must lie between 0 and the number of tries.")


def dataset_path(name: str) -> Path:
    try:
        filename = DATASETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown dataset {name!r}; choose from {sorted(DATASETS)}"
        ) from None
    return Path(str(resources.files("golf_putting") / "datasets" / filename))


def load_dataset(name: str) -> pd.DataFrame:
    return read_golf_data(dataset_path(name))


def describe(golf_data: pd.DataFrame) -> dict:
    """Headline numbers for a putting table."""
    total_tries = int(golf_data["tries"].sum())
    return {
        "shots": total_tries,
        "distances": len(golf_data),
        "min_distance": float(golf_data["distance"].min()),
        "max_distance": float(golf_data["distance"].max()),
        "success_rate": golf_data["successes"].sum() / total_tries,
    }
