"""Command line entry point: fit one model to one dataset and report it."""

import argparse
import logging
import sys
import time

import matplotlib
import numpy as np

from golf_putting.config import (
    DISTANCE_TOLERANCE,
    OVERSHOT,
    PuttingGeometry,
    SamplerConfig,
)
from golf_putting.data import DATASETS, describe, load_dataset, read_golf_data
from golf_putting.models import MODEL_LABELS, MODELS, build_model, define_bernoulli_model
from golf_putting.plotting import plot_model_fit
from golf_putting.sampling import (
    check_convergence,
    get_predictions,
    sample_model,
    summarize,
)

logger = logging.getLogger("golf_putting")

DEFAULT_DATASET = "berry"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="golf-putting", description="Bayesian models of golf putting."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sampler = argparse.ArgumentParser(add_help=False)
    sampler.add_argument("--draws", type=int, default=1000)
    sampler.add_argument("--tune", type=int, default=1000)
    sampler.add_argument("--chains", type=int, default=4)
    sampler.add_argument("--cores", type=int, default=None)
    sampler.add_argument("--sampler", choices=["nutpie", "pymc"], default="nutpie")
    sampler.add_argument("--target-accept", type=float, default=0.8)
    sampler.add_argument("--seed", type=int, default=None)
    sampler.add_argument("--no-progress", action="store_true")

    fit = subparsers.add_parser("fit", parents=[sampler], help="fit a putting model")
    fit.add_argument("--model", choices=list(MODELS), default="angle")
    source = fit.add_mutually_exclusive_group()
    source.add_argument("--dataset", choices=sorted(DATASETS), default=None)
    source.add_argument("--data-file", help="whitespace-delimited x n y table")
    fit.add_argument("--overshot", type=float, default=OVERSHOT)
    fit.add_argument("--distance-tolerance", type=float, default=DISTANCE_TOLERANCE)
    fit.add_argument("--plot", help="write the model fit figure to this path")

    subparsers.add_parser(
        "check", parents=[sampler], help="sample a Bernoulli model to test the install"
    )
    return parser


def sampler_config(args) -> SamplerConfig:
    return SamplerConfig(
        draws=args.draws,
        tune=args.tune,
        chains=args.chains,
        cores=args.cores,
        nuts_sampler=args.sampler,
        target_accept=args.target_accept,
        random_seed=args.seed,
        progressbar=not args.no_progress,
    )


def run_fit(args) -> int:
    if args.data_file:
        golf_data = read_golf_data(args.data_file)
    else:
        golf_data = load_dataset(args.dataset or DEFAULT_DATASET)
    stats = describe(golf_data)
    logger.info(
        "Loaded %s shots across %d distances (%.2f-%.2f ft), marginal success rate %.2f%%",
        f"{stats['shots']:,}",
        stats["distances"],
        stats["min_distance"],
        stats["max_distance"],
        100 * stats["success_rate"],
    )

    geometry = PuttingGeometry(
        overshot=args.overshot, distance_tolerance=args.distance_tolerance
    )
    model = build_model(args.model, golf_data, geometry)
    logger.info("Built %s model", MODEL_LABELS[args.model])

    start = time.time()
    idata = sample_model(model, sampler_config(args))
    logger.info("Sampling finished in %.1f seconds", time.time() - start)

    summary = summarize(idata, model)
    print(summary.to_string())
    report = check_convergence(idata, summary)
    if report.converged:
        logger.info("All parameters converged (r_hat <= %s)", report.threshold)

    if args.plot:
        new_distances = np.linspace(1, golf_data["distance"].max(), 100)
        predictions = get_predictions(model, idata, new_distances)
        source = args.data_file or args.dataset or DEFAULT_DATASET
        ax = plot_model_fit(
            golf_data,
            predictions,
            title=f"Model fit: {MODEL_LABELS[args.model]} on {source} data",
        )
        ax.figure.savefig(args.plot, dpi=150, bbox_inches="tight")
        logger.info("Model fit figure written to %s", args.plot)
    return 0


def run_check(args) -> int:
    model = define_bernoulli_model()
    idata = sample_model(model, sampler_config(args))
    summary = summarize(idata, model)
    print(summary.to_string())
    check_convergence(idata, summary)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    matplotlib.use("Agg")

    if args.command == "fit":
        return run_fit(args)
    return run_check(args)
