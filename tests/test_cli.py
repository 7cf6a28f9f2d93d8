import pytest

from golf_putting.cli import DEFAULT_DATASET, build_parser, main, sampler_config


def test_fit_defaults():
    args = build_parser().parse_args(["fit"])
    assert args.model == "angle"
    assert args.dataset is None
    assert args.data_file is None
    assert args.overshot == 1.0
    assert args.distance_tolerance == 3.0
    config = sampler_config(args)
    assert config.nuts_sampler == "nutpie"
    assert config.progressbar


def test_fit_options():
    args = build_parser().parse_args(
        [
            "fit",
            "--model",
            "disp_distance_angle",
            "--dataset",
            "broadie",
            "--sampler",
            "pymc",
            "--draws",
            "200",
            "--seed",
            "7",
            "--no-progress",
        ]
    )
    config = sampler_config(args)
    assert args.model == "disp_distance_angle"
    assert config.draws == 200
    assert config.random_seed == 7
    assert not config.progressbar


def test_unknown_model_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["fit", "--model", "spline"])


def test_dataset_and_file_are_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["fit", "--dataset", "berry", "--data-file", "x.txt"])


@pytest.mark.slow
def test_fit_angle_model_end_to_end(tmp_path, capsys):
    data_file = tmp_path / "putts.txt"
    data_file.write_text(
        "Putts\nx n y\n2 1443 1346\n5 353 208\n10 200 67\n15 167 28\n20 152 24\n"
    )
    plot = tmp_path / "fit.png"
    code = main(
        [
            "fit",
            "--data-file",
            str(data_file),
            "--sampler",
            "pymc",
            "--draws",
            "300",
            "--tune",
            "300",
            "--chains",
            "2",
            "--cores",
            "1",
            "--seed",
            "3",
            "--no-progress",
            "--plot",
            str(plot),
        ]
    )
    assert code == 0
    out = capsys.readouterr().out
    assert "sigma_angle" in out
    assert "sigma_degrees" in out
    assert plot.exists()


def test_default_dataset_is_berry():
    args = build_parser().parse_args(["fit", "--dataset", "broadie"])
    assert args.dataset == "broadie"
    assert DEFAULT_DATASET == "berry"


def test_negative_overshot_is_rejected():
    with pytest.raises(ValueError, match="Overshot"):
        main(["fit", "--overshot", "-1", "--no-progress"])
