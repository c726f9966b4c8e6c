import numpy as np
import pytest

from finite_size_scaling import extrapolate_threshold, main, sweep


def test_extrapolation_recovers_intercept():
    L_values = np.array([10, 20, 40, 80, 160])
    means = 0.5927 + 0.3 * L_values ** -0.75
    fit = extrapolate_threshold(L_values, means)
    assert fit['pc_inf'] == pytest.approx(0.5927)
    assert fit['slope'] == pytest.approx(0.3)
    assert fit['r_squared'] == pytest.approx(1.0)


def test_extrapolation_with_custom_exponent():
    L_values = [8, 16, 32]
    means = [0.6 - 0.1 / L for L in L_values]
    fit = extrapolate_threshold(L_values, means, exponent=-1)
    assert fit['pc_inf'] == pytest.approx(0.6)
    assert fit['slope'] == pytest.approx(-0.1)


def test_extrapolation_needs_two_sizes():
    with pytest.raises(ValueError):
        extrapolate_threshold([50, 50], [0.59, 0.6])
    with pytest.raises(ValueError):
        extrapolate_threshold([50], [0.59])


def test_extrapolation_needs_matching_lengths():
    with pytest.raises(ValueError):
        extrapolate_threshold([10, 20, 30], [0.6, 0.59])


def test_sweep_runs_each_size():
    runs = sweep([4, 8], trials=3, seed=1)
    assert [run.gridSize for run in runs] == [4, 8]
    assert all(len(run.results) == 3 for run in runs)


def test_seeded_sweep_is_reproducible():
    first = sweep([5, 6], trials=4, seed=10)
    second = sweep([5, 6], trials=4, seed=10)
    for a, b in zip(first, second):
        assert np.array_equal(a.results, b.results)


def test_cli_reports_every_size_and_fit(capsys):
    assert main(["--Lmin", "4", "--Lmax", "12", "--Lstep", "4", "--t", "5", "--seed", "0"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "n = 4"
    assert lines[5] == "n = 8"
    assert lines[10] == "n = 12"
    assert len(lines) == 16
    assert lines[-1].startswith("pc(infinity) = ")
    assert ", R^2 = " in lines[-1]


def test_cli_seeds_sizes_like_sweep(capsys):
    assert main(["--Lmin", "4", "--Lmax", "8", "--Lstep", "2", "--t", "4", "--seed", "3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    reported = [float(line.split("=")[1]) for line in lines if line.startswith("mean ")]
    expected = [run.mean() for run in sweep([4, 6, 8], trials=4, seed=3)]
    assert reported == expected


@pytest.mark.parametrize("argv", [
    ["--Lmin", "10", "--Lmax", "5"],
    ["--Lmin", "0"],
    ["--Lstep", "0"],
    ["--t", "0"],
    ["--Lmin", "10", "--Lmax", "10"],
])
def test_cli_rejects_bad_ranges(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
