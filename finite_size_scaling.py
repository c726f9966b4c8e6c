import argparse
import sys

import numpy as np
from scipy.stats import linregress

from percolation_stats import MODELS, PercolationStats


def sweep(l_values, trials: int, seed=None, model: str = "two-uf", verbose: bool = False):
    """
    Runs PercolationStats once per grid size in 'l_values'. With a
    seed, size k of the sweep is seeded with seed + k so every size
    is reproducible on its own.
    """
    runs = []
    for k, n_value in enumerate(l_values):
        if verbose:
            print(f"simulate n = {n_value}", file=sys.stderr)
        run_seed = None if seed is None else seed + k
        runs.append(PercolationStats(int(n_value), trials, seed=run_seed, model=model, verbose=verbose))
    return runs


def extrapolate_threshold(l_values, means, exponent=-3/4):
    """
    Fits mean critical probability against L^exponent and returns the
    intercept as the estimate of pc(infinity).

    :return: dict with keys pc_inf, slope, r_squared, stderr
    """
    L_values = np.asarray(l_values, dtype=float)
    means = np.asarray(means, dtype=float)

    if L_values.shape != means.shape:
        raise ValueError("l_values and means must have the same length")
    if len(np.unique(L_values)) < 2:
        raise ValueError("at least two distinct system sizes are needed to extrapolate")

    X_scaling = L_values ** exponent
    slope, intercept, r_value, p_value, std_err = linregress(X_scaling, means)

    return {
        'pc_inf': float(intercept),
        'slope': float(slope),
        'r_squared': float(r_value ** 2),
        'stderr': float(std_err),
    }


def build_parser():
    parser = argparse.ArgumentParser(
        description="Sweep the grid size and extrapolate the site percolation threshold to infinite size."
    )

    parser.add_argument(
        '--Lmin',
        type=int,
        default=50,
        help="Minimum size of the square grid (N_min x N_min)."
    )

    parser.add_argument(
        '--Lmax',
        type=int,
        default=200,
        help="Maximum size of the square grid (N_max x N_max)."
    )

    parser.add_argument(
        '--Lstep',
        type=int,
        default=50,
        help="Step size for increasing the grid size N."
    )

    parser.add_argument(
        '--t',
        type=int,
        default=500,
        help="The number of Monte Carlo trials to perform per grid size."
    )

    parser.add_argument('--exponent', type=float, default=-3/4, help="Scaling exponent applied to L.")
    parser.add_argument('--seed', type=int, default=None, help="Seed for the random number generator.")
    parser.add_argument('--model', choices=MODELS, default="two-uf", help="Lattice implementation used for the trials.")
    parser.add_argument('-v', '--verbose', action='store_true', help="Print progress to stderr.")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.Lmin <= 0 or args.Lstep <= 0 or args.t <= 0:
        parser.error("Lmin, Lstep and t must be positive integers")
    if args.Lmax < args.Lmin:
        parser.error("Lmax must not be smaller than Lmin")

    L_values = list(range(args.Lmin, args.Lmax + 1, args.Lstep))
    if len(L_values) < 2:
        parser.error("the sweep needs at least two grid sizes")

    try:
        runs = sweep(L_values, args.t, seed=args.seed, model=args.model, verbose=args.verbose)
    except ValueError as e:
        parser.error(str(e))

    for run in runs:
        print(f"n = {run.gridSize}")
        run.report(run.elapsed)

    fit = extrapolate_threshold(L_values, [run.mean() for run in runs], exponent=args.exponent)
    print(f"pc(infinity) = {fit['pc_inf']}, R^2 = {fit['r_squared']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
