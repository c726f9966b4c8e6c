import argparse
import math
import sys
import time

import numpy as np

from square_percolation import FlaggedPercolation, Percolation

# z-value of the two-sided 95% interval
CONFIDENCE_95 = 1.96

LATTICES = {
    "two-uf": Percolation,
    "flags": FlaggedPercolation,
}
MODELS = tuple(LATTICES) + ("numba",)


class Stopwatch:
    """Monotonic wall-clock timer started at construction."""

    def __init__(self):
        self.start = time.perf_counter()

    def elapsedTime(self) -> float:
        return time.perf_counter() - self.start


def uniform_sites(rng, n: int, batch: int):
    """
    Endless stream of (row, col) pairs, each coordinate uniform on
    [1, n + 1). Draws 'batch' pairs from the generator at a time.
    """
    while True:
        rows = rng.integers(1, n + 1, size=batch)
        cols = rng.integers(1, n + 1, size=batch)
        for row, col in zip(rows.tolist(), cols.tolist()):
            yield row, col


class PercolationStats:
    """
    Runs 'trials' independent percolation experiments on fresh n x n
    grids and keeps the fraction of sites open at the moment each one
    first percolated.
    """

    def __init__(self, n: int, trials: int, seed=None, model: str = "two-uf", verbose: bool = False):
        if n <= 0 or trials <= 0:
            raise ValueError("grid size n and trials count must be positive integers")
        if model not in MODELS:
            raise ValueError(f"unknown model {model!r}, expected one of {', '.join(MODELS)}")

        self.trialCount = trials
        self.gridSize = n
        self.model = model
        self.verbose = verbose

        # elapsed covers the trials only, never JIT compilation
        if model == "numba":
            from newman_ziff import simulate_thresholds, warm_up

            warm_up()
            timer = Stopwatch()
            self.trialResults = simulate_thresholds(n, trials, seed=seed)
        else:
            timer = Stopwatch()
            self.trialResults = self._run_trials(LATTICES[model], np.random.default_rng(seed))
        self.elapsed = timer.elapsedTime()

    def _run_trials(self, lattice_class, rng):
        results = np.empty(self.trialCount, dtype=np.float64)
        gridSquare = self.gridSize * self.gridSize
        step = max(1, self.trialCount // 10)

        for k in range(self.trialCount):
            simulator = lattice_class(self.gridSize)
            sites = uniform_sites(rng, self.gridSize, gridSquare)
            while not simulator.percolates():
                row, col = next(sites)
                if not simulator.isOpen(row, col):
                    simulator.open_site(row, col)

            results[k] = simulator.numberOfOpenSites() / gridSquare

            if self.verbose and (k + 1) % step == 0:
                print(f"  Progress: {k + 1}/{self.trialCount} trials", file=sys.stderr)

        return results

    @property
    def results(self):
        return self.trialResults

    def mean(self) -> float:
        return float(np.mean(self.trialResults))

    def stddev(self) -> float:
        # sample standard deviation, undefined for a single trial
        if self.trialCount < 2:
            return math.nan
        return float(np.std(self.trialResults, ddof=1))

    def confidenceLo(self) -> float:
        return self.mean() - CONFIDENCE_95 * self.stddev() / math.sqrt(self.trialCount)

    def confidenceHi(self) -> float:
        return self.mean() + CONFIDENCE_95 * self.stddev() / math.sqrt(self.trialCount)

    def confidence_interval(self):
        return self.confidenceLo(), self.confidenceHi()

    def report(self, elapsed: float, file=None):
        print(f"time                    = {elapsed}", file=file)
        print(f"mean                    = {self.mean()}", file=file)
        print(f"stddev                  = {self.stddev()}", file=file)
        lo, hi = self.confidence_interval()
        print(f"95% confidence interval = [{lo}, {hi}]", file=file)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Estimate the site percolation threshold of an N x N square lattice by Monte Carlo simulation."
    )

    parser.add_argument('n', type=int, metavar='N', help="Side length of the square grid (N x N sites).")
    parser.add_argument('trials', type=int, metavar='T', help="The number of Monte Carlo trials to perform.")
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help="Seed for the random number generator (default: fresh entropy)."
    )
    parser.add_argument(
        '--model',
        choices=MODELS,
        default="two-uf",
        help="Lattice implementation used for the trials."
    )
    parser.add_argument('-v', '--verbose', action='store_true', help="Print trial progress to stderr.")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.n <= 0 or args.trials <= 0:
        parser.error("N and T must be positive integers")

    try:
        experiments = PercolationStats(args.n, args.trials, seed=args.seed, model=args.model, verbose=args.verbose)
    except ValueError as e:
        parser.error(str(e))

    experiments.report(experiments.elapsed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
