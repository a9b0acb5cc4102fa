"""
Benchmark driver: runs the sequential and threaded filters as separate
processes and compares their wall-clock times.

Usage:
    ppmfilter-bench images/dog.ppm 8 10
"""

import argparse
import logging
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

from ppmfilter import config
from ppmfilter.bench.stats import Comparison, Timings

logger = logging.getLogger(__name__)


def output_name(input_path: str, suffix: str) -> str:
    """images/dog.ppm -> images/dog_<suffix>.ppm"""
    path = Path(input_path)
    return str(path.with_name(f"{path.stem}_{suffix}.ppm"))


def filter_command(mode: str, input_path: str, output_path: str, *extra: str) -> List[str]:
    return [sys.executable, "-m", "ppmfilter.main", mode, input_path, output_path, *extra]


def time_command(command: Sequence[str]) -> float:
    """Run the command and return its wall-clock duration in seconds.

    A nonzero exit status is logged and the time is still reported.
    """
    start = time.perf_counter()
    completed = subprocess.run(command, stdout=subprocess.DEVNULL)
    elapsed = time.perf_counter() - start
    if completed.returncode != 0:
        logger.warning("Command failed with status %d: %s", completed.returncode, " ".join(command))
    return elapsed


def run_benchmark(input_path: str, num_threads: int, runs: int) -> Comparison:
    num_threads = max(1, num_threads)
    runs = max(1, runs)
    seq_out = output_name(input_path, "seq")
    conc_out = output_name(input_path, "conc")

    print("=" * 60)
    print("BENCHMARK - Edge Detection (sequential vs threaded)")
    print("=" * 60)
    print(f"Input: {input_path} | Threads: {num_threads} | Runs: {runs}")
    print(f"Outputs: {seq_out} / {conc_out}\n")

    comparison = Comparison()
    for run in range(1, runs + 1):
        t_seq = time_command(filter_command("seq", input_path, seq_out))
        t_conc = time_command(filter_command("conc", input_path, conc_out, str(num_threads)))
        outcome = comparison.record(t_seq, t_conc)

        print(f"Run {run:02d}:")
        print(f"   Sequential: {t_seq:.6f}s")
        print(f"   Threaded:   {t_conc:.6f}s")
        print(f"   Result:     {outcome.value}\n")

    print_summary(comparison)
    print("Output images:")
    print(f"   {seq_out}")
    print(f"   {conc_out}")
    print("=" * 60)
    return comparison


def _summary_line(label: str, timings: Timings, wins: int) -> str:
    return (
        f"{label:<12} mean={timings.mean:.6f}s | sd={timings.stddev:.6f}s | "
        f"min={timings.min:.6f}s | max={timings.max:.6f}s | wins={wins}"
    )


def print_summary(comparison: Comparison) -> None:
    print("-" * 20 + " SUMMARY " + "-" * 20)
    print(_summary_line("Sequential:", comparison.sequential, comparison.sequential_wins))
    print(_summary_line("Threaded:", comparison.threaded, comparison.threaded_wins))
    print(f"Ties: {comparison.ties}")
    if comparison.speedup is not None:
        print(f"\nMean speedup = {comparison.speedup:.3f}x")
    print("-" * 49)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="ppmfilter-bench", description=__doc__.split("\n\n")[0].strip())
    parser.add_argument("input", help="P6 image to filter")
    parser.add_argument("threads", type=int, help="threads for the threaded filter")
    parser.add_argument("runs", type=int, help="number of timed runs")
    args = parser.parse_args(argv)

    config.setup_logging()
    run_benchmark(args.input, args.threads, args.runs)
    return 0


if __name__ == "__main__":
    sys.exit(main())
