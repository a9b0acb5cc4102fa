"""Timing statistics for comparing the two filter pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from ppmfilter.config import TIE_THRESHOLD


class Outcome(Enum):
    SEQUENTIAL = "sequential won"
    THREADED = "threaded won"
    TIE = "tie"


def compare(seq_time: float, conc_time: float, threshold: float = TIE_THRESHOLD) -> Outcome:
    """Decide which pipeline won one run."""
    if abs(seq_time - conc_time) < threshold:
        return Outcome.TIE
    return Outcome.SEQUENTIAL if seq_time < conc_time else Outcome.THREADED


@dataclass
class Timings:
    """Wall-clock samples, in seconds, of one pipeline."""

    samples: list[float] = field(default_factory=list)

    def add(self, seconds: float) -> None:
        self.samples.append(seconds)

    @property
    def mean(self) -> float:
        return float(np.mean(self.samples)) if self.samples else 0.0

    @property
    def stddev(self) -> float:
        """Sample standard deviation, 0 with fewer than two samples."""
        if len(self.samples) < 2:
            return 0.0
        return float(np.std(self.samples, ddof=1))

    @property
    def min(self) -> float:
        return float(np.min(self.samples)) if self.samples else 0.0

    @property
    def max(self) -> float:
        return float(np.max(self.samples)) if self.samples else 0.0


@dataclass
class Comparison:
    """Per-run tallies and aggregate timings for both pipelines."""

    sequential: Timings = field(default_factory=Timings)
    threaded: Timings = field(default_factory=Timings)
    sequential_wins: int = 0
    threaded_wins: int = 0
    ties: int = 0

    def record(self, seq_time: float, conc_time: float) -> Outcome:
        self.sequential.add(seq_time)
        self.threaded.add(conc_time)
        outcome = compare(seq_time, conc_time)
        if outcome is Outcome.TIE:
            self.ties += 1
        elif outcome is Outcome.SEQUENTIAL:
            self.sequential_wins += 1
        else:
            self.threaded_wins += 1
        return outcome

    @property
    def speedup(self) -> float | None:
        """mean(sequential) / mean(threaded), None when undefined."""
        if self.threaded.mean <= 0.0:
            return None
        return self.sequential.mean / self.threaded.mean
