"""Configuration for equity calculations."""

from dataclasses import dataclass
from typing import Callable, Optional

DEFAULT_ITERATIONS = 10000
DEFAULT_MAX_EXHAUSTIVE_COMBINATIONS = 25000


@dataclass
class CalculationOptions:
    """Configuration for an equity calculation."""
    iterations: int = DEFAULT_ITERATIONS          # Monte Carlo cap
    force_exhaustive: bool = False
    max_exhaustive_combinations: int = DEFAULT_MAX_EXHAUSTIVE_COMBINATIONS
    accuracy_threshold: Optional[float] = 0.001   # None disables early stopping

    # Receives the completed fraction (0.0-1.0)
    progress_callback: Optional[Callable[[float], None]] = None

    # Seed for the Monte Carlo random generator (None = fresh entropy)
    seed: Optional[int] = None

    def __post_init__(self):
        if self.iterations <= 0:
            raise ValueError(f"iterations must be positive, got {self.iterations}")
        if self.max_exhaustive_combinations <= 0:
            raise ValueError(
                "max_exhaustive_combinations must be positive, "
                f"got {self.max_exhaustive_combinations}"
            )
        if self.accuracy_threshold is not None and not 0.0 < self.accuracy_threshold < 1.0:
            raise ValueError(
                f"accuracy_threshold must be in (0, 1), got {self.accuracy_threshold}"
            )

    def report_progress(self, fraction: float) -> None:
        if self.progress_callback is not None:
            self.progress_callback(min(1.0, max(0.0, fraction)))
