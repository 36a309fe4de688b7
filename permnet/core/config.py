"""
Configuration and Parameters for the Complex Permutation Network

All hyperparameters of a run live here. The defaults reproduce the
reference experiment: iris records of width 4, three hidden units,
learning rate 0.6, 256 full-batch iterations, unit gradient clipping.
"""

from dataclasses import dataclass
from typing import Optional
import math
import warnings

import torch


@dataclass
class PermutationConfig:
    """
    Configuration for permutation network training.

    Shape:
    - width: number of measurements per record (permutations = width!)
    - middle: number of hidden units

    Optimization:
    - eta: fixed learning rate (no schedule, no momentum)
    - iterations: number of full-batch gradient steps
    - clip_threshold: global L2 gradient norm above which updates are rescaled

    Initialization:
    - seed: seed of the single random generator
    - init_range: real and imaginary parts drawn from [-init_range, init_range)

    Mode:
    - symmetry: one output head per permutation instead of a single head
    """

    # Shape
    width: int = 4                  # Measurements per record
    middle: int = 3                 # Hidden layer size

    # Optimization
    eta: float = 0.6                # Learning rate
    iterations: int = 256           # Full-batch steps
    clip_threshold: float = 1.0     # Global norm clip

    # Initialization
    seed: int = 1
    init_range: float = 1.0

    # Mode
    symmetry: bool = False

    # Reporting
    log_interval: int = 32          # Print every N iterations (0 = silent)
    output_dir: str = "."           # Plots and README.md land here
    log_dir: Optional[str] = None   # JSON metrics history (None = skip)

    dtype: torch.dtype = torch.complex128

    def __post_init__(self):
        """Validate parameters."""
        if self.width < 1:
            raise ValueError(f"width={self.width} must be a positive integer")
        if self.middle < 1:
            raise ValueError(f"middle={self.middle} must be a positive integer")
        if self.iterations < 0:
            raise ValueError(f"iterations={self.iterations} must be non-negative")
        if self.eta <= 0:
            raise ValueError(f"eta={self.eta} must be positive")
        if self.clip_threshold <= 0:
            raise ValueError(f"clip_threshold={self.clip_threshold} must be positive")
        if not self.dtype.is_complex:
            raise ValueError(f"dtype={self.dtype} must be a complex dtype")

        if self.symmetry and self.width > 6:
            warnings.warn(
                f"symmetry with width={self.width} allocates "
                f"{math.factorial(self.width)} output heads"
            )

    @property
    def n_permutations(self) -> int:
        """Number of orderings of one record (width!)."""
        return math.factorial(self.width)

    @property
    def n_heads(self) -> int:
        """Output heads: one per permutation in symmetric mode, else one."""
        return self.n_permutations if self.symmetry else 1


def get_default_config() -> PermutationConfig:
    """Returns validated default configuration."""
    return PermutationConfig()


# Pre-defined configurations

FAST_TEST_CONFIG = PermutationConfig(
    width=4,
    middle=3,
    iterations=16,
    log_interval=0
)
