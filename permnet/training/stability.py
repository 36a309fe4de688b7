"""
Stability Checks

Training has no recovery path: a non-finite cost or gradient means the run
has diverged, and it is reported by raising StabilityError.
"""

import cmath
from typing import Iterable, Tuple

import torch


class StabilityError(Exception):
    """Raised when the cost or a gradient stops being finite."""
    pass


def check_finite_loss(loss: complex, step: int):
    """
    Args:
        loss: Complex cost of the iteration
        step: Iteration index (for the message)
    """
    if not cmath.isfinite(loss):
        raise StabilityError(f"non-finite cost {loss} at iteration {step}")


def check_finite_gradients(
    named_grads: Iterable[Tuple[str, torch.Tensor]],
    step: int
):
    """
    Args:
        named_grads: (parameter name, gradient) pairs
        step: Iteration index (for the message)
    """
    for name, grad in named_grads:
        bad = (~torch.isfinite(grad)).sum().item()
        if bad:
            raise StabilityError(
                f"{bad}/{grad.numel()} non-finite gradient entries in {name} "
                f"at iteration {step}"
            )
