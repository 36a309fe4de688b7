"""
Gradient Norms, Clipping and Updates

Global L2 clipping over complex-valued gradients:

    ‖g‖ = sqrt( Σ_p Σ_l |g_{p,l}|² )

If ‖g‖ exceeds the threshold every gradient entry of every parameter is
scaled by threshold/‖g‖ before the update (1/‖g‖ for the unit threshold),
which preserves the update direction while bounding the step length.

The update itself is plain gradient descent:

    p ← p - η · scale · g
"""

import math
from typing import Iterable, Sequence

import torch


def global_gradient_norm(grads: Iterable[torch.Tensor]) -> float:
    """
    L2 norm over all entries of all gradients.

    Each complex entry contributes |g|² to the sum.

    Args:
        grads: Gradient tensors, one per parameter

    Returns:
        sqrt of the summed squared magnitudes
    """
    total = 0.0
    for grad in grads:
        total += torch.sum(torch.abs(grad) ** 2).item()
    return math.sqrt(total)


def clip_scale(norm: float, max_norm: float = 1.0) -> float:
    """
    Factor applied to every gradient entry for a given global norm.

    Args:
        norm: Global gradient norm
        max_norm: Clipping threshold

    Returns:
        max_norm / norm when norm > max_norm, otherwise 1.0
    """
    if norm > max_norm:
        return max_norm / norm
    return 1.0


@torch.no_grad()
def apply_update(
    params: Sequence[torch.Tensor],
    grads: Sequence[torch.Tensor],
    eta: float,
    scale: float = 1.0
):
    """
    In-place gradient descent step.

    Args:
        params: Parameter tensors (updated in place)
        grads: Gradients matching params one-to-one
        eta: Learning rate
        scale: Clip factor from clip_scale
    """
    if len(params) != len(grads):
        raise ValueError(
            f"got {len(grads)} gradients for {len(params)} parameters"
        )

    step = eta * scale
    for p, g in zip(params, grads):
        p.sub_(g * step)
