"""
Loss Functions for Complex-Valued Outputs

Quadratic cost over complex outputs.

For real outputs the per-example cost is the squared error Σ_j (y_j - t_j)².
Over complex outputs the same polynomial is kept (the complex square, not
|·|²), so the cost is a holomorphic function of the outputs and its value is
a complex number whose magnitude and phase are both tracked.
"""

import torch


def quadratic(
    outputs: torch.Tensor,
    targets: torch.Tensor
) -> torch.Tensor:
    """
    Per-example quadratic cost.

    Args:
        outputs: (batch, width) network outputs
        targets: (batch, width) targets

    Returns:
        (batch,) Σ_j (outputs - targets)²
    """
    if outputs.shape != targets.shape:
        raise ValueError(
            f"outputs shape {tuple(outputs.shape)} must match targets {tuple(targets.shape)}"
        )
    diff = outputs - targets
    return torch.sum(diff * diff, dim=-1)


def quadratic_cost(
    outputs: torch.Tensor,
    targets: torch.Tensor
) -> torch.Tensor:
    """Average of the per-example quadratic cost (complex scalar)."""
    return torch.mean(quadratic(outputs, targets))
