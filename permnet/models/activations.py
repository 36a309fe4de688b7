"""
Activation Functions for Complex-Valued Layers

The logistic sigmoid is continued analytically to the complex plane:

    σ(z) = 1 / (1 + e^{-z})

It agrees with the real sigmoid on the real axis and is holomorphic away
from its poles at z = i(2k+1)π, so autograd derivatives are the ordinary
complex derivative σ'(z) = σ(z)(1 - σ(z)).
"""

import torch


def complex_sigmoid(z: torch.Tensor) -> torch.Tensor:
    """
    Args:
        z: Complex (or real) tensor, any shape

    Returns:
        1 / (1 + exp(-z)), same shape and dtype
    """
    return 1 / (1 + torch.exp(-z))
