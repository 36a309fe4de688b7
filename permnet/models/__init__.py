"""
Complex-valued network components.

- activations: analytic complex sigmoid
- losses: complex quadratic cost
- network: Parameters aggregate, autodiff graph, single-input hidden layer
"""

from .activations import complex_sigmoid
from .losses import quadratic, quadratic_cost
from .network import (
    uniform_complex,
    Parameters,
    AutodiffGraph,
    NetworkGraph,
    hidden_activations
)

__all__ = [
    'complex_sigmoid',
    'quadratic',
    'quadratic_cost',
    'uniform_complex',
    'Parameters',
    'AutodiffGraph',
    'NetworkGraph',
    'hidden_activations',
]
