"""
Kernels for the Complex Permutation Network

- permutation: complex coordinate encoding and Heap's algorithm
- gradients: global gradient norm, clipping and descent updates
"""

from .permutation import (
    factorial,
    encode_measures,
    heap_permutations,
    permute_record
)
from .gradients import (
    global_gradient_norm,
    clip_scale,
    apply_update
)

__all__ = [
    # Permutation
    'factorial',
    'encode_measures',
    'heap_permutations',
    'permute_record',

    # Gradients
    'global_gradient_norm',
    'clip_scale',
    'apply_update',
]
