"""
Complex Permutation Network

A PyTorch implementation of a small complex-valued network trained to
recover the canonical ordering of a record from any permutation of its
coordinates.

Main components:
- PermutationConfig: Configuration dataclass
- Permutation kernels: complex coordinate encoding, Heap's algorithm
- Training: dataset expansion, full-batch trainer with global norm clipping
- Models: Parameters aggregate, autodiff network graph
- Utilities: cost plots, Markdown tables

Quick Start:
    >>> from permnet import FAST_TEST_CONFIG, Record, expand_records, PermutationTrainer
    >>> pairs = expand_records([Record("x", (1.0, 2.0, 3.0, 4.0))])
    >>> result = PermutationTrainer(FAST_TEST_CONFIG, pairs).train()
    >>> print(f"Final |cost|: {result.final_loss_abs:.6f}")
"""

from .core import (
    PermutationConfig,
    get_default_config,
    FAST_TEST_CONFIG
)

from .kernels import (
    factorial,
    encode_measures,
    heap_permutations,
    permute_record
)

from .training import (
    Record,
    TrainingPair,
    DatasetSizeError,
    load_iris_records,
    expand_records,
    PermutationTrainer,
    TrainingResult
)

from .models import (
    Parameters,
    NetworkGraph,
    hidden_activations
)

__version__ = "0.1.0"

__all__ = [
    # Core
    'PermutationConfig',
    'get_default_config',
    'FAST_TEST_CONFIG',

    # Kernels
    'factorial',
    'encode_measures',
    'heap_permutations',
    'permute_record',

    # Training
    'Record',
    'TrainingPair',
    'DatasetSizeError',
    'load_iris_records',
    'expand_records',
    'PermutationTrainer',
    'TrainingResult',

    # Models
    'Parameters',
    'NetworkGraph',
    'hidden_activations',
]
