"""
Training Infrastructure

Record loading, permutation expansion, full-batch buffers and the
gradient-descent loop for the complex permutation network.

Supports two modes:
1. Non-symmetric: every permutation maps back to the canonical ordering
2. Symmetric: every permutation maps to every permutation (one head each)
"""

from .datasets import (
    Record,
    TrainingPair,
    BatchBuffers,
    PermutationDataset,
    DatasetSizeError,
    load_iris_records,
    expand_records,
    build_batch
)
from .metrics import TrainingMetrics, MetricsLogger
from .stability import StabilityError, check_finite_loss, check_finite_gradients
from .trainer import PermutationTrainer, TrainingResult

__all__ = [
    'Record',
    'TrainingPair',
    'BatchBuffers',
    'PermutationDataset',
    'DatasetSizeError',
    'load_iris_records',
    'expand_records',
    'build_batch',
    'TrainingMetrics',
    'MetricsLogger',
    'StabilityError',
    'check_finite_loss',
    'check_finite_gradients',
    'PermutationTrainer',
    'TrainingResult',
]
