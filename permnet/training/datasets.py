"""
Permutation Datasets

Loads labeled measurement records and expands each one into training pairs
covering every ordering of its coordinates.

Two modes:
1. Non-symmetric: every permutation of a record is paired with the record's
   canonical (identity) permutation. One output head.
2. Symmetric: every permutation of a record is paired with the full list of
   that record's permutations, head k supervised by permutation k.

Rows are laid out record-major, then permutation-major.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import torch
from sklearn.datasets import load_iris

from ..kernels.permutation import factorial, permute_record, Permuter


class DatasetSizeError(RuntimeError):
    """Raised when the expanded dataset does not hold width! rows per record."""
    pass


@dataclass(frozen=True)
class Record:
    """One labeled measurement vector."""
    label: str
    measures: Tuple[float, ...]


@dataclass(frozen=True)
class TrainingPair:
    """
    All orderings of one record.

    inputs[0] is the canonical ordering and equals output.
    """
    record: Record
    inputs: Tuple[Tuple[complex, ...], ...]
    output: Tuple[complex, ...]

    @property
    def label(self) -> str:
        return self.record.label


def load_iris_records() -> List[Record]:
    """
    Fisher's iris measurements as Records.

    Label is the species name; measures are sepal length, sepal width,
    petal length and petal width in cm.
    """
    data = load_iris()
    names = data.target_names
    return [
        Record(label=str(names[target]), measures=tuple(float(v) for v in row))
        for row, target in zip(data.data, data.target)
    ]


def expand_records(
    records: Sequence[Record],
    permute: Permuter = permute_record,
    width: int = 4
) -> List[TrainingPair]:
    """
    Expand records into training pairs.

    Args:
        records: Records of `width` measurements each
        permute: Encoder returning every ordering of one record
        width: Record width

    Returns:
        One TrainingPair per record

    Raises:
        DatasetSizeError: total permutation count != width! * len(records)
    """
    pairs = []
    for record in records:
        permutations = tuple(tuple(p) for p in permute(record.measures))
        output = permutations[0] if permutations else ()
        pairs.append(TrainingPair(record=record, inputs=permutations, output=output))

    expected = factorial(width) * len(records)
    count = sum(len(pair.inputs) for pair in pairs)
    if count != expected:
        raise DatasetSizeError(
            f"expanded dataset has {count} rows, expected {expected} "
            f"({factorial(width)} permutations x {len(records)} records)"
        )

    return pairs


@dataclass
class BatchBuffers:
    """
    Full-batch input and target buffers.

    inputs: (length, width)
    targets: one (length, width) tensor per output head
    """
    inputs: torch.Tensor
    targets: List[torch.Tensor]

    @property
    def length(self) -> int:
        return self.inputs.shape[0]

    def tensors(self) -> List[torch.Tensor]:
        return [self.inputs] + list(self.targets)

    def zero_grad(self):
        """Clear any gradient slot carried by the buffers."""
        for t in self.tensors():
            if t.grad is not None:
                t.grad = None


class PermutationDataset:
    """
    Flat view over expanded training pairs.

    Args:
        pairs: Output of expand_records
        symmetry: Symmetric mode (one target per permutation)
        dtype: Complex dtype of the buffers
    """

    def __init__(
        self,
        pairs: Sequence[TrainingPair],
        symmetry: bool = False,
        dtype: torch.dtype = torch.complex128
    ):
        self.pairs = list(pairs)
        self.symmetry = symmetry
        self.dtype = dtype

        inputs = []
        n_heads = len(self.pairs[0].inputs) if (symmetry and self.pairs) else 1
        outputs = [[] for _ in range(n_heads)]

        for pair in self.pairs:
            for row in pair.inputs:
                inputs.append(row)
                if symmetry:
                    for k, target in enumerate(pair.inputs):
                        outputs[k].append(target)
                else:
                    outputs[0].append(pair.output)

        self.inputs = torch.tensor(inputs, dtype=dtype)
        self.targets = [torch.tensor(out, dtype=dtype) for out in outputs]

    @property
    def n_heads(self) -> int:
        return len(self.targets)

    def __len__(self) -> int:
        return self.inputs.shape[0]

    def batch(self) -> BatchBuffers:
        """The whole dataset as one batch."""
        return BatchBuffers(inputs=self.inputs, targets=self.targets)


def build_batch(
    pairs: Sequence[TrainingPair],
    symmetry: bool = False,
    dtype: Optional[torch.dtype] = None
) -> BatchBuffers:
    """Full-batch buffers for the given pairs."""
    return PermutationDataset(
        pairs,
        symmetry=symmetry,
        dtype=dtype or torch.complex128
    ).batch()
