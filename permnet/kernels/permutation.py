"""
Permutation Encoder

Turns one real measurement vector into every ordering of its coordinates.

Each measurement v at index j is encoded as a complex number

    z_j = v · exp(i · j · π/2)

so the coordinate a value came from survives any reordering: index 0 lies
on the positive real axis, index 1 on the positive imaginary axis, and so on.

Orderings are generated with the iterative form of Heap's algorithm. The
first snapshot is always the untouched input (the canonical ordering), and
the sequence is a pure function of the input.
"""

import cmath
import math
from typing import Callable, List, Sequence


def factorial(n: int) -> int:
    """
    Number of orderings of n items.

    Args:
        n: Non-negative integer

    Returns:
        n! (with 0! = 1)
    """
    if n < 0:
        raise ValueError(f"factorial undefined for n={n}")
    return math.factorial(n)


def encode_measures(measures: Sequence[float]) -> List[complex]:
    """
    Encode real measurements as complex numbers with a phase per index.

    Args:
        measures: Real values v_0 ... v_{n-1}

    Returns:
        [v_j · e^{i j π/2} for each j]
    """
    return [cmath.rect(float(v), j * math.pi / 2) for j, v in enumerate(measures)]


def heap_permutations(values: Sequence) -> List[list]:
    """
    All orderings of values via iterative Heap's algorithm.

    Args:
        values: Items to permute (width >= 1)

    Returns:
        width! lists; the first is a copy of values in their given order.
    """
    width = len(values)
    if width == 0:
        raise ValueError("cannot permute an empty vector")

    c = [0] * width
    a = list(values)
    permutations = [list(a)]

    i = 0
    while i < width:
        if c[i] < i:
            if i % 2 == 0:
                a[0], a[i] = a[i], a[0]
            else:
                a[c[i]], a[i] = a[i], a[c[i]]
            permutations.append(list(a))
            c[i] += 1
            i = 0
            continue
        c[i] = 0
        i += 1

    return permutations


def permute_record(measures: Sequence[float]) -> List[List[complex]]:
    """Encode a measurement vector and return all of its orderings."""
    return heap_permutations(encode_measures(measures))


# Signature shared by permute_record and any replacement encoder
Permuter = Callable[[Sequence[float]], List[List[complex]]]
