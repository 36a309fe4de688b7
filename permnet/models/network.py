"""
Complex Permutation Network

Two-layer complex-valued network:

    hidden   = σ(W0 · x + b0)
    output_k = W1_k · hidden + b1_k        k = 0 (non-symmetric) or 0..n!-1
    cost     = Σ_k avg( Σ_j (output_k - target_k)_j² )

Gradients come from torch autograd. The cost is holomorphic in every
parameter, and torch reports conj(dL/dp) for a holomorphic scalar seeded
with gradient 1; Parameters.gradients() undoes the conjugation so the
trainer descends along the analytic derivative dL/dp.
"""

from typing import Iterator, List, Sequence, Tuple

import torch

from .activations import complex_sigmoid
from .losses import quadratic_cost


_REAL_DTYPES = {
    torch.complex64: torch.float32,
    torch.complex128: torch.float64,
}


def uniform_complex(
    shape: Tuple[int, ...],
    generator: torch.Generator,
    low: float = -1.0,
    high: float = 1.0,
    dtype: torch.dtype = torch.complex128
) -> torch.Tensor:
    """
    Complex tensor with real and imaginary parts uniform in [low, high).

    For each entry the real part is drawn before the imaginary part.
    """
    real_dtype = _REAL_DTYPES[dtype]
    u = torch.rand(*shape, 2, generator=generator, dtype=real_dtype)
    u = (high - low) * u + low
    return torch.complex(u[..., 0], u[..., 1])


class Parameters:
    """
    All trainable tensors of the network.

    Ordering (used for initialization, norms and updates):
        w0, b0, w1[0..heads-1], b1[0..heads-1]

    Args:
        w0: (middle, width) hidden weights
        b0: (middle,) hidden bias
        w1: per head (width, middle) output weights
        b1: per head (width,) output bias
    """

    def __init__(
        self,
        w0: torch.Tensor,
        b0: torch.Tensor,
        w1: Sequence[torch.Tensor],
        b1: Sequence[torch.Tensor]
    ):
        if len(w1) != len(b1):
            raise ValueError(f"{len(w1)} output weights but {len(b1)} output biases")
        self.w0 = w0
        self.b0 = b0
        self.w1 = list(w1)
        self.b1 = list(b1)

    @classmethod
    def initialize(
        cls,
        width: int,
        middle: int,
        n_heads: int,
        generator: torch.Generator,
        init_range: float = 1.0,
        dtype: torch.dtype = torch.complex128
    ) -> "Parameters":
        """Draw every parameter from one seeded generator."""
        def draw(*shape):
            t = uniform_complex(shape, generator, -init_range, init_range, dtype)
            return t.requires_grad_()

        w0 = draw(middle, width)
        b0 = draw(middle)
        w1 = [draw(width, middle) for _ in range(n_heads)]
        b1 = [draw(width) for _ in range(n_heads)]
        return cls(w0, b0, w1, b1)

    @property
    def n_heads(self) -> int:
        return len(self.w1)

    @property
    def width(self) -> int:
        return self.w0.shape[1]

    @property
    def middle(self) -> int:
        return self.w0.shape[0]

    def tensors(self) -> List[torch.Tensor]:
        return [self.w0, self.b0] + self.w1 + self.b1

    def named(self) -> Iterator[Tuple[str, torch.Tensor]]:
        yield 'w0', self.w0
        yield 'b0', self.b0
        for i, w in enumerate(self.w1):
            yield f'w1.{i}', w
        for i, b in enumerate(self.b1):
            yield f'b1.{i}', b

    def zero_grad(self):
        for p in self.tensors():
            if p.grad is not None:
                p.grad.zero_()

    def gradients(self) -> List[torch.Tensor]:
        """
        Analytic derivative dL/dp for every parameter.

        Parameters that received no gradient report zeros.
        """
        grads = []
        for p in self.tensors():
            if p.grad is None:
                grads.append(torch.zeros_like(p))
            else:
                grads.append(torch.conj_physical(p.grad))
        return grads

    def snapshot(self) -> List[torch.Tensor]:
        """Detached copies of the current values."""
        return [p.detach().clone() for p in self.tensors()]

    def numel(self) -> int:
        return sum(p.numel() for p in self.tensors())


class AutodiffGraph:
    """
    Differentiable cost over a Parameters aggregate.

    Subclasses build their computation once and implement
    forward_backward(); the trainer only relies on this interface.
    """

    def __init__(self, parameters: Parameters):
        self.parameters = parameters

    def forward_backward(self) -> complex:
        """Evaluate the cost and fill every parameter's gradient buffer."""
        raise NotImplementedError

    def gradients(self) -> List[torch.Tensor]:
        return self.parameters.gradients()

    def zero_grad(self):
        self.parameters.zero_grad()


class NetworkGraph(AutodiffGraph):
    """
    Full-batch network and cost over fixed batch buffers.

    Args:
        parameters: Trainable tensors (one head per target buffer)
        batch: BatchBuffers with inputs (length, width) and one target per head
    """

    def __init__(self, parameters: Parameters, batch):
        super().__init__(parameters)

        if parameters.n_heads != len(batch.targets):
            raise ValueError(
                f"{parameters.n_heads} output heads but {len(batch.targets)} target buffers"
            )
        if batch.inputs.shape[-1] != parameters.width:
            raise ValueError(
                f"input width {batch.inputs.shape[-1]} != parameter width {parameters.width}"
            )

        self.batch = batch

    def hidden(self) -> torch.Tensor:
        """(length, middle) hidden activations."""
        p = self.parameters
        return complex_sigmoid(self.batch.inputs @ p.w0.T + p.b0)

    def forward(self) -> Tuple[torch.Tensor, List[torch.Tensor]]:
        """
        Returns:
            hidden: (length, middle)
            outputs: one (length, width) tensor per head
        """
        p = self.parameters
        hidden = self.hidden()
        outputs = [hidden @ w.T + b for w, b in zip(p.w1, p.b1)]
        return hidden, outputs

    def cost_terms(self) -> List[torch.Tensor]:
        """One averaged quadratic cost per head."""
        _, outputs = self.forward()
        return [
            quadratic_cost(out, target)
            for out, target in zip(outputs, self.batch.targets)
        ]

    def cost(self) -> torch.Tensor:
        """Complex scalar: sum of the per-head costs."""
        terms = self.cost_terms()
        total = terms[0]
        for term in terms[1:]:
            total = total + term
        return total

    def zero_grad(self):
        super().zero_grad()
        self.batch.zero_grad()

    def forward_backward(self) -> complex:
        cost = self.cost()
        cost.backward(torch.ones_like(cost))
        return complex(cost.detach().item())


@torch.no_grad()
def hidden_activations(
    w0: torch.Tensor,
    b0: torch.Tensor,
    single_input: Sequence[complex]
) -> torch.Tensor:
    """
    Hidden layer of a trained network for one input.

    Args:
        w0: (middle, width) hidden weights
        b0: (middle,) hidden bias
        single_input: width complex values

    Returns:
        (middle,) activations
    """
    x = torch.as_tensor(single_input, dtype=w0.dtype)
    return complex_sigmoid(w0 @ x + b0)
