"""
Test Network Graph

Shapes, the analytic-derivative gradient convention, and the single-input
hidden-layer helper.
"""

import pytest
import torch

from permnet.models.activations import complex_sigmoid
from permnet.models.network import (
    Parameters,
    NetworkGraph,
    hidden_activations,
    uniform_complex
)
from permnet.training.datasets import Record, expand_records, build_batch
from permnet.models.losses import quadratic, quadratic_cost


@pytest.fixture
def batch():
    return build_batch(expand_records([Record("x", (1.0, 2.0, 3.0, 4.0))]))


@pytest.fixture
def parameters():
    return Parameters.initialize(
        width=4, middle=3, n_heads=1,
        generator=torch.Generator().manual_seed(1)
    )


def test_sigmoid_matches_real_axis():
    x = torch.linspace(-4, 4, 9, dtype=torch.float64)
    z = complex_sigmoid(x.to(torch.complex128))
    assert torch.allclose(z.real, torch.sigmoid(x))
    assert torch.allclose(z.imag, torch.zeros_like(x))


def test_uniform_complex_range():
    t = uniform_complex((1000,), torch.Generator().manual_seed(0), -1.0, 1.0)
    assert t.dtype == torch.complex128
    assert t.real.min() >= -1 and t.real.max() < 1
    assert t.imag.min() >= -1 and t.imag.max() < 1


def test_parameter_shapes(parameters):
    names = [name for name, _ in parameters.named()]
    assert names == ['w0', 'b0', 'w1.0', 'b1.0']
    assert parameters.w0.shape == (3, 4)
    assert parameters.b0.shape == (3,)
    assert parameters.w1[0].shape == (4, 3)
    assert parameters.b1[0].shape == (4,)
    assert parameters.numel() == 12 + 3 + 12 + 4


def test_quadratic_is_complex_square():
    y = torch.tensor([[1 + 1j, 0j]], dtype=torch.complex128)
    t = torch.zeros_like(y)
    # (1+i)^2 = 2i
    assert torch.allclose(quadratic(y, t), torch.tensor([2j], dtype=torch.complex128))
    assert quadratic_cost(y, t).item() == pytest.approx(2j)


def test_quadratic_shape_mismatch():
    with pytest.raises(ValueError):
        quadratic(torch.zeros(2, 4), torch.zeros(2, 3))


def test_forward_shapes(parameters, batch):
    graph = NetworkGraph(parameters, batch)
    hidden, outputs = graph.forward()
    assert hidden.shape == (24, 3)
    assert len(outputs) == 1
    assert outputs[0].shape == (24, 4)


def test_head_count_must_match_targets(parameters, batch):
    batch.targets.append(batch.targets[0])
    with pytest.raises(ValueError):
        NetworkGraph(parameters, batch)


def test_gradient_is_analytic_derivative(parameters, batch):
    """
    For the output bias, dL/db1 = mean over rows of 2(y - t).
    """
    graph = NetworkGraph(parameters, batch)
    loss = graph.forward_backward()

    with torch.no_grad():
        _, outputs = graph.forward()
        expected = torch.mean(2 * (outputs[0] - batch.targets[0]), dim=0)
        expected_loss = graph.cost().item()

    grads = parameters.gradients()
    assert loss == pytest.approx(expected_loss)
    assert torch.allclose(grads[3], expected)


def test_zero_grad_clears_accumulation(parameters, batch):
    graph = NetworkGraph(parameters, batch)
    graph.forward_backward()
    first = [g.clone() for g in parameters.gradients()]

    graph.zero_grad()
    graph.forward_backward()
    second = parameters.gradients()

    for a, b in zip(first, second):
        assert torch.allclose(a, b)


def test_hidden_activations_match_graph(parameters, batch):
    graph = NetworkGraph(parameters, batch)
    with torch.no_grad():
        hidden = graph.hidden()

    single = hidden_activations(
        parameters.w0.detach(), parameters.b0.detach(), batch.inputs[5].tolist()
    )
    assert single.shape == (3,)
    assert torch.allclose(single, hidden[5])


def test_cost_lives_beside_the_network():
    """The models package depends on nothing from training."""
    import permnet.models.network as network
    import permnet.training as training
    from permnet.models import losses

    assert network.quadratic_cost is losses.quadratic_cost
    assert 'quadratic_cost' not in training.__all__
