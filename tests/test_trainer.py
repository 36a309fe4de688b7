"""
Test Trainer

Gradient clipping inside the loop, determinism, symmetric mode and a full
256-iteration run on one synthetic record.
"""

import json
import math

import pytest
import torch

from permnet.core.config import PermutationConfig, FAST_TEST_CONFIG
from permnet.models.network import AutodiffGraph
from permnet.training.datasets import Record, expand_records
from permnet.training.stability import StabilityError, check_finite_loss
from permnet.training.trainer import PermutationTrainer


@pytest.fixture
def pairs():
    return expand_records([Record("synthetic", (1.0, 2.0, 3.0, 4.0))])


def fixed_gradient_graph(fill: complex, loss: complex = 1 + 0j):
    """AutodiffGraph whose gradients are constant tensors."""

    class FixedGradientGraph(AutodiffGraph):
        def __init__(self, parameters, batch):
            super().__init__(parameters)

        def forward_backward(self):
            return loss

        def gradients(self):
            return [torch.full_like(p, fill) for p in self.parameters.tensors()]

    return FixedGradientGraph


def test_update_scaled_by_inverse_norm(pairs):
    """
    Norm > 1: every parameter moves by exactly -eta * g / norm.
    """
    config = PermutationConfig(iterations=1, log_interval=0)
    trainer = PermutationTrainer(config, pairs, graph_cls=fixed_gradient_graph(1 + 1j))
    before = trainer.parameters.snapshot()

    metrics = trainer.step()

    norm = math.sqrt(2 * trainer.parameters.numel())
    assert metrics.grad_norm == pytest.approx(norm)
    assert metrics.clipped
    assert metrics.clip_scale == pytest.approx(1 / norm)

    for b, p in zip(before, trainer.parameters.snapshot()):
        expected = b - config.eta * (1 + 1j) / norm
        assert torch.allclose(p, expected)


def test_update_unscaled_below_threshold(pairs):
    """
    Norm <= 1: gradients are applied as they are.
    """
    config = PermutationConfig(iterations=1, log_interval=0)
    trainer = PermutationTrainer(config, pairs, graph_cls=fixed_gradient_graph(0.01j))
    before = trainer.parameters.snapshot()

    metrics = trainer.step()

    assert metrics.grad_norm <= 1.0
    assert not metrics.clipped
    assert metrics.clip_scale == 1.0
    for b, p in zip(before, trainer.parameters.snapshot()):
        assert torch.allclose(p, b - config.eta * 0.01j)


def test_loss_series_records_magnitude_and_phase(pairs):
    config = PermutationConfig(iterations=3, log_interval=0)
    trainer = PermutationTrainer(config, pairs, graph_cls=fixed_gradient_graph(0j, loss=1j))
    result = trainer.train()

    assert [x for x, _ in result.points_abs] == [0.0, 1.0, 2.0]
    assert all(y == pytest.approx(1.0) for _, y in result.points_abs)
    assert all(y == pytest.approx(math.pi / 2) for _, y in result.points_phase)
    assert len(result.history) == 3


def test_non_finite_loss_aborts(pairs):
    config = PermutationConfig(iterations=1, log_interval=0)
    trainer = PermutationTrainer(
        config, pairs, graph_cls=fixed_gradient_graph(0j, loss=complex('nan'))
    )
    with pytest.raises(StabilityError):
        trainer.train()

    with pytest.raises(StabilityError):
        check_finite_loss(complex(float('inf'), 0), step=7)


def test_deterministic_runs(pairs):
    """
    Same seed and mode: identical parameters and cost series.
    """
    a = PermutationTrainer(FAST_TEST_CONFIG, pairs).train()
    b = PermutationTrainer(FAST_TEST_CONFIG, pairs).train()

    assert a.points_abs == b.points_abs
    assert a.points_phase == b.points_phase
    for x, y in zip(a.parameters.snapshot(), b.parameters.snapshot()):
        assert torch.equal(x, y)


def test_deterministic_symmetric_runs(pairs):
    """
    Symmetric mode with 24 heads is just as repeatable.
    """
    config = PermutationConfig(symmetry=True, iterations=4, log_interval=0)
    a = PermutationTrainer(config, pairs).train()
    b = PermutationTrainer(config, pairs).train()

    assert a.parameters.n_heads == 24
    assert a.points_abs == b.points_abs
    assert a.points_phase == b.points_phase
    for x, y in zip(a.parameters.snapshot(), b.parameters.snapshot()):
        assert torch.equal(x, y)


def test_different_seed_differs(pairs):
    a = PermutationTrainer(PermutationConfig(iterations=1, seed=1, log_interval=0), pairs)
    b = PermutationTrainer(PermutationConfig(iterations=1, seed=2, log_interval=0), pairs)
    assert not torch.equal(a.parameters.w0, b.parameters.w0)


def test_full_run_single_record(pairs):
    """
    One record, width 4, middle 3, non-symmetric, seed 1, 256 iterations.
    """
    config = PermutationConfig(width=4, middle=3, seed=1, iterations=256, log_interval=0)
    trainer = PermutationTrainer(config, pairs)

    assert len(trainer.dataset) == 24
    result = trainer.train()

    losses = [y for _, y in result.points_abs]
    assert len(losses) == 256
    assert all(math.isfinite(v) for v in losses)
    assert losses[-1] < losses[0]
    for p in result.parameters.tensors():
        assert torch.isfinite(p).all()


def test_symmetric_mode(pairs):
    """
    Symmetric mode: 24 heads, 24 target buffers, 24 summed cost terms.
    """
    config = PermutationConfig(symmetry=True, iterations=2, log_interval=0)
    trainer = PermutationTrainer(config, pairs)

    assert trainer.parameters.n_heads == 24
    assert len(trainer.batch.targets) == 24

    terms = trainer.graph.cost_terms()
    assert len(terms) == 24
    with torch.no_grad():
        total = sum(t.item() for t in terms)
        assert trainer.graph.cost().item() == pytest.approx(total)

    result = trainer.train()
    assert len(result.points_abs) == 2


def test_history_saved_to_json(pairs, tmp_path):
    config = PermutationConfig(iterations=4, log_interval=2, log_dir=str(tmp_path))
    PermutationTrainer(config, pairs).train()

    history = json.loads((tmp_path / "training_log.json").read_text())
    assert [m['iteration'] for m in history] == [0, 1, 2, 3]
    assert all('grad_norm' in m for m in history)
