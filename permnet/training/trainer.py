"""
Permutation Trainer

Full-batch gradient descent over complex parameters with global gradient
norm clipping.

Per iteration:
1. Zero parameter gradients and the batch buffers' gradient slots
2. Forward + backward pass (complex scalar cost)
3. Global L2 norm of every gradient entry of every parameter
4. Scale gradients by threshold/norm when the norm exceeds the threshold
5. p ← p - η · scale · g
6. Record (iteration, |cost|) and (iteration, arg cost)

The loop always runs the configured number of iterations. There is no
early stopping and no validation split.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Type

import torch

from ..core.config import PermutationConfig
from ..kernels.gradients import global_gradient_norm, clip_scale, apply_update
from ..models.network import AutodiffGraph, NetworkGraph, Parameters
from .datasets import PermutationDataset, TrainingPair
from .metrics import MetricsLogger, TrainingMetrics
from .stability import check_finite_loss, check_finite_gradients


Points = List[Tuple[float, float]]


@dataclass
class TrainingResult:
    """Trained parameters plus the cost series of every iteration."""
    parameters: Parameters
    points_abs: Points = field(default_factory=list)
    points_phase: Points = field(default_factory=list)
    history: List[Dict] = field(default_factory=list)

    @property
    def final_loss_abs(self) -> float:
        return self.points_abs[-1][1] if self.points_abs else float('nan')


class PermutationTrainer:
    """
    Trainer for the complex permutation network.

    Args:
        config: PermutationConfig
        pairs: Expanded training pairs (see expand_records)
        graph_cls: AutodiffGraph implementation built over (parameters, batch)
    """

    def __init__(
        self,
        config: PermutationConfig,
        pairs: Sequence[TrainingPair],
        graph_cls: Type[AutodiffGraph] = NetworkGraph
    ):
        self.config = config
        self.pairs = list(pairs)

        # Single seeded generator for every random draw of the run
        self.generator = torch.Generator().manual_seed(config.seed)

        self.parameters = Parameters.initialize(
            width=config.width,
            middle=config.middle,
            n_heads=config.n_heads,
            generator=self.generator,
            init_range=config.init_range,
            dtype=config.dtype
        )

        self.dataset = PermutationDataset(
            self.pairs,
            symmetry=config.symmetry,
            dtype=config.dtype
        )
        self.batch = self.dataset.batch()
        self.graph = graph_cls(self.parameters, self.batch)

        self.metrics_logger = MetricsLogger(
            log_dir=config.log_dir,
            log_interval=config.log_interval
        )

        # Tracking
        self.iteration = 0
        self.points_abs: Points = []
        self.points_phase: Points = []

    def step(self) -> TrainingMetrics:
        """Run one full-batch iteration."""
        self.metrics_logger.start_step()

        self.graph.zero_grad()
        loss = self.graph.forward_backward()
        check_finite_loss(loss, self.iteration)

        grads = self.graph.gradients()
        check_finite_gradients(
            zip((name for name, _ in self.parameters.named()), grads),
            self.iteration
        )

        norm = global_gradient_norm(grads)
        scale = clip_scale(norm, self.config.clip_threshold)
        apply_update(self.parameters.tensors(), grads, self.config.eta, scale)

        metrics = TrainingMetrics.from_loss(
            self.iteration,
            loss,
            grad_norm=norm,
            clip_scale=scale,
            clipped=norm > self.config.clip_threshold,
            step_time=self.metrics_logger.elapsed()
        )
        self.points_abs.append((float(self.iteration), metrics.loss_abs))
        self.points_phase.append((float(self.iteration), metrics.loss_phase))
        self.metrics_logger.log_step(metrics)

        self.iteration += 1
        return metrics

    def train(self, iterations: Optional[int] = None) -> TrainingResult:
        """
        Run the full loop.

        Args:
            iterations: Override config.iterations

        Returns:
            TrainingResult
        """
        n = self.config.iterations if iterations is None else iterations

        print("=" * 60)
        print("Permutation Network Training")
        print("=" * 60)
        print(f"Mode:        {'symmetric' if self.config.symmetry else 'non-symmetric'}")
        print(f"Records:     {len(self.pairs)}")
        print(f"Rows:        {len(self.dataset)}")
        print(f"Heads:       {self.parameters.n_heads}")
        print(f"Parameters:  {self.parameters.numel():,} complex")
        print(f"Iterations:  {n}")
        print("=" * 60)

        for _ in range(n):
            self.step()

        self.metrics_logger.print_summary()
        self.metrics_logger.save_logs()

        return TrainingResult(
            parameters=self.parameters,
            points_abs=list(self.points_abs),
            points_phase=list(self.points_phase),
            history=list(self.metrics_logger.history)
        )
