"""
Training Metrics and Logging

Per-iteration metrics for permutation network training.

Tracks:
- Progress (iteration)
- Complex cost (magnitude, phase, real and imaginary parts)
- Gradient information (global norm, clip factor)
- Timing
"""

import cmath
import json
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Optional


@dataclass
class TrainingMetrics:
    """Metrics of one full-batch iteration."""

    iteration: int = 0

    # Cost
    loss_abs: float = 0.0
    loss_phase: float = 0.0
    loss_real: float = 0.0
    loss_imag: float = 0.0

    # Gradients
    grad_norm: float = 0.0
    clip_scale: float = 1.0
    clipped: bool = False

    # Timing
    step_time: float = 0.0

    @classmethod
    def from_loss(cls, iteration: int, loss: complex, **kwargs) -> "TrainingMetrics":
        return cls(
            iteration=iteration,
            loss_abs=abs(loss),
            loss_phase=cmath.phase(loss),
            loss_real=loss.real,
            loss_imag=loss.imag,
            **kwargs
        )


class MetricsLogger:
    """
    Logger for training metrics.

    Handles:
    - Console logging every log_interval iterations
    - History of every iteration
    - JSON dump of the history (when log_dir is set)
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        log_interval: int = 32
    ):
        """
        Args:
            log_dir: Directory for JSON logs (None disables saving)
            log_interval: Print every N iterations (0 disables printing)
        """
        self.log_dir = Path(log_dir) if log_dir is not None else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_interval = log_interval
        self.history: List[Dict] = []
        self.step_start_time = None

    def start_step(self):
        """Mark start of an iteration."""
        self.step_start_time = time.time()

    def elapsed(self) -> float:
        if self.step_start_time is None:
            return 0.0
        return time.time() - self.step_start_time

    def log_step(self, metrics: TrainingMetrics):
        """
        Record metrics for one iteration, printing on the log interval.

        Args:
            metrics: TrainingMetrics to log
        """
        self.history.append(asdict(metrics))

        if self.log_interval > 0 and metrics.iteration % self.log_interval == 0:
            flag = " (clipped)" if metrics.clipped else ""
            print(
                f"iter {metrics.iteration:5d} | "
                f"|cost| {metrics.loss_abs:.6f} | "
                f"arg {metrics.loss_phase:+.4f} | "
                f"|grad| {metrics.grad_norm:.6f}{flag}"
            )

    def save_logs(self, filename: str = "training_log.json") -> Optional[Path]:
        """
        Save metrics history to JSON file.

        Args:
            filename: Output filename inside log_dir

        Returns:
            Path written, or None when no log_dir is configured
        """
        if self.log_dir is None:
            return None
        log_path = self.log_dir / filename
        with open(log_path, 'w') as f:
            json.dump(self.history, f, indent=2)
        print(f"Logs saved to: {log_path}")
        return log_path

    def print_summary(self):
        """Print summary statistics."""
        if len(self.history) == 0:
            print("No metrics to summarize.")
            return

        losses = [m['loss_abs'] for m in self.history]
        clipped = sum(1 for m in self.history if m['clipped'])
        total_time = sum(m['step_time'] for m in self.history)

        print("\n" + "=" * 60)
        print("TRAINING SUMMARY")
        print("=" * 60)
        print(f"Iterations:        {len(self.history)}")
        print(f"Initial |cost|:    {losses[0]:.6f}")
        print(f"Final |cost|:      {losses[-1]:.6f}")
        print(f"Best |cost|:       {min(losses):.6f}")
        print(f"Clipped steps:     {clipped}")
        print(f"Total time:        {total_time:.2f}s")
        print("=" * 60 + "\n")
