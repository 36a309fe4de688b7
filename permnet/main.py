"""
Permutation network pipeline.

    records → permutations → training pairs → full-batch training → reports

Reports written to config.output_dir:
- cost_abs.png:   |cost| vs iteration
- cost_phase.png: arg cost vs iteration
- README.md:      hidden-layer magnitude and phase for every record
"""

import cmath
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .core.config import PermutationConfig, get_default_config
from .kernels.permutation import permute_record
from .models.network import Parameters, hidden_activations
from .training.datasets import Record, TrainingPair, expand_records, load_iris_records
from .training.trainer import PermutationTrainer, TrainingResult
from .utils.table import write_table
from .utils.visualization import plot_cost_history


def activation_rows(
    parameters: Parameters,
    pairs: Sequence[TrainingPair]
) -> Tuple[List[str], List[List[str]]]:
    """
    Hidden activations of each record's canonical permutation.

    Returns:
        headers: label, abs 0, phase 0, abs 1, phase 1, ...
        rows: one per record
    """
    headers = ["label"]
    for i in range(parameters.middle):
        headers.append(f"abs {i}")
        headers.append(f"phase {i}")

    w0 = parameters.w0.detach()
    b0 = parameters.b0.detach()

    rows = []
    for pair in pairs:
        row = [pair.label]
        for value in hidden_activations(w0, b0, pair.output).tolist():
            row.append(f"{abs(value):f}")
            row.append(f"{cmath.phase(value):f}")
        rows.append(row)

    return headers, rows


def write_activation_table(
    parameters: Parameters,
    pairs: Sequence[TrainingPair],
    path: Path
) -> Path:
    headers, rows = activation_rows(parameters, pairs)
    with open(path, 'w') as f:
        write_table(f, headers, rows)
    return path


def run(
    config: Optional[PermutationConfig] = None,
    records: Optional[Sequence[Record]] = None
) -> TrainingResult:
    """
    Train and write every report.

    Args:
        config: Run configuration (default: get_default_config())
        records: Input records (default: Fisher's iris data)

    Returns:
        TrainingResult of the run
    """
    config = config or get_default_config()
    if records is None:
        records = load_iris_records()

    pairs = expand_records(records, permute=permute_record, width=config.width)
    print(f"pairs {sum(len(pair.inputs) for pair in pairs)}")

    trainer = PermutationTrainer(config, pairs)
    result = trainer.train()

    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    abs_path, phase_path = plot_cost_history(
        result.points_abs,
        result.points_phase,
        output_dir
    )
    readme = write_activation_table(result.parameters, pairs, output_dir / "README.md")

    print(f"Plots saved to: {abs_path}, {phase_path}")
    print(f"Activations saved to: {readme}")
    return result
