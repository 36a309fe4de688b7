"""
Utilities for the Complex Permutation Network

Cost plots and Markdown tables.
"""

from .visualization import (
    plot_cost,
    plot_cost_history
)

from .table import (
    column_widths,
    format_row,
    format_table,
    write_table
)

__all__ = [
    # Visualization
    'plot_cost',
    'plot_cost_history',

    # Tables
    'column_widths',
    'format_row',
    'format_table',
    'write_table',
]
