"""
Core configuration for the Complex Permutation Network

Main components:
- PermutationConfig: Configuration dataclass with all hyperparameters
- Presets: FAST_TEST_CONFIG (short runs)
"""

from .config import (
    PermutationConfig,
    get_default_config,
    FAST_TEST_CONFIG
)

__all__ = [
    'PermutationConfig',
    'get_default_config',
    'FAST_TEST_CONFIG',
]
