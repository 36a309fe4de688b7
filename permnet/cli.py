#!/usr/bin/env python3
"""
CLI wrapper for permutation network training.

Usage:
    permnet              # non-symmetric: every permutation -> canonical ordering
    permnet --symmetry   # fully symmetric: one output head per permutation
"""

import argparse
import sys

from permnet.core.config import PermutationConfig
from permnet.main import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Train a complex-valued network to undo coordinate permutations of iris records'
    )
    parser.add_argument('--symmetry', action='store_true', default=False,
                        help='fully symmetric network (default: false)')
    return parser


def main(argv=None) -> int:
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)

    try:
        run(PermutationConfig(symmetry=args.symmetry))
    except Exception as e:
        print(f"ERROR: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
