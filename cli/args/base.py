from __future__ import annotations

import argparse


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register the flags of the stdenv check.

    This includes:
    - the checkout and how to move it between phases
    - configuration sources and overrides
    - output and verbosity
    """

    parser.add_argument(
        "--checkout",
        required=True,
        help="Path to a git checkout of the package collection. It is modified in place.",
    )
    parser.add_argument(
        "--target-ref",
        default=None,
        help="Ref to check out before the first phase. If omitted, the current HEAD is used.",
    )
    parser.add_argument(
        "--merge-ref",
        default=None,
        help="Ref (e.g. the proposed change) merged into the checkout between the two phases.",
    )
    parser.add_argument(
        "--assume-merged",
        action="store_true",
        help="Do not merge anything between phases (useful for comparing a checkout against itself).",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML config file (keys: system, nix_remote, timeout_seconds, ...).",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Per-evaluation timeout in seconds (overrides config and STDENV_EVAL_TIMEOUT).",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Write the evaluation result as JSON to this path.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
