#!/usr/bin/env python3
"""
CLI for the stdenv change check.

Evaluates the stdenv output path of every supported platform on the target
branch, merges the proposed change into the checkout, evaluates again, and
reports which rebuild tags to add and remove.

Usage:
  python stdenv_cli.py --checkout ~/nixpkgs --target-ref origin/master --merge-ref pr-1234
  python stdenv_cli.py --checkout ~/nixpkgs --assume-merged --output result.json
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from cli.args.base import add_base_args
from cli.commands.check import run_check
from stdenv_eval.config import ConfigError, load_config
from tools.core_git import GitError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Detect stdenv changes between a target branch and a merged change."
    )
    add_base_args(parser)
    args = parser.parse_args(argv)
    if not args.merge_ref and not args.assume_merged:
        parser.error("--merge-ref is required unless --assume-merged is given")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(Path(args.config) if args.config else None)
        if args.timeout is not None:
            config = config.with_overrides({"timeout_seconds": args.timeout})
    except (ConfigError, FileNotFoundError) as e:
        print(f"\n❌ Config error: {e}")
        return 2

    try:
        run_check(args, config)
    except GitError as e:
        print(f"\n❌ Could not prepare checkout: {e}")
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
