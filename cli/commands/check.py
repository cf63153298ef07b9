from __future__ import annotations

import argparse
import logging
from functools import partial
from pathlib import Path
from typing import Callable, Optional

from stdenv_eval.config import EvalConfig
from stdenv_eval.models import EvaluationResult
from stdenv_eval.platforms import PLATFORM_LABELS
from stdenv_eval.scheduler import run_straddled
from stdenv_eval.wiring import build_stdenv_task
from tools.core_cmd import run_cmd
from tools.core_git import checkout_ref, get_git_commit, merge_ref
from tools.io import write_json
from tools.nix import Runner

logger = logging.getLogger(__name__)


def _merge_step(args: argparse.Namespace, checkout: Path) -> Callable[[], None]:
    if args.assume_merged or not args.merge_ref:
        return lambda: None
    return partial(merge_ref, checkout, args.merge_ref)


def run_check(
    args: argparse.Namespace,
    config: EvalConfig,
    *,
    runner: Runner = run_cmd,
    merge: Optional[Callable[[], None]] = None,
) -> EvaluationResult:
    """Compare the checkout's stdenvs before and after merging ``--merge-ref``.

    ``merge`` replaces the git merge step (tests).
    """
    checkout = Path(args.checkout).resolve()
    if not checkout.is_dir():
        raise SystemExit(f"Checkout not found: {checkout}")

    if args.target_ref:
        checkout_ref(checkout, args.target_ref)

    print("\n🔍 Checking stdenvs")
    print(f"  Checkout : {checkout}")
    print(f"  Commit   : {get_git_commit(checkout) or 'unknown'}")
    print(f"  Timeout  : {config.timeout_seconds}s per evaluation")

    task = build_stdenv_task(checkout, config, runner=runner)
    result = run_straddled(
        [task],
        merge if merge is not None else _merge_step(args, checkout),
        announce=lambda msg: print(f"▶ {msg}"),
    )

    stdenvs = task.stdenvs
    print("\n  stdenvs:")
    for platform in stdenvs.platforms:
        print(f"  {PLATFORM_LABELS[platform]}")
        print(f"    before : {stdenvs.before(platform) or '(evaluation failed)'}")
        print(f"    after  : {stdenvs.after(platform) or '(evaluation failed)'}")

    if result.tags is None:
        print("\n✅ No stdenv changes.")
    else:
        print("\n⚠️ stdenv changed.")
        print(f"  Add    : {', '.join(sorted(result.tags.add)) or '-'}")
        print(f"  Delete : {', '.join(sorted(result.tags.delete)) or '-'}")

    if args.output:
        out = Path(args.output)
        write_json(out, {**result.to_dict(), "stdenvs": stdenvs.snapshot()})
        logger.info("Wrote %s", out)

    return result
