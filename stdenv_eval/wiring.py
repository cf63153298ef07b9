"""stdenv_eval.wiring

Composition root: the single place where an evaluator, probe, comparator,
and task are assembled from an :class:`~stdenv_eval.config.EvalConfig`.

Tests swap the ``runner`` for a stub so no evaluator is needed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from stdenv_eval.config import EvalConfig
from stdenv_eval.probe import StdenvProbe
from stdenv_eval.stdenvs import Stdenvs
from stdenv_eval.tasks import StdenvChangeTask
from tools.core_cmd import run_cmd
from tools.nix import NixEvaluator, Runner


def build_evaluator(config: EvalConfig) -> NixEvaluator:
    return NixEvaluator(
        system=config.system,
        remote=config.nix_remote,
        timeout_seconds=config.timeout_seconds,
        initial_heap_size=config.initial_heap_size,
        limit_supported_systems=config.limit_supported_systems,
    )


def build_stdenv_task(
    checkout: Path,
    config: Optional[EvalConfig] = None,
    *,
    runner: Runner = run_cmd,
) -> StdenvChangeTask:
    config = config or EvalConfig()
    probe = StdenvProbe(build_evaluator(config), runner=runner)
    stdenvs = Stdenvs(probe, Path(checkout), absence_policy=config.absence_policy)
    return StdenvChangeTask(stdenvs)
