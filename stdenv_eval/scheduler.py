"""stdenv_eval.scheduler

Driver for straddled evaluation tasks.

:func:`run_straddled` is the one place the two-phase ordering is decided:
every task sees the target branch, then ``merge`` moves the checkout once,
then every task sees the merged tree. Task results are folded into a single
:class:`~stdenv_eval.models.EvaluationResult`.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from stdenv_eval.models import EvaluationResult
from stdenv_eval.straddled import StraddledEvaluationTask

logger = logging.getLogger(__name__)


def run_straddled(
    tasks: Sequence[StraddledEvaluationTask],
    merge: Callable[[], None],
    *,
    announce: Callable[[str], None] = print,
) -> EvaluationResult:
    """Run ``tasks`` around a single call to ``merge``.

    Exceptions from ``merge`` propagate; no task has its ``after_merge`` or
    ``results`` called in that case.
    """
    for task in tasks:
        announce(task.before_on_target_branch_message())
        task.on_target_branch()

    logger.info("Merging change into checkout")
    merge()

    for task in tasks:
        announce(task.before_after_merge_message())
        task.after_merge()

    combined = EvaluationResult(tags=None)
    for task in tasks:
        combined = combined.merge(task.results())
    return combined
