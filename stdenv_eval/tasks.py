"""stdenv_eval.tasks

Straddled task that flags stdenv changes.

:class:`StdenvChangeTask` adapts a :class:`~stdenv_eval.stdenvs.Stdenvs`
comparator to the straddled lifecycle and turns its changed platforms into
a :class:`~stdenv_eval.models.TagDiff`.

Ordering notes
--------------
The task tracks its :class:`~stdenv_eval.straddled.TaskPhase`. A call made
out of order is logged and still executed against whatever state exists:
calling ``results()`` before ``after_merge()`` compares populated "before"
slots with empty "after" slots and reports those platforms as changed.
Only reuse after ``results()`` is an error.
"""

from __future__ import annotations

import logging
from typing import Callable

from stdenv_eval.models import EvaluationResult, TagDiff
from stdenv_eval.platforms import system_of
from stdenv_eval.stdenvs import Stdenvs
from stdenv_eval.straddled import StraddledEvaluationTask, TaskConsumedError, TaskPhase
from stdenv_eval.tagger import StdenvTagger

logger = logging.getLogger(__name__)


class StdenvChangeTask(StraddledEvaluationTask):
    def __init__(
        self,
        stdenvs: Stdenvs,
        *,
        tagger_factory: Callable[[], StdenvTagger] = StdenvTagger,
    ) -> None:
        self.stdenvs = stdenvs
        self.tagger_factory = tagger_factory
        self.phase = TaskPhase.CREATED

    def before_on_target_branch_message(self) -> str:
        return "Identifying target branch's stdenvs"

    def on_target_branch(self) -> None:
        self._enter(TaskPhase.CREATED, TaskPhase.BEFORE_DONE, "on_target_branch")
        self.stdenvs.identify_before()

    def before_after_merge_message(self) -> str:
        return "Identifying new stdenvs"

    def after_merge(self) -> None:
        self._enter(TaskPhase.BEFORE_DONE, TaskPhase.AFTER_DONE, "after_merge")
        self.stdenvs.identify_after()

    def results(self) -> EvaluationResult:
        self._enter(TaskPhase.AFTER_DONE, TaskPhase.CONSUMED, "results")

        if self.stdenvs.are_same():
            logger.info("No stdenv changes detected")
            return EvaluationResult(tags=None)

        changed = self.stdenvs.changed()
        logger.info("stdenv changed on: %s", ", ".join(system_of(p) for p in changed))

        tagger = self.tagger_factory()
        tagger.changed(changed)
        return EvaluationResult(
            tags=TagDiff.of(
                add=tagger.tags_to_add(),
                delete=tagger.tags_to_remove(),
            )
        )

    def _enter(self, expected: TaskPhase, new: TaskPhase, action: str) -> None:
        if self.phase is TaskPhase.CONSUMED:
            raise TaskConsumedError(f"{action}() called after results() consumed the task")
        if self.phase is not expected:
            logger.warning(
                "%s() called in phase %s (expected %s); continuing with partial state",
                action,
                self.phase.value,
                expected.value,
            )
        self.phase = new
