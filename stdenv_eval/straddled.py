"""stdenv_eval.straddled

The straddled evaluation contract.

A straddled task does work on both sides of a merge. The driver calls, in
exactly this order and exactly once each::

    before_on_target_branch_message()   # label only
    on_target_branch()                  # checkout is on the target branch
    before_after_merge_message()        # label only
    after_merge()                       # checkout has the change merged
    results()                           # single use; the task is spent

Between ``on_target_branch`` and ``after_merge`` the driver (not the task)
moves the checkout.
"""

from __future__ import annotations

import abc
import enum

from stdenv_eval.models import EvaluationResult


class TaskPhase(enum.Enum):
    CREATED = "created"
    BEFORE_DONE = "before_done"
    AFTER_DONE = "after_done"
    CONSUMED = "consumed"


class TaskConsumedError(RuntimeError):
    """A task was used again after ``results()`` consumed it."""


class StraddledEvaluationTask(abc.ABC):
    @abc.abstractmethod
    def before_on_target_branch_message(self) -> str:
        ...

    @abc.abstractmethod
    def on_target_branch(self) -> None:
        ...

    @abc.abstractmethod
    def before_after_merge_message(self) -> str:
        ...

    @abc.abstractmethod
    def after_merge(self) -> None:
        ...

    @abc.abstractmethod
    def results(self) -> EvaluationResult:
        ...
