"""stdenv_eval.models

Result vocabulary shared by straddled evaluation tasks and their driver.

These are plain frozen dataclasses: an evaluation produces an
:class:`EvaluationResult`, and the only thing it carries is an optional
:class:`TagDiff`. ``tags=None`` means "leave the labels alone".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional


@dataclass(frozen=True)
class TagDiff:
    add: FrozenSet[str] = field(default_factory=frozenset)
    delete: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, add: Iterable[str], delete: Iterable[str]) -> "TagDiff":
        return cls(add=frozenset(add), delete=frozenset(delete))

    def merge(self, other: "TagDiff") -> "TagDiff":
        """Union two diffs; a tag some task adds is never deleted."""
        add = self.add | other.add
        return TagDiff(add=add, delete=(self.delete | other.delete) - add)

    def to_dict(self) -> Dict[str, Any]:
        return {"add": sorted(self.add), "delete": sorted(self.delete)}


@dataclass(frozen=True)
class EvaluationResult:
    tags: Optional[TagDiff] = None

    def merge(self, other: "EvaluationResult") -> "EvaluationResult":
        if self.tags is None:
            return other
        if other.tags is None:
            return self
        return EvaluationResult(tags=self.tags.merge(other.tags))

    def to_dict(self) -> Dict[str, Any]:
        return {"tags": self.tags.to_dict() if self.tags is not None else None}
