"""stdenv_eval.stdenvs

Before/after comparison of stdenv output paths across platforms.

The comparator probes every registered platform twice: once with the
checkout on the target branch (:meth:`Stdenvs.identify_before`) and once
after the change has been merged into it (:meth:`Stdenvs.identify_after`).
Moving the checkout between the two calls is the caller's job.

Results are ``Optional[str]``: ``None`` means the probe failed. A failure on
one side and a path on the other is always a change. Two failures compare
according to :class:`AbsencePolicy`; the default treats them as equal, so a
platform that never evaluates is never flagged.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from stdenv_eval.platforms import ALL_PLATFORMS, Platform, system_of

logger = logging.getLogger(__name__)


class Probe(Protocol):
    def probe(self, platform: Platform, checkout_path: Path) -> Optional[str]: ...


class AbsencePolicy(enum.Enum):
    """How two failed probes for the same platform compare."""

    SAME = "same"
    CHANGED = "changed"

    @classmethod
    def parse(cls, raw: str) -> "AbsencePolicy":
        s = (raw or "").strip().lower()
        for policy in cls:
            if policy.value == s:
                return policy
        raise ValueError(f"Unknown absence policy {raw!r}. Expected one of: {[p.value for p in cls]}")


class _From(enum.Enum):
    BEFORE = "before"
    AFTER = "after"


def differs(before: Optional[str], after: Optional[str], policy: AbsencePolicy = AbsencePolicy.SAME) -> bool:
    if before is None and after is None:
        return policy is AbsencePolicy.CHANGED
    return before != after


class Stdenvs:
    def __init__(
        self,
        probe: Probe,
        checkout: Path,
        *,
        platforms: Iterable[Platform] = ALL_PLATFORMS,
        absence_policy: AbsencePolicy = AbsencePolicy.SAME,
    ) -> None:
        self.probe = probe
        self.checkout = Path(checkout)
        self.absence_policy = absence_policy
        # Comparison order follows declaration order, whatever order was passed in.
        wanted = set(platforms)
        self.platforms: Sequence[Platform] = tuple(p for p in Platform if p in wanted)

        self._before: Dict[Platform, Optional[str]] = {p: None for p in self.platforms}
        self._after: Dict[Platform, Optional[str]] = {p: None for p in self.platforms}

    def identify_before(self) -> None:
        for platform in self.platforms:
            self._identify(platform, _From.BEFORE)

    def identify_after(self) -> None:
        for platform in self.platforms:
            self._identify(platform, _From.AFTER)

    def are_same(self) -> bool:
        return len(self.changed()) == 0

    def changed(self) -> List[Platform]:
        return [
            p
            for p in self.platforms
            if differs(self._before[p], self._after[p], self.absence_policy)
        ]

    def before(self, platform: Platform) -> Optional[str]:
        return self._before[platform]

    def after(self, platform: Platform) -> Optional[str]:
        return self._after[platform]

    def snapshot(self) -> Dict[str, Dict[str, Optional[str]]]:
        """Per-system before/after paths, for reports and logs."""
        return {
            system_of(p): {"before": self._before[p], "after": self._after[p]}
            for p in self.platforms
        }

    def _identify(self, platform: Platform, side: _From) -> None:
        result = self.probe.probe(platform, self.checkout)
        if side is _From.BEFORE:
            self._before[platform] = result
        else:
            self._after[platform] = result
        logger.debug("stdenv %s %s: %s", side.value, system_of(platform), result)

    def __repr__(self) -> str:
        return f"Stdenvs(checkout={str(self.checkout)!r}, state={self.snapshot()!r})"
