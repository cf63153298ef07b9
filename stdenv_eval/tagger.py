"""stdenv_eval.tagger

Turn a list of changed platforms into a tag diff.

Every registered platform tag is *possible*; the changed platforms' tags
are *selected*. Selected tags are added and every other possible tag is
removed, so a stale tag from an earlier push is cleared.
"""

from __future__ import annotations

from typing import Iterable, List, Set

from stdenv_eval.platforms import PLATFORM_TAGS, Platform


class StdenvTagger:
    def __init__(self) -> None:
        self.possible: List[str] = sorted(PLATFORM_TAGS.values())
        self.selected: List[str] = []

    def changed(self, platforms: Iterable[Platform]) -> None:
        for platform in platforms:
            tag = PLATFORM_TAGS.get(platform)
            if tag is None or tag not in self.possible:
                raise ValueError(f"Platform {platform!r} has no registered stdenv tag")
            if tag not in self.selected:
                self.selected.append(tag)

    def tags_to_add(self) -> Set[str]:
        return set(self.selected)

    def tags_to_remove(self) -> Set[str]:
        return set(self.possible) - set(self.selected)
