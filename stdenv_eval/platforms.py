"""stdenv_eval.platforms

Central registry of platforms whose stdenv is compared.

Why this exists
---------------
Several parts of the code need to agree on the *same* platform facts:
- which platforms are compared, and in which order (comparator)
- the canonical system string handed to the evaluator (probe)
- the tag applied when that platform's stdenv changes (tagger)

Defining them once here means adding a platform is one enum member plus one
registry row. A platform missing from :data:`PLATFORMS` is never compared.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple


class Platform(enum.Enum):
    X86_64_LINUX = "x86_64-linux"
    X86_64_DARWIN = "x86_64-darwin"


@dataclass(frozen=True)
class PlatformInfo:
    """Static metadata describing one supported platform."""

    platform: Platform
    system: str
    label: str
    tag: str


_PLATFORM_LIST: Tuple[PlatformInfo, ...] = (
    PlatformInfo(
        platform=Platform.X86_64_LINUX,
        system="x86_64-linux",
        label="Linux (x86_64)",
        tag="10.rebuild-linux-stdenv",
    ),
    PlatformInfo(
        platform=Platform.X86_64_DARWIN,
        system="x86_64-darwin",
        label="Darwin (x86_64)",
        tag="10.rebuild-darwin-stdenv",
    ),
)

PLATFORMS: Dict[Platform, PlatformInfo] = {p.platform: p for p in _PLATFORM_LIST}

# Declaration order of the enum, restricted to registered platforms.
ALL_PLATFORMS: Tuple[Platform, ...] = tuple(p for p in Platform if p in PLATFORMS)

PLATFORM_SYSTEMS: Dict[Platform, str] = {k: v.system for k, v in PLATFORMS.items()}
PLATFORM_TAGS: Dict[Platform, str] = {k: v.tag for k, v in PLATFORMS.items()}
PLATFORM_LABELS: Dict[Platform, str] = {k: v.label for k, v in PLATFORMS.items()}
SUPPORTED_SYSTEMS: FrozenSet[str] = frozenset(PLATFORM_SYSTEMS.values())


def system_of(platform: Platform) -> str:
    return PLATFORMS[platform].system


def platform_from_system(system: str) -> Platform:
    s = (system or "").strip()
    for info in _PLATFORM_LIST:
        if info.system == s:
            return info.platform
    raise ValueError(f"Unsupported system {system!r}. Expected one of: {sorted(SUPPORTED_SYSTEMS)}")
