"""tools/core_root.py

Shared *repository root* locator.

Kept in a tiny module so configuration code can import :data:`ROOT_DIR`
without creating circular imports.
"""

from __future__ import annotations

from pathlib import Path


# Repo root = parent of tools/
ROOT_DIR = Path(__file__).resolve().parents[1]
ENV_PATH = ROOT_DIR / ".env"
