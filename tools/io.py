"""tools/io.py

Single source of truth for tiny filesystem helpers.

Keep the actual implementations here and have other modules import them, so
JSON formatting (indentation, key order, trailing newline) never drifts
between the CLI and the tests that read its output.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def write_json(path: Path, data: Any) -> None:
    """Write pretty JSON to disk (UTF-8)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=True)
        f.write("\n")
