"""tools/core_cmd.py

Command-execution helpers shared by the evaluator and git adapters.

This module deliberately avoids evaluator-specific knowledge. :func:`run_cmd`
runs a subprocess without ``shell=True`` and captures its output, bounded
by an optional timeout.
"""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# Exit code reported for a command killed by its timeout (matches coreutils `timeout`).
TIMEOUT_EXIT_CODE = 124


@dataclass(frozen=True)
class CmdResult:
    exit_code: int
    elapsed_seconds: float
    command_str: str
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


def _as_text(raw: object) -> str:
    # TimeoutExpired carries bytes even when text=True was requested.
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return str(raw)


def run_cmd(
    cmd: List[str],
    *,
    cwd: Optional[Path] = None,
    timeout_seconds: int = 0,
    env: Optional[Dict[str, str]] = None,
    print_stderr: bool = True,
    print_stdout: bool = False,
) -> CmdResult:
    """Run a subprocess and capture stdout/stderr (no ``shell=True``).

    ``env`` replaces the process environment entirely when given; callers
    that want to extend the current environment must merge it themselves.

    Never raises on non-zero exit codes or timeouts (a timeout is reported
    as exit code 124 with ``timed_out=True``). Only raises on execution
    errors (e.g. binary not found).
    """
    t0 = time.time()
    command_str = " ".join(cmd)

    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            text=True,
            errors="replace",
            capture_output=True,
            timeout=timeout_seconds if timeout_seconds and timeout_seconds > 0 else None,
            env=env,
        )
    except subprocess.TimeoutExpired as e:
        elapsed = time.time() - t0
        logger.warning("Command timed out after %.1fs: %s", elapsed, command_str)
        return CmdResult(
            exit_code=TIMEOUT_EXIT_CODE,
            elapsed_seconds=elapsed,
            command_str=command_str,
            stdout=_as_text(e.stdout),
            stderr=_as_text(e.stderr),
            timed_out=True,
        )
    elapsed = time.time() - t0

    # Nix writes evaluation progress and traces to stderr even on success.
    if print_stderr and proc.stderr:
        logger.info("%s", proc.stderr.rstrip())
    if print_stdout and proc.stdout:
        logger.info("%s", proc.stdout.rstrip())

    return CmdResult(
        exit_code=proc.returncode,
        elapsed_seconds=elapsed,
        command_str=command_str,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
