"""tools/core_git.py

Git helpers used by the CLI to position a checkout between the two phases of
a straddled evaluation.

The comparison core never touches the checkout; only the outer driver
(see :mod:`cli.commands.check`) calls :func:`checkout_ref` and
:func:`merge_ref`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .core_cmd import CmdResult, run_cmd

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 300

# Identity for the merge commit; CI hosts often have no user.name/user.email.
MERGE_IDENTITY = ["-c", "user.name=stdenv-check", "-c", "user.email=stdenv-check@localhost"]


class GitError(RuntimeError):
    """A git command needed to prepare the checkout failed."""

    def __init__(self, message: str, result: Optional[CmdResult] = None) -> None:
        self.result = result
        super().__init__(message)

    @classmethod
    def from_result(cls, result: CmdResult) -> "GitError":
        detail = (result.stderr or result.stdout or "").strip()
        return cls(f"`{result.command_str}` exited {result.exit_code}: {detail}", result)


def _git(
    repo_path: Path,
    args: List[str],
    *,
    timeout_seconds: int = GIT_TIMEOUT_SECONDS,
    config: Optional[List[str]] = None,
) -> CmdResult:
    cmd = ["git", *(config or []), "-C", str(repo_path), *args]
    try:
        return run_cmd(
            cmd,
            timeout_seconds=timeout_seconds,
            print_stderr=False,
            print_stdout=False,
        )
    except OSError as e:
        raise GitError(f"Could not run `{' '.join(cmd)}`: {e}") from e


def get_git_commit(repo_path: Path) -> Optional[str]:
    """Return the current commit SHA for the repo at repo_path.

    Returns None if repo_path is not a git repo or git is unavailable.
    """
    try:
        res = _git(repo_path, ["rev-parse", "HEAD"], timeout_seconds=20)
    except GitError:
        return None
    sha = (res.stdout or "").strip()
    return sha if res.exit_code == 0 and sha else None


def checkout_ref(repo_path: Path, ref: str) -> None:
    """Check out ``ref`` (detached) in the repo at repo_path."""
    res = _git(repo_path, ["checkout", "--detach", "--force", ref])
    if not res.ok:
        raise GitError.from_result(res)
    logger.info("Checked out %s in %s", ref, repo_path)


def merge_ref(repo_path: Path, ref: str) -> None:
    """Merge ``ref`` into the current HEAD; a conflicting merge is aborted."""
    res = _git(repo_path, ["merge", "--no-edit", "--no-ff", ref], config=MERGE_IDENTITY)
    if not res.ok:
        _git(repo_path, ["merge", "--abort"])
        raise GitError.from_result(res)
    logger.info("Merged %s into %s", ref, repo_path)
