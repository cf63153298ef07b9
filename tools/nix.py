"""tools/nix.py

Thin adapter around the Nix command line evaluators.

The adapter knows how to build a *sandboxed* command line for one
:class:`Operation` against one checkout: the environment is cleared down to
``PATH``, evaluation is restricted, and the target system is pinned. It does
not interpret outputs; callers decide what a successful result means.
"""

from __future__ import annotations

import dataclasses
import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from .core_cmd import CmdResult, run_cmd

# Nix must not read or write the service user's home directory.
HOMELESS_SHELTER = "/homeless-shelter"

Runner = Callable[..., CmdResult]


class Operation(enum.Enum):
    """Evaluator operations, each mapping to one program and its fixed flags."""

    QUERY_PACKAGES_OUTPUTS = (
        "nix-env",
        ("--query", "--available", "--no-name", "--attr-path", "--out-path"),
    )

    @property
    def program(self) -> str:
        return self.value[0]

    @property
    def fixed_args(self) -> List[str]:
        return list(self.value[1])


@dataclass(frozen=True)
class NixCommand:
    argv: List[str]
    env: Dict[str, str]
    cwd: Path


@dataclass(frozen=True)
class NixEvaluator:
    """Evaluator settings shared by every invocation.

    ``timeout_seconds`` bounds both Nix's own ``build-timeout`` option and
    the wall-clock time we wait for the process.
    """

    system: str
    remote: str = ""
    timeout_seconds: int = 1200
    initial_heap_size: Optional[str] = None
    limit_supported_systems: bool = True

    def with_system(self, system: str) -> "NixEvaluator":
        return dataclasses.replace(self, system=system)

    def safe_command(
        self,
        operation: Operation,
        checkout: Path,
        args: Sequence[str],
    ) -> NixCommand:
        checkout = Path(checkout)
        env: Dict[str, str] = {
            "PATH": os.environ.get("PATH", ""),
            "HOME": HOMELESS_SHELTER,
            "NIX_PATH": f"nixpkgs={checkout}",
            "NIX_REMOTE": self.remote,
        }
        if self.initial_heap_size:
            env["GC_INITIAL_HEAP_SIZE"] = self.initial_heap_size

        argv: List[str] = [operation.program, *operation.fixed_args]
        argv += ["--show-trace"]
        argv += ["--option", "restrict-eval", "true"]
        argv += ["--option", "build-timeout", str(self.timeout_seconds)]
        argv += ["--argstr", "system", self.system]
        if self.limit_supported_systems:
            argv += ["--arg", "supportedSystems", f'["{self.system}"]']
        argv += list(args)

        return NixCommand(argv=argv, env=env, cwd=checkout)

    def safely(
        self,
        operation: Operation,
        checkout: Path,
        args: Sequence[str],
        *,
        runner: Runner = run_cmd,
    ) -> CmdResult:
        """Run ``operation`` against ``checkout``, bounded by ``timeout_seconds``.

        Like :func:`tools.core_cmd.run_cmd`, this never raises on evaluation
        failure; inspect the returned :class:`CmdResult`.
        """
        command = self.safe_command(operation, checkout, args)
        return runner(
            command.argv,
            cwd=command.cwd,
            timeout_seconds=self.timeout_seconds,
            env=command.env,
            print_stderr=False,
            print_stdout=False,
        )
