"""stdenv_eval.probe

Evaluation probe: ask the evaluator for the stdenv output path of one
platform in one checkout.

The probe is the only place that talks to the evaluator, and the only place
evaluator failures are absorbed. Every failure mode (non-zero exit, timeout,
empty output, evaluator missing from PATH) resolves to ``None`` and is
logged; nothing is raised to the comparator.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from stdenv_eval.platforms import Platform, system_of
from tools.core_cmd import run_cmd
from tools.nix import NixEvaluator, Operation, Runner

logger = logging.getLogger(__name__)

STDENV_ATTR = "stdenv"


class StdenvProbe:
    def __init__(
        self,
        evaluator: NixEvaluator,
        *,
        runner: Runner = run_cmd,
        attr: str = STDENV_ATTR,
    ) -> None:
        self.evaluator = evaluator
        self.runner = runner
        self.attr = attr

    def probe(self, platform: Platform, checkout_path: Path) -> Optional[str]:
        """Return the trimmed output path of ``attr`` for ``platform``, or None."""
        system = system_of(platform)
        evaluator = self.evaluator.with_system(system)

        try:
            result = evaluator.safely(
                Operation.QUERY_PACKAGES_OUTPUTS,
                Path(checkout_path),
                ["-f", ".", "-A", self.attr],
                runner=self.runner,
            )
        except OSError as e:
            logger.error("Could not start evaluator for %s on %s: %s", self.attr, system, e)
            return None

        logger.debug("Evaluator result for %s on %s: %r", self.attr, system, result)

        if result.timed_out:
            logger.warning(
                "Evaluating %s on %s timed out after %ss",
                self.attr,
                system,
                evaluator.timeout_seconds,
            )
            return None

        if result.exit_code != 0:
            logger.warning(
                "Evaluating %s on %s failed (exit %s): %s",
                self.attr,
                system,
                result.exit_code,
                (result.stderr or result.stdout).strip(),
            )
            return None

        identifier = (result.stdout or "").strip()
        if not identifier:
            logger.warning("Evaluating %s on %s produced no output", self.attr, system)
            return None

        logger.info("%s on %s: %s", self.attr, system, identifier)
        return identifier
