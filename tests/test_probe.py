import sys
import time
import unittest
from pathlib import Path

from stdenv_eval.platforms import Platform
from stdenv_eval.probe import StdenvProbe
from tools.core_cmd import CmdResult, TIMEOUT_EXIT_CODE, run_cmd
from tools.nix import NixEvaluator


def _result(exit_code: int = 0, stdout: str = "", stderr: str = "", timed_out: bool = False) -> CmdResult:
    return CmdResult(exit_code, 0.0, "nix-env", stdout, stderr, timed_out)


class RecordingRunner:
    def __init__(self, result: CmdResult) -> None:
        self.result = result
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        return self.result


class TestStdenvProbe(unittest.TestCase):
    def setUp(self) -> None:
        self.nix = NixEvaluator(system="x86_64-linux", timeout_seconds=30)

    def test_success_is_trimmed(self) -> None:
        runner = RecordingRunner(_result(stdout="  /nix/store/abc-stdenv-linux\n\n"))
        probe = StdenvProbe(self.nix, runner=runner)

        self.assertEqual("/nix/store/abc-stdenv-linux", probe.probe(Platform.X86_64_LINUX, Path("/co")))

    def test_platform_system_is_passed_to_evaluator(self) -> None:
        runner = RecordingRunner(_result(stdout="/nix/store/def-stdenv-darwin"))
        probe = StdenvProbe(self.nix, runner=runner)
        probe.probe(Platform.X86_64_DARWIN, Path("/co"))

        cmd, kwargs = runner.calls[0]
        i = cmd.index("--argstr")
        self.assertEqual(["system", "x86_64-darwin"], cmd[i + 1 : i + 3])
        self.assertEqual(["-f", ".", "-A", "stdenv"], cmd[-4:])
        self.assertEqual(30, kwargs["timeout_seconds"])
        self.assertEqual(Path("/co"), kwargs["cwd"])

    def test_non_zero_exit_is_absent(self) -> None:
        runner = RecordingRunner(_result(exit_code=1, stdout="partial", stderr="error: infinite recursion"))
        probe = StdenvProbe(self.nix, runner=runner)

        with self.assertLogs("stdenv_eval.probe", level="WARNING"):
            self.assertIsNone(probe.probe(Platform.X86_64_LINUX, Path("/co")))

    def test_timeout_is_absent(self) -> None:
        runner = RecordingRunner(_result(exit_code=TIMEOUT_EXIT_CODE, timed_out=True))
        probe = StdenvProbe(self.nix, runner=runner)

        self.assertIsNone(probe.probe(Platform.X86_64_LINUX, Path("/co")))

    def test_empty_output_is_absent_not_empty_string(self) -> None:
        runner = RecordingRunner(_result(stdout="  \n"))
        probe = StdenvProbe(self.nix, runner=runner)

        self.assertIsNone(probe.probe(Platform.X86_64_LINUX, Path("/co")))

    def test_missing_evaluator_is_absent(self) -> None:
        def runner(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        probe = StdenvProbe(self.nix, runner=runner)
        self.assertIsNone(probe.probe(Platform.X86_64_LINUX, Path("/co")))

    def test_stuck_evaluator_is_bounded_by_timeout(self) -> None:
        # Stand-in evaluator that never answers within the timeout.
        def sleeping_runner(cmd, **kwargs):
            return run_cmd(
                [sys.executable, "-c", "import time; time.sleep(60)"],
                timeout_seconds=kwargs["timeout_seconds"],
            )

        probe = StdenvProbe(NixEvaluator(system="x86_64-linux", timeout_seconds=1), runner=sleeping_runner)

        t0 = time.time()
        self.assertIsNone(probe.probe(Platform.X86_64_LINUX, Path("/co")))
        self.assertLess(time.time() - t0, 30)


if __name__ == "__main__":
    unittest.main()
