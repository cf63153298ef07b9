import unittest
from typing import List

from stdenv_eval.models import EvaluationResult, TagDiff
from stdenv_eval.scheduler import run_straddled
from stdenv_eval.straddled import StraddledEvaluationTask


class RecordingTask(StraddledEvaluationTask):
    def __init__(self, name: str, log: List[str], result: EvaluationResult) -> None:
        self.name = name
        self.log = log
        self.result = result

    def before_on_target_branch_message(self) -> str:
        return f"{self.name}: before"

    def on_target_branch(self) -> None:
        self.log.append(f"{self.name}.on_target_branch")

    def before_after_merge_message(self) -> str:
        return f"{self.name}: after"

    def after_merge(self) -> None:
        self.log.append(f"{self.name}.after_merge")

    def results(self) -> EvaluationResult:
        self.log.append(f"{self.name}.results")
        return self.result


class TestRunStraddled(unittest.TestCase):
    def test_merge_happens_once_between_phases(self) -> None:
        log: List[str] = []
        announced: List[str] = []
        tasks = [
            RecordingTask("a", log, EvaluationResult()),
            RecordingTask("b", log, EvaluationResult()),
        ]

        result = run_straddled(tasks, lambda: log.append("merge"), announce=announced.append)

        self.assertEqual(
            [
                "a.on_target_branch",
                "b.on_target_branch",
                "merge",
                "a.after_merge",
                "b.after_merge",
                "a.results",
                "b.results",
            ],
            log,
        )
        self.assertEqual(["a: before", "b: before", "a: after", "b: after"], announced)
        self.assertIsNone(result.tags)

    def test_results_are_merged(self) -> None:
        log: List[str] = []
        tasks = [
            RecordingTask("a", log, EvaluationResult(TagDiff.of(add={"x"}, delete={"y", "z"}))),
            RecordingTask("b", log, EvaluationResult()),
            RecordingTask("c", log, EvaluationResult(TagDiff.of(add={"y"}, delete={"w"}))),
        ]

        result = run_straddled(tasks, lambda: None, announce=lambda _msg: None)

        self.assertEqual(TagDiff.of(add={"x", "y"}, delete={"z", "w"}), result.tags)
        self.assertEqual({"tags": {"add": ["x", "y"], "delete": ["w", "z"]}}, result.to_dict())

    def test_failed_merge_stops_before_second_phase(self) -> None:
        log: List[str] = []
        tasks = [RecordingTask("a", log, EvaluationResult())]

        def merge() -> None:
            raise RuntimeError("conflict")

        with self.assertRaises(RuntimeError):
            run_straddled(tasks, merge, announce=lambda _msg: None)
        self.assertEqual(["a.on_target_branch"], log)


if __name__ == "__main__":
    unittest.main()
