import unittest

from stdenv_eval.platforms import Platform
from stdenv_eval.tagger import StdenvTagger


class TestStdenvTagger(unittest.TestCase):
    def test_nothing_changed(self) -> None:
        tagger = StdenvTagger()
        tagger.changed([])

        self.assertEqual(set(), tagger.tags_to_add())
        self.assertEqual({"10.rebuild-linux-stdenv", "10.rebuild-darwin-stdenv"}, tagger.tags_to_remove())

    def test_linux_changed(self) -> None:
        tagger = StdenvTagger()
        tagger.changed([Platform.X86_64_LINUX])

        self.assertEqual({"10.rebuild-linux-stdenv"}, tagger.tags_to_add())
        self.assertEqual({"10.rebuild-darwin-stdenv"}, tagger.tags_to_remove())

    def test_both_changed(self) -> None:
        tagger = StdenvTagger()
        tagger.changed([Platform.X86_64_DARWIN, Platform.X86_64_LINUX, Platform.X86_64_DARWIN])

        self.assertEqual({"10.rebuild-linux-stdenv", "10.rebuild-darwin-stdenv"}, tagger.tags_to_add())
        self.assertEqual(set(), tagger.tags_to_remove())

    def test_unregistered_platform_is_rejected(self) -> None:
        tagger = StdenvTagger()
        with self.assertRaises(ValueError):
            tagger.changed(["riscv64-linux"])


if __name__ == "__main__":
    unittest.main()
