import unittest

from stdenv_eval.platforms import (
    ALL_PLATFORMS,
    PLATFORM_LABELS,
    PLATFORM_SYSTEMS,
    PLATFORM_TAGS,
    PLATFORMS,
    SUPPORTED_SYSTEMS,
    Platform,
    platform_from_system,
    system_of,
)


class TestPlatformRegistry(unittest.TestCase):
    def test_registry_keys_are_consistent(self) -> None:
        self.assertEqual(set(PLATFORMS.keys()), set(Platform))
        self.assertEqual(set(PLATFORM_SYSTEMS.keys()), set(Platform))
        self.assertEqual(set(PLATFORM_TAGS.keys()), set(Platform))
        self.assertEqual(set(PLATFORM_LABELS.keys()), set(Platform))

    def test_all_platforms_follow_declaration_order(self) -> None:
        self.assertEqual(ALL_PLATFORMS, (Platform.X86_64_LINUX, Platform.X86_64_DARWIN))

    def test_systems_and_tags(self) -> None:
        self.assertEqual("x86_64-linux", system_of(Platform.X86_64_LINUX))
        self.assertEqual("x86_64-darwin", system_of(Platform.X86_64_DARWIN))
        self.assertEqual("10.rebuild-linux-stdenv", PLATFORM_TAGS[Platform.X86_64_LINUX])
        self.assertEqual("10.rebuild-darwin-stdenv", PLATFORM_TAGS[Platform.X86_64_DARWIN])
        self.assertEqual(frozenset({"x86_64-linux", "x86_64-darwin"}), SUPPORTED_SYSTEMS)

    def test_tags_and_systems_are_unique(self) -> None:
        self.assertEqual(len(PLATFORM_TAGS), len(set(PLATFORM_TAGS.values())))
        self.assertEqual(len(PLATFORM_SYSTEMS), len(set(PLATFORM_SYSTEMS.values())))

    def test_platform_from_system(self) -> None:
        self.assertIs(Platform.X86_64_DARWIN, platform_from_system(" x86_64-darwin "))
        with self.assertRaises(ValueError):
            platform_from_system("aarch64-linux")


if __name__ == "__main__":
    unittest.main()
