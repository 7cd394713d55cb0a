import unittest
from pathlib import Path

from dotnetbuilder.dotnet.runtime_identifier import RuntimeIdentifier
from dotnetbuilder.errors import InvalidVerbosityLevelError
from dotnetbuilder.sdk_command import DotnetPublishCommand, DotnetTestCommand, VerbosityLevel


class TestVerbosityLevel(unittest.TestCase):

    def test_aliases(self):
        cases = {
            "q": VerbosityLevel.QUIET,
            "Quiet": VerbosityLevel.QUIET,
            "m": VerbosityLevel.MINIMAL,
            "n": VerbosityLevel.NORMAL,
            "detailed": VerbosityLevel.DETAILED,
            "diag": VerbosityLevel.DIAGNOSTIC,
            "DIAGNOSTIC": VerbosityLevel.DIAGNOSTIC,
        }
        for value, expected in cases.items():
            with self.subTest(value=value):
                self.assertIs(VerbosityLevel.parse(value), expected)

    def test_invalid(self):
        with self.assertRaises(InvalidVerbosityLevelError):
            VerbosityLevel.parse("loud")


class TestDotnetPublishCommand(unittest.TestCase):

    def test_minimal(self):
        command = DotnetPublishCommand(Path("/workspace/App.sln"), RuntimeIdentifier.LINUX_X64)
        self.assertEqual(
            command.to_args(),
            ["dotnet", "publish", "/workspace/App.sln", "--runtime", "linux-x64"],
        )

    def test_all_options(self):
        command = DotnetPublishCommand(
            Path("/workspace/App.csproj"),
            RuntimeIdentifier.LINUX_MUSL_ARM64,
            configuration="Debug",
            verbosity_level=VerbosityLevel.MINIMAL,
        )
        self.assertEqual(
            command.to_args(),
            [
                "dotnet", "publish", "/workspace/App.csproj",
                "--runtime", "linux-musl-arm64",
                "--configuration", "Debug",
                "--verbosity", "minimal",
            ],
        )


class TestDotnetTestCommand(unittest.TestCase):

    def test_uses_file_name(self):
        command = DotnetTestCommand(Path("/workspace/App.sln"))
        self.assertEqual(command.to_args(), ["dotnet", "test", "App.sln"])

    def test_process(self):
        command = DotnetTestCommand(Path("/workspace/App.sln"), "Release", VerbosityLevel.NORMAL)
        process = command.to_process()
        self.assertEqual(process.type, "test")
        self.assertEqual(
            process.command,
            ["dotnet", "test", "App.sln", "--configuration", "Release", "--verbosity", "normal"],
        )


if __name__ == '__main__':
    unittest.main()
