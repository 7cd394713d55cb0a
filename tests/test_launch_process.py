import os
import subprocess
import unittest
from pathlib import Path

from dotnetbuilder.dotnet.project import Project, ProjectType
from dotnetbuilder.dotnet.runtime_identifier import RuntimeIdentifier
from dotnetbuilder.dotnet.solution import Solution
from dotnetbuilder.errors import InapplicableOperationError, InvalidProcessTypeError, InvalidProjectTypeError
from dotnetbuilder.launch_process import (
    build_process,
    detect_solution_processes,
    executable_path,
    process_type_for,
)
from tests.helpers import TempDirMixin


def make_project(path, project_type=ProjectType.CONSOLE_APPLICATION, assembly_name="App",
                 target_framework="net8.0"):
    return Project(
        path=Path(path),
        target_framework=target_framework,
        project_type=project_type,
        assembly_name=assembly_name,
    )


class TestExecutablePath(unittest.TestCase):

    def test_console_application(self):
        project = make_project("src/App.csproj")
        self.assertEqual(
            executable_path(project, Path("src/App.csproj"), "Release", RuntimeIdentifier.LINUX_X64),
            Path("src/bin/Release/net8.0/linux-x64/publish/App"),
        )

    def test_web_and_worker_projects(self):
        for project_type in (ProjectType.WEB_APPLICATION, ProjectType.WORKER_SERVICE):
            with self.subTest(project_type=project_type):
                project = make_project("Api/Api.csproj", project_type, "Company.Api", "net9.0")
                self.assertEqual(
                    executable_path(project, project.path, "Debug", "linux-musl-arm64"),
                    Path("Api/bin/Debug/net9.0/linux-musl-arm64/publish/Company.Api"),
                )

    def test_blank_assembly_name_uses_descriptor_stem(self):
        project = make_project("Tool/Tool.fsproj", assembly_name="")
        self.assertEqual(
            executable_path(project, project.path, "Release", RuntimeIdentifier.OSX_ARM64).name,
            "Tool",
        )

    def test_non_executable_projects(self):
        for project_type in (ProjectType.LIBRARY, ProjectType.UNKNOWN):
            with self.subTest(project_type=project_type):
                project = make_project("Lib/Lib.csproj", project_type, "Lib")
                with self.assertRaises(InvalidProjectTypeError) as ctx:
                    executable_path(project, project.path, "Release", RuntimeIdentifier.LINUX_X64)
                self.assertIsInstance(ctx.exception, InapplicableOperationError)


class TestBuildProcess(unittest.TestCase):

    def test_console_process(self):
        project = make_project("src/App.csproj")
        process = build_process(
            project,
            Path("src/bin/Release/net8.0/linux-x64/publish/App"),
        )
        self.assertEqual(process.type, "App")
        self.assertEqual(
            process.command,
            ["bash", "-c", "cd src/bin/Release/net8.0/linux-x64/publish; ./App"],
        )
        self.assertFalse(hasattr(process, "working_directory"))
        self.assertFalse(process.default)

    def test_web_process_binds_port(self):
        project = make_project("Web/Web.csproj", ProjectType.WEB_APPLICATION, "Web")
        process = build_process(
            project,
            Path("Web/bin/Release/net8.0/linux-x64/publish/Web"),
        )
        self.assertEqual(process.command[-1], "cd Web/bin/Release/net8.0/linux-x64/publish; ./Web --urls http://*:$PORT")

    def test_process_type_names(self):
        self.assertEqual(process_type_for(make_project("a.csproj", assembly_name="My.App-1_x")), "My.App-1_x")
        with self.assertRaises(InvalidProcessTypeError):
            process_type_for(make_project("a.csproj", assembly_name="My App"))


class TestDetectSolutionProcesses(TempDirMixin, unittest.TestCase):

    def test_detects_published_executables_only(self):
        web = make_project(self.tmp_path / "Web/Web.csproj", ProjectType.WEB_APPLICATION, "Web")
        worker = make_project(self.tmp_path / "Worker/Worker.csproj", ProjectType.WORKER_SERVICE, "Worker")
        library = make_project(self.tmp_path / "Lib/Lib.csproj", ProjectType.LIBRARY, "Lib")
        self.write("Web/bin/Release/net8.0/linux-x64/publish/Web")

        results = detect_solution_processes(
            self.tmp_path,
            Solution(path=self.tmp_path / "App.sln", projects=(web, worker, library)),
            "Release",
            RuntimeIdentifier.LINUX_X64,
        )

        self.assertEqual([r.project for r in results], [web, worker])
        self.assertTrue(results[0].is_valid)
        self.assertEqual(results[0].relative_source, Path("Web/Web.csproj"))
        self.assertEqual(results[0].relative_artifact, Path("Web/bin/Release/net8.0/linux-x64/publish/Web"))
        self.assertEqual(results[0].process.type, "Web")
        self.assertFalse(results[1].is_valid)
        self.assertIsNone(results[1].process)

    def test_command_runs_from_app_directory(self):
        app = make_project(self.tmp_path / "src/App.csproj")
        artifact = self.write("src/bin/Release/net8.0/linux-x64/publish/App", "#!/bin/sh\necho started\n")
        os.chmod(artifact, 0o755)

        results = detect_solution_processes(
            self.tmp_path,
            Solution.ephemeral(app),
            "Release",
            RuntimeIdentifier.LINUX_X64,
        )
        completed = subprocess.run(
            results[0].process.command,
            cwd=self.tmp_path,
            capture_output=True,
            text=True,
        )

        self.assertEqual(completed.returncode, 0)
        self.assertEqual(completed.stdout.strip(), "started")
        self.assertEqual(completed.stderr, "")

    def test_no_executable_projects(self):
        library = make_project(self.tmp_path / "Lib/Lib.csproj", ProjectType.LIBRARY, "Lib")
        results = detect_solution_processes(
            self.tmp_path,
            Solution.ephemeral(library),
            "Release",
            RuntimeIdentifier.LINUX_X64,
        )
        self.assertEqual(results, [])


if __name__ == '__main__':
    unittest.main()
