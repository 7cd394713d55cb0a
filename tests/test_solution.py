import unittest

from dotnetbuilder.dotnet.project import ProjectType, load_project
from dotnetbuilder.dotnet.solution import (
    Solution,
    extract_sln_project_paths,
    extract_slnx_project_paths,
    load_solution,
)
from dotnetbuilder.errors import ProjectNotFoundError, ReadSolutionFileError, SlnxParseError
from tests.helpers import CONSOLE_PROJECT, SIMPLE_PROJECT, WEB_PROJECT, TempDirMixin

SLN_CONTENT = r"""
Microsoft Visual Studio Solution File, Format Version 12.00
# Visual Studio Version 17
Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = "Web", "src\Web\Web.csproj", "{11111111-1111-1111-1111-111111111111}"
EndProject
Project("{2150E333-8FDC-42A3-9474-1A3956D46DE8}") = "src", "src", "{22222222-2222-2222-2222-222222222222}"
EndProject
Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = "Worker", "src\Worker\Worker.csproj", "{33333333-3333-3333-3333-333333333333}"
EndProject
Global
EndGlobal
"""


class TestExtractSlnProjectPaths(unittest.TestCase):

    def test_declaration_order_and_separator_normalization(self):
        self.assertEqual(
            extract_sln_project_paths(SLN_CONTENT),
            ["src/Web/Web.csproj", "src/Worker/Worker.csproj"],
        )

    def test_solution_folders_are_skipped(self):
        content = 'Project("{2150E333-8FDC-42A3-9474-1A3956D46DE8}") = "Solution Items", "Solution Items", "{44444444-4444-4444-4444-444444444444}"'
        self.assertEqual(extract_sln_project_paths(content), [])

    def test_no_projects(self):
        self.assertEqual(extract_sln_project_paths("Global\nEndGlobal\n"), [])


class TestExtractSlnxProjectPaths(unittest.TestCase):

    def test_root_projects_come_before_folder_projects(self):
        content = """<Solution>
  <Folder Name="/tests/">
    <Project Path="tests/App.Tests/App.Tests.csproj" />
  </Folder>
  <Project Path="src/App/App.csproj" />
  <Folder Name="/tools/">
    <Project Path="tools\\Tool\\Tool.fsproj" />
  </Folder>
</Solution>"""
        self.assertEqual(
            extract_slnx_project_paths(content),
            [
                "src/App/App.csproj",
                "tests/App.Tests/App.Tests.csproj",
                "tools/Tool/Tool.fsproj",
            ],
        )

    def test_projects_without_path_are_ignored(self):
        self.assertEqual(extract_slnx_project_paths('<Solution><Project /></Solution>'), [])

    def test_invalid_xml(self):
        with self.assertRaises(SlnxParseError):
            extract_slnx_project_paths("<Solution><Project>", "App.slnx")


class TestLoadSolution(TempDirMixin, unittest.TestCase):

    def test_sln(self):
        path = self.write("App.sln", SLN_CONTENT)
        self.write("src/Web/Web.csproj", WEB_PROJECT)
        self.write("src/Worker/Worker.csproj", CONSOLE_PROJECT)

        solution = load_solution(path)

        self.assertEqual(solution.path, path)
        self.assertEqual(
            [p.path for p in solution.projects],
            [self.tmp_path / "src/Web/Web.csproj", self.tmp_path / "src/Worker/Worker.csproj"],
        )
        self.assertEqual(solution.projects[0].project_type, ProjectType.WEB_APPLICATION)
        self.assertEqual(solution.projects[1].project_type, ProjectType.CONSOLE_APPLICATION)

    def test_slnx(self):
        path = self.write("App.slnx", '<Solution><Project Path="Lib/Lib.csproj" /></Solution>')
        self.write("Lib/Lib.csproj", SIMPLE_PROJECT)
        solution = load_solution(path)
        self.assertEqual([p.assembly_name for p in solution.projects], ["Lib"])

    def test_empty_solution(self):
        path = self.write("Empty.sln", "Global\nEndGlobal\n")
        self.assertEqual(load_solution(path).projects, ())

    def test_missing_member(self):
        path = self.write("App.sln", SLN_CONTENT)
        self.write("src/Web/Web.csproj", WEB_PROJECT)
        with self.assertRaises(ProjectNotFoundError) as ctx:
            load_solution(path)
        self.assertEqual(ctx.exception.path, self.tmp_path / "src/Worker/Worker.csproj")

    def test_unreadable_solution(self):
        with self.assertRaises(ReadSolutionFileError):
            load_solution(self.tmp_path / "Missing.sln")


class TestEphemeralSolution(TempDirMixin, unittest.TestCase):

    def test_wraps_single_project(self):
        project = load_project(self.write("App.csproj", CONSOLE_PROJECT))
        solution = Solution.ephemeral(project)
        self.assertEqual(solution.path, project.path)
        self.assertEqual(solution.projects, (project,))


if __name__ == '__main__':
    unittest.main()
