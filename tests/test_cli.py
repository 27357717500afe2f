# tests/test_cli.py
"""Tests for the noesisgen command line."""

from click.testing import CliRunner


class TestCLISkeleton:

    def test_cli_group_exists(self):
        from noesisgen.cli import cli
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output
        assert "structures" in result.output

    def test_no_subcommand_prints_help(self):
        from noesisgen.cli import cli
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_version_flag(self):
        from noesisgen import __version__
        from noesisgen.cli import cli
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_generate_help(self):
        from noesisgen.cli import cli
        result = CliRunner().invoke(cli, ["generate", "--help"])
        assert result.exit_code == 0
        assert "--types-only" in result.output
        assert "--indent-level" in result.output


class TestGenerate:

    def test_generates_types_and_sets(self, noesis_project, tmp_path):
        from noesisgen.cli import cli
        out = tmp_path / "out"
        result = CliRunner().invoke(
            cli, ["generate", str(noesis_project), str(out), "--log-dir", str(tmp_path / "logs")]
        )
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == ["NoesisTypes.ts", "Starter.ts"]
        assert "export type Deck = {" in (out / "NoesisTypes.ts").read_text(encoding="utf-8")
        assert list((tmp_path / "logs").glob("noesisgen_*.log"))

    def test_types_only(self, noesis_project, tmp_path):
        from noesisgen.cli import cli
        out = tmp_path / "out"
        result = CliRunner().invoke(
            cli, ["generate", str(noesis_project), str(out), "-t", "--log-dir", str(tmp_path / "logs")]
        )
        assert result.exit_code == 0, result.output
        assert [p.name for p in out.iterdir()] == ["NoesisTypes.ts"]

    def test_indent_level_option(self, noesis_project, tmp_path):
        from noesisgen.cli import cli
        out = tmp_path / "out"
        result = CliRunner().invoke(
            cli,
            ["generate", str(noesis_project), str(out), "Starter", "-i", "4",
             "--log-dir", str(tmp_path / "logs")],
        )
        assert result.exit_code == 0, result.output
        assert '\n    Name: "Starter",\n' in (out / "Starter.ts").read_text(encoding="utf-8")

    def test_indent_level_from_environment(self, noesis_project, tmp_path, monkeypatch):
        from noesisgen.cli import cli
        monkeypatch.setenv("NOESISGEN_INDENT_LEVEL", "3")
        out = tmp_path / "out"
        result = CliRunner().invoke(
            cli, ["generate", str(noesis_project), str(out), "--log-dir", str(tmp_path / "logs")]
        )
        assert result.exit_code == 0, result.output
        assert '\n   Name: "Starter",\n' in (out / "Starter.ts").read_text(encoding="utf-8")

    def test_missing_set_fails(self, noesis_project, tmp_path):
        from noesisgen.cli import cli
        result = CliRunner().invoke(
            cli,
            ["generate", str(noesis_project), str(tmp_path / "out"), "Missing",
             "--log-dir", str(tmp_path / "logs")],
        )
        assert result.exit_code == 1
        assert "Data set not found" in result.output

    def test_failed_set_sets_exit_code(self, noesis_project, tmp_path):
        from noesisgen.cli import cli
        sets = noesis_project / ".noesis" / "data" / "sets"
        (sets / "Broken.xaml").write_text("<Deck>", encoding="utf-8")
        out = tmp_path / "out"
        result = CliRunner().invoke(
            cli, ["generate", str(noesis_project), str(out), "--log-dir", str(tmp_path / "logs")]
        )
        assert result.exit_code == 1
        assert (out / "Starter.ts").exists()
        assert "1/2 data sets generated" in result.output

    def test_missing_structures_dir_fails(self, tmp_path):
        from noesisgen.cli import cli
        project = tmp_path / "empty"
        project.mkdir()
        result = CliRunner().invoke(
            cli, ["generate", str(project), str(tmp_path / "out"), "--log-dir", str(tmp_path / "logs")]
        )
        assert result.exit_code == 1
        assert "Structures directory not found" in result.output


class TestStructures:

    def test_lists_registry(self, noesis_project, tmp_path):
        from noesisgen.cli import cli
        result = CliRunner().invoke(
            cli, ["structures", str(noesis_project), "--log-dir", str(tmp_path / "logs")]
        )
        assert result.exit_code == 0, result.output
        assert "Card" in result.output
        assert "Rarity" in result.output
