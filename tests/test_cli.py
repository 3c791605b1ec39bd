"""
Tests for CLI commands.
"""

import tomllib

import pytest
from typer.testing import CliRunner

from bundle_install.cli import DETECT_ERROR, DETECT_FAIL, app

runner = CliRunner(env={"NO_COLOR": "1", "TERM": "dumb"})


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in (
        "BUNDLE_INSTALL_WORKING_DIR",
        "BUNDLE_INSTALL_RUBY_VERSION_IN_WORKING_DIR",
        "BUNDLE_INSTALL_DEBUG",
        "BUNDLE_INSTALL_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def app_dir(tmp_path):
    path = tmp_path / "app"
    path.mkdir()
    return path


class TestDetectCommand:
    """Tests for detect command."""

    def test_writes_plan_to_plan_path(self, tmp_path, app_dir):
        (app_dir / "Gemfile").write_text("ruby '3.2.1'\n", encoding="utf-8")
        plan_path = tmp_path / "layers" / "plan.toml"

        result = runner.invoke(
            app,
            ["detect", str(tmp_path / "platform"), str(plan_path), "--working-dir", str(app_dir)],
        )

        assert result.exit_code == 0
        plan = tomllib.loads(plan_path.read_text(encoding="utf-8"))
        assert plan["provides"] == [{"name": "gems"}]
        assert plan["requires"][2] == {
            "name": "mri",
            "metadata": {
                "version": "3.2.1",
                "version-source": "Gemfile",
                "build": True,
                "launch": True,
            },
        }

    def test_prints_plan_without_plan_path(self, tmp_path, app_dir):
        (app_dir / "Gemfile").write_text("gem 'rails'\n", encoding="utf-8")
        (tmp_path / ".ruby-version").write_text("3.1.0\n", encoding="utf-8")

        result = runner.invoke(app, ["detect", "--working-dir", str(app_dir)])

        assert result.exit_code == 0
        plan = tomllib.loads(result.stdout)
        assert plan["provides"] == [{"name": "gems"}]
        assert [r["name"] for r in plan["requires"]] == ["bundler", "gems", "mri"]
        assert plan["requires"][2]["metadata"]["version"] == "3.1.0"

    def test_missing_gemfile_exits_with_fail_code(self, app_dir):
        result = runner.invoke(app, ["detect", "--working-dir", str(app_dir)])

        assert result.exit_code == DETECT_FAIL
        assert "Gemfile is not present" in result.stdout

    def test_unreadable_gemfile_exits_with_error_code(self, app_dir):
        (app_dir / "Gemfile").mkdir()

        result = runner.invoke(app, ["detect", "--working-dir", str(app_dir)])

        assert result.exit_code == DETECT_ERROR

    def test_working_dir_from_environment(self, tmp_path, app_dir):
        (app_dir / "Gemfile").write_text("ruby '3.0.6'\n", encoding="utf-8")
        plan_path = tmp_path / "plan.toml"

        result = runner.invoke(
            app,
            ["detect", str(tmp_path), str(plan_path)],
            env={"BUNDLE_INSTALL_WORKING_DIR": str(app_dir)},
        )

        assert result.exit_code == 0
        plan = tomllib.loads(plan_path.read_text(encoding="utf-8"))
        assert plan["requires"][2]["metadata"]["version"] == "3.0.6"

    def test_defaults_to_process_cwd(self, tmp_path):
        (tmp_path / "Gemfile").write_text("gem 'rails'\n", encoding="utf-8")
        (tmp_path / ".ruby-version").write_text("3.1.0\n", encoding="utf-8")
        plan_path = tmp_path / "plan.toml"

        result = runner.invoke(app, ["detect", str(tmp_path), str(plan_path)])

        assert result.exit_code == 0
        mri = tomllib.loads(plan_path.read_text(encoding="utf-8"))["requires"][2]
        assert mri["metadata"]["version"] == "3.1.0"
        assert mri["metadata"]["version-source"] == ".ruby-version"

    def test_ruby_version_in_working_dir_flag(self, tmp_path, app_dir):
        (app_dir / "Gemfile").write_text("gem 'rails'\n", encoding="utf-8")
        (app_dir / ".ruby-version").write_text("3.2.2\n", encoding="utf-8")
        plan_path = tmp_path / "plan.toml"

        result = runner.invoke(
            app,
            [
                "detect",
                str(tmp_path),
                str(plan_path),
                "--working-dir",
                str(app_dir),
                "--ruby-version-in-working-dir",
            ],
        )

        assert result.exit_code == 0
        mri = tomllib.loads(plan_path.read_text(encoding="utf-8"))["requires"][2]
        assert mri["metadata"]["version"] == "3.2.2"

    def test_pin_file_in_working_dir_ignored_without_flag(self, tmp_path, app_dir):
        (app_dir / "Gemfile").write_text("gem 'rails'\n", encoding="utf-8")
        (app_dir / ".ruby-version").write_text("3.2.2\n", encoding="utf-8")
        plan_path = tmp_path / "plan.toml"

        result = runner.invoke(
            app,
            ["detect", str(tmp_path), str(plan_path), "--working-dir", str(app_dir)],
        )

        assert result.exit_code == 0
        mri = tomllib.loads(plan_path.read_text(encoding="utf-8"))["requires"][2]
        assert mri["metadata"]["version"] == ""
        assert "version-source" not in mri["metadata"]


class TestLogOutput:
    """Tests for what detect writes besides the plan."""

    def test_parser_diagnostics_hidden_by_default(self, tmp_path, app_dir):
        (app_dir / "Gemfile").write_text("ruby '3.2.1'\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["detect", str(tmp_path), str(tmp_path / "plan.toml"), "--working-dir", str(app_dir)],
        )

        assert result.exit_code == 0
        assert result.output == ""

    def test_verbose_shows_parser_diagnostics(self, tmp_path, app_dir):
        (app_dir / "Gemfile").write_text("ruby '3.2.1'\n", encoding="utf-8")

        result = runner.invoke(
            app,
            [
                "--verbose",
                "detect",
                str(tmp_path),
                str(tmp_path / "plan.toml"),
                "--working-dir",
                str(app_dir),
            ],
        )

        assert result.exit_code == 0
        assert "Gemfile ruby directive" in result.output

    def test_pin_file_failure_prints_single_warning(self, tmp_path, app_dir):
        (app_dir / "Gemfile").write_text("gem 'rails'\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["detect", str(tmp_path), str(tmp_path / "plan.toml"), "--working-dir", str(app_dir)],
        )

        assert result.exit_code == 0
        assert result.output.count("Could not parse the .ruby-version file") == 1
        assert len(result.output.strip().splitlines()) == 1


class TestVersionOfCommand:
    """Tests for version-of command."""

    def test_gemfile_version(self, tmp_path):
        (tmp_path / "Gemfile").write_text("ruby '~> 3.1'\n", encoding="utf-8")

        result = runner.invoke(app, ["version-of", str(tmp_path / "Gemfile")])

        assert result.exit_code == 0
        assert "~> 3.1" in result.stdout

    def test_pin_file_version(self, tmp_path):
        (tmp_path / ".ruby-version").write_text("ruby-3.1.0\n", encoding="utf-8")

        result = runner.invoke(
            app, ["version-of", str(tmp_path / ".ruby-version"), "--pin-file"]
        )

        assert result.exit_code == 0
        assert "3.1.0" in result.stdout

    def test_missing_file_exits_with_error_code(self, tmp_path):
        result = runner.invoke(app, ["version-of", str(tmp_path / "Gemfile")])

        assert result.exit_code == DETECT_ERROR
