"""Tests for the command-line entry point (create_new_app.cli)."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from create_new_app import __version__
from create_new_app.cli import report_abort, report_offline, run
from create_new_app.config import Settings
from create_new_app.options import Aborted, ExitCode

pytestmark = pytest.mark.unit


@pytest.fixture
def online():
    with patch("create_new_app.cli.check_online", AsyncMock(return_value=True)) as mock:
        yield mock


@pytest.fixture
def offline():
    with patch("create_new_app.cli.check_online", AsyncMock(return_value=False)) as mock:
        yield mock


class TestRunInformational:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run(["-h"])
        assert exc_info.value.code == 0
        assert "--redux" in capsys.readouterr().out


class TestRunAborts:
    def test_unknown_flag_is_a_syntax_error(self, workdir, online):
        with pytest.raises(SystemExit) as exc_info:
            run(["my-app", "--no-such-flag"], cwd=workdir, settings=Settings(skip_install=True))
        assert exc_info.value.code == 2
        assert exc_info.value.code not in {code.value for code in ExitCode}
        assert list(workdir.iterdir()) == []

    def test_missing_name(self, workdir, online, capsys):
        rc = run(["--redux"], cwd=workdir, settings=Settings(skip_install=True))
        assert rc == ExitCode.USAGE
        assert "forgot to provide a project name" in capsys.readouterr().out
        assert list(workdir.iterdir()) == []

    def test_existing_directory(self, workdir, online):
        (workdir / "taken").mkdir()
        rc = run(["taken"], cwd=workdir, settings=Settings(skip_install=True))
        assert rc == ExitCode.DIRECTORY_EXISTS

    def test_invalid_name(self, workdir, online):
        rc = run([".hidden"], cwd=workdir, settings=Settings(skip_install=True))
        assert rc == ExitCode.USAGE
        assert not (workdir / ".hidden").exists()

    def test_markup_like_name(self, workdir, online, capsys):
        rc = run(["a[/b]"], cwd=workdir, settings=Settings(skip_install=True))
        assert rc == ExitCode.USAGE
        out = capsys.readouterr().out
        assert "a[/b]" in out
        assert "URL-friendly" in out
        assert list(workdir.iterdir()) == []

    def test_wizard_cancel(self, workdir, online, fake_questionary):
        fake_questionary({"name for your app": None})
        rc = run([], cwd=workdir, settings=Settings(skip_install=True))
        assert rc == ExitCode.ABORTED == 130


class TestRunCreates:
    def test_skip_install(self, workdir, online, capsys):
        rc = run(["my-app"], cwd=workdir, settings=Settings(skip_install=True))
        assert rc == ExitCode.OK
        assert (workdir / "my-app" / "package.json").exists()
        assert "Skipping dependency installation" in capsys.readouterr().out

    def test_install_failure(self, workdir, online):
        with patch("create_new_app.cli.install_dependencies", AsyncMock(return_value=1)):
            rc = run(["my-app"], cwd=workdir, settings=Settings())
        assert rc == ExitCode.INSTALL_FAILED
        assert (workdir / "my-app" / "package.json").exists()

    def test_install_success(self, workdir, online):
        install = AsyncMock(return_value=0)
        with patch("create_new_app.cli.install_dependencies", install):
            rc = run(["my-app", "--express"], cwd=workdir, settings=Settings())
        assert rc == ExitCode.OK
        options, _settings = install.await_args.args
        assert options.express is True
        assert options.offline is False

    def test_offline_probe_forces_offline_install(self, workdir, offline, capsys):
        install = AsyncMock(return_value=0)
        with patch("create_new_app.cli.install_dependencies", install):
            rc = run(["my-app"], cwd=workdir, settings=Settings())
        assert rc == ExitCode.OK
        options, _settings = install.await_args.args
        assert options.offline is True
        assert "You appear to be offline" in capsys.readouterr().out

    def test_sandbox_never_installs(self, workdir, online):
        install = AsyncMock(return_value=0)
        with patch("create_new_app.cli.install_dependencies", install):
            rc = run(["box", "--sandbox"], cwd=workdir, settings=Settings())
        assert rc == ExitCode.OK
        install.assert_not_awaited()
        assert (workdir / "box" / "index.html").exists()

    def test_wizard_path(self, workdir, online, fake_questionary):
        fake_questionary({
            "name for your app": "wiz-app",
            "include Redux?": True,
            "Redux First Router": False,
            "Express server": False,
        })
        rc = run([], cwd=workdir, settings=Settings(skip_install=True))
        assert rc == ExitCode.OK
        assert (workdir / "wiz-app" / "src" / "store.js").exists()

    def test_write_failure(self, workdir, online, capsys):
        with patch(
            "create_new_app.cli.ProjectGenerator.generate",
            AsyncMock(side_effect=PermissionError("denied")),
        ):
            rc = run(["my-app"], cwd=workdir, settings=Settings(skip_install=True))
        assert rc == ExitCode.USAGE
        assert "Could not write the project files" in capsys.readouterr().out


class TestReporting:
    def test_report_abort(self, capsys):
        report_abort(Aborted(reason="Nope.", details=["first", "second"]))
        out = capsys.readouterr().out
        assert "Nope." in out
        assert "first" in out
        assert "second" in out

    def test_report_offline_flag_only(self, make_options, capsys):
        report_offline(make_options(offline=True))
        out = capsys.readouterr().out
        assert "local package cache" in out
        assert "appear to be offline" not in out

    def test_report_offline_silent_when_online(self, make_options, capsys):
        report_offline(make_options())
        assert capsys.readouterr().out == ""

    def test_report_offline_silent_for_sandbox(self, make_options, capsys):
        report_offline(make_options(sandbox=True, online=False, offline=True))
        assert capsys.readouterr().out == ""
