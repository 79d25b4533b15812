"""Tests for the guided setup (create_new_app.wizard), with questionary faked."""

from __future__ import annotations

from typing import Any

import pytest

from create_new_app.options import Aborted, ExitCode, Resolved
from create_new_app.wizard import run_wizard

pytestmark = pytest.mark.unit


_ALL_NO: dict[str, Any] = {
    "name for your app": "my-app",
    "include Redux?": False,
    "Redux First Router": False,
    "Express server": False,
    "MongoDB": False,
}


def _answers(**overrides: Any) -> dict[str, Any]:
    keys = {
        "name": "name for your app",
        "redux": "include Redux?",
        "router": "Redux First Router",
        "express": "Express server",
        "mongo": "MongoDB",
    }
    answers = dict(_ALL_NO)
    for short, value in overrides.items():
        answers[keys[short]] = value
    return answers


class TestWizardAnswers:
    def test_all_defaults(self, fake_questionary, workdir):
        fake = fake_questionary(_answers())
        resolution = run_wizard(online=True, cwd=workdir)

        assert isinstance(resolution, Resolved)
        options = resolution.options
        assert options.app_name == "my-app"
        assert options.app_dir == workdir / "my-app"
        assert not (options.redux or options.router or options.express or options.mongo)
        assert options.dev_server_port == 8080
        assert options.api_port == 3000
        assert options.title == "my-app"
        # Router and Mongo questions are skipped when their parent is "no".
        assert len(fake.asked) == 3

    def test_question_order(self, fake_questionary, workdir):
        fake = fake_questionary(_answers(redux=True, express=True))
        run_wizard(online=True, cwd=workdir)
        prompts = " | ".join(fake.asked)
        assert prompts.index("name") < prompts.index("Redux?") < prompts.index("Router")
        assert prompts.index("Router") < prompts.index("Express") < prompts.index("MongoDB")

    def test_everything(self, fake_questionary, workdir):
        fake_questionary(_answers(redux=True, router=True, express=True, mongo=True))
        options = run_wizard(online=True, cwd=workdir).options
        assert options.redux and options.router and options.express and options.mongo
        assert options.server

    def test_router_needs_redux(self, fake_questionary, workdir):
        # A "yes" for the router is never consulted when Redux is declined.
        fake = fake_questionary(_answers(router=True))
        options = run_wizard(online=True, cwd=workdir).options
        assert options.router is False
        assert not any("Router" in p for p in fake.asked)

    def test_mongo_needs_express(self, fake_questionary, workdir):
        fake = fake_questionary(_answers(mongo=True))
        options = run_wizard(online=True, cwd=workdir).options
        assert options.mongo is False
        assert not any("MongoDB" in p for p in fake.asked)

    def test_offline(self, fake_questionary, workdir):
        fake_questionary(_answers())
        options = run_wizard(online=False, cwd=workdir).options
        assert options.offline is True

class TestWizardFailFast:
    def test_surrounding_spaces_are_rejected_not_stripped(self, fake_questionary, workdir):
        fake = fake_questionary(_answers(name="  my-app  "))
        resolution = run_wizard(online=True, cwd=workdir)
        assert isinstance(resolution, Aborted)
        assert resolution.exit_code == ExitCode.USAGE
        assert "name cannot contain leading or trailing spaces" in resolution.details
        assert len(fake.asked) == 1
        assert not (workdir / "my-app").exists()

    def test_invalid_name_stops_before_addon_questions(self, fake_questionary, workdir):
        fake = fake_questionary(_answers(name="My App"))
        resolution = run_wizard(online=True, cwd=workdir)
        assert isinstance(resolution, Aborted)
        assert resolution.exit_code == ExitCode.USAGE
        assert len(fake.asked) == 1

    def test_existing_directory_stops_before_addon_questions(self, fake_questionary, workdir):
        (workdir / "my-app").mkdir()
        fake = fake_questionary(_answers())
        resolution = run_wizard(online=True, cwd=workdir)
        assert isinstance(resolution, Aborted)
        assert resolution.exit_code == ExitCode.DIRECTORY_EXISTS
        assert len(fake.asked) == 1

    def test_cancelled(self, fake_questionary, workdir):
        fake_questionary(_answers(redux=None))
        resolution = run_wizard(online=True, cwd=workdir)
        assert isinstance(resolution, Aborted)
        assert resolution.exit_code == ExitCode.ABORTED
