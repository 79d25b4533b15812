"""Guided setup, used when the tool is run without any arguments.

Questions, in order:

1. App name?  (validated, and checked against existing directories, right away)
2. Include Redux?
3. Include Redux First Router?  (only asked when Redux is included)
4. Include an Express server?
5. Include MongoDB?  (only asked when Express is included)

Every yes/no question defaults to "no".  Options that are not asked about
take their defaults from ``OPTION_SCHEMA``.
"""

from __future__ import annotations

from pathlib import Path

from .options import (
    Aborted,
    ExitCode,
    Resolution,
    Resolved,
    build_options,
    check_name,
    check_target,
    default_options,
)
from .utils import console


def _ask(question):
    """Return the answer to a questionary question; ``None`` means cancelled."""
    answer = question.ask()
    if answer is None:
        raise KeyboardInterrupt
    return answer


def run_wizard(*, online: bool, cwd: Path) -> Resolution:
    """Interview the user and resolve their answers into a ``Resolution``."""
    import questionary

    try:
        app_name = _ask(
            questionary.text(
                "Enter a name for your app:",
                validate=lambda v: len(v.strip()) > 0 or "A name is required",
            )
        )

        # Reject as early as possible instead of after the whole interview.
        problem = check_target(cwd / app_name) or check_name(app_name)
        if problem is not None:
            return problem

        console.print("\nPressing [bold]enter[/bold] defaults to [bold]no[/bold] for the following...\n")
        redux = _ask(questionary.confirm("Would you like to include Redux?", default=False))
        router = redux and _ask(
            questionary.confirm("Would you like to include Redux First Router?", default=False)
        )
        express = _ask(questionary.confirm("Would you like to include an Express server?", default=False))
        mongo = express and _ask(questionary.confirm("Would you like to include MongoDB?", default=False))
    except KeyboardInterrupt:
        return Aborted(reason="Aborted.", exit_code=ExitCode.ABORTED)

    values = {
        **default_options(),
        "appName": app_name,
        "redux": bool(redux),
        "router": bool(router),
        "express": bool(express),
        "mongo": bool(mongo),
    }
    return Resolved(options=build_options(values, online=online, cwd=cwd))
