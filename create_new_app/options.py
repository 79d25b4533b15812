"""Option schema and command-line resolution.

``OPTION_SCHEMA`` is the single table of recognised flags.  The argparse
parser is generated from it, and the interactive wizard reads its defaults
from it, so both paths agree on what an unanswered option means.

Resolution never writes to disk.  It returns a ``Resolution``: either
``Resolved`` carrying a frozen ``ResolvedOptions``, or ``Aborted`` carrying a
human-readable reason and the process exit code.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from enum import IntEnum
from functools import partial
from pathlib import Path
from typing import Any, Callable, Union

from pydantic import BaseModel, Field

from . import __version__
from .config import (
    DEFAULT_API_PORT,
    DEFAULT_DEV_SERVER_PORT,
    MAX_PORT,
    MIN_PORT,
    ResolvedOptions,
)
from .naming import validate_package_name
from .utils import print_warning


class ExitCode(IntEnum):
    OK = 0
    USAGE = 1
    # 2 is left to argparse for command-line syntax errors.
    DIRECTORY_EXISTS = 3
    INSTALL_FAILED = 4
    ABORTED = 130


# ---------------------------------------------------------------------------
# Resolution result
# ---------------------------------------------------------------------------


class Resolved(BaseModel):
    """Successful resolution."""

    options: ResolvedOptions


class Aborted(BaseModel):
    """Resolution stopped; nothing has been written."""

    reason: str
    details: list[str] = Field(default_factory=list)
    exit_code: int = ExitCode.USAGE


Resolution = Union[Resolved, Aborted]


# ---------------------------------------------------------------------------
# Port validation
# ---------------------------------------------------------------------------


def coerce_port(value: Any, label: str, default: int) -> int:
    """Parse *value* as a TCP port, falling back to *default* with a warning.

    Non-integers and values outside 1-65535 never raise; the caller always
    gets a usable port back.
    """
    try:
        port = int(str(value).strip())
    except ValueError:
        print_warning(f'"{value}" is an invalid {label} port. Defaulting to {default}...')
        return default

    if port < MIN_PORT or port > MAX_PORT:
        print_warning(
            f'"{port}" is out of range ({MIN_PORT} - {MAX_PORT}). Defaulting to {default}...'
        )
        return default

    return port


# ---------------------------------------------------------------------------
# Option schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OptionSpec:
    """One recognised command-line option."""

    name: str
    type: Callable[[str], Any] | None = str
    alias: str | None = None
    default: Any = None
    multiple: bool = False
    positional: bool = False
    help: str = ""

    @property
    def is_flag(self) -> bool:
        return self.type is bool

    @property
    def informational(self) -> bool:
        return self.type is None


OPTION_SCHEMA: tuple[OptionSpec, ...] = (
    # Information only.
    OptionSpec("version", type=None, alias="v", help="Show the version number and exit."),
    OptionSpec("help", type=None, alias="h", help="Show this help message and exit."),

    OptionSpec("appName", positional=True, help="Name of the new app (and of its directory)."),
    OptionSpec("title", alias="t", default="", help="Page title; defaults to the app name."),

    # Addons.
    OptionSpec("redux", type=bool, alias="x", default=False, help="Include Redux."),
    OptionSpec(
        "router", type=bool, alias="r", default=False,
        help="Include Redux First Router (requires --redux).",
    ),

    # Flags.
    OptionSpec(
        "offline", type=bool, alias="o", default=False,
        help="Install dependencies from the local cache.",
    ),
    OptionSpec(
        "force", type=bool, alias="f", default=False,
        help="Generate into an existing directory. Use with caution.",
    ),
    OptionSpec("sandbox", type=bool, alias="s", default=False, help="Create a minimal sandbox project."),

    # package.json fields.
    OptionSpec("author", default="", help="package.json author."),
    OptionSpec("description", default="", help="package.json description; defaults to the title."),
    OptionSpec("email", default="", help="package.json email."),
    OptionSpec("keywords", default=(), multiple=True, help="package.json keywords (repeatable)."),

    # Dev server / API options.
    OptionSpec(
        "devServerPort",
        type=partial(coerce_port, label="dev server", default=DEFAULT_DEV_SERVER_PORT),
        default=DEFAULT_DEV_SERVER_PORT,
        help=f"Webpack dev server port (default: {DEFAULT_DEV_SERVER_PORT}).",
    ),
    OptionSpec(
        "apiPort",
        type=partial(coerce_port, label="api", default=DEFAULT_API_PORT),
        default=DEFAULT_API_PORT,
        help=f"Express server port (default: {DEFAULT_API_PORT}).",
    ),
    OptionSpec("api", default=None, help="Path proxied to the API server during development."),
    OptionSpec("express", type=bool, alias="e", default=False, help="Include an Express server."),
    OptionSpec(
        "mongo", type=bool, alias="m", default=False,
        help="Include MongoDB (requires --express).",
    ),
)


def default_options() -> dict[str, Any]:
    """Return ``{option name: default}`` for every non-informational option."""
    return {
        spec.name: spec.default
        for spec in OPTION_SCHEMA
        if not spec.informational and not spec.positional
    }


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser from ``OPTION_SCHEMA``."""
    parser = argparse.ArgumentParser(
        prog="create-new-app",
        description="Create a new React + Webpack app with optional Redux, router, Express and MongoDB.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog=(
            "Examples:\n"
            "  create-new-app my-app\n"
            "  create-new-app my-app --redux --router\n"
            "  create-new-app my-app --express --mongo --apiPort 4000\n"
            "  create-new-app                  (guided setup)\n"
        ),
    )

    for spec in OPTION_SCHEMA:
        flags = [f"--{spec.name}"]
        if spec.alias:
            flags.append(f"-{spec.alias}")

        if spec.name == "help":
            parser.add_argument(*flags, action="help", help=spec.help)
        elif spec.name == "version":
            parser.add_argument(
                *flags, action="version", version=f"%(prog)s {__version__}", help=spec.help
            )
        elif spec.positional:
            parser.add_argument(spec.name, nargs="?", default=None, help=spec.help)
        elif spec.is_flag:
            parser.add_argument(*flags, dest=spec.name, action="store_true", default=None, help=spec.help)
        elif spec.multiple:
            parser.add_argument(
                *flags, dest=spec.name, action="extend", nargs="+", type=spec.type,
                default=None, help=spec.help,
            )
        else:
            parser.add_argument(*flags, dest=spec.name, type=spec.type, default=None, help=spec.help)

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse *argv*; ``--help`` and ``--version`` print and exit here."""
    return build_parser().parse_args(argv)


# ---------------------------------------------------------------------------
# Checks shared by the resolver and the wizard
# ---------------------------------------------------------------------------


def check_name(app_name: str) -> Aborted | None:
    """Return an ``Aborted`` listing every naming problem, or ``None``.

    Only errors abort.  Warnings alone (capital letters, core module names)
    are printed and the name is accepted as given.
    """
    validation = validate_package_name(app_name)
    if validation.valid_for_old_packages:
        for warning in validation.warnings:
            print_warning(f"{app_name}: {warning}")
        return None
    return Aborted(
        reason=f"Could not create a project called {app_name!r} because of npm naming restrictions:",
        details=validation.problems,
        exit_code=ExitCode.USAGE,
    )


def check_target(app_dir: Path, *, force: bool = False) -> Aborted | None:
    """Return an ``Aborted`` when *app_dir* already exists and *force* is off."""
    if not app_dir.exists() or force:
        return None
    return Aborted(
        reason=f"The directory {app_dir} already exists.",
        details=["Pick a different name, or pass --force to generate into it anyway."],
        exit_code=ExitCode.DIRECTORY_EXISTS,
    )


def _strip_whitespace(value: str | None) -> str | None:
    if value is None:
        return None
    return "".join(value.split()) or None


def build_options(values: dict[str, Any], *, online: bool, cwd: Path) -> ResolvedOptions:
    """Turn merged raw values into a ``ResolvedOptions``.

    Derives the fields neither the command line nor the wizard supplies
    directly: title and description fallbacks, ``app_dir``, ``offline`` and
    the dev server port bump when it collides with the API port.
    """
    app_name = values["appName"]
    title = values.get("title") or app_name
    express = bool(values.get("express"))
    mongo = bool(values.get("mongo"))

    dev_server_port = values.get("devServerPort", DEFAULT_DEV_SERVER_PORT)
    api_port = values.get("apiPort", DEFAULT_API_PORT)
    if (express or mongo) and dev_server_port == api_port:
        # The API port wins; the dev server moves out of its way.
        dev_server_port = api_port + 1 if api_port < MAX_PORT else api_port - 1

    return ResolvedOptions(
        app_name=app_name,
        title=title,
        description=values.get("description") or title,
        author=values.get("author") or "",
        email=values.get("email") or "",
        keywords=tuple(values.get("keywords") or ()),
        redux=bool(values.get("redux")),
        router=bool(values.get("router")),
        express=express,
        mongo=mongo,
        api_path=_strip_whitespace(values.get("api")),
        dev_server_port=dev_server_port,
        api_port=api_port,
        online=online,
        offline=not online or bool(values.get("offline")),
        force=bool(values.get("force")),
        sandbox=bool(values.get("sandbox")),
        app_dir=cwd / app_name,
    )


# ---------------------------------------------------------------------------
# Argument resolver
# ---------------------------------------------------------------------------


def resolve_args(namespace: argparse.Namespace, *, online: bool, cwd: Path) -> Resolution:
    """Resolve parsed command-line arguments into a ``Resolution``."""
    values = default_options()
    values.update({k: v for k, v in vars(namespace).items() if v is not None})

    app_name = values.get("appName")
    sandbox = bool(values.get("sandbox"))
    if not app_name:
        usage = "create-new-app <project-name>" + (" --sandbox" if sandbox else "")
        return Aborted(
            reason="Oops! You forgot to provide a project name.",
            details=[usage],
            exit_code=ExitCode.USAGE,
        )

    if not sandbox:
        problem = check_name(app_name)
        if problem is not None:
            return problem

    problem = check_target(cwd / app_name, force=bool(values.get("force")))
    if problem is not None:
        return problem

    if values.get("router") and not values.get("redux"):
        print_warning("Redux First Router needs Redux. Including Redux as well.")
        values["redux"] = True
    if values.get("mongo") and not values.get("express"):
        print_warning("MongoDB is served through Express. Including an Express server as well.")
        values["express"] = True

    return Resolved(options=build_options(values, online=online, cwd=cwd))
