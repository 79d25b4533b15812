"""create-new-app command-line entry point.

Usage::

    create-new-app my-app
    create-new-app my-app --redux --router --express --mongo
    create-new-app                      # guided setup
    python -m create_new_app my-app --sandbox
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from .config import ResolvedOptions, Settings
from .installer import install_dependencies, print_next_steps
from .options import Aborted, ExitCode, Resolution, parse_args, resolve_args
from .scaffolder import ProjectGenerator
from .utils import (
    check_online,
    clear_screen,
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)
from .wizard import run_wizard


def report_abort(aborted: Aborted) -> None:
    """Print why resolution stopped."""
    print_error(aborted.reason)
    for detail in aborted.details:
        console.print(f"  [red]*[/red] {escape(detail)}")


def report_offline(options: ResolvedOptions) -> None:
    if options.sandbox or not options.offline:
        return
    if not options.online:
        print_warning("You appear to be offline.")
    print_warning("Installing via the local package cache.")


async def create_app(options: ResolvedOptions, settings: Settings) -> int:
    """Generate the project described by *options* and install its dependencies.

    Returns the process exit code.
    """
    kind = " sandbox" if options.sandbox else ""
    console.print(
        Panel(
            f"Creating a new{kind} app in [green]{escape(str(options.app_dir.parent))}/[/green]"
            f"[bold green]{escape(options.app_name)}[/bold green].",
            border_style="cyan",
        )
    )
    print_summary_table(options.summary(), title="Project")

    generator = ProjectGenerator(options)
    try:
        await generator.generate()
    except OSError as exc:
        print_error(f"Could not write the project files: {exc}")
        return ExitCode.USAGE

    if options.sandbox:
        print_success(f"Sandbox created at {options.app_dir}.")
        return ExitCode.OK

    if settings.skip_install:
        print_warning(f"Skipping dependency installation; run `{settings.package_manager} install` yourself.")
    else:
        returncode = await install_dependencies(options, settings)
        if returncode != 0:
            return ExitCode.INSTALL_FAILED

    print_next_steps(options, settings.package_manager)
    return ExitCode.OK


def run(argv: list[str], *, cwd: Path | None = None, settings: Settings | None = None) -> int:
    """Run the generator for *argv* and return the exit code.

    With no arguments at all the guided wizard runs; otherwise the arguments
    are resolved directly.  ``--help`` and ``--version`` exit inside argparse.
    """
    settings = settings or Settings.from_env()
    cwd = cwd or Path.cwd()

    namespace = parse_args(argv) if argv else None

    clear_screen()
    online = asyncio.run(check_online(settings.registry_url, settings.probe_timeout))

    resolution: Resolution
    if namespace is None:
        resolution = run_wizard(online=online, cwd=cwd)
    else:
        resolution = resolve_args(namespace, online=online, cwd=cwd)

    if isinstance(resolution, Aborted):
        report_abort(resolution)
        return resolution.exit_code

    options = resolution.options
    report_offline(options)
    return asyncio.run(create_app(options, settings))


def main() -> None:
    """CLI entry point for ``create-new-app`` and ``python -m create_new_app``."""
    sys.exit(int(run(sys.argv[1:])))


if __name__ == "__main__":
    main()
