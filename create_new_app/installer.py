"""Dependency installation for a freshly generated project."""

from __future__ import annotations

from rich.markup import escape

from .config import ResolvedOptions, Settings
from .utils import console, print_error, print_success, print_warning, run_command


def install_command(options: ResolvedOptions, settings: Settings) -> list[str]:
    """Return the install command line, e.g. ``["npm", "install", "--offline"]``."""
    cmd = [settings.package_manager, "install"]
    if options.offline:
        cmd.append("--offline")
    return cmd


async def install_dependencies(options: ResolvedOptions, settings: Settings) -> int:
    """Install the project's dependencies inside ``options.app_dir``.

    The package manager's output goes straight to the terminal.  Returns its
    exit code; a failure never touches the files already generated.
    """
    cmd = install_command(options, settings)
    if options.offline:
        console.print("\nIt looks like you're offline or have a bad connection.")
    source = " cache" if options.offline else ""
    console.print(f"Installing project dependencies via {escape(settings.package_manager)}{source}...\n")

    try:
        returncode, _stdout, stderr = await run_command(
            cmd,
            cwd=options.app_dir,
            timeout=settings.install_timeout,
            capture=False,
        )
    except FileNotFoundError:
        print_error(f"Could not run {settings.package_manager!r}: executable not found.")
        return 127

    if returncode != 0:
        if stderr:
            console.print(stderr, markup=False)
        print_error(f"`{' '.join(cmd)}` failed with exit code {returncode}.")
        if options.offline:
            print_warning(
                "Offline installs only work for packages already in the local cache. "
                f"Run `{settings.package_manager} install` inside {options.app_dir} once you are online."
            )
    return returncode


def print_next_steps(options: ResolvedOptions, package_manager: str = "npm") -> None:
    """Tell the user what they can run inside the new project."""
    package_manager = escape(package_manager)
    server_msg = "and Express servers" if options.server else "server"

    print_success(f"\nSuccess! Created {options.app_name} at {options.app_dir}.")
    console.print("Inside that directory you can run several commands:\n")

    console.print(f"  [cyan]{package_manager} start[/cyan]")
    console.print(f"    Starts the development {server_msg}.\n")

    console.print(f"  [cyan]{package_manager} run build[/cyan]")
    console.print("    Bundles the app into static files for production.\n")

    if options.server:
        console.print(f"  [cyan]{package_manager} run local[/cyan]")
        console.print("    Starts only the Express server (no development server).\n")

    console.print("\nGet started by typing:\n")
    console.print(f"  [cyan]cd[/cyan] {escape(options.app_name)}")
    console.print(f"  [cyan]{package_manager} start[/cyan]\n")
