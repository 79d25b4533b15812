"""Template access for project scaffolding.

Provides the TemplateRenderer class, which owns the bundled
``scaffolder/templates/`` directory.  Files ending in ``.j2`` are Jinja2
templates rendered with the resolved options; everything else is copied
verbatim, either one file at a time or as a whole tree.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders and copies template files for project scaffolding.

    Template paths are always relative to the template directory, e.g.
    ``"redux/store.js"`` or ``"webpack.config.js.j2"``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["js_string"] = _js_string_filter

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"webpack.config.js.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    async def write_text(self, output_path: str | Path, content: str) -> Path:
        """Write already-rendered *content* to *output_path*."""
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    # -- Verbatim copies ---------------------------------------------------

    def source(self, template_path: str) -> Path:
        """Absolute path of a bundled template file or directory."""
        return self.template_dir / template_path

    async def copy_file(self, template_path: str, output_path: str | Path) -> Path:
        """Copy one template file to *output_path*, overwriting it if present.

        Parent directories are created automatically.
        """
        out = Path(output_path)
        await asyncio.to_thread(_copy_file, self.source(template_path), out)
        return out

    async def copy_tree(self, template_prefix: str, output_dir: str | Path) -> list[Path]:
        """Copy every file under *template_prefix* into *output_dir*.

        The directory structure is preserved and existing files are
        overwritten: copying ``"redux/utils"`` to ``/tmp/app/src/utils`` writes
        ``/tmp/app/src/utils/reducers/appReducer.js`` and so on.

        Returns:
            List of written file paths, sorted.
        """
        prefix_path = self.source(template_prefix)
        if not prefix_path.is_dir():
            raise FileNotFoundError(f"template directory not found: {prefix_path}")

        out_base = Path(output_dir)
        await asyncio.to_thread(shutil.copytree, prefix_path, out_base, dirs_exist_ok=True)
        return sorted(
            out_base / p.relative_to(prefix_path)
            for p in prefix_path.rglob("*")
            if p.is_file()
        )

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all template file paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*")
            if p.is_file()
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _js_string_filter(value: Any) -> str:
    """Quote a value as a single-quoted JavaScript string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(source: Path, destination: Path) -> None:
    """Synchronous helper: create parent dirs and copy one file."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)
