"""Main scaffolding orchestrator.

Takes a ``ResolvedOptions`` and materialises the new project directory by
executing the rules ``layout.select_rules`` picks for it.  Any ``OSError``
(permission denied, disk full, directory already present without --force)
propagates to the caller; files written before the failure are left alone.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..config import ResolvedOptions
from .layout import FileRule, RuleKind, select_rules
from .renderers import RENDERERS
from .templates import TemplateRenderer


class ProjectGenerator:
    """Generates one project from its resolved options.

    Regular projects get the React + Webpack skeleton plus whatever the Redux,
    router, Express and MongoDB addons contribute.  Sandbox projects get the
    minimal sandbox tree and nothing else.
    """

    def __init__(self, options: ResolvedOptions, renderer: TemplateRenderer | None = None) -> None:
        self.options = options
        self.renderer = renderer or TemplateRenderer()
        self.written: list[Path] = []

    # -- Public API --------------------------------------------------------

    async def generate(self) -> Path:
        """Generate the project.

        Returns:
            Path to the generated project root (``options.app_dir``).
        """
        root = self.options.app_dir
        await self._create_project_directory(root)

        for rule in select_rules(self.options):
            await self._apply(rule, root)

        return root

    # -- Steps -------------------------------------------------------------

    async def _create_project_directory(self, root: Path) -> None:
        """Create the project directory; an existing one is only reused with --force."""
        await asyncio.to_thread(root.mkdir, parents=True, exist_ok=self.options.force)

    async def _apply(self, rule: FileRule, root: Path) -> None:
        destination = (root / rule.destination) if rule.destination != "." else root

        if rule.kind is RuleKind.RENDER:
            content = RENDERERS[rule.source](self.options, self.renderer)
            self.written.append(await self.renderer.write_text(destination, content))
        elif rule.kind is RuleKind.FILE:
            self.written.append(await self.renderer.copy_file(rule.source, destination))
        elif rule.kind is RuleKind.TREE:
            self.written.extend(await self.renderer.copy_tree(rule.source, destination))
        else:  # pragma: no cover
            raise ValueError(f"unknown rule kind: {rule.kind}")
