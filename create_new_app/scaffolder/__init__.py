"""create-new-app scaffolder -- turns resolved options into a project tree.

Quick usage::

    from create_new_app.scaffolder import ProjectGenerator

    generator = ProjectGenerator(options)
    project_path = await generator.generate()
"""

from create_new_app.scaffolder.generator import ProjectGenerator
from create_new_app.scaffolder.layout import PROJECT_LAYOUT, SANDBOX_LAYOUT, FileRule, RuleKind, select_rules
from create_new_app.scaffolder.renderers import render_env, render_manifest, render_webpack_config
from create_new_app.scaffolder.templates import TemplateRenderer

__all__ = [
    "FileRule",
    "PROJECT_LAYOUT",
    "ProjectGenerator",
    "RuleKind",
    "SANDBOX_LAYOUT",
    "TemplateRenderer",
    "render_env",
    "render_manifest",
    "render_webpack_config",
    "select_rules",
]
