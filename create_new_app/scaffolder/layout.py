"""The generated project's file layout, as data.

Every file that can end up in a new project is described by one ``FileRule``:
*when* it applies, *how* it is produced, *where* it comes from and *where* it
goes.  ``select_rules`` evaluates the conditions once against the options;
the generator then executes the selected rules in table order, so a later
rule may overwrite a file written by an earlier one (the Redux variants of
``src/entry.js`` and ``src/components/App.jsx`` rely on this).
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple

from ..config import ResolvedOptions


class RuleKind(str, Enum):
    RENDER = "render"  # source is a key of ``renderers.RENDERERS``
    FILE = "file"      # source is a template file copied verbatim
    TREE = "tree"      # source is a template directory copied recursively


class FileRule(NamedTuple):
    when: Callable[[ResolvedOptions], bool]
    kind: RuleKind
    source: str
    destination: str


def _always(options: ResolvedOptions) -> bool:
    return True


def _plain_server(options: ResolvedOptions) -> bool:
    return options.server and not options.mongo


def _mongo(options: ResolvedOptions) -> bool:
    return options.mongo


def _express_only(options: ResolvedOptions) -> bool:
    return options.express and not options.mongo


def _redux(options: ResolvedOptions) -> bool:
    return options.redux or options.router


def _router(options: ResolvedOptions) -> bool:
    return options.router


def _redux_without_router(options: ResolvedOptions) -> bool:
    return options.redux and not options.router


PROJECT_LAYOUT: tuple[FileRule, ...] = (
    # Root files.
    FileRule(_always, RuleKind.RENDER, "env", ".env"),
    FileRule(_always, RuleKind.FILE, "gitignore.txt", ".gitignore"),
    FileRule(_always, RuleKind.RENDER, "manifest", "package.json"),
    FileRule(_always, RuleKind.FILE, "postcss.config.js", "postcss.config.js"),
    FileRule(_always, RuleKind.FILE, "README.md", "README.md"),
    FileRule(_plain_server, RuleKind.FILE, "server.js", "server.js"),
    FileRule(_mongo, RuleKind.FILE, "server-mongo.js", "server.js"),
    FileRule(_always, RuleKind.RENDER, "webpack", "webpack.config.js"),

    # API.
    FileRule(_mongo, RuleKind.TREE, "api", "api"),
    FileRule(_express_only, RuleKind.FILE, "api/home.js", "api/home.js"),

    # Front end.
    FileRule(_always, RuleKind.TREE, "dist", "dist"),
    FileRule(_always, RuleKind.TREE, "src", "src"),
    FileRule(_redux, RuleKind.FILE, "redux/entry.js", "src/entry.js"),
    FileRule(_redux, RuleKind.TREE, "redux/utils", "src/utils"),

    # Redux First Router variants.
    FileRule(_router, RuleKind.FILE, "redux/Redux1stApp.jsx", "src/components/App.jsx"),
    FileRule(_router, RuleKind.FILE, "redux/Redux1stExample.jsx", "src/components/Example.jsx"),
    FileRule(_router, RuleKind.FILE, "redux/NotFound.jsx", "src/components/NotFound.jsx"),
    FileRule(_router, RuleKind.FILE, "redux/routerStore.js", "src/store.js"),
    FileRule(_router, RuleKind.FILE, "redux/routesMap.js", "src/routesMap.js"),

    # Plain Redux variants.
    FileRule(_redux_without_router, RuleKind.FILE, "redux/ReduxApp.jsx", "src/components/App.jsx"),
    FileRule(_redux_without_router, RuleKind.FILE, "redux/ReduxExample.jsx", "src/components/Example.jsx"),
    FileRule(_redux_without_router, RuleKind.FILE, "redux/store.js", "src/store.js"),
)

SANDBOX_LAYOUT: tuple[FileRule, ...] = (
    FileRule(_always, RuleKind.TREE, "sandbox", "."),
)


def select_rules(options: ResolvedOptions) -> list[FileRule]:
    """Return the rules that apply to *options*, in execution order."""
    layout = SANDBOX_LAYOUT if options.sandbox else PROJECT_LAYOUT
    return [rule for rule in layout if rule.when(options)]
