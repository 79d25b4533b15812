"""Renderers for the generated files whose contents depend on the options.

Each renderer is a pure ``ResolvedOptions -> str`` function.  The only
non-deterministic value anywhere is the session secret written to ``.env``
for MongoDB projects; pass ``secret=`` to pin it.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Callable

from ..config import ResolvedOptions
from .templates import TemplateRenderer

MANIFEST_VERSION = "0.1.0"
DEFAULT_API_PROXY_PATH = "/api"

_BUILD = "cross-env NODE_ENV=production webpack --mode production --env prod"
_DEV_SERVER = "webpack serve --mode development --env dev --open"

_DEPENDENCIES: dict[str, str] = {
    "react": "^18.2.0",
    "react-dom": "^18.2.0",
}
_REDUX_DEPENDENCIES: dict[str, str] = {
    "react-redux": "^8.1.3",
    "redux": "^4.2.1",
}
_ROUTER_DEPENDENCIES: dict[str, str] = {
    "redux-first-router": "^2.1.5",
    "redux-first-router-link": "^2.1.1",
}
_EXPRESS_DEPENDENCIES: dict[str, str] = {
    "body-parser": "^1.20.2",
    "compression": "^1.7.4",
    "dotenv": "^16.4.5",
    "express": "^4.19.2",
    "helmet": "^7.1.0",
}
_MONGO_DEPENDENCIES: dict[str, str] = {
    "connect-mongo": "^5.1.0",
    "express-session": "^1.18.0",
    "mongodb": "^6.5.0",
}
_DEV_DEPENDENCIES: dict[str, str] = {
    "@babel/core": "^7.24.4",
    "@babel/preset-env": "^7.24.4",
    "@babel/preset-react": "^7.24.1",
    "autoprefixer": "^10.4.19",
    "babel-loader": "^9.1.3",
    "cross-env": "^7.0.3",
    "css-loader": "^7.1.1",
    "html-webpack-plugin": "^5.6.0",
    "mini-css-extract-plugin": "^2.9.0",
    "postcss": "^8.4.38",
    "postcss-loader": "^8.1.1",
    "sass": "^1.75.0",
    "sass-loader": "^14.2.1",
    "style-loader": "^4.0.0",
    "webpack": "^5.91.0",
    "webpack-cli": "^5.1.4",
    "webpack-dev-server": "^5.0.4",
}
_SERVER_DEV_DEPENDENCIES: dict[str, str] = {
    "nodemon": "^3.1.0",
    "npm-run-all": "^4.1.5",
}


# ---------------------------------------------------------------------------
# .env
# ---------------------------------------------------------------------------


def render_env(options: ResolvedOptions, *, secret: str | None = None) -> str:
    """Render the ``.env`` file.

    Always contains the app name and the dev server port.  Server projects add
    the API port; MongoDB projects add the connection string, the session
    collection name and a fresh random session secret.
    """
    lines = [
        f"appName={options.app_name}",
        f"DEV_SERVER_PORT={options.dev_server_port}",
    ]
    if options.server:
        lines.append(f"API_PORT={options.api_port}")
    if options.mongo:
        lines.extend([
            f"mongoURI=mongodb://localhost:27017/{options.app_name}",
            f"mongoSession={options.app_name}Sessions",
            f"secret={secret if secret is not None else uuid.uuid4()}",
        ])
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------


def _scripts(options: ResolvedOptions) -> dict[str, str]:
    if not options.server:
        return {
            "build": _BUILD,
            "start": f"cross-env NODE_ENV=development {_DEV_SERVER}",
        }
    return {
        "build": _BUILD,
        "build:dev": "cross-env NODE_ENV=development webpack --mode development --env dev",
        "local": "npm run server:api",
        "server:dev": _DEV_SERVER,
        "server:api": "nodemon server.js",
        "start": "cross-env NODE_ENV=development npm-run-all --parallel server:*",
    }


def _dependencies(options: ResolvedOptions) -> tuple[dict[str, str], dict[str, str]]:
    deps = dict(_DEPENDENCIES)
    dev_deps = dict(_DEV_DEPENDENCIES)
    if options.redux:
        deps.update(_REDUX_DEPENDENCIES)
    if options.router:
        deps.update(_ROUTER_DEPENDENCIES)
    if options.server:
        deps.update(_EXPRESS_DEPENDENCIES)
        dev_deps.update(_SERVER_DEV_DEPENDENCIES)
    if options.mongo:
        deps.update(_MONGO_DEPENDENCIES)
    return dict(sorted(deps.items())), dict(sorted(dev_deps.items()))


def render_manifest(options: ResolvedOptions) -> str:
    """Render ``package.json`` as 2-space indented JSON."""
    manifest: dict[str, Any] = {
        "name": options.app_name,
        "version": MANIFEST_VERSION,
        "description": options.description,
        "keywords": list(options.keywords),
        "author": options.author,
        "email": options.email,
    }
    if options.server:
        manifest["main"] = "server.js"
    manifest["scripts"] = _scripts(options)
    manifest["babel"] = {"presets": ["@babel/preset-env", "@babel/preset-react"]}

    deps, dev_deps = _dependencies(options)
    manifest["dependencies"] = deps
    manifest["devDependencies"] = dev_deps
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


# ---------------------------------------------------------------------------
# webpack.config.js
# ---------------------------------------------------------------------------


def template_context(options: ResolvedOptions) -> dict[str, Any]:
    """Build the Jinja2 template context from the resolved options."""
    api_proxy = options.api_path or (DEFAULT_API_PROXY_PATH if options.server else None)
    return {
        "app_name": options.app_name,
        "title": options.title,
        "redux": options.redux,
        "router": options.router,
        "server": options.server,
        "dev_server_port": options.dev_server_port,
        "api_port": options.api_port,
        "api_proxy": api_proxy,
    }


def render_webpack_config(
    options: ResolvedOptions, renderer: TemplateRenderer | None = None
) -> str:
    """Render ``webpack.config.js``.

    Redux projects get resolve aliases for ``actions``, ``helpers``,
    ``middleware`` and ``reducers`` (all under ``src/utils``).
    """
    renderer = renderer or TemplateRenderer()
    return renderer.render("webpack.config.js.j2", template_context(options))


# Renderer lookup used by the file layout: name -> callable(options, renderer).
RENDERERS: dict[str, Callable[[ResolvedOptions, TemplateRenderer], str]] = {
    "env": lambda options, _renderer: render_env(options),
    "manifest": lambda options, _renderer: render_manifest(options),
    "webpack": render_webpack_config,
}
