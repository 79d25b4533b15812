"""create-new-app configuration.

Two typed models live here:

* ``Settings`` -- tool-level knobs (package manager, registry, timeouts) that
  can be overridden from environment variables.
* ``ResolvedOptions`` -- the immutable record describing the one project being
  generated.  It is built once, by either the argument resolver or the
  interactive wizard, and then passed down to every generation step.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_DEV_SERVER_PORT = 8080
DEFAULT_API_PORT = 3000
MIN_PORT = 1
MAX_PORT = 65535

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Tool-level settings, independent of the project being generated."""

    package_manager: str = Field(default="npm", description="Executable used to install dependencies")
    registry_url: str = Field(
        default="https://registry.npmjs.org",
        description="URL probed to decide whether installs can go to the network",
    )
    probe_timeout: float = Field(default=5.0, gt=0, description="Connectivity probe timeout in seconds")
    install_timeout: int = Field(default=900, ge=1, description="Dependency install timeout in seconds")
    skip_install: bool = Field(default=False, description="Generate files without installing dependencies")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            CNA_PACKAGE_MANAGER, CNA_REGISTRY_URL, CNA_PROBE_TIMEOUT,
            CNA_INSTALL_TIMEOUT, CNA_SKIP_INSTALL.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("CNA_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["CNA_PACKAGE_MANAGER"]
        if os.environ.get("CNA_REGISTRY_URL"):
            kwargs["registry_url"] = os.environ["CNA_REGISTRY_URL"]
        if os.environ.get("CNA_PROBE_TIMEOUT"):
            kwargs["probe_timeout"] = float(os.environ["CNA_PROBE_TIMEOUT"])
        if os.environ.get("CNA_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["CNA_INSTALL_TIMEOUT"])
        if os.environ.get("CNA_SKIP_INSTALL"):
            kwargs["skip_install"] = os.environ["CNA_SKIP_INSTALL"].strip().lower() in _TRUTHY
        return cls(**kwargs)


class ResolvedOptions(BaseModel):
    """Everything needed to generate one project.

    Instances are frozen.  The model validator enforces the cross-field rules
    that the resolver and the wizard are responsible for establishing:

    * the router addon requires the Redux addon,
    * the MongoDB addon requires the Express addon,
    * ``app_dir`` is named after the app.
    """

    model_config = ConfigDict(frozen=True)

    app_name: str = Field(..., min_length=1)
    title: str = ""
    description: str = ""
    author: str = ""
    email: str = ""
    keywords: tuple[str, ...] = ()

    redux: bool = False
    router: bool = False
    express: bool = False
    mongo: bool = False

    api_path: str | None = None
    dev_server_port: int = Field(default=DEFAULT_DEV_SERVER_PORT, ge=MIN_PORT, le=MAX_PORT)
    api_port: int = Field(default=DEFAULT_API_PORT, ge=MIN_PORT, le=MAX_PORT)

    online: bool = True
    offline: bool = False
    force: bool = False
    sandbox: bool = False

    app_dir: Path

    @model_validator(mode="after")
    def _check_invariants(self) -> "ResolvedOptions":
        if self.router and not self.redux:
            raise ValueError("the router addon requires the redux addon")
        if self.mongo and not self.express:
            raise ValueError("the mongo addon requires the express addon")
        name_parts = Path(self.app_name).parts
        if self.app_dir.parts[-len(name_parts):] != name_parts:
            raise ValueError(f"app_dir {self.app_dir} is not named after {self.app_name!r}")
        return self

    @property
    def server(self) -> bool:
        """Whether the project ships an Express server."""
        return self.express or self.mongo

    def summary(self) -> dict[str, str]:
        """Return a ``{label: value}`` mapping for the console summary table."""
        addons = [
            name
            for name, enabled in (
                ("redux", self.redux),
                ("router", self.router),
                ("express", self.express),
                ("mongo", self.mongo),
            )
            if enabled
        ]
        data = {
            "Name": self.app_name,
            "Directory": str(self.app_dir),
            "Title": self.title,
        }
        if self.sandbox:
            data["Mode"] = "sandbox"
            return data
        data["Addons"] = ", ".join(addons) or "none"
        data["Dev server port"] = str(self.dev_server_port)
        if self.server:
            data["API port"] = str(self.api_port)
        if self.api_path:
            data["API proxy path"] = self.api_path
        data["Install"] = "offline (local cache)" if self.offline else "online"
        return data
