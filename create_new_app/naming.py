"""npm package-name validation.

The app name becomes the ``name`` field of ``package.json``, so it has to be
acceptable to the npm registry for *new* packages.  ``validate_package_name``
reports every problem it finds instead of stopping at the first one, and never
suggests a repaired name.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from pydantic import BaseModel, Field

MAX_NAME_LENGTH = 214

# Characters ``encodeURIComponent`` leaves untouched besides alphanumerics.
_URL_SAFE = "-_.!~*'()"

_SCOPED_RE = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")
_SPECIAL_CHARS_RE = re.compile(r"[~'!()*]")

_BLACKLIST = frozenset({"node_modules", "favicon.ico"})

# Node.js core modules; npm warns when a new package shadows one of them.
_CORE_MODULES = frozenset({
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "diagnostics_channel", "dns", "domain",
    "events", "fs", "http", "http2", "https", "inspector", "module", "net",
    "os", "path", "perf_hooks", "process", "punycode", "querystring",
    "readline", "repl", "stream", "string_decoder", "sys", "timers", "tls",
    "trace_events", "tty", "url", "util", "v8", "vm", "wasi",
    "worker_threads", "zlib",
})


class NameValidation(BaseModel):
    """Outcome of validating a package name."""

    name: str
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def valid_for_new_packages(self) -> bool:
        return not self.errors and not self.warnings

    @property
    def valid_for_old_packages(self) -> bool:
        """No hard errors; warnings (capital letters, core module names) allowed."""
        return not self.errors

    @property
    def problems(self) -> list[str]:
        """Errors followed by warnings, in the order they were found."""
        return [*self.errors, *self.warnings]


def _url_friendly(value: str) -> bool:
    return quote(value, safe=_URL_SAFE) == value


def validate_package_name(name: str | None) -> NameValidation:
    """Validate *name* against the npm rules for new packages.

    Examples::

        validate_package_name("my-app").valid_for_new_packages   -> True
        validate_package_name("My App").errors
            -> ["name can only contain URL-friendly characters"]
    """
    if name is None:
        return NameValidation(name="", errors=["name cannot be null"])

    result = NameValidation(name=name)
    errors, warnings = result.errors, result.warnings

    if not name:
        errors.append("name length must be greater than zero")
    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")
    if name.lower() in _BLACKLIST:
        errors.append(f"{name} is a blacklisted name")

    if name.lower() in _CORE_MODULES:
        warnings.append(f"{name} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        warnings.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if name.lower() != name:
        warnings.append("name can no longer contain capital letters")
    if _SPECIAL_CHARS_RE.search(name.split("/")[-1]):
        warnings.append("name can no longer contain special characters (\"~'!()*\")")

    if name and not _url_friendly(name):
        match = _SCOPED_RE.match(name)
        scoped_ok = bool(
            match
            and match.group(1) is not None
            and _url_friendly(match.group(1))
            and _url_friendly(match.group(2))
        )
        if not scoped_ok:
            errors.append("name can only contain URL-friendly characters")

    return result
