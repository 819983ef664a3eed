"""
Liveforge Naming - Case conversions shared by models and templates
"""

from __future__ import annotations

import re

MODULE_RE = re.compile(r"^[A-Z][A-Za-z0-9]*(\.[A-Z][A-Za-z0-9]*)*$")
IDENTIFIER_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def camelize(s: str) -> str:
    """Convert my_app or my_app/web to MyApp or MyApp.Web."""
    return ".".join(
        "".join(p[:1].upper() + p[1:] for p in part.split("_") if p)
        for part in s.split("/")
    )


def underscore(s: str) -> str:
    """Convert MyApp.UserLive to my_app/user_live."""
    parts = []
    for part in s.split("."):
        part = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", part)
        part = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", part)
        parts.append(part.replace("-", "_").lower())
    return "/".join(parts)


def humanize(s: str) -> str:
    """Convert user_name or author_id to User name or Author."""
    if s.endswith("_id"):
        s = s[:-3]
    s = s.replace("_", " ").strip()
    return s[:1].upper() + s[1:]


def is_module_name(s: str) -> bool:
    return bool(MODULE_RE.match(s))


def is_identifier(s: str) -> bool:
    return bool(IDENTIFIER_RE.match(s))
