"""
Liveforge Translation - gettext wrapping for generated templates

Generated templates either call gettext for every user-facing string or
emit the string as a plain literal. The role decides which syntax fits the
place the string is rendered into:

    >>> maybe_gettext("Hello", Role.HEEX_ATTR, True)
    '{gettext("Hello")}'
    >>> maybe_gettext("Hello", Role.HEEX_ATTR, False)
    '"Hello"'
    >>> maybe_gettext("Hello", Role.EEX, True)
    '<%= gettext("Hello") %>'
    >>> maybe_gettext("Hello", Role.EX, False)
    '"Hello"'
"""

from __future__ import annotations

from enum import Enum


# ═══════════════════════════════════════════════════════════════════════════
# ROLES
# ═══════════════════════════════════════════════════════════════════════════


class Role(str, Enum):
    """Rendering roles for the resource generators."""

    HEEX_ATTR = "heex_attr"  # HEEx attribute value
    EEX = "eex"              # EEx template text
    EX = "ex"                # Elixir expression


class NewRole(str, Enum):
    """Rendering roles for the project bootstrap generator."""

    HEEX_ATTR = "heex_attr"
    TEXT = "text"


# ═══════════════════════════════════════════════════════════════════════════
# LITERALS
# ═══════════════════════════════════════════════════════════════════════════


_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def elixir_string(value: str) -> str:
    """Quote a string the way Elixir's inspect/1 prints it."""
    out = []
    for i, ch in enumerate(value):
        if ch == "#" and value[i + 1:i + 2] == "{":
            out.append("\\#")
        else:
            out.append(_ESCAPES.get(ch, ch))
    return '"' + "".join(out) + '"'


# ═══════════════════════════════════════════════════════════════════════════
# WRAPPERS
# ═══════════════════════════════════════════════════════════════════════════


def maybe_gettext(message: str, role: Role | str, enabled: bool) -> str:
    """Translate *message* with gettext when *enabled* is true."""
    role = Role(role)
    literal = elixir_string(message)

    if role is Role.HEEX_ATTR:
        return f"{{gettext({literal})}}" if enabled else literal
    if role is Role.EEX:
        return f"<%= gettext({literal}) %>" if enabled else message
    return f"gettext({literal})" if enabled else literal


def new_maybe_gettext(message: str, role: NewRole | str, enabled: bool) -> str:
    """Same law as maybe_gettext, for the bootstrap generator's roles."""
    role = NewRole(role)
    literal = elixir_string(message)

    if role is NewRole.HEEX_ATTR:
        return f"{{gettext({literal})}}" if enabled else literal
    return f"<%= gettext({literal}) %>" if enabled else message
