"""
Liveforge Inputs - Maps schema attributes to HEEx form inputs

Each attribute kind has a fixed control type. Arrays become multi-selects
with placeholder options, enums become selects sourced from Ecto.Enum at
runtime, and maps and references get no control at all.
"""

from __future__ import annotations

from liveforge.spec import Attribute, AttributeKind, Schema
from liveforge.translation import Role, maybe_gettext


# Control type per scalar kind. Anything not listed falls back to "text".
INPUT_TYPES: dict[AttributeKind, str] = {
    AttributeKind.INTEGER: "number",
    AttributeKind.FLOAT: "number",
    AttributeKind.DECIMAL: "number",
    AttributeKind.BOOLEAN: "checkbox",
    AttributeKind.TEXT: "text",
    AttributeKind.DATE: "date",
    AttributeKind.TIME: "time",
    AttributeKind.UTC_DATETIME: "datetime-local",
    AttributeKind.NAIVE_DATETIME: "datetime-local",
}

# Kinds whose number input accepts fractions
FRACTIONAL = frozenset({AttributeKind.FLOAT, AttributeKind.DECIMAL})


def label_attr(attr: Attribute, gettext: bool) -> str:
    return f"label={maybe_gettext(attr.label, Role.HEEX_ATTR, gettext)}"


def default_options(attr: Attribute, gettext: bool) -> str:
    """Placeholder options for a multi-select over an array field."""
    if attr.inner is AttributeKind.STRING:
        if gettext:
            option = maybe_gettext("Option", Role.EX, True)
            return f'[{{{option} <> " 1", "option1"}}, {{{option} <> " 2", "option2"}}]'
        return '[{"Option 1", "option1"}, {"Option 2", "option2"}]'
    if attr.inner is AttributeKind.INTEGER:
        return '[{"1", 1}, {"2", 2}]'
    return "[]"


def render_input(attr: Attribute, gettext: bool, schema_module: str) -> str | None:
    """
    Render the form input for one attribute.

    Args:
        attr: The attribute to render
        gettext: Whether labels and prompts go through gettext
        schema_module: Owning schema, used to look up enum values

    Returns:
        The HEEx fragment, or None for map and reference attributes
    """
    if attr.kind in (AttributeKind.MAP, AttributeKind.REFERENCES):
        return None

    field = f"field={{@form[{attr.atom}]}}"
    label = label_attr(attr, gettext)

    if attr.kind is AttributeKind.ARRAY:
        return "\n".join([
            "<.input",
            f"  {field}",
            '  type="select"',
            "  multiple",
            f"  {label}",
            f"  options={{{default_options(attr, gettext)}}}",
            "/>",
        ])

    if attr.kind is AttributeKind.ENUM:
        prompt = maybe_gettext("Choose a value", Role.HEEX_ATTR, gettext)
        return "\n".join([
            "<.input",
            f"  {field}",
            '  type="select"',
            f"  {label}",
            f"  prompt={prompt}",
            f"  options={{Ecto.Enum.values({schema_module}, {attr.atom})}}",
            "/>",
        ])

    input_type = INPUT_TYPES.get(attr.kind, "text")
    step = ' step="any"' if attr.kind in FRACTIONAL else ""
    return f'<.input {field} type="{input_type}" {label}{step} />'


def inputs(schema: Schema, gettext: bool) -> list[str | None]:
    """Inputs for every non-map attribute, in declaration order."""
    return [
        render_input(attr, gettext, schema.module)
        for attr in schema.attrs
        if attr.kind is not AttributeKind.MAP
    ]
