"""Unit tests for the field-to-input mapping (liveforge.inputs).

Tests cover:
- Scalar kinds and their control types
- Fractional number inputs
- Array multi-selects with placeholder options
- Enum selects sourced from Ecto.Enum
- Map and reference attributes producing no control
- Label wrapping with and without gettext
"""

from __future__ import annotations

import pytest

from liveforge.inputs import default_options, inputs, render_input
from liveforge.project import ProjectLayout
from liveforge.spec import Attribute, build_resource

SCHEMA = "MyApp.Accounts.User"


def _input(token: str, gettext: bool = True) -> str | None:
    return render_input(Attribute.parse(token), gettext, SCHEMA)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

class TestScalarInputs:
    @pytest.mark.parametrize(
        ("token", "control"),
        [
            ("age:integer", "number"),
            ("active:boolean", "checkbox"),
            ("bio:text", "text"),
            ("born_on:date", "date"),
            ("starts_at:time", "time"),
            ("seen_at:utc_datetime", "datetime-local"),
            ("seen_at:naive_datetime", "datetime-local"),
            ("name:string", "text"),
            ("token:uuid", "text"),
        ],
    )
    def test_control_type(self, token, control):
        name = token.split(":")[0]
        assert _input(token, gettext=False) == (
            f'<.input field={{@form[:{name}]}} type="{control}" label="{Attribute.parse(token).label}" />'
        )

    @pytest.mark.parametrize("token", ["price:float", "price:decimal"])
    def test_fractional_numbers_take_any_step(self, token):
        assert _input(token, gettext=False) == (
            '<.input field={@form[:price]} type="number" label="Price" step="any" />'
        )

    def test_label_uses_gettext(self):
        assert _input("age:integer") == (
            '<.input field={@form[:age]} type="number" label={gettext("Age")} />'
        )

    def test_reference_label_drops_id_suffix(self):
        assert Attribute.parse("author_id:integer").label == "Author"


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------

class TestArrayInputs:
    def test_string_array_without_gettext(self):
        assert _input("tags:array:string", gettext=False) == "\n".join([
            "<.input",
            "  field={@form[:tags]}",
            '  type="select"',
            "  multiple",
            '  label="Tags"',
            '  options={[{"Option 1", "option1"}, {"Option 2", "option2"}]}',
            "/>",
        ])

    def test_string_array_options_use_gettext(self):
        options = default_options(Attribute.parse("tags:array:string"), True)
        assert options == (
            '[{gettext("Option") <> " 1", "option1"}, {gettext("Option") <> " 2", "option2"}]'
        )

    def test_integer_array_options(self):
        assert default_options(Attribute.parse("ids:array:integer"), True) == '[{"1", 1}, {"2", 2}]'

    def test_other_array_options_are_empty(self):
        assert default_options(Attribute.parse("days:array:date"), True) == "[]"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TestEnumInputs:
    def test_enum_select(self):
        assert _input("status:enum:draft:published") == "\n".join([
            "<.input",
            "  field={@form[:status]}",
            '  type="select"',
            '  label={gettext("Status")}',
            '  prompt={gettext("Choose a value")}',
            "  options={Ecto.Enum.values(MyApp.Accounts.User, :status)}",
            "/>",
        ])

    def test_enum_prompt_without_gettext(self):
        assert '  prompt="Choose a value"' in _input("status:enum:draft", gettext=False)


# ---------------------------------------------------------------------------
# No control
# ---------------------------------------------------------------------------

class TestNoControl:
    @pytest.mark.parametrize("token", ["meta:map", "user_id:references:users"])
    def test_no_input(self, token):
        assert _input(token) is None


def test_inputs_skip_maps_and_keep_order(layout: ProjectLayout):
    resource = build_resource(
        "Blog", "Post", "posts",
        ["title:string", "meta:map", "views:integer", "author_id:references:users"],
        layout,
    )
    rendered = inputs(resource.schema, gettext=False)

    assert len(rendered) == 3
    assert "@form[:title]" in rendered[0]
    assert "@form[:views]" in rendered[1]
    assert rendered[2] is None
