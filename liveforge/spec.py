"""
Liveforge Spec Models - Pydantic models for the scaffolded resource

Defines the attribute kinds accepted on the command line, the schema and
context naming derived from the three positional arguments, and the sample
values used by generated tests. Every model is frozen: names are computed
once by build_resource and never mutated afterwards.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel

from liveforge.errors import UsageError
from liveforge.naming import humanize, is_identifier, is_module_name, underscore
from liveforge.translation import elixir_string

if TYPE_CHECKING:
    from liveforge.project import ProjectLayout


# ═══════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════


class AttributeKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    STRING = "string"
    TEXT = "text"
    DATE = "date"
    TIME = "time"
    TIME_USEC = "time_usec"
    UTC_DATETIME = "utc_datetime"
    UTC_DATETIME_USEC = "utc_datetime_usec"
    NAIVE_DATETIME = "naive_datetime"
    NAIVE_DATETIME_USEC = "naive_datetime_usec"
    UUID = "uuid"
    BINARY = "binary"
    MAP = "map"
    ARRAY = "array"
    ENUM = "enum"
    REFERENCES = "references"


# Kinds that can appear as array:<inner>
ARRAY_INNER_KINDS = frozenset(
    k for k in AttributeKind
    if k not in (AttributeKind.ARRAY, AttributeKind.ENUM, AttributeKind.REFERENCES)
)

MODIFIERS = ("unique", "redact")


# ═══════════════════════════════════════════════════════════════════════════
# ATTRIBUTES
# ═══════════════════════════════════════════════════════════════════════════


class Attribute(BaseModel):
    """One schema field, parsed from a name:type token."""

    name: str
    kind: AttributeKind
    inner: AttributeKind | None = None  # array element kind
    values: tuple[str, ...] = ()        # enum values
    target: str | None = None           # referenced table
    unique: bool = False
    redact: bool = False

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, token: str) -> "Attribute":
        """
        Parse a CLI token such as ``age:integer``, ``tags:array:string``,
        ``status:enum:draft:published`` or ``user_id:references:users``.

        A bare name is a string field. ``:unique`` and ``:redact`` may be
        appended to any type.
        """
        parts = token.split(":")
        name, rest = parts[0], parts[1:]

        flags = {}
        while rest and rest[-1] in MODIFIERS:
            flags[rest.pop()] = True

        if not is_identifier(name):
            raise UsageError(f"Invalid attribute name {name!r} in {token!r}, expected snake_case")

        if not rest:
            return cls(name=name, kind=AttributeKind.STRING, **flags)

        kind = _parse_kind(rest[0], token)

        if kind is AttributeKind.ARRAY:
            if len(rest) != 2:
                raise UsageError(f"Array attribute {token!r} must name its element type, e.g. tags:array:string")
            inner = _parse_kind(rest[1], token)
            if inner not in ARRAY_INNER_KINDS:
                raise UsageError(f"Unsupported array element type {rest[1]!r} in {token!r}")
            return cls(name=name, kind=kind, inner=inner, **flags)

        if kind is AttributeKind.ENUM:
            values = tuple(rest[1:])
            if not values:
                raise UsageError(f"Enum attribute {token!r} needs at least one value, e.g. status:enum:draft:published")
            return cls(name=name, kind=kind, values=values, **flags)

        if kind is AttributeKind.REFERENCES:
            if len(rest) != 2 or not is_identifier(rest[1]):
                raise UsageError(f"Reference attribute {token!r} must name its table, e.g. user_id:references:users")
            return cls(name=name, kind=kind, target=rest[1], **flags)

        if len(rest) > 1:
            raise UsageError(f"Unexpected options {':'.join(rest[1:])!r} in {token!r}")
        return cls(name=name, kind=kind, **flags)

    @property
    def label(self) -> str:
        return humanize(self.name)

    @property
    def atom(self) -> str:
        return f":{self.name}"

    def ecto_type(self) -> str:
        """The Ecto field type as written in a schema module."""
        if self.kind is AttributeKind.ARRAY:
            return f"{{:array, :{self.inner.value}}}"
        if self.kind is AttributeKind.ENUM:
            return "Ecto.Enum, values: [" + ", ".join(f":{v}" for v in self.values) + "]"
        if self.kind is AttributeKind.TEXT:
            return ":string"
        if self.kind is AttributeKind.UUID:
            return "Ecto.UUID"
        if self.kind is AttributeKind.REFERENCES:
            return ":id"
        return f":{self.kind.value}"


def _parse_kind(value: str, token: str) -> AttributeKind:
    if value == "datetime":
        return AttributeKind.NAIVE_DATETIME
    try:
        return AttributeKind(value)
    except ValueError:
        raise UsageError(f"Unknown type {value!r} given to generator in {token!r}") from None


def parse_attrs(tokens: list[str]) -> tuple[Attribute, ...]:
    """Parse every attribute token, rejecting duplicate field names."""
    attrs = tuple(Attribute.parse(t) for t in tokens)
    seen: set[str] = set()
    for attr in attrs:
        if attr.name in seen:
            raise UsageError(f"Duplicate attribute {attr.name!r}")
        seen.add(attr.name)
    return attrs


# ═══════════════════════════════════════════════════════════════════════════
# SAMPLE VALUES
# ═══════════════════════════════════════════════════════════════════════════


_SAMPLES: dict[AttributeKind, tuple[str, str]] = {
    AttributeKind.INTEGER: ("42", "43"),
    AttributeKind.FLOAT: ("120.5", "456.7"),
    AttributeKind.DECIMAL: ('"120.5"', '"456.7"'),
    AttributeKind.BOOLEAN: ("true", "false"),
    AttributeKind.MAP: ("%{}", "%{}"),
    AttributeKind.DATE: ("~D[2024-01-01]", "~D[2024-01-02]"),
    AttributeKind.TIME: ("~T[14:00:00]", "~T[15:01:01]"),
    AttributeKind.TIME_USEC: ("~T[14:00:00.000000]", "~T[15:01:01.000000]"),
    AttributeKind.UTC_DATETIME: ("~U[2024-01-01 14:00:00Z]", "~U[2024-01-02 14:00:00Z]"),
    AttributeKind.UTC_DATETIME_USEC: ("~U[2024-01-01 14:00:00.000000Z]", "~U[2024-01-02 14:00:00.000000Z]"),
    AttributeKind.NAIVE_DATETIME: ("~N[2024-01-01 14:00:00]", "~N[2024-01-02 14:00:00]"),
    AttributeKind.NAIVE_DATETIME_USEC: ("~N[2024-01-01 14:00:00.000000]", "~N[2024-01-02 14:00:00.000000]"),
    AttributeKind.UUID: ('"7488a646-e31f-11e4-aace-600308960662"', '"7488a646-e31f-11e4-aace-600308960668"'),
}


def sample_value(attr: Attribute, action: Literal["create", "update"]) -> str:
    """An Elixir literal suitable for create or update fixtures."""
    create = action == "create"

    if attr.kind is AttributeKind.ARRAY:
        if attr.inner is AttributeKind.STRING:
            return '["option1", "option2"]' if create else '["option1"]'
        if attr.inner is AttributeKind.INTEGER:
            return "[1, 2]" if create else "[1]"
        return "[]"

    if attr.kind is AttributeKind.ENUM:
        values = attr.values
        return f":{values[0]}" if create or len(values) == 1 else f":{values[1]}"

    if attr.kind in _SAMPLES:
        return _SAMPLES[attr.kind][0 if create else 1]

    text = f"some {attr.name}" if create else f"some updated {attr.name}"
    return elixir_string(text)


# ═══════════════════════════════════════════════════════════════════════════
# SCHEMA
# ═══════════════════════════════════════════════════════════════════════════


class Schema(BaseModel):
    """Naming and fields of the scaffolded schema."""

    module: str
    alias: str
    singular: str
    plural: str
    human_singular: str
    human_plural: str
    collection: str
    table: str
    file: Path
    web_namespace: str | None = None
    web_path: str | None = None
    attrs: tuple[Attribute, ...] = ()
    generate: bool = True

    model_config = {"frozen": True}

    @property
    def route_prefix(self) -> str:
        if self.web_path:
            return f"/{self.web_path}/{self.plural}"
        return f"/{self.plural}"

    @property
    def ui_attrs(self) -> tuple[Attribute, ...]:
        """Attributes rendered as form inputs and table columns."""
        return tuple(
            a for a in self.attrs
            if a.kind not in (AttributeKind.MAP, AttributeKind.REFERENCES)
        )

    @property
    def param_attrs(self) -> tuple[Attribute, ...]:
        return tuple(a for a in self.attrs if a.kind is not AttributeKind.REFERENCES)

    @property
    def string_attr(self) -> Attribute | None:
        """First string-like attribute, used for assertions in tests."""
        for attr in self.attrs:
            if attr.kind in (AttributeKind.STRING, AttributeKind.TEXT):
                return attr
        return None

    def sample_value(self, attr: Attribute, action: Literal["create", "update"]) -> str:
        return sample_value(attr, action)

    def sample_params(self, action: Literal["create", "update"]) -> list[tuple[str, str]]:
        return [(a.name, sample_value(a, action)) for a in self.param_attrs]

    def sample_assertions(self, action: Literal["create", "update"]) -> list[tuple[str, str]]:
        """Expected field values after a create or update, as Elixir literals."""
        expected = []
        for attr in self.param_attrs:
            value = sample_value(attr, action)
            if attr.kind is AttributeKind.DECIMAL:
                value = f"Decimal.new({value})"
            expected.append((attr.name, value))
        return expected

    def invalid_params(self) -> list[tuple[str, str]]:
        return [(a.name, "nil") for a in self.param_attrs]


# ═══════════════════════════════════════════════════════════════════════════
# CONTEXT
# ═══════════════════════════════════════════════════════════════════════════


class Context(BaseModel):
    """The context module that owns the schema, plus web naming."""

    name: str
    module: str
    alias: str
    basename: str
    file: Path
    dir: Path
    test_file: Path
    test_fixtures_file: Path
    context_app: str
    base_module: str
    web_module: str
    generate: bool = True
    resource_schema: Schema

    model_config = {"frozen": True}

    @property
    def schema(self) -> Schema:
        return self.resource_schema

    @property
    def fixtures_module(self) -> str:
        return f"{self.module}Fixtures"

    @property
    def live_module(self) -> str:
        """Module prefix of the generated LiveViews, e.g. MyAppWeb.Sales.UserLive."""
        parts = [self.web_module, self.schema.web_namespace, f"{self.schema.alias}Live"]
        return ".".join(p for p in parts if p)

    def pre_existing(self) -> bool:
        return self.file.exists()


# ═══════════════════════════════════════════════════════════════════════════
# BUILDER
# ═══════════════════════════════════════════════════════════════════════════


def build_resource(
    context_name: str,
    schema_name: str,
    plural: str,
    attr_tokens: list[str],
    layout: "ProjectLayout",
    web: str | None = None,
    generate_context: bool = True,
    generate_schema: bool = True,
) -> Context:
    """
    Derive context and schema naming from the positional CLI arguments.

    Args:
        context_name: Context module, e.g. ``Accounts``
        schema_name: Schema module, e.g. ``User``
        plural: Plural table name, e.g. ``users``
        attr_tokens: ``name:type`` tokens
        layout: Detected project layout
        web: Optional web namespace, e.g. ``Sales``

    Raises:
        UsageError: for invalid module or table names
    """
    if not is_module_name(context_name):
        raise UsageError(f"Expected the context, {context_name!r}, to be a valid module name")
    if not is_module_name(schema_name):
        raise UsageError(f"Expected the schema, {schema_name!r}, to be a valid module name")
    if not is_identifier(plural):
        raise UsageError(
            f"Expected the plural argument, {plural!r}, to be all lowercase using snake_case convention"
        )
    if context_name == schema_name:
        raise UsageError("The context and schema should have different names")
    if web is not None and not is_module_name(web):
        raise UsageError(f"Expected the web namespace, {web!r}, to be a valid module name")

    base = layout.base_module
    if context_name == base:
        raise UsageError(f"Cannot generate context {context_name} because it has the same name as the application")
    if schema_name == base:
        raise UsageError(f"Cannot generate schema {schema_name} because it has the same name as the application")

    attrs = parse_attrs(attr_tokens)

    context_path = underscore(context_name)
    schema_path = underscore(schema_name)
    alias = schema_name.split(".")[-1]
    singular = underscore(alias)

    schema = Schema(
        module=f"{base}.{context_name}.{schema_name}",
        alias=alias,
        singular=singular,
        plural=plural,
        human_singular=humanize(singular),
        human_plural=humanize(plural),
        collection=f"{singular}_collection" if plural == singular else plural,
        table=plural,
        file=layout.context_lib_root / context_path / f"{schema_path}.ex",
        web_namespace=web,
        web_path=underscore(web) if web else None,
        attrs=attrs,
        generate=generate_schema,
    )

    basename = context_path.split("/")[-1]
    return Context(
        name=context_name,
        module=f"{base}.{context_name}",
        alias=context_name.split(".")[-1],
        basename=basename,
        file=layout.context_lib_root / f"{context_path}.ex",
        dir=layout.context_lib_root / context_path,
        test_file=layout.context_test_root / f"{context_path}_test.exs",
        test_fixtures_file=layout.context_support_root / "fixtures" / f"{context_path}_fixtures.ex",
        context_app=layout.context_app,
        base_module=base,
        web_module=layout.web_module,
        generate=generate_context,
        resource_schema=schema,
    )
