"""
Liveforge Config - Per-project generator defaults

Settings come from an optional liveforge.yaml at the project root, then from
LIVEFORGE_* environment variables, then from CLI flags (applied by the CLI).
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from liveforge.errors import UsageError

CONFIG_FILE = "liveforge.yaml"

_FALSEY = {"", "0", "false", "no", "off"}


class GeneratorConfig(BaseModel):
    """Defaults for the live generator."""

    context_app: str | None = Field(None, alias="contextApp")
    gettext: bool = True
    web_namespace: str | None = Field(None, alias="webNamespace")
    templates_dir: Path | None = Field(None, alias="templatesDir")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "GeneratorConfig":
        try:
            data = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as exc:
            raise UsageError(f"{CONFIG_FILE} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise UsageError(f"{CONFIG_FILE} must contain a mapping")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise UsageError(f"Invalid {CONFIG_FILE}: {errors}") from exc

    @classmethod
    def load(cls, root: Path) -> "GeneratorConfig":
        """Load liveforge.yaml from *root* (if any) and apply env overrides."""
        path = Path(root) / CONFIG_FILE
        config = cls.from_yaml(path.read_text(encoding="utf-8")) if path.is_file() else cls()

        if config.templates_dir is not None and not config.templates_dir.is_absolute():
            config = config.model_copy(update={"templates_dir": Path(root) / config.templates_dir})

        return config.with_env(os.environ)

    def with_env(self, environ) -> "GeneratorConfig":
        updates: dict = {}
        if environ.get("LIVEFORGE_CONTEXT_APP"):
            updates["context_app"] = environ["LIVEFORGE_CONTEXT_APP"]
        if "LIVEFORGE_NO_GETTEXT" in environ:
            updates["gettext"] = environ["LIVEFORGE_NO_GETTEXT"].strip().lower() in _FALSEY
        return self.model_copy(update=updates) if updates else self

    def to_yaml(self) -> str:
        return yaml.dump(
            self.model_dump(by_alias=True, exclude_none=True, mode="json"),
            default_flow_style=False,
            sort_keys=False,
        )
