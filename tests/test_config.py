"""Unit tests for generator defaults (liveforge.config).

Tests cover:
- Defaults when no liveforge.yaml exists
- Loading camelCase and snake_case keys
- Environment overrides
- Rejecting non-mapping YAML, malformed YAML and invalid values
"""

from __future__ import annotations

from pathlib import Path

import pytest

from liveforge.config import GeneratorConfig
from liveforge.errors import UsageError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("LIVEFORGE_CONTEXT_APP", raising=False)
    monkeypatch.delenv("LIVEFORGE_NO_GETTEXT", raising=False)


class TestLoad:
    def test_defaults(self, tmp_path: Path):
        config = GeneratorConfig.load(tmp_path)

        assert config.gettext is True
        assert config.context_app is None
        assert config.templates_dir is None

    def test_yaml_keys(self, tmp_path: Path):
        (tmp_path / "liveforge.yaml").write_text(
            "contextApp: my_core\ngettext: false\nweb_namespace: Admin\ntemplatesDir: priv/templates\n",
            encoding="utf-8",
        )

        config = GeneratorConfig.load(tmp_path)

        assert config.context_app == "my_core"
        assert config.gettext is False
        assert config.web_namespace == "Admin"
        assert config.templates_dir == tmp_path / "priv" / "templates"

    def test_empty_file(self, tmp_path: Path):
        (tmp_path / "liveforge.yaml").write_text("", encoding="utf-8")
        assert GeneratorConfig.load(tmp_path).gettext is True

    def test_not_a_mapping(self, tmp_path: Path):
        (tmp_path / "liveforge.yaml").write_text("- one\n- two\n", encoding="utf-8")
        with pytest.raises(UsageError, match="mapping"):
            GeneratorConfig.load(tmp_path)


class TestEnvironment:
    def test_context_app(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("LIVEFORGE_CONTEXT_APP", "my_core")
        assert GeneratorConfig.load(tmp_path).context_app == "my_core"

    @pytest.mark.parametrize(("value", "gettext"), [("1", False), ("true", False), ("0", True), ("", True)])
    def test_no_gettext(self, tmp_path: Path, monkeypatch, value, gettext):
        monkeypatch.setenv("LIVEFORGE_NO_GETTEXT", value)
        assert GeneratorConfig.load(tmp_path).gettext is gettext


def test_yaml_round_trip():
    config = GeneratorConfig(context_app="my_core", gettext=False)
    assert GeneratorConfig.from_yaml(config.to_yaml()) == config


class TestInvalidFile:
    def test_bad_value(self, tmp_path: Path):
        (tmp_path / "liveforge.yaml").write_text("gettext: maybe\n", encoding="utf-8")
        with pytest.raises(UsageError, match="Invalid liveforge.yaml: gettext"):
            GeneratorConfig.load(tmp_path)

    def test_bad_syntax(self, tmp_path: Path):
        (tmp_path / "liveforge.yaml").write_text("gettext: [unclosed\n", encoding="utf-8")
        with pytest.raises(UsageError, match="not valid YAML"):
            GeneratorConfig.load(tmp_path)
