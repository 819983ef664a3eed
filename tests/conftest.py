"""Shared pytest fixtures for the liveforge test suite.

Provides reusable fixtures for:
- A minimal Phoenix project on disk (mix.exs plus the web module)
- The detected project layout
- Resources built from typical CLI arguments
- Confirmation callables standing in for the interactive prompt
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from liveforge.project import ProjectLayout
from liveforge.spec import Context, build_resource


# ---------------------------------------------------------------------------
# Project files
# ---------------------------------------------------------------------------

MIX_EXS = textwrap.dedent("""\
    defmodule MyApp.MixProject do
      use Mix.Project

      def project do
        [
          app: :my_app,
          version: "0.1.0",
          elixir: "~> 1.14",
          deps: deps()
        ]
      end

      defp deps do
        [{:phoenix, "~> 1.7.0"}]
      end
    end
""")

WEB_MODULE = textwrap.dedent("""\
    defmodule MyAppWeb do
      def html do
        quote do
          use Phoenix.Component

          unquote(html_helpers())
        end
      end

      defp html_helpers do
        quote do
          import Phoenix.HTML
        end
      end
    end
""")


@pytest.fixture
def phoenix_project(tmp_path: Path) -> Path:
    """A single-app Phoenix project named my_app."""
    root = tmp_path / "my_app"
    (root / "lib" / "my_app_web").mkdir(parents=True)
    (root / "mix.exs").write_text(MIX_EXS, encoding="utf-8")
    (root / "lib" / "my_app_web.ex").write_text(WEB_MODULE, encoding="utf-8")
    return root


@pytest.fixture
def layout(phoenix_project: Path) -> ProjectLayout:
    return ProjectLayout.detect(phoenix_project)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

@pytest.fixture
def users(layout: ProjectLayout) -> Context:
    """Accounts.User with a string and an integer field."""
    return build_resource("Accounts", "User", "users", ["name:string", "age:integer"], layout)


@pytest.fixture
def sales_users(layout: ProjectLayout) -> Context:
    """Accounts.User generated under the Sales web namespace."""
    return build_resource(
        "Accounts", "User", "users", ["name:string", "age:integer"], layout, web="Sales",
    )


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

class RecordingConfirm:
    """Answers every question with *answer* and remembers what was asked."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.questions: list[str] = []

    def __call__(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer


@pytest.fixture
def accept_all() -> RecordingConfirm:
    return RecordingConfirm(True)


@pytest.fixture
def refuse_all() -> RecordingConfirm:
    return RecordingConfirm(False)


def snapshot(root: Path) -> dict[str, bytes]:
    """Every file under *root* with its content."""
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def fs_snapshot():
    return snapshot
