"""Unit tests for destination planning (liveforge.generator, liveforge.context_gen).

Tests cover:
- LiveView, template and test destinations with and without a web namespace
- The shared components module planned as write-if-absent
- Context-layer destinations and the --no-context / --no-schema switches
- Planning never touches the file system
"""

from __future__ import annotations

from pathlib import Path

from liveforge.context_gen import ContextGenerator
from liveforge.generator import Materializer, plan_live_files
from liveforge.plan import CopyMode
from liveforge.project import ProjectLayout
from liveforge.spec import Context, build_resource


def _relative(plan, root: Path) -> list[str]:
    return [entry.destination.relative_to(root).as_posix() for entry in plan]


# ---------------------------------------------------------------------------
# Live files
# ---------------------------------------------------------------------------

class TestPlanLiveFiles:
    def test_without_namespace(self, users: Context, layout: ProjectLayout, phoenix_project: Path):
        plan = plan_live_files(users, layout)

        assert _relative(plan, phoenix_project) == [
            "lib/my_app_web/live/user_live/show.ex",
            "lib/my_app_web/live/user_live/index.ex",
            "lib/my_app_web/live/user_live/form_component.ex",
            "lib/my_app_web/live/user_live/index.html.heex",
            "lib/my_app_web/live/user_live/show.html.heex",
            "test/my_app_web/live/user_live_test.exs",
            "lib/my_app_web/components/core_components.ex",
        ]

    def test_with_namespace(self, sales_users: Context, layout: ProjectLayout, phoenix_project: Path):
        plan = plan_live_files(sales_users, layout)
        paths = _relative(plan, phoenix_project)

        assert "lib/my_app_web/live/sales/user_live/index.ex" in paths
        assert "test/my_app_web/live/sales/user_live_test.exs" in paths
        assert "lib/my_app_web/components/core_components.ex" in paths

    def test_core_components_is_if_absent(self, users: Context, layout: ProjectLayout):
        modes = {entry.template: entry.mode for entry in plan_live_files(users, layout)}

        assert modes["live/core_components.ex"] is CopyMode.IF_ABSENT
        assert modes["live/index.ex"] is CopyMode.ALWAYS

    def test_planning_writes_nothing(self, users: Context, layout: ProjectLayout, phoenix_project, fs_snapshot):
        before = fs_snapshot(phoenix_project)
        plan_live_files(users, layout)
        assert fs_snapshot(phoenix_project) == before


# ---------------------------------------------------------------------------
# Context files
# ---------------------------------------------------------------------------

class TestPlanContextFiles:
    def test_full_context(self, users: Context, layout: ProjectLayout, phoenix_project: Path):
        plan = ContextGenerator(layout, Materializer()).files_to_be_generated(users)

        assert _relative(plan, phoenix_project) == [
            "lib/my_app/accounts/user.ex",
            "lib/my_app/accounts.ex",
            "test/my_app/accounts_test.exs",
            "test/support/fixtures/accounts_fixtures.ex",
        ]
        assert [e.mode for e in plan] == [
            CopyMode.ALWAYS, CopyMode.IF_ABSENT, CopyMode.IF_ABSENT, CopyMode.IF_ABSENT,
        ]

    def test_no_schema(self, layout: ProjectLayout):
        resource = build_resource("Accounts", "User", "users", [], layout, generate_schema=False)
        plan = ContextGenerator(layout, Materializer()).files_to_be_generated(resource)

        assert "context/schema.ex" not in [e.template for e in plan]
        assert len(plan) == 3

    def test_no_context(self, layout: ProjectLayout):
        resource = build_resource("Accounts", "User", "users", [], layout, generate_context=False)
        plan = ContextGenerator(layout, Materializer()).files_to_be_generated(resource)

        assert len(plan) == 0
