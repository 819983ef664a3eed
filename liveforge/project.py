"""
Liveforge Project - Detects the layout of the host Phoenix application

Reads mix.exs to find the OTP app, rejects umbrella roots, and derives the
directory roots every generator writes into.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from liveforge.errors import UsageError
from liveforge.naming import camelize, is_identifier

_APP_RE = re.compile(r"\bapp:\s*:([a-z_][a-z0-9_]*)")
_APPS_PATH_RE = re.compile(r"\bapps_path:")
_LIVE_VIEW_LOCK_RE = re.compile(r'"phoenix_live_view":\s*\{:hex,\s*:phoenix_live_view,\s*"(\d+)\.(\d+)')


@dataclass(frozen=True)
class ProjectLayout:
    """Directory roots of a Phoenix project, relative to *root*."""

    root: Path
    otp_app: str
    context_app: str

    # ═══════════════════════════════════════════════════════════════════════
    # DETECTION
    # ═══════════════════════════════════════════════════════════════════════

    @classmethod
    def detect(cls, root: Path, context_app: str | None = None) -> "ProjectLayout":
        """
        Build the layout for the project rooted at *root*.

        Args:
            root: Directory holding mix.exs
            context_app: OTP app that owns the context, when it differs from
                the web app (umbrella sibling)

        Raises:
            UsageError: when there is no mix.exs, when it is an umbrella
                root, or when the app name cannot be found
        """
        root = Path(root)
        mix_file = root / "mix.exs"
        if not mix_file.is_file():
            raise UsageError(f"No mix.exs found in {root}, run liveforge from a Phoenix project root")

        source = mix_file.read_text(encoding="utf-8")
        if _APPS_PATH_RE.search(source):
            raise UsageError(
                "liveforge live must be invoked from within your *_web application root directory"
            )

        match = _APP_RE.search(source)
        if not match:
            raise UsageError(f"Could not find the application name (app: :name) in {mix_file}")

        otp_app = match.group(1)
        if context_app is not None and not is_identifier(context_app):
            raise UsageError(f"Invalid context app {context_app!r}, expected a snake_case app name")

        return cls(root=root, otp_app=otp_app, context_app=context_app or otp_app)

    def liveview_js_available(self) -> bool:
        """Whether the locked phoenix_live_view ships the JS commands (0.18+)."""
        lock = self.root / "mix.lock"
        if not lock.is_file():
            return True
        match = _LIVE_VIEW_LOCK_RE.search(lock.read_text(encoding="utf-8"))
        if not match:
            return True
        major, minor = int(match.group(1)), int(match.group(2))
        return (major, minor) >= (0, 18)

    # ═══════════════════════════════════════════════════════════════════════
    # DERIVED ROOTS
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def in_web_app(self) -> bool:
        """True when context and web code live in the same OTP app."""
        return self.context_app == self.otp_app

    @property
    def web_root(self) -> Path:
        if self.in_web_app:
            return self.root / "lib" / f"{self.otp_app}_web"
        return self.root / "lib" / self.otp_app

    @property
    def test_root(self) -> Path:
        if self.in_web_app:
            return self.root / "test" / f"{self.otp_app}_web"
        return self.root / "test"

    @property
    def context_app_root(self) -> Path:
        if self.in_web_app:
            return self.root
        return self.root.parent / self.context_app

    @property
    def context_lib_root(self) -> Path:
        return self.context_app_root / "lib" / self.context_app

    @property
    def context_test_root(self) -> Path:
        return self.context_app_root / "test" / self.context_app

    @property
    def context_support_root(self) -> Path:
        return self.context_app_root / "test" / "support"

    @property
    def base_module(self) -> str:
        return camelize(self.context_app)

    @property
    def web_module(self) -> str:
        base = camelize(self.otp_app)
        return base if base.endswith("Web") else f"{base}Web"

    @property
    def web_module_file(self) -> Path:
        """The module that defines html_helpers, e.g. lib/my_app_web.ex."""
        return self.web_root.parent / f"{self.web_root.name}.ex"

    def relative(self, path: Path) -> str:
        """Display *path* relative to the project root when possible."""
        try:
            return str(Path(path).relative_to(self.root))
        except ValueError:
            return str(path)
