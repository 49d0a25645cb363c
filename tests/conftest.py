"""Shared pytest fixtures for the nextflex test suite.

Provides reusable fixtures for:
- A realistic ``create-next-app`` root layout
- Fake external tools that record their invocations
- Pre-materialized project trees
- Scripted prompters that answer from a list
"""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from nextflex.config import ScaffoldConfig, ToolSettings
from nextflex.scaffolder.materializer import required_directories
from nextflex.wizard.prompter import Prompter


NEXT_LAYOUT = """\
import type { Metadata } from "next";
import { Geist } from "next/font/google";
import "./globals.css";

const geist = Geist({ subsets: ["latin"] });

export const metadata: Metadata = {
  title: "Create Next App",
  description: "Generated by create next app",
};

export default function RootLayout({
  children,
}: Readonly<{
  children: React.ReactNode;
}>) {
  return (
    <html lang="en">
      <body className={geist.className}>
        {children}
      </body>
    </html>
  );
}
"""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> ToolSettings:
    """Tool settings with npm so commands are easy to assert on."""
    return ToolSettings(package_manager="npm")


@pytest.fixture
def layout_source() -> str:
    """The root layout ``create-next-app`` generates."""
    return NEXT_LAYOUT


# ---------------------------------------------------------------------------
# Fake external tools
# ---------------------------------------------------------------------------

@pytest.fixture
def tool_calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple[list[str], Path]]:
    """Replace ``run_tool`` in the scaffolder with a recording fake.

    The fake ``npx`` call writes ``src/app/layout.tsx`` into its working
    directory, the way ``create-next-app`` does.  Every call is recorded as
    ``(argv, cwd)``.
    """
    calls: list[tuple[list[str], Path]] = []

    async def fake_run_tool(cmd: list[str], cwd: str | Path) -> None:
        cwd_path = Path(cwd)
        calls.append((list(cmd), cwd_path))
        if cmd[0] == "npx":
            app_dir = cwd_path / "src" / "app"
            app_dir.mkdir(parents=True, exist_ok=True)
            (app_dir / "layout.tsx").write_text(NEXT_LAYOUT, encoding="utf-8")

    monkeypatch.setattr("nextflex.scaffolder.materializer.run_tool", fake_run_tool)
    monkeypatch.setattr("nextflex.scaffolder.installer.run_tool", fake_run_tool)
    return calls


# ---------------------------------------------------------------------------
# Project trees
# ---------------------------------------------------------------------------

@pytest.fixture
def make_project_tree(tmp_path: Path) -> Callable[[ScaffoldConfig], Path]:
    """Factory that lays out a materialized project for *config*.

    Creates ``src/app/layout.tsx`` plus every directory the materializer
    would guarantee, without running any external tool.
    """

    def _make(config: ScaffoldConfig) -> Path:
        root = tmp_path / config.project_name
        app_dir = root / "src" / "app"
        app_dir.mkdir(parents=True)
        (app_dir / "layout.tsx").write_text(NEXT_LAYOUT, encoding="utf-8")
        for rel in required_directories(config):
            (root / rel).mkdir(parents=True, exist_ok=True)
        return root

    return _make


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

class ScriptedInput:
    """Callable standing in for ``input``; answers from a fixed script."""

    def __init__(self, answers: list[str]) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return self._answers.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._answers)


@pytest.fixture
def scripted_prompter() -> Callable[[list[str]], tuple[Prompter, ScriptedInput]]:
    """Factory returning a ``Prompter`` fed by a scripted input."""

    def _make(answers: list[str]) -> tuple[Prompter, ScriptedInput]:
        scripted = ScriptedInput(answers)
        quiet = Console(file=io.StringIO())
        return Prompter(console=quiet, input_func=scripted), scripted

    return _make
