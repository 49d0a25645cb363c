"""Select and write the integration templates into a project tree.

Selection is a pure function of the configuration: :func:`select_templates`
returns the ``(template, destination)`` pairs and :class:`TemplateDispatcher`
renders them.  React Query additionally needs the generated root layout
wrapped in its provider, which :meth:`TemplateDispatcher.patch_layout` does
with a literal text substitution.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from nextflex.config import AIChoice, ScaffoldConfig, ServiceStyle, ToolSettings
from nextflex.errors import InvariantViolation, PatchAnchorNotFoundError

from .templates import TemplateRenderer

logger = logging.getLogger(__name__)

LAYOUT_PATH = PurePosixPath("src/app/layout.tsx")
LAYOUT_ANCHOR = "export default function RootLayout({"
CHILDREN_ANCHOR = "{children}"
PROVIDERS_IMPORT = "import Providers from './providers'\n\n"


@dataclass(frozen=True)
class TemplateSpec:
    """One template and where it lands inside the project root."""

    name: str
    destination: PurePosixPath
    kind: str


@dataclass
class DispatchResult:
    """Files written by a dispatch run."""

    written: list[Path] = field(default_factory=list)
    layout_patched: bool = False


# ---------------------------------------------------------------------------
# Pure selection
# ---------------------------------------------------------------------------

_AI_SERVICE_TEMPLATES: dict[tuple[AIChoice, ServiceStyle], str] = {
    (AIChoice.OPENAI, ServiceStyle.CLASS): "ai/class/openai.ts.j2",
    (AIChoice.CLAUDE, ServiceStyle.CLASS): "ai/class/claude.ts.j2",
    (AIChoice.V0, ServiceStyle.CLASS): "ai/class/v0.ts.j2",
    (AIChoice.OPENAI, ServiceStyle.FUNCTION): "ai/function/openai.ts.j2",
    (AIChoice.CLAUDE, ServiceStyle.FUNCTION): "ai/function/claude.ts.j2",
    (AIChoice.V0, ServiceStyle.FUNCTION): "ai/function/v0.ts.j2",
}

_AI_SERVICE_DESTINATIONS: dict[ServiceStyle, PurePosixPath] = {
    ServiceStyle.CLASS: PurePosixPath("src/services/Ai/ai.ts"),
    ServiceStyle.FUNCTION: PurePosixPath("src/utils/ai.ts"),
}


def ai_service_template(choice: AIChoice, style: ServiceStyle) -> str:
    """Template name of the AI adapter for *choice* in *style*.

    Raises:
        KeyError: For ``AIChoice.NONE``, which has no adapter.
    """
    return _AI_SERVICE_TEMPLATES[(choice, style)]


def select_templates(config: ScaffoldConfig, include_examples: bool = False) -> list[TemplateSpec]:
    """Return every template the configuration enables, in write order."""
    specs: list[TemplateSpec] = []

    if config.use_react_query:
        specs.append(_spec("react_query/providers.tsx.j2", "src/app/providers.tsx", "react-query"))
        if include_examples:
            specs.append(_spec("examples/Todos.tsx.j2", "src/components/Todos.tsx", "react-query"))

    if config.use_apollo:
        specs.append(_spec("apollo/apollo-client.ts.j2", "src/lib/apollo-client.ts", "apollo"))
        specs.append(_spec("apollo/env.local.j2", ".env.local", "apollo"))
        if include_examples:
            specs.append(_spec("examples/Launches.tsx.j2", "src/components/Launches.tsx", "apollo"))

    if config.use_zustand:
        specs.append(_spec("zustand/appStore.ts.j2", "src/store/appStore.ts", "zustand"))
        if include_examples:
            specs.append(_spec("examples/Counter.tsx.j2", "src/components/Counter.tsx", "zustand"))

    if config.has_ai:
        style = config.service_style
        specs.append(
            TemplateSpec(
                name=ai_service_template(config.ai_choice, style),
                destination=_AI_SERVICE_DESTINATIONS[style],
                kind="ai",
            )
        )
        if include_examples:
            specs.append(_spec("examples/AIExample.tsx.j2", "src/components/AIExample.tsx", "ai"))

    return specs


def build_context(config: ScaffoldConfig, settings: ToolSettings) -> dict[str, Any]:
    """Build the Jinja2 template context from the configuration."""
    style = config.service_style
    service_path = _AI_SERVICE_DESTINATIONS[style].with_suffix("")
    return {
        "project_name": config.project_name,
        "ai_choice": config.ai_choice.value,
        "class_based": style is ServiceStyle.CLASS,
        "ai_function": "generateCompletion" if config.ai_choice is AIChoice.V0 else "generateText",
        "ai_import_path": "@/" + service_path.relative_to("src").as_posix(),
        "graphql_url": settings.graphql_url,
        "openai_model": settings.openai_model,
        "anthropic_model": settings.anthropic_model,
    }


def _spec(name: str, destination: str, kind: str) -> TemplateSpec:
    return TemplateSpec(name=name, destination=PurePosixPath(destination), kind=kind)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class TemplateDispatcher:
    """Writes the selected templates and patches the root layout."""

    def __init__(self, renderer: TemplateRenderer, settings: ToolSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    async def dispatch(
        self,
        config: ScaffoldConfig,
        project_root: str | Path,
        include_examples: bool = False,
    ) -> DispatchResult:
        """Render every selected template into *project_root*.

        Existing files at a destination are overwritten.  All destination
        directories are checked before anything is written.

        Raises:
            InvariantViolation: If a destination directory is missing.
            PatchAnchorNotFoundError: If React Query is enabled and the root
                layout cannot be patched.
        """
        root = Path(project_root)
        specs = select_templates(config, include_examples)
        _check_destinations(root, specs)

        context = build_context(config, self.settings)
        result = DispatchResult()
        for spec in specs:
            path = await self.renderer.render_to_file(spec.name, root / spec.destination, context)
            logger.debug("Wrote %s from %s", path, spec.name)
            result.written.append(path)

        if config.use_react_query:
            await self.patch_layout(root)
            result.layout_patched = True

        return result

    async def patch_layout(self, project_root: str | Path) -> Path:
        """Wrap the generated root layout's children in ``<Providers>``.

        Inserts the providers import right before the ``RootLayout``
        declaration and wraps the first ``{children}``.  The file is left
        untouched when either anchor is missing.

        Raises:
            InvariantViolation: If the layout file does not exist.
            PatchAnchorNotFoundError: If an anchor is not found verbatim.
        """
        layout = Path(project_root) / LAYOUT_PATH
        if not layout.is_file():
            raise InvariantViolation(f"Root layout {layout} was not generated")

        content = await asyncio.to_thread(layout.read_text, encoding="utf-8")
        patched = apply_layout_patch(content, layout)
        await asyncio.to_thread(layout.write_text, patched, encoding="utf-8")
        logger.debug("Patched %s", layout)
        return layout


def apply_layout_patch(content: str, path: str | Path = LAYOUT_PATH) -> str:
    """Return *content* with the providers import and wrapper applied."""
    for anchor in (LAYOUT_ANCHOR, CHILDREN_ANCHOR):
        if anchor not in content:
            raise PatchAnchorNotFoundError(path, anchor)
    content = content.replace(LAYOUT_ANCHOR, PROVIDERS_IMPORT + LAYOUT_ANCHOR, 1)
    return content.replace(CHILDREN_ANCHOR, f"<Providers>{CHILDREN_ANCHOR}</Providers>", 1)


def _check_destinations(root: Path, specs: list[TemplateSpec]) -> None:
    for spec in specs:
        parent = (root / spec.destination).parent
        if not parent.is_dir():
            raise InvariantViolation(
                f"Destination directory {parent} for {spec.name} does not exist; "
                "the project tree was not materialized"
            )
