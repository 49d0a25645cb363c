"""Main scaffolding orchestrator.

Takes a resolved ``ScaffoldConfig`` and produces the project in three
strictly sequential stages: materialize the Next.js baseline, install the
integration packages, then write the integration templates.  Each stage
receives the project root explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from nextflex.config import ScaffoldConfig, ToolSettings
from nextflex.utils import print_stage_header

from .dispatcher import TemplateDispatcher
from .installer import DependencyInstaller
from .materializer import ProjectMaterializer
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """What a generation run produced."""

    project_root: Path
    packages: list[str] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    layout_patched: bool = False


class ProjectGenerator:
    """Drives materialization, installation and template dispatch.

    Collaborators can be injected; by default they are built from *settings*.
    Errors from any stage propagate unchanged and abort the remaining stages.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        settings: ToolSettings | None = None,
        *,
        include_examples: bool = False,
        materializer: ProjectMaterializer | None = None,
        installer: DependencyInstaller | None = None,
        dispatcher: TemplateDispatcher | None = None,
    ) -> None:
        self.config = config
        self.settings = settings or ToolSettings()
        self.include_examples = include_examples
        self.materializer = materializer or ProjectMaterializer(self.settings)
        self.installer = installer or DependencyInstaller(self.settings)
        self.dispatcher = dispatcher or TemplateDispatcher(TemplateRenderer(), self.settings)

    async def generate(self, parent_dir: str | Path = ".") -> GenerationResult:
        """Generate the project inside *parent_dir*.

        Returns:
            A ``GenerationResult`` describing the project root, installed
            packages and written files.
        """
        print_stage_header(2)
        project_root = await self.materializer.materialize(
            self.config.project_name, self.config, parent_dir
        )
        result = GenerationResult(project_root=project_root)

        print_stage_header(3)
        result.packages = await self.installer.install(self.config, project_root)

        print_stage_header(4)
        dispatched = await self.dispatcher.dispatch(
            self.config, project_root, include_examples=self.include_examples
        )
        result.written = dispatched.written
        result.layout_patched = dispatched.layout_patched

        logger.info("Generated %s (%d files)", project_root, len(result.written))
        return result
