"""Create the on-disk project skeleton.

Runs ``create-next-app`` inside a fresh directory and then guarantees the
subdirectories the template dispatcher writes into.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from nextflex.config import ScaffoldConfig, ToolSettings
from nextflex.errors import DirectoryExistsError
from nextflex.utils import run_tool

logger = logging.getLogger(__name__)


def required_directories(config: ScaffoldConfig) -> list[str]:
    """Project-relative directories the chosen integrations write into."""
    dirs: list[str] = []
    if config.use_apollo:
        dirs.append("src/lib")
    dirs.append("src/services/Ai" if config.use_class_based_service else "src/utils")
    if config.use_zustand:
        dirs.append("src/store")
    dirs.append("src/components")
    return dirs


class ProjectMaterializer:
    """Creates the project directory and its baseline Next.js tree."""

    def __init__(self, settings: ToolSettings) -> None:
        self.settings = settings

    async def materialize(
        self,
        project_name: str,
        config: ScaffoldConfig,
        parent_dir: str | Path = ".",
    ) -> Path:
        """Create ``parent_dir/project_name`` and generate the baseline project.

        Raises:
            DirectoryExistsError: If the project directory already exists.
                Nothing has been created at that point.
            ExternalToolError: If ``create-next-app`` fails.  The partially
                created directory is left in place.

        Returns:
            Path to the project root.
        """
        project_root = Path(parent_dir) / project_name
        if project_root.exists():
            raise DirectoryExistsError(project_root)

        await asyncio.to_thread(project_root.mkdir, parents=True)
        logger.info("Created %s", project_root)

        await run_tool(self.settings.generator_command(), cwd=project_root)

        await self.ensure_directories(project_root, config)
        return project_root

    async def ensure_directories(self, project_root: Path, config: ScaffoldConfig) -> list[Path]:
        """Create every required directory; existing ones are left alone."""
        created: list[Path] = []
        for rel in required_directories(config):
            path = project_root / rel
            await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
            created.append(path)
        return created
