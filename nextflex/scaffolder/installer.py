"""Install the npm packages implied by a configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from nextflex.config import AIChoice, ScaffoldConfig, ToolSettings
from nextflex.utils import run_tool

logger = logging.getLogger(__name__)

REACT_QUERY_PACKAGES: tuple[str, ...] = ("@tanstack/react-query", "@tanstack/react-query-devtools")
APOLLO_PACKAGES: tuple[str, ...] = ("@apollo/client", "graphql")
ZUSTAND_PACKAGES: tuple[str, ...] = ("zustand",)

AI_PACKAGES: dict[AIChoice, tuple[str, ...]] = {
    AIChoice.NONE: (),
    AIChoice.OPENAI: ("openai",),
    AIChoice.CLAUDE: ("@anthropic-ai/sdk",),
    AIChoice.V0: ("ai", "@ai-sdk/openai"),
}


def compute_dependencies(config: ScaffoldConfig) -> list[str]:
    """Return the ordered, duplicate-free package list for *config*."""
    packages: list[str] = []
    if config.use_react_query:
        packages.extend(REACT_QUERY_PACKAGES)
    if config.use_apollo:
        packages.extend(APOLLO_PACKAGES)
    if config.use_zustand:
        packages.extend(ZUSTAND_PACKAGES)
    packages.extend(AI_PACKAGES[config.ai_choice])
    return list(dict.fromkeys(packages))


class DependencyInstaller:
    """Runs the package manager once with every required package."""

    def __init__(self, settings: ToolSettings) -> None:
        self.settings = settings

    async def install(self, config: ScaffoldConfig, project_root: str | Path) -> list[str]:
        """Install the packages for *config* inside *project_root*.

        The package manager is not invoked when nothing needs installing.

        Raises:
            ExternalToolError: If the package manager exits non-zero.

        Returns:
            The packages that were installed.
        """
        packages = compute_dependencies(config)
        if not packages:
            logger.info("No additional packages to install")
            return []
        await run_tool(self.settings.install_command(packages), cwd=project_root)
        return packages
