"""nextflex configuration models.

Two pydantic v2 models drive a scaffolding run:

* :class:`ScaffoldConfig` -- the immutable record of the user's choices
  (project name, data layer, AI provider, service style).  It is built once
  per run by a configuration source and only read afterwards.
* :class:`ToolSettings` -- how the external tools are invoked (package
  manager, generator package) plus values rendered into templates.  It can be
  populated from ``NEXTFLEX_*`` environment variables.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class AIChoice(str, Enum):
    """AI provider integration to wire into the project."""

    NONE = "none"
    OPENAI = "openai"
    CLAUDE = "claude"
    V0 = "v0"

    @classmethod
    def parse(cls, value: Any) -> "AIChoice":
        """Coerce free text to a provider, falling back to ``NONE``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NONE


class ServiceStyle(str, Enum):
    """Code style of the generated AI adapter."""

    CLASS = "class"
    FUNCTION = "function"


# Defaults applied by ``--yes``.  React Query is the single data layer; the
# Apollo/Zustand flags stay off so the mutual-exclusion rule holds.
DEFAULT_PREFERENCES: dict[str, Any] = {
    "use_react_query": True,
    "use_apollo": False,
    "use_zustand": False,
    "ai_choice": AIChoice.OPENAI,
    "use_class_based_service": False,
}


class ScaffoldConfig(BaseModel):
    """Resolved, immutable set of user choices driving generation.

    At most one of ``use_react_query``, ``use_apollo`` and ``use_zustand`` may
    be enabled.  ``use_class_based_service`` only means something when an AI
    provider is selected and is forced to ``False`` otherwise.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Directory name of the new project")
    use_react_query: bool = False
    use_apollo: bool = False
    use_zustand: bool = False
    ai_choice: AIChoice = AIChoice.NONE
    use_class_based_service: bool = False

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("project name must not be empty")
        if "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError(f"project name must be a single directory name, got {name!r}")
        return name

    @field_validator("ai_choice", mode="before")
    @classmethod
    def _coerce_ai_choice(cls, value: Any) -> AIChoice:
        return AIChoice.parse(value)

    @model_validator(mode="before")
    @classmethod
    def _drop_style_without_ai(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if AIChoice.parse(data.get("ai_choice", AIChoice.NONE)) is AIChoice.NONE:
                data = {**data, "use_class_based_service": False}
        return data

    @model_validator(mode="after")
    def _check_single_data_layer(self) -> "ScaffoldConfig":
        enabled = [self.use_react_query, self.use_apollo, self.use_zustand]
        if sum(enabled) > 1:
            raise ValueError(
                "React Query, Apollo Client and Zustand are mutually exclusive; "
                "enable at most one"
            )
        return self

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def data_layer(self) -> str:
        """Name of the enabled data/state library, or ``"none"``."""
        if self.use_react_query:
            return "react-query"
        if self.use_apollo:
            return "apollo"
        if self.use_zustand:
            return "zustand"
        return "none"

    @property
    def has_ai(self) -> bool:
        return self.ai_choice is not AIChoice.NONE

    @property
    def service_style(self) -> ServiceStyle:
        return ServiceStyle.CLASS if self.use_class_based_service else ServiceStyle.FUNCTION

    def summary(self) -> dict[str, str]:
        """Return a ``{label: value}`` mapping for the summary table."""
        return {
            "Project": self.project_name,
            "Data layer": self.data_layer,
            "AI provider": self.ai_choice.value,
            "Service style": self.service_style.value if self.has_ai else "-",
        }


PackageManager = Literal["npm", "yarn", "pnpm"]

_INSTALL_VERBS: dict[str, str] = {
    "npm": "install",
    "yarn": "add",
    "pnpm": "add",
}


class ToolSettings(BaseModel):
    """External tool invocation and template rendering settings."""

    package_manager: PackageManager = Field(default="yarn")
    generator_package: str = Field(default="create-next-app@latest")
    graphql_url: str = Field(default="https://api.spacex.land/graphql/")
    openai_model: str = Field(default="gpt-4o-mini")
    anthropic_model: str = Field(default="claude-3-5-sonnet-latest")

    def generator_command(self) -> list[str]:
        """Argument vector for ``create-next-app``, run inside the project root."""
        return [
            "npx",
            self.generator_package,
            ".",
            "--typescript",
            "--tailwind",
            "--eslint",
            "--app",
            "--src-dir",
            "--import-alias",
            "@/*",
            f"--use-{self.package_manager}",
        ]

    def install_command(self, packages: list[str]) -> list[str]:
        """Argument vector that adds *packages* with the configured manager."""
        return [self.package_manager, _INSTALL_VERBS[self.package_manager], *packages]

    def dev_command(self) -> str:
        """The command a user runs to start the dev server."""
        if self.package_manager == "npm":
            return "npm run dev"
        return f"{self.package_manager} dev"

    @classmethod
    def from_env(cls, **overrides: Any) -> "ToolSettings":
        """Build settings from environment variables.

        Recognised variables (all optional):
            NEXTFLEX_PACKAGE_MANAGER, NEXTFLEX_GENERATOR_PACKAGE,
            NEXTFLEX_GRAPHQL_URL, NEXTFLEX_OPENAI_MODEL,
            NEXTFLEX_ANTHROPIC_MODEL.

        Keyword *overrides* that are not ``None`` win over the environment.
        """
        kwargs: dict[str, Any] = {}
        env_map = {
            "NEXTFLEX_PACKAGE_MANAGER": "package_manager",
            "NEXTFLEX_GENERATOR_PACKAGE": "generator_package",
            "NEXTFLEX_GRAPHQL_URL": "graphql_url",
            "NEXTFLEX_OPENAI_MODEL": "openai_model",
            "NEXTFLEX_ANTHROPIC_MODEL": "anthropic_model",
        }
        for var, field_name in env_map.items():
            if os.environ.get(var):
                kwargs[field_name] = os.environ[var]
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
