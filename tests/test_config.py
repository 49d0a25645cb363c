"""Unit tests for the configuration models (nextflex.config).

Tests cover:
- AIChoice.parse coercion
- ScaffoldConfig validation: project name, mutual exclusion, frozen
- ScaffoldConfig derived values and summary
- ToolSettings commands and from_env
"""

from __future__ import annotations

import os
from itertools import product
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from nextflex.config import (
    DEFAULT_PREFERENCES,
    AIChoice,
    ScaffoldConfig,
    ServiceStyle,
    ToolSettings,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# AIChoice
# ---------------------------------------------------------------------------


class TestAIChoice:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("openai", AIChoice.OPENAI),
            ("  Claude ", AIChoice.CLAUDE),
            ("V0", AIChoice.V0),
            ("none", AIChoice.NONE),
            ("gemini", AIChoice.NONE),
            ("", AIChoice.NONE),
            (None, AIChoice.NONE),
        ],
    )
    def test_parse(self, raw, expected):
        assert AIChoice.parse(raw) is expected

    def test_parse_passes_members_through(self):
        assert AIChoice.parse(AIChoice.V0) is AIChoice.V0


# ---------------------------------------------------------------------------
# ScaffoldConfig
# ---------------------------------------------------------------------------


class TestScaffoldConfig:
    def test_minimal(self):
        config = ScaffoldConfig(project_name="demo")
        assert config.project_name == "demo"
        assert config.data_layer == "none"
        assert config.ai_choice is AIChoice.NONE
        assert config.has_ai is False

    def test_project_name_is_trimmed(self):
        assert ScaffoldConfig(project_name="  demo ").project_name == "demo"

    @pytest.mark.parametrize("name", ["", "   ", "a/b", "a\\b", ".", ".."])
    def test_invalid_project_names_rejected(self, name):
        with pytest.raises(ValidationError):
            ScaffoldConfig(project_name=name)

    @pytest.mark.parametrize(
        "flags",
        [
            {"use_react_query": True, "use_apollo": True},
            {"use_react_query": True, "use_zustand": True},
            {"use_apollo": True, "use_zustand": True},
            {"use_react_query": True, "use_apollo": True, "use_zustand": True},
        ],
    )
    def test_multiple_data_layers_rejected(self, flags):
        with pytest.raises(ValidationError, match="mutually exclusive"):
            ScaffoldConfig(project_name="demo", **flags)

    def test_every_valid_config_has_at_most_one_data_layer(self):
        for rq, apollo, zustand in product([False, True], repeat=3):
            flags = {"use_react_query": rq, "use_apollo": apollo, "use_zustand": zustand}
            if sum(flags.values()) > 1:
                continue
            config = ScaffoldConfig(project_name="demo", **flags)
            assert sum([config.use_react_query, config.use_apollo, config.use_zustand]) <= 1

    @pytest.mark.parametrize(
        "flag, layer",
        [
            ("use_react_query", "react-query"),
            ("use_apollo", "apollo"),
            ("use_zustand", "zustand"),
        ],
    )
    def test_data_layer(self, flag, layer):
        assert ScaffoldConfig(project_name="demo", **{flag: True}).data_layer == layer

    def test_ai_choice_coerced_from_text(self):
        config = ScaffoldConfig(project_name="demo", ai_choice="Claude")
        assert config.ai_choice is AIChoice.CLAUDE

    def test_unknown_ai_choice_becomes_none(self):
        config = ScaffoldConfig(project_name="demo", ai_choice="skynet")
        assert config.ai_choice is AIChoice.NONE

    def test_class_style_dropped_without_ai(self):
        config = ScaffoldConfig(project_name="demo", use_class_based_service=True)
        assert config.use_class_based_service is False
        assert config.service_style is ServiceStyle.FUNCTION

    def test_class_style_kept_with_ai(self):
        config = ScaffoldConfig(
            project_name="demo", ai_choice="openai", use_class_based_service=True
        )
        assert config.service_style is ServiceStyle.CLASS

    def test_frozen(self):
        config = ScaffoldConfig(project_name="demo")
        with pytest.raises(ValidationError):
            config.use_zustand = True

    def test_defaults_respect_mutual_exclusion(self):
        config = ScaffoldConfig(project_name="demo", **DEFAULT_PREFERENCES)
        assert config.data_layer == "react-query"
        assert config.ai_choice is AIChoice.OPENAI
        assert config.service_style is ServiceStyle.FUNCTION

    def test_summary(self):
        config = ScaffoldConfig(
            project_name="demo", use_apollo=True, ai_choice="v0", use_class_based_service=True
        )
        assert config.summary() == {
            "Project": "demo",
            "Data layer": "apollo",
            "AI provider": "v0",
            "Service style": "class",
        }

    def test_summary_without_ai(self):
        summary = ScaffoldConfig(project_name="demo").summary()
        assert summary["AI provider"] == "none"
        assert summary["Service style"] == "-"


# ---------------------------------------------------------------------------
# ToolSettings
# ---------------------------------------------------------------------------


class TestToolSettings:
    def test_defaults(self):
        settings = ToolSettings()
        assert settings.package_manager == "yarn"
        assert settings.generator_package == "create-next-app@latest"

    def test_rejects_unknown_package_manager(self):
        with pytest.raises(ValidationError):
            ToolSettings(package_manager="bun")

    def test_generator_command(self):
        cmd = ToolSettings(package_manager="npm").generator_command()
        assert cmd == [
            "npx",
            "create-next-app@latest",
            ".",
            "--typescript",
            "--tailwind",
            "--eslint",
            "--app",
            "--src-dir",
            "--import-alias",
            "@/*",
            "--use-npm",
        ]

    @pytest.mark.parametrize(
        "manager, verb",
        [("npm", "install"), ("yarn", "add"), ("pnpm", "add")],
    )
    def test_install_command(self, manager, verb):
        cmd = ToolSettings(package_manager=manager).install_command(["zustand", "openai"])
        assert cmd == [manager, verb, "zustand", "openai"]

    def test_dev_command(self):
        assert ToolSettings(package_manager="npm").dev_command() == "npm run dev"
        assert ToolSettings(package_manager="yarn").dev_command() == "yarn dev"

    def test_from_env(self):
        env = {
            "NEXTFLEX_PACKAGE_MANAGER": "pnpm",
            "NEXTFLEX_GRAPHQL_URL": "https://example.com/graphql",
            "NEXTFLEX_ANTHROPIC_MODEL": "claude-test",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = ToolSettings.from_env()
        assert settings.package_manager == "pnpm"
        assert settings.graphql_url == "https://example.com/graphql"
        assert settings.anthropic_model == "claude-test"
        assert settings.openai_model == ToolSettings().openai_model

    def test_from_env_overrides_win(self):
        with patch.dict(os.environ, {"NEXTFLEX_PACKAGE_MANAGER": "pnpm"}, clear=True):
            settings = ToolSettings.from_env(package_manager="npm")
        assert settings.package_manager == "npm"

    def test_from_env_ignores_none_overrides(self):
        with patch.dict(os.environ, {"NEXTFLEX_PACKAGE_MANAGER": "pnpm"}, clear=True):
            settings = ToolSettings.from_env(package_manager=None)
        assert settings.package_manager == "pnpm"

    def test_from_env_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            assert ToolSettings.from_env() == ToolSettings()
