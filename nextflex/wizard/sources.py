"""Configuration sources.

Every way of obtaining preferences -- asking the user, taking the built-in
defaults, reading a JSON file -- is a :class:`ConfigSource`.  The CLI picks
one with :func:`select_source` and the rest of the run only ever sees the
resulting :class:`~nextflex.config.ScaffoldConfig`.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from nextflex.config import DEFAULT_PREFERENCES, AIChoice, ScaffoldConfig
from nextflex.errors import ScaffoldError
from nextflex.wizard.prompter import Prompter
from nextflex.wizard.resolver import (
    AI,
    APOLLO,
    CLASS_SERVICE,
    QUESTIONS,
    REACT_QUERY,
    ZUSTAND,
    is_yes,
    resolve_answers,
)

logger = logging.getLogger(__name__)


class ConfigSource(ABC):
    """Produces the configuration record for one run."""

    @abstractmethod
    def load(self, project_name: str) -> ScaffoldConfig:
        """Return the resolved configuration for *project_name*."""


class DefaultsSource(ConfigSource):
    """The fixed ``--yes`` configuration; consults nothing else."""

    def load(self, project_name: str) -> ScaffoldConfig:
        return ScaffoldConfig(project_name=project_name, **DEFAULT_PREFERENCES)


class InteractiveSource(ConfigSource):
    """Asks the wizard questions in chain order."""

    def __init__(self, prompter: Prompter) -> None:
        self.prompter = prompter

    def load(self, project_name: str) -> ScaffoldConfig:
        answers: dict[str, str] = {}

        answers[REACT_QUERY] = self.prompter.ask(QUESTIONS[REACT_QUERY])
        if not is_yes(answers[REACT_QUERY]):
            answers[APOLLO] = self.prompter.ask(QUESTIONS[APOLLO])
            if not is_yes(answers[APOLLO]):
                answers[ZUSTAND] = self.prompter.ask(QUESTIONS[ZUSTAND])

        answers[AI] = self.prompter.ask(QUESTIONS[AI])
        if AIChoice.parse(answers[AI]) is not AIChoice.NONE:
            answers[CLASS_SERVICE] = self.prompter.ask(QUESTIONS[CLASS_SERVICE])

        logger.debug("Collected answers: %s", answers)
        return resolve_answers(project_name, answers)


# Model field names accepted in a preferences file, mapped to answer keys.
_FIELD_TO_ANSWER: dict[str, str] = {
    "use_react_query": REACT_QUERY,
    "use_apollo": APOLLO,
    "use_zustand": ZUSTAND,
    "ai_choice": AI,
    "use_class_based_service": CLASS_SERVICE,
}


class FileSource(ConfigSource):
    """Reads preferences from a JSON file.

    Keys may be either answer keys (``"react_query"``, ``"ai"``...) or model
    field names (``"use_react_query"``, ``"ai_choice"``...).  Values go
    through the same chain resolution as interactive answers, so a file that
    enables several data layers resolves to the first one in chain order.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self, project_name: str) -> ScaffoldConfig:
        raw = self._read()
        answers: dict[str, Any] = {}
        for key, value in raw.items():
            answer_key = _FIELD_TO_ANSWER.get(key, key)
            if answer_key in QUESTIONS:
                answers[answer_key] = value
            else:
                logger.warning("Ignoring unknown key %r in %s", key, self.path)
        return resolve_answers(project_name, answers)

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ScaffoldError(f"Preferences file not found: {self.path}") from None
        except json.JSONDecodeError as exc:
            raise ScaffoldError(f"Preferences file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ScaffoldError(f"Preferences file {self.path} must contain a JSON object")
        return data


def select_source(
    *,
    yes: bool = False,
    config_file: str | Path | None = None,
    prompter: Prompter | None = None,
) -> ConfigSource:
    """Pick the configuration source implied by the CLI flags.

    A preferences file wins over ``--yes``, which wins over prompting.
    """
    if config_file is not None:
        return FileSource(config_file)
    if yes:
        return DefaultsSource()
    return InteractiveSource(prompter or Prompter())


def resolve(source: ConfigSource, project_name: str) -> ScaffoldConfig:
    """Resolve the configuration record for this run from *source*."""
    config = source.load(project_name)
    logger.debug("Resolved configuration: %s", config.model_dump())
    return config
