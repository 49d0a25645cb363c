"""Preference collection: prompts, answer resolution and config sources."""

from nextflex.wizard.prompter import Prompter
from nextflex.wizard.resolver import resolve_answers
from nextflex.wizard.sources import (
    ConfigSource,
    DefaultsSource,
    FileSource,
    InteractiveSource,
    resolve,
    select_source,
)

__all__ = [
    "ConfigSource",
    "DefaultsSource",
    "FileSource",
    "InteractiveSource",
    "Prompter",
    "resolve",
    "resolve_answers",
    "select_source",
]
