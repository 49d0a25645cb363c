"""Turn raw wizard answers into a :class:`~nextflex.config.ScaffoldConfig`.

The data-layer questions form a chain: React Query is considered first,
Apollo only when React Query was declined, Zustand only when both were
declined.  Declining all three is valid.  Unrecognised text never raises;
it resolves to the negative branch (or ``none`` for the AI provider).
"""

from __future__ import annotations

from collections.abc import Mapping

from nextflex.config import AIChoice, ScaffoldConfig

# Answer keys, in the order the wizard asks them.
REACT_QUERY = "react_query"
APOLLO = "apollo"
ZUSTAND = "zustand"
AI = "ai"
CLASS_SERVICE = "class_service"

QUESTIONS: dict[str, str] = {
    REACT_QUERY: "Do you want to use React Query? (y/n):",
    APOLLO: "Do you want to use Apollo Client? (y/n):",
    ZUSTAND: "Do you want to use Zustand for state management? (y/n):",
    AI: "Which AI API do you want to use? (openai/claude/v0/none):",
    CLASS_SERVICE: "Do you want to use a class-based service? (y/n):",
}

_AFFIRMATIVE = frozenset({"y", "yes", "true"})


def is_yes(answer: str | bool | None) -> bool:
    """Return ``True`` only for an explicit affirmative answer."""
    if isinstance(answer, bool):
        return answer
    if answer is None:
        return False
    return str(answer).strip().lower() in _AFFIRMATIVE


def resolve_answers(project_name: str, answers: Mapping[str, str | bool]) -> ScaffoldConfig:
    """Resolve *answers* into an immutable configuration.

    Missing keys count as declined.  Later data-layer answers are ignored
    once an earlier library in the chain was accepted.
    """
    use_react_query = is_yes(answers.get(REACT_QUERY))
    use_apollo = not use_react_query and is_yes(answers.get(APOLLO))
    use_zustand = not use_react_query and not use_apollo and is_yes(answers.get(ZUSTAND))

    ai_choice = AIChoice.parse(answers.get(AI, AIChoice.NONE))
    use_class = ai_choice is not AIChoice.NONE and is_yes(answers.get(CLASS_SERVICE))

    return ScaffoldConfig(
        project_name=project_name,
        use_react_query=use_react_query,
        use_apollo=use_apollo,
        use_zustand=use_zustand,
        ai_choice=ai_choice,
        use_class_based_service=use_class,
    )
