"""Blocked-word backstop for ages 3-5. Primary safety lives in the prompt; this catches what slips through."""
from __future__ import annotations

import re
from typing import Iterable

FEAR_AND_DANGER = (
    "scary", "terrified", "horror", "nightmare", "monster", "ghost", "demon",
    "witch", "evil", "wicked", "creepy", "haunted", "scream", "shriek",
)
VIOLENCE = (
    "kill", "murder", "blood", "weapon", "sword", "gun", "fight", "attack",
    "destroy", "punch", "stab", "wound", "hurt", "pain",
)
DEATH_AND_SADNESS = (
    "death", "dead", "die", "dying", "funeral", "grave", "cry", "crying", "tears", "sob",
)
DARKNESS_AND_ISOLATION = (
    "alone", "abandoned", "lost", "trapped", "prison", "dungeon", "dark", "darkness",
)
DENIGRATING = (
    "stupid", "hate", "ugly", "dumb", "idiot", "fat", "loser",
)


class Denylist:
    """Ordered whole-word terms. first_match reports the earliest term in list order, not in text order."""

    def __init__(self, terms: Iterable[str]) -> None:
        seen: set[str] = set()
        ordered: list[str] = []
        for term in terms:
            t = term.strip().lower()
            if t and t not in seen:
                seen.add(t)
                ordered.append(t)
        self._terms = tuple(ordered)
        self._patterns = tuple(
            (t, re.compile(rf"\b{re.escape(t)}\b", re.IGNORECASE)) for t in self._terms
        )

    @property
    def terms(self) -> tuple[str, ...]:
        return self._terms

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and term.lower() in self._terms

    def first_match(self, text: str) -> str | None:
        lowered = text.lower()
        for term, pattern in self._patterns:
            if pattern.search(lowered):
                return term
        return None

    def extend(self, terms: Iterable[str]) -> "Denylist":
        """Return a new list with extra terms appended (existing order kept)."""
        return Denylist((*self._terms, *terms))


DEFAULT_DENYLIST = Denylist(
    (*FEAR_AND_DANGER, *VIOLENCE, *DEATH_AND_SADNESS, *DARKNESS_AND_ISOLATION, *DENIGRATING)
)
