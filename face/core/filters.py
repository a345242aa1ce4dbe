from __future__ import annotations

from collections.abc import Iterable

DEFAULT_PLACEHOLDERS = ("Available", "Idle", "Online", "task")
DEFAULT_KEYWORDS = ("gateway", "clawdbot")


class SystemTaskFilter:
    """Decides whether a task string is housekeeping rather than real work.

    Empty tasks, exact placeholder strings, and tasks containing a keyword
    are system tasks. Matching is case-sensitive.
    """

    def __init__(
        self,
        placeholders: Iterable[str] = DEFAULT_PLACEHOLDERS,
        keywords: Iterable[str] = DEFAULT_KEYWORDS,
    ):
        self.placeholders = frozenset(placeholders)
        self.keywords = tuple(keywords)

    def __call__(self, task: str | None) -> bool:
        if not task:
            return True
        if task in self.placeholders:
            return True
        return any(keyword in task for keyword in self.keywords)
