"""Data models for anagram search options and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Mode flags set once at startup and read by every search component."""

    only_find_one: bool = False
    use_base_letters: bool = False
    quiet: bool = False


@dataclass(slots=True)
class QueryResult:
    """Result for a single query word."""

    word: str
    canonical: str
    status: str
    matches: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.matches)


@dataclass(slots=True)
class SearchReport:
    """Aggregated search output preserving query order."""

    dictionary_path: str
    query_words: list[str]
    results: list[QueryResult]
    generated_at_utc: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )

    @property
    def anagrams(self) -> dict[str, list[str]]:
        """Query word -> matches, every query word present."""
        return {r.word: list(r.matches) for r in self.results}
