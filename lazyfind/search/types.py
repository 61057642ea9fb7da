"""Value types shared by the search backends, state, and renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SearchMode(Enum):
    CONTENT = "content"
    FILES = "files"


@dataclass(frozen=True)
class MatchCandidate:
    path: str
    line_number: int  # 1-based, 0 for file-mode candidates
    content: str
    score: int = 0

    def output_line(self) -> str:
        """Format the candidate the way confirmed selections are emitted."""
        return f"{self.path}:{self.line_number}: {self.content}"


@dataclass(frozen=True)
class SearchOptions:
    case_sensitive: bool = False
    search_hidden: bool = False
    max_results: int | None = None
    directory: str | None = None
    regex: bool = False  # content queries are literal unless set


@dataclass(frozen=True)
class ResultSet:
    """Candidates produced by one search.

    ``error`` is set when the search tool failed; ``candidates`` is then empty.
    """

    mode: SearchMode
    candidates: tuple[MatchCandidate, ...] = ()
    error: str | None = None

    def __len__(self) -> int:
        return len(self.candidates)

    def __getitem__(self, idx: int) -> MatchCandidate:
        return self.candidates[idx]

    def __iter__(self):
        return iter(self.candidates)
