"""Turn raw search output into scored ``ResultSet`` values."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from .content import search_content_rg
from .files import list_files
from .fuzzy import fuzzy_score
from .types import MatchCandidate, ResultSet, SearchMode, SearchOptions


def build_result_set(
    mode: SearchMode,
    query: str,
    candidates: Iterable[MatchCandidate],
    error: str | None = None,
) -> ResultSet:
    """Score ``candidates`` against ``query``.

    File results are sorted by score, highest first (stable for ties).
    Content results keep the search tool's order; their score is kept for
    relevance only.
    """
    if error is not None:
        return ResultSet(mode=mode, candidates=(), error=error)

    if mode is SearchMode.FILES:
        scored = [replace(item, score=fuzzy_score(query, item.path)) for item in candidates]
        scored.sort(key=lambda item: item.score, reverse=True)
    else:
        scored = [replace(item, score=fuzzy_score(query, item.content)) for item in candidates]
    return ResultSet(mode=mode, candidates=tuple(scored))


class RipgrepBackend:
    """Search backend that shells out to ``rg`` for both search modes."""

    def search(self, mode: SearchMode, query: str, options: SearchOptions) -> ResultSet:
        if mode is SearchMode.FILES:
            candidates, error = list_files(query, options)
        else:
            candidates, error = search_content_rg(query, options)
        return build_result_set(mode, query, candidates, error)
