"""Search package exports: scoring, ripgrep adapters, and result types."""

from __future__ import annotations

from .content import parse_rg_line, search_content_rg
from .files import list_files
from .fuzzy import fuzzy_score, match_positions
from .results import RipgrepBackend, build_result_set
from .types import MatchCandidate, ResultSet, SearchMode, SearchOptions

__all__ = [
    "MatchCandidate",
    "ResultSet",
    "RipgrepBackend",
    "SearchMode",
    "SearchOptions",
    "build_result_set",
    "fuzzy_score",
    "list_files",
    "match_positions",
    "parse_rg_line",
    "search_content_rg",
]
