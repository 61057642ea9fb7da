"""Subsequence fuzzy scoring for query/candidate pairs.

The scorer walks the candidate once and consumes the query greedily.
``match_positions`` applies the same greedy rule for highlighting.
"""

from __future__ import annotations

BOUNDARY_CHARS = frozenset("/._ ")

MATCH_POINTS = 10
BOUNDARY_BONUS = 20
RUN_BONUS_STEP = 5
EXACT_CASE_BONUS = 5
COMPLETION_BONUS = 50
END_OF_TEXT_BONUS = 100


def _chars_match(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def fuzzy_score(pattern: str, text: str) -> int:
    """Score how well ``pattern`` matches ``text`` as a subsequence.

    Each matched char earns base points plus bonuses for word boundaries,
    consecutive runs and exact case. A full match adds a completion bonus
    (more if it ends on the last char of ``text``) and stops scanning; a
    partial match has its total halved.
    """
    if not pattern or not text:
        return 0

    score = 0
    pattern_idx = 0
    last_match_idx = 0
    run = 0
    last_text_idx = len(text) - 1

    for idx, ch in enumerate(text):
        if pattern_idx >= len(pattern) or not _chars_match(ch, pattern[pattern_idx]):
            continue

        score += MATCH_POINTS
        if idx == 0 or text[idx - 1] in BOUNDARY_CHARS:
            score += BOUNDARY_BONUS

        if pattern_idx > 0 and idx > 0 and idx == last_match_idx + 1:
            run += 1
            score += RUN_BONUS_STEP * run
        else:
            run = 0

        if ch == pattern[pattern_idx]:
            score += EXACT_CASE_BONUS

        last_match_idx = idx
        pattern_idx += 1

        if pattern_idx == len(pattern):
            score += COMPLETION_BONUS
            if idx == last_text_idx:
                score += END_OF_TEXT_BONUS
            break

    if pattern_idx < len(pattern):
        score //= 2
    return score


def match_positions(pattern: str, text: str) -> list[int]:
    """Return indices in ``text`` matched greedily by ``pattern``, case-insensitively."""
    if not pattern:
        return []
    positions: list[int] = []
    pattern_idx = 0
    for idx, ch in enumerate(text):
        if pattern_idx >= len(pattern):
            break
        if _chars_match(ch, pattern[pattern_idx]):
            positions.append(idx)
            pattern_idx += 1
    return positions
