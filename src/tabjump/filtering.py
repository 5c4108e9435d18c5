"""Fuzzy filtering and ranking of tabs against the user's filter text.

The ranking contract: a scorer returns a score only
when every character of the query occurs in the candidate in order (gaps
allowed), and ``None`` otherwise. Anything satisfying that can be plugged in
via ``scorer=``; the default delegates the actual ranking to Textual's fuzzy
matcher, which favours contiguous runs and word starts.
"""

from typing import Callable, Iterable

from textual.fuzzy import Matcher

from .models import Tab

# (candidate, query) -> positive score, or None for "no match"
Scorer = Callable[[str, str], float | None]

# Every tab scores this when the filter is empty, so the unfiltered view
# keeps snapshot order.
EMPTY_FILTER_SCORE = 0.0

# Floor for a contract-satisfying match that the matcher rated as zero.
MIN_MATCH_SCORE = 1e-6


def search_key(tab: Tab) -> str:
    """Composite key matched against the filter: ``"{index}: {name}"``."""
    return f"{tab.position + 1}: {tab.name}"


def is_subsequence(query: str, candidate: str) -> bool:
    """Check that every character of query appears in candidate, in order."""
    remaining = iter(candidate)
    return all(ch in remaining for ch in query)


def fuzzy_score(candidate: str, query: str) -> float | None:
    """Default scorer. Case handling is left to the caller."""
    if not is_subsequence(query, candidate):
        return None
    matcher = Matcher(query, case_sensitive=True)
    return max(matcher.match(candidate), MIN_MATCH_SCORE)


def score(
    tab: Tab,
    filter_text: str,
    scorer: Scorer = fuzzy_score,
    ignore_case: bool = True,
) -> float | None:
    """Score a tab against the filter text, None when it does not match."""
    if not filter_text:
        return EMPTY_FILTER_SCORE
    key = search_key(tab)
    if ignore_case:
        key = key.lower()
        filter_text = filter_text.lower()
    return scorer(key, filter_text)


def viewable_tabs(
    tabs: Iterable[Tab],
    filter_text: str,
    scorer: Scorer = fuzzy_score,
    ignore_case: bool = True,
) -> list[Tab]:
    """Matching tabs, best score first, ties in ascending position order.

    Recomputed from scratch on every call; the snapshot or the filter may
    have changed since the last one.
    """
    scored = []
    for tab in tabs:
        tab_score = score(tab, filter_text, scorer=scorer, ignore_case=ignore_case)
        if tab_score is not None:
            scored.append((tab_score, tab))
    scored.sort(key=lambda pair: (-pair[0], pair[1].position))
    return [tab for _, tab in scored]
