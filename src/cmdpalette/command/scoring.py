"""Match scoring for palette candidates.

``command_score`` ranks how well a typed abbreviation matches a candidate,
in the style of command-palette scorers: query characters must appear in
order, contiguous runs beat jumps, and jumps to a word start beat jumps
into the middle of a word. The first query character must land on a word
start, so ``"o"`` matches ``"one"`` and ``"open file"`` but not ``"two"``.

``score`` is the adapter the filter stage calls. It never raises.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from .types import Scorer
from ..util.log import Log

log = Log.create({"service": "palette.scoring"})

SCORE_CONTINUE_MATCH = 1.0
SCORE_SPACE_WORD_JUMP = 0.9
SCORE_NON_SPACE_WORD_JUMP = 0.8
SCORE_CHARACTER_JUMP = 0.17

PENALTY_SKIPPED = 0.999
PENALTY_CASE_MISMATCH = 0.9999
PENALTY_NOT_COMPLETE = 0.99

SPACE_CHARS = frozenset(" \t\n-")
PUNCTUATION_CHARS = frozenset("\\/_+.#\"@[({&:")


def command_score(value: str, query: str) -> float:
    """Score ``value`` against ``query`` in ``[0, 1]``; 0 means no match.

    An empty query scores every non-empty value ``PENALTY_NOT_COMPLETE``.
    """
    lower_value = value.lower()
    lower_query = query.lower()
    # keep indices aligned when lowering changes the length
    if len(lower_value) != len(value):
        value = lower_value
    if len(lower_query) != len(query):
        query = lower_query
    if len(query) > len(value):
        return 0.0
    return _score(value, query, lower_value, lower_query)


def _score(value: str, query: str, lower_value: str, lower_query: str) -> float:
    """Best score over every way of matching ``query`` inside ``value``.

    States are ``(value_index, query_index)`` pairs, resolved with an
    explicit stack so long inputs do not hit the recursion limit.
    """
    memo: Dict[Tuple[int, int], float] = {}

    def resolved(value_index: int, query_index: int) -> Optional[float]:
        if query_index == len(query):
            if value_index == len(value):
                return SCORE_CONTINUE_MATCH
            return PENALTY_NOT_COMPLETE
        return memo.get((value_index, query_index))

    start = resolved(0, 0)
    if start is not None:
        return start

    stack: List[Tuple[int, int]] = [(0, 0)]
    while stack:
        value_index, query_index = stack[-1]
        if (value_index, query_index) in memo:
            stack.pop()
            continue

        indices = _candidates(lower_value, lower_query, value_index, query_index)
        missing = [
            (index + 1, query_index + 1)
            for index in indices
            if resolved(index + 1, query_index + 1) is None
        ]
        if missing:
            stack.extend(missing)
            continue

        stack.pop()
        best = 0.0
        for index in indices:
            score = _jump(
                value, query, lower_value, value_index, query_index, index,
                resolved(index + 1, query_index + 1),
            )
            if score > best:
                best = score
        memo[(value_index, query_index)] = best

    return memo[(0, 0)]


def _candidates(lower_value: str, lower_query: str, value_index: int, query_index: int) -> List[int]:
    """Positions where the next query character can match.

    Positions that leave fewer value characters than query characters
    remaining are skipped.
    """
    char = lower_query[query_index]
    end = len(lower_value) - len(lower_query) + query_index + 1
    result = []
    index = lower_value.find(char, value_index, end)
    while index >= 0:
        result.append(index)
        index = lower_value.find(char, index + 1, end)
    return result


def _jump(
    value: str,
    query: str,
    lower_value: str,
    value_index: int,
    query_index: int,
    index: int,
    rest: float,
) -> float:
    if not rest:
        return 0.0

    score = rest
    if index == value_index:
        score *= SCORE_CONTINUE_MATCH
    elif lower_value[index - 1] in SPACE_CHARS:
        score *= SCORE_SPACE_WORD_JUMP
        if value_index > 0:
            breaks = sum(1 for c in lower_value[value_index:index - 1] if c in SPACE_CHARS)
            score *= PENALTY_SKIPPED ** breaks
    elif lower_value[index - 1] in PUNCTUATION_CHARS:
        score *= SCORE_NON_SPACE_WORD_JUMP
        if value_index > 0:
            breaks = sum(
                1 for c in lower_value[value_index:index - 1] if c in PUNCTUATION_CHARS
            )
            score *= PENALTY_SKIPPED ** breaks
    elif query_index == 0:
        # first character must start a word
        return 0.0
    else:
        score *= SCORE_CHARACTER_JUMP
        if value_index > 0:
            score *= PENALTY_SKIPPED ** (index - value_index)

    if value[index] != query[query_index]:
        score *= PENALTY_CASE_MISMATCH
    return score


def score(value: str, query: str, scorer: Optional[Scorer] = None) -> float:
    """Score one candidate, containing scorer failures.

    Empty values never match. A scorer that raises or returns something
    other than a finite non-negative number scores the candidate 0.
    """
    if not value:
        return 0.0

    fn = scorer or command_score
    try:
        result = fn(value, query)
    except Exception as e:
        log.warn("scorer failed", {"value": value, "query": query, "error": e})
        return 0.0

    if isinstance(result, bool) or not isinstance(result, (int, float)):
        log.warn("scorer returned a non-numeric result", {"value": value, "result": repr(result)})
        return 0.0
    if math.isnan(result) or result < 0:
        log.warn("scorer returned an invalid score", {"value": value, "result": result})
        return 0.0
    return float(result)
