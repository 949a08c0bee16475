"""Filter and rank stage.

Derives the visible candidates from ``(items, search)``. Recomputed on
every call since ``search`` can change between two reads in one batch.
"""

from __future__ import annotations

from typing import List, Optional

from .scoring import score
from .types import CommandContext, ScoredItem


def visible_items(ctx: CommandContext) -> List[ScoredItem]:
    """Enabled items that match ``ctx.search``, best score first.

    Items with equal scores keep their order from ``ctx.items``.
    """
    scored: List[ScoredItem] = []
    for item in ctx.items:
        if item.disabled:
            continue
        value = score(item.value, ctx.search, ctx.scorer)
        if value > 0:
            scored.append(ScoredItem(value=item.value, disabled=item.disabled, score=value))

    # list.sort is stable, so ties keep input order
    scored.sort(key=lambda x: -x.score)
    return scored


def index_of(items: List[ScoredItem], value: Optional[str]) -> Optional[int]:
    """Position of ``value`` in ``items``, or None."""
    if value is None:
        return None
    for i, item in enumerate(items):
        if item.value == value:
            return i
    return None
