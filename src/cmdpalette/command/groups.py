"""Group lookup for alt+arrow navigation.

Groups are static, so the index is built once per distinct group tuple.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple

from .types import Group, ScoredItem

DEMO_GROUPS: Tuple[Group, ...] = (
    Group(name="first", items=("one", "two", "three")),
    Group(name="second", items=("four", "five", "six")),
    Group(name="third", items=("seven", "eight", "nine")),
)


class GroupIndex:
    """Ordered mapping of group name to member values."""

    def __init__(self, groups: Sequence[Group]):
        self._names: List[str] = []
        self._members: Dict[str, FrozenSet[str]] = {}
        for group in groups:
            if group.name in self._members:
                continue
            self._names.append(group.name)
            self._members[group.name] = frozenset(group.items)

    def __len__(self) -> int:
        return len(self._names)

    def position_of(self, value: Optional[str]) -> Optional[int]:
        """Position of the first group containing ``value``."""
        if value is None:
            return None
        for i, name in enumerate(self._names):
            if value in self._members[name]:
                return i
        return None

    def walk(self, start: int, step: int) -> Iterator[str]:
        """Group names after ``start`` in direction ``step``, without wrapping."""
        i = start + step
        while 0 <= i < len(self._names):
            yield self._names[i]
            i += step

    def first_visible(self, name: str, visible: Sequence[ScoredItem]) -> Optional[str]:
        """Value of the first visible member of group ``name``."""
        members = self._members.get(name, frozenset())
        for item in visible:
            if item.value in members:
                return item.value
        return None


@lru_cache(maxsize=32)
def group_index(groups: Tuple[Group, ...]) -> GroupIndex:
    return GroupIndex(groups)


def adjacent_group_item(
    groups: Tuple[Group, ...],
    selected: Optional[str],
    visible: Sequence[ScoredItem],
    step: int,
) -> Optional[str]:
    """First visible member of the nearest group in direction ``step``.

    None when the selection belongs to no group or no later group has a
    visible member.
    """
    index = group_index(groups)
    start = index.position_of(selected)
    if start is None:
        return None
    for name in index.walk(start, step):
        value = index.first_visible(name, visible)
        if value is not None:
            return value
    return None
