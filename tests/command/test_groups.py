from cmdpalette.command import DEMO_GROUPS, Group, ScoredItem
from cmdpalette.command.groups import GroupIndex, adjacent_group_item


def _visible(*values: str) -> list[ScoredItem]:
    return [ScoredItem(value=v, score=1.0) for v in values]


def test_position_of_uses_first_containing_group() -> None:
    index = GroupIndex([Group(name="a", items=("x",)), Group(name="b", items=("x", "y"))])

    assert index.position_of("x") == 0
    assert index.position_of("y") == 1
    assert index.position_of("z") is None
    assert index.position_of(None) is None


def test_walk_does_not_wrap() -> None:
    index = GroupIndex(DEMO_GROUPS)

    assert list(index.walk(0, 1)) == ["second", "third"]
    assert list(index.walk(0, -1)) == []
    assert list(index.walk(2, -1)) == ["second", "first"]


def test_duplicate_group_names_keep_first() -> None:
    index = GroupIndex([Group(name="a", items=("x",)), Group(name="a", items=("y",))])

    assert len(index) == 1
    assert index.position_of("y") is None


def test_membership_is_independent_of_live_items() -> None:
    visible = _visible("five", "two")

    assert adjacent_group_item(DEMO_GROUPS, "one", visible, 1) == "five"
    assert adjacent_group_item(DEMO_GROUPS, "five", visible, -1) == "two"


def test_first_visible_follows_visible_order() -> None:
    visible = _visible("six", "four")

    assert adjacent_group_item(DEMO_GROUPS, "one", visible, 1) == "six"


def test_no_adjacent_group_returns_none() -> None:
    visible = _visible("one", "two")

    assert adjacent_group_item(DEMO_GROUPS, "one", visible, 1) is None
    assert adjacent_group_item(DEMO_GROUPS, "one", visible, -1) is None
    assert adjacent_group_item(DEMO_GROUPS, "ten", visible, 1) is None
