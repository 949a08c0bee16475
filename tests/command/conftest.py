from __future__ import annotations

from typing import List

import pytest

from cmdpalette.command import Item, create
from cmdpalette.command.machine import CommandMachine


@pytest.fixture
def changes() -> List[Item]:
    return []


@pytest.fixture
def machine(changes: List[Item]) -> CommandMachine:
    items = [
        Item(value="one"),
        Item(value="two"),
        Item(value="three", disabled=True),
        Item(value="four"),
    ]
    return create(items, "list", "input", "label", changes.append)
