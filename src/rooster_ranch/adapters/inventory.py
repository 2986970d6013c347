"""Inventory collaborators used by the market and profession starter kits."""

from __future__ import annotations

import json
import re
from collections import Counter
from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from rooster_ranch.adapters.game_command import GameCommand, GameCommandAdapter
from rooster_ranch.models import ItemStack

_FOUND_RE = re.compile(r"Found\s+(\d+)\s+matching", re.IGNORECASE)
_REMOVED_RE = re.compile(r"Removed\s+(\d+)\s+item", re.IGNORECASE)


class InventoryGateway(Protocol):
    """Host-side player inventories."""

    def grant_items(self, owner: UUID, items: Iterable[ItemStack]) -> None:
        """Add every stack to the owner's inventory."""

    def remove_one_unit(self, owner: UUID, good: str) -> bool:
        """Remove exactly one unit of ``good``; False if none could be removed."""

    def count_units(self, owner: UUID, good: str) -> int:
        """Return how many units of ``good`` the owner holds."""


def item_id(good: str) -> str:
    return good if ":" in good else f"minecraft:{good}"


def _snbt_string(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def written_book(title: str, author: str, pages: Iterable[str]) -> ItemStack:
    """Build a signed book stack. Pages are plain text; newlines are kept."""
    page_list = ",".join(_snbt_string(json.dumps(page)) for page in pages)
    components = f"[written_book_content={{title:{json.dumps(title)},author:{json.dumps(author)},pages:[{page_list}]}}]"
    return ItemStack("written_book", 1, components)


class CommandInventoryGateway:
    """Uses vanilla ``give`` and ``clear`` against the player's UUID."""

    def __init__(self, adapter: GameCommandAdapter) -> None:
        self._adapter = adapter

    def grant_items(self, owner: UUID, items: Iterable[ItemStack]) -> None:
        for stack in items:
            if stack.amount > 0:
                command = f"give {owner} {item_id(stack.good)}{stack.components} {stack.amount}"
                self._adapter.send(GameCommand(command=command))

    def remove_one_unit(self, owner: UUID, good: str) -> bool:
        reply = self._adapter.send(GameCommand(command=f"clear {owner} {item_id(good)} 1")) or ""
        match = _REMOVED_RE.search(reply)
        return bool(match) and int(match.group(1)) >= 1

    def count_units(self, owner: UUID, good: str) -> int:
        # A max count of 0 makes ``clear`` report matches without removing anything.
        reply = self._adapter.send(GameCommand(command=f"clear {owner} {item_id(good)} 0")) or ""
        match = _FOUND_RE.search(reply)
        return int(match.group(1)) if match else 0


class InMemoryInventory:
    """Dictionary-backed inventories for tests and offline runs."""

    def __init__(self) -> None:
        self._items: dict[UUID, Counter[str]] = {}

    def grant_items(self, owner: UUID, items: Iterable[ItemStack]) -> None:
        bag = self._items.setdefault(owner, Counter())
        for stack in items:
            if stack.amount > 0:
                bag[stack.good] += stack.amount

    def remove_one_unit(self, owner: UUID, good: str) -> bool:
        bag = self._items.get(owner)
        if not bag or bag[good] <= 0:
            return False
        bag[good] -= 1
        if bag[good] == 0:
            del bag[good]
        return True

    def count_units(self, owner: UUID, good: str) -> int:
        return self._items.get(owner, Counter())[good]

    def contents(self, owner: UUID) -> dict[str, int]:
        return dict(self._items.get(owner, Counter()))
