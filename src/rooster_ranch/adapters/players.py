"""Player-facing host actions: position lookups, teleporting and chat messages."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from rooster_ranch.adapters.game_command import GameCommand, GameCommandAdapter
from rooster_ranch.models import WorldLocation

_POS_RE = re.compile(r"\[\s*(-?[\d.]+)d?\s*,\s*(-?[\d.]+)d?\s*,\s*(-?[\d.]+)d?\s*\]")
_DIMENSION_RE = re.compile(r"\"([a-z0-9_.-]+:[a-z0-9_./-]+)\"")


class PlayerGateway(Protocol):
    def location_of(self, owner: UUID) -> WorldLocation | None:
        """Return the player's current position, or None if they are not in a world."""

    def teleport(self, owner: UUID, location: WorldLocation) -> None:
        """Move the player to ``location``."""

    def send_message(self, owner: UUID, text: str) -> None:
        """Show a chat line to the player."""


def _dimension(world: str) -> str:
    return world if ":" in world else f"minecraft:{world}"


class CommandPlayerGateway:
    """Reads positions with ``data get entity`` and moves players with ``tp``."""

    def __init__(self, adapter: GameCommandAdapter) -> None:
        self._adapter = adapter

    def location_of(self, owner: UUID) -> WorldLocation | None:
        position = self._adapter.send(GameCommand(command=f"data get entity {owner} Pos")) or ""
        dimension = self._adapter.send(GameCommand(command=f"data get entity {owner} Dimension")) or ""
        pos_match = _POS_RE.search(position)
        dim_match = _DIMENSION_RE.search(dimension)
        if not pos_match or not dim_match:
            return None
        world = dim_match.group(1).removeprefix("minecraft:")
        x, y, z = (float(value) for value in pos_match.groups())
        return WorldLocation(world, x, y, z)

    def teleport(self, owner: UUID, location: WorldLocation) -> None:
        self._adapter.send(
            GameCommand(
                command=f"execute in {_dimension(location.world)} run tp {owner} {location.x} {location.y} {location.z}"
            )
        )

    def send_message(self, owner: UUID, text: str) -> None:
        self._adapter.send(GameCommand(command=f"tellraw {owner} {json.dumps({'text': text})}"))


@dataclass(slots=True)
class InMemoryPlayerGateway:
    positions: dict[UUID, WorldLocation] = field(default_factory=dict)
    teleports: list[tuple[UUID, WorldLocation]] = field(default_factory=list)
    messages: list[tuple[UUID, str]] = field(default_factory=list)

    def location_of(self, owner: UUID) -> WorldLocation | None:
        return self.positions.get(owner)

    def teleport(self, owner: UUID, location: WorldLocation) -> None:
        self.teleports.append((owner, location))
        self.positions[owner] = location

    def send_message(self, owner: UUID, text: str) -> None:
        self.messages.append((owner, text))
