"""World-editing collaborators used when an island is created."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from rooster_ranch.adapters.game_command import GameCommand, GameCommandAdapter
from rooster_ranch.errors import ResourceUnavailable
from rooster_ranch.models import WorldLocation

SUPPORTED_STRUCTURE_SUFFIXES = (".schem", ".schematic")
CLEANUP_RADIUS = 20
CLEANUP_BELOW = 3
CLEANUP_ABOVE = 8
TRAPDOOR_WOODS = ("oak", "spruce", "birch", "jungle", "acacia", "dark_oak", "mangrove", "cherry")
FILLABLE_BLOCKS = "minecraft:air,minecraft:water"
UNDER_SOLID_MASK = "<!minecraft:air,minecraft:water"


class WorldEditor(Protocol):
    """Places structures and tidies the area around them.

    Both calls are synchronous; creation relies on the pasted blocks existing by
    the time they return.
    """

    def paste_structure(self, structure_file: str, location: WorldLocation) -> None:
        """Paste a structure file at ``location``; raise ``ResourceUnavailable`` on failure."""

    def clear_vegetation_and_reinforce(self, location: WorldLocation) -> None:
        """Close trapdoors and back the island surface with two layers of dirt."""


def _dimension(world: str) -> str:
    return world if ":" in world else f"minecraft:{world}"


def _move_actor(location: WorldLocation) -> str:
    x, y, z = location.block_coords()
    return f"execute in {_dimension(location.world)} run tp @s {x} {y} {z}"


class CommandWorldEditor:
    """Drives WorldEdit and vanilla ``fill`` through the game command adapter.

    Commands run as the operating player (see ``MinescriptGameCommandAdapter``):
    WorldEdit pastes the clipboard at the player's position, so the player is
    moved to the target first. ``schematics_dir`` must be WorldEdit's own
    schematic folder, because ``/schem load`` only reads from there.
    """

    def __init__(
        self,
        adapter: GameCommandAdapter,
        schematics_dir: str | Path,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._adapter = adapter
        self._schematics_dir = Path(schematics_dir)
        self._logger = logger or logging.getLogger("rooster_ranch.world_edit")

    def resolve_structure(self, structure_file: str) -> Path:
        path = self._schematics_dir / structure_file
        if not path.is_file():
            raise ResourceUnavailable(f"Schematic not found: {path}")
        if path.suffix.lower() not in SUPPORTED_STRUCTURE_SUFFIXES:
            raise ResourceUnavailable(f"Unknown schematic format for file: {path.name}")
        return path

    def paste_structure(self, structure_file: str, location: WorldLocation) -> None:
        path = self.resolve_structure(structure_file)
        x, y, z = location.block_coords()
        self._run(_move_actor(location))
        self._run(f"schem load {path.relative_to(self._schematics_dir).as_posix()}")
        self._run("//paste")
        self._logger.info(
            "structure_pasted",
            extra={"structure": path.name, "world": location.world, "x": x, "y": y, "z": z},
        )

    def clear_vegetation_and_reinforce(self, location: WorldLocation) -> None:
        commands = list(self.cleanup_commands(location))
        for command in commands:
            self._run(command)
        self._logger.info("island_cleaned", extra={"world": location.world, "commands": len(commands)})

    @staticmethod
    def cleanup_commands(location: WorldLocation) -> Iterator[str]:
        dimension = _dimension(location.world)
        cx, base_y, cz = location.block_coords()
        x1, x2 = cx - CLEANUP_RADIUS, cx + CLEANUP_RADIUS
        z1, z2 = cz - CLEANUP_RADIUS, cz + CLEANUP_RADIUS
        y1, y2 = base_y - CLEANUP_BELOW, base_y + CLEANUP_ABOVE

        for wood in TRAPDOOR_WOODS:
            yield (
                f"execute in {dimension} run fill {x1} {y1} {z1} {x2} {y2} {z2} "
                f"minecraft:{wood}_trapdoor[open=false] replace minecraft:{wood}_trapdoor[open=true]"
            )

        # The mask limits each layer to blocks directly under something solid.
        # Filling top-down lets the second layer follow the first one.
        yield _move_actor(location)
        yield f"//gmask {UNDER_SOLID_MASK}"
        for y in (base_y - 1, base_y - 2):
            yield f"//pos1 {x1},{y},{z1}"
            yield f"//pos2 {x2},{y},{z2}"
            yield f"//replace {FILLABLE_BLOCKS} minecraft:dirt"
        yield "//gmask"

    def _run(self, command: str) -> str | None:
        try:
            return self._adapter.send(GameCommand(command=command))
        except Exception as exc:  # noqa: BLE001 - transport errors surface as an unavailable host.
            raise ResourceUnavailable(f"World command failed ({command}): {type(exc).__name__}: {exc}") from exc


@dataclass(slots=True)
class InMemoryWorldEditor:
    """Records placement calls; ``missing`` lists structure files to reject."""

    missing: set[str] = field(default_factory=set)
    pasted: list[tuple[str, WorldLocation]] = field(default_factory=list)
    cleaned: list[WorldLocation] = field(default_factory=list)

    def paste_structure(self, structure_file: str, location: WorldLocation) -> None:
        if structure_file in self.missing:
            raise ResourceUnavailable(f"Schematic not found: {structure_file}")
        self.pasted.append((structure_file, location))

    def clear_vegetation_and_reinforce(self, location: WorldLocation) -> None:
        self.cleaned.append(location)
