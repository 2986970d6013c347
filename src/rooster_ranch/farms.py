"""Farm island registry: creation, spatial allocation and location lookup."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationError

from rooster_ranch.adapters.world_edit import WorldEditor
from rooster_ranch.economy import EconomyLedger
from rooster_ranch.errors import MalformedRecord, ResourceUnavailable
from rooster_ranch.models import GAUGE_MAX, FarmIsland, WorldLocation
from rooster_ranch.persistence import parse_owner_id

DEFAULT_FARM_WORLD = "rooster_farms"
DEFAULT_SPACING = 200.0
DEFAULT_RADIUS = 80.0
DEFAULT_ISLAND_Y = 100.0
DEFAULT_SIGNING_BONUS = 50.0
DEFAULT_FARM_STRUCTURE = "rooster_farm_good.schem"
# Spawn point inside the barn of the standard island, relative to the paste origin.
HOME_OFFSET = (14.5, -9.0, -14.5)


class FarmRecord(BaseModel):
    """Persisted shape of one farm entry."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    world: str = DEFAULT_FARM_WORLD
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    weed: int = 0
    upkeep: float = GAUGE_MAX
    crop: float = GAUGE_MAX
    animal: float = GAUGE_MAX
    trusted: list[Any] = []


class FarmRegistry:
    """Owns every farm island and the index used to place new ones.

    Island ``n`` is centered at ``x = n * spacing`` in the farm world. With
    ``spacing >= 2 * radius`` the protected squares of two islands never
    overlap.
    """

    def __init__(
        self,
        ledger: EconomyLedger,
        world_editor: WorldEditor,
        *,
        farm_world: str = DEFAULT_FARM_WORLD,
        spacing: float = DEFAULT_SPACING,
        radius: float = DEFAULT_RADIUS,
        island_y: float = DEFAULT_ISLAND_Y,
        signing_bonus: float = DEFAULT_SIGNING_BONUS,
        farm_structure: str = DEFAULT_FARM_STRUCTURE,
        logger: logging.Logger | None = None,
    ) -> None:
        if spacing < 2 * radius:
            raise ValueError(f"spacing {spacing} is smaller than twice the protection radius {radius}")
        self._ledger = ledger
        self._world_editor = world_editor
        self._farm_world = farm_world
        self._spacing = spacing
        self._radius = radius
        self._island_y = island_y
        self._signing_bonus = signing_bonus
        self._farm_structure = farm_structure
        self._logger = logger or logging.getLogger("rooster_ranch.farms")

        self._farms: dict[UUID, FarmIsland] = {}
        self._next_island_index = 0

    @property
    def farm_world(self) -> str:
        return self._farm_world

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def next_island_index(self) -> int:
        return self._next_island_index

    def __len__(self) -> int:
        return len(self._farms)

    def farms(self) -> Iterator[FarmIsland]:
        return iter(list(self._farms.values()))

    def island_center(self, index: int) -> WorldLocation:
        return WorldLocation(self._farm_world, index * self._spacing, self._island_y, 0.0)

    def create_farm(self, owner: UUID) -> FarmIsland | None:
        """Create ``owner``'s island, or return the one they already have.

        Returns ``None`` when the island structure could not be placed; in that
        case no index is consumed and no bonus is paid.
        """
        existing = self._farms.get(owner)
        if existing is not None:
            return existing

        index = self._next_island_index
        center = self.island_center(index)
        try:
            self._world_editor.paste_structure(self._farm_structure, center)
            self._world_editor.clear_vegetation_and_reinforce(center)
        except ResourceUnavailable as exc:
            self._logger.error(
                "farm_creation_aborted",
                extra={"owner": str(owner), "island_index": index, "reason": str(exc)},
            )
            return None

        farm = FarmIsland(owner, center)
        self._farms[owner] = farm
        self._next_island_index = index + 1
        self._ledger.deposit(owner, self._signing_bonus)
        self._logger.info(
            "farm_created",
            extra={"owner": str(owner), "island_index": index, "x": center.x, "z": center.z},
        )
        return farm

    def get_farm(self, owner: UUID) -> FarmIsland | None:
        return self._farms.get(owner)

    def find_farm_at_location(self, location: WorldLocation) -> FarmIsland | None:
        if location.world != self._farm_world:
            return None
        for farm in self._farms.values():
            center = farm.center
            if (
                center.x - self._radius <= location.x <= center.x + self._radius
                and center.z - self._radius <= location.z <= center.z + self._radius
            ):
                return farm
        return None

    def home_location(self, farm: FarmIsland) -> WorldLocation:
        return farm.center.offset(*HOME_OFFSET)

    def set_stats(
        self,
        owner: UUID,
        *,
        weed_count: int | None = None,
        upkeep: float | None = None,
        crop_health: float | None = None,
        animal_health: float | None = None,
    ) -> FarmIsland | None:
        """Overwrite selected gauges (clamped); returns ``None`` for an unknown owner."""
        farm = self._farms.get(owner)
        if farm is None:
            return None
        if weed_count is not None:
            farm.weed_count = weed_count
        if upkeep is not None:
            farm.upkeep = upkeep
        if crop_health is not None:
            farm.crop_health = crop_health
        if animal_health is not None:
            farm.animal_health = animal_health
        return farm

    def load_document(self, document: dict[str, Any]) -> int:
        """Replace registry state from a persisted document; returns farms loaded."""
        self._farms.clear()
        raw_farms = document.get("farms") or {}
        if not isinstance(raw_farms, dict):
            self._logger.warning("farm_section_skipped", extra={"reason": "farms must be a mapping"})
            raw_farms = {}

        for key, raw in raw_farms.items():
            try:
                farm = self._decode_farm(key, raw)
            except MalformedRecord as exc:
                self._logger.warning("farm_entry_skipped", extra={"key": exc.key, "reason": exc.reason})
                continue
            self._farms[farm.owner] = farm

        stored_index = document.get("nextIslandIndex", 0)
        if isinstance(stored_index, bool) or not isinstance(stored_index, int) or stored_index < 0:
            self._logger.warning("island_index_reset", extra={"stored": repr(stored_index)})
            stored_index = 0
        self._next_island_index = max(stored_index, self._first_free_index())
        if self._next_island_index != stored_index:
            self._logger.warning(
                "island_index_adjusted",
                extra={"stored": stored_index, "adjusted": self._next_island_index},
            )
        return len(self._farms)

    def to_document(self) -> dict[str, Any]:
        return {
            "nextIslandIndex": self._next_island_index,
            "farms": {
                str(owner): {
                    "world": farm.center.world,
                    "x": farm.center.x,
                    "y": farm.center.y,
                    "z": farm.center.z,
                    "weed": farm.weed_count,
                    "upkeep": farm.upkeep,
                    "crop": farm.crop_health,
                    "animal": farm.animal_health,
                    "trusted": sorted(str(uid) for uid in farm.trusted),
                }
                for owner, farm in self._farms.items()
            },
        }

    def _decode_farm(self, key: str, raw: Any) -> FarmIsland:
        owner = parse_owner_id(key)
        if not isinstance(raw, dict):
            raise MalformedRecord(key, "farm entry must be a mapping")
        try:
            record = FarmRecord.model_validate(raw)
        except ValidationError as exc:
            raise MalformedRecord(key, f"{exc.error_count()} invalid field(s)") from exc

        trusted: set[UUID] = set()
        for value in record.trusted:
            try:
                trusted.add(parse_owner_id(value))
            except MalformedRecord:
                self._logger.warning("trusted_entry_skipped", extra={"key": key, "value": repr(value)})

        return FarmIsland(
            owner,
            WorldLocation(record.world, record.x, record.y, record.z),
            weed_count=record.weed,
            upkeep=record.upkeep,
            crop_health=record.crop,
            animal_health=record.animal,
            trusted=trusted,
        )

    def _first_free_index(self) -> int:
        indices = [
            round(farm.center.x / self._spacing)
            for farm in self._farms.values()
            if farm.center.world == self._farm_world
        ]
        return max(indices) + 1 if indices else 0
