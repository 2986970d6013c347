from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

GAUGE_MIN = 0.0
GAUGE_MAX = 100.0


def clamp_gauge(value: float) -> float:
    return max(GAUGE_MIN, min(GAUGE_MAX, float(value)))


@dataclass(frozen=True, slots=True)
class WorldLocation:
    """A point in a named world."""

    world: str
    x: float
    y: float
    z: float

    def offset(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> WorldLocation:
        return WorldLocation(self.world, self.x + dx, self.y + dy, self.z + dz)

    def block_coords(self) -> tuple[int, int, int]:
        return int(self.x // 1), int(self.y // 1), int(self.z // 1)


@dataclass(frozen=True, slots=True)
class ItemStack:
    good: str
    amount: int = 1
    # Item component suffix for `give`, e.g. `[written_book_content={...}]`.
    components: str = ""


class TradeDirection(str, Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True, slots=True)
class MarketListing:
    good: str
    direction: TradeDirection
    price: float


@dataclass(frozen=True, slots=True)
class ProfessionKit:
    """Display data and starter goods for one profession."""

    display_name: str
    icon: str
    starter_kit: tuple[ItemStack, ...] = ()


class FarmIsland:
    """A player's farm island.

    The three gauges are clamped to [0, 100] and the weed count to >= 0 on every
    assignment. The owner is implicitly trusted and is never stored in
    ``trusted``.
    """

    __slots__ = ("owner", "center", "trusted", "_weed_count", "_upkeep", "_crop_health", "_animal_health")

    def __init__(
        self,
        owner: UUID,
        center: WorldLocation,
        *,
        weed_count: int = 0,
        upkeep: float = GAUGE_MAX,
        crop_health: float = GAUGE_MAX,
        animal_health: float = GAUGE_MAX,
        trusted: set[UUID] | None = None,
    ) -> None:
        self.owner = owner
        self.center = center
        self.weed_count = weed_count
        self.upkeep = upkeep
        self.crop_health = crop_health
        self.animal_health = animal_health
        self.trusted: set[UUID] = {uid for uid in (trusted or set()) if uid != owner}

    @property
    def weed_count(self) -> int:
        return self._weed_count

    @weed_count.setter
    def weed_count(self, value: int) -> None:
        self._weed_count = max(0, int(value))

    @property
    def upkeep(self) -> float:
        return self._upkeep

    @upkeep.setter
    def upkeep(self, value: float) -> None:
        self._upkeep = clamp_gauge(value)

    @property
    def crop_health(self) -> float:
        return self._crop_health

    @crop_health.setter
    def crop_health(self, value: float) -> None:
        self._crop_health = clamp_gauge(value)

    @property
    def animal_health(self) -> float:
        return self._animal_health

    @animal_health.setter
    def animal_health(self, value: float) -> None:
        self._animal_health = clamp_gauge(value)

    def add_weeds(self, amount: int) -> None:
        self.weed_count = self._weed_count + amount

    def tick_day(self, weed_growth: int) -> None:
        """Apply one day of wear; ``weed_growth`` is the day's weed roll (1-3)."""
        self.add_weeds(weed_growth)
        self.upkeep = self._upkeep - 1.0 - self._weed_count * 0.05
        self.crop_health = self._crop_health - 0.5 - self._weed_count * 0.02
        self.animal_health = self._animal_health - 0.5 - self._weed_count * 0.02

    def __repr__(self) -> str:
        return (
            f"FarmIsland(owner={self.owner!s}, center={self.center!r}, weed_count={self._weed_count}, "
            f"upkeep={self._upkeep:.2f}, crop_health={self._crop_health:.2f}, "
            f"animal_health={self._animal_health:.2f}, trusted={len(self.trusted)})"
        )
