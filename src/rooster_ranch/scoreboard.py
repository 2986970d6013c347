"""Sidebar views recomputed from farm and ledger state on every refresh."""

from __future__ import annotations

from dataclasses import dataclass, field

from rooster_ranch.models import FarmIsland, WorldLocation

TICKS_PER_DAY = 24000
DAYS_PER_SEASON = 20
SEASONS = ("Spring", "Summer", "Autumn", "Winter")


@dataclass(slots=True)
class Sidebar:
    title: str
    lines: list[str] = field(default_factory=list)


def day_and_season(full_time: int) -> tuple[int, str]:
    """Map a world's full tick count to a 1-based day number and its season."""
    day = full_time // TICKS_PER_DAY + 1
    season = SEASONS[((day - 1) // DAYS_PER_SEASON) % len(SEASONS)]
    return day, season


def build_farm_sidebar(farm: FarmIsland, balance: float, full_time: int) -> Sidebar:
    day, season = day_and_season(full_time)
    return Sidebar(
        title="Rooster Farm",
        lines=[
            f"Day: {day}",
            f"Season: {season}",
            f"Upkeep: {farm.upkeep:.0f}%",
            f"Crops: {farm.crop_health:.0f}%",
            f"Animals: {farm.animal_health:.0f}%",
            f"Weeds: {farm.weed_count}",
            f"Balance: {balance:.1f} RC",
        ],
    )


def build_market_sidebar(player_name: str, location: WorldLocation, balance: float) -> Sidebar:
    x, y, z = location.block_coords()
    return Sidebar(
        title="Rooster Market",
        lines=[f"Player: {player_name}", f"Pos: {x}, {y}, {z}", f"Balance: {balance:.1f} RC"],
    )
