from __future__ import annotations

from uuid import uuid4

import pytest

from rooster_ranch.models import WorldLocation
from rooster_ranch.scoreboard import build_farm_sidebar, build_market_sidebar, day_and_season


@pytest.mark.parametrize(
    ("full_time", "expected"),
    [(0, (1, "Spring")), (23_999, (1, "Spring")), (24_000 * 20, (21, "Summer")), (24_000 * 80, (81, "Spring"))],
)
def test_day_and_season(full_time: int, expected: tuple[int, str]) -> None:
    assert day_and_season(full_time) == expected


def test_farm_sidebar_lines(make_context) -> None:
    context = make_context()
    farm = context.farms.create_farm(uuid4())
    farm.weed_count = 4

    sidebar = build_farm_sidebar(farm, 57.25, 24_000 * 3)

    assert sidebar.title == "Rooster Farm"
    assert sidebar.lines == [
        "Day: 4",
        "Season: Spring",
        "Upkeep: 100%",
        "Crops: 100%",
        "Animals: 100%",
        "Weeds: 4",
        "Balance: 57.2 RC",
    ]


def test_market_sidebar_lines() -> None:
    sidebar = build_market_sidebar("Steve", WorldLocation("rooster_market", 16.5, 94.0, -5.5), 3)

    assert sidebar.lines == ["Player: Steve", "Pos: 16, 94, -6", "Balance: 3.0 RC"]


def test_refresh_pushes_views_derived_from_current_state(make_context) -> None:
    context = make_context()
    pushed = []
    context.sidebar_sink = lambda owner, sidebar: pushed.append((owner, sidebar))
    farmer, shopper, wanderer = uuid4(), uuid4(), uuid4()
    for owner, name in ((farmer, "Steve"), (shopper, "Alex"), (wanderer, "Sam")):
        context.hooks.on_account_join(owner, name)
    context.farms.create_farm(farmer)
    context.players.positions[shopper] = WorldLocation("rooster_market", 0, 94, 0)

    assert context.refresh_sidebars() == 2
    titles = {owner: sidebar.title for owner, sidebar in pushed}
    assert titles == {farmer: "Rooster Farm", shopper: "Rooster Market"}

    context.advance_day()
    pushed.clear()
    context.refresh_sidebars()
    farm_lines = dict(pushed)[farmer].lines
    assert farm_lines[0] == "Day: 2"
    assert farm_lines[5] == "Weeds: 2"
