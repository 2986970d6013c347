"""Explicit composition of the ranch components.

Every command handler, hook and timer receives a ``RanchContext`` rather than
reaching for a process-wide instance.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID

from rooster_ranch.access import RanchHooks
from rooster_ranch.accounts import AccountDirectory
from rooster_ranch.adapters import (
    CommandInventoryGateway,
    CommandPlayerGateway,
    CommandWorldEditor,
    GameCommandAdapter,
    InventoryGateway,
    PlayerGateway,
    WorldEditor,
)
from rooster_ranch.config import Settings
from rooster_ranch.economy import EconomyLedger
from rooster_ranch.errors import ResourceUnavailable, StorageFailure
from rooster_ranch.farms import FarmRegistry
from rooster_ranch.market import MarketTransactionEngine
from rooster_ranch.models import WorldLocation
from rooster_ranch.persistence import DocumentStore, document_stores
from rooster_ranch.professions import ProfessionRegistry
from rooster_ranch.scheduler import DegradationScheduler, RandomSource, RanchScheduler
from rooster_ranch.scoreboard import TICKS_PER_DAY, Sidebar, build_farm_sidebar, build_market_sidebar

logger = logging.getLogger("rooster_ranch.context")

SidebarSink = Callable[[UUID, Sidebar], None]


def _log_sidebar(owner: UUID, sidebar: Sidebar) -> None:
    logger.debug("sidebar_refreshed", extra={"owner": str(owner), "title": sidebar.title, "lines": sidebar.lines})


@dataclass(slots=True)
class RanchContext:
    ledger: EconomyLedger
    farms: FarmRegistry
    professions: ProfessionRegistry
    market: MarketTransactionEngine
    accounts: AccountDirectory
    hooks: RanchHooks
    degradation: DegradationScheduler
    inventory: InventoryGateway
    players: PlayerGateway
    world_editor: WorldEditor
    stores: dict[str, DocumentStore]
    market_world: str = "rooster_market"
    market_structure: str = "market.schem"
    sidebar_sink: SidebarSink = field(default=_log_sidebar)
    # Documents that failed to load; ``save`` skips them.
    unreadable: set[str] = field(default_factory=set)

    @property
    def market_spawn(self) -> WorldLocation:
        # On the walkway next to the vendor, one block above the path.
        return WorldLocation(self.market_world, 16.5, 94.0, -5.5)

    def load(self) -> None:
        """Load every component.

        A document that fails to load leaves its component empty and is marked
        unreadable, so later saves leave the file on disk alone until it is fixed.
        """
        self.unreadable.clear()
        for name, component in self._persistent_components():
            store = self.stores.get(name)
            if store is None:
                continue
            try:
                document = store.load()
            except StorageFailure as exc:
                logger.error("document_load_failed", extra={"document": name, "reason": str(exc)})
                self.unreadable.add(name)
                continue
            loaded = component.load_document(document)
            logger.info("document_loaded", extra={"document": name, "entries": loaded})

    def save(self) -> bool:
        """Write every component's full state; returns False if any document was not written."""
        ok = True
        for name, component in self._persistent_components():
            store = self.stores.get(name)
            if store is None:
                continue
            if name in self.unreadable:
                logger.warning("document_save_skipped", extra={"document": name, "reason": "unreadable on load"})
                ok = False
                continue
            try:
                store.save(component.to_document())
            except StorageFailure as exc:
                logger.error("document_save_failed", extra={"document": name, "reason": str(exc)})
                ok = False
        return ok

    def checkpoint(self) -> bool:
        return self.save()

    def welcome(self, owner: UUID, name: str | None = None) -> list[str]:
        """Mark ``owner`` online and send them the join greeting."""
        lines = self.hooks.on_account_join(owner, name)
        for line in lines:
            self.players.send_message(owner, line)
        return lines

    def prepare_market(self) -> bool:
        """Paste the market island at the market world origin."""
        origin = WorldLocation(self.market_world, 0.0, 100.0, 0.0)
        try:
            self.world_editor.paste_structure(self.market_structure, origin)
        except ResourceUnavailable as exc:
            logger.error("market_paste_failed", extra={"reason": str(exc)})
            return False
        return True

    def advance_day(self) -> int:
        return self.degradation.run_day()

    def full_time(self) -> int:
        return self.degradation.days_elapsed * TICKS_PER_DAY

    def refresh_sidebars(self) -> int:
        """Push a freshly computed sidebar to every online account; returns how many."""
        pushed = 0
        for owner in self.accounts.online():
            location = self.players.location_of(owner)
            balance = self.ledger.get_balance(owner)
            if location is not None and location.world == self.market_world:
                sidebar = build_market_sidebar(self.accounts.display_name(owner), location, balance)
            else:
                farm = self.farms.get_farm(owner)
                if farm is None or (location is not None and location.world != self.farms.farm_world):
                    continue
                sidebar = build_farm_sidebar(farm, balance, self.full_time())
            self.sidebar_sink(owner, sidebar)
            pushed += 1
        return pushed

    def build_scheduler(self, *, day_interval_seconds: float, refresh_interval_seconds: float) -> RanchScheduler:
        return RanchScheduler(
            day_action=self.advance_day,
            refresh_action=self.refresh_sidebars,
            day_interval_seconds=day_interval_seconds,
            refresh_interval_seconds=refresh_interval_seconds,
        )

    def _persistent_components(self):
        return (("economy", self.ledger), ("farms", self.farms), ("professions", self.professions))


def build_context(
    settings: Settings,
    adapter: GameCommandAdapter,
    *,
    inventory: InventoryGateway | None = None,
    players: PlayerGateway | None = None,
    world_editor: WorldEditor | None = None,
    stores: dict[str, DocumentStore] | None = None,
    rng: RandomSource | None = None,
) -> RanchContext:
    """Wire the components from settings; collaborators default to command-backed ones."""
    inventory = inventory or CommandInventoryGateway(adapter)
    players = players or CommandPlayerGateway(adapter)
    world_editor = world_editor or CommandWorldEditor(adapter, settings.schematics_dir)

    ledger = EconomyLedger()
    farms = FarmRegistry(
        ledger,
        world_editor,
        farm_world=settings.farm_world,
        spacing=settings.island_spacing,
        radius=settings.protection_radius,
        island_y=settings.island_y,
        signing_bonus=settings.signing_bonus,
        farm_structure=settings.farm_structure,
    )
    professions = ProfessionRegistry(inventory)
    accounts = AccountDirectory()
    return RanchContext(
        ledger=ledger,
        farms=farms,
        professions=professions,
        market=MarketTransactionEngine(ledger, inventory),
        accounts=accounts,
        hooks=RanchHooks(farms, professions, accounts),
        degradation=DegradationScheduler(farms, rng=rng or random.Random()),
        inventory=inventory,
        players=players,
        world_editor=world_editor,
        stores=document_stores(settings.data_dir) if stores is None else stores,
        market_world=settings.market_world,
        market_structure=settings.market_structure,
    )
