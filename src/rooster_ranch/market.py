"""Community market: RC-for-goods exchange against the economy ledger."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from uuid import UUID

from rooster_ranch.adapters.inventory import InventoryGateway
from rooster_ranch.economy import EconomyLedger
from rooster_ranch.models import ItemStack, MarketListing, TradeDirection

# Players pay these to obtain one unit.
DEFAULT_BUY_PRICES: dict[str, float] = {
    "wheat_seeds": 2.0,
    "carrot": 3.0,
    "potato": 3.0,
    "cow_spawn_egg": 50.0,
    "chicken_spawn_egg": 20.0,
    "sheep_spawn_egg": 30.0,
    "milk_bucket": 5.0,
    "bread": 4.0,
}

# Players receive these for one unit.
DEFAULT_SELL_PRICES: dict[str, float] = {
    "wheat": 1.0,
    "carrot": 1.5,
    "potato": 1.5,
    "egg": 0.5,
    "beef": 2.0,
}


class MarketTransactionEngine:
    """Executes single-unit trades.

    A buy debits RC before granting the good; a sell removes the good before
    crediting RC. Neither side is applied when the first step fails.
    """

    def __init__(
        self,
        ledger: EconomyLedger,
        inventory: InventoryGateway,
        *,
        buy_prices: Mapping[str, float] | None = None,
        sell_prices: Mapping[str, float] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._ledger = ledger
        self._inventory = inventory
        self._buy_prices = _validated(DEFAULT_BUY_PRICES if buy_prices is None else buy_prices)
        self._sell_prices = _validated(DEFAULT_SELL_PRICES if sell_prices is None else sell_prices)
        self._logger = logger or logging.getLogger("rooster_ranch.market")

    def buy_price(self, good: str) -> float | None:
        return self._buy_prices.get(good)

    def sell_price(self, good: str) -> float | None:
        return self._sell_prices.get(good)

    def listings(self, direction: TradeDirection | None = None) -> list[MarketListing]:
        listings: list[MarketListing] = []
        if direction in (None, TradeDirection.BUY):
            listings.extend(MarketListing(good, TradeDirection.BUY, price) for good, price in self._buy_prices.items())
        if direction in (None, TradeDirection.SELL):
            listings.extend(
                MarketListing(good, TradeDirection.SELL, price) for good, price in self._sell_prices.items()
            )
        return listings

    def buy(self, owner: UUID, good: str) -> bool:
        price = self._buy_prices.get(good)
        if price is None:
            self._logger.info("buy_rejected", extra={"owner": str(owner), "good": good, "reason": "not_listed"})
            return False
        if self._ledger.get_balance(owner) < price or not self._ledger.withdraw(owner, price):
            self._logger.info(
                "buy_rejected",
                extra={"owner": str(owner), "good": good, "reason": "insufficient_funds", "price": price},
            )
            return False

        self._inventory.grant_items(owner, [ItemStack(good, 1)])
        self._logger.info("buy_completed", extra={"owner": str(owner), "good": good, "price": price})
        return True

    def sell(self, owner: UUID, good: str) -> bool:
        price = self._sell_prices.get(good)
        if price is None:
            self._logger.info("sell_rejected", extra={"owner": str(owner), "good": good, "reason": "not_listed"})
            return False
        if self._inventory.count_units(owner, good) <= 0 or not self._inventory.remove_one_unit(owner, good):
            self._logger.info(
                "sell_rejected",
                extra={"owner": str(owner), "good": good, "reason": "insufficient_inventory"},
            )
            return False

        self._ledger.deposit(owner, price)
        self._logger.info("sell_completed", extra={"owner": str(owner), "good": good, "price": price})
        return True


def _validated(prices: Mapping[str, float]) -> dict[str, float]:
    catalog = dict(prices)
    for good, price in catalog.items():
        if price <= 0:
            raise ValueError(f"Market price for {good} must be positive, got {price}")
    return catalog
