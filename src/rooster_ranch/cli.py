"""Command handlers behind ``/farm``, ``/profession`` and the market vendor.

Handlers translate a parsed command into core operations and report the outcome
as a ``CommandResult``; the host decides how to show the messages.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from rooster_ranch import access
from rooster_ranch.adapters.inventory import written_book
from rooster_ranch.context import RanchContext
from rooster_ranch.models import TradeDirection, WorldLocation


class CommandFailure(str, Enum):
    FARM_MISSING = "farm-missing"
    ALREADY_EXISTS = "already-exists"
    TARGET_NOT_FOUND = "target-not-found"
    NOT_TRUSTED = "not-trusted"
    USAGE = "usage"
    UNAVAILABLE = "unavailable"
    INSUFFICIENT_FUNDS = "insufficient-funds"
    INSUFFICIENT_INVENTORY = "insufficient-inventory"
    NOT_LISTED = "not-listed"


@dataclass(slots=True)
class CommandResult:
    ok: bool
    messages: list[str] = field(default_factory=list)
    failure: CommandFailure | None = None

    @classmethod
    def success(cls, *messages: str) -> CommandResult:
        return cls(ok=True, messages=list(messages))

    @classmethod
    def fail(cls, failure: CommandFailure, *messages: str) -> CommandResult:
        return cls(ok=False, messages=list(messages), failure=failure)


FARM_USAGE = "Usage: /farm <create|home|info|trust|untrust|visit|market|help>"
NO_FARM = "You don't have a farm yet. Use /farm create."

HANDBOOK_PAGES = (
    "Welcome to your farm!\n\nUse /farm trust to allow friends to help.\n"
    "Weeds spawn each day. Keep them under control to maintain crop and animal health.",
    "Seasons & Days:\nThe day counter and season are shown on your scoreboard. "
    "Each season lasts 20 days and affects crop growth.",
    "Marketplace:\nVisit the market island to buy seeds, animals and tools with your RC balance. "
    "Sell extra produce to earn more coins!",
    "Professions:\nYour profession gives you a starter kit. Try different roles to diversify your farm.",
)
FARMING_HANDBOOK = written_book("Farming Handbook", "Rooster Ranch", HANDBOOK_PAGES)

HELP_LINES = (
    "--- Rooster Ranch Commands ---",
    "/farm create - Create your own farm island.",
    "/farm home - Teleport to your farm.",
    "/farm info - View your farm's stats.",
    "/farm trust <player> - Allow someone to build on your farm.",
    "/farm untrust <player> - Revoke someone's access.",
    "/farm visit <player> - Visit another player's farm.",
    "/farm market - Visit the market island.",
    "/profession <name> - Choose your profession.",
)


class FarmCommandHandler:
    """Handles ``/farm`` subcommands for one acting account."""

    def __init__(self, context: RanchContext) -> None:
        self._context = context

    def handle(self, actor: UUID, args: Sequence[str]) -> CommandResult:
        if not args:
            return CommandResult.fail(CommandFailure.USAGE, FARM_USAGE)

        subcommand, rest = args[0].lower(), list(args[1:])
        if subcommand == "create":
            return self.create(actor)
        if subcommand == "home":
            return self.home(actor)
        if subcommand == "info":
            return self.info(actor)
        if subcommand in ("trust", "untrust", "visit"):
            if not rest:
                return CommandResult.fail(CommandFailure.USAGE, f"Usage: /farm {subcommand} <player>")
            return getattr(self, subcommand)(actor, rest[0])
        if subcommand == "market":
            return self.market(actor)
        if subcommand == "help":
            return CommandResult.success(*HELP_LINES)
        return CommandResult.fail(CommandFailure.USAGE, "Unknown subcommand. Use /farm help for a list of commands.")

    def create(self, actor: UUID) -> CommandResult:
        farms = self._context.farms
        if farms.get_farm(actor) is not None:
            return CommandResult.fail(
                CommandFailure.ALREADY_EXISTS, "You already have a farm! Use /farm home to go to it."
            )

        farm = farms.create_farm(actor)
        if farm is None:
            return CommandResult.fail(CommandFailure.UNAVAILABLE, "Your farm could not be created right now.")

        self._context.inventory.grant_items(actor, [FARMING_HANDBOOK])
        self._context.players.teleport(actor, farms.home_location(farm))
        x, y, z = farm.center.block_coords()
        messages = [f"Your farm has been created at {x}, {y}, {z}."]
        if self._context.professions.get_profession(actor) is None:
            messages.append(ProfessionCommandHandler(self._context).menu_prompt())
        return CommandResult.success(*messages)

    def home(self, actor: UUID) -> CommandResult:
        farm = self._context.farms.get_farm(actor)
        if farm is None:
            return CommandResult.fail(CommandFailure.FARM_MISSING, NO_FARM)
        self._context.players.teleport(actor, self._context.farms.home_location(farm))
        return CommandResult.success("Teleported to your farm.")

    def info(self, actor: UUID) -> CommandResult:
        farm = self._context.farms.get_farm(actor)
        if farm is None:
            return CommandResult.fail(CommandFailure.FARM_MISSING, NO_FARM)
        x, y, z = farm.center.block_coords()
        return CommandResult.success(
            "--- Farm Info ---",
            f"Location: {x}, {y}, {z}",
            f"Upkeep: {farm.upkeep:.0f}%",
            f"Crop Health: {farm.crop_health:.0f}%",
            f"Animal Health: {farm.animal_health:.0f}%",
            f"Weeds: {farm.weed_count}",
        )

    def trust(self, actor: UUID, target: str) -> CommandResult:
        farm = self._context.farms.get_farm(actor)
        if farm is None:
            return CommandResult.fail(CommandFailure.FARM_MISSING, NO_FARM)
        target_id = self._context.accounts.resolve(target, online_only=True)
        if target_id is None:
            return CommandResult.fail(CommandFailure.TARGET_NOT_FOUND, "That player is not online.")
        if target_id == actor:
            return CommandResult.fail(CommandFailure.USAGE, "You already have full access to your own farm.")
        access.trust(farm, target_id)
        return CommandResult.success(f"You have trusted {self._context.accounts.display_name(target_id)} on your farm.")

    def untrust(self, actor: UUID, target: str) -> CommandResult:
        farm = self._context.farms.get_farm(actor)
        if farm is None:
            return CommandResult.fail(CommandFailure.FARM_MISSING, NO_FARM)
        target_id = self._context.accounts.resolve(target)
        if target_id is None:
            return CommandResult.fail(CommandFailure.TARGET_NOT_FOUND, "That player could not be found.")
        access.untrust(farm, target_id)
        return CommandResult.success(
            f"You have revoked {self._context.accounts.display_name(target_id)}'s access to your farm."
        )

    def visit(self, actor: UUID, target: str) -> CommandResult:
        target_id = self._context.accounts.resolve(target, online_only=True)
        if target_id is None:
            return CommandResult.fail(CommandFailure.TARGET_NOT_FOUND, "That player is not online.")
        farm = self._context.farms.get_farm(target_id)
        if farm is None:
            return CommandResult.fail(CommandFailure.FARM_MISSING, "That player does not have a farm.")
        self._context.players.teleport(actor, self._context.farms.home_location(farm))
        return CommandResult.success(f"Teleported to {self._context.accounts.display_name(target_id)}'s farm.")

    def market(self, actor: UUID) -> CommandResult:
        self._context.players.teleport(actor, self._context.market_spawn)
        return CommandResult.success("Teleported to the market island.")

    def check_block_mutation(self, actor: UUID, location: WorldLocation) -> CommandResult:
        """Outcome for a break/place/interact attempt reported by the host."""
        if self._context.hooks.on_block_mutation_attempt(location, actor):
            return CommandResult.success()
        return CommandResult.fail(CommandFailure.NOT_TRUSTED, "You are not trusted on this farm!")


class ProfessionCommandHandler:
    """Handles ``/profession``: listing the choices and picking one."""

    def __init__(self, context: RanchContext) -> None:
        self._context = context

    def menu(self) -> CommandResult:
        lines = ["--- Select Profession ---"]
        for profession_id, kit in self._context.professions.professions().items():
            goods = ", ".join(f"{stack.amount}x {stack.good}" for stack in kit.starter_kit)
            lines.append(f"{kit.display_name} ({profession_id.lower()}) [{kit.icon}]: {goods}")
        return CommandResult.success(*lines)

    def menu_prompt(self) -> str:
        names = ", ".join(kit.display_name for kit in self._context.professions.professions().values())
        return f"Choose a profession with /profession <name>: {names}."

    def choose(self, actor: UUID, name: str) -> CommandResult:
        profession_id = self._context.professions.resolve(name)
        if profession_id is None:
            return CommandResult.fail(CommandFailure.USAGE, f"Unknown profession '{name}'.", self.menu_prompt())
        self._context.professions.set_profession(actor, profession_id)
        kit = self._context.professions.kit_for(profession_id)
        return CommandResult.success(f"You are now a {kit.display_name}!")


class MarketCommandHandler:
    """Vendor interactions: one click buys or sells a single unit."""

    def __init__(self, context: RanchContext) -> None:
        self._context = context

    def listings(self, direction: TradeDirection | None = None) -> CommandResult:
        lines = []
        for listing in self._context.market.listings(direction):
            verb = "Price" if listing.direction is TradeDirection.BUY else "Sell"
            lines.append(f"[{listing.direction.value}] {listing.good} - {verb}: {listing.price} RC")
        return CommandResult.success(*lines)

    def buy(self, actor: UUID, good: str) -> CommandResult:
        market = self._context.market
        price = market.buy_price(good)
        if price is None:
            return CommandResult.fail(CommandFailure.NOT_LISTED, f"{good} is not for sale.")
        if not market.buy(actor, good):
            return CommandResult.fail(CommandFailure.INSUFFICIENT_FUNDS, "You do not have enough RC to buy this.")
        return CommandResult.success(f"Purchased {good} for {price} RC.")

    def sell(self, actor: UUID, good: str) -> CommandResult:
        market = self._context.market
        price = market.sell_price(good)
        if price is None:
            return CommandResult.fail(CommandFailure.NOT_LISTED, f"The market does not buy {good}.")
        if not market.sell(actor, good):
            return CommandResult.fail(CommandFailure.INSUFFICIENT_INVENTORY, "You have none of that item to sell.")
        return CommandResult.success(f"Sold 1 {good} for {price} RC.")
