"""Trust rules for farm islands and the hooks the host calls on world events."""

from __future__ import annotations

import logging
from uuid import UUID

from rooster_ranch.accounts import AccountDirectory
from rooster_ranch.farms import FarmRegistry
from rooster_ranch.models import FarmIsland, WorldLocation
from rooster_ranch.professions import ProfessionRegistry

WELCOME_MESSAGE = "Welcome to Rooster Ranch!"
PROFESSION_PROMPT = "Once your farm is created, use /profession to choose a role."


def is_trusted(farm: FarmIsland, owner: UUID) -> bool:
    return owner == farm.owner or owner in farm.trusted


def trust(farm: FarmIsland, owner: UUID) -> None:
    if owner != farm.owner:
        farm.trusted.add(owner)


def untrust(farm: FarmIsland, owner: UUID) -> None:
    farm.trusted.discard(owner)


class RanchHooks:
    """Named entry points the host invokes for world and session events.

    Block breaks, block placements and block interactions all map to
    ``on_block_mutation_attempt``; the host cancels the event when it returns
    False.
    """

    def __init__(
        self,
        farms: FarmRegistry,
        professions: ProfessionRegistry,
        accounts: AccountDirectory,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._farms = farms
        self._professions = professions
        self._accounts = accounts
        self._logger = logger or logging.getLogger("rooster_ranch.access")

    def on_block_mutation_attempt(self, location: WorldLocation, actor: UUID) -> bool:
        farm = self._farms.find_farm_at_location(location)
        if farm is None or is_trusted(farm, actor):
            return True
        self._logger.info(
            "block_mutation_denied",
            extra={"actor": str(actor), "farm_owner": str(farm.owner), "x": location.x, "z": location.z},
        )
        return False

    def on_account_join(self, owner: UUID, name: str | None = None) -> list[str]:
        """Register the account as online and return the greeting lines to show."""
        self._accounts.mark_online(owner, name)
        if self._professions.get_profession(owner) is None:
            return [WELCOME_MESSAGE, PROFESSION_PROMPT]
        return []

    def on_account_quit(self, owner: UUID) -> None:
        self._accounts.mark_offline(owner)
