"""Profession choice per account and the starter kits that come with it."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from rooster_ranch.adapters.inventory import InventoryGateway
from rooster_ranch.errors import MalformedRecord
from rooster_ranch.models import ItemStack, ProfessionKit
from rooster_ranch.persistence import parse_owner_id

DEFAULT_PROFESSIONS: dict[str, ProfessionKit] = {
    "FARMER": ProfessionKit(
        display_name="Farmer",
        icon="wheat",
        starter_kit=(ItemStack("wheat_seeds", 32), ItemStack("iron_hoe"), ItemStack("bucket")),
    ),
    "RANCHER": ProfessionKit(
        display_name="Rancher",
        icon="cow_spawn_egg",
        starter_kit=(ItemStack("wheat", 16), ItemStack("lead", 2), ItemStack("iron_sword")),
    ),
    "FISHER": ProfessionKit(
        display_name="Fisher",
        icon="fishing_rod",
        starter_kit=(ItemStack("fishing_rod"), ItemStack("salmon", 8), ItemStack("cooked_cod", 8)),
    ),
    "MERCHANT": ProfessionKit(
        display_name="Merchant",
        icon="emerald",
        starter_kit=(ItemStack("emerald", 8), ItemStack("gold_nugget", 32), ItemStack("writable_book")),
    ),
}


class ProfessionRegistry:
    """Owns each account's profession.

    Professions are plain data keyed by id, so adding one means adding a table
    entry. Choosing a profession always re-grants its starter kit, including when
    the account picks the same one again.
    """

    def __init__(
        self,
        inventory: InventoryGateway,
        kits: Mapping[str, ProfessionKit] | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._inventory = inventory
        self._kits = dict(DEFAULT_PROFESSIONS if kits is None else kits)
        self._assignments: dict[UUID, str] = {}
        self._logger = logger or logging.getLogger("rooster_ranch.professions")

    def professions(self) -> dict[str, ProfessionKit]:
        return dict(self._kits)

    def kit_for(self, profession: str) -> ProfessionKit | None:
        return self._kits.get(profession)

    def resolve(self, name: str) -> str | None:
        """Match a profession id or display name, ignoring case."""
        lowered = name.strip().lower()
        for profession_id, kit in self._kits.items():
            if lowered in (profession_id.lower(), kit.display_name.lower()):
                return profession_id
        return None

    def get_profession(self, owner: UUID) -> str | None:
        return self._assignments.get(owner)

    def set_profession(self, owner: UUID, profession: str) -> bool:
        kit = self._kits.get(profession)
        if kit is None:
            self._logger.warning("unknown_profession", extra={"owner": str(owner), "profession": profession})
            return False

        previous = self._assignments.get(owner)
        self._assignments[owner] = profession
        self._inventory.grant_items(owner, kit.starter_kit)
        self._logger.info(
            "profession_assigned",
            extra={"owner": str(owner), "profession": profession, "previous": previous},
        )
        return True

    def load_document(self, document: dict[str, Any]) -> int:
        self._assignments.clear()
        for key, raw in document.items():
            try:
                owner = parse_owner_id(key)
                if not isinstance(raw, str) or raw not in self._kits:
                    raise MalformedRecord(key, f"unknown profession {raw!r}")
            except MalformedRecord as exc:
                self._logger.warning("profession_entry_skipped", extra={"key": exc.key, "reason": exc.reason})
                continue
            self._assignments[owner] = raw
        return len(self._assignments)

    def to_document(self) -> dict[str, str]:
        return {str(owner): profession for owner, profession in self._assignments.items()}
