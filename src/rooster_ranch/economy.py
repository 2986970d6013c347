"""Rooster Coin (RC) balances per account."""

from __future__ import annotations

import logging
import math
from typing import Any
from uuid import UUID

from rooster_ranch.errors import MalformedRecord
from rooster_ranch.persistence import parse_owner_id


class EconomyLedger:
    """Owns every account balance.

    Accounts exist implicitly with a zero balance; nothing here raises for a
    business failure. ``withdraw`` reports a refused debit through its return
    value.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._balances: dict[UUID, float] = {}
        self._logger = logger or logging.getLogger("rooster_ranch.economy")

    def get_balance(self, owner: UUID) -> float:
        return self._balances.get(owner, 0.0)

    def set_balance(self, owner: UUID, amount: float) -> None:
        amount = float(amount)
        if not math.isfinite(amount):
            self._logger.warning("rc_balance_rejected", extra={"owner": str(owner), "amount": amount})
            return
        self._balances[owner] = max(0.0, amount)

    def deposit(self, owner: UUID, amount: float) -> None:
        if not _is_positive_amount(amount):
            return
        self._balances[owner] = self.get_balance(owner) + amount
        self._logger.debug("rc_deposited", extra={"owner": str(owner), "amount": amount})

    def withdraw(self, owner: UUID, amount: float) -> bool:
        balance = self.get_balance(owner)
        if not _is_positive_amount(amount) or amount > balance:
            return False
        self._balances[owner] = balance - amount
        self._logger.debug("rc_withdrawn", extra={"owner": str(owner), "amount": amount})
        return True

    def accounts(self) -> dict[UUID, float]:
        return dict(self._balances)

    def load_document(self, document: dict[str, Any]) -> int:
        """Replace balances from a persisted document; returns the number loaded."""
        self._balances.clear()
        for key, raw in document.items():
            try:
                owner = parse_owner_id(key)
                self._balances[owner] = _parse_balance(key, raw)
            except MalformedRecord as exc:
                self._logger.warning("economy_entry_skipped", extra={"key": exc.key, "reason": exc.reason})
        return len(self._balances)

    def to_document(self) -> dict[str, float]:
        return {str(owner): balance for owner, balance in self._balances.items()}


def _is_positive_amount(amount: float) -> bool:
    return math.isfinite(amount) and amount > 0


def _parse_balance(key: str, raw: Any) -> float:
    if isinstance(raw, bool):
        raise MalformedRecord(key, "balance must be a number")
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedRecord(key, "balance must be a number") from exc
    if not math.isfinite(value):
        raise MalformedRecord(key, "balance must be finite")
    return max(0.0, value)
