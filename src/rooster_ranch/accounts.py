"""Directory of accounts the host has reported, used to resolve command targets."""

from __future__ import annotations

from uuid import UUID


class AccountDirectory:
    """Tracks known accounts, their last-seen names and who is online."""

    def __init__(self) -> None:
        self._names: dict[UUID, str] = {}
        self._online: set[UUID] = set()

    def mark_online(self, owner: UUID, name: str | None = None) -> None:
        self._online.add(owner)
        if name:
            self._names[owner] = name
        else:
            self._names.setdefault(owner, str(owner))

    def mark_offline(self, owner: UUID) -> None:
        self._online.discard(owner)

    def is_online(self, owner: UUID) -> bool:
        return owner in self._online

    def online(self) -> list[UUID]:
        return sorted(self._online, key=str)

    def display_name(self, owner: UUID) -> str:
        return self._names.get(owner, str(owner))

    def resolve(self, target: str, *, online_only: bool = False) -> UUID | None:
        """Find an account by UUID string or case-insensitive name."""
        candidate: UUID | None = None
        try:
            candidate = UUID(target)
        except ValueError:
            lowered = target.lower()
            for owner, name in self._names.items():
                if name.lower() == lowered:
                    candidate = owner
                    break

        if candidate is None or candidate not in self._names:
            return None
        if online_only and candidate not in self._online:
            return None
        return candidate
