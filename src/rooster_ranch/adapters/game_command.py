"""Boundary for game command transport integrations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True)
class GameCommand:
    """Canonical command payload directed to the running server."""

    command: str


class GameCommandAdapter(Protocol):
    """Interface to send commands to the Minecraft server."""

    def send(self, payload: GameCommand) -> str | None:
        """Dispatch a command payload and return the server's textual reply."""


class EchoGameCommandAdapter:
    """Offline adapter used for local CLI runs and tests; records every command."""

    def __init__(self) -> None:
        self.sent: list[str] = []

    def send(self, payload: GameCommand) -> str:
        self.sent.append(payload.command)
        return f"executed: {payload.command}"
