"""Live Minecraft command adapter.

Commands go through a locally-imported ``minescript`` module and therefore run as
the local player. WorldEdit needs that: its selection and clipboard belong to a
player session, not to the server console.
"""

from __future__ import annotations

import importlib
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from rooster_ranch.adapters.game_command import GameCommand, GameCommandAdapter

# Section-sign colour and style codes, e.g. "§aRemoved 1 item(s)".
_FORMATTING_RE = re.compile("§[0-9a-fk-orx]", re.IGNORECASE)

logger = logging.getLogger("rooster_ranch.adapters.live")


class MinescriptUnavailableError(RuntimeError):
    """Raised when minescript is not installed or has no supported command API."""


def reply_text(result: Any) -> str:
    """Flatten whatever minescript returned into one plain-text reply.

    The command gateways match vanilla feedback such as ``Found 3 matching items``
    or ``has the following entity data``, so colour codes are dropped and
    multi-line results are joined with newlines.
    """
    if result is None:
        return ""
    if isinstance(result, (list, tuple)):
        text = "\n".join(str(line) for line in result if line is not None)
    else:
        text = str(result)
    return _FORMATTING_RE.sub("", text).strip()


@dataclass(slots=True)
class MinescriptGameCommandAdapter(GameCommandAdapter):
    """Adapter that sends ranch commands through the `minescript` module.

    WorldEdit commands (``//paste``, ``//pos1``) already carry their own leading
    slash and are sent unchanged.
    """

    command_prefix: str = "/"
    _executor: Callable[[str], Any] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._executor = self._resolve_executor()

    def send(self, payload: GameCommand) -> str:
        command = payload.command
        if self.command_prefix and not command.startswith(self.command_prefix):
            command = f"{self.command_prefix}{command}"

        reply = reply_text(self._executor(command))
        logger.debug("game_command_sent", extra={"command": command, "reply": reply})
        return reply

    @staticmethod
    def _resolve_executor() -> Callable[[str], Any]:
        try:
            module = importlib.import_module("minescript")
        except ImportError as exc:
            raise MinescriptUnavailableError(
                "Unable to import minescript. Install it and start Minecraft with the mod loaded."
            ) from exc

        for attr in ("execute", "run", "command", "chat_command"):
            fn = getattr(module, attr, None)
            if callable(fn):
                return fn

        raise MinescriptUnavailableError(
            "Imported minescript but found no supported API (expected execute/run/command/chat_command)."
        )
