"""Host adapters: command transport, world editing, inventories and players."""

from .game_command import EchoGameCommandAdapter, GameCommand, GameCommandAdapter
from .inventory import CommandInventoryGateway, InMemoryInventory, InventoryGateway, written_book
from .live_minecraft import MinescriptGameCommandAdapter, MinescriptUnavailableError
from .players import CommandPlayerGateway, InMemoryPlayerGateway, PlayerGateway
from .world_edit import CommandWorldEditor, InMemoryWorldEditor, WorldEditor

__all__ = [
    "CommandInventoryGateway",
    "CommandPlayerGateway",
    "CommandWorldEditor",
    "EchoGameCommandAdapter",
    "GameCommand",
    "GameCommandAdapter",
    "InMemoryInventory",
    "InMemoryPlayerGateway",
    "InMemoryWorldEditor",
    "InventoryGateway",
    "MinescriptGameCommandAdapter",
    "MinescriptUnavailableError",
    "PlayerGateway",
    "WorldEditor",
    "written_book",
]
