from __future__ import annotations

import sys
import types
from pathlib import Path
from uuid import uuid4

import pytest

from rooster_ranch.adapters import (
    CommandInventoryGateway,
    CommandPlayerGateway,
    CommandWorldEditor,
    EchoGameCommandAdapter,
    GameCommand,
    MinescriptGameCommandAdapter,
    MinescriptUnavailableError,
    written_book,
)
from rooster_ranch.errors import ResourceUnavailable
from rooster_ranch.models import ItemStack, WorldLocation


class _FakeMinescriptModule(types.SimpleNamespace):
    def __init__(self):
        super().__init__()
        self.calls: list[str] = []

    def execute(self, command: str) -> str:
        self.calls.append(command)
        return f"ok:{command}"


class ScriptedAdapter:
    def __init__(self, responses: dict[str, str] | None = None, fail: bool = False) -> None:
        self.responses = responses or {}
        self.fail = fail
        self.sent: list[str] = []

    def send(self, payload: GameCommand) -> str | None:
        if self.fail:
            raise RuntimeError("server offline")
        self.sent.append(payload.command)
        return self.responses.get(payload.command)


def test_minescript_adapter_dispatches_command(monkeypatch) -> None:
    fake = _FakeMinescriptModule()
    monkeypatch.setitem(sys.modules, "minescript", fake)

    adapter = MinescriptGameCommandAdapter(command_prefix="/")
    response = adapter.send(GameCommand(command="time set day"))

    assert response == "ok:/time set day"
    assert fake.calls == ["/time set day"]


def test_minescript_replies_are_plain_text_for_the_gateways(monkeypatch) -> None:
    owner = uuid4()

    def _execute(command: str):
        if command.startswith("/clear"):
            return ["\u00a7aRemoved 1 item(s) from player Steve", None]
        return None

    monkeypatch.setitem(sys.modules, "minescript", types.SimpleNamespace(execute=_execute))
    adapter = MinescriptGameCommandAdapter()

    assert CommandInventoryGateway(adapter).remove_one_unit(owner, "wheat") is True
    assert adapter.send(GameCommand(command="//paste")) == ""


def test_minescript_without_api_is_unavailable(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "minescript", types.SimpleNamespace())

    with pytest.raises(MinescriptUnavailableError):
        MinescriptGameCommandAdapter()


def test_command_inventory_parses_vanilla_replies() -> None:
    owner = uuid4()
    adapter = ScriptedAdapter(
        {
            f"clear {owner} minecraft:wheat 0": "Found 12 matching item(s) on player Steve",
            f"clear {owner} minecraft:wheat 1": "Removed 1 item(s) from player Steve",
            f"clear {owner} minecraft:egg 0": "No items were found on player Steve",
        }
    )
    inventory = CommandInventoryGateway(adapter)

    assert inventory.count_units(owner, "wheat") == 12
    assert inventory.count_units(owner, "egg") == 0
    assert inventory.remove_one_unit(owner, "wheat") is True
    assert inventory.remove_one_unit(owner, "egg") is False

    inventory.grant_items(owner, [ItemStack("bread", 3), ItemStack("minecraft:lead", 0)])
    assert adapter.sent[-1] == f"give {owner} minecraft:bread 3"


def test_written_book_is_given_with_escaped_pages() -> None:
    owner = uuid4()
    adapter = ScriptedAdapter({})
    CommandInventoryGateway(adapter).grant_items(owner, [written_book("Guide", "Ranch", ["Hi\nthere", "It's"])])

    command = adapter.sent[-1]
    assert command.startswith(f"give {owner} minecraft:written_book[written_book_content={{")
    assert command.endswith("}] 1")
    assert 'title:"Guide",author:"Ranch"' in command
    assert r"""pages:['"Hi\\nthere"','"It\'s"']""" in command


def test_command_player_gateway_reads_position() -> None:
    owner = uuid4()
    adapter = ScriptedAdapter(
        {
            f"data get entity {owner} Pos": "Steve has the following entity data: [16.5d, 94.0d, -5.5d]",
            f"data get entity {owner} Dimension": 'Steve has the following entity data: "minecraft:rooster_market"',
        }
    )
    players = CommandPlayerGateway(adapter)

    assert players.location_of(owner) == WorldLocation("rooster_market", 16.5, 94.0, -5.5)
    assert players.location_of(uuid4()) is None

    players.teleport(owner, WorldLocation("rooster_farms", 14.5, 91.0, -14.5))
    assert adapter.sent[-1] == f"execute in minecraft:rooster_farms run tp {owner} 14.5 91.0 -14.5"


def test_command_world_editor_requires_known_schematic(tmp_path: Path) -> None:
    (tmp_path / "farm.schem").write_bytes(b"\x00")
    (tmp_path / "notes.txt").write_text("hello", encoding="utf-8")
    adapter = EchoGameCommandAdapter()
    editor = CommandWorldEditor(adapter, tmp_path)
    center = WorldLocation("rooster_farms", 200.0, 100.0, 0.0)

    with pytest.raises(ResourceUnavailable, match="not found"):
        editor.paste_structure("missing.schem", center)
    with pytest.raises(ResourceUnavailable, match="Unknown schematic format"):
        editor.paste_structure("notes.txt", center)
    assert adapter.sent == []

    editor.paste_structure("farm.schem", center)
    assert adapter.sent == [
        "execute in minecraft:rooster_farms run tp @s 200 100 0",
        "schem load farm.schem",
        "//paste",
    ]


def test_command_world_editor_loads_nested_schematics_by_relative_name(tmp_path: Path) -> None:
    (tmp_path / "ranch").mkdir()
    (tmp_path / "ranch" / "market.schematic").write_bytes(b"\x00")
    adapter = EchoGameCommandAdapter()

    editor = CommandWorldEditor(adapter, tmp_path)
    editor.paste_structure("ranch/market.schematic", WorldLocation("rooster_market", 0, 100, 0))

    assert adapter.sent[1] == "schem load ranch/market.schematic"


def test_cleanup_closes_trapdoors_and_backs_surface_layers() -> None:
    commands = list(CommandWorldEditor.cleanup_commands(WorldLocation("rooster_farms", 0.0, 100.0, 0.0)))

    assert commands[0].startswith("execute in minecraft:rooster_farms run fill -20 97 -20 20 108 20")
    assert commands[8:] == [
        "execute in minecraft:rooster_farms run tp @s 0 100 0",
        "//gmask <!minecraft:air,minecraft:water",
        "//pos1 -20,99,-20",
        "//pos2 20,99,20",
        "//replace minecraft:air,minecraft:water minecraft:dirt",
        "//pos1 -20,98,-20",
        "//pos2 20,98,20",
        "//replace minecraft:air,minecraft:water minecraft:dirt",
        "//gmask",
    ]


def test_transport_errors_become_resource_unavailable(tmp_path: Path) -> None:
    (tmp_path / "farm.schem").write_bytes(b"\x00")
    editor = CommandWorldEditor(ScriptedAdapter(fail=True), tmp_path)

    with pytest.raises(ResourceUnavailable, match="server offline"):
        editor.paste_structure("farm.schem", WorldLocation("rooster_farms", 0, 100, 0))
