from __future__ import annotations

import logging
from pathlib import Path

import pytest

from rooster_ranch.adapters import EchoGameCommandAdapter, InMemoryInventory, InMemoryPlayerGateway, InMemoryWorldEditor
from rooster_ranch.config import Settings
from rooster_ranch.context import RanchContext, build_context
from rooster_ranch.telemetry.logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)


class FixedRandom:
    """Random source whose weed roll is always ``value``."""

    def __init__(self, value: int) -> None:
        self.value = value
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.value


@pytest.fixture
def make_context(tmp_path: Path):
    def _make(*, rng=None, missing_structures: set[str] | None = None, **overrides) -> RanchContext:
        config = Settings(data_dir=tmp_path / "data", schematics_dir=tmp_path / "schematics", **overrides)
        return build_context(
            config,
            EchoGameCommandAdapter(),
            inventory=InMemoryInventory(),
            players=InMemoryPlayerGateway(),
            world_editor=InMemoryWorldEditor(missing=set(missing_structures or ())),
            rng=rng or FixedRandom(2),
        )

    return _make
