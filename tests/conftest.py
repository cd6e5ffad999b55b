import pytest

from multiconnect.debug import debug
from multiconnect.game.players import PlayerRegistry
from multiconnect.game.rules import GameEngine


@pytest.fixture(autouse=True)
def restore_debug_settings():
    level = debug.level
    yield
    debug.configure(level=level, enabled=True, components=[])


@pytest.fixture
def registry():
    reg = PlayerRegistry()
    reg.register("red")
    reg.register("yellow")
    return reg


@pytest.fixture
def engine(registry):
    return GameEngine(7, 6, registry)
