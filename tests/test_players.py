import dataclasses

import pytest

from multiconnect.game.players import Player, PlayerRegistry


def test_identifiers_follow_registration_order():
    registry = PlayerRegistry()
    first = registry.register("red")
    second = registry.register("blue")
    third = registry.register("green")

    assert [p.identifier for p in (first, second, third)] == ["p1", "p2", "p3"]
    assert registry.players() == (first, second, third)
    assert list(registry) == [first, second, third]
    assert len(registry) == 3


def test_color_is_not_validated():
    registry = PlayerRegistry()
    player = registry.register("not-a-real-color")
    assert player.color == "not-a-real-color"
    assert registry.register((255, 0, 0)).color == (255, 0, 0)


def test_players_snapshot_is_not_affected_by_later_registrations():
    registry = PlayerRegistry()
    registry.register("red")
    snapshot = registry.players()
    registry.register("blue")
    assert len(snapshot) == 1
    assert len(registry) == 2


def test_player_is_immutable():
    player = Player("p1", "red")
    with pytest.raises(dataclasses.FrozenInstanceError):
        player.color = "blue"


def test_empty_registry():
    registry = PlayerRegistry()
    assert len(registry) == 0
    assert registry.players() == ()
