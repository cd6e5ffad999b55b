"""
players.py - Players and the pre-game lobby

A PlayerRegistry collects players before a game starts and hands them to the
engine as an ordered sequence. Registration order is turn order.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Tuple

from multiconnect.debug import debug


@dataclass(frozen=True)
class Player:
    """
    A participant in a game.

    Attributes:
        identifier: Unique name within a game, e.g. "p1"
        color: Display attribute; opaque to the game rules
    """
    identifier: str
    color: Any = None

    def __str__(self) -> str:
        return f"{self.identifier} ({self.color})"


class PlayerRegistry:
    """
    Ordered list of players waiting for the next game.

    Identifiers are minted from a running counter, so they stay unique for the
    lifetime of the registry.
    """

    def __init__(self):
        self._players = []
        self._player_count = 1

    def register(self, color: Any) -> Player:
        """
        Add a player with the given display color.

        Args:
            color: Any display attribute; it is not validated here

        Returns:
            The new player, with identifier ``p<n>``
        """
        player = Player(f"p{self._player_count}", color)
        self._players.append(player)
        self._player_count += 1
        debug.debug(f"Registered player {player}", "players")
        return player

    def players(self) -> Tuple[Player, ...]:
        """Snapshot of the registered players in turn order."""
        return tuple(self._players)

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self.players())

    def __repr__(self) -> str:
        return f"PlayerRegistry({list(self._players)!r})"
