from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .accounts import GameAccount


class GameOutcome(str, Enum):
    WIN = "Win"
    LOSS = "Loss"


class AccountType(str, Enum):
    """Rating-accounting scheme chosen when a player is registered."""

    STANDARD = "Standard"
    HALF_POINTS_DEDUCTED = "HalfPointsDeducted"
    VICTORY_SERIES_BONUS = "VictorySeriesBonus"


@dataclass(frozen=True)
class Player:
    """
    Domain representation of a tracked player.

    `id` is assigned by the player repository on creation. The bound
    `account` decides how game outcomes change `current_rating` and
    carries the player's win streak.
    """

    user_name: str
    current_rating: int
    account: GameAccount
    id: Optional[int] = None


@dataclass(frozen=True)
class Game:
    """
    A single recorded game. Games are append-only history.

    `opponent_name` is free text and does not reference a `Player`.
    `rating` is the opponent rating submitted when the game was recorded.
    """

    player_id: int
    opponent_name: str
    outcome: GameOutcome
    rating: int
    id: Optional[int] = None
