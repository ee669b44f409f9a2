"""
Rating-accounting strategies.

Every player is bound to exactly one account when registered. The account
decides how a game outcome against an opponent of a given rating changes
the player's rating. Accounts are immutable: `apply_outcome` only computes
the new rating and `record_outcome` returns the account with its win
streak advanced, leaving persistence to the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import ClassVar, Dict, Optional, Type

from .models import AccountType, GameOutcome


@dataclass(frozen=True)
class RatingPolicy:
    k_factor: int = 32
    # Consecutive wins (including the current one) before the series bonus kicks in.
    bonus_threshold: int = 3
    bonus_step: int = 5


# Beyond this gap the expected score is 0 or 1 to within 1e-10.
MAX_RATING_GAP = 4000


def expected_score(current_rating: int, opponent_rating: int) -> float:
    """Elo expected score of a player rated `current_rating`."""

    gap = max(-MAX_RATING_GAP, min(MAX_RATING_GAP, opponent_rating - current_rating))
    return 1.0 / (1.0 + 10 ** (gap / 400.0))


@dataclass(frozen=True)
class GameAccount(ABC):
    win_streak: int = 0
    policy: RatingPolicy = field(default_factory=RatingPolicy)

    account_type: ClassVar[AccountType]

    def apply_outcome(
        self,
        current_rating: int,
        outcome: GameOutcome,
        opponent_rating: int,
    ) -> int:
        """Return the rating after a game with the given outcome."""

        if outcome == GameOutcome.WIN:
            return current_rating + self.win_points(current_rating, opponent_rating)
        return current_rating - self.loss_points(current_rating, opponent_rating)

    def record_outcome(self, outcome: GameOutcome) -> GameAccount:
        """Return this account with the win streak advanced past `outcome`."""

        streak = self.win_streak + 1 if outcome == GameOutcome.WIN else 0
        return replace(self, win_streak=streak)

    def standard_gain(self, current_rating: int, opponent_rating: int) -> int:
        expected = expected_score(current_rating, opponent_rating)
        return max(1, round(self.policy.k_factor * (1.0 - expected)))

    def standard_penalty(self, current_rating: int, opponent_rating: int) -> int:
        expected = expected_score(current_rating, opponent_rating)
        return max(1, round(self.policy.k_factor * expected))

    @abstractmethod
    def win_points(self, current_rating: int, opponent_rating: int) -> int:
        ...

    @abstractmethod
    def loss_points(self, current_rating: int, opponent_rating: int) -> int:
        ...


@dataclass(frozen=True)
class StandardAccount(GameAccount):
    account_type: ClassVar[AccountType] = AccountType.STANDARD

    def win_points(self, current_rating: int, opponent_rating: int) -> int:
        return self.standard_gain(current_rating, opponent_rating)

    def loss_points(self, current_rating: int, opponent_rating: int) -> int:
        return self.standard_penalty(current_rating, opponent_rating)


@dataclass(frozen=True)
class HalfPointsDeductedAccount(GameAccount):
    """Loses only half of the standard penalty, rounded down."""

    account_type: ClassVar[AccountType] = AccountType.HALF_POINTS_DEDUCTED

    def win_points(self, current_rating: int, opponent_rating: int) -> int:
        return self.standard_gain(current_rating, opponent_rating)

    def loss_points(self, current_rating: int, opponent_rating: int) -> int:
        return self.standard_penalty(current_rating, opponent_rating) // 2


@dataclass(frozen=True)
class VictorySeriesBonusAccount(GameAccount):
    """
    Rewards winning series.

    Once the streak including the current win reaches
    `policy.bonus_threshold`, every further win earns an escalating bonus
    of `policy.bonus_step` points per win beyond the threshold.
    """

    account_type: ClassVar[AccountType] = AccountType.VICTORY_SERIES_BONUS

    def series_bonus(self) -> int:
        streak = self.win_streak + 1
        if streak < self.policy.bonus_threshold:
            return 0
        return self.policy.bonus_step * (streak - self.policy.bonus_threshold + 1)

    def win_points(self, current_rating: int, opponent_rating: int) -> int:
        return self.standard_gain(current_rating, opponent_rating) + self.series_bonus()

    def loss_points(self, current_rating: int, opponent_rating: int) -> int:
        return self.standard_penalty(current_rating, opponent_rating)


ACCOUNT_CLASSES: Dict[AccountType, Type[GameAccount]] = {
    cls.account_type: cls
    for cls in (StandardAccount, HalfPointsDeductedAccount, VictorySeriesBonusAccount)
}


def create_account(
    account_type: AccountType,
    win_streak: int = 0,
    policy: Optional[RatingPolicy] = None,
) -> GameAccount:
    account_cls = ACCOUNT_CLASSES[account_type]
    if policy is None:
        return account_cls(win_streak=win_streak)
    return account_cls(win_streak=win_streak, policy=policy)


def parse_account_type(text: str) -> AccountType:
    """
    Parse an account type name case-insensitively.

    Accepts `standard`, `halfpointsdeducted` and `victoryseriesbonus` in
    any letter case.
    """

    key = text.strip().lower()
    for account_type in AccountType:
        if account_type.value.lower() == key:
            return account_type
    raise ValueError(f"Invalid account type: {text!r}")


def parse_outcome(text: str) -> GameOutcome:
    key = text.strip().lower()
    for outcome in GameOutcome:
        if outcome.value.lower() == key:
            return outcome
    raise ValueError(f"Invalid game outcome: {text!r}")
