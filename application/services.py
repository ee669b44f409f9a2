from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Optional

from domain.accounts import create_account
from domain.models import AccountType, Game, GameOutcome, Player
from domain.repositories import GameRepository, PlayerRepository, UnitOfWork

logger = logging.getLogger(__name__)

# Ratings outside this range are rejected as input; stored ratings stay far
# below the 64-bit integer limit of the SQLite store.
MAX_RATING = 1_000_000_000


@dataclass
class AddPlayerResult:
    """Result of registering a new player."""

    success: bool
    error_message: Optional[str] = None
    player: Optional[Player] = None


@dataclass
class RecordGameResult:
    """Result of recording a game for a player."""

    success: bool
    error_message: Optional[str] = None
    game: Optional[Game] = None
    old_rating: Optional[int] = None
    new_rating: Optional[int] = None


@dataclass
class GameSummary:
    games_played: int
    wins: int
    losses: int


def parse_int(text: str) -> Optional[int]:
    """Return `text` as an integer, or None if it is not a number."""

    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_rating(text: str) -> Optional[int]:
    """Return `text` as a rating, or None if it is not a number within +/-`MAX_RATING`."""

    rating = parse_int(text)
    if rating is None or abs(rating) > MAX_RATING:
        return None
    return rating


def find_player(name_or_id: str, player_repo: PlayerRepository) -> Optional[Player]:
    """
    Look up a player by ID or by user name.

    Input that parses as an integer is matched against player IDs only;
    anything else is compared case-insensitively with user names.
    """

    players = player_repo.read_all_players()

    player_id = parse_int(name_or_id)
    if player_id is not None:
        return next((p for p in players if p.id == player_id), None)

    key = name_or_id.strip().casefold()
    return next((p for p in players if p.user_name.casefold() == key), None)


def _validate_user_name(user_name: str, player_repo: PlayerRepository) -> Optional[str]:
    if not user_name:
        return "Player name cannot be empty."
    # Numeric input is always treated as an ID, so such a name could never be looked up.
    if parse_int(user_name) is not None:
        return "Player name cannot be a number."
    key = user_name.casefold()
    if any(p.user_name.casefold() == key for p in player_repo.read_all_players()):
        return f"Player {user_name} already exists."
    return None


def add_player(
    user_name: str,
    initial_rating: int,
    account_type: AccountType,
    player_repo: PlayerRepository,
) -> AddPlayerResult:
    """
    Register a new player bound to the account for `account_type`.

    User names are unique (case-insensitively); a rejected name leaves the
    repository untouched.
    """

    user_name = user_name.strip()
    error = _validate_user_name(user_name, player_repo)
    if error:
        logger.debug("Rejected player name %r: %s", user_name, error)
        return AddPlayerResult(success=False, error_message=error)

    player = player_repo.create_player(
        Player(
            user_name=user_name,
            current_rating=initial_rating,
            account=create_account(account_type),
        )
    )
    logger.info(
        "Created player %s (id=%s, rating=%s, account=%s)",
        player.user_name,
        player.id,
        player.current_rating,
        account_type.value,
    )
    return AddPlayerResult(success=True, player=player)


def record_game(
    player: Player,
    opponent_name: str,
    opponent_rating: int,
    outcome: GameOutcome,
    player_repo: PlayerRepository,
    game_repo: GameRepository,
    unit_of_work: Optional[UnitOfWork] = None,
) -> RecordGameResult:
    """
    Record a game and apply its outcome to the player's rating.

    The player's bound account computes the new rating; the rating and
    the advanced win streak are stored in place before the game is
    appended to the history. With a `unit_of_work` both writes are kept
    or discarded together.
    """

    if player.id is None:
        return RecordGameResult(success=False, error_message="Player has not been created.")

    account = player.account
    new_rating = account.apply_outcome(player.current_rating, outcome, opponent_rating)
    next_account = account.record_outcome(outcome)

    game = Game(
        player_id=player.id,
        opponent_name=opponent_name.strip(),
        outcome=outcome,
        rating=opponent_rating,
    )

    transaction = unit_of_work.transaction() if unit_of_work is not None else nullcontext()
    with transaction:
        player_repo.update_player_rating(player.id, new_rating, next_account.win_streak)
        game_repo.create_game(game)

    logger.info(
        "Recorded %s for %s vs %s: rating %s -> %s",
        outcome.value,
        player.user_name,
        game.opponent_name,
        player.current_rating,
        new_rating,
    )
    return RecordGameResult(
        success=True,
        game=game,
        old_rating=player.current_rating,
        new_rating=new_rating,
    )


def summarize_games(player_id: int, game_repo: GameRepository) -> GameSummary:
    games = game_repo.read_games_for_player(player_id)
    wins = sum(1 for g in games if g.outcome == GameOutcome.WIN)
    return GameSummary(games_played=len(games), wins=wins, losses=len(games) - wins)
