from __future__ import annotations

from typing import Optional, Protocol

from application.services import (
    add_player,
    find_player,
    parse_rating,
    record_game,
    summarize_games,
)
from domain.accounts import parse_account_type, parse_outcome
from domain.models import Player
from domain.repositories import GameRepository, PlayerRepository, UnitOfWork
from interfaces.console.console import Console


class GameCommand(Protocol):
    """
    A single menu entry.

    `execute` prompts for its own input and reports every outcome,
    including invalid input, through the console. Commands with
    `terminates` set end the dispatch loop after running.
    """

    terminates: bool = False

    def execute(self) -> None:
        ...


def command_name(command: GameCommand) -> str:
    """Menu label of a command: its class name without the `Command` suffix."""

    return type(command).__name__.removesuffix("Command")


def _format_player(player: Player) -> str:
    return (
        f"Player ID: {player.id}, Username: {player.user_name}, "
        f"Current Rating: {player.current_rating}"
    )


class DisplayPlayersCommand(GameCommand):
    def __init__(self, player_repo: PlayerRepository, console: Console) -> None:
        self._player_repo = player_repo
        self._console = console

    def execute(self) -> None:
        players = self._player_repo.read_all_players()
        self._console.write_line("All Players:")
        for player in players:
            self._console.write_line(_format_player(player))
        self._console.write_line()


class AddPlayerCommand(GameCommand):
    """
    Register a player.

    Prompts for name, initial rating and account type in that order; the
    rating is validated before the account type is asked for.
    """

    def __init__(self, player_repo: PlayerRepository, console: Console) -> None:
        self._player_repo = player_repo
        self._console = console

    def execute(self) -> None:
        player_name = self._console.read_line("Enter player name: ")

        initial_rating = parse_rating(self._console.read_line("Enter initial rating: "))
        if initial_rating is None:
            self._console.write_line("Invalid initial rating. Player not created.")
            return

        account_text = self._console.read_line(
            "Enter account type (Standard/HalfPointsDeducted/VictorySeriesBonus): "
        )
        try:
            account_type = parse_account_type(account_text)
        except ValueError:
            self._console.write_line("Invalid account type. Player not created.")
            return

        result = add_player(player_name, initial_rating, account_type, self._player_repo)
        if not result.success:
            self._console.write_line(f"{result.error_message} Player not created.")
            return

        self._console.write_line(
            f"Player {result.player.user_name} with account type "
            f"{account_type.value} created successfully."
        )


class PlayerStatsCommand(GameCommand):
    def __init__(
        self,
        player_repo: PlayerRepository,
        game_repo: GameRepository,
        console: Console,
    ) -> None:
        self._player_repo = player_repo
        self._game_repo = game_repo
        self._console = console

    def execute(self) -> None:
        name_or_id = self._console.read_line("Enter player name or ID: ")
        player = find_player(name_or_id, self._player_repo)
        if player is None:
            self._console.write_line("Player not found.")
            return

        summary = summarize_games(player.id, self._game_repo)
        self._console.write_line(_format_player(player))
        self._console.write_line(
            f"Account Type: {player.account.account_type.value}, "
            f"Games Played: {summary.games_played}, "
            f"Wins: {summary.wins}, Losses: {summary.losses}, "
            f"Win Streak: {player.account.win_streak}"
        )


class PlayGameCommand(GameCommand):
    """
    Record a game for an existing player.

    Every prompt is validated before anything is written, so a rejected
    game leaves both the rating and the game history untouched.
    """

    def __init__(
        self,
        player_repo: PlayerRepository,
        game_repo: GameRepository,
        console: Console,
        unit_of_work: Optional[UnitOfWork] = None,
    ) -> None:
        self._player_repo = player_repo
        self._game_repo = game_repo
        self._console = console
        self._unit_of_work = unit_of_work

    def execute(self) -> None:
        name_or_id = self._console.read_line("Enter player name or ID: ")
        player = find_player(name_or_id, self._player_repo)
        if player is None:
            self._console.write_line("Player not found.")
            return

        opponent_name = self._console.read_line("Enter opponent name: ")

        rating = parse_rating(self._console.read_line("Enter rating for the game: "))
        if rating is None:
            self._console.write_line("Invalid rating. Game not recorded.")
            return

        try:
            outcome = parse_outcome(self._console.read_line("Enter game outcome (Win/Loss): "))
        except ValueError:
            self._console.write_line("Invalid outcome. Game not recorded.")
            return

        result = record_game(
            player,
            opponent_name,
            rating,
            outcome,
            self._player_repo,
            self._game_repo,
            self._unit_of_work,
        )
        if not result.success:
            self._console.write_line(f"{result.error_message} Game not recorded.")
            return

        self._console.write_line("Game recorded successfully.")
        self._console.write_line(
            f"{player.user_name}'s rating changed from "
            f"{result.old_rating} to {result.new_rating}."
        )


class QuitCommand(GameCommand):
    terminates = True

    def __init__(self, console: Console) -> None:
        self._console = console

    def execute(self) -> None:
        self._console.write_line("Goodbye.")
