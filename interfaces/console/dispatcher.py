from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from application.services import parse_int
from domain.repositories import GameRepository, PlayerRepository, UnitOfWork
from interfaces.console.commands import (
    AddPlayerCommand,
    DisplayPlayersCommand,
    GameCommand,
    PlayerStatsCommand,
    PlayGameCommand,
    QuitCommand,
    command_name,
)
from interfaces.console.console import Console, StdConsole

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Menu loop routing a 1-based selection to a registered command.

    The registry is fixed at construction. The loop runs until a
    terminating command has executed or the console runs out of input.
    """

    def __init__(self, commands: Sequence[GameCommand], console: Console) -> None:
        self._commands: List[GameCommand] = list(commands)
        self._console = console

    def show_menu(self) -> None:
        self._console.write_line("Select a command:")
        for index, command in enumerate(self._commands, start=1):
            self._console.write_line(f"{index}. {command_name(command)}")

    def dispatch(self, selection: str) -> bool:
        """
        Execute the command picked by `selection`.

        Returns False once the loop should stop. Errors raised by a command
        are logged and reported; they never end the loop.
        """

        index = parse_int(selection)
        if index is None or not 1 <= index <= len(self._commands):
            self._console.write_line("Invalid command index. Please try again.")
            return True

        command = self._commands[index - 1]
        try:
            command.execute()
        except EOFError:
            raise
        except Exception as exc:
            logger.exception("Command %s failed", command_name(command))
            self._console.write_line(f"Command failed: {exc}")
            return True

        return not command.terminates

    def run(self) -> None:
        while True:
            self.show_menu()
            try:
                if not self.dispatch(self._console.read_line()):
                    break
            except EOFError:
                logger.debug("Console input exhausted, stopping")
                break


def create_console_app(
    player_repo: PlayerRepository,
    game_repo: GameRepository,
    console: Optional[Console] = None,
    unit_of_work: Optional[UnitOfWork] = None,
) -> CommandDispatcher:
    """
    Configure and return a dispatcher wired to the given repositories.

    Menu order: DisplayPlayers, AddPlayer, PlayerStats, PlayGame, Quit.
    """

    console = console or StdConsole()
    commands: List[GameCommand] = [
        DisplayPlayersCommand(player_repo, console),
        AddPlayerCommand(player_repo, console),
        PlayerStatsCommand(player_repo, game_repo, console),
        PlayGameCommand(player_repo, game_repo, console, unit_of_work),
        QuitCommand(console),
    ]
    return CommandDispatcher(commands, console)
