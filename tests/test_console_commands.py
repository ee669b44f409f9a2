import unittest

from domain.models import GameOutcome
from infrastructure.db.game_repository_memory import InMemoryGameRepository
from infrastructure.db.player_repository_memory import InMemoryPlayerRepository
from infrastructure.db.unit_of_work_memory import InMemoryUnitOfWork
from interfaces.console.commands import (
    AddPlayerCommand,
    DisplayPlayersCommand,
    GameCommand,
    PlayerStatsCommand,
    PlayGameCommand,
    QuitCommand,
    command_name,
)
from interfaces.console.console import Console
from interfaces.console.dispatcher import CommandDispatcher, create_console_app


class ScriptedConsole(Console):
    def __init__(self, lines=()):
        self.inputs = list(lines)
        self.prompts = []
        self.output = []

    def feed(self, *lines):
        self.inputs.extend(lines)

    def read_line(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.inputs:
            raise EOFError
        return self.inputs.pop(0)

    def write_line(self, text: str = "") -> None:
        self.output.append(text)


class BrokenCommand(GameCommand):
    def execute(self) -> None:
        raise RuntimeError("boom")


class ConsoleCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self.player_repo = InMemoryPlayerRepository()
        self.game_repo = InMemoryGameRepository()
        self.console = ScriptedConsole()
        self.display = DisplayPlayersCommand(self.player_repo, self.console)
        self.add = AddPlayerCommand(self.player_repo, self.console)
        self.stats = PlayerStatsCommand(self.player_repo, self.game_repo, self.console)
        self.play = PlayGameCommand(self.player_repo, self.game_repo, self.console)

    def _add(self, name="alice", rating="1000", account_type="standard"):
        self.console.feed(name, rating, account_type)
        self.add.execute()

    def test_display_players_on_empty_repository_prints_header_only(self):
        self.display.execute()
        self.assertEqual(self.console.output, ["All Players:", ""])

    def test_add_player_then_display_lists_it_once(self):
        self._add()
        self.assertEqual(
            self.console.output[-1],
            "Player alice with account type Standard created successfully.",
        )
        self.assertEqual(
            self.console.prompts,
            [
                "Enter player name: ",
                "Enter initial rating: ",
                "Enter account type (Standard/HalfPointsDeducted/VictorySeriesBonus): ",
            ],
        )

        self.console.output.clear()
        self.display.execute()
        self.assertEqual(
            self.console.output,
            ["All Players:", "Player ID: 1, Username: alice, Current Rating: 1000", ""],
        )

    def test_display_players_is_idempotent(self):
        self._add("alice")
        self._add("bob", "1200", "victoryseriesbonus")
        self.console.output.clear()

        self.display.execute()
        first = list(self.console.output)
        self.console.output.clear()
        self.display.execute()
        self.assertEqual(self.console.output, first)

    def test_add_player_with_invalid_rating_creates_nothing(self):
        self.console.feed("alice", "abc")
        self.add.execute()
        self.assertEqual(self.console.output, ["Invalid initial rating. Player not created."])
        # The account type is never asked for.
        self.assertEqual(len(self.console.prompts), 2)
        self.assertEqual(self.player_repo.read_all_players(), [])

    def test_add_player_with_invalid_account_type_creates_nothing(self):
        self._add("alice", "1000", "wizard")
        self.assertEqual(self.console.output, ["Invalid account type. Player not created."])
        self.assertEqual(self.player_repo.read_all_players(), [])

    def test_add_player_with_duplicate_name_creates_nothing(self):
        self._add("alice")
        self._add("Alice", "900", "standard")
        self.assertEqual(self.console.output[-1], "Player Alice already exists. Player not created.")
        self.assertEqual(len(self.player_repo.read_all_players()), 1)

    def test_player_stats_by_id_and_name(self):
        self._add("alice", "1000", "HalfPointsDeducted")
        self.console.output.clear()

        self.console.feed("1")
        self.stats.execute()
        by_id = list(self.console.output)
        self.console.output.clear()
        self.console.feed("ALICE")
        self.stats.execute()

        self.assertEqual(self.console.output, by_id)
        self.assertEqual(
            by_id,
            [
                "Player ID: 1, Username: alice, Current Rating: 1000",
                "Account Type: HalfPointsDeducted, Games Played: 0, Wins: 0, "
                "Losses: 0, Win Streak: 0",
            ],
        )

    def test_player_stats_not_found(self):
        self._add()
        self.console.output.clear()
        for query in ("7", "nobody"):
            self.console.feed(query)
            self.stats.execute()
        self.assertEqual(self.console.output, ["Player not found.", "Player not found."])

    def test_play_game_records_game_and_updates_rating(self):
        self._add()
        self.console.output.clear()
        self.console.feed("alice", "bob", "1000", "Win")
        self.play.execute()

        self.assertEqual(
            self.console.output,
            ["Game recorded successfully.", "alice's rating changed from 1000 to 1016."],
        )
        player = self.player_repo.read_all_players()[0]
        self.assertEqual(player.current_rating, 1016)
        games = self.game_repo.read_games_for_player(player.id)
        self.assertEqual(len(games), 1)
        self.assertEqual(games[0].outcome, GameOutcome.WIN)

    def test_play_game_loss_under_each_account_type(self):
        self._add("std", "1000", "standard")
        self._add("half", "1000", "halfpointsdeducted")
        self._add("series", "1000", "victoryseriesbonus")
        for name in ("std", "half", "series"):
            self.console.feed(name, "bob", "1000", "loss")
            self.play.execute()

        ratings = {p.user_name: p.current_rating for p in self.player_repo.read_all_players()}
        self.assertEqual(ratings, {"std": 984, "half": 992, "series": 984})

    def test_play_game_player_not_found_makes_no_changes(self):
        self._add()
        self.console.output.clear()
        self.console.feed("bob")
        self.play.execute()
        self.assertEqual(self.console.output, ["Player not found."])
        self.assertEqual(self.player_repo.read_all_players()[0].current_rating, 1000)
        self.assertEqual(self.game_repo.read_games_for_player(1), [])

    def test_play_game_invalid_rating_makes_no_changes(self):
        self._add()
        self.console.output.clear()
        self.console.feed("1", "bob", "high")
        self.play.execute()
        self.assertEqual(self.console.output, ["Invalid rating. Game not recorded."])
        self.assertEqual(self.player_repo.read_all_players()[0].current_rating, 1000)
        self.assertEqual(self.game_repo.read_games_for_player(1), [])

    def test_play_game_rating_out_of_range_makes_no_changes(self):
        self._add()
        self.console.output.clear()
        self.console.feed("1", "bob", str(2**63))
        self.play.execute()
        self.assertEqual(self.console.output, ["Invalid rating. Game not recorded."])
        self.assertEqual(self.game_repo.read_games_for_player(1), [])

    def test_add_player_rating_out_of_range_creates_nothing(self):
        self.console.feed("alice", "99999999999999999999")
        self.add.execute()
        self.assertEqual(self.console.output, ["Invalid initial rating. Player not created."])
        self.assertEqual(self.player_repo.read_all_players(), [])

    def test_play_game_invalid_outcome_makes_no_changes(self):
        self._add()
        self.console.output.clear()
        self.console.feed("1", "bob", "1000", "draw")
        self.play.execute()
        self.assertEqual(self.console.output, ["Invalid outcome. Game not recorded."])
        self.assertEqual(self.player_repo.read_all_players()[0].current_rating, 1000)
        self.assertEqual(self.game_repo.read_games_for_player(1), [])

    def test_command_names_strip_suffix(self):
        self.assertEqual(command_name(self.display), "DisplayPlayers")
        self.assertEqual(command_name(self.play), "PlayGame")
        self.assertEqual(command_name(QuitCommand(self.console)), "Quit")


class CommandDispatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.player_repo = InMemoryPlayerRepository()
        self.game_repo = InMemoryGameRepository()
        self.console = ScriptedConsole()
        self.app = create_console_app(
            self.player_repo,
            self.game_repo,
            self.console,
            InMemoryUnitOfWork(self.player_repo, self.game_repo),
        )

    def test_menu_lists_commands_in_order(self):
        self.app.show_menu()
        self.assertEqual(
            self.console.output,
            [
                "Select a command:",
                "1. DisplayPlayers",
                "2. AddPlayer",
                "3. PlayerStats",
                "4. PlayGame",
                "5. Quit",
            ],
        )

    def test_invalid_selection_is_reported_and_loop_continues(self):
        for selection in ("0", "6", "abc", ""):
            self.assertTrue(self.app.dispatch(selection))
        self.assertEqual(
            self.console.output, ["Invalid command index. Please try again."] * 4
        )

    def test_quit_stops_the_loop(self):
        self.console.feed("9", "5", "1")
        self.app.run()
        self.assertIn("Invalid command index. Please try again.", self.console.output)
        self.assertEqual(self.console.output[-1], "Goodbye.")
        # The selection after Quit is never read.
        self.assertEqual(self.console.inputs, ["1"])

    def test_run_stops_when_input_is_exhausted(self):
        self.console.feed("2", "alice")
        self.app.run()
        self.assertEqual(self.player_repo.read_all_players(), [])

    def test_failing_command_does_not_stop_the_loop(self):
        app = CommandDispatcher([BrokenCommand(), QuitCommand(self.console)], self.console)
        self.console.feed("1", "2")
        with self.assertLogs("interfaces.console.dispatcher", level="ERROR"):
            app.run()
        self.assertIn("Command failed: boom", self.console.output)
        self.assertEqual(self.console.output[-1], "Goodbye.")

    def test_end_to_end_standard_win(self):
        self.console.feed(
            "2", "alice", "1000", "standard",
            "4", "alice", "bob", "1000", "Win",
            "1",
            "5",
        )
        self.app.run()

        self.assertIn("Game recorded successfully.", self.console.output)
        self.assertIn(
            "Player ID: 1, Username: alice, Current Rating: 1016", self.console.output
        )
        alice = self.player_repo.read_all_players()[0]
        games = self.game_repo.read_games_for_player(alice.id)
        self.assertEqual(len(games), 1)
        self.assertEqual(games[0].player_id, alice.id)
        self.assertEqual(games[0].opponent_name, "bob")
        self.assertEqual(games[0].outcome, GameOutcome.WIN)

    def test_loss_against_far_stronger_opponent_is_recorded(self):
        self.console.feed(
            "2", "alice", "1000", "standard",
            "4", "alice", "bob", "1000000", "Loss",
            "5",
        )
        self.app.run()

        self.assertIn("Game recorded successfully.", self.console.output)
        self.assertFalse(any(line.startswith("Command failed") for line in self.console.output))
        alice = self.player_repo.read_all_players()[0]
        self.assertEqual(alice.current_rating, 999)
        self.assertEqual(len(self.game_repo.read_games_for_player(alice.id)), 1)

    def test_end_to_end_invalid_account_type(self):
        self.console.feed("2", "wizardry", "1000", "wizard", "1", "5")
        self.app.run()

        self.assertIn("Invalid account type. Player not created.", self.console.output)
        header = self.console.output.index("All Players:")
        self.assertEqual(self.console.output[header + 1], "")
        self.assertEqual(self.player_repo.read_all_players(), [])


if __name__ == "__main__":
    unittest.main()
