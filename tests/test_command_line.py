import tempfile
import unittest
from pathlib import Path

from beatdeck.CommandLine import CommandLineInterface
from beatdeck.Core import LOST, Card, GameEngine, encodeDeck, standardDeck
from beatdeck.DeckSource import DeckSourceError, LocalDeckSource


class FailingSource:
    def drawShuffledDeck(self):
        raise DeckSourceError("offline")


class CommandLineTestCase(unittest.TestCase):
    def make_cli(self, source=None):
        lines = []
        cli = CommandLineInterface(out=lines.append)
        core = GameEngine(source or LocalDeckSource(code=encodeDeck(standardDeck())))
        core.registerInterface(cli)
        core.startGame()
        return cli, core, lines

    def test_start_prints_grid(self):
        _, _, lines = self.make_cli()
        self.assertEqual("Game started!", lines[0])
        self.assertIn("Cards remaining in deck: 43", lines)
        self.assertTrue(any("2♠" in line for line in lines))

    def test_select_and_guess(self):
        cli, core, lines = self.make_cli()
        self.assertTrue(cli.execute("sel 1"))
        self.assertIn("Stack 1 selected", lines)
        self.assertTrue(cli.execute("hi"))
        self.assertEqual(Card("JACK", "SPADES"), core.state.stacks[0].card)
        self.assertIn("Cards remaining in deck: 42", lines)
        self.assertTrue(cli.execute("right"))
        self.assertEqual(1, core.state.selectedIndex)

    def test_rejected_commands(self):
        cli, core, lines = self.make_cli()
        self.assertFalse(cli.execute("hi"))
        self.assertFalse(cli.execute("sel 0"))
        self.assertFalse(cli.execute("sel x"))
        self.assertFalse(cli.execute("left"))
        self.assertFalse(cli.execute("jump"))
        self.assertFalse(cli.execute(""))
        self.assertEqual(43, core.remainingCount)

    def test_loss_is_reported(self):
        cli, core, lines = self.make_cli()
        for i in range(8):
            core.state.stacks[i].flip()
        cli.execute("sel 9")
        core.state.drawPile.insert(0, Card("2", "CLUBS"))
        cli.execute("hi")
        self.assertEqual(LOST, core.state.status)
        self.assertEqual("You lost.", lines[-1])

    def test_new_game_after_source_failure(self):
        cli, core, lines = self.make_cli()
        core.deckSource = FailingSource()
        self.assertFalse(cli.execute("new"))
        self.assertIn("offline", lines[-1])

    def test_new_game_with_short_deck_is_reported(self):
        cli, core, lines = self.make_cli()
        first = core.state
        core.deckSource = LocalDeckSource(code="2S,3S")
        self.assertFalse(cli.execute("new"))
        self.assertEqual("Could not get a new deck: expected 52 cards, got 2", lines[-1])
        self.assertIs(first, core.state)

    def test_snap_to_unwritable_path(self):
        cli, _, lines = self.make_cli()
        with tempfile.TemporaryDirectory() as td:
            blocker = Path(td) / "not_a_dir"
            blocker.write_text("x", encoding="utf-8")
            self.assertFalse(cli.execute(f"snap {blocker / 'board.png'}"))
        self.assertTrue(lines[-1].startswith("Cannot save image!"))

    def test_snap_writes_image(self):
        cli, _, lines = self.make_cli()
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "board.png"
            self.assertTrue(cli.execute(f"snap {path}"))
            self.assertTrue(path.exists())
        self.assertFalse(cli.execute("snap"))


if __name__ == "__main__":
    unittest.main()
