import unittest

from beatdeck.Core import HIGHER, Card, GameEngine, standardDeck
from beatdeck_ui.controls import dispatch_key, normalize_key


class ControlsTestCase(unittest.TestCase):
    def make_engine(self):
        engine = GameEngine()
        engine.initialize(standardDeck())
        return engine

    def test_digit_keys_select_stacks(self):
        engine = self.make_engine()
        self.assertTrue(dispatch_key(engine, "1"))
        self.assertEqual(0, engine.state.selectedIndex)
        self.assertTrue(dispatch_key(engine, "9"))
        self.assertEqual(8, engine.state.selectedIndex)
        self.assertFalse(dispatch_key(engine, "0"))

    def test_arrow_keys_navigate(self):
        engine = self.make_engine()
        self.assertFalse(dispatch_key(engine, "Right"))
        dispatch_key(engine, "9")
        self.assertTrue(dispatch_key(engine, "Right"))
        self.assertEqual(0, engine.state.selectedIndex)
        self.assertTrue(dispatch_key(engine, "a"))
        self.assertEqual(8, engine.state.selectedIndex)

    def test_guess_keys(self):
        # standard order: the grid is 2..10 of spades, the pile starts with the jack
        engine = self.make_engine()
        self.assertFalse(dispatch_key(engine, "Up"))
        dispatch_key(engine, "1")
        self.assertTrue(dispatch_key(engine, "Up"))
        self.assertEqual(Card("JACK", "SPADES"), engine.state.stacks[0].card)
        self.assertEqual(0, engine.state.selectedIndex)
        self.assertTrue(dispatch_key(engine, "l"))
        self.assertTrue(engine.state.stacks[0].flipped)
        self.assertEqual(41, engine.remainingCount)

    def test_random_key_uses_direction_provider(self):
        engine = self.make_engine()
        dispatch_key(engine, "2")
        self.assertTrue(dispatch_key(engine, " ", pick_direction=lambda: HIGHER))
        self.assertFalse(engine.state.stacks[1].flipped)

    def test_unknown_key(self):
        engine = self.make_engine()
        self.assertFalse(dispatch_key(engine, "F12"))
        self.assertEqual("space", normalize_key(" "))
        self.assertEqual("left", normalize_key("Left"))


if __name__ == "__main__":
    unittest.main()
