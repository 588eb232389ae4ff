import logging
import random
from dataclasses import dataclass

from beatdeck.Interface import Interface

logger = logging.getLogger(__name__)

GRID_SIZE = 9
DECK_SIZE = 52
DRAW_PILE_SIZE = DECK_SIZE - GRID_SIZE

HIGHER = "higher"
LOWER = "lower"
LEFT = "left"
RIGHT = "right"

IN_PROGRESS = "in_progress"
WON = "won"
LOST = "lost"

VALUES = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "JACK", "QUEEN", "KING", "ACE")
SUITS = ("SPADES", "HEARTS", "CLUBS", "DIAMONDS")
SUIT_SYMBOLS = {"SPADES": "♠", "HEARTS": "♥", "CLUBS": "♣", "DIAMONDS": "♦"}
FACE_VALUES = {"JACK": 11, "QUEEN": 12, "KING": 13, "ACE": 14}


class InvalidDeckError(Exception):
    pass


def rankValue(value: str) -> int:
    if value in FACE_VALUES:
        return FACE_VALUES[value]
    if value not in VALUES:
        raise ValueError(f"unknown card value: {value!r}")
    return int(value)


@dataclass(frozen=True)
class Card:
    value: str
    suit: str
    code: str = ""
    image: str = ""

    def __post_init__(self):
        rankValue(self.value)

    @property
    def rank(self) -> int:
        return rankValue(self.value)

    def label(self):
        if self.value in FACE_VALUES:
            return self.value[0]
        return self.value

    def gameStr(self):
        return self.label() + SUIT_SYMBOLS.get(self.suit, "?")

    def color(self):
        if self.suit in ("HEARTS", "DIAMONDS"):
            return "red"
        return "black"

    def toCode(self):
        if self.code:
            return self.code
        value = "0" if self.value == "10" else self.value[0]
        return value + self.suit[0]

    @staticmethod
    def fromCode(code: str):
        """
        Builds a card from a two character code such as "KH" or "0D" (ten of diamonds).
        """
        code = code.strip().upper()
        if len(code) != 2:
            raise ValueError(f"invalid card code: {code!r}")
        v, s = code[0], code[1]
        if v == "0":
            value = "10"
        elif v.isdigit():
            value = v
        else:
            value = next((name for name in FACE_VALUES if name[0] == v), v)
        suit = next((name for name in SUITS if name[0] == s), None)
        if suit is None:
            raise ValueError(f"invalid card suit: {code!r}")
        return Card(value, suit, code)


def standardDeck():
    return [Card(value, suit) for suit in SUITS for value in VALUES]


def encodeDeck(cards) -> str:
    return ",".join(card.toCode() for card in cards)


def decodeDeck(code: str):
    if not code.strip():
        return []
    return [Card.fromCode(c) for c in code.split(",")]


class StackState:
    def __init__(self, card: Card, flipped=False):
        self.card = card
        self.flipped = flipped

    def flip(self):
        self.flipped = True

    def __repr__(self):
        return f"StackState({self.card.gameStr()}, flipped={self.flipped})"


class GameState:
    """
    All mutable state of one game. A restart builds a new instance instead of resetting this one.
    """

    def __init__(self, stacks, drawPile):
        self.stacks: list[StackState] = stacks
        self.drawPile: list[Card] = drawPile
        self.selectedIndex = None
        self.status = IN_PROGRESS
        self.result = ""

    @staticmethod
    def fromDeck(deck):
        deck = list(deck)
        if len(deck) != DECK_SIZE:
            raise InvalidDeckError(f"expected {DECK_SIZE} cards, got {len(deck)}")
        stacks = [StackState(card) for card in deck[:GRID_SIZE]]
        return GameState(stacks, deck[GRID_SIZE:])

    def allFlipped(self):
        return all(stack.flipped for stack in self.stacks)

    def isSelectable(self, index):
        if not isinstance(index, int) or isinstance(index, bool):
            return False
        if index < 0 or index >= len(self.stacks):
            return False
        return not self.stacks[index].flipped


@dataclass(frozen=True)
class GuessOutcome:
    applicable: bool
    correct: bool
    drawnCard: Card | None
    resultingStatus: str
    index: int | None = None

    @staticmethod
    def notApplicable(status):
        return GuessOutcome(False, False, None, status)


class GameEvent:
    pass


class SelectStack(GameEvent):
    def __init__(self, index):
        self.index = index


class GuessCard(GameEvent):
    def __init__(self, direction, outcome: GuessOutcome):
        self.direction = direction
        self.outcome = outcome


class FlipStack(GameEvent):
    def __init__(self, index):
        self.index = index


class GameEngine:
    """
    Owns one game. Input layers call selectStack / guess / the navigation helpers;
    every call runs to completion and reports to the registered interface.

    Calls whose preconditions are not met (no selection, empty pile, finished game)
    are no-ops and never raise.
    """

    def __init__(self, deckSource=None, rng: random.Random | None = None):
        self.interface = Interface()
        self.interface.core = self
        self.deckSource = deckSource
        self.rng = rng if rng is not None else random.Random()
        self.state: GameState | None = None

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    @property
    def remainingCount(self):
        if self.state is None:
            return 0
        return len(self.state.drawPile)

    @property
    def isOver(self):
        return self.state is not None and self.state.status != IN_PROGRESS

    def isInProgress(self):
        return self.state is not None and self.state.status == IN_PROGRESS

    def initialize(self, deck) -> GameState:
        self.state = GameState.fromDeck(deck)
        logger.info("New game: %s on the grid, %d in the draw pile",
                    " ".join(s.card.gameStr() for s in self.state.stacks), len(self.state.drawPile))
        self.interface.onStart()
        self.interface.notifyRedraw()
        return self.state

    def startGame(self, deckSource=None) -> GameState:
        if deckSource is not None:
            self.deckSource = deckSource
        if self.deckSource is None:
            raise Exception("deck source is null")
        deck = self.deckSource.drawShuffledDeck()
        return self.initialize(deck)

    def restart(self) -> GameState:
        return self.startGame()

    def selectStack(self, index) -> bool:
        if not self.isInProgress():
            return False
        if not self.state.isSelectable(index):
            return False
        self.state.selectedIndex = index
        self.interface.onEvent(SelectStack(index))
        return True

    def selectByIndex(self, index) -> bool:
        return self.selectStack(index)

    def selectAdjacent(self, direction) -> bool:
        if not self.isInProgress() or self.state.selectedIndex is None:
            return False
        if direction == LEFT:
            step = -1
        elif direction == RIGHT:
            step = 1
        else:
            return False
        count = len(self.state.stacks)
        idx = self.state.selectedIndex
        for _ in range(count):
            idx = (idx + step) % count
            if not self.state.stacks[idx].flipped:
                return self.selectStack(idx)
        return False

    def guess(self, direction) -> GuessOutcome:
        state = self.state
        if state is None:
            return GuessOutcome.notApplicable(IN_PROGRESS)
        if (state.status != IN_PROGRESS or state.selectedIndex is None
                or len(state.drawPile) == 0 or direction not in (HIGHER, LOWER)):
            return GuessOutcome.notApplicable(state.status)

        index = state.selectedIndex
        stack = state.stacks[index]
        nextCard = state.drawPile.pop(0)
        topValue = stack.card.rank
        newValue = nextCard.rank
        correct = (direction == HIGHER and newValue > topValue) or (direction == LOWER and newValue < topValue)
        logger.debug("Guess %s on stack %d: %s -> %s (%s)", direction, index,
                     stack.card.gameStr(), nextCard.gameStr(), "correct" if correct else "wrong")

        stack.card = nextCard
        flippedNow = False
        if not correct:
            stack.flip()
            state.selectedIndex = None
            flippedNow = True

        if flippedNow and state.allFlipped():
            state.status = LOST
        elif len(state.drawPile) == 0:
            if correct:
                state.status = WON
            else:
                stack.flip()
                state.status = LOST

        outcome = GuessOutcome(True, correct, nextCard, state.status, index)
        self.interface.onEvent(GuessCard(direction, outcome))
        if flippedNow:
            self.interface.onEvent(FlipStack(index))
        if state.status != IN_PROGRESS:
            self.finishGame()
        return outcome

    def randomGuess(self, pickDirection=None) -> GuessOutcome:
        if pickDirection is None:
            pickDirection = self.randomDirection
        return self.guess(pickDirection())

    def randomDirection(self):
        return self.rng.choice((HIGHER, LOWER))

    def finishGame(self):
        state = self.state
        if state.status == WON:
            state.result = "win"
            logger.info("Game won with every card of the draw pile played")
            self.interface.onWin()
        else:
            state.result = "lose"
            logger.info("Game lost with %d cards left in the draw pile", len(state.drawPile))
            self.interface.onLose()
