import json
import logging
import random
from urllib.error import URLError
from urllib.request import urlopen

from beatdeck.Core import DRAW_PILE_SIZE, GRID_SIZE, Card, decodeDeck, standardDeck

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://deckofcardsapi.com/api/deck"
DEFAULT_TIMEOUT = 10.0


class DeckSourceError(Exception):
    pass


class DeckSource:
    def drawShuffledDeck(self) -> list[Card]:
        raise NotImplementedError


class LocalDeckSource(DeckSource):
    """
    Shuffles a standard deck in process. A fixed `code` (see encodeDeck) replaces the shuffle.
    """

    def __init__(self, seed=None, code=None, rng: random.Random | None = None):
        self.seed = seed
        self.code = code
        self.rng = rng if rng is not None else random.Random(seed)

    def drawShuffledDeck(self):
        if self.code:
            try:
                return decodeDeck(self.code)
            except ValueError as e:
                raise DeckSourceError(f"invalid deck code: {e}") from e
        deck = standardDeck()
        self.rng.shuffle(deck)
        return deck


def cardFromRecord(record: dict) -> Card:
    try:
        return Card(
            value=str(record["value"]).upper(),
            suit=str(record["suit"]).upper(),
            code=str(record.get("code", "")),
            image=str(record.get("image", "")),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise DeckSourceError(f"unreadable card record {record!r}") from e


class DeckOfCardsApiSource(DeckSource):
    """
    Client for the deckofcardsapi.com service: one shuffled deck, drawn as the 9 grid
    cards followed by the 43 cards of the draw pile.
    """

    def __init__(self, apiUrl=DEFAULT_API_URL, timeout=DEFAULT_TIMEOUT):
        self.apiUrl = apiUrl.rstrip("/")
        self.timeout = timeout
        self.deckId = None

    def _get(self, path):
        url = f"{self.apiUrl}/{path}"
        logger.debug("GET %s", url)
        try:
            with urlopen(url, timeout=self.timeout) as resp:
                data = json.loads(resp.read().decode("utf-8"))
        except (URLError, OSError) as e:
            logger.warning("Deck service request failed: %s", e)
            raise DeckSourceError(f"request to {url} failed: {e}") from e
        except ValueError as e:
            logger.warning("Deck service returned invalid JSON: %s", e)
            raise DeckSourceError(f"invalid response from {url}") from e
        if not isinstance(data, dict) or not data.get("success", False):
            raise DeckSourceError(f"deck service reported failure for {url}: {data!r}")
        return data

    def _draw(self, deckId, count):
        data = self._get(f"{deckId}/draw/?count={count}")
        cards = data.get("cards")
        if not isinstance(cards, list) or len(cards) != count:
            raise DeckSourceError(f"expected {count} cards from the deck service")
        return [cardFromRecord(c) for c in cards]

    def drawShuffledDeck(self):
        data = self._get("new/shuffle/?deck_count=1")
        deckId = data.get("deck_id")
        if not deckId:
            raise DeckSourceError("deck service returned no deck id")
        self.deckId = deckId
        grid = self._draw(deckId, GRID_SIZE)
        rest = self._draw(deckId, DRAW_PILE_SIZE)
        deck = grid + rest
        logger.debug("Drew %d cards from deck %s", len(deck), deckId)
        return deck


def makeDeckSource(settings: dict) -> DeckSource:
    if settings.get("deck_source") == "remote":
        try:
            timeout = float(settings.get("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError):
            timeout = DEFAULT_TIMEOUT
        return DeckOfCardsApiSource(settings.get("api_url") or DEFAULT_API_URL, timeout)
    seed = settings.get("seed")
    try:
        seed = int(seed) if seed not in (None, "") else None
    except ValueError:
        seed = None
    return LocalDeckSource(seed=seed, code=settings.get("deck_code") or None)
