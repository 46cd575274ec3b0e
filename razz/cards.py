from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .models import PLAYABLE_RANKS, Rank, Suit

SUIT_LETTERS = {Suit.SPADE: "S", Suit.HEART: "H", Suit.DIAMOND: "D", Suit.CLUB: "C"}
RANK_TOKENS = {
    Rank.ACE: "A",
    Rank.R2: "2",
    Rank.R3: "3",
    Rank.R4: "4",
    Rank.R5: "5",
    Rank.R6: "6",
    Rank.R7: "7",
    Rank.R8: "8",
    Rank.R9: "9",
    Rank.R10: "10",
    Rank.J: "J",
    Rank.Q: "Q",
    Rank.K: "K",
}

_SUIT_BY_LETTER = {letter: suit for suit, letter in SUIT_LETTERS.items()}
_RANK_BY_TOKEN = {token: rank for rank, token in RANK_TOKENS.items()}

CARD_COUNT = len(SUIT_LETTERS) * len(PLAYABLE_RANKS)


class InvalidInput(ValueError):
    """Malformed card or rank text, or an unusable set of decided cards."""


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        if self.suit not in SUIT_LETTERS:
            raise InvalidInput(f"Invalid suit: {self.suit!r}")
        if self.rank not in RANK_TOKENS:
            raise InvalidInput(f"Invalid rank: {self.rank!r}")

    @property
    def index(self) -> int:
        return int(self.suit) * len(PLAYABLE_RANKS) + int(self.rank)

    @property
    def label(self) -> str:
        return format_card(self)

    @classmethod
    def from_index(cls, index: int) -> "Card":
        if not 0 <= index < CARD_COUNT:
            raise InvalidInput(f"Invalid card index: {index}")
        return UNIVERSE[index]

    def __str__(self) -> str:
        return self.label


# Spade ace first, club king last; position equals Card.index.
UNIVERSE: Tuple[Card, ...] = tuple(Card(suit, rank) for suit in Suit for rank in PLAYABLE_RANKS)


def parse_rank(text: str) -> Rank:
    rank = _RANK_BY_TOKEN.get(text.strip().upper())
    if rank is None:
        raise InvalidInput(f"Invalid rank label: {text}")
    return rank


def format_rank(rank: Rank) -> str:
    token = RANK_TOKENS.get(rank)
    if token is None:
        raise InvalidInput(f"Invalid rank: {rank!r}")
    return token


def parse_card(text: str) -> Card:
    label = text.strip().upper()
    if len(label) not in (2, 3):
        raise InvalidInput(f"Invalid card label: {text}")
    suit = _SUIT_BY_LETTER.get(label[0])
    rank = _RANK_BY_TOKEN.get(label[1:])
    if suit is None or rank is None:
        raise InvalidInput(f"Invalid card label: {text}")
    return UNIVERSE[Card(suit, rank).index]


def format_card(card: Card) -> str:
    return f"{SUIT_LETTERS[card.suit]}{RANK_TOKENS[card.rank]}"


def parse_cards(labels: Iterable[str]) -> List[Card]:
    return [parse_card(label) for label in labels]


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]
