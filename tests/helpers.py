from __future__ import annotations

import random
from typing import Iterable, List

from razz.cards import parse_cards
from razz.collection import Placement
from razz.deck import Deck
from razz.hand import Hand, place_by_rank


def make_hand(labels: Iterable[str], max_cards: int = 7, placement: Placement = place_by_rank) -> Hand:
    """Build a hand and insert the labelled cards in the given order."""
    hand = Hand(max_cards, placement)
    for card in parse_cards(labels):
        hand.insert(card)
    return hand


def labels_of(hand: Hand) -> List[str]:
    return [card.label for card in hand.cards()]


def seeded_deck(seed: int = 3) -> Deck:
    return Deck.create_shuffled(random.Random(seed))


def deal_all(deck: Deck) -> List[str]:
    """Deal until exhaustion and return the labels in dealing order."""
    dealt = []
    while True:
        card = deck.deal()
        if card is None:
            return dealt
        dealt.append(card.label)
