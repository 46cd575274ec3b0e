from __future__ import annotations

import logging
import random
from typing import List, Optional

from .cards import CARD_COUNT, UNIVERSE, Card
from .collection import Collection
from .hand import place_after

LOGGER = logging.getLogger("razz_deck")

# Deck keeps a 52-slot presence bitmap. Nothing is shuffled up front: every
# deal() draws uniformly among the slots still present, so the full dealing
# order is a uniform permutation as long as the rng is uniform on each range.


class Deck:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self._present: List[bool] = [True] * CARD_COUNT
        self._remaining = CARD_COUNT
        self._withdrawn = Collection(capacity=CARD_COUNT)

    @classmethod
    def create_shuffled(cls, rng: Optional[random.Random] = None) -> "Deck":
        return cls(rng)

    @property
    def remaining(self) -> int:
        return self._remaining

    def withdrawn(self) -> List[Card]:
        """Dealt and stripped cards, in the order they left the deck."""
        return self._withdrawn.cards()

    def is_available(self, card: Card) -> bool:
        return self._present[card.index]

    def deal(self) -> Optional[Card]:
        if self._remaining == 0:
            return None

        target = self.rng.randrange(self._remaining)
        seen = 0
        for index, present in enumerate(self._present):
            if not present:
                continue
            if seen == target:
                return self._withdraw(index)
            seen += 1

        raise RuntimeError("Deck bitmap out of sync with remaining count")

    def strip_card(self, card: Card) -> None:
        if self._present[card.index]:
            self._withdraw(card.index)

    def destroy(self) -> None:
        self._withdrawn.destroy_all()
        self._present = [False] * CARD_COUNT
        self._remaining = 0

    def _withdraw(self, index: int) -> Card:
        card = UNIVERSE[index]
        self._present[index] = False
        self._remaining -= 1
        if not self._withdrawn.insert(card, place_after):
            LOGGER.error("Could not record %s as withdrawn", card)
        return card
