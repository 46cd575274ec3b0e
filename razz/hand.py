from __future__ import annotations

from typing import Callable, List, Optional, Tuple, TypeVar

from .cards import Card
from .collection import Collection, Placement
from .models import IterAction, Rank

T = TypeVar("T")

HandVisitor = Callable[[int, int, Card], IterAction]
HandFolder = Callable[[T, int, int, Card], Tuple[IterAction, T]]


def place_after(before: Optional[Card], new: Card, after: Optional[Card]) -> bool:
    """Append at the end: keeps insertion order."""
    return after is None


def place_by_rank(before: Optional[Card], new: Card, after: Optional[Card]) -> bool:
    """Ascending by rank; equal ranks keep insertion order."""
    if after is None:
        return True
    return (before is None or before.rank <= new.rank) and new.rank < after.rank


class Hand:
    """Bounded, sorted set of card references.

    The hand never owns its cards: reset() and removals only forget them.
    """

    def __init__(self, max_cards: int, placement: Placement = place_after) -> None:
        self.max = max_cards
        self.placement = placement
        self._cards = Collection(capacity=max_cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Hand({' '.join(card.label for card in self._cards)})"

    @property
    def is_full(self) -> bool:
        return len(self._cards) >= self.max

    def cards(self) -> List[Card]:
        return self._cards.cards()

    def insert(self, card: Card) -> bool:
        # Full hands drop the card; callers check capacity first.
        if self.is_full:
            return False
        return self._cards.insert(card, self.placement)

    def remove(self, card: Card) -> int:
        """Remove every entry equal to ``card``; return how many went."""
        removed = 0
        cursor = self._cards.cursor()
        while self._cards.iterate(cursor):
            if self._cards.card_at(cursor.entry) == card:
                self._cards.remove_under_iterator(cursor)
                removed += 1
        return removed

    def iterate(self, visitor: HandVisitor) -> None:
        """Call ``visitor(len, pos, card)`` for each card in order."""

        def adapt(acc: None, length: int, pos: int, card: Card) -> Tuple[IterAction, None]:
            return visitor(length, pos, card), acc

        self.fold(adapt, None)

    def fold(self, visitor: HandFolder, acc: T) -> T:
        """Like iterate(), threading ``acc`` through every call.

        A removal does not advance the position: the card that slides into the
        removed slot is reported at the same position with the shorter length.
        """
        cursor = self._cards.cursor()
        pos = 0
        while self._cards.iterate(cursor):
            card = self._cards.card_at(cursor.entry)
            action, acc = visitor(acc, len(self._cards), pos, card)
            if action.removes:
                self._cards.remove_under_iterator(cursor)
            else:
                pos += 1
            if action.stops:
                break
        return acc

    def max_rank(self) -> Rank:
        best = Rank.INVALID
        for card in self._cards:
            if best is Rank.INVALID or card.rank > best:
                best = card.rank
        return best

    def reset(self) -> None:
        self._cards.destroy_all()
