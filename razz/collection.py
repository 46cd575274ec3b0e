from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

from .cards import Card

LOGGER = logging.getLogger("razz_collection")

# place(before, candidate, after): before/after are None at the ring boundaries.
Placement = Callable[[Optional[Card], Card, Optional[Card]], bool]
Destructor = Callable[[Card], None]

_END = -1

# Collection is a sorted ring of card references kept in an index arena.
# Entries are addressed by stable integer ids; prev/next are parallel lists so
# no Python object ever owns a reference cycle.


@dataclass
class Cursor:
    # entry is None before the first element and after the last one.
    entry: Optional[int] = None
    version: int = 0


class Collection:
    def __init__(self, capacity: Optional[int] = None) -> None:
        self.capacity = capacity
        self.head: Optional[int] = None
        self._cards: List[Optional[Card]] = []
        self._prev: List[int] = []
        self._next: List[int] = []
        self._free: List[int] = []
        self._live: List[bool] = []
        self._size = 0
        self._version = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards())

    def cards(self) -> List[Card]:
        """Snapshot of the payloads in ring order."""
        result: List[Card] = []
        cursor = self.cursor()
        while self.iterate(cursor):
            result.append(self.card_at(cursor.entry))
        return result

    # Arena -----------------------------------------------------------

    def _allocate(self, card: Card) -> Optional[int]:
        if self.capacity is not None and self._size >= self.capacity:
            return None
        if self._free:
            entry = self._free.pop()
            self._cards[entry] = card
            self._prev[entry] = entry
            self._next[entry] = entry
            self._live[entry] = True
        else:
            entry = len(self._cards)
            self._cards.append(card)
            self._prev.append(entry)
            self._next.append(entry)
            self._live.append(True)
        self._size += 1
        return entry

    def _release(self, entry: int) -> None:
        self._cards[entry] = None
        self._live[entry] = False
        self._free.append(entry)
        self._size -= 1

    def _link_after(self, anchor: int, entry: int) -> None:
        following = self._next[anchor]
        self._prev[entry] = anchor
        self._next[entry] = following
        self._next[anchor] = entry
        self._prev[following] = entry
        self._version += 1

    # Mutation --------------------------------------------------------

    def insert(self, card: Card, place: Placement) -> bool:
        """Insert ``card`` at the first slot ``place`` accepts.

        Returns False when no entry can be obtained (capacity exhausted) or no
        slot is accepted; the ring is left unchanged in both cases.
        """
        entry = self._allocate(card)
        if entry is None:
            LOGGER.debug("Collection full at %s entries; dropping %s", self.capacity, card)
            return False

        head = self.head
        if head is None:
            self.head = entry
            self._version += 1
            return True

        if place(None, card, self._cards[head]):
            self._link_after(self._prev[head], entry)
            self.head = entry
            return True

        itr = head
        while self._next[itr] != head:
            following = self._next[itr]
            if place(self._cards[itr], card, self._cards[following]):
                self._link_after(itr, entry)
                return True
            itr = following

        if place(self._cards[itr], card, None):
            self._link_after(itr, entry)
            return True

        self._release(entry)
        return False

    def detach(self, entry: int) -> None:
        """Splice ``entry`` out of the ring and give its slot back.

        Head moves on to the successor (or clears) when ``entry`` was head.
        The entry keeps its payload and its own prev/next links until a later
        insert reuses the slot, so a holder can still step from it.
        """
        if not (0 <= entry < len(self._live) and self._live[entry]):
            raise RuntimeError(f"No live entry at {entry}")

        if self._next[entry] == entry:
            self.head = None
        else:
            before = self._prev[entry]
            after = self._next[entry]
            self._next[before] = after
            self._prev[after] = before
            if entry == self.head:
                self.head = after
        self._live[entry] = False
        self._free.append(entry)
        self._size -= 1
        self._version += 1

    def remove_under_iterator(self, cursor: Cursor) -> Card:
        """Remove the element under ``cursor`` and rewind the cursor.

        The next ``iterate`` call lands on the element that followed the
        removed one. This is the only supported way to delete while iterating.
        """
        self._check(cursor)
        entry = cursor.entry
        if entry is None:
            raise RuntimeError("Cursor is not on an element")

        card = self.card_at(entry)
        was_head = entry == self.head
        self.detach(entry)
        if self.head is None or was_head:
            cursor.entry = None
        else:
            cursor.entry = self._prev[entry]
        self._cards[entry] = None
        cursor.version = self._version
        return card

    def destroy_all(self, destructor: Optional[Destructor] = None) -> None:
        if self.head is not None:
            entry = self.head
            self.head = None
            self._next[self._prev[entry]] = _END  # break the ring
            while entry != _END:
                following = self._next[entry]
                card = self._cards[entry]
                if destructor is not None and card is not None:
                    destructor(card)
                self._release(entry)
                entry = following

        self._cards.clear()
        self._prev.clear()
        self._next.clear()
        self._free.clear()
        self._live.clear()
        self._size = 0
        self._version += 1

    # Iteration -------------------------------------------------------

    def cursor(self) -> Cursor:
        return Cursor(entry=None, version=self._version)

    def iterate(self, cursor: Cursor) -> bool:
        """Advance ``cursor``; return whether it now rests on an element."""
        self._check(cursor)
        if self.head is None:
            cursor.entry = None
            return False

        if cursor.entry is None:
            cursor.entry = self.head
        else:
            cursor.entry = self._next[cursor.entry]
            if cursor.entry == self.head:
                cursor.entry = None
        return cursor.entry is not None

    def card_at(self, entry: Optional[int]) -> Card:
        card = self._cards[entry] if entry is not None and 0 <= entry < len(self._cards) else None
        if card is None:
            raise RuntimeError(f"No live entry at {entry}")
        return card

    def _check(self, cursor: Cursor) -> None:
        # A cursor may only advance over a ring nobody else has changed.
        if cursor.version != self._version:
            raise RuntimeError("Collection modified outside of this cursor")
