from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class Suit(IntEnum):
    SPADE = 0
    HEART = 1
    DIAMOND = 2
    CLUB = 3


class Rank(IntEnum):
    # Ace is the lowest rank everywhere in Razz.
    ACE = 0
    R2 = 1
    R3 = 2
    R4 = 3
    R5 = 4
    R6 = 5
    R7 = 6
    R8 = 7
    R9 = 8
    R10 = 9
    J = 10
    Q = 11
    K = 12
    INVALID = 13


PLAYABLE_RANKS = tuple(rank for rank in Rank if rank is not Rank.INVALID)
# A five-card low can never be worse than K or better than 5.
RAZZ_RANKS = tuple(rank for rank in PLAYABLE_RANKS if Rank.R5 <= rank <= Rank.K)


class IterAction(str, Enum):
    CONTINUE = "CONTINUE"
    BREAK = "BREAK"
    REMOVE_AND_CONTINUE = "REMOVE_AND_CONTINUE"
    REMOVE_AND_BREAK = "REMOVE_AND_BREAK"

    @property
    def removes(self) -> bool:
        return self in (IterAction.REMOVE_AND_CONTINUE, IterAction.REMOVE_AND_BREAK)

    @property
    def stops(self) -> bool:
        return self in (IterAction.BREAK, IterAction.REMOVE_AND_BREAK)


@dataclass
class SimulationConfig:
    game_count: int = 10_000
    seed: Optional[int] = None
    hand_size: int = 7
    qualifying_cards: int = 5
    max_own_cards: int = 3
    max_opponent_cards: int = 7
