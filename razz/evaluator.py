from __future__ import annotations

import logging
from typing import Optional, Tuple

from .cards import Card, cards_to_labels, format_rank
from .hand import Hand, place_by_rank
from .models import IterAction, Rank

LOGGER = logging.getLogger("razz_evaluator")

QUALIFYING_CARDS = 5


def razz_rank(hand: Hand, qualifying_cards: int = QUALIFYING_CARDS) -> Rank:
    """Reduce a rank-sorted hand in place and return its Razz rank.

    Pairs collapse to a single card, then only the lowest ``qualifying_cards``
    survive; the rank is the highest of those. Hands with too few distinct
    ranks return Rank.INVALID. Lower is better, but comparing is up to the
    caller.
    """
    if hand.placement is not place_by_rank:
        raise RuntimeError("Razz ranking needs a hand sorted by rank")

    before = _trace(hand)
    hand.fold(_drop_paired_rank, None)
    deduped = _trace(hand)

    if len(hand) < qualifying_cards:
        LOGGER.debug("%s -> %s: too many pairs", before, deduped)
        return Rank.INVALID

    hand.fold(_keep_lowest, qualifying_cards)
    rank = hand.max_rank()
    if LOGGER.isEnabledFor(logging.DEBUG):
        LOGGER.debug("%s -> %s -> %s: %s", before, deduped, _trace(hand), format_rank(rank))
    return rank


def _drop_paired_rank(
    prev_rank: Optional[Rank], length: int, pos: int, card: Card
) -> Tuple[IterAction, Optional[Rank]]:
    # Equal ranks are contiguous in a rank-sorted hand.
    if pos > 0 and card.rank == prev_rank:
        return IterAction.REMOVE_AND_CONTINUE, prev_rank
    return IterAction.CONTINUE, card.rank


def _keep_lowest(limit: int, length: int, pos: int, card: Card) -> Tuple[IterAction, int]:
    if pos >= limit:
        return IterAction.REMOVE_AND_CONTINUE, limit
    return IterAction.CONTINUE, limit


def _trace(hand: Hand) -> str:
    if not LOGGER.isEnabledFor(logging.DEBUG):
        return ""
    return " ".join(cards_to_labels(hand.cards()))
