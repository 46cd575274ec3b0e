#!/usr/bin/env python3
"""Check that the first card off a fresh deck is uniformly distributed.

Deals one card from each of many freshly created decks and compares the
52 observed counts against the flat expectation with a chi-square statistic.

Example:
    python scripts/deal_uniformity.py --rounds 1000 --seed 3
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List

from razz.cards import CARD_COUNT, UNIVERSE
from razz.deck import Deck

LOGGER = logging.getLogger("deal_uniformity")

# 99.9th percentile of chi-square with 51 degrees of freedom.
CHI_SQUARE_LIMIT = 86.66


def first_card_counts(deals: int, rng: random.Random) -> List[int]:
    counts = [0] * CARD_COUNT
    for _ in range(deals):
        deck = Deck.create_shuffled(rng)
        card = deck.deal()
        assert card is not None
        counts[card.index] += 1
        deck.destroy()
    return counts


def chi_square(counts: List[int]) -> float:
    expected = sum(counts) / len(counts)
    return sum((observed - expected) ** 2 / expected for observed in counts)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chi-square check of single-card deal uniformity")
    parser.add_argument("--rounds", type=int, default=1_000, help="deals per card (total = rounds * 52)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    counts = first_card_counts(args.rounds * CARD_COUNT, random.Random(args.seed))
    for card, count in zip(UNIVERSE, counts):
        LOGGER.debug("%4s %d", card.label, count)

    statistic = chi_square(counts)
    LOGGER.info("min=%d max=%d chi2=%.2f (limit %.2f)", min(counts), max(counts), statistic, CHI_SQUARE_LIMIT)
    if statistic > CHI_SQUARE_LIMIT:
        LOGGER.warning("Deal distribution looks biased")


if __name__ == "__main__":
    main()
