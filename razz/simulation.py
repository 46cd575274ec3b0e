from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .cards import Card, InvalidInput, format_rank
from .deck import Deck
from .evaluator import razz_rank
from .hand import Hand, place_by_rank
from .models import RAZZ_RANKS, Rank, SimulationConfig

LOGGER = logging.getLogger("razz_sim")

RankListener = Callable[[Rank], None]

# simulate_razz_game plays one hand per trial: fresh deck, strip the known
# cards, fill my hand to seven, reduce it, report the rank. Nothing is shared
# between trials except the listener.


@dataclass(frozen=True)
class DecidedCards:
    """Cards known before dealing: my up-cards and the opponents' exposed cards."""

    mine: Tuple[Card, ...] = ()
    opponents: Tuple[Card, ...] = ()

    @classmethod
    def build(
        cls,
        mine: Iterable[Card] = (),
        opponents: Iterable[Card] = (),
        config: Optional[SimulationConfig] = None,
    ) -> "DecidedCards":
        config = config or SimulationConfig()
        mine = tuple(mine)
        opponents = tuple(opponents)

        if len(mine) > config.max_own_cards:
            raise InvalidInput(f"Too many own cards: {len(mine)} > {config.max_own_cards}")
        if len(opponents) > config.max_opponent_cards:
            raise InvalidInput(
                f"Too many opponent cards: {len(opponents)} > {config.max_opponent_cards}"
            )

        seen = set()
        for card in mine + opponents:
            if card in seen:
                raise InvalidInput(f"Duplicate card: {card.label}")
            seen.add(card)
        return cls(mine=mine, opponents=opponents)

    def all_cards(self) -> Tuple[Card, ...]:
        return self.mine + self.opponents


def strip_deck(deck: Deck, decided: DecidedCards) -> None:
    for card in decided.all_cards():
        deck.strip_card(card)


def complete_hand(hand: Hand, decided: DecidedCards, deck: Deck) -> bool:
    """Insert my decided cards, then deal until the hand is full."""
    for card in decided.mine:
        hand.insert(card)
    while not hand.is_full:
        card = deck.deal()
        if card is None:
            LOGGER.error("Deck exhausted with %s/%s cards in hand", len(hand), hand.max)
            return False
        hand.insert(card)
    return True


def simulate_razz_game(
    decided: DecidedCards,
    game_count: int,
    listener: RankListener,
    rng: Optional[random.Random] = None,
    config: Optional[SimulationConfig] = None,
) -> bool:
    """Run ``game_count`` independent deals, reporting each rank to ``listener``.

    Returns False if a trial could not be completed.
    """
    config = config or SimulationConfig()
    if rng is None:
        rng = random.Random(config.seed)

    hand = Hand(config.hand_size, place_by_rank)
    for game in range(game_count):
        deck = Deck.create_shuffled(rng)
        strip_deck(deck, decided)
        if not complete_hand(hand, decided, deck):
            LOGGER.error("Simulation aborted at game %s of %s", game + 1, game_count)
            deck.destroy()
            return False
        listener(razz_rank(hand, config.qualifying_cards))
        hand.reset()
        deck.destroy()

    LOGGER.debug("Simulated %s games", game_count)
    return True


@dataclass
class RankTally:
    """Listener counting how often each Razz rank came up."""

    games: int = 0
    excluded: int = 0
    counts: Dict[Rank, int] = field(default_factory=lambda: {rank: 0 for rank in RAZZ_RANKS})

    def __call__(self, rank: Rank) -> None:
        self.games += 1
        if rank not in self.counts:
            self.excluded += 1
            return
        self.counts[rank] += 1

    def probability(self, rank: Rank) -> float:
        if self.games == 0:
            return 0.0
        return self.counts.get(rank, 0) / self.games

    def probability_or_better(self, rank: Rank) -> float:
        if self.games == 0:
            return 0.0
        matches = sum(count for tracked, count in self.counts.items() if tracked <= rank)
        return matches / self.games

    def probabilities(self) -> Dict[Rank, float]:
        return {rank: self.probability(rank) for rank in RAZZ_RANKS}

    def merge(self, other: "RankTally") -> None:
        self.games += other.games
        self.excluded += other.excluded
        for rank, count in other.counts.items():
            self.counts[rank] = self.counts.get(rank, 0) + count


def _warn_excluded(tally: RankTally) -> None:
    if tally.excluded:
        LOGGER.warning(
            "%s of %s games had no qualifying low and were left out of the tally",
            tally.excluded,
            tally.games,
        )


def report_lines(tally: RankTally) -> List[str]:
    """One "<rank> <probability>" line per tracked rank, 5 through K."""
    _warn_excluded(tally)
    return [f"{format_rank(rank)} {tally.probability(rank):.4f}" for rank in RAZZ_RANKS]


def report_probability(tally: RankTally, rank: Rank, or_better: bool = False) -> str:
    _warn_excluded(tally)
    value = tally.probability_or_better(rank) if or_better else tally.probability(rank)
    return f"{value:.4f}"
