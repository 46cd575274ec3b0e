import logging
import random

import pytest

from razz.cards import InvalidInput, parse_card, parse_cards
from razz.deck import Deck
from razz.hand import Hand, place_by_rank
from razz.models import RAZZ_RANKS, Rank, SimulationConfig
from razz.simulation import (
    DecidedCards,
    RankTally,
    complete_hand,
    report_lines,
    report_probability,
    simulate_razz_game,
    strip_deck,
)

from .helpers import seeded_deck


def decided(mine=("SA", "S2", "S3"), opponents=("HK", "DQ")):
    return DecidedCards.build(parse_cards(mine), parse_cards(opponents))


def test_decided_cards_reject_duplicates():
    with pytest.raises(InvalidInput, match="Duplicate card: SA"):
        DecidedCards.build(parse_cards(["SA", "S2"]), parse_cards(["sa"]))
    with pytest.raises(InvalidInput, match="Duplicate card"):
        DecidedCards.build(parse_cards(["SA", "SA"]))


def test_decided_cards_enforce_limits():
    with pytest.raises(InvalidInput, match="Too many own cards"):
        DecidedCards.build(parse_cards(["SA", "S2", "S3", "S4"]))
    with pytest.raises(InvalidInput, match="Too many opponent cards"):
        DecidedCards.build((), parse_cards(["H2", "H3", "H4", "H5", "H6", "H7", "H8", "H9"]))
    relaxed = SimulationConfig(max_own_cards=4)
    assert len(DecidedCards.build(parse_cards(["SA", "S2", "S3", "S4"]), config=relaxed).mine) == 4


def test_strip_and_complete_hand_use_only_free_cards():
    cards = decided()
    deck = seeded_deck(11)
    strip_deck(deck, cards)
    for card in cards.all_cards():
        assert not deck.is_available(card)

    hand = Hand(7, place_by_rank)
    assert complete_hand(hand, cards, deck)
    held = hand.cards()
    assert len(held) == 7
    assert len(set(held)) == 7
    for card in cards.mine:
        assert card in held
    for card in cards.opponents:
        assert card not in held
    assert deck.remaining == 52 - len(cards.all_cards()) - 4


def test_complete_hand_reports_exhausted_deck(caplog):
    deck = Deck.create_shuffled(random.Random(5))
    for card in parse_cards(["SA", "S2", "S3"]):
        deck.strip_card(card)
    while deck.remaining > 2:
        deck.deal()

    hand = Hand(7, place_by_rank)
    with caplog.at_level(logging.ERROR, logger="razz_sim"):
        assert not complete_hand(hand, DecidedCards(), deck)
    assert len(hand) == 2
    assert "Deck exhausted" in caplog.text


def test_simulation_reports_one_rank_per_game():
    ranks = []
    assert simulate_razz_game(decided(), 200, ranks.append, random.Random(1))
    assert len(ranks) == 200
    assert all(rank in RAZZ_RANKS or rank is Rank.INVALID for rank in ranks)


def test_simulation_is_reproducible_with_seed():
    first, second = [], []
    simulate_razz_game(decided(), 100, first.append, random.Random(42))
    simulate_razz_game(decided(), 100, second.append, random.Random(42))
    assert first == second

    from_config = []
    simulate_razz_game(decided(), 100, from_config.append, config=SimulationConfig(seed=42))
    assert from_config == first


def test_zero_games_never_calls_listener():
    ranks = []
    assert simulate_razz_game(decided(), 0, ranks.append, random.Random(1))
    assert ranks == []


def test_simulation_fails_when_deck_runs_dry():
    config = SimulationConfig(hand_size=60)
    ranks = []
    assert not simulate_razz_game(DecidedCards(), 3, ranks.append, random.Random(1), config)
    assert ranks == []


def test_strong_start_makes_low_hands_more_often():
    good, bad = RankTally(), RankTally()
    simulate_razz_game(decided(("SA", "S2", "S3"), ()), 2_000, good, random.Random(9))
    simulate_razz_game(decided(("SK", "HQ", "DJ"), ()), 2_000, bad, random.Random(9))
    assert good.probability_or_better(Rank.R8) > bad.probability_or_better(Rank.R8)
    assert bad.probability(Rank.R5) == 0.0
    # A K-Q-J start can never finish better than a J low.
    assert bad.probability_or_better(Rank.R10) == 0.0


def test_tally_counts_and_excludes_invalid_ranks():
    tally = RankTally()
    for rank in [Rank.R5, Rank.R8, Rank.R8, Rank.INVALID]:
        tally(rank)
    assert tally.games == 4
    assert tally.excluded == 1
    assert tally.probability(Rank.R8) == 0.5
    assert tally.probability(Rank.R5) == 0.25
    assert tally.probability(Rank.INVALID) == 0.0
    assert tally.probability_or_better(Rank.R8) == 0.75
    assert sum(tally.probabilities().values()) + tally.excluded / tally.games == pytest.approx(1.0)


def test_empty_tally_reports_zero():
    tally = RankTally()
    assert tally.probability(Rank.R5) == 0.0
    assert tally.probability_or_better(Rank.K) == 0.0


def test_tally_merge_adds_counts():
    left, right = RankTally(), RankTally()
    left(Rank.R6)
    right(Rank.R6)
    right(Rank.INVALID)
    left.merge(right)
    assert left.games == 3
    assert left.excluded == 1
    assert left.counts[Rank.R6] == 2


def test_report_lines_format_and_warning(caplog):
    tally = RankTally()
    tally(Rank.R7)
    tally(Rank.INVALID)
    with caplog.at_level(logging.WARNING, logger="razz_sim"):
        lines = report_lines(tally)
    assert lines[0] == "5 0.0000"
    assert "7 0.5000" in lines
    assert lines[-1] == "K 0.0000"
    assert len(lines) == 9
    assert "1 of 2 games" in caplog.text


def test_report_probability_formats_four_decimals(caplog):
    tally = RankTally()
    for rank in [Rank.R6, Rank.R7, Rank.R9]:
        tally(rank)
    with caplog.at_level(logging.WARNING, logger="razz_sim"):
        assert report_probability(tally, Rank.R7) == "0.3333"
        assert report_probability(tally, Rank.R7, or_better=True) == "0.6667"
    assert caplog.text == ""


def test_decided_cards_default_to_none():
    cards = DecidedCards()
    assert cards.all_cards() == ()
    assert parse_card("SA") not in cards.all_cards()
