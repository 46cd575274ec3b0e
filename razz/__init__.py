"""Razz hand evaluation and Monte-Carlo rank estimation."""

from .cards import Card, InvalidInput, format_card, format_rank, parse_card, parse_rank
from .collection import Collection, Cursor
from .deck import Deck
from .evaluator import razz_rank
from .hand import Hand, place_after, place_by_rank
from .models import IterAction, Rank, SimulationConfig, Suit
from .simulation import DecidedCards, RankTally, report_lines, report_probability, simulate_razz_game

__all__ = [
    "Card",
    "InvalidInput",
    "format_card",
    "format_rank",
    "parse_card",
    "parse_rank",
    "Collection",
    "Cursor",
    "Deck",
    "razz_rank",
    "Hand",
    "place_after",
    "place_by_rank",
    "IterAction",
    "Rank",
    "SimulationConfig",
    "Suit",
    "DecidedCards",
    "RankTally",
    "report_lines",
    "report_probability",
    "simulate_razz_game",
]
