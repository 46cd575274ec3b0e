import argparse
import logging
import random
import sys
from typing import List, Optional

from .cards import InvalidInput, parse_cards, parse_rank
from .models import RAZZ_RANKS, SimulationConfig
from .simulation import DecidedCards, RankTally, report_lines, report_probability, simulate_razz_game

LOGGER = logging.getLogger("razz_cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="razz",
        description="Estimate the odds of finishing a Razz hand with a given low",
        epilog="Cards are a suit letter (S, H, D, C) followed by A, 2-10, J, Q or K, e.g. SA, H10, dk.",
    )
    parser.add_argument("games", type=int, help="Number of simulated games")
    parser.add_argument("-m", "--mine", nargs="*", default=[], metavar="CARD", help="My known cards (up to 3)")
    parser.add_argument(
        "-o",
        "--opponent",
        nargs="*",
        default=[],
        metavar="CARD",
        help="Opponents' exposed cards (up to 7); they are never dealt to me",
    )
    parser.add_argument("-r", "--rank", help="Only report the probability of this low (5-10, J, Q, K)")
    parser.add_argument(
        "--or-better",
        action="store_true",
        help="With --rank, count every low at least as good as the rank",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible run")
    parser.add_argument("--log-level", default="WARNING")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    if args.games <= 0:
        parser.error("games must be a positive number")
    if args.or_better and args.rank is None:
        parser.error("--or-better requires --rank")

    config = SimulationConfig(game_count=args.games, seed=args.seed)
    desired = None
    try:
        if args.rank is not None:
            desired = parse_rank(args.rank)
            if desired not in RAZZ_RANKS:
                raise InvalidInput(f"Desired rank must be between 5 and K: {args.rank}")
        decided = DecidedCards.build(parse_cards(args.mine), parse_cards(args.opponent), config)
    except InvalidInput as exc:
        parser.error(str(exc))

    tally = RankTally()
    if not simulate_razz_game(decided, config.game_count, tally, random.Random(config.seed), config):
        LOGGER.error("Simulation failed")
        return 1

    if desired is None:
        for line in report_lines(tally):
            print(line)
    else:
        print(report_probability(tally, desired, args.or_better))
    return 0


if __name__ == "__main__":
    sys.exit(main())
