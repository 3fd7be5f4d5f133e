from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, NoReturn, Optional

from .cards import Rank
from .config import AppConfig
from .deck import Deck
from .errors import DeckError
from .logging_setup import configure_logging
from .schemas import DeckConfig


logger = logging.getLogger(__name__)


def _build_deck(args: argparse.Namespace) -> Deck:
    return Deck.build(number_decks=args.decks, exclude_rank=args.exclude)


def _cmd_build(args: argparse.Namespace) -> None:
    print(_build_deck(args).dumps(indent=args.indent))


def _cmd_deal(args: argparse.Namespace) -> None:
    deck = _build_deck(args)
    deck.shuffle(random.Random(args.seed))
    if args.cut is not None:
        deck.cut(args.cut)
    for card in deck.deal(args.count):
        print(card)
    if args.save:
        deck.save(args.save)
        logger.info("Saved %s remaining cards to %s", len(deck), args.save)


def _cmd_show(args: argparse.Namespace) -> None:
    deck = Deck.load(args.path)
    print(str(deck) if args.full else repr(deck))


def build_parser(config: AppConfig, defaults: DeckConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="carddeck", description="Build, deal and inspect card decks")
    sub = parser.add_subparsers(dest="command", required=True)

    deck_options = argparse.ArgumentParser(add_help=False)
    deck_options.add_argument(
        "--decks", type=int, default=defaults.number_decks, help="Number of 52-card decks to combine"
    )
    deck_options.add_argument(
        "--exclude",
        nargs="*",
        default=[rank for rank in Rank if rank in defaults.exclude_rank],
        help="Ranks to leave out, e.g. '2 Jack'",
    )

    p_build = sub.add_parser("build", parents=[deck_options], help="Print a freshly built deck as JSON")
    p_build.add_argument("--indent", type=int, default=None, help="JSON indentation")
    p_build.set_defaults(func=_cmd_build)

    p_deal = sub.add_parser("deal", parents=[deck_options], help="Shuffle, optionally cut, and deal cards")
    p_deal.add_argument("count", type=int, help="Number of cards to deal")
    p_deal.add_argument("--seed", type=int, default=config.seed, help="Random seed")
    p_deal.add_argument("--cut", type=int, default=None, help="Cut index applied after shuffling")
    p_deal.add_argument("--save", default=None, help="Write the remaining deck to this file")
    p_deal.set_defaults(func=_cmd_deal)

    p_show = sub.add_parser("show", help="Display a deck saved as JSON")
    p_show.add_argument("path", help="Deck file written by 'deal --save'")
    p_show.add_argument("--full", action="store_true", help="List every card")
    p_show.set_defaults(func=_cmd_show)

    return parser


def _fail(exc: Exception) -> NoReturn:
    message = str(exc)
    details = getattr(exc, "details", None)
    if details:
        message = f"{message}: {'; '.join(details)}"
    sys.stderr.write(f"carddeck: error: {message}\n")
    raise SystemExit(2)


def main(argv: Optional[List[str]] = None) -> int:
    config = AppConfig.from_env()
    configure_logging(config.log_level)
    try:
        defaults = config.deck_config()
    except DeckError as exc:
        logger.debug("Rejected deck defaults from the environment", exc_info=True)
        _fail(exc)
    args = build_parser(config, defaults).parse_args(argv)
    try:
        args.func(args)
    except (DeckError, ValueError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        _fail(exc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
