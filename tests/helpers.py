from __future__ import annotations

from typing import Iterable, List

from fivecard import deck as deck_module
from fivecard.cards import Card, parse_cards, standard_cards
from fivecard.game import FiveCardGame
from fivecard.models import GameConfig, Player


def create_game(names: Iterable[str] = ("Alpha", "Beta"), seed: int = 42) -> FiveCardGame:
    """Instantiate a seeded game with a populated roster."""
    game = FiveCardGame(GameConfig(seed=seed))
    for name in names:
        game.add_player(Player(name))
    return game


def cards(*labels: str) -> List[Card]:
    return parse_cards(list(labels))


def dealt_and_validated(names: Iterable[str] = ("Alpha", "Beta"), seed: int = 42) -> FiveCardGame:
    game = create_game(names, seed=seed)
    game.deal()
    game.validate_hands()
    return game


def undealt_card(game: FiveCardGame) -> Card:
    """Return a card still sitting in the deck, i.e. never handed out this round."""
    remaining = game.deck.cards()
    assert remaining, "deck is empty"
    return remaining[0]


def rig_deck(monkeypatch, *hands: Iterable[str]) -> None:
    """Stack the deck so a round-robin deal hands each player the given labels, in roster order."""
    parsed = [parse_cards(list(labels)) for labels in hands]
    order: List[Card] = [hand[idx] for idx in range(5) for hand in parsed]
    order.extend(card for card in standard_cards() if card not in order)
    monkeypatch.setattr(deck_module, "standard_cards", lambda: list(order))
    monkeypatch.setattr(deck_module.Deck, "shuffle", lambda self: None)
