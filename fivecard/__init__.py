"""Five-card poker primitives: cards, deck, hand evaluator and the dealing engine."""

from .cards import Card, Rank, Suit, cards_to_labels, parse_cards, parse_label, standard_cards
from .deck import Deck
from .evaluator import HandRank, describe_rank, evaluate_hand
from .exceptions import GameNotFoundError, NoPlayersError
from .game import FiveCardGame
from .models import GameConfig, GamePhase, Player, PlayerSnapshot
from .registry import GameRegistry, GameSession

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "cards_to_labels",
    "parse_cards",
    "parse_label",
    "standard_cards",
    "Deck",
    "HandRank",
    "describe_rank",
    "evaluate_hand",
    "GameNotFoundError",
    "NoPlayersError",
    "FiveCardGame",
    "GameConfig",
    "GamePhase",
    "Player",
    "PlayerSnapshot",
    "GameRegistry",
    "GameSession",
]
