from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, List, Sequence


class Suit(str, Enum):
    HEARTS = "HEARTS"
    DIAMONDS = "DIAMONDS"
    CLUBS = "CLUBS"
    SPADES = "SPADES"

    @property
    def label(self) -> str:
        return SUIT_LABELS[self]


class Rank(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def label(self) -> str:
        return RANK_LABELS[self]


SUIT_LABELS = {Suit.HEARTS: "h", Suit.DIAMONDS: "d", Suit.CLUBS: "c", Suit.SPADES: "s"}
RANK_LABELS = {rank: label for rank, label in zip(Rank, "23456789TJQKA")}
SUITS_BY_LABEL = {label: suit for suit, label in SUIT_LABELS.items()}
RANKS_BY_LABEL = {label: rank for rank, label in RANK_LABELS.items()}


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit}")
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid rank: {self.rank}")

    @property
    def label(self) -> str:
        return f"{self.rank.label}{self.suit.label}"

    def __str__(self) -> str:
        return f"{self.rank.name} of {self.suit.name}"


def standard_cards() -> List[Card]:
    # Canonical order: every rank of a suit before moving to the next suit.
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if not isinstance(label, str) or len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    rank = RANKS_BY_LABEL.get(label[0].upper())
    if rank is None:
        raise ValueError(f"Invalid rank: {label[0]}")
    suit = SUITS_BY_LABEL.get(label[1].lower())
    if suit is None:
        raise ValueError(f"Invalid suit: {label[1]}")
    return Card(suit, rank)


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
