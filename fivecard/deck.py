from __future__ import annotations

import random
from typing import List, Optional

from .cards import Card, standard_cards


class Deck:
    """Standard 52-card deck. The top of the deck is the first card of ``cards()``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)
        self._cards: List[Card] = []
        self.reset()

    def __len__(self) -> int:
        return len(self._cards)

    @property
    def count(self) -> int:
        return len(self._cards)

    def cards(self) -> List[Card]:
        return list(self._cards)

    def reset(self) -> None:
        self._cards = standard_cards()

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def draw(self, count: int) -> List[Card]:
        if count < 0 or count > len(self._cards):
            raise ValueError(
                "Count must be non-negative and less than or equal to the number of cards in the deck."
            )
        cards = self._cards[:count]
        del self._cards[:count]
        return cards
