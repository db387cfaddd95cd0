from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .cards import Card
from .evaluator import HandRank, describe_rank


class GamePhase(str, Enum):
    IDLE = "IDLE"
    DEALT = "DEALT"
    VALIDATED = "VALIDATED"
    SCORED = "SCORED"


@dataclass
class GameConfig:
    hand_size: int = 5
    seed: Optional[int] = None


@dataclass(eq=False)
class Player:
    """A named seat at the table. Two players with the same name are the same player."""

    name: str
    hand: List[Card] = field(default_factory=list)
    hand_rank: Optional[HandRank] = None
    score: Optional[int] = None
    has_valid_hand: bool = False
    winner: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Player name required")
        self.name = self.name.strip()
        object.__setattr__(self, "_name", self.name)

    def __setattr__(self, key: str, value: object) -> None:
        if key == "name" and "_name" in self.__dict__:
            raise AttributeError("Player name is immutable")
        super().__setattr__(key, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def reset_for_round(self) -> None:
        self.hand_rank = None
        self.score = None
        self.has_valid_hand = False
        self.winner = False

    def snapshot(self) -> "PlayerSnapshot":
        return PlayerSnapshot(
            name=self.name,
            hand=tuple(card.label for card in self.hand),
            hand_rank=self.hand_rank,
            score=self.score,
            has_valid_hand=self.has_valid_hand,
            winner=self.winner,
        )


@dataclass(frozen=True)
class PlayerSnapshot:
    name: str
    hand: Tuple[str, ...]
    hand_rank: Optional[HandRank]
    score: Optional[int]
    has_valid_hand: bool
    winner: bool

    def to_payload(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "name": self.name,
            "hand": list(self.hand),
            "has_valid_hand": self.has_valid_hand,
            "winner": self.winner,
        }
        # Rank and score only exist once the hand has been evaluated.
        if self.hand_rank is not None:
            payload["hand_rank"] = describe_rank(self.hand_rank)
            payload["score"] = self.score
        return payload
