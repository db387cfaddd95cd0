from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, List, Optional, Tuple

from .cards import Card
from .deck import Deck
from .evaluator import HandRank, describe_rank, evaluate_hand
from .exceptions import NoPlayersError
from .models import GameConfig, GamePhase, Player, PlayerSnapshot

LOGGER = logging.getLogger("fivecard.game")

# FiveCardGame owns the deck, the roster and the drawn-card ledger for one
# table. It is not thread-safe; callers serialize access per instance.


class FiveCardGame:
    """Five-card draw dealer: deals, validates hands and picks winners."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.deck = Deck(self.config.seed)
        self.phase = GamePhase.IDLE
        self._players: List[Player] = []
        self._drawn: List[Card] = []
        self.reset()

    # Roster management -----------------------------------------------

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(self._players)

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def drawn_cards(self) -> Tuple[Card, ...]:
        return tuple(self._drawn)

    def add_player(self, player: Player) -> Player:
        if player is None:
            raise ValueError("Player required")
        for existing in self._players:
            if existing == player:
                return existing
        self._players.append(player)
        LOGGER.debug("Player %s joined (roster=%d)", player.name, len(self._players))
        return player

    def remove_player(self, player: Player) -> None:
        if player is None:
            raise ValueError("Player required")
        if player in self._players:
            self._players.remove(player)
            LOGGER.debug("Player %s left (roster=%d)", player.name, len(self._players))

    def find_player(self, name: str) -> Optional[Player]:
        for player in self._players:
            if player.name == name:
                return player
        return None

    # Round lifecycle -------------------------------------------------

    def reset(self) -> None:
        self.deck.reset()
        self.deck.shuffle()
        self._drawn.clear()
        self.phase = GamePhase.IDLE

    def deal(self) -> Tuple[Player, ...]:
        if not self._players:
            raise NoPlayersError()

        for player in self._players:
            player.hand.clear()
            player.reset_for_round()

        # One card per player per pass, like dealing around a real table.
        exhausted = False
        for _ in range(self.config.hand_size):
            for player in self._players:
                if not len(self.deck):
                    exhausted = True
                    break
                card = self.deck.draw(1)[0]
                self._drawn.append(card)
                player.hand.append(card)
            if exhausted:
                break

        if exhausted:
            LOGGER.warning("Deck ran out while dealing to %d players", len(self._players))
        LOGGER.info("Dealt %d cards to %d players", len(self._drawn), len(self._players))
        self.phase = GamePhase.DEALT
        return self.players

    def validate_hands(self) -> None:
        if not self._players:
            return

        # Multiset across every hand, so a card held twice anywhere is caught.
        frequencies = Counter(card for player in self._players for card in player.hand)
        drawn = set(self._drawn)

        for player in self._players:
            held = set(player.hand)
            five_unique = len(held) == self.config.hand_size
            from_deck = five_unique and held.issubset(drawn)
            unshared = five_unique and all(frequencies[card] == 1 for card in held)
            player.has_valid_hand = five_unique and from_deck and unshared
            if not player.has_valid_hand:
                LOGGER.warning("Player %s holds an invalid hand: %s", player.name, [card.label for card in player.hand])

        self.phase = GamePhase.VALIDATED

    def determine_winners(self) -> Tuple[Player, ...]:
        if not self._players:
            raise NoPlayersError()

        for player in self._players:
            player.hand_rank = None
            player.score = None
            player.winner = False

        contenders: List[Player] = []
        for player in self._players:
            if not player.has_valid_hand:
                continue
            player.hand_rank, player.score = evaluate_hand(player.hand)
            contenders.append(player)

        self.phase = GamePhase.SCORED
        if not contenders:
            LOGGER.info("No valid hands; no winner this round")
            return ()

        best = max(self._strength(player) for player in contenders)
        winners = [player for player in contenders if self._strength(player) == best]
        for player in winners:
            player.winner = True

        LOGGER.info(
            "Winners: %s (%s, score=%s)",
            [player.name for player in winners],
            describe_rank(best[0]),
            best[1],
        )

        # sorted() is stable, so tied winners keep roster order.
        ordered = sorted(winners, key=self._strength, reverse=True)
        ordered.extend(player for player in self._players if not player.winner)
        return tuple(ordered)

    @staticmethod
    def _strength(player: Player) -> Tuple[HandRank, int]:
        assert player.hand_rank is not None and player.score is not None
        return player.hand_rank, player.score

    # Snapshot helpers ------------------------------------------------

    def snapshot(self) -> Tuple[PlayerSnapshot, ...]:
        return tuple(player.snapshot() for player in self._players)

    def deal_payload(self) -> Dict[str, object]:
        return {
            "phase": self.phase.value,
            "remaining": len(self.deck),
            "players": [snap.to_payload() for snap in self.snapshot()],
        }

    def results_payload(self, ranked: Tuple[Player, ...]) -> Dict[str, object]:
        # An empty ranking still reports the roster so callers can show why.
        listed = ranked or self.players
        return {
            "phase": self.phase.value,
            "winners": [player.name for player in ranked if player.winner],
            "players": [player.snapshot().to_payload() for player in listed],
        }
