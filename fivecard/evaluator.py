from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .cards import Card, Rank, Suit

# One more than the highest rank value, so a single step in the dominant
# group's rank always outweighs every kicker combination.
RANK_MULTIPLIER = int(Rank.ACE)
WHEEL_SCORE = 15
MIN_CARDS = 5

_RUN_BITS = 0b1_1111
_WHEEL_MASK = (1 << (Rank.ACE - 2)) | 0b1111


class HandRank(IntEnum):
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10


def describe_rank(rank: HandRank) -> str:
    return rank.name.lower()


def evaluate_hand(cards: Iterable[Card]) -> Tuple[HandRank, int]:
    """Classify a hand and return ``(category, score)``.

    The score only breaks ties inside one category. Hands larger than five
    cards are accepted; the rank sum always covers every card given.
    Duplicate or phantom cards are not detected here.
    """
    cards = list(cards)
    if len(cards) < MIN_CARDS:
        raise ValueError(f"At least {MIN_CARDS} cards are required, got {len(cards)}")

    rank_sum = sum(int(card.rank) for card in cards)
    flush_suits = _flush_suits(cards)
    straight_high = _straight_high(cards)

    suited_highs = [_straight_high([card for card in cards if card.suit == suit]) for suit in flush_suits]
    suited_highs = [high for high in suited_highs if high is not None]
    if suited_highs:
        # Steel wheel included: straight flushes always score the plain rank sum.
        if max(suited_highs) == Rank.ACE:
            return HandRank.ROYAL_FLUSH, rank_sum
        return HandRank.STRAIGHT_FLUSH, rank_sum

    counts: Dict[Rank, int] = {}
    for card in cards:
        counts.setdefault(card.rank, 0)
        counts[card.rank] += 1

    quads = _ranks_with(counts, 4)
    trips = _ranks_with(counts, 3)
    pairs = _ranks_with(counts, 2)

    if quads:
        return HandRank.FOUR_OF_A_KIND, rank_sum + quads[0] * 4 * RANK_MULTIPLIER
    if trips and (pairs or len(trips) > 1):
        trip_rank = trips[0]
        pair_rank = max(pairs + trips[1:])
        score = rank_sum + trip_rank * 3 * RANK_MULTIPLIER * RANK_MULTIPLIER + pair_rank * 2 * RANK_MULTIPLIER
        return HandRank.FULL_HOUSE, score
    if flush_suits:
        return HandRank.FLUSH, rank_sum
    if straight_high is not None:
        return HandRank.STRAIGHT, _straight_score(straight_high, rank_sum)
    if trips:
        return HandRank.THREE_OF_A_KIND, rank_sum + trips[0] * 3 * RANK_MULTIPLIER
    if len(pairs) >= 2:
        # Both cards of the top pair carry the modifier; the second pair only counts via the sum.
        return HandRank.TWO_PAIR, rank_sum + 2 * (pairs[0] * 2 * RANK_MULTIPLIER)
    if pairs:
        return HandRank.ONE_PAIR, rank_sum + pairs[0] * 2 * RANK_MULTIPLIER
    high = max(int(card.rank) for card in cards)
    return HandRank.HIGH_CARD, rank_sum + high * RANK_MULTIPLIER


def _ranks_with(counts: Dict[Rank, int], size: int) -> List[int]:
    return sorted((int(rank) for rank, count in counts.items() if count == size), reverse=True)


def _straight_score(high: Rank, rank_sum: int) -> int:
    return WHEEL_SCORE if high == Rank.FIVE else rank_sum


def _flush_suits(cards: Sequence[Card]) -> List[Suit]:
    by_suit: Dict[Suit, int] = {}
    for card in cards:
        by_suit[card.suit] = by_suit.get(card.suit, 0) + 1
    return [suit for suit, count in by_suit.items() if count >= MIN_CARDS]


def _rank_mask(cards: Iterable[Card]) -> int:
    # Two -> bit 0 ... Ace -> bit 12
    mask = 0
    for card in cards:
        mask |= 1 << (card.rank - 2)
    return mask


def _straight_high(cards: Iterable[Card]) -> Optional[Rank]:
    mask = _rank_mask(cards)
    # Highest window first: bits 8..12 is Ten through Ace.
    for low in range(8, -1, -1):
        if (mask >> low) & _RUN_BITS == _RUN_BITS:
            return Rank(low + 6)
    if mask & _WHEEL_MASK == _WHEEL_MASK:
        return Rank.FIVE
    return None
