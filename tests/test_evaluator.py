import itertools

import pytest

from fivecard.cards import Card, Rank, Suit, parse_label
from fivecard.deck import Deck
from fivecard.evaluator import HandRank, describe_rank, evaluate_hand

from .helpers import cards

SUIT_CYCLE = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]


def grouped_hand(ranks):
    """Build a hand from ranks, rotating suits so no flush forms and grouped cards differ in suit."""
    return [Card(SUIT_CYCLE[idx % 4], Rank(rank)) for idx, rank in enumerate(ranks)]


def test_evaluate_hand_identifies_all_hand_categories():
    cases = [
        (HandRank.ROYAL_FLUSH, ["Th", "Jh", "Qh", "Kh", "Ah"]),
        (HandRank.STRAIGHT_FLUSH, ["9s", "8s", "7s", "6s", "5s"]),
        (HandRank.FOUR_OF_A_KIND, ["As", "Ah", "Ad", "Ac", "Kd"]),
        (HandRank.FULL_HOUSE, ["Qc", "Qd", "Qs", "9h", "9s"]),
        (HandRank.FLUSH, ["Ah", "Jh", "9h", "6h", "2h"]),
        (HandRank.STRAIGHT, ["9h", "8d", "7c", "6s", "5h"]),
        (HandRank.THREE_OF_A_KIND, ["8h", "8d", "8s", "Qd", "Js"]),
        (HandRank.TWO_PAIR, ["7h", "7d", "4s", "4c", "As"]),
        (HandRank.ONE_PAIR, ["6h", "6s", "Qh", "8d", "4c"]),
        (HandRank.HIGH_CARD, ["As", "Kd", "Jh", "9c", "4d"]),
    ]

    for expected_rank, labels in cases:
        rank, _ = evaluate_hand(cards(*labels))
        assert rank == expected_rank, f"labels={labels}"


def test_flush_scores_rank_sum():
    assert evaluate_hand(cards("2d", "5d", "7d", "Jd", "Kd")) == (HandRank.FLUSH, 2 + 5 + 7 + 11 + 13)


def test_four_of_a_kind_adds_quad_modifier():
    rank, score = evaluate_hand(cards("9c", "9h", "9s", "9d", "3c"))
    assert rank == HandRank.FOUR_OF_A_KIND
    assert score == 9 + 9 + 9 + 9 + (9 * 4 * 14) + 3


def test_wheel_straight_scores_fixed_fifteen():
    rank, score = evaluate_hand(cards("Ac", "2h", "3s", "4d", "5c"))
    assert rank == HandRank.STRAIGHT
    assert score == 15


def test_royal_flush_scores_rank_sum():
    assert evaluate_hand(cards("Th", "Jh", "Qh", "Kh", "Ah")) == (HandRank.ROYAL_FLUSH, 60)


@pytest.mark.parametrize(
    "labels, expected",
    [
        (["Qc", "Qd", "Qs", "9h", "9s"], (HandRank.FULL_HOUSE, 54 + 12 * 3 * 14 * 14 + 9 * 2 * 14)),
        (["8h", "8d", "8s", "Qd", "Js"], (HandRank.THREE_OF_A_KIND, 47 + 8 * 3 * 14)),
        (["7h", "7d", "4s", "4c", "As"], (HandRank.TWO_PAIR, 36 + 2 * (7 * 2 * 14))),
        (["6h", "6s", "Qh", "8d", "4c"], (HandRank.ONE_PAIR, 36 + 6 * 2 * 14)),
        (["As", "Kd", "Jh", "9c", "4d"], (HandRank.HIGH_CARD, 51 + 14 * 14)),
        (["9s", "8s", "7s", "6s", "5s"], (HandRank.STRAIGHT_FLUSH, 35)),
        (["9h", "8d", "7c", "6s", "5h"], (HandRank.STRAIGHT, 35)),
    ],
)
def test_scores_follow_category_formulas(labels, expected):
    assert evaluate_hand(cards(*labels)) == expected


def test_higher_quads_beat_lower_quads_with_better_kicker():
    low_quads = cards("2c", "2h", "2s", "2d", "Ac")
    high_quads = cards("3c", "3h", "3s", "3d", "2c")
    assert evaluate_hand(low_quads) == (HandRank.FOUR_OF_A_KIND, 2 * 4 + 8 * 14 + 14)
    assert evaluate_hand(high_quads) == (HandRank.FOUR_OF_A_KIND, 3 * 4 + 12 * 14 + 2)
    assert evaluate_hand(high_quads) > evaluate_hand(low_quads)


def test_full_house_trips_outweigh_pair():
    threes_over_aces = cards("3c", "3d", "3h", "Ac", "Ad")
    fours_over_twos = cards("4c", "4d", "4h", "2c", "2d")
    assert evaluate_hand(fours_over_twos)[1] > evaluate_hand(threes_over_aces)[1]


def test_wheel_is_the_weakest_straight():
    wheel = evaluate_hand(cards("Ac", "2h", "3s", "4d", "5c"))
    six_high = evaluate_hand(cards("2c", "3h", "4s", "5d", "6c"))
    assert wheel[0] == six_high[0] == HandRank.STRAIGHT
    assert six_high > wheel


def test_steel_wheel_scores_rank_sum():
    steel_wheel = evaluate_hand(cards("Ad", "2d", "3d", "4d", "5d"))
    assert steel_wheel == (HandRank.STRAIGHT_FLUSH, 14 + 2 + 3 + 4 + 5)


def test_straight_flush_found_in_any_flush_suit():
    hand = cards("2h", "5h", "7h", "9h", "Jh", "5s", "6s", "7s", "8s", "9s")
    assert evaluate_hand(hand) == (HandRank.STRAIGHT_FLUSH, 2 + 5 + 7 + 9 + 11 + 5 + 6 + 7 + 8 + 9)


def test_ace_high_run_is_not_a_wheel():
    rank, score = evaluate_hand(cards("Tc", "Jh", "Qs", "Kd", "Ac"))
    assert rank == HandRank.STRAIGHT
    assert score == 60


def test_category_dominates_score():
    weakest_full_house = evaluate_hand(cards("2c", "2d", "2h", "3c", "3d"))
    best_flush = evaluate_hand(cards("Ah", "Kh", "Qh", "Jh", "9h"))
    assert weakest_full_house[0] > best_flush[0]
    assert weakest_full_house > best_flush

    weakest_pair = evaluate_hand(cards("2c", "2d", "3h", "4c", "5d"))
    best_high_card = evaluate_hand(cards("Ah", "Kd", "Qc", "Js", "9h"))
    assert weakest_pair > best_high_card


@pytest.mark.parametrize(
    "size, kicker_count",
    [
        (4, 1),  # quads + 1 kicker
        (3, 2),  # trips + 2 kickers
    ],
)
def test_dominant_group_rank_outweighs_any_kickers(size, kicker_count):
    for group in range(2, 14):
        higher = group + 1
        best_kickers = [r for r in range(14, 1, -1) if r != group][:kicker_count]
        worst_kickers = [r for r in range(2, 15) if r != higher][:kicker_count]
        strong_kickers = grouped_hand([group] * size + best_kickers)
        weak_kickers = grouped_hand([higher] * size + worst_kickers)
        assert evaluate_hand(weak_kickers) > evaluate_hand(strong_kickers), (group, higher)


def test_two_pair_top_pair_outweighs_second_pair_and_kicker():
    kings_up = cards("Kc", "Kd", "Qh", "Qs", "Ac")
    aces_up = cards("Ac", "Ad", "2h", "2s", "3c")
    assert evaluate_hand(aces_up) > evaluate_hand(kings_up)


def test_evaluation_ignores_input_order():
    hand = cards("7h", "7d", "4s", "4c", "As")
    expected = evaluate_hand(hand)
    for permutation in itertools.permutations(hand):
        assert evaluate_hand(permutation) == expected


def test_larger_hand_reports_highest_straight():
    rank, score = evaluate_hand(cards("Ah", "2d", "3c", "4s", "5h", "6d"))
    assert rank == HandRank.STRAIGHT
    # Six-high run, so the rank sum applies rather than the wheel's fixed score.
    assert score == 14 + 2 + 3 + 4 + 5 + 6


def test_larger_hand_flush_uses_every_card_in_sum():
    rank, score = evaluate_hand(cards("2h", "5h", "7h", "9h", "Jh", "Kc", "Kd"))
    assert rank == HandRank.FLUSH
    assert score == 2 + 5 + 7 + 9 + 11 + 13 + 13


def test_larger_hand_with_two_trips_is_full_house():
    rank, score = evaluate_hand(cards("8c", "8d", "8h", "5c", "5d", "5h", "Ks"))
    assert rank == HandRank.FULL_HOUSE
    assert score == 52 + 8 * 3 * 14 * 14 + 5 * 2 * 14


def test_larger_hand_needs_straight_within_flush_suit_for_straight_flush():
    # Hearts flush plus an off-suit straight is only a flush.
    rank, _ = evaluate_hand(cards("2h", "4h", "6h", "8h", "Th", "3c", "5d"))
    assert rank == HandRank.FLUSH


def test_evaluate_hand_rejects_short_hands():
    with pytest.raises(ValueError, match="At least 5 cards"):
        evaluate_hand(cards("Ah", "Kh", "Qh", "Jh"))


def test_describe_rank_labels():
    assert describe_rank(HandRank.ROYAL_FLUSH) == "royal_flush"
    assert describe_rank(HandRank.ONE_PAIR) == "one_pair"


def test_card_validation_rejects_invalid_labels():
    with pytest.raises(ValueError, match="Invalid rank"):
        parse_label("1h")
    with pytest.raises(ValueError, match="Invalid suit"):
        parse_label("Ax")
    with pytest.raises(ValueError, match="Invalid card label"):
        parse_label("10h")
    with pytest.raises(ValueError, match="Invalid suit"):
        Card("hearts", Rank.ACE)  # type: ignore[arg-type]


def test_card_equality_is_structural():
    assert Card(Suit.SPADES, Rank.ACE) == parse_label("As")
    assert len({Card(Suit.SPADES, Rank.ACE), parse_label("As")}) == 1
    assert str(parse_label("Td")) == "TEN of DIAMONDS"
    assert parse_label("Td").label == "Td"


def test_evaluate_many_seeded_hands_stays_in_range():
    deck = Deck(seed=777)
    deck.shuffle()
    for _ in range(10):
        rank, score = evaluate_hand(deck.draw(5))
        assert HandRank.HIGH_CARD <= rank <= HandRank.ROYAL_FLUSH
        assert score > 0
