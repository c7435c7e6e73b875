"""Showdown evaluation -- hand scoring and winner selection.

Scores 5-card hands, picks the best 5 of 7, and names the single seat that
takes the pot. The betting core never calls into this module; the hand
driver does once the ledger is closed.
"""

from __future__ import annotations

import itertools
from collections import Counter
from enum import IntEnum

from betround.table.cards import RANKS, Card

__all__ = ["HandRank", "HandEvaluator", "evaluate_hand", "best_five", "hand_category"]

RANK_VALUE: dict[str, int] = {r: i for i, r in enumerate(RANKS)}

# Wheel straight A-5-4-3-2
_WHEEL = [12, 3, 2, 1, 0]


class HandRank(IntEnum):
    """Hand categories ordered from weakest to strongest."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


def _straight_high(values: list[int]) -> int | None:
    """High card value of a straight, or None. ``values`` sorted descending."""
    unique = sorted(set(values), reverse=True)
    if len(unique) != 5:
        return None
    if unique[0] - unique[4] == 4:
        return unique[0]
    if unique == _WHEEL:
        return 3
    return None


def evaluate_hand(hand: list[Card]) -> tuple[int, ...]:
    """Score a 5-card hand. Higher tuples beat lower ones.

    The first element is the HandRank; the rest break ties.
    """
    if len(hand) != 5:
        raise ValueError(f"Expected 5 cards, got {len(hand)}")

    values = sorted((RANK_VALUE[c.rank] for c in hand), reverse=True)
    flush = len({c.suit for c in hand}) == 1
    high = _straight_high(values)

    # (count, value) pairs, biggest groups first
    groups = sorted(Counter(values).items(), key=lambda g: (g[1], g[0]), reverse=True)
    counts = [n for _, n in groups]
    ordered = [v for v, _ in groups]

    if flush and high is not None:
        return (HandRank.STRAIGHT_FLUSH, high)
    if counts[0] == 4:
        return (HandRank.FOUR_OF_A_KIND, *ordered)
    if counts[:2] == [3, 2]:
        return (HandRank.FULL_HOUSE, *ordered)
    if flush:
        return (HandRank.FLUSH, *values)
    if high is not None:
        return (HandRank.STRAIGHT, high)
    if counts[0] == 3:
        return (HandRank.THREE_OF_A_KIND, *ordered)
    if counts[:2] == [2, 2]:
        return (HandRank.TWO_PAIR, *ordered)
    if counts[0] == 2:
        return (HandRank.PAIR, *ordered)
    return (HandRank.HIGH_CARD, *values)


def best_five(cards: list[Card]) -> list[Card]:
    """Select the best 5-card hand from 5-7 cards."""
    if len(cards) < 5:
        raise ValueError(f"Need at least 5 cards, got {len(cards)}")
    return list(max(itertools.combinations(cards, 5), key=lambda combo: evaluate_hand(list(combo))))


def hand_category(cards: list[Card]) -> HandRank:
    return HandRank(evaluate_hand(best_five(cards))[0])


class HandEvaluator:
    """Showdown collaborator for the hand driver."""

    def score(self, hole: list[Card], board: list[Card]) -> tuple[int, ...]:
        return evaluate_hand(best_five(list(hole) + list(board)))

    def pick_winner(
        self,
        hands: dict[int, list[Card]],
        board: list[Card],
        button_seat: int,
        player_count: int,
    ) -> int:
        """Return the one seat that takes the whole pot.

        Ties go to the first tied seat clockwise from the button.
        """
        if not hands:
            raise ValueError("No hands to compare")
        order = [(button_seat + offset) % player_count for offset in range(1, player_count + 1)]
        contenders = [seat for seat in order if seat in hands]
        if len(contenders) == 1 or len(board) < 3:
            return contenders[0]
        return max(contenders, key=lambda seat: (self.score(hands[seat], board), -order.index(seat)))

    def hand_strength(self, hole: list[Card], board: list[Card]) -> float:
        """Rough strength in [0, 1] for agents.

        Pre-flop: pairs, high cards and suitedness. Post-flop: made-hand category.
        """
        if len(hole) != 2:
            return 0.0
        if len(board) < 3:
            hi, lo = sorted((RANK_VALUE[c.rank] for c in hole), reverse=True)
            strength = (hi + lo) / 24 * 0.6
            if hi == lo:
                strength += 0.3 + lo / 12 * 0.1
            if hole[0].suit == hole[1].suit:
                strength += 0.05
            return min(1.0, strength)
        category = hand_category(list(hole) + list(board))
        return min(1.0, 0.1 + category / HandRank.STRAIGHT_FLUSH * 0.9)
