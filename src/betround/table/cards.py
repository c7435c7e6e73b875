"""Cards and a seedable 52-card deck."""

from __future__ import annotations

import random
from dataclasses import dataclass

__all__ = ["Card", "Deck", "RANKS", "SUITS", "FULL_DECK"]

RANKS = "23456789TJQKA"
SUITS = "hdcs"


@dataclass(frozen=True)
class Card:
    """A playing card with rank and suit."""

    rank: str
    suit: str

    def __post_init__(self) -> None:
        if self.rank not in RANKS or self.suit not in SUITS:
            raise ValueError(f"Invalid card {self.rank}{self.suit}")

    @classmethod
    def parse(cls, text: str) -> Card:
        """Parse a string like 'Ah' into a Card."""
        return cls(rank=text[:-1], suit=text[-1])

    def __repr__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"


FULL_DECK = [Card(r, s) for r in RANKS for s in SUITS]


class Deck:
    """Standard 52-card deck. Shuffles with the Random it is given."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._cards: list[Card] = list(FULL_DECK)
        self._idx = 0

    def __len__(self) -> int:
        return len(self._cards) - self._idx

    def reset(self) -> None:
        """Put every card back, in factory order."""
        self._cards = list(FULL_DECK)
        self._idx = 0

    def shuffle(self) -> None:
        """Reset and shuffle the full deck."""
        self.reset()
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        if self._idx >= len(self._cards):
            raise IndexError("Deck is empty")
        card = self._cards[self._idx]
        self._idx += 1
        return card

    def burn(self) -> None:
        self.draw()
