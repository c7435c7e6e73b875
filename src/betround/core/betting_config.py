"""Blind and minimum-raise settings shared by every seat in a hand."""

from __future__ import annotations

from dataclasses import dataclass

from betround.core.errors import InvalidConfiguration


@dataclass(frozen=True)
class BettingConfig:
    """Immutable small blind / big blind / min-raise triple.

    ``min_raise_increment`` defaults to the big blind when omitted.
    """

    small_blind: int
    big_blind: int
    min_raise_increment: int | None = None

    def __post_init__(self) -> None:
        if self.small_blind < 0 or self.big_blind < 0:
            raise InvalidConfiguration(
                f"Blinds must be non-negative, got {self.small_blind}/{self.big_blind}"
            )
        if self.min_raise_increment is None:
            object.__setattr__(self, "min_raise_increment", self.big_blind)
        elif self.min_raise_increment < 0:
            raise InvalidConfiguration(
                f"min_raise_increment must be non-negative, got {self.min_raise_increment}"
            )
