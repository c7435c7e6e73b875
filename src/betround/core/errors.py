"""Exception hierarchy for the betting core.

All errors are fatal to the hand that raised them. Nothing inside the
core retries or swallows them; the driver decides what to abort.
"""


class BettingError(Exception):
    """Base class for every error raised by betround."""


class InvalidConfiguration(BettingError, ValueError):
    """Bad constructor arguments or a malformed session config."""


class UnsupportedAction(BettingError):
    """An action value outside the known set reached the engine."""


class InvalidSeatIndex(BettingError, IndexError):
    """A seat index outside ``[0, player_count)``."""

    def __init__(self, seat: object, player_count: int) -> None:
        super().__init__(f"Invalid seat index {seat!r} (player_count={player_count})")
        self.seat = seat
        self.player_count = player_count


class DecisionParseError(BettingError):
    """An agent payload failed schema validation."""
