"""Ledger -- per-hand record of stacks, commitments and turn order.

One Ledger exists per hand. It is built with the starting stacks and the
button, posts the blinds during construction, and is then mutated only by
the BettingEngine (plus the driver's board run-out via ``next_street``).

Chip accounting:
- ``stacks``: chips behind, per seat
- ``committed_this_street``: chips put in during the current street
- ``swept``: chips collected from streets that have already finished

``pot_size`` is ``swept + sum(committed_this_street)``, so
``sum(stacks) + pot_size`` is constant for the whole hand.
"""

from __future__ import annotations

from collections.abc import Sequence

from betround.core.betting_config import BettingConfig
from betround.core.errors import InvalidConfiguration, InvalidSeatIndex
from betround.core.types import STREET_ORDER, Action, GameView, Street

__all__ = ["Ledger", "MIN_PLAYERS", "MAX_PLAYERS"]

MIN_PLAYERS = 2
MAX_PLAYERS = 6


class Ledger:
    """Mutable betting state for a single hand.

    Parameters
    ----------
    config : BettingConfig
        Blinds and minimum raise increment.
    player_count : int
        Number of seats, 2-6.
    button_seat : int
        Dealer button; wraps modulo ``player_count``.
    stacks : Sequence[int]
        Starting chips per seat. Seats with zero chips sit the hand out and
        are passed over when the blinds are assigned.
    """

    def __init__(
        self,
        config: BettingConfig,
        player_count: int,
        button_seat: int,
        stacks: Sequence[int],
    ) -> None:
        if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
            raise InvalidConfiguration(
                f"player_count must be {MIN_PLAYERS}..{MAX_PLAYERS}, got {player_count}"
            )
        if stacks is None or len(stacks) != player_count:
            raise InvalidConfiguration(
                f"stacks length must equal player_count ({player_count})"
            )
        if button_seat < 0:
            raise InvalidConfiguration(f"button_seat must be non-negative, got {button_seat}")
        if any(s < 0 for s in stacks):
            raise InvalidConfiguration(f"stacks must be non-negative, got {list(stacks)}")
        if sum(1 for s in stacks if s > 0) < 2:
            raise InvalidConfiguration("at least two seats need chips to play a hand")

        self._config = config
        self._player_count = player_count
        self._button = button_seat % player_count
        self._street = Street.PREFLOP

        self._stacks: list[int] = list(stacks)
        self._committed: list[int] = [0] * player_count
        # Zero-stack seats sit out
        self._folded: list[bool] = [s == 0 for s in stacks]
        self._all_in: list[bool] = [False] * player_count
        self._swept = 0
        self._starting_total = sum(stacks)

        self._actor = 0
        self._round_start = 0
        self._last_raise = 0

        # Blinds come from the next seats holding chips
        self._sb_seat = self._skip_ineligible(self._next_index(self._button))
        self._bb_seat = self._skip_ineligible(self._next_index(self._sb_seat))
        self._post_blinds()

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> BettingConfig:
        return self._config

    @property
    def player_count(self) -> int:
        return self._player_count

    @property
    def button_seat(self) -> int:
        return self._button

    @property
    def small_blind_seat(self) -> int:
        return self._sb_seat

    @property
    def big_blind_seat(self) -> int:
        return self._bb_seat

    @property
    def street(self) -> Street:
        return self._street

    @property
    def is_closed(self) -> bool:
        return self._street is Street.CLOSED

    @property
    def actor_seat(self) -> int:
        return self._actor

    @property
    def round_start_seat(self) -> int:
        return self._round_start

    @property
    def last_raise_increment(self) -> int:
        return self._last_raise

    @property
    def min_raise_increment(self) -> int:
        return self._config.min_raise_increment

    @property
    def pot_size(self) -> int:
        return self._swept + sum(self._committed)

    @property
    def swept(self) -> int:
        """Chips collected from streets that already finished."""
        return self._swept

    @property
    def starting_total(self) -> int:
        return self._starting_total

    @property
    def total_chips(self) -> int:
        """``sum(stacks) + swept + sum(committed)``; constant within a hand."""
        return sum(self._stacks) + self._swept + sum(self._committed)

    @property
    def stacks(self) -> list[int]:
        return list(self._stacks)

    @property
    def committed_this_street(self) -> list[int]:
        return list(self._committed)

    @property
    def folded(self) -> list[bool]:
        return list(self._folded)

    @property
    def all_in(self) -> list[bool]:
        return list(self._all_in)

    @property
    def max_committed(self) -> int:
        return max(self._committed)

    # ------------------------------------------------------------------
    # Per-seat queries
    # ------------------------------------------------------------------

    def stack(self, seat: int) -> int:
        self._check_seat(seat)
        return self._stacks[seat]

    def committed(self, seat: int) -> int:
        self._check_seat(seat)
        return self._committed[seat]

    def is_folded(self, seat: int) -> bool:
        self._check_seat(seat)
        return self._folded[seat]

    def is_all_in(self, seat: int) -> bool:
        self._check_seat(seat)
        return self._all_in[seat]

    def is_eligible(self, seat: int) -> bool:
        """True if the seat can still make decisions (not folded, not all-in)."""
        self._check_seat(seat)
        return not self._folded[seat] and not self._all_in[seat]

    def to_call(self, seat: int) -> int:
        self._check_seat(seat)
        return max(0, self.max_committed - self._committed[seat])

    def legal_actions(self, seat: int) -> frozenset[Action]:
        """Actions the seat may take right now.

        FOLD is always legal for a seat still in the hand, including after
        the ledger is CLOSED (the engine ignores it then). Once any
        contesting seat is all-in, RAISE and ALL_IN are withheld from
        everyone else.
        """
        self._check_seat(seat)
        if self._folded[seat]:
            return frozenset()
        actions = {Action.FOLD}
        if self.to_call(seat) == 0:
            actions.update((Action.CHECK, Action.BET))
        else:
            actions.add(Action.CALL)
            if not self.has_all_in_contestant():
                actions.update((Action.RAISE, Action.ALL_IN))
        return frozenset(actions)

    # ------------------------------------------------------------------
    # Table-wide queries
    # ------------------------------------------------------------------

    def contesting_seats(self) -> list[int]:
        """Seats still in the hand (not folded), in seat order."""
        return [s for s in range(self._player_count) if not self._folded[s]]

    def eligible_seats(self) -> list[int]:
        """Seats that can still act (not folded, not all-in), in seat order."""
        return [s for s in range(self._player_count) if self.is_eligible(s)]

    def has_all_in_contestant(self) -> bool:
        return any(
            self._all_in[s] or self._stacks[s] == 0
            for s in range(self._player_count)
            if not self._folded[s]
        )

    def view(self, seat: int | None = None) -> GameView:
        """Build the read-only view handed to agents (defaults to the actor)."""
        seat = self._actor if seat is None else seat
        self._check_seat(seat)
        return GameView(
            street=self._street,
            pot_size=self.pot_size,
            player_count=self._player_count,
            button_seat=self._button,
            actor_seat=seat,
            stacks=tuple(self._stacks),
            committed=tuple(self._committed),
            folded=tuple(self._folded),
            all_in=tuple(self._all_in),
            to_call=self.to_call(seat),
            min_raise_increment=self.min_raise_increment,
            last_raise_increment=self._last_raise,
            legal_actions=self.legal_actions(seat),
        )

    def snapshot(self) -> dict:
        """Serializable snapshot of the ledger for hand history."""
        return {
            "street": self._street.value,
            "pot": self.pot_size,
            "button": self._button,
            "actor": self._actor,
            "round_start": self._round_start,
            "last_raise_increment": self._last_raise,
            "stacks": list(self._stacks),
            "committed": list(self._committed),
            "folded": [s for s in range(self._player_count) if self._folded[s]],
            "all_in": [s for s in range(self._player_count) if self._all_in[s]],
        }

    # ------------------------------------------------------------------
    # Mutators (engine / driver only)
    # ------------------------------------------------------------------

    def commit(self, seat: int, amount: int) -> int:
        """Move up to ``amount`` chips from the seat's stack into the pot.

        Clamped to the stack; a seat whose stack reaches zero goes all-in.
        Returns the chips actually moved.
        """
        self._check_seat(seat)
        if amount <= 0:
            return 0
        pay = min(amount, self._stacks[seat])
        self._stacks[seat] -= pay
        self._committed[seat] += pay
        if self._stacks[seat] == 0 and not self._folded[seat]:
            self._all_in[seat] = True
        return pay

    def mark_fold(self, seat: int) -> None:
        self._check_seat(seat)
        self._folded[seat] = True
        self._all_in[seat] = False

    def set_last_raise_increment(self, size: int) -> None:
        self._last_raise = max(0, size)

    def rotate_actor(self) -> None:
        """Advance the actor one seat, then skip folded and all-in seats."""
        self._actor = self._next_index(self._actor)
        self._actor = self._skip_ineligible(self._actor)

    def set_round_start_to_next_of(self, seat: int) -> None:
        """Point the round start at the first eligible seat after ``seat``."""
        self._check_seat(seat)
        self._round_start = self._skip_ineligible(self._next_index(seat))

    def next_street(self) -> None:
        """Close the current street and open the next one.

        RIVER advances to CLOSED. Calling this on a CLOSED ledger does nothing.
        """
        if self.is_closed:
            return
        self._sweep()
        self._street = STREET_ORDER[STREET_ORDER.index(self._street) + 1]
        if self.is_closed:
            return
        self.set_round_start_to_next_of(self._actor)
        self._actor = self._round_start
        self._last_raise = 0

    def close(self) -> None:
        """End the hand immediately (everyone else folded)."""
        self._sweep()
        self._street = Street.CLOSED

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _post_blinds(self) -> None:
        self.commit(self.small_blind_seat, self._config.small_blind)
        self.commit(self.big_blind_seat, self._config.big_blind)
        self._actor = self._skip_ineligible(self._next_index(self.big_blind_seat))
        self._round_start = self._actor
        self._last_raise = self._config.big_blind

    def _sweep(self) -> None:
        self._swept += sum(self._committed)
        self._committed = [0] * self._player_count

    def _skip_ineligible(self, seat: int) -> int:
        tries = 0
        while tries < self._player_count and (self._folded[seat] or self._all_in[seat]):
            seat = self._next_index(seat)
            tries += 1
        return seat

    def _next_index(self, seat: int) -> int:
        return (seat + 1) % self._player_count

    def _check_seat(self, seat: int) -> None:
        if isinstance(seat, bool) or not isinstance(seat, int):
            raise InvalidSeatIndex(seat, self._player_count)
        if not 0 <= seat < self._player_count:
            raise InvalidSeatIndex(seat, self._player_count)
