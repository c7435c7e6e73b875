"""BettingEngine -- interprets player actions against a Ledger.

The engine holds no state of its own. ``apply`` acts for the ledger's
current actor and either rotates the turn or advances the street.

Sizing rules (amounts are set-to targets for the street):
- BET: below ``max_committed + last_raise_increment`` is lifted to it
- RAISE: below ``max_committed + max(last_raise_increment, min_raise)``
  is played as a CALL
- ALL_IN: the whole stack; may set a raise increment smaller than a full raise
"""

from __future__ import annotations

from dataclasses import dataclass

from betround.core.errors import UnsupportedAction
from betround.core.ledger import Ledger
from betround.core.types import Action, ActionDecision

__all__ = ["BettingEngine", "ValidationResult"]


@dataclass(frozen=True)
class ValidationResult:
    """Result of checking a decision against the current ledger."""

    legal: bool
    reason: str | None = None


class BettingEngine:
    """Stateless action interpreter wrapping a single hand's Ledger."""

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, action: Action, amount: int | None = None) -> ValidationResult:
        """Check if an action is legal for the current actor. Does not modify state."""
        ledger = self._ledger
        if not isinstance(action, Action):
            return ValidationResult(legal=False, reason=f"Unknown action {action!r}.")
        if ledger.is_closed:
            return ValidationResult(legal=False, reason="Hand is already closed.")

        seat = ledger.actor_seat
        legal = ledger.legal_actions(seat)
        if action not in legal:
            allowed = ", ".join(sorted(a.value for a in legal))
            return ValidationResult(
                legal=False,
                reason=f"{action.value} is not legal for seat {seat} (legal: {allowed}).",
            )

        if action in (Action.BET, Action.RAISE) and amount is not None:
            if amount <= 0:
                return ValidationResult(
                    legal=False, reason=f"{action.value} amount must be positive, got {amount}."
                )
            if amount <= ledger.committed(seat):
                return ValidationResult(
                    legal=False,
                    reason=f"{action.value} target {amount} does not exceed "
                    f"current commitment {ledger.committed(seat)}.",
                )

        return ValidationResult(legal=True)

    def apply(self, action: Action, amount: int | None = None) -> bool:
        """Apply an action for the current actor.

        Returns False without touching the ledger once the hand is closed.
        Raises UnsupportedAction for values outside the Action enum.

        The action is not checked against ``legal_actions``: an illegal one
        (a CHECK while owing chips, say) is carried out as written. Drivers
        call ``validate`` first and forfeit whatever it rejects.
        """
        if not isinstance(action, Action):
            raise UnsupportedAction(f"Unsupported action: {action!r}")
        if self._ledger.is_closed:
            return False

        actor = self._ledger.actor_seat
        if action is Action.FOLD:
            self._do_fold(actor)
        elif action is Action.CHECK:
            self._close_or_rotate(actor)
        elif action is Action.CALL:
            self._do_call(actor)
        elif action is Action.BET:
            self._do_bet(actor, amount)
        elif action is Action.RAISE:
            self._do_raise(actor, amount)
        elif action is Action.ALL_IN:
            self._do_all_in(actor)
        else:
            raise UnsupportedAction(f"Unsupported action: {action!r}")
        return True

    def apply_decision(self, decision: ActionDecision) -> bool:
        return self.apply(decision.action, decision.amount)

    def forfeit(self) -> bool:
        """Default action for a seat that failed to act legally: check if free, else fold."""
        if self._ledger.is_closed:
            return False
        if self._ledger.to_call(self._ledger.actor_seat) == 0:
            return self.apply(Action.CHECK)
        return self.apply(Action.FOLD)

    def is_all_in_situation(self) -> bool:
        """True when two or more seats contest the pot and none of them can act."""
        contesting = self._ledger.contesting_seats()
        return len(contesting) > 1 and not self._ledger.eligible_seats()

    # ------------------------------------------------------------------
    # Betting actions
    # ------------------------------------------------------------------

    def _do_fold(self, actor: int) -> None:
        ledger = self._ledger
        ledger.mark_fold(actor)
        if len(ledger.contesting_seats()) <= 1:
            ledger.close()
        else:
            ledger.rotate_actor()

    def _do_call(self, actor: int) -> None:
        self._ledger.commit(actor, self._ledger.to_call(actor))
        self._close_or_rotate(actor)

    def _do_bet(self, actor: int, amount: int | None) -> None:
        ledger = self._ledger
        requested = amount if amount is not None else ledger.min_raise_increment
        current_max = ledger.max_committed
        target = max(requested, current_max + ledger.last_raise_increment)
        ledger.commit(actor, target - ledger.committed(actor))
        ledger.set_last_raise_increment(target - current_max)
        self._reopen_after(actor)

    def _do_raise(self, actor: int, amount: int | None) -> None:
        ledger = self._ledger
        current_max = ledger.max_committed
        increment = max(ledger.last_raise_increment, ledger.min_raise_increment)
        min_target = current_max + increment
        target = amount if amount is not None else min_target

        if target < min_target:
            # Under-sized raise plays as a call
            self._do_call(actor)
            return

        ledger.commit(actor, target - ledger.committed(actor))
        ledger.set_last_raise_increment(target - current_max)
        self._reopen_after(actor)

    def _do_all_in(self, actor: int) -> None:
        ledger = self._ledger
        moved = ledger.commit(actor, ledger.stack(actor))
        ledger.set_last_raise_increment(max(ledger.last_raise_increment, moved))
        self._reopen_after(actor)

    # ------------------------------------------------------------------
    # Turn order
    # ------------------------------------------------------------------

    def _reopen_after(self, actor: int) -> None:
        """Aggression: everyone after the actor must act again."""
        self._ledger.set_round_start_to_next_of(actor)
        self._ledger.rotate_actor()

    def _close_or_rotate(self, actor: int) -> None:
        if self._is_round_closed_after(actor):
            self._ledger.next_street()
        else:
            self._ledger.rotate_actor()

    def _is_round_closed_after(self, last_actor: int) -> bool:
        """Round closes when the rotation is back at the round start and bets match.

        (a) every seat strictly between ``last_actor`` and the round start is
        folded or all-in, and (b) no eligible seat still owes chips.
        """
        ledger = self._ledger
        n = ledger.player_count
        start = ledger.round_start_seat

        seat = (last_actor + 1) % n
        while seat != start:
            if ledger.is_eligible(seat):
                return False
            seat = (seat + 1) % n

        return all(ledger.to_call(s) == 0 for s in ledger.eligible_seats())
