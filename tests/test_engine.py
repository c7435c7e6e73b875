"""Tests for BettingEngine -- action semantics, sizing, round closure."""

import pytest
from betround.core.betting_config import BettingConfig
from betround.core.engine import BettingEngine, ValidationResult
from betround.core.errors import UnsupportedAction
from betround.core.ledger import Ledger
from betround.core.types import Action, ActionDecision, Street


def _table(stacks, button=0, blinds=(50, 100), min_raise=None):
    """Build a ledger and its engine in one go."""
    config = BettingConfig(blinds[0], blinds[1], min_raise)
    ledger = Ledger(config, len(stacks), button, stacks)
    return ledger, BettingEngine(ledger)


def _play(engine, *actions):
    """Apply a sequence of actions; tuples carry an amount."""
    for entry in actions:
        if isinstance(entry, tuple):
            engine.apply(*entry)
        else:
            engine.apply(entry)


class TestFold:
    def test_heads_up_fold_closes_hand(self):
        ledger, engine = _table([1000, 1000])
        assert ledger.actor_seat == 1
        assert engine.apply(Action.FOLD) is True
        assert ledger.street is Street.CLOSED
        assert ledger.pot_size == 150
        assert ledger.stacks == [900, 950]

    def test_fold_with_two_left_rotates(self):
        ledger, engine = _table([1000] * 3)
        engine.apply(Action.FOLD)
        assert ledger.is_folded(0)
        assert ledger.street is Street.PREFLOP
        assert ledger.actor_seat == 1

    def test_everyone_folds_to_big_blind(self):
        ledger, engine = _table([1000] * 3)
        _play(engine, Action.FOLD, Action.FOLD)
        assert ledger.is_closed
        assert ledger.contesting_seats() == [2]
        assert ledger.pot_size == 150


class TestCheckAndCall:
    def test_heads_up_limp_and_check(self):
        ledger, engine = _table([1000, 1000])
        engine.apply(Action.CALL)
        assert ledger.actor_seat == 0
        assert ledger.street is Street.PREFLOP
        engine.apply(Action.CHECK)
        assert ledger.street is Street.FLOP
        assert ledger.pot_size == 200
        assert ledger.actor_seat == 1

    def test_big_blind_gets_option(self):
        ledger, engine = _table([1000] * 3)
        _play(engine, Action.CALL, Action.CALL)
        assert ledger.street is Street.PREFLOP
        assert ledger.actor_seat == 2
        assert ledger.legal_actions(2) == {Action.FOLD, Action.CHECK, Action.BET}

    def test_six_handed_preflop_then_checked_flop(self):
        ledger, engine = _table([1000] * 6)
        assert ledger.actor_seat == 3
        for seat in (3, 4, 5, 0, 1):
            assert ledger.actor_seat == seat
            engine.apply(Action.CALL)
        assert ledger.actor_seat == 2
        engine.apply(Action.CHECK)

        assert ledger.street is Street.FLOP
        assert ledger.pot_size == 600
        assert ledger.round_start_seat == 3

        for seat in (3, 4, 5, 0, 1, 2):
            assert ledger.actor_seat == seat
            assert ledger.street is Street.FLOP
            engine.apply(Action.CHECK)
        assert ledger.street is Street.TURN
        assert ledger.committed_this_street == [0] * 6
        assert ledger.pot_size == 600

    def test_call_leaves_chips_behind(self):
        ledger, engine = _table([1000, 1000, 1000])
        engine.apply(Action.RAISE, 600)
        # SB has 950 behind; calling 550 leaves chips
        engine.apply(Action.CALL)
        assert ledger.stack(1) == 400
        assert not ledger.is_all_in(1)

    def test_call_more_than_stack_is_clamped(self):
        ledger, engine = _table([1000, 300, 1000])
        engine.apply(Action.RAISE, 800)
        engine.apply(Action.CALL)
        assert ledger.stack(1) == 0
        assert ledger.committed(1) == 300
        assert ledger.is_all_in(1)
        assert ledger.total_chips == 2300


class TestBet:
    def _on_flop(self):
        ledger, engine = _table([1000] * 3)
        _play(engine, Action.CALL, Action.CALL, Action.CHECK)
        assert ledger.street is Street.FLOP
        return ledger, engine

    def test_bet_sets_increment_and_reopens(self):
        ledger, engine = self._on_flop()
        seat = ledger.actor_seat
        engine.apply(Action.BET, 250)
        assert ledger.committed(seat) == 250
        assert ledger.last_raise_increment == 250
        assert ledger.round_start_seat == (seat + 1) % 3
        assert ledger.actor_seat == (seat + 1) % 3

    def test_bet_without_amount_uses_min_raise(self):
        ledger, engine = self._on_flop()
        seat = ledger.actor_seat
        engine.apply(Action.BET)
        assert ledger.committed(seat) == 100
        assert ledger.last_raise_increment == 100

    def test_undersized_bet_is_lifted(self):
        # Heads-up: SB limps, BB bets 150 into a 100 commitment
        ledger, engine = _table([1000, 1000])
        engine.apply(Action.CALL)
        engine.apply(Action.BET, 150)
        assert ledger.committed(0) == 200
        assert ledger.last_raise_increment == 100
        assert ledger.round_start_seat == 1
        assert ledger.actor_seat == 1

    def test_bet_larger_than_stack_is_all_in(self):
        ledger, engine = self._on_flop()
        seat = ledger.actor_seat
        engine.apply(Action.BET, 5000)
        assert ledger.stack(seat) == 0
        assert ledger.is_all_in(seat)
        assert ledger.total_chips == 3000


class TestRaise:
    def test_full_raise(self):
        ledger, engine = _table([1000] * 3)
        engine.apply(Action.RAISE, 300)
        assert ledger.committed(0) == 300
        assert ledger.last_raise_increment == 200
        assert ledger.round_start_seat == 1
        assert ledger.actor_seat == 1

    def test_min_raise_tracks_last_increment(self):
        ledger, engine = _table([1000] * 3)
        engine.apply(Action.RAISE, 300)
        # Minimum re-raise is now 300 + 200 = 500; 450 plays as a call
        engine.apply(Action.RAISE, 450)
        assert ledger.committed(1) == 300
        assert ledger.last_raise_increment == 200
        assert ledger.actor_seat == 2

    def test_undersized_raise_becomes_call(self):
        ledger, engine = _table([1000] * 3)
        engine.apply(Action.RAISE, 150)
        assert ledger.committed(0) == 100
        assert ledger.last_raise_increment == 100
        assert ledger.round_start_seat == 0
        assert ledger.actor_seat == 1

    def test_raise_without_amount_is_min_raise(self):
        ledger, engine = _table([1000] * 3)
        engine.apply(Action.RAISE)
        assert ledger.committed(0) == 200
        assert ledger.last_raise_increment == 100

    def test_min_raise_floor_from_config(self):
        ledger, engine = _table([1000] * 3, min_raise=300)
        engine.apply(Action.RAISE, 300)
        # 100 + max(100, 300) = 400 minimum: plays as a call
        assert ledger.committed(0) == 100
        engine.apply(Action.RAISE, 400)
        assert ledger.committed(1) == 400
        assert ledger.last_raise_increment == 300

    def test_aggressor_checks_to_close(self):
        ledger, engine = _table([1000] * 3)
        _play(engine, (Action.RAISE, 300), Action.CALL, Action.CALL)
        assert ledger.street is Street.PREFLOP
        assert ledger.actor_seat == 0
        assert ledger.to_call(0) == 0
        engine.apply(Action.CHECK)
        assert ledger.street is Street.FLOP
        assert ledger.pot_size == 900


class TestAllIn:
    def test_short_stack_shove_and_calls(self):
        ledger, engine = _table([200, 1000, 1000])
        engine.apply(Action.ALL_IN)
        assert ledger.is_all_in(0)
        assert ledger.last_raise_increment == 200
        assert ledger.round_start_seat == 1
        assert ledger.actor_seat == 1
        assert ledger.legal_actions(1) == {Action.FOLD, Action.CALL}

        _play(engine, Action.CALL, Action.CALL)
        assert ledger.street is Street.FLOP
        assert ledger.pot_size == 600
        assert ledger.stacks == [0, 800, 800]
        assert ledger.actor_seat == 1

    def test_increment_uses_chips_moved(self):
        ledger, engine = _table([1000, 350, 1000])
        engine.apply(Action.RAISE, 300)
        engine.apply(Action.ALL_IN)
        assert ledger.committed(1) == 350
        assert ledger.last_raise_increment == 300
        assert ledger.actor_seat == 2

    def test_raise_withheld_after_all_in(self):
        ledger, engine = _table([200, 1000, 1000])
        engine.apply(Action.ALL_IN)
        result = engine.validate(Action.RAISE, 800)
        assert not result.legal
        assert "raise" in result.reason

    def test_both_all_in_advances_street(self):
        ledger, engine = _table([1000, 1000])
        engine.apply(Action.ALL_IN)
        engine.apply(Action.CALL)
        assert ledger.street is Street.FLOP
        assert ledger.eligible_seats() == []
        assert ledger.pot_size == 2000
        assert engine.is_all_in_situation()


class TestValidate:
    def test_legal_action(self):
        _, engine = _table([1000] * 3)
        assert engine.validate(Action.CALL) == ValidationResult(legal=True)

    def test_check_facing_bet_is_illegal(self):
        _, engine = _table([1000] * 3)
        result = engine.validate(Action.CHECK)
        assert not result.legal
        assert "not legal" in result.reason

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amount(self, amount):
        _, engine = _table([1000] * 3)
        result = engine.validate(Action.RAISE, amount)
        assert not result.legal
        assert "positive" in result.reason

    def test_target_not_above_commitment(self):
        ledger, engine = _table([1000, 1000])
        assert ledger.committed(1) == 50
        result = engine.validate(Action.RAISE, 50)
        assert not result.legal

    def test_unknown_action(self):
        _, engine = _table([1000] * 3)
        result = engine.validate("shove")
        assert not result.legal

    def test_closed_hand(self):
        ledger, engine = _table([1000, 1000])
        engine.apply(Action.FOLD)
        result = engine.validate(Action.CHECK)
        assert not result.legal
        assert "closed" in result.reason

    def test_validate_does_not_mutate(self):
        ledger, engine = _table([1000] * 3)
        before = ledger.snapshot()
        engine.validate(Action.RAISE, 500)
        engine.validate(Action.CHECK)
        assert ledger.snapshot() == before


class TestApplyEdges:
    def test_unsupported_action_raises_before_mutation(self):
        ledger, engine = _table([1000] * 3)
        before = ledger.snapshot()
        with pytest.raises(UnsupportedAction):
            engine.apply("fold")
        assert ledger.snapshot() == before

    def test_apply_after_close_is_noop(self):
        ledger, engine = _table([1000, 1000])
        engine.apply(Action.FOLD)
        before = ledger.snapshot()
        assert engine.apply(Action.CALL) is False
        assert engine.apply(Action.FOLD) is False
        assert engine.forfeit() is False
        assert ledger.snapshot() == before

    def test_apply_decision(self):
        ledger, engine = _table([1000] * 3)
        assert engine.apply_decision(ActionDecision.raise_to(400))
        assert ledger.committed(0) == 400

    def test_forfeit_folds_when_facing_bet(self):
        ledger, engine = _table([1000] * 3)
        engine.forfeit()
        assert ledger.is_folded(0)

    def test_forfeit_checks_when_free(self):
        ledger, engine = _table([1000] * 3)
        _play(engine, Action.CALL, Action.CALL)
        engine.forfeit()
        assert not ledger.is_folded(2)
        assert ledger.street is Street.FLOP

    def test_apply_does_not_validate(self):
        ledger, engine = _table([1000] * 3)
        assert engine.validate(Action.CHECK).legal is False
        assert engine.apply(Action.CHECK) is True
        assert ledger.committed(0) == 0
        assert ledger.to_call(0) == 100
        assert ledger.street is Street.PREFLOP
        assert ledger.actor_seat == 1

    def test_engine_exposes_ledger(self):
        ledger, engine = _table([1000, 1000])
        assert engine.ledger is ledger

    def test_not_all_in_situation_at_start(self):
        _, engine = _table([1000] * 3)
        assert not engine.is_all_in_situation()
