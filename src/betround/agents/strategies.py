"""Built-in seat policies.

Strategies:
- RandomAgent: probabilistic play weighted by hand strength and pot odds.
- CallingStationAgent: checks when free, otherwise calls.
- ScriptedAgent: replays a fixed list of decisions, then falls back.
"""

from __future__ import annotations

import random
from collections.abc import Iterable

from betround.agents.base import Agent
from betround.agents.parser import parse_decision
from betround.core.errors import InvalidConfiguration
from betround.core.types import Action, ActionDecision, GameView, Street
from betround.table.cards import Card
from betround.table.evaluator import HandEvaluator

__all__ = ["RandomAgent", "CallingStationAgent", "ScriptedAgent", "build_agent"]

# Chance of opening the betting when checked to, by street
_BASE_BET_PROB = {
    Street.PREFLOP: 0.30,
    Street.FLOP: 0.40,
    Street.TURN: 0.45,
    Street.RIVER: 0.50,
}


class CallingStationAgent(Agent):
    """Never folds, never raises."""

    name = "calling_station"

    def decide(self, view: GameView) -> ActionDecision:
        if Action.CHECK in view.legal_actions:
            return ActionDecision.check()
        return ActionDecision.call()


class ScriptedAgent(Agent):
    """Plays a fixed sequence of decisions, then checks or folds."""

    name = "scripted"

    def __init__(self, decisions: Iterable[ActionDecision]) -> None:
        self._decisions = list(decisions)
        self._next = 0

    @property
    def remaining(self) -> int:
        return len(self._decisions) - self._next

    def decide(self, view: GameView) -> ActionDecision:
        if self._next < len(self._decisions):
            decision = self._decisions[self._next]
            self._next += 1
            return decision
        if Action.CHECK in view.legal_actions:
            return ActionDecision.check()
        return ActionDecision.fold()


class RandomAgent(Agent):
    """Randomised policy scaled by hand strength.

    With nothing to call it bets or checks; facing a bet it picks among
    fold/call/raise/all-in with weights driven by pot odds and strength.
    """

    name = "random"

    def __init__(
        self,
        rng: random.Random | None = None,
        evaluator: HandEvaluator | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._evaluator = evaluator or HandEvaluator()

    def decide(self, view: GameView) -> ActionDecision:
        legal = view.legal_actions
        strength = self._strength(view)
        multiplier = _bet_probability_multiplier(strength)

        if view.to_call == 0:
            bet_prob = min(1.0, _BASE_BET_PROB.get(view.street, 0.0) * multiplier)
            if Action.BET in legal and self._rng.random() < bet_prob:
                return ActionDecision.bet(self._bet_target(view, strength))
            if Action.CHECK in legal:
                return ActionDecision.check()
            return ActionDecision.fold()

        pot_odds = view.to_call / (view.pot_size + view.to_call)
        call_prob = min(0.95, _clamp(1.0 - pot_odds, 0.10, 0.90) * multiplier)
        raise_prob = min(0.3, 0.15 * multiplier) if Action.RAISE in legal else 0.0
        all_in_prob = min(0.1, 0.02 * multiplier) if Action.ALL_IN in legal else 0.0
        fold_prob = max(0.0, 1.0 - call_prob - raise_prob - all_in_prob)

        weighted = [
            (Action.FOLD, fold_prob),
            (Action.CALL, call_prob),
            (Action.RAISE, raise_prob),
            (Action.ALL_IN, all_in_prob),
        ]
        choice = self._weighted_pick([(a, w) for a, w in weighted if a in legal and w > 0])

        if choice is Action.FOLD:
            return ActionDecision.fold()
        if choice is Action.RAISE:
            return ActionDecision.raise_to(self._raise_target(view, strength))
        if choice is Action.ALL_IN:
            return ActionDecision.all_in()
        return ActionDecision.call()

    # ------------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------------

    def _bet_target(self, view: GameView, strength: float) -> int:
        min_inc = max(1, view.min_raise_increment)
        pot = view.pot_size
        options = [max(min_inc, round(pot * 0.5)), max(min_inc, round(pot * 0.66)), max(min_inc, pot)]
        pick = round(self._rng.choice(options) * _bet_size_multiplier(strength))
        return view.my_committed + max(min_inc, min(pick, view.my_stack))

    def _raise_target(self, view: GameView, strength: float) -> int:
        increment = max(1, view.min_raise_increment, view.last_raise_increment)
        min_target = view.max_committed + increment
        pot_target = view.max_committed + max(increment, view.pot_size // 2)
        target = round(self._rng.choice([min_target, pot_target]) * _bet_size_multiplier(strength))
        cap = view.my_committed + view.my_stack
        return max(min_target, min(target, cap))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _strength(self, view: GameView) -> float:
        if not view.hole_cards:
            return 0.5
        hole = [Card.parse(c) for c in view.hole_cards]
        board = [Card.parse(c) for c in view.board]
        return self._evaluator.hand_strength(hole, board)

    def _weighted_pick(self, choices: list[tuple[Action, float]]) -> Action:
        total = sum(w for _, w in choices)
        if total <= 0:
            return Action.CALL
        roll = self._rng.random() * total
        for action, weight in choices:
            roll -= weight
            if roll < 0:
                return action
        return choices[-1][0]


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _bet_probability_multiplier(strength: float) -> float:
    if strength >= 0.8:
        return 2.0
    if strength >= 0.6:
        return 1.5
    if strength >= 0.4:
        return 1.0
    if strength >= 0.2:
        return 0.7
    return 0.4


def _bet_size_multiplier(strength: float) -> float:
    if strength >= 0.8:
        return 1.5
    if strength >= 0.6:
        return 1.2
    if strength >= 0.4:
        return 1.0
    return 0.8


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def _build_random(params: dict, rng: random.Random) -> Agent:
    return RandomAgent(rng=rng)


def _build_calling_station(params: dict, rng: random.Random) -> Agent:
    return CallingStationAgent()


def _build_scripted(params: dict, rng: random.Random) -> Agent:
    return ScriptedAgent(parse_decision(p) for p in params.get("script", []))


_STRATEGY_REGISTRY = {
    "random": _build_random,
    "calling_station": _build_calling_station,
    "scripted": _build_scripted,
}


def build_agent(strategy: str, params: dict | None = None, rng: random.Random | None = None) -> Agent:
    """Instantiate a registered strategy by name."""
    factory = _STRATEGY_REGISTRY.get(strategy)
    if factory is None:
        raise InvalidConfiguration(
            f"Unknown strategy: {strategy!r}. Available: {list(_STRATEGY_REGISTRY)}"
        )
    return factory(params or {}, rng or random.Random())
