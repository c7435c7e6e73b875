"""HandRunner -- drives one hand from blinds to payout.

The runner is the external driver around the betting core:
- builds a fresh Ledger (which posts blinds) and deals hole cards
- asks the acting seat's Agent for a decision on each turn
- validates it; illegal decisions are forfeited (check if free, else fold)
- deals board cards whenever the ledger advances a street
- runs the board out when nobody is left to act
- awards the whole pot to a single seat once the ledger is CLOSED
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from betround.agents.base import Agent
from betround.core.betting_config import BettingConfig
from betround.core.engine import BettingEngine
from betround.core.errors import InvalidConfiguration
from betround.core.ledger import Ledger
from betround.core.types import Street
from betround.table.cards import Card, Deck
from betround.table.evaluator import HandEvaluator
from betround.table.observer import HandObserver

__all__ = ["ActionRecord", "HandResult", "HandRunner", "DEFAULT_MAX_ACTIONS_PER_STREET"]

logger = logging.getLogger(__name__)

DEFAULT_MAX_ACTIONS_PER_STREET = 50

# Board size once each street has been dealt
_BOARD_SIZE = {Street.FLOP: 3, Street.TURN: 4, Street.RIVER: 5}


@dataclass
class ActionRecord:
    """One decision, as requested by the agent and as applied."""

    hand_number: int
    turn: int
    street: str
    seat: int
    requested: dict
    applied: str
    forfeited: bool
    reason: str | None
    pot_after: int
    stack_after: int
    street_after: str
    view: dict = field(default_factory=dict)  # what the seat saw before deciding


@dataclass
class HandResult:
    """Outcome of a finished hand."""

    hand_number: int
    button_seat: int
    starting_stacks: list[int]
    final_stacks: list[int]
    pot: int
    winner: int
    showdown: bool
    last_street: str
    actions: int
    board: list[str] = field(default_factory=list)
    hole_cards: dict[int, list[str]] = field(default_factory=dict)
    folded: list[int] = field(default_factory=list)


class HandRunner:
    """Plays single hands for a fixed table of agents.

    Parameters
    ----------
    config : BettingConfig
        Blinds and minimum raise for every hand this runner plays.
    agents : Sequence[Agent]
        One agent per seat; index is the seat number.
    evaluator : HandEvaluator, optional
        Showdown collaborator.
    observers : Sequence[HandObserver]
        Receive hand events; the only path to logs and history files.
    max_actions_per_street : int
        Safety valve; a street that runs longer is force-advanced.
    """

    def __init__(
        self,
        config: BettingConfig,
        agents: Sequence[Agent],
        evaluator: HandEvaluator | None = None,
        observers: Sequence[HandObserver] = (),
        max_actions_per_street: int = DEFAULT_MAX_ACTIONS_PER_STREET,
    ) -> None:
        if max_actions_per_street < 1:
            raise InvalidConfiguration("max_actions_per_street must be at least 1")
        self._config = config
        self._agents = list(agents)
        self._evaluator = evaluator or HandEvaluator()
        self._observers = list(observers)
        self._max_actions = max_actions_per_street

    def play(
        self,
        hand_number: int,
        button_seat: int,
        stacks: Sequence[int],
        rng: random.Random | None = None,
    ) -> HandResult:
        """Play one complete hand and return its result."""
        if len(stacks) != len(self._agents):
            raise InvalidConfiguration(
                f"{len(self._agents)} agents seated but {len(stacks)} stacks given"
            )

        ledger = Ledger(self._config, len(stacks), button_seat, stacks)
        engine = BettingEngine(ledger)
        deck = Deck(rng)
        deck.shuffle()

        hole = self._deal_hole_cards(ledger, deck)
        board: list[Card] = []
        for seat in ledger.contesting_seats():
            self._agents[seat].reset(seat)
        self._notify("on_hand_start", hand_number, ledger)

        street = ledger.street
        actions_on_street = 0
        turn = 0
        last_street = street

        while not ledger.is_closed:
            if ledger.street is not street:
                street = ledger.street
                last_street = street
                actions_on_street = 0
                self._deal_board(deck, board, street)
                self._notify("on_street", hand_number, street, [str(c) for c in board])
                continue

            if self._nobody_left_to_act(ledger, engine):
                ledger.next_street()
                continue

            if actions_on_street >= self._max_actions:
                logger.warning(
                    "Hand %d: %s hit %d actions, forcing next street",
                    hand_number, street.value, self._max_actions,
                )
                ledger.next_street()
                continue

            turn += 1
            actions_on_street += 1
            self._notify("on_action", self._take_turn(hand_number, turn, ledger, engine, hole, board))

        result = self._settle(hand_number, ledger, stacks, hole, board, last_street, turn)
        self._notify("on_hand_end", result)
        return result

    # ------------------------------------------------------------------
    # Turn handling
    # ------------------------------------------------------------------

    def _take_turn(
        self,
        hand_number: int,
        turn: int,
        ledger: Ledger,
        engine: BettingEngine,
        hole: dict[int, list[Card]],
        board: list[Card],
    ) -> ActionRecord:
        seat = ledger.actor_seat
        street = ledger.street
        view = ledger.view(seat).with_cards(hole.get(seat, []), board)
        decision = self._agents[seat].decide(view)

        check = engine.validate(decision.action, decision.amount)
        if check.legal:
            engine.apply_decision(decision)
            applied = decision.action.value
        else:
            applied = "check" if ledger.to_call(seat) == 0 else "fold"
            engine.forfeit()

        return ActionRecord(
            hand_number=hand_number,
            turn=turn,
            street=street.value,
            seat=seat,
            requested=decision.to_dict(),
            applied=applied,
            forfeited=not check.legal,
            reason=check.reason,
            pot_after=ledger.pot_size,
            stack_after=ledger.stack(seat),
            street_after=ledger.street.value,
            view=view.to_dict(),
        )

    @staticmethod
    def _nobody_left_to_act(ledger: Ledger, engine: BettingEngine) -> bool:
        """True when betting cannot continue on this street.

        Either every contesting seat is all-in, or a single seat can act
        with nothing to call.
        """
        if engine.is_all_in_situation():
            return True
        eligible = ledger.eligible_seats()
        return len(eligible) == 1 and ledger.to_call(eligible[0]) == 0

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def _deal_hole_cards(self, ledger: Ledger, deck: Deck) -> dict[int, list[Card]]:
        seats = ledger.contesting_seats()
        first = ledger.small_blind_seat
        seats.sort(key=lambda s: (s - first) % ledger.player_count)
        hole: dict[int, list[Card]] = {seat: [] for seat in seats}
        for _ in range(2):
            for seat in seats:
                hole[seat].append(deck.draw())
        return hole

    @staticmethod
    def _deal_board(deck: Deck, board: list[Card], street: Street) -> None:
        target = _BOARD_SIZE.get(street)
        if target is None:
            return
        deck.burn()
        while len(board) < target:
            board.append(deck.draw())

    # ------------------------------------------------------------------
    # Payout
    # ------------------------------------------------------------------

    def _settle(
        self,
        hand_number: int,
        ledger: Ledger,
        starting: Sequence[int],
        hole: dict[int, list[Card]],
        board: list[Card],
        last_street: Street,
        actions: int,
    ) -> HandResult:
        contesting = ledger.contesting_seats()
        showdown = len(contesting) > 1
        if showdown:
            winner = self._evaluator.pick_winner(
                {seat: hole[seat] for seat in contesting},
                board,
                ledger.button_seat,
                ledger.player_count,
            )
        else:
            winner = contesting[0]

        pot = ledger.pot_size
        final = ledger.stacks
        final[winner] += pot

        return HandResult(
            hand_number=hand_number,
            button_seat=ledger.button_seat,
            starting_stacks=list(starting),
            final_stacks=final,
            pot=pot,
            winner=winner,
            showdown=showdown,
            last_street=last_street.value,
            actions=actions,
            board=[str(c) for c in board],
            hole_cards=(
                {seat: [str(c) for c in hole[seat]] for seat in contesting}
                if showdown else {}
            ),
            folded=[s for s in range(ledger.player_count) if ledger.is_folded(s) and starting[s] > 0],
        )

    def _notify(self, hook: str, *args) -> None:
        for observer in self._observers:
            getattr(observer, hook)(*args)
