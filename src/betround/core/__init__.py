"""Betting-round state machine: ledger, engine, and agent-facing types."""

from betround.core.betting_config import BettingConfig
from betround.core.engine import BettingEngine, ValidationResult
from betround.core.errors import (
    BettingError,
    DecisionParseError,
    InvalidConfiguration,
    InvalidSeatIndex,
    UnsupportedAction,
)
from betround.core.ledger import Ledger
from betround.core.types import Action, ActionDecision, GameView, Street

__all__ = [
    "Action",
    "ActionDecision",
    "BettingConfig",
    "BettingEngine",
    "BettingError",
    "DecisionParseError",
    "GameView",
    "InvalidConfiguration",
    "InvalidSeatIndex",
    "Ledger",
    "Street",
    "UnsupportedAction",
    "ValidationResult",
]
