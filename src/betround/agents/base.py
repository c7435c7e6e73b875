"""Agent -- abstract base for every seat policy.

Agents only ever see a GameView. Seat-to-agent binding lives in the
session/driver, never in the betting core.
"""

from abc import ABC, abstractmethod

from betround.core.types import ActionDecision, GameView


class Agent(ABC):
    """Abstract base for seat policies."""

    name: str = "agent"

    @abstractmethod
    def decide(self, view: GameView) -> ActionDecision:
        """Return the action for the seat described by ``view``."""

    def reset(self, seat: int) -> None:
        """Called at the start of each hand. Default does nothing."""
