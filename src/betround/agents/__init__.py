"""Decision policies that can sit at a betround table."""

from betround.agents.base import Agent
from betround.agents.parser import parse_decision
from betround.agents.strategies import (
    CallingStationAgent,
    RandomAgent,
    ScriptedAgent,
    build_agent,
)

__all__ = [
    "Agent",
    "CallingStationAgent",
    "RandomAgent",
    "ScriptedAgent",
    "build_agent",
    "parse_decision",
]
