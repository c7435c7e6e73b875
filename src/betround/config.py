"""Session configuration loader."""

import yaml
from dataclasses import dataclass, field
from pathlib import Path

from betround.core.betting_config import BettingConfig
from betround.core.errors import InvalidConfiguration
from betround.core.ledger import MAX_PLAYERS, MIN_PLAYERS


@dataclass
class AgentConfig:
    name: str
    strategy: str  # "random", "calling_station", "scripted"
    params: dict = field(default_factory=dict)  # strategy-specific, e.g. script


@dataclass
class TableConfig:
    blinds: tuple[int, int] = (50, 100)
    min_raise: int | None = None  # defaults to big blind
    starting_stack: int = 10000
    stacks: list[int] | None = None  # per-seat override of starting_stack
    button: int = 0
    max_actions_per_street: int = 50

    def betting_config(self) -> BettingConfig:
        return BettingConfig(self.blinds[0], self.blinds[1], self.min_raise)

    def seat_stacks(self, seats: int) -> list[int]:
        if self.stacks is not None:
            return list(self.stacks)
        return [self.starting_stack] * seats


@dataclass
class SessionConfig:
    name: str
    seed: int
    hands: int = 100
    table: TableConfig = field(default_factory=TableConfig)
    agents: dict[str, AgentConfig] = field(default_factory=dict)
    output_dir: Path | None = None

    @property
    def seats(self) -> int:
        return len(self.agents)


def load_config(path: Path) -> SessionConfig:
    """Load session config from YAML file."""
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise InvalidConfiguration(f"{path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise InvalidConfiguration(f"{path}: malformed YAML: {e}") from e

    if not isinstance(raw, dict) or "session" not in raw:
        raise InvalidConfiguration(f"{path}: missing 'session' section")

    s = raw["session"]
    t = raw.get("table", {}) or {}
    raw_agents = raw.get("agents") or {}
    for section, value in (("session", s), ("table", t), ("agents", raw_agents)):
        if not isinstance(value, dict):
            raise InvalidConfiguration(f"'{section}' must be a mapping")

    agents = {}
    for name, a in raw_agents.items():
        if not isinstance(a, dict) or "strategy" not in a:
            raise InvalidConfiguration(f"agent {name!r} needs a 'strategy'")
        agents[name] = AgentConfig(
            name=name,
            strategy=a["strategy"],
            params={k: v for k, v in a.items() if k != "strategy"},
        )

    if not MIN_PLAYERS <= len(agents) <= MAX_PLAYERS:
        raise InvalidConfiguration(
            f"need {MIN_PLAYERS}-{MAX_PLAYERS} agents, got {len(agents)}"
        )

    blinds = t.get("blinds", (50, 100))
    if not isinstance(blinds, (list, tuple)) or len(blinds) != 2:
        raise InvalidConfiguration(f"blinds must be [small, big], got {blinds!r}")
    blinds = tuple(blinds)

    stacks = t.get("stacks")
    if stacks is not None and not isinstance(stacks, list):
        raise InvalidConfiguration(f"table.stacks must be a list, got {stacks!r}")
    if stacks is not None and len(stacks) != len(agents):
        raise InvalidConfiguration(
            f"table.stacks has {len(stacks)} entries for {len(agents)} agents"
        )

    try:
        name = s["name"]
        seed = s["seed"]
    except KeyError as e:
        raise InvalidConfiguration(f"session.{e.args[0]} is required") from e

    output_dir = raw.get("output_dir")

    return SessionConfig(
        name=name,
        seed=seed,
        hands=s.get("hands", 100),
        table=TableConfig(
            blinds=blinds,
            min_raise=t.get("min_raise"),
            starting_stack=t.get("starting_stack", 10000),
            stacks=list(stacks) if stacks is not None else None,
            button=t.get("button", 0),
            max_actions_per_street=t.get("max_actions_per_street", 50),
        ),
        agents=agents,
        output_dir=Path(output_dir) if output_dir else None,
    )
