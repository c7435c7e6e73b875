"""SeedManager -- deterministic, HMAC-derived RNG per hand.

Seeds are derived via HMAC-SHA256 so inserting or dropping a hand
never shifts the deck order of any other hand.
"""

import hashlib
import hmac
import random


class SeedManager:
    """Produces deterministic, isolated Random instances for each hand."""

    def __init__(self, session_seed: int):
        self._session_seed = session_seed

    @property
    def session_seed(self) -> int:
        return self._session_seed

    def get_hand_seed(self, hand_number: int, purpose: str = "deck") -> int:
        """Derive a hand seed via HMAC. Same inputs always produce the same seed."""
        key = self._session_seed.to_bytes(8, byteorder="big", signed=True)
        msg = f"{purpose}:{hand_number}".encode("utf-8")
        digest = hmac.new(key, msg, hashlib.sha256).digest()
        return int.from_bytes(digest[:8], byteorder="big")

    def get_agent_seed(self, agent_name: str) -> int:
        """Seed for an agent's private RNG, stable across the whole session."""
        return self.get_hand_seed(0, purpose=f"agent:{agent_name}")

    def get_rng(self, seed: int) -> random.Random:
        """Return an isolated Random instance. Never touches global state."""
        return random.Random(seed)
