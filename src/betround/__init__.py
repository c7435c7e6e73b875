"""betround -- no-limit Hold'em betting-round simulator.

Key modules:

- core: betting ledger, engine, and the types agents see.
- table: cards, hand evaluation, the hand driver and multi-hand sessions.
- agents: decision policies bound to seats.
- reporting: console rendering of session results.
"""

__version__ = "0.1.0"
