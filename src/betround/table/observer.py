"""Hand observers -- the only place hand events turn into I/O.

Observers are handed to the HandRunner. The ledger and engine never log.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from betround.core.types import Street

if TYPE_CHECKING:
    from betround.core.ledger import Ledger
    from betround.table.dealer import ActionRecord, HandResult

logger = logging.getLogger(__name__)


class HandObserver:
    """Base observer. Every hook is a no-op; override what you need."""

    def on_hand_start(self, hand_number: int, ledger: Ledger) -> None:
        pass

    def on_action(self, record: ActionRecord) -> None:
        pass

    def on_street(self, hand_number: int, street: Street, board: list[str]) -> None:
        pass

    def on_hand_end(self, result: HandResult) -> None:
        pass


class LoggingObserver(HandObserver):
    """Writes hand progress to the ``logging`` module."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def on_hand_start(self, hand_number: int, ledger: Ledger) -> None:
        self._log.info(
            "Hand %d: button=%d stacks=%s pot=%d",
            hand_number, ledger.button_seat, ledger.stacks, ledger.pot_size,
        )

    def on_action(self, record: ActionRecord) -> None:
        if record.forfeited:
            self._log.warning(
                "Hand %d: seat %d illegal %s (%s), forfeited",
                record.hand_number, record.seat, record.requested, record.reason,
            )
        else:
            self._log.debug(
                "Hand %d [%s]: seat %d %s -> pot %d",
                record.hand_number, record.street, record.seat,
                record.requested, record.pot_after,
            )

    def on_street(self, hand_number: int, street: Street, board: list[str]) -> None:
        self._log.debug("Hand %d: %s %s", hand_number, street.value, " ".join(board))

    def on_hand_end(self, result: HandResult) -> None:
        self._log.info(
            "Hand %d: seat %d wins %d%s",
            result.hand_number, result.winner, result.pot,
            " at showdown" if result.showdown else "",
        )
