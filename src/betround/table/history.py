"""HandHistoryLogger -- JSONL hand logging.

One logger per session. Writes a starting snapshot per hand, one JSONL
line per action, and a summary line per hand. All entries include schema
version and session ID.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

import betround
from betround.table.observer import HandObserver

_SCHEMA_VERSION = "1.0.0"


class HandHistoryLogger(HandObserver):
    """Writes JSONL hand history for a single session."""

    def __init__(self, output_dir: Path, session_id: str):
        self._output_dir = Path(output_dir)
        self._session_id = session_id
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._output_dir / f"{session_id}.jsonl"

    @property
    def file_path(self) -> Path:
        return self._file_path

    def on_hand_start(self, hand_number, ledger) -> None:
        entry = {"record_type": "hand_start", "hand_number": hand_number}
        entry.update(ledger.snapshot())
        self._append(entry)

    def on_action(self, record) -> None:
        entry = asdict(record)
        entry["record_type"] = "action"
        self._append(entry)

    def on_hand_end(self, result) -> None:
        entry = asdict(result)
        entry["record_type"] = "hand_summary"
        entry["engine_version"] = betround.__version__
        self._append(entry)

    def _append(self, record: dict) -> None:
        record["schema_version"] = _SCHEMA_VERSION
        record["session_id"] = self._session_id
        record["timestamp"] = datetime.now(timezone.utc).isoformat()
        with open(self._file_path, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
