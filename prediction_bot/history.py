"""Round history persisted as one JSON file per day."""

import asyncio
import json
import logging
import os
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .exceptions import HistoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BetRecord:
    """One bet placed on a round."""

    round: str
    bet_amount: float  # Native-token amount
    bet: str  # BET_UP or BET_DOWN
    bet_executed: bool
    tx_gas_fee: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round,
            "betAmount": self.bet_amount,
            "bet": self.bet,
            "betExecuted": self.bet_executed,
            "txGasFee": str(self.tx_gas_fee),
        }


class JsonHistoryStore:
    """
    Appends round records to history/<YYYY-MM-DD>.json.

    append() always adds one row per record, so two bets on the same round
    are both kept. update_round() adds fields (settlement, claim) to the
    rows already written for a round.
    """

    def __init__(self, history_dir: str = "history"):
        self.history_dir = history_dir
        self._lock = asyncio.Lock()

    def _path_for(self, day: date) -> str:
        return os.path.join(self.history_dir, f"{day.isoformat()}.json")

    def _read(self, path: str) -> List[Dict[str, Any]]:
        if not os.path.exists(path):
            return []
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise HistoryError(f"History file {path} does not contain a list")
        return data

    def _write(self, path: str, rows: List[Dict[str, Any]]):
        os.makedirs(self.history_dir, exist_ok=True)
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w") as f:
            json.dump(rows, f, indent=2)
        os.replace(tmp_path, path)

    def _extend(self, path: str, records: List[Dict[str, Any]]) -> int:
        rows = self._read(path)
        rows.extend(dict(record) for record in records)
        self._write(path, rows)
        return len(rows)

    def _update(self, path: str, round_id: str, fields: Dict[str, Any]) -> int:
        rows = self._read(path)
        matched = [row for row in rows if str(row.get("round")) == round_id]
        for row in matched:
            row.update(fields)
        if matched:
            self._write(path, rows)
        return len(matched)

    async def append(self, records: List[Any], day: Optional[date] = None):
        """Persist records (BetRecord or plain dicts with a 'round' key)."""
        rows = [r.to_dict() if isinstance(r, BetRecord) else dict(r) for r in records]
        path = self._path_for(day or date.today())
        async with self._lock:
            try:
                total = await asyncio.to_thread(self._extend, path, rows)
            except (OSError, ValueError) as e:
                raise HistoryError(f"Failed to save history to {path}: {e}") from e
        logger.debug(f"Saved {len(rows)} record(s) to {path} ({total} rows today)")

    async def update_round(self, round_id: str, fields: Dict[str, Any], day: Optional[date] = None) -> int:
        """
        Add or overwrite fields on every row saved for a round.

        Returns:
            Number of rows updated (0 if the round has no rows that day).
        """
        path = self._path_for(day or date.today())
        async with self._lock:
            try:
                updated = await asyncio.to_thread(self._update, path, str(round_id), dict(fields))
            except (OSError, ValueError) as e:
                raise HistoryError(f"Failed to update history in {path}: {e}") from e
        if not updated:
            logger.warning(f"No history rows for round {round_id} in {path}")
        return updated

    async def load(self, day: Optional[date] = None) -> List[Dict[str, Any]]:
        """Read all records saved for a day."""
        path = self._path_for(day or date.today())
        try:
            return await asyncio.to_thread(self._read, path)
        except (OSError, ValueError) as e:
            raise HistoryError(f"Failed to read history from {path}: {e}") from e
