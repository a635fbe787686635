"""
Last Inputs Store

Local JSON file with the most recently used deal inputs, restored on the
next visit. Missing or corrupt data means "no prior input", never an error.
"""

import hashlib
import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path

from .models import FinancialInputs

logger = logging.getLogger(__name__)

STORE_KEY = "rental_roi_last_inputs"

# Client ids are opaque random tokens generated by the browser (a UUID fits)
CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{16,128}")


class LastInputsStore:
    """Holds one record: {"savedAt": ISO timestamp, "inputs": {...}}."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def save(self, inputs: FinancialInputs) -> Path:
        record = {
            "key": STORE_KEY,
            "savedAt": datetime.now(timezone.utc).isoformat(),
            "inputs": inputs.to_dict(),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(record, handle, indent=2)
        return self.path

    def load(self) -> FinancialInputs | None:
        record = self.load_record()
        if record is None:
            return None
        return FinancialInputs.from_dict(record["inputs"])

    def load_record(self) -> dict | None:
        """Raw record including the timestamp, or None."""
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                record = json.load(handle)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable stored inputs at {self.path}: {str(e)}")
            return None

        if not isinstance(record, dict) or record.get("key") != STORE_KEY or not isinstance(record.get("inputs"), dict):
            logger.warning(f"Ignoring stored inputs with unexpected shape at {self.path}")
            return None
        return record

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def store_for_client(directory: str | Path, client_id: str | None) -> LastInputsStore | None:
    """
    One store per client under `directory`, or None for a missing or malformed id.

    The file name is a sha256 of the id.
    """
    if not client_id or not CLIENT_ID_PATTERN.fullmatch(client_id):
        return None
    digest = hashlib.sha256(client_id.encode("utf-8")).hexdigest()
    return LastInputsStore(Path(directory) / f"{digest}.json")
