"""
Input/Output Manager (JSON snapshots)
Handles encoding and decoding of the mold list stored under the storage keys,
including the migration of the legacy v1 format.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from polyconcrete.model.molds import MoldRecord, default_mold_name, utc_now_iso

logger = logging.getLogger(__name__)


class SnapshotFormatError(ValueError):
    """Raised when a stored snapshot cannot be parsed into mold records."""


class IOManager:

    @staticmethod
    def encode_state(molds: List[MoldRecord], last_updated: str) -> str:
        payload = {
            "molds": [m.to_dict() for m in molds],
            "last_updated": last_updated,
        }
        return json.dumps(payload)

    @staticmethod
    def _parse_snapshot(raw: str) -> Dict[str, Any]:
        try:
            parsed = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as e:
            raise SnapshotFormatError(f"Snapshot is not valid JSON: {e}") from e

        if not isinstance(parsed, dict) or not isinstance(parsed.get("molds"), list):
            raise SnapshotFormatError("Snapshot has no 'molds' array.")
        return parsed

    @staticmethod
    def decode_state(raw: str) -> Tuple[List[MoldRecord], Optional[str]]:
        """
        Parse a current-format (v2) snapshot.

        Returns:
            The mold records in stored order and the snapshot's `last_updated`.

        Raises:
            SnapshotFormatError: If the snapshot or any record is malformed.
        """
        snapshot = IOManager._parse_snapshot(raw)
        try:
            molds = [MoldRecord.from_dict(item) for item in snapshot["molds"]]
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotFormatError(f"Invalid mold record in snapshot: {e!r}") from e

        last_updated = snapshot.get("last_updated")
        if not isinstance(last_updated, str):
            last_updated = None
        return molds, last_updated

    @staticmethod
    def migrate_legacy(raw: str) -> List[MoldRecord]:
        """
        Convert a v1 snapshot into current records.

        v1 records carry no name or active flag: each one is named after its
        1-based position and marked active. Records without a timestamp get
        the migration time.

        Raises:
            SnapshotFormatError: If the legacy snapshot is malformed.
        """
        items = IOManager._parse_snapshot(raw)["molds"]
        migrated_at = utc_now_iso()

        molds: List[MoldRecord] = []
        for i, item in enumerate(items):
            if not isinstance(item, dict):
                raise SnapshotFormatError(f"Legacy record #{i + 1} is not an object.")
            data = dict(item)
            data["name"] = default_mold_name(i)
            data["active"] = True
            data.setdefault("created_at", migrated_at)
            try:
                molds.append(MoldRecord.from_dict(data))
            except (KeyError, TypeError, ValueError) as e:
                raise SnapshotFormatError(f"Invalid legacy record #{i + 1}: {e!r}") from e

        logger.info(f"Migrated {len(molds)} legacy mold records.")
        return molds
