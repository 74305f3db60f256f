"""
Mold Records
============
Defines the data structure for a single measured mold.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from datetime import datetime, timezone
from typing import Any, Dict, Union
import uuid

Number = Union[int, float]


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def default_mold_name(index: int) -> str:
    """Name given to an unnamed mold at 0-based position `index`."""
    return f"Mold #{index + 1}"


@dataclass(frozen=True)
class MoldRecord:
    """
    One mold the user has measured.
    Records are immutable; the store replaces them instead of editing in place.
    """
    id: str
    name: str
    volume_ml: Number
    active: bool = True
    created_at: str = ""

    @staticmethod
    def create(name: str, volume_ml: Number) -> MoldRecord:
        """Factory for a fresh, active record with a new id and timestamp."""
        return MoldRecord(
            id=str(uuid.uuid4()),
            name=name,
            volume_ml=volume_ml,
            active=True,
            created_at=utc_now_iso(),
        )

    def toggled(self) -> MoldRecord:
        return replace(self, active=not self.active)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> MoldRecord:
        """
        Deserialize a stored record.

        Raises:
            TypeError: If `data` is not a mapping or a field has the wrong type.
            KeyError: If `id`, `name` or `volume_ml` is missing.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Mold record must be an object, got {type(data).__name__}")

        volume = data["volume_ml"]
        # bool is an int subclass but never a valid volume
        if isinstance(volume, bool) or not isinstance(volume, (int, float)):
            raise TypeError(f"Invalid volume_ml: {volume!r}")

        return MoldRecord(
            id=str(data["id"]),
            name=str(data["name"]),
            volume_ml=volume,
            active=bool(data.get("active", True)),
            created_at=str(data.get("created_at") or ""),
        )
