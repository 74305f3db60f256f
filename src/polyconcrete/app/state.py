from __future__ import annotations

import logging
from typing import Callable, List, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from polyconcrete.app.storage import KeyValueStorage
from polyconcrete.config import DENSITY_G_PER_ML, LEGACY_STORAGE_KEY, STORAGE_KEY, UNDO_TIMEOUT_MS
from polyconcrete.model.io import IOManager, SnapshotFormatError
from polyconcrete.model.mixture import MixtureResult, Number, compute_mixture
from polyconcrete.model.molds import MoldRecord, default_mold_name, utc_now_iso

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]


class MoldStore(QObject):
    """
    Central state store for the measured molds, with signals for UI sync.

    The in-memory list is the source of truth. Every mutation replaces the
    whole list and mirrors it to `storage`; without a storage backend the
    store works purely in memory.
    """
    molds_changed = Signal(object)
    undo_changed = Signal(bool)

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        schedule: Optional[Scheduler] = None,
        undo_timeout_ms: int = UNDO_TIMEOUT_MS,
    ) -> None:
        super().__init__()
        self._storage = storage
        self._schedule: Scheduler = schedule if schedule is not None else QTimer.singleShot
        self._undo_timeout_ms = undo_timeout_ms

        self._molds: List[MoldRecord] = []
        self._undo_buffer: Optional[List[MoldRecord]] = None
        self._show_undo = False
        self._last_updated: Optional[str] = None

    # ------------------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------------------

    @property
    def molds(self) -> List[MoldRecord]:
        return list(self._molds)

    @property
    def undo_buffer(self) -> Optional[List[MoldRecord]]:
        return None if self._undo_buffer is None else list(self._undo_buffer)

    @property
    def show_undo(self) -> bool:
        return self._show_undo

    @property
    def last_updated(self) -> Optional[str]:
        return self._last_updated

    @property
    def total_volume(self) -> Number:
        """Sum of the volumes (ml) of the active molds."""
        return sum((m.volume_ml for m in self._molds if m.active), 0)

    @property
    def total_mass(self) -> Number:
        """Mass (g) of mixture needed to fill the active molds."""
        return self.total_volume * DENSITY_G_PER_ML

    @property
    def mixture(self) -> MixtureResult:
        return compute_mixture(self.total_mass)

    # ------------------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------------------

    def load(self) -> None:
        """
        Replace the list with the persisted snapshot.
        Falls back to the legacy v1 snapshot when no current one exists.
        Never raises: unreadable data leaves an empty list.
        """
        if self._storage is None:
            logger.debug("No persistent storage available, skipping load.")
            return

        raw = self._storage.get(STORAGE_KEY)
        if raw is None:
            if self._migrate_legacy():
                return
            self._last_updated = None
            self._set_molds([])
            return

        try:
            molds, last_updated = IOManager.decode_state(raw)
        except SnapshotFormatError as e:
            logger.warning(f"Discarding unreadable snapshot '{STORAGE_KEY}': {e}")
            self._last_updated = None
            self._set_molds([])
            return

        self._last_updated = last_updated
        self._set_molds(molds)
        logger.info(f"Loaded {len(molds)} molds.")

    def _migrate_legacy(self) -> bool:
        legacy_raw = self._storage.get(LEGACY_STORAGE_KEY)
        if legacy_raw is None:
            return False

        try:
            molds = IOManager.migrate_legacy(legacy_raw)
        except SnapshotFormatError as e:
            logger.warning(f"Skipping migration of unreadable snapshot '{LEGACY_STORAGE_KEY}': {e}")
            return False

        self._set_molds(molds)
        self.save()
        self._storage.remove(LEGACY_STORAGE_KEY)
        return True

    def save(self) -> None:
        if self._storage is None:
            return
        now = utc_now_iso()
        self._storage.set(STORAGE_KEY, IOManager.encode_state(self._molds, now))
        self._last_updated = now

    # ------------------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------------------

    def add_mold(self, name: str, volume: Number) -> MoldRecord:
        final_name = name.strip() or default_mold_name(len(self._molds))
        mold = MoldRecord.create(final_name, volume)
        self._set_molds([*self._molds, mold])
        self.save()
        logger.debug(f"Added mold '{mold.name}' ({mold.volume_ml} ml).")
        return mold

    def delete_mold(self, mold_id: str) -> None:
        self._stash_for_undo()
        self._set_molds([m for m in self._molds if m.id != mold_id])
        self.save()
        self._schedule(self._undo_timeout_ms, self._expire_undo)

    def undo_delete(self) -> None:
        if self._undo_buffer is None:
            return
        restored = self._undo_buffer
        self._undo_buffer = None
        self._set_show_undo(False)
        self._set_molds(restored)
        self.save()
        logger.debug(f"Restored {len(restored)} molds.")

    def toggle_mold(self, mold_id: str) -> None:
        self._set_molds([m.toggled() if m.id == mold_id else m for m in self._molds])
        self.save()

    def clear_all(self) -> None:
        self._stash_for_undo()
        self._set_molds([])
        # Drop the snapshot instead of saving an empty one
        if self._storage is not None:
            self._storage.remove(STORAGE_KEY)
        self._schedule(self._undo_timeout_ms, self._expire_undo)
        logger.info("Cleared all molds.")

    # ------------------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------------------

    def _set_molds(self, molds: List[MoldRecord]) -> None:
        self._molds = molds
        self.molds_changed.emit(list(molds))

    def _set_show_undo(self, visible: bool) -> None:
        if visible != self._show_undo:
            self._show_undo = visible
            self.undo_changed.emit(visible)

    def _stash_for_undo(self) -> None:
        self._undo_buffer = self._molds
        self._set_show_undo(True)

    def _expire_undo(self) -> None:
        # Runs for every scheduled expiry, including ones from older deletes
        self._undo_buffer = None
        self._set_show_undo(False)
