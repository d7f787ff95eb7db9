"""Snapshot persistence: one JSON blob per store.

``JsonStore`` lays a snapshot out as::

    <directory>/profile.json       profile, lifetime stats, character
    <directory>/boss.json          weekly boss
    <directory>/achievements.json  unlocked and unseen achievement ids
    <directory>/sleep_log.json     last 60 wake-ups
    <directory>/wake_scores.json   last 30 daily wake scores

A missing or unreadable blob is logged and replaced by its default, so the
engine can always start from a usable snapshot.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from rise.state import GameState

logger = logging.getLogger(__name__)

BLOB_NAMES = ("profile", "boss", "achievements", "sleep_log", "wake_scores")

DEFAULT_STORE_DIR = Path.home() / ".rise"


@runtime_checkable
class SnapshotStore(Protocol):
    """What the engine needs from persistence."""

    def load(self, today: date) -> GameState: ...

    def save(self, state: GameState) -> None: ...


class MemoryStore:
    """Keeps serialized blobs in memory (tests, embedding)."""

    def __init__(self, blobs: dict[str, dict[str, Any]] | None = None) -> None:
        self.blobs: dict[str, dict[str, Any]] = dict(blobs or {})
        self.saves = 0

    def load(self, today: date) -> GameState:
        return GameState.from_blobs(self.blobs, today)

    def save(self, state: GameState) -> None:
        # Round-trip through JSON so nothing shares structure with the caller
        self.blobs = json.loads(json.dumps(state.to_blobs()))
        self.saves += 1


class JsonStore:
    """Persists each blob as ``<name>.json`` inside *directory*."""

    def __init__(self, directory: str | Path = DEFAULT_STORE_DIR) -> None:
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def _read_blob(self, name: str) -> dict[str, Any] | None:
        path = self.path_for(name)
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                blob = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("could not read %s, using defaults: %s", path, e)
            return None
        if not isinstance(blob, dict):
            logger.warning("unexpected content in %s, using defaults", path)
            return None
        return blob

    def load(self, today: date) -> GameState:
        blobs = {}
        for name in BLOB_NAMES:
            blob = self._read_blob(name)
            if blob is not None:
                blobs[name] = blob
        try:
            return GameState.from_blobs(blobs, today)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("corrupt snapshot in %s, starting fresh: %s", self.directory, e)
            return GameState.new(today)

    def save(self, state: GameState) -> None:
        """Write every blob, each replaced atomically."""
        self.directory.mkdir(parents=True, exist_ok=True)
        for name, blob in state.to_blobs().items():
            path = self.path_for(name)
            fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(blob, f, indent=2, ensure_ascii=False)
                os.replace(tmp, path)
            except OSError:
                logger.exception("failed to write %s", path)
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        logger.debug("snapshot saved to %s", self.directory)
