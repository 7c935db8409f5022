"""Whole-collection snapshot storage.

The club list is persisted as one JSON array, rewritten in full on every save.
A missing or unreadable snapshot is never fatal: the store falls back to the
seed roster so the application always starts with a usable collection.
"""
from __future__ import annotations

import json
import os
import tempfile
from typing import List, Optional

from .config import JSON_INDENT, setup_logger
from .club_state import new_club
from .domain.models import Club, clubs_to_dicts
from .errors import DataError
from .exporters import clubs_from_records

logger = setup_logger(__name__)


def load_seed_roster(seed_path: Optional[str]) -> List[Club]:
    """Build empty clubs from a ``[{"name", "group"}, ...]`` roster file."""
    if not seed_path or not os.path.exists(seed_path):
        return []
    try:
        with open(seed_path, "r", encoding="utf-8") as handle:
            entries = json.load(handle)
        return [
            new_club(f"club-{index}", str(entry["name"]), int(entry["group"]))
            for index, entry in enumerate(entries)
        ]
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.error("seed_roster_unreadable: %s (%s)", seed_path, exc)
        return []


class ClubStore:
    """File-backed stand-in for the browser's local storage slot."""

    def __init__(self, path: str, seed_path: Optional[str] = None):
        self.path = path
        self.seed_path = seed_path

    def seed(self) -> List[Club]:
        return load_seed_roster(self.seed_path)

    def load(self) -> List[Club]:
        if not os.path.exists(self.path):
            return self.seed()
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                records = json.load(handle)
            return clubs_from_records(records, source="storage")
        except (OSError, ValueError, DataError) as exc:
            logger.error("snapshot_load_failed: %s (%s); using seed roster", self.path, exc)
            return self.seed()

    def save(self, clubs: List[Club]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".clubs-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(clubs_to_dicts(clubs), handle, indent=JSON_INDENT, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            logger.error("snapshot_save_failed: %s (%s)", self.path, exc)
            raise DataError("storage", "WRITE_FAILED", "Could not save club snapshot", str(exc)) from exc
        logger.debug("snapshot_saved: %d clubs -> %s", len(clubs), self.path)

    def reset(self) -> List[Club]:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.error("snapshot_reset_failed: %s (%s)", self.path, exc)
            raise DataError("storage", "RESET_FAILED", "Could not remove club snapshot", str(exc)) from exc
        logger.info("snapshot_reset: %s", self.path)
        return self.seed()
