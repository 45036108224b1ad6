"""Stable storage abstractions and SQLite implementation."""
from __future__ import annotations

import sqlite3
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from blanket_app.logging_config import get_logger
from logic.validation import BlanketUpdate, HorseUpdate, LinerUpdate, SettingsUpdate
from models.horse import HorseProfile
from models.inventory import Blanket, Liner
from models.settings import Settings
from tools.case_conversion import (
    blanket_from_db,
    blanket_to_db,
    blanket_updates_to_db,
    horse_from_db,
    horse_to_db,
    horse_updates_to_db,
    liner_from_db,
    liner_to_db,
    liner_updates_to_db,
    settings_from_db,
    settings_to_db,
    settings_updates_to_db,
)

LOGGER = get_logger(__name__)


class StableStore:
    """Persistence interface for horses, inventory and settings, scoped by owner."""

    def create_horse(self, user_id: str, horse: HorseProfile) -> HorseProfile:
        raise NotImplementedError

    def get_horse(self, user_id: str, horse_id: str) -> Optional[HorseProfile]:
        raise NotImplementedError

    def list_horses(self, user_id: str) -> List[HorseProfile]:
        raise NotImplementedError

    def update_horse(self, user_id: str, horse_id: str, updates: HorseUpdate) -> Optional[HorseProfile]:
        raise NotImplementedError

    def delete_horse(self, user_id: str, horse_id: str) -> bool:
        raise NotImplementedError

    def create_blanket(self, user_id: str, blanket: Blanket) -> Blanket:
        raise NotImplementedError

    def list_blankets(self, user_id: str) -> List[Blanket]:
        raise NotImplementedError

    def update_blanket(self, user_id: str, blanket_id: str, updates: BlanketUpdate) -> Optional[Blanket]:
        raise NotImplementedError

    def delete_blanket(self, user_id: str, blanket_id: str) -> bool:
        raise NotImplementedError

    def create_liner(self, user_id: str, liner: Liner) -> Liner:
        raise NotImplementedError

    def list_liners(self, user_id: str) -> List[Liner]:
        raise NotImplementedError

    def update_liner(self, user_id: str, liner_id: str, updates: LinerUpdate) -> Optional[Liner]:
        raise NotImplementedError

    def delete_liner(self, user_id: str, liner_id: str) -> bool:
        raise NotImplementedError

    def get_settings(self, user_id: str) -> Settings:
        raise NotImplementedError

    def save_settings(self, user_id: str, settings: Settings) -> Settings:
        raise NotImplementedError

    def update_settings(self, user_id: str, updates: SettingsUpdate) -> Settings:
        raise NotImplementedError


class SQLiteStableStore(StableStore):
    """Local SQLite-backed store.

    Ids are unique per owner, so two owners may both have a horse "1".
    Creating a row whose id the same owner already uses raises
    ``sqlite3.IntegrityError``.

    Deleting a blanket leaves liners untouched; their pairing reference simply
    dangles and the recommendation engine ignores it.
    """

    def __init__(self, database_path: str | Path = "data/stable.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS horses (
                    id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    breed TEXT,
                    age INTEGER,
                    coat_growth REAL,
                    cold_tolerance REAL,
                    is_clipped INTEGER,
                    is_senior INTEGER,
                    is_thin_keeper INTEGER,
                    is_foal INTEGER,
                    shelter_access TEXT,
                    PRIMARY KEY (user_id, id)
                );
                CREATE TABLE IF NOT EXISTS blankets (
                    id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    grams INTEGER NOT NULL,
                    waterproof INTEGER,
                    color TEXT,
                    currently_on_horse_id TEXT,
                    PRIMARY KEY (user_id, id)
                );
                CREATE TABLE IF NOT EXISTS liners (
                    id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    grams INTEGER NOT NULL,
                    color TEXT,
                    paired_with_blanket_id TEXT,
                    PRIMARY KEY (user_id, id)
                );
                CREATE TABLE IF NOT EXISTS settings (
                    user_id TEXT PRIMARY KEY,
                    use_feels_like INTEGER,
                    rain_priority INTEGER,
                    temp_buffer REAL,
                    liner_include_in_recommendations INTEGER,
                    liner_show_combined_weight INTEGER,
                    notifications_blanket_change INTEGER,
                    notifications_severe_weather INTEGER,
                    notifications_daily_summary INTEGER,
                    show_confidence INTEGER,
                    current_blanket_id TEXT,
                    location_lat REAL,
                    location_lng REAL,
                    location_name TEXT
                );
                """
            )

    # Generic row helpers -------------------------------------------------

    def _insert(self, table: str, row_id: str, values: Dict[str, Any]) -> None:
        columns = ["id", *values.keys()]
        placeholders = ", ".join("?" for _ in columns)
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                (row_id, *values.values()),
            )

    def _fetch_one(self, table: str, user_id: str, row_id: str) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            cursor = conn.execute(
                f"SELECT * FROM {table} WHERE user_id = ? AND id = ?",
                (user_id, row_id),
            )
            row = cursor.fetchone()
            return dict(row) if row else None

    def _fetch_all(self, table: str, user_id: str) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cursor = conn.execute(
                f"SELECT * FROM {table} WHERE user_id = ? ORDER BY rowid",
                (user_id,),
            )
            return [dict(row) for row in cursor.fetchall()]

    def _update(self, table: str, user_id: str, row_id: str, values: Dict[str, Any]) -> bool:
        if not values:
            return self._fetch_one(table, user_id, row_id) is not None
        assignments = ", ".join(f"{column} = ?" for column in values)
        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE {table} SET {assignments} WHERE user_id = ? AND id = ?",
                (*values.values(), user_id, row_id),
            )
            return cursor.rowcount > 0

    def _delete(self, table: str, user_id: str, row_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                f"DELETE FROM {table} WHERE user_id = ? AND id = ?",
                (user_id, row_id),
            )
            return cursor.rowcount > 0

    @staticmethod
    def _new_id(existing: Optional[str]) -> str:
        return existing or str(uuid.uuid4())

    # Horses --------------------------------------------------------------

    def create_horse(self, user_id: str, horse: HorseProfile) -> HorseProfile:
        horse_id = self._new_id(horse.id)
        self._insert("horses", horse_id, horse_to_db(horse, user_id))
        LOGGER.info("Stored horse", extra={"horse_id": horse_id})
        return self.get_horse(user_id, horse_id)

    def get_horse(self, user_id: str, horse_id: str) -> Optional[HorseProfile]:
        row = self._fetch_one("horses", user_id, horse_id)
        return horse_from_db(row) if row else None

    def list_horses(self, user_id: str) -> List[HorseProfile]:
        return [horse_from_db(row) for row in self._fetch_all("horses", user_id)]

    def update_horse(self, user_id: str, horse_id: str, updates: HorseUpdate) -> Optional[HorseProfile]:
        if not self._update("horses", user_id, horse_id, horse_updates_to_db(updates)):
            return None
        return self.get_horse(user_id, horse_id)

    def delete_horse(self, user_id: str, horse_id: str) -> bool:
        return self._delete("horses", user_id, horse_id)

    # Blankets ------------------------------------------------------------

    def create_blanket(self, user_id: str, blanket: Blanket) -> Blanket:
        blanket_id = self._new_id(blanket.id)
        self._insert("blankets", blanket_id, blanket_to_db(blanket, user_id))
        return blanket_from_db(self._fetch_one("blankets", user_id, blanket_id))

    def list_blankets(self, user_id: str) -> List[Blanket]:
        return [blanket_from_db(row) for row in self._fetch_all("blankets", user_id)]

    def update_blanket(self, user_id: str, blanket_id: str, updates: BlanketUpdate) -> Optional[Blanket]:
        if not self._update("blankets", user_id, blanket_id, blanket_updates_to_db(updates)):
            return None
        return blanket_from_db(self._fetch_one("blankets", user_id, blanket_id))

    def delete_blanket(self, user_id: str, blanket_id: str) -> bool:
        return self._delete("blankets", user_id, blanket_id)

    # Liners --------------------------------------------------------------

    def create_liner(self, user_id: str, liner: Liner) -> Liner:
        liner_id = self._new_id(liner.id)
        self._insert("liners", liner_id, liner_to_db(liner, user_id))
        return liner_from_db(self._fetch_one("liners", user_id, liner_id))

    def list_liners(self, user_id: str) -> List[Liner]:
        return [liner_from_db(row) for row in self._fetch_all("liners", user_id)]

    def update_liner(self, user_id: str, liner_id: str, updates: LinerUpdate) -> Optional[Liner]:
        if not self._update("liners", user_id, liner_id, liner_updates_to_db(updates)):
            return None
        return liner_from_db(self._fetch_one("liners", user_id, liner_id))

    def delete_liner(self, user_id: str, liner_id: str) -> bool:
        return self._delete("liners", user_id, liner_id)

    # Settings ------------------------------------------------------------

    def _settings_row(self, user_id: str) -> Dict[str, Any]:
        with self._connect() as conn:
            cursor = conn.execute("SELECT * FROM settings WHERE user_id = ?", (user_id,))
            row = cursor.fetchone()
            return dict(row) if row else {}

    def get_settings(self, user_id: str) -> Settings:
        return settings_from_db(self._settings_row(user_id))

    def save_settings(self, user_id: str, settings: Settings) -> Settings:
        values = settings_to_db(settings)
        columns = ["user_id", *values.keys()]
        placeholders = ", ".join("?" for _ in columns)
        with self._connect() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO settings ({', '.join(columns)}) VALUES ({placeholders})",
                (user_id, *values.values()),
            )
        return self.get_settings(user_id)

    def update_settings(self, user_id: str, updates: SettingsUpdate) -> Settings:
        row = {**settings_to_db(self.get_settings(user_id)), **settings_updates_to_db(updates)}
        return self.save_settings(user_id, settings_from_db(row))


__all__ = ["StableStore", "SQLiteStableStore"]
