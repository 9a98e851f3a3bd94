from __future__ import annotations

import json
import os
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from resume_analyzer.core.config import Settings, settings
from resume_analyzer.schemas import AnalysisRecord


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class AnalysisStore:
    """Persists the shareable subset of each analysis, keyed by an opaque id."""

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is not None:
                return self._conn

            if self._db_path != ":memory:":
                directory = os.path.dirname(self._db_path)
                if directory:
                    os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS resume_analyses (
                    analysis_id TEXT PRIMARY KEY,
                    user_email TEXT,
                    original_name TEXT,
                    candidate_name TEXT NOT NULL,
                    industry TEXT NOT NULL,
                    api_source TEXT NOT NULL,
                    score INTEGER NOT NULL,
                    result_payload_json TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_resume_analyses_user
                ON resume_analyses (user_email, created_at);
                """
            )
            self._conn = conn
            return conn

    @staticmethod
    def _result_payload(record: AnalysisRecord) -> dict[str, Any]:
        payload = record.to_payload()
        return {
            "score": payload["score"],
            "atsScore": payload["atsScore"],
            "contentScore": payload["contentScore"],
            "suggestions": payload["suggestions"],
            "keywords": {
                "found": payload["keywords"]["found"],
                "missing": payload["keywords"]["missing"],
            },
        }

    def save(
        self,
        record: AnalysisRecord,
        *,
        user_email: str | None = None,
        original_name: str | None = None,
    ) -> str:
        conn = self._get_connection()
        analysis_id = uuid.uuid4().hex
        payload_json = json.dumps(self._result_payload(record), ensure_ascii=False)

        with self._lock:
            conn.execute(
                """
                INSERT INTO resume_analyses (
                    analysis_id, user_email, original_name, candidate_name, industry,
                    api_source, score, result_payload_json, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    analysis_id,
                    (user_email or "").strip().lower() or None,
                    original_name,
                    record.candidate_name,
                    record.industry,
                    record.api_source,
                    record.score,
                    payload_json,
                    _utc_now(),
                ),
            )
        return analysis_id

    def get(self, analysis_id: str) -> dict[str, Any] | None:
        conn = self._get_connection()
        with self._lock:
            row = conn.execute(
                """
                SELECT analysis_id, user_email, original_name, candidate_name, industry,
                       api_source, result_payload_json, created_at
                FROM resume_analyses
                WHERE analysis_id = ?
                """,
                (analysis_id,),
            ).fetchone()

        if not row:
            return None
        return {
            "id": row[0],
            "user_email": row[1],
            "original_name": row[2],
            "candidate_name": row[3],
            "industry": row[4],
            "api_source": row[5],
            "analysis_result": json.loads(row[6]) if row[6] else {},
            "created_at": datetime.fromisoformat(row[7]),
        }

    def history(self, user_email: str, limit: int = 50) -> list[dict[str, Any]]:
        conn = self._get_connection()
        with self._lock:
            rows = conn.execute(
                """
                SELECT analysis_id, created_at, original_name, result_payload_json
                FROM resume_analyses
                WHERE user_email = ?
                ORDER BY created_at DESC, rowid DESC
                LIMIT ?
                """,
                (user_email.strip().lower(), max(1, int(limit))),
            ).fetchall()

        history: list[dict[str, Any]] = []
        for row in rows:
            result = json.loads(row[3]) if row[3] else {}
            history.append(
                {
                    "id": row[0],
                    "created_at": datetime.fromisoformat(row[1]),
                    "original_name": row[2],
                    "score": result.get("score", 0),
                    "atsScore": result.get("atsScore"),
                }
            )
        return history

    def latest(self, user_email: str) -> dict[str, Any] | None:
        entries = self.history(user_email, limit=1)
        if not entries:
            return None
        return self.get(entries[0]["id"])

    def clear(self) -> None:
        conn = self._get_connection()
        with self._lock:
            conn.execute("DELETE FROM resume_analyses")

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None


def default_store(cfg: Settings | None = None) -> AnalysisStore | None:
    cfg = cfg or settings
    if not cfg.analysis_store_enabled:
        return None
    return AnalysisStore(cfg.analysis_db_path)
