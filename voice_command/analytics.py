"""
Voice interaction analytics.

Observes successfully processed commands and keeps one record per
command: the text, the resolved action, a session id, a timestamp and
how long processing took. Records live in memory and are pruned by a
retention window (days, clamped to 1..365) whenever records are written
or read, and on explicit cleanup. Timestamps are stored in UTC.

When analytics is disabled, tracking and cleanup do nothing at all.
"""

import csv
import io
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, field_validator

from .cleaning import sanitize_text
from .models import ActionResult

logger = logging.getLogger("voice-command.analytics")

DEFAULT_RETENTION_DAYS = 30
MIN_RETENTION_DAYS = 1
MAX_RETENTION_DAYS = 365
TOP_COMMANDS_LIMIT = 5

CSV_HEADER = ["ID", "Command", "Action", "Session ID", "Timestamp", "Duration"]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def clamp_retention(days: int) -> int:
    return max(MIN_RETENTION_DAYS, min(MAX_RETENTION_DAYS, int(days)))


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AnalyticsRecord(BaseModel):
    id: int
    command: str
    action: str
    session_id: str
    timestamp: datetime
    duration: float = 0.0

    @field_validator("timestamp")
    @classmethod
    def _utc_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)


class AnalyticsSink(ABC):
    """Receiver of command-processed notifications."""

    @abstractmethod
    def track_command(
        self,
        command: str,
        response: Union[ActionResult, Dict[str, Any]],
        duration: float = 0.0,
    ) -> None:
        ...


class AnalyticsTracker(AnalyticsSink):
    """In-memory analytics store with retention cleanup and CSV export."""

    def __init__(self, enabled: bool = False, retention_days: int = DEFAULT_RETENTION_DAYS) -> None:
        self.enabled = enabled
        self.retention_days = clamp_retention(retention_days)
        self._records: List[AnalyticsRecord] = []
        self._next_id = 1
        self._lock = threading.Lock()

    @property
    def records(self) -> List[AnalyticsRecord]:
        with self._lock:
            if self.enabled:
                self._prune_locked(self._cutoff())
            return list(self._records)

    def track_command(
        self,
        command: str,
        response: Union[ActionResult, Dict[str, Any]],
        duration: float = 0.0,
        timestamp: Optional[datetime] = None,
    ) -> None:
        if not self.enabled:
            return

        if isinstance(response, ActionResult):
            action = response.action.value
        else:
            action = str(response.get("action") or "unknown")

        with self._lock:
            record = AnalyticsRecord(
                id=self._next_id,
                command=sanitize_text(command),
                action=sanitize_text(action),
                session_id=uuid.uuid4().hex,
                timestamp=timestamp or datetime.now(timezone.utc),
                duration=max(duration, 0.0),
            )
            self._records.append(record)
            self._next_id += 1
            self._prune_locked(self._cutoff())
        logger.debug(f"Tracked command '{record.command}' -> {record.action}")

    def _cutoff(self, now: Optional[datetime] = None) -> datetime:
        now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
        return now - timedelta(days=self.retention_days)

    def _prune_locked(self, cutoff: datetime) -> int:
        before = len(self._records)
        self._records = [r for r in self._records if r.timestamp >= cutoff]
        return before - len(self._records)

    def cleanup_old_data(self, now: Optional[datetime] = None) -> int:
        """Drop records older than the retention window. Returns how many were removed."""
        if not self.enabled:
            return 0

        with self._lock:
            removed = self._prune_locked(self._cutoff(now))
        if removed:
            logger.info(f"Removed {removed} analytics record(s) older than {self.retention_days} days")
        return removed

    def summary(self) -> Dict[str, Any]:
        """Top commands and engagement metrics."""
        records = self.records
        counts = Counter(r.command for r in records)
        top = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:TOP_COMMANDS_LIMIT]

        total = len(records)
        avg_duration = sum(r.duration for r in records) / total if total else 0.0
        return {
            "top_commands": [{"command": c, "count": n} for c, n in top],
            "engagement": {
                "sessions": len({r.session_id for r in records}),
                "avg_duration": avg_duration,
                "total_commands": total,
            },
        }

    def export_csv(self) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(CSV_HEADER)
        for r in self.records:
            writer.writerow([
                r.id,
                r.command,
                r.action,
                r.session_id,
                r.timestamp.strftime(TIMESTAMP_FORMAT),
                f"{r.duration:.6f}",
            ])
        return buf.getvalue()
