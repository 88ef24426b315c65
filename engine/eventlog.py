"""
eventlog.py — Run Log & Notices
=================================
The user-facing narrative of a session: timestamped lines for the log
panel ("Run started", per-algorithm stats, the winner banner, …) and
short-lived notices for the toast.  Everything written here is also
sent to the standard logger, so a terminal shows the same story.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_NOTICE_MS = 1000


@dataclass(frozen=True)
class LogLine:
    timestamp: str        # HH:MM:SS, local time
    message:   str

    def to_dict(self) -> dict:
        return {"ts": self.timestamp, "message": self.message}


@dataclass(frozen=True)
class Notice:
    message:     str
    duration_ms: int = DEFAULT_NOTICE_MS

    def to_dict(self) -> dict:
        return {"message": self.message, "duration_ms": self.duration_ms}


class EventLog:
    """
    Attributes:
        lines  : Every line since the last clear(), oldest first.
        notice : The most recent undelivered notice (one at a time, newest wins).
    """

    def __init__(self, now: Callable[[], datetime] = datetime.now, limit: int = 500):
        self._now   = now
        self.limit  = limit
        self.lines: List[LogLine] = []
        self.notice: Optional[Notice] = None

    def append(self, message: str, level: int = logging.INFO) -> LogLine:
        line = LogLine(self._now().strftime("%H:%M:%S"), message)
        self.lines.append(line)
        if len(self.lines) > self.limit:
            del self.lines[: len(self.lines) - self.limit]
        logger.log(level, message)
        return line

    def clear(self) -> None:
        self.lines = []

    def notify(self, message: str, duration_ms: int = DEFAULT_NOTICE_MS) -> None:
        self.notice = Notice(message, duration_ms)

    def pop_notice(self) -> Optional[Notice]:
        notice, self.notice = self.notice, None
        return notice

    def to_list(self) -> List[dict]:
        return [line.to_dict() for line in self.lines]
