from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from time import time
from typing import Any, Dict, List

MAX_RECENT_ERRORS = 50


@dataclass
class AnalysisStats:
    requests: Dict[str, int] = field(default_factory=dict)
    emails_analyzed: int = 0
    errors: int = 0
    # Keep a small rolling window of recent errors for UI visibility.
    recent_errors: List[Dict[str, Any]] = field(default_factory=list)
    started_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)


class AnalysisStatsStore:
    def __init__(self) -> None:
        self._lock = Lock()
        self._stats = AnalysisStats()

    def record_request(self, endpoint: str, emails: int = 0) -> None:
        # Lock ensures status polling sees consistent snapshots across threads.
        with self._lock:
            self._stats.requests[endpoint] = self._stats.requests.get(endpoint, 0) + 1
            self._stats.emails_analyzed += emails
            self._stats.updated_at = time()

    def record_error(self, endpoint: str, error: str) -> None:
        with self._lock:
            self._stats.errors += 1
            entry = {"endpoint": endpoint, "error": error, "at": time()}
            # Newest first, capped.
            self._stats.recent_errors = [entry] + self._stats.recent_errors[: MAX_RECENT_ERRORS - 1]
            self._stats.updated_at = time()

    def snapshot(self) -> Dict[str, Any]:
        # Return a copy to avoid mutation by callers.
        with self._lock:
            return {
                "requests": dict(self._stats.requests),
                "emailsAnalyzed": self._stats.emails_analyzed,
                "errors": self._stats.errors,
                "recentErrors": list(self._stats.recent_errors),
                "startedAt": self._stats.started_at,
                "updatedAt": self._stats.updated_at,
            }
