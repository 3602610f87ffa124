from __future__ import annotations

import json
import traceback
import uuid
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, TextIO


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _truncate(text: str, *, limit: int) -> str:
    s = str(text or "")
    if len(s) <= limit:
        return s
    return s[: max(0, limit - 1)] + "…"


class RunLogger:
    """
    JSONL logger for extraction runs.

    Every call appends one JSON object (ts, level, event, session_id, optional
    url and a data payload), so a log file can be grepped or loaded line by line.
    Extraction code takes an optional RunLogger and stays silent without one.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        overwrite: bool = False,
        session_id: str | None = None,
    ) -> None:
        self._path = Path(path)
        self._overwrite = bool(overwrite)
        self._session_id = (session_id or "").strip() or uuid.uuid4().hex
        self._fp: TextIO | None = None
        self._lock = Lock()

    @classmethod
    def open(
        cls,
        path: str | Path,
        *,
        overwrite: bool = False,
        session_id: str | None = None,
    ) -> "RunLogger":
        logger = cls(path, overwrite=overwrite, session_id=session_id)
        logger._ensure_open()
        return logger

    @property
    def path(self) -> Path:
        return self._path

    @property
    def session_id(self) -> str:
        return self._session_id

    def close(self) -> None:
        with self._lock:
            if self._fp is None:
                return
            try:
                self._fp.flush()
            finally:
                self._fp.close()
            self._fp = None

    def __enter__(self) -> "RunLogger":
        self._ensure_open()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def info(self, event: str, *, url: str | None = None, **data: Any) -> None:
        self.log("INFO", event, url=url, **data)

    def warning(self, event: str, *, url: str | None = None, **data: Any) -> None:
        self.log("WARN", event, url=url, **data)

    def exception(
        self,
        event: str,
        *,
        exc: BaseException,
        url: str | None = None,
        **data: Any,
    ) -> None:
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        err = {
            "type": type(exc).__name__,
            "message": _truncate(str(exc), limit=2000),
            "traceback": _truncate(tb, limit=12000),
        }
        self.log("ERROR", event, url=url, error=err, **data)

    def log(self, level: str, event: str, *, url: str | None = None, **data: Any) -> None:
        record: dict[str, Any] = {
            "ts": utc_now_iso(),
            "level": (level or "").strip().upper() or "INFO",
            "event": (event or "").strip() or "event",
            "session_id": self._session_id,
        }

        u = (url or "").strip()
        if u:
            record["url"] = u
        if data:
            record["data"] = data

        line = json.dumps(
            record,
            ensure_ascii=False,
            sort_keys=True,
            separators=(",", ":"),
            default=str,
        )

        self._ensure_open()
        with self._lock:
            if self._fp is not None:
                self._fp.write(line + "\n")
                self._fp.flush()

    def _ensure_open(self) -> None:
        with self._lock:
            if self._fp is not None:
                return
            self._path.parent.mkdir(parents=True, exist_ok=True)
            mode = "w" if self._overwrite else "a"
            self._fp = self._path.open(mode, encoding="utf-8", newline="\n")
            # Reopening after close() appends to what this session already wrote.
            self._overwrite = False
