"""Debug log of ellipsize recomputations and label state transitions.

Records from the ``ellipsize`` logger tree and transitions reported by
labels share one ring buffer, which can be exported after a demo session
or a CLI run.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from textual import log as textual_log

from ellipsize.constants import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH


class EntryKind(Enum):
    """What produced a buffered entry."""

    RECORD = "LOG"
    TRANSITION = "STATE"


@dataclass(slots=True)
class LogEntry:
    """A buffered log record or label transition."""

    level: str
    message: str
    timestamp: float
    kind: EntryKind = EntryKind.RECORD
    label: str | None = None
    ellipsized: bool | None = None


log_buffer: deque[LogEntry] = deque(maxlen=MAX_LOG_LINES)


def _clip(message: str) -> str:
    if len(message) > MAX_LOG_MESSAGE_LENGTH:
        return message[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"
    return message


def record_transition(label: str, ellipsized: bool, displayed_text: str, full_length: int) -> None:
    """Buffer a label's switch between fitting and ellipsized text.

    The entry is also forwarded to Textual's devtools log.
    """
    state = "ellipsized" if ellipsized else "fits"
    message = _clip(
        f"{label}: {state}, showing {len(displayed_text)} of {full_length} chars "
        f"{displayed_text!r}"
    )
    log_buffer.append(
        LogEntry(
            level="INFO",
            message=message,
            timestamp=time.time(),
            kind=EntryKind.TRANSITION,
            label=label,
            ellipsized=ellipsized,
        )
    )
    textual_log(message)


def final_states() -> dict[str, bool]:
    """Last reported ellipsized state of every label in the buffer."""
    return {
        entry.label: bool(entry.ellipsized)
        for entry in log_buffer
        if entry.kind is EntryKind.TRANSITION and entry.label is not None
    }


class DebugLogHandler(logging.Handler):
    """Logging handler that captures records into the debug buffer."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_buffer.append(
                LogEntry(
                    level=record.levelname,
                    message=_clip(self.format(record)),
                    timestamp=record.created,
                )
            )
        except Exception:
            self.handleError(record)


_debug_logging_initialized: bool = False


def setup_debug_logging(level: int = logging.DEBUG) -> None:
    """Attach the buffer handler to the ``ellipsize`` logger.

    Idempotent: calls after the first have no effect.
    """
    global _debug_logging_initialized

    if _debug_logging_initialized:
        return

    handler = DebugLogHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    package_logger = logging.getLogger("ellipsize")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)

    _debug_logging_initialized = True
    package_logger.debug("Debug logging initialized")


def clear_log_buffer() -> None:
    log_buffer.clear()


def export_logs_to_file(file_path: str | Path) -> int:
    """Write the buffer to ``file_path``, headed by each label's final state.

    Returns:
        Number of log entries written
    """
    output_path = Path(file_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    states = final_states()
    transitions = sum(1 for entry in log_buffer if entry.kind is EntryKind.TRANSITION)

    with output_path.open("w", encoding="utf-8") as f:
        f.write("# Ellipsize Debug Log Export\n")
        f.write(f"# Total entries: {len(log_buffer)}\n")
        f.write(f"# Transitions: {transitions}\n")
        for label, ellipsized in states.items():
            f.write(f"# Final state: {label} {'ellipsized' if ellipsized else 'fits'}\n")
        f.write("# " + "=" * 76 + "\n\n")

        for entry in log_buffer:
            ts = datetime.fromtimestamp(entry.timestamp).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            f.write(f"{ts} [{entry.kind.value}] [{entry.level}] {entry.message}\n")

    return len(log_buffer)
