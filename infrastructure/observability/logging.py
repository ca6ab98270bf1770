"""
Logging setup with contextvars-based metadata injection.

- Adds session tag and selection track into every log line (via contextvars).
- Supports console-only logging OR console + rotating file logs.
- Tunes noisy third-party library loggers (httpx, httpcore).
"""

import contextvars
import hashlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Context variables for dynamic log metadata
cv_session_tag = contextvars.ContextVar("session_tag", default="-")
cv_track = contextvars.ContextVar("track", default="-")

# Full ids kept for metadata (not printed every line)
cv_session_id_full = contextvars.ContextVar("session_id_full", default="-")
cv_source = contextvars.ContextVar("source", default="-")


def make_session_tag(session_id_full: str, length: int = 8) -> str:
    """
    Stable short tag derived from the full session id.
    Uses BLAKE2s for collision resistance.
    """
    h = hashlib.blake2s(session_id_full.encode("utf-8"), digest_size=8).hexdigest()
    return h[:length]


class ContextInjectFilter(logging.Filter):
    """Inject context variables into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session = cv_session_tag.get() or "-"
        record.track = cv_track.get() or "-"
        return True


def set_log_context(
    *,
    session_id_full: str | None = None,
    track: str | None = None,
    source: str | None = None,
) -> None:
    """Update logging context (thread-safe via contextvars)."""
    if session_id_full is not None:
        cv_session_id_full.set(str(session_id_full))
        cv_session_tag.set(make_session_tag(str(session_id_full)))

    if track is not None:
        cv_track.set(str(track))

    if source is not None:
        cv_source.set(str(source))


def get_log_context() -> dict[str, str]:
    """Return the current context in a convenient dict form (e.g. for output metadata)."""
    return {
        "session_tag": str(cv_session_tag.get() or "-"),
        "session_id_full": str(cv_session_id_full.get() or "-"),
        "track": str(cv_track.get() or "-"),
        "source": str(cv_source.get() or "-"),
    }


def clear_track_context() -> None:
    """Reset track context to default (keep session info)."""
    cv_track.set("-")


# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore")

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] s=%(session)s t=%(track)s | %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s | s=%(session)s t=%(track)s | %(message)s"


def _with_context(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ContextInjectFilter())
    return handler


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> None:
    """
    Configure root logging for one picker session.

    Args:
        log_file: Session log path; console only when None
        console_level: Minimum level for console output (default: INFO)
        file_level: Minimum level for the session log (default: DEBUG)
        max_bytes: Session log size before rotation
        backup_count: Rotated session logs to keep
    """
    # Reconfiguring replaces handlers, so repeated sessions in one process do not duplicate lines
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    root.addHandler(
        _with_context(logging.StreamHandler(), console_level, logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        root.addHandler(
            _with_context(rotating, file_level, logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured (console_level=%s, file=%s)",
        logging.getLevelName(console_level),
        log_file if log_file is not None else "None",
    )
