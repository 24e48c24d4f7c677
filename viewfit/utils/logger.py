# viewfit/utils/logger.py
"""Single-source Loguru setup: one-line console sink, optional file sink."""

from __future__ import annotations

import inspect
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, TextIO

from loguru import logger as _root_logger
from loguru._logger import Logger as LoguruLogger

from viewfit.config import LOG_FILE_PREFIX, get_settings

_CONFIGURED = False
_LOGGER: Optional[LoguruLogger] = None
_LOG_FILE: Optional[Path] = None
_LOG_HANDLE: Optional[TextIO] = None


# ---------- sinks as callables ----------
def _console_sink(msg) -> None:
    r = msg.record
    module = r["extra"].get("module", r.get("name", "unknown"))
    # one record == one line
    sys.stderr.write(
        f"{r['time']:%H:%M:%S} | {r['level'].name: <3.3} | {module} | {r['message']}\n"
    )


def _make_file_sink(fh: TextIO):
    def _file_sink(msg) -> None:
        r = msg.record
        module = r["extra"].get("module", r.get("name", "unknown"))
        fh.write(
            f"{r['time'].isoformat()} | {r['level'].name} | {module} | {r['message']}\n"
        )
        fh.flush()

    return _file_sink


def _configure_logger(level: str | None = None, to_file: bool | None = None) -> None:
    global _CONFIGURED, _LOGGER, _LOG_FILE, _LOG_HANDLE

    settings = get_settings()
    level = level or settings.logging.level
    to_file = settings.logging.to_file if to_file is None else to_file

    # 1) drop every existing handler, including loguru's default stderr one
    _root_logger.remove()

    # 2) patch: every record carries a module extra
    def _inject_module(record):
        record["extra"].setdefault("module", record.get("name", "unknown"))

    logger = _root_logger.patch(_inject_module)

    logger.add(_console_sink, level=level, catch=True)

    if _LOG_HANDLE is not None:
        _LOG_HANDLE.close()
        _LOG_HANDLE = None

    _LOG_FILE = None
    if to_file:
        log_dir = settings.paths.logs_root
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        _LOG_FILE = log_dir / f"{LOG_FILE_PREFIX}_{timestamp}.log"
        _LOG_HANDLE = _LOG_FILE.open("a", encoding="utf-8")
        logger.add(_make_file_sink(_LOG_HANDLE), level=level, catch=True)

    _LOGGER = logger
    _CONFIGURED = True


def get_logger(name: str | None = None) -> LoguruLogger:
    if not _CONFIGURED:
        _configure_logger()

    # module name is resolved from the caller when not given
    module_name = name
    frame = inspect.currentframe()
    if module_name is None and frame is not None:
        caller_frame = frame.f_back
        if caller_frame is not None:
            module = inspect.getmodule(caller_frame)
            if module is not None and module.__name__ != "__main__":
                module_name = module.__name__

    assert _LOGGER is not None
    bound = _LOGGER.bind(module=module_name or "unknown")

    def _tag(label: str, msg: str | None = None, *args, level: str = "info") -> None:
        text = f"[{label}] " + (msg or "")
        method = getattr(bound, level, bound.info)
        if args:
            text = text.format(*args)
        method(text)

    setattr(bound, "tag", _tag)
    return bound


def configure(level: str | None = None, to_file: bool | None = None) -> None:
    _configure_logger(level=level, to_file=to_file)


def log_file() -> Optional[Path]:
    return _LOG_FILE


@contextmanager
def logging_context(
    *, level: str | None = None, to_file: bool | None = None
) -> Iterator[LoguruLogger]:
    configure(level=level, to_file=to_file)
    yield get_logger()


__all__ = ["get_logger", "configure", "log_file", "logging_context"]
