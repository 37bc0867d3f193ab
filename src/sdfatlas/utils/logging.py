"""Logging utilities for sdfatlas."""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from an atlas generation run."""

    glyph_count: int = 0
    rendered_count: int = 0
    blank_count: int = 0
    degenerate_count: int = 0
    page_count: int = 0
    kerning_count: int = 0
    glyph_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)

    @property
    def max_glyph_time_ms(self) -> float | None:
        if not self.glyph_timings_ms:
            return None
        return max(self.glyph_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(
        logging.ERROR if quiet else getattr(logging, console_level.upper())
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("sdfatlas")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking rendering progress and statistics.

    Glyph events arrive from render worker threads; counters are updated
    under a lock.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()
        self._lock = threading.Lock()

    def log_glyph_rendered(
        self,
        character: str,
        width: int,
        height: int,
        duration_ms: float,
    ) -> None:
        """Log a successfully rendered glyph."""
        self._logger.debug(
            "Glyph rendered",
            char=character,
            code=ord(character),
            width=width,
            height=height,
            duration_ms=round(duration_ms, 2),
        )
        with self._lock:
            self._stats.rendered_count += 1
            self._stats.glyph_timings_ms.append(duration_ms)

    def log_blank_glyph(self, character: str, command: str) -> None:
        """Log a glyph whose distance field is empty."""
        self._logger.warning(
            "No bitmap for character, adding to font as empty",
            char=character,
            code=ord(character),
            command=command,
        )
        with self._lock:
            self._stats.blank_count += 1

    def log_degenerate_contour(self, character: str, contour_index: int) -> None:
        """Log a contour made of a single command."""
        self._logger.warning(
            "Contour has a single point, failed to normalize glyph",
            char=character,
            contour=contour_index,
        )
        with self._lock:
            self._stats.degenerate_count += 1

    def log_glyph_error(self, character: str, error: Exception) -> None:
        """Log the failure that aborts the batch."""
        self._logger.error(
            "Glyph rendering failed",
            char=character,
            error=str(error),
            error_type=type(error).__name__,
            command=getattr(error, "command", None),
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
