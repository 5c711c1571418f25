from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from .formatters import HumanReadableFormatter, JSONFormatter


class ScoutLogger(Resource):
    """Structured logger for release fetching and report generation.

    Keyword arguments passed to the logging methods become structured fields
    on the record. A JSONL file is written only when a run id is configured.
    """

    def init(
        self,
        *,
        logs_dir: Path,
        run_id: str | None = None,
        json_file: bool = True,
        logger_name: str = "changelog_scout.events",
        console_output: bool = False,
        level: str = "INFO",
    ) -> "ScoutLogger":
        """Initialize the logger.

        Args:
            logs_dir: Directory to store log files
            run_id: Names the ``<run_id>.jsonl`` file; no file without it
            json_file: Whether the JSONL file handler is wanted at all
            logger_name: Logger name
            console_output: Whether to enable console output
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = getattr(logging, level.upper())
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers: list[logging.Handler] = []
        self.log_file: Path | None = None

        if json_file and run_id:
            self.log_file = logs_dir / f"{run_id}.jsonl"
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.log_file, encoding="utf-8", mode="a")
            file_handler.setFormatter(JSONFormatter())
            self._attach(file_handler, numeric_level)

        if console_output:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(HumanReadableFormatter())
            self._attach(console_handler, numeric_level)

        return self

    def _attach(self, handler: logging.Handler, level: int) -> None:
        handler.setLevel(level)
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    def shutdown(self, resource: "ScoutLogger") -> None:
        """Flush and close all handlers so log files are released."""
        for handler in self._handlers:
            handler.flush()
            handler.close()
        self._logger.handlers.clear()

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(message, extra=kwargs or None)

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(message, extra=kwargs or None)

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(message, extra=kwargs or None)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self._logger.error(message, extra=kwargs or None, exc_info=exc_info)

    def exception(self, message: str, **kwargs) -> None:
        self._logger.exception(message, extra=kwargs or None)
