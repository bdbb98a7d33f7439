"""
Centralized logging configuration for the actions sync tooling.

Console output goes to stderr so that stdout stays reserved for the
machine-readable blocks parsed by the CI wrapper.
"""

import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger


class LoggingManager:
    """Manages centralized logging configuration."""

    def __init__(self, service_name: str = "actions-marketplace-sync"):
        """
        Initialize logging manager.

        Args:
            service_name: Name of the service for logging identification
        """
        self.service_name = service_name
        self._configured = False

    def configure_logging(
        self,
        level: str = "INFO",
        enable_file_logging: bool = False,
        log_file_path: Path | None = None,
        structured_format: bool = False,
    ) -> None:
        """
        Configure logging sinks for the application.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            enable_file_logging: Whether to enable file logging
            log_file_path: Path for log file (auto-generated if None)
            structured_format: Whether to include bound context in console lines
        """
        if self._configured:
            return

        # Remove default loguru handler
        logger.remove()

        logger.add(
            sys.stderr,
            format=self._get_console_format(structured_format),
            level=level,
            colorize=None,
            backtrace=False,
            diagnose=False,
        )

        if enable_file_logging:
            if log_file_path is None:
                log_file_path = Path.cwd() / "logs" / f"{self.service_name}.log"

            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                str(log_file_path),
                format="{time} | {level} | {name}:{function}:{line} | {message}",
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="gz",
                serialize=True,  # JSON lines
            )

        logger.configure(extra={"service_name": self.service_name})

        self._configured = True
        logger.debug(
            "Logging configured",
            service=self.service_name,
            level=level,
            file_logging=enable_file_logging,
        )

    def _get_console_format(self, structured: bool) -> str:
        """Get console logging format."""
        if structured:
            return (
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<level>{message}</level> | "
                "{extra}"
            )
        return (
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        )

    def get_logger(self, name: str) -> Any:
        """
        Get a logger instance with the given name.

        Args:
            name: Logger name (usually __name__)

        Returns:
            Bound logger instance
        """
        return logger.bind(component=name)

    def log_operation_start(self, operation: str, **kwargs) -> None:
        """Log the start of an operation with context."""
        logger.bind(operation=operation, **kwargs).info(
            f"Operation started: {operation}"
        )

    def log_operation_complete(self, operation: str, duration: float, **kwargs) -> None:
        """Log the completion of an operation with metrics."""
        logger.bind(operation=operation, duration_seconds=duration, **kwargs).info(
            f"Operation completed: {operation} in {duration:.2f}s"
        )

    def log_operation_error(self, operation: str, error: Exception, **kwargs) -> None:
        """Log an operation error with context."""
        logger.bind(
            operation=operation,
            error_type=type(error).__name__,
            error_message=str(error),
            **kwargs,
        ).error(f"Operation failed: {operation}: {error}")


# Global logging manager instance
_logging_manager: LoggingManager | None = None


def get_logging_manager() -> LoggingManager:
    """Get or create the global logging manager instance."""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()
    return _logging_manager


def configure_logging(
    level: str | None = None,
    structured: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure application logging with environment-driven defaults.

    Args:
        level: Logging level, defaults to LOG_LEVEL or INFO
        structured: Include bound context, defaults to LOG_STRUCTURED
        enable_file_logging: Enable file logging, defaults to ENABLE_FILE_LOGGING
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    if structured is None:
        structured = os.getenv("LOG_STRUCTURED", "false").lower() == "true"

    if enable_file_logging is None:
        enable_file_logging = (
            os.getenv("ENABLE_FILE_LOGGING", "false").lower() == "true"
        )

    get_logging_manager().configure_logging(
        level=level.upper(),
        structured_format=structured,
        enable_file_logging=enable_file_logging,
    )


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given component.

    Args:
        name: Component name (usually __name__)

    Returns:
        Bound logger instance
    """
    return get_logging_manager().get_logger(name)
