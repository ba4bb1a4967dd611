"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- file_name
- drive_file_id
- duration_ms

Usage:
    from drive_uploader.utils.logging import configure_logging, log_upload_succeeded

    configure_logging('drive-uploader', 'INFO')
    log_upload_succeeded(logger, file_name='a.jpg', drive_file_id='1AbC', duration_ms=412.7)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier (drive-uploader)
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        # Console handler (for docker logs)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    file_name: Optional[str] = None,
    drive_file_id: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        file_name: Optional original file name
        drive_file_id: Optional Google Drive file ID
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if file_name:
        extra["file_name"] = file_name
    if drive_file_id:
        extra["drive_file_id"] = drive_file_id
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Staging event functions

def log_file_staged(
    logger: logging.Logger,
    file_name: str,
    path: str,
    size_bytes: int,
    **kwargs
):
    """Log a part written to the staging directory."""
    extra = _build_log_extra(
        event="file_staged",
        file_name=file_name,
        path=path,
        size_bytes=size_bytes,
        **kwargs
    )
    logger.debug(f"File staged: {file_name} -> {path}", extra=extra)


def log_cleanup_failed(
    logger: logging.Logger,
    file_name: str,
    path: str,
    error: str,
    **kwargs
):
    """
    Log a failed removal of a staged file.

    Cleanup failures never change the reported upload status,
    so this is the only place they show up.
    """
    extra = _build_log_extra(
        event="cleanup_failed",
        file_name=file_name,
        path=path,
        error=str(error),
        **kwargs
    )
    logger.error(f"Error deleting {file_name}: {error}", extra=extra)


# Drive upload event functions

def log_upload_succeeded(
    logger: logging.Logger,
    file_name: str,
    drive_file_id: str,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a file uploaded to Google Drive.

    Args:
        logger: Logger instance
        file_name: Original file name (required)
        drive_file_id: ID assigned by Drive (required)
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_succeeded",
        file_name=file_name,
        drive_file_id=drive_file_id,
        duration_ms=duration_ms,
        **kwargs
    )
    logger.info(f"Uploaded to Drive: {file_name} ({drive_file_id})", extra=extra)


def log_upload_failed(
    logger: logging.Logger,
    file_name: str,
    error: str,
    duration_ms: Optional[float] = None,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log a failed Drive upload for a single file.

    Args:
        logger: Logger instance
        file_name: Original file name (required)
        error: Error message (required)
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to include stack trace (default: False, the error is returned to the caller)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_failed",
        file_name=file_name,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )

    message = f"Drive upload failed: {file_name} - {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
            return
    logger.error(message, extra=extra)


def log_request_failed(
    logger: logging.Logger,
    error: str,
    status_code: int,
    **kwargs
):
    """Log an upload request rejected or aborted at the request level."""
    extra = _build_log_extra(
        event="request_failed",
        error=str(error),
        status_code=status_code,
        **kwargs
    )

    message = f"Upload request failed ({status_code}): {error}"
    if status_code >= 500:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
        else:
            logger.error(message, extra=extra)
    else:
        logger.warning(message, extra=extra)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
