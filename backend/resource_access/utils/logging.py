"""
Structured JSON logging for the resource access layer.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- bucket
- key
- operation
- duration_ms

Usage:
    from resource_access.utils.logging import configure_logging, log_resource_deleted
    
    configure_logging()  # service and level from settings
    log_resource_deleted(logger, bucket='assets', key='img/1.png', duration_ms=12.4)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger

from resource_access.config import Settings, settings as default_settings


LOG_FORMAT = '%(timestamp)s %(levelname)s %(name)s %(message)s'

# Handler installed by configure_logging
_handler: Optional[logging.Handler] = None


def configure_logging(
    service_name: Optional[str] = None,
    log_level: Optional[str] = None,
    settings: Optional[Settings] = None
) -> logging.Handler:
    """
    Send JSON log lines to stdout from the root logger.
    
    Args:
        service_name: Value of the `service` field (default: settings.service_name)
        log_level: Logging level name (default: settings.log_level)
        settings: Settings to read defaults from (default: global settings)
        
    Returns:
        The installed handler. A second call replaces it rather than adding another.
    """
    global _handler
    settings = settings or default_settings
    service_name = service_name or settings.service_name
    log_level = (log_level or settings.log_level).upper()
    
    formatter = jsonlogger.JsonFormatter(
        LOG_FORMAT,
        timestamp=True,
        json_ensure_ascii=False,
        static_fields={"service": service_name}
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    
    root_logger = logging.getLogger()
    if _handler is not None:
        root_logger.removeHandler(_handler)
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))
    _handler = handler
    return handler


def reset_logging() -> None:
    """Remove the handler installed by configure_logging, if any."""
    global _handler
    if _handler is not None:
        logging.getLogger().removeHandler(_handler)
        _handler = None


def _build_log_extra(
    event: str,
    bucket: Optional[str] = None,
    key: Optional[str] = None,
    operation: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.
    
    Args:
        event: Event name (mandatory)
        bucket: Optional bucket name
        key: Optional object key
        operation: Optional storage operation (GET, PUT, DELETE)
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
        
    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }
    
    if bucket:
        extra["bucket"] = bucket
    if key:
        extra["key"] = key
    if operation:
        extra["operation"] = operation
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
    
    return extra


def log_url_issued(
    logger: logging.Logger,
    operation: str,
    bucket: str,
    key: str,
    expires_in: int,
    **kwargs
):
    """Log issuance of a signed URL."""
    extra = _build_log_extra(
        event="url_issued",
        bucket=bucket,
        key=key,
        operation=operation,
        expires_in=expires_in,
        **kwargs
    )
    logger.debug(f"Signed {operation} URL issued for {bucket}/{key}", extra=extra)


def log_resource_delete_requested(
    logger: logging.Logger,
    bucket: str,
    key: str,
    **kwargs
):
    """Log the intent to delete an object."""
    extra = _build_log_extra(
        event="resource_delete_requested",
        bucket=bucket,
        key=key,
        operation="DELETE",
        **kwargs
    )
    logger.info(f"Removing resource {bucket}/{key}", extra=extra)


def log_resource_deleted(
    logger: logging.Logger,
    bucket: str,
    key: str,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """Log a completed delete."""
    extra = _build_log_extra(
        event="resource_deleted",
        bucket=bucket,
        key=key,
        operation="DELETE",
        duration_ms=duration_ms,
        **kwargs
    )
    logger.info(f"Resource deleted: {bucket}/{key}", extra=extra)


def log_resource_delete_failed(
    logger: logging.Logger,
    bucket: str,
    key: str,
    error: str,
    error_code: Optional[str] = None,
    duration_ms: Optional[float] = None,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log a failed delete.
    
    Args:
        logger: Logger instance
        bucket: Bucket name (required)
        key: Object key (required)
        error: Error message (required)
        error_code: Provider error code, when the provider returned one
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to include stack trace (default: False for provider failures)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="resource_delete_failed",
        bucket=bucket,
        key=key,
        operation="DELETE",
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )
    if error_code:
        extra["error_code"] = error_code
    
    message = f"Failed to delete {bucket}/{key} - {error}"
    
    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
        else:
            logger.error(message, extra=extra)
    else:
        logger.error(message, extra=extra)
