"""Observability module for structured logging."""

from .logging import (
    DataSourceContext,
    datasource_var,
    get_logger,
    log_external_call_end,
    log_external_call_start,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Context
    "DataSourceContext",
    "datasource_var",
    # Logging helpers
    "log_external_call_start",
    "log_external_call_end",
]
