"""Shared telemetry: logging setup with request id propagation."""

from app.shared.telemetry.logging import RequestIdLogFilter, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "RequestIdLogFilter",
]
