"""Observability – structlog configuration and logger helper."""
from mp_toggles.observability.logging.factory import JsonLoggerFactory
from mp_toggles.observability.logging.logger import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
