"""Observability – structured logging ports and helpers."""
from singleflight.observability.logging.protocol import Logger
from singleflight.observability.logging.factory import JsonLoggerFactory
from singleflight.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "Logger", "get_logger"]
