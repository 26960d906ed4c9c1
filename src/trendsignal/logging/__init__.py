"""Logging helpers."""

from .event_sink import RunEventLog
from .logger import HumanLogger

__all__ = ["HumanLogger", "RunEventLog"]
