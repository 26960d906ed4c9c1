"""Domain models, outcomes and event types."""

from .events import RunEvent
from .models import (
    Bar,
    IndicatorConfig,
    IndicatorSnapshot,
    PriceSeries,
    SignalType,
    SignalVerdict,
)
from .outcomes import Completed, Failed, ProcessingOutcome, Skipped

__all__ = [
    "Bar",
    "Completed",
    "Failed",
    "IndicatorConfig",
    "IndicatorSnapshot",
    "PriceSeries",
    "ProcessingOutcome",
    "RunEvent",
    "SignalType",
    "SignalVerdict",
    "Skipped",
]
