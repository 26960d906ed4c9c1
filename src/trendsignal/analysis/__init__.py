"""Series normalization, indicators and signal classification."""

from .classifier import classify
from .indicators import compute_latest, ema_last, minimum_window, rsi_last
from .normalize import normalize

__all__ = [
    "classify",
    "compute_latest",
    "ema_last",
    "minimum_window",
    "normalize",
    "rsi_last",
]
