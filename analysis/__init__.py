"""Pure analysis package for forecastDebug.

This package contains the plain data types exchanged with the forecasting
engine: signals and the typed prediction job resource. It must not import
Django or perform any database I/O.
"""

from .prediction import TimeSeriesPrediction
from .signals import DebugSignals, Signal

__all__ = ["DebugSignals", "Signal", "TimeSeriesPrediction"]
