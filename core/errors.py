"""Backend error types surfaced by the prediction debug view.

Validation problems (missing identifiers, unsupported algorithm) never raise;
they short-circuit to an empty 400. Everything here is a backend failure that
is reported through `core.responses.write_error_response`.
"""

from __future__ import annotations


class PredictionDebugError(Exception):
    """Base class for structured backend errors.

    Attributes:
        code: Stable, machine-readable error code.
        status_code: HTTP status used for the error response.
    """

    code = "internal_error"
    status_code = 500


class JobLookupError(PredictionDebugError):
    """The job store failed while fetching a prediction job."""

    code = "job_lookup_failed"
    status_code = 500


class JobConfigError(PredictionDebugError):
    """A stored job could not be parsed or converted to the engine config."""

    code = "invalid_job_config"
    status_code = 422


class EngineError(PredictionDebugError):
    """The forecasting engine's debug entrypoint failed."""

    code = "engine_failed"
    status_code = 502


class DebugTimeoutError(PredictionDebugError):
    """The request deadline expired before the debug signals were produced."""

    code = "debug_timeout"
    status_code = 504


class SignalAlignmentError(PredictionDebugError, ValueError):
    """Signals passed to an overlay chart do not share one time axis."""

    code = "signal_misaligned"
    status_code = 500
