"""Sampled signal values produced by the forecasting engine.

Signals are plain data containers. They carry no Django dependencies so the
charting layer can be exercised without a configured project.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field


@dataclass(frozen=True, slots=True)
class Signal:
    """An immutable, uniformly sampled time series.

    Attributes:
        samples: Ordered sample values.
        sample_rate: Samples per unit time; must be positive.
        label: Optional provenance string supplied by the producer.
    """

    samples: tuple[float, ...]
    sample_rate: float
    label: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        """Normalize samples to a tuple and validate the sample rate."""

        if not self.sample_rate > 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate!r}.")
        if not isinstance(self.samples, tuple):
            object.__setattr__(self, "samples", tuple(self.samples))

    def num(self) -> int:
        """Return the number of samples."""

        return len(self.samples)

    @property
    def duration(self) -> float:
        """Return the covered time span in the sample rate's time unit."""

        return self.num() / self.sample_rate

    def __str__(self) -> str:
        if self.label:
            return self.label
        return f"SampleRate: {self.sample_rate:.5f}Hz, Samples: {self.num()}, Duration: {self.duration:.1f}s"


@dataclass(frozen=True, slots=True)
class DebugSignals:
    """The three signals returned by the engine's debug entrypoint.

    Attributes:
        history: Signal the model was trained on.
        test: Held-out actual values.
        estimate: Forecasted values for the held-out window.
    """

    history: Signal
    test: Signal
    estimate: Signal
