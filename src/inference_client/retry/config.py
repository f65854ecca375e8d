"""
Retry configuration.
"""

from dataclasses import dataclass

DEFAULT_INITIAL_BACKOFF = 1.0
DEFAULT_MAX_BACKOFF = 60.0
DEFAULT_BACKOFF_FACTOR = 2.0
DEFAULT_JITTER_FRACTION = 0.1


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior.

    Retry is disabled unless `max_retries` is positive. When it is, any field
    left unset is filled with its default. Durations are in seconds.

    None means unset. A zero `initial_backoff`, `max_backoff` or
    `backoff_factor` also counts as unset. An explicit `jitter_fraction=0.0`
    is kept rather than defaulted to 0.1, and disables jitter.

    Attributes:
        max_retries: Maximum number of retries after the first attempt (default: 0)
        initial_backoff: Delay before the first retry (default: 1.0)
        max_backoff: Cap on the un-jittered delay (default: 60.0)
        backoff_factor: Multiplier applied per retry (default: 2.0)
        jitter_fraction: Jitter as fraction of delay, in [0, 1) (default: 0.1 = ±10%)
    """

    max_retries: int = 0
    initial_backoff: float | None = None
    max_backoff: float | None = None
    backoff_factor: float | None = None
    jitter_fraction: float | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if not self.enabled:
            return

        # Zero is not a usable value for these, treat it as unset
        if not self.initial_backoff:
            self.initial_backoff = DEFAULT_INITIAL_BACKOFF
        if not self.max_backoff:
            self.max_backoff = max(DEFAULT_MAX_BACKOFF, self.initial_backoff)
        if not self.backoff_factor:
            self.backoff_factor = DEFAULT_BACKOFF_FACTOR
        if self.jitter_fraction is None:
            self.jitter_fraction = DEFAULT_JITTER_FRACTION

        if self.initial_backoff < 0:
            raise ValueError(f"initial_backoff must be > 0, got {self.initial_backoff}")
        if self.max_backoff < self.initial_backoff:
            raise ValueError(
                f"max_backoff ({self.max_backoff}) must be >= "
                f"initial_backoff ({self.initial_backoff})"
            )
        if self.backoff_factor < 1.0:
            raise ValueError(f"backoff_factor must be >= 1.0, got {self.backoff_factor}")
        if not 0.0 <= self.jitter_fraction < 1.0:
            raise ValueError(
                f"jitter_fraction must be in [0, 1), got {self.jitter_fraction}"
            )

    @property
    def enabled(self) -> bool:
        return self.max_retries > 0

    @classmethod
    def aggressive(cls) -> "RetryConfig":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(
            max_retries=10,
            initial_backoff=2.0,
            max_backoff=120.0,
        )

    @classmethod
    def conservative(cls) -> "RetryConfig":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls(
            max_retries=3,
            initial_backoff=0.5,
            max_backoff=10.0,
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_retries=0)
