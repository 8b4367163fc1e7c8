"""rulelex ScanAccumulator — opt-in profiling for scanning.

This module provides accumulated metrics while scanning:
- Tokens produced and bytes skipped
- Matcher invocations
- Scan failures

Zero overhead when disabled (get_scan_accumulator() returns None).

Example:
    from rulelex import tokenize
    from rulelex.profiling import profiled_scan

    with profiled_scan() as metrics:
        tokens = tokenize("price 12", matchers)

    print(metrics.summary())
    # {"total_ms": 0.1, "tokens": 2, "skipped_bytes": 1, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics during scanning.

    Attributes:
        start_time: Profiling start timestamp.
        tokens: Number of tokens produced.
        token_bytes: Bytes consumed by token-producing steps.
        skips: Number of skip-only steps.
        skipped_bytes: Bytes consumed by skip-only steps.
        matcher_calls: Number of matcher invocations.
        failures: Number of scan steps that ended stuck.

    """

    start_time: float = field(default_factory=perf_counter)
    tokens: int = 0
    token_bytes: int = 0
    skips: int = 0
    skipped_bytes: int = 0
    matcher_calls: int = 0
    failures: int = 0

    def record_token(self, shift: int) -> None:
        self.tokens += 1
        self.token_bytes += shift

    def record_skip(self, shift: int) -> None:
        self.skips += 1
        self.skipped_bytes += shift

    def record_matcher_calls(self, count: int) -> None:
        self.matcher_calls += count

    def record_failure(self) -> None:
        self.failures += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "tokens": self.tokens,
            "token_bytes": self.token_bytes,
            "skips": self.skips,
            "skipped_bytes": self.skipped_bytes,
            "matcher_calls": self.matcher_calls,
            "failures": self.failures,
        }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.

    Yields:
        ScanAccumulator that will be populated during scan() calls.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
