"""ContextVar-based scan configuration for rulelex.

Provides context-local configuration using Python's ContextVars (PEP 567).
A Scanner reads the active config once, when it is constructed.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from rulelex.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(error_excerpt_limit=32)):
        scanner = Scanner(source, matchers)

    # Or set/reset explicitly
    set_scan_config(ScanConfig(raise_on_error=True))
    try:
        scanner = Scanner(source, matchers)
    finally:
        reset_scan_config()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        encoding: Encoding applied to str input
        error_excerpt_limit: Max bytes of unmatched input kept in a
            NoMatchError (None keeps the whole remainder)
        raise_on_error: scan() raises the NoMatchError it stores
        forbid_empty_tokens: Treat a zero-length token as a matcher
            contract violation instead of emitting it

    """

    encoding: str = "utf-8"
    error_excerpt_limit: int | None = None
    raise_on_error: bool = False
    forbid_empty_tokens: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ScanConfig.from_dict({
            ...     "error_excerpt_limit": 40,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.error_excerpt_limit
            40

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (context-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Args:
        config: ScanConfig instance to use for this context.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ScanConfig to use within the context.

    Example:
        >>> with scan_config_context(ScanConfig(raise_on_error=True)):
        ...     scanner = Scanner(b"foo 123", matchers)
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
]
